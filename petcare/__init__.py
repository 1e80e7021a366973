# petcare/__init__.py

# =====================================================================================
# 1. Load environment variables (before anything reads os.environ)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. Module imports
# =====================================================================================
import os
import logging
from flask import Flask, jsonify, request
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
import firebase_admin
from firebase_admin import credentials, firestore

# - configuration / cross-cutting
from petcare.core.config import config_by_name
from petcare.core.exceptions import PetCareError, first_error_message
from petcare.core.security import register_jwt_callbacks
from petcare.utils.datetime_utils import DateTimeUtils
from petcare.cli import register_commands

# - API blueprints
from petcare.api.auth.routes import auth_bp
from petcare.api.pets.routes import pets_bp
from petcare.api.adoption.routes import adoption_bp
from petcare.api.appointments.routes import appointments_bp

# - services
from petcare.api.auth.services import AuthService
from petcare.api.pets.services import PetService
from petcare.api.adoption.services import AdoptionService
from petcare.api.appointments.services import AppointmentService


def _initialize_firebase(app: Flask) -> None:
    """Initialize the default firebase_admin app once per process."""
    if firebase_admin._apps:
        return
    cred_path = app.config.get('FIREBASE_CREDENTIALS_PATH')
    options = {}
    if app.config.get('FIREBASE_PROJECT_ID'):
        options['projectId'] = app.config['FIREBASE_PROJECT_ID']
    if cred_path:
        if not os.path.exists(cred_path):
            raise FileNotFoundError(f"Firebase credentials file not found: {cred_path}")
        cred = credentials.Certificate(cred_path)
    else:
        cred = credentials.ApplicationDefault()
    firebase_admin.initialize_app(cred, options)


def create_app(config_name=None):
    """
    Flask application factory.
    """
    # =====================================================================================
    # 3. Create the Flask app and load settings
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    if not app.config.get('JWT_SECRET_KEY'):
        raise ValueError("JWT_SECRET must be set in the production environment")

    # =====================================================================================
    # 4. Extensions and external services
    # =====================================================================================
    _initialize_firebase(app)
    db = firestore.client()

    # =====================================================================================
    # 5. Service instances stored on 'app.services' (dependency injection)
    # =====================================================================================
    app.services = {}
    app.services['auth'] = AuthService(db=db)
    app.services['pets'] = PetService(db=db)
    app.services['adoption'] = AdoptionService(db=db)
    app.services['appointments'] = AppointmentService(
        db=db, default_veterinarian=app.config['DEFAULT_VETERINARIAN']
    )

    jwt = JWTManager(app)
    register_jwt_callbacks(jwt, app.services['auth'])

    # =====================================================================================
    # 6. Blueprints
    # =====================================================================================
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(pets_bp, url_prefix='/api/pets')
    app.register_blueprint(adoption_bp, url_prefix='/api/adoption')
    app.register_blueprint(appointments_bp, url_prefix='/api/appointments')

    @app.route('/api/health', methods=['GET'])
    def health():
        return jsonify({"status": "ok", "timestamp": DateTimeUtils.to_iso_string(DateTimeUtils.now())}), 200

    register_commands(app)

    # =====================================================================================
    # 7. Global error handlers
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {
            "error_code": "VALIDATION_ERROR",
            "error": first_error_message(err.messages),
            "details": err.messages
        }
        return jsonify(response), 400

    @app.errorhandler(PetCareError)
    def handle_service_error(err):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        if err.code == 404:
            response = {
                "error_code": "ROUTE_NOT_FOUND",
                "error": "Route not found",
                "path": request.path,
                "method": request.method
            }
        else:
            response = {"error_code": err.name.upper().replace(' ', '_'), "error": err.description}
        return jsonify(response), err.code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # Anything not handled above
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "error": "Internal server error"}
        return jsonify(response), 500

    # =====================================================================================
    # 8. Logging and return
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
