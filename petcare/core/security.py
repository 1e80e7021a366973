# petcare/core/security.py
import logging
from functools import wraps
from typing import Optional
from flask import jsonify
from flask_jwt_extended import JWTManager, verify_jwt_in_request, current_user, get_current_user
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError


def _auth_error(error_code: str, message: str, status: int = 401):
    return jsonify({"error_code": error_code, "error": message}), status


def register_jwt_callbacks(jwt: JWTManager, auth_service) -> None:
    """
    Wire Flask-JWT-Extended to the user store.

    - the token identity is the user_id; `current_user` resolves to a User
    - revoked tokens (logout) are looked up in the blocklist collection
    - every token failure answers 401 with the common error body
    """

    @jwt.user_identity_loader
    def user_identity_lookup(identity):
        return str(identity)

    @jwt.user_lookup_loader
    def user_lookup_callback(_jwt_header, jwt_data):
        return auth_service.get_user(jwt_data["sub"])

    @jwt.token_in_blocklist_loader
    def check_if_token_revoked(_jwt_header, jwt_payload):
        return auth_service.is_token_revoked(jwt_payload)

    @jwt.unauthorized_loader
    def missing_token_callback(reason):
        return _auth_error("TOKEN_MISSING", "No token provided")

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        return _auth_error("TOKEN_INVALID", "Invalid or expired token")

    @jwt.expired_token_loader
    def expired_token_callback(_jwt_header, _jwt_payload):
        return _auth_error("TOKEN_EXPIRED", "Invalid or expired token")

    @jwt.revoked_token_loader
    def revoked_token_callback(_jwt_header, _jwt_payload):
        return _auth_error("TOKEN_REVOKED", "Token has been revoked")

    @jwt.user_lookup_error_loader
    def user_lookup_error_callback(_jwt_header, jwt_data):
        logging.warning(f"Token presented for unknown user {jwt_data.get('sub')}")
        return _auth_error("USER_NOT_FOUND", "User not found")


def admin_required(f):
    """jwt_required plus a role check: non-admin callers get 403."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        verify_jwt_in_request()
        if not current_user.is_admin:
            logging.warning(f"Admin-only endpoint refused for user {current_user.user_id}")
            return _auth_error("ADMIN_REQUIRED", "Admin access required", 403)
        return f(*args, **kwargs)

    return decorated_function


def optional_identity() -> Optional[str]:
    """
    user_id of the caller when a valid token for an existing account is presented, else None.
    Expired, revoked or malformed tokens and tokens of deleted users are treated as anonymous.
    """
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError) as e:
        logging.info(f"Ignoring unusable token on public endpoint: {type(e).__name__}")
        return None
    user = get_current_user()
    return user.user_id if user else None
