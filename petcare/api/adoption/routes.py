# petcare/api/adoption/routes.py
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import get_jwt_identity

from petcare.api.pets.schemas import PetResponseSchema
from petcare.core.security import admin_required, optional_identity
from .schemas import (
    ApplicationSubmitSchema,
    ApplicationStatusUpdateSchema,
    ApplicationQuerySchema,
    ApplicationResponseSchema,
    ApplicationSummarySchema
)

adoption_bp = Blueprint('adoption_bp', __name__)


@adoption_bp.route('/available-pets', methods=['GET'])
def list_available_pets():
    pets = current_app.services['pets'].list_available_pets()
    return jsonify(PetResponseSchema(many=True).dump([p.to_dict() for p in pets])), 200


@adoption_bp.route('/applications', methods=['POST'])
def submit_application():
    """Public submission. A caller with a valid token is linked to the application."""
    data = ApplicationSubmitSchema().load(request.get_json(silent=True) or {})
    pet_id = data.pop('pet_id')
    application = current_app.services['adoption'].submit_application(
        pet_id, data, applicant_user_id=optional_identity()
    )
    return jsonify({
        "message": "Adoption application submitted successfully",
        "application": ApplicationSummarySchema().dump(application.to_dict())
    }), 201


@adoption_bp.route('/applications', methods=['GET'])
@admin_required
def list_applications():
    """`?status=pending&petId=<id>` filters; newest submission first."""
    filters = ApplicationQuerySchema().load(request.args)
    applications = current_app.services['adoption'].list_applications(
        status=filters.get('status'), pet_id=filters.get('pet_id')
    )
    return jsonify(ApplicationResponseSchema(many=True).dump([a.to_dict() for a in applications])), 200


@adoption_bp.route('/applications/<string:application_id>', methods=['GET'])
@admin_required
def get_application(application_id: str):
    application = current_app.services['adoption'].get_application(application_id)
    return jsonify(ApplicationResponseSchema().dump(application.to_dict())), 200


@adoption_bp.route('/applications/<string:application_id>', methods=['PUT'])
@admin_required
def update_application_status(application_id: str):
    data = ApplicationStatusUpdateSchema().load(request.get_json(silent=True) or {})
    application = current_app.services['adoption'].update_application_status(
        application_id, data['status'], reviewer_id=get_jwt_identity(),
        review_notes=data.get('review_notes')
    )
    return jsonify({
        "message": "Application updated successfully",
        "application": ApplicationResponseSchema().dump(application.to_dict())
    }), 200


@adoption_bp.route('/applications/<string:application_id>', methods=['DELETE'])
@admin_required
def delete_application(application_id: str):
    current_app.services['adoption'].delete_application(application_id)
    return jsonify({"message": "Application deleted successfully"}), 200


@adoption_bp.route('/stats', methods=['GET'])
@admin_required
def application_stats():
    """Application counts per pet species."""
    return jsonify(current_app.services['adoption'].application_stats()), 200
