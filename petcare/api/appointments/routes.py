# petcare/api/appointments/routes.py
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required, current_user

from petcare.core.security import admin_required
from .schemas import (
    AppointmentCreateSchema,
    AppointmentUpdateSchema,
    AppointmentStatusSchema,
    AppointmentResponseSchema,
    AppointmentStatsSchema
)

appointments_bp = Blueprint('appointments_bp', __name__)


@appointments_bp.route('', methods=['POST'])
@jwt_required()
def create_appointment():
    data = AppointmentCreateSchema().load(request.get_json(silent=True) or {})
    appointment = current_app.services['appointments'].create_appointment(current_user, data)
    return jsonify({
        "message": "Appointment created successfully",
        "appointment": AppointmentResponseSchema().dump(appointment.to_dict())
    }), 201


@appointments_bp.route('', methods=['GET'])
@jwt_required()
def list_appointments():
    appointments = current_app.services['appointments'].list_appointments(current_user)
    return jsonify(AppointmentResponseSchema(many=True).dump([a.to_dict() for a in appointments])), 200


@appointments_bp.route('/stats/summary', methods=['GET'])
@admin_required
def appointment_stats():
    summary = current_app.services['appointments'].stats_summary()
    return jsonify(AppointmentStatsSchema().dump(summary)), 200


@appointments_bp.route('/<string:appointment_id>', methods=['GET'])
@jwt_required()
def get_appointment(appointment_id: str):
    appointment = current_app.services['appointments'].get_appointment(appointment_id, current_user)
    return jsonify(AppointmentResponseSchema().dump(appointment.to_dict())), 200


@appointments_bp.route('/<string:appointment_id>/status', methods=['PUT'])
@jwt_required()
def update_appointment_status(appointment_id: str):
    data = AppointmentStatusSchema().load(request.get_json(silent=True) or {})
    appointment = current_app.services['appointments'].update_status(
        appointment_id, current_user, data['status'], admin_notes=data.get('admin_notes')
    )
    return jsonify({
        "message": "Appointment status updated successfully",
        "appointment": AppointmentResponseSchema().dump(appointment.to_dict())
    }), 200


@appointments_bp.route('/<string:appointment_id>', methods=['PUT'])
@jwt_required()
def update_appointment(appointment_id: str):
    data = AppointmentUpdateSchema().load(request.get_json(silent=True) or {})
    appointment = current_app.services['appointments'].update_details(appointment_id, current_user, data)
    return jsonify({
        "message": "Appointment updated successfully",
        "appointment": AppointmentResponseSchema().dump(appointment.to_dict())
    }), 200


@appointments_bp.route('/<string:appointment_id>', methods=['DELETE'])
@jwt_required()
def delete_appointment(appointment_id: str):
    current_app.services['appointments'].delete_appointment(appointment_id, current_user)
    return jsonify({"message": "Appointment deleted successfully"}), 200
