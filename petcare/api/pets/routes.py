# petcare/api/pets/routes.py
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required

from petcare.core.security import admin_required
from .schemas import (
    PetWriteSchema,
    PetResponseSchema,
    MedicalRecordSchema,
    VaccinationSchema,
    MedicationSchema
)

pets_bp = Blueprint('pets_bp', __name__)

SUB_RECORD_SCHEMAS = {
    'medical-history': MedicalRecordSchema,
    'vaccinations': VaccinationSchema,
    'medications': MedicationSchema,
}


def _dump(pet):
    return PetResponseSchema().dump(pet.to_dict())


@pets_bp.route('', methods=['GET'])
def list_pets():
    """Every pet, newest first. `?species=Dog` narrows the list."""
    pets = current_app.services['pets'].list_pets(request.args.get('species'))
    return jsonify(PetResponseSchema(many=True).dump([p.to_dict() for p in pets])), 200


@pets_bp.route('/<string:pet_id>', methods=['GET'])
def get_pet(pet_id: str):
    pet = current_app.services['pets'].get_pet(pet_id)
    return jsonify(_dump(pet)), 200


@pets_bp.route('', methods=['POST'])
@admin_required
def create_pet():
    """Staff intake of a new pet."""
    data = PetWriteSchema().load(request.get_json(silent=True) or {})
    pet = current_app.services['pets'].create_pet(data)
    return jsonify({"message": "Pet created successfully", "pet": _dump(pet)}), 201


@pets_bp.route('/<string:pet_id>', methods=['PUT', 'PATCH'])
@admin_required
def update_pet(pet_id: str):
    data = PetWriteSchema().load(request.get_json(silent=True) or {}, partial=True)
    pet = current_app.services['pets'].update_pet(pet_id, data)
    return jsonify(_dump(pet)), 200


@pets_bp.route('/<string:pet_id>', methods=['DELETE'])
@admin_required
def delete_pet(pet_id: str):
    pet = current_app.services['pets'].delete_pet(pet_id)
    return jsonify({"message": "Pet deleted successfully", "pet": _dump(pet)}), 200


@pets_bp.route('/<string:pet_id>/<any("medical-history", "vaccinations", "medications"):record_kind>', methods=['POST'])
@jwt_required()
def add_sub_record(pet_id: str, record_kind: str):
    """Append a medical record, vaccination or medication; returns the updated pet."""
    record = SUB_RECORD_SCHEMAS[record_kind]().load(request.get_json(silent=True) or {})
    pet = current_app.services['pets'].add_sub_record(pet_id, record_kind, record)
    return jsonify(_dump(pet)), 201
