# petcare/api/pets/schemas.py
from marshmallow import Schema, fields, validate, validates_schema, pre_load, ValidationError, EXCLUDE

from petcare.models.pet import PetSpecies, PetGender, AdoptionStatus


class OwnerSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(allow_none=True)
    email = fields.Email(allow_none=True)
    phone = fields.Str(allow_none=True)
    address = fields.Str(allow_none=True)


class PetWriteSchema(Schema):
    """
    POST /api/pets (full) and PUT /api/pets/<pet_id> (loaded with partial=True).
    Extra keys sent by the admin form are dropped.
    """
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    species = fields.Str(required=True, validate=validate.OneOf([e.value for e in PetSpecies]))
    breed = fields.Str(allow_none=True)
    age = fields.Float(allow_none=True, validate=validate.Range(min=0))
    weight = fields.Float(allow_none=True, validate=validate.Range(min=0))
    color = fields.Str(allow_none=True)
    gender = fields.Str(allow_none=True, validate=validate.OneOf([e.value for e in PetGender]))
    size = fields.Str(allow_none=True)
    image_url = fields.Str(data_key="imageUrl", allow_none=True)
    notes = fields.Str(allow_none=True)
    description = fields.Str(allow_none=True)
    location = fields.Str(allow_none=True)
    owner = fields.Nested(OwnerSchema, allow_none=True)
    vaccinated = fields.Bool()
    neutered = fields.Bool()
    available_for_adoption = fields.Bool(data_key="availableForAdoption")
    adoption_status = fields.Str(
        data_key="adoptionStatus", allow_none=True,
        validate=validate.OneOf([e.value for e in AdoptionStatus])
    )
    adoption_fee = fields.Float(data_key="adoptionFee", allow_none=True, validate=validate.Range(min=0))

    @pre_load
    def accept_image_alias(self, data, **kwargs):
        """The admin form posts the picture as `image`."""
        if isinstance(data, dict) and 'image' in data and 'imageUrl' not in data:
            data = dict(data)
            data['imageUrl'] = data.pop('image') or None
        return data


class MedicalRecordSchema(Schema):
    """POST /api/pets/<pet_id>/medical-history"""
    class Meta:
        unknown = EXCLUDE

    date = fields.Date(required=True)
    diagnosis = fields.Str(required=True, validate=validate.Length(min=1))
    treatment = fields.Str(allow_none=True)
    veterinarian = fields.Str(allow_none=True)
    notes = fields.Str(allow_none=True)


class VaccinationSchema(Schema):
    """POST /api/pets/<pet_id>/vaccinations"""
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1))
    date = fields.Date(required=True)
    next_due = fields.Date(data_key="nextDue", allow_none=True)
    veterinarian = fields.Str(allow_none=True)


class MedicationSchema(Schema):
    """POST /api/pets/<pet_id>/medications"""
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1))
    dosage = fields.Str(allow_none=True)
    frequency = fields.Str(allow_none=True)
    start_date = fields.Date(data_key="startDate", allow_none=True)
    end_date = fields.Date(data_key="endDate", allow_none=True)
    notes = fields.Str(allow_none=True)

    @validates_schema
    def validate_period(self, data, **kwargs):
        start, end = data.get('start_date'), data.get('end_date')
        if start and end and end < start:
            raise ValidationError("endDate must not be before startDate.", "endDate")


# --- responses ---

class MedicalRecordResponseSchema(MedicalRecordSchema):
    record_id = fields.Str(data_key="id")


class VaccinationResponseSchema(VaccinationSchema):
    record_id = fields.Str(data_key="id")


class MedicationResponseSchema(MedicationSchema):
    record_id = fields.Str(data_key="id")


class PetAppointmentEntrySchema(Schema):
    """Legacy appointment entries embedded in the pet document."""
    record_id = fields.Str(data_key="id")
    date = fields.Date(allow_none=True)
    time = fields.Str(allow_none=True)
    type = fields.Str(allow_none=True)
    veterinarian = fields.Str(allow_none=True)
    notes = fields.Str(allow_none=True)
    status = fields.Str(allow_none=True)


class PetResponseSchema(Schema):
    pet_id = fields.Str(data_key="id")
    name = fields.Str()
    species = fields.Str()
    breed = fields.Str(allow_none=True)
    age = fields.Float(allow_none=True)
    weight = fields.Float(allow_none=True)
    color = fields.Str(allow_none=True)
    gender = fields.Str(allow_none=True)
    size = fields.Str(allow_none=True)
    image_url = fields.Str(data_key="imageUrl", allow_none=True)
    notes = fields.Str(allow_none=True)
    description = fields.Str(allow_none=True)
    location = fields.Str(allow_none=True)
    owner = fields.Nested(OwnerSchema, allow_none=True)
    medical_history = fields.List(fields.Nested(MedicalRecordResponseSchema), data_key="medicalHistory")
    vaccinations = fields.List(fields.Nested(VaccinationResponseSchema))
    medications = fields.List(fields.Nested(MedicationResponseSchema))
    appointments = fields.List(fields.Nested(PetAppointmentEntrySchema))
    vaccinated = fields.Bool()
    neutered = fields.Bool()
    available_for_adoption = fields.Bool(data_key="availableForAdoption")
    adoption_status = fields.Str(data_key="adoptionStatus", allow_none=True)
    adoption_fee = fields.Float(data_key="adoptionFee", allow_none=True)
    adopted_by_application = fields.Str(data_key="adoptedByApplication", allow_none=True)
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")
