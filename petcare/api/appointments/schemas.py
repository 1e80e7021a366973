# petcare/api/appointments/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE

from petcare.models.appointment import AppointmentType

TIME_FORMAT = validate.Regexp(r'^([01]\d|2[0-3]):[0-5]\d$', error="Time must use the HH:MM format.")


class AppointmentCreateSchema(Schema):
    """POST /api/appointments request body."""
    class Meta:
        unknown = EXCLUDE

    pet_id = fields.Str(required=True, data_key="petId", validate=validate.Length(min=1))
    date = fields.Date(required=True)
    time = fields.Str(required=True, validate=TIME_FORMAT)
    type = fields.Str(required=True, validate=validate.OneOf([e.value for e in AppointmentType]))
    veterinarian = fields.Str(allow_none=True)
    notes = fields.Str(allow_none=True)


class AppointmentUpdateSchema(Schema):
    """PUT /api/appointments/<id>: any subset of the bookable fields."""
    class Meta:
        unknown = EXCLUDE

    date = fields.Date()
    time = fields.Str(validate=TIME_FORMAT)
    type = fields.Str(validate=validate.OneOf([e.value for e in AppointmentType]))
    veterinarian = fields.Str(validate=validate.Length(min=1))
    notes = fields.Str(allow_none=True)


class AppointmentStatusSchema(Schema):
    """PUT /api/appointments/<id>/status. The status value itself is checked by the service."""
    class Meta:
        unknown = EXCLUDE

    status = fields.Str(required=True)
    admin_notes = fields.Str(data_key="adminNotes", allow_none=True)


class AppointmentResponseSchema(Schema):
    appointment_id = fields.Str(data_key="id")
    pet_id = fields.Str(data_key="petId")
    pet_name = fields.Str(data_key="petName")
    pet_species = fields.Str(data_key="petSpecies")
    user_id = fields.Str(data_key="userId")
    user_email = fields.Str(data_key="userEmail")
    user_name = fields.Str(data_key="userName")
    type = fields.Str()
    date = fields.Date()
    time = fields.Str()
    veterinarian = fields.Str()
    status = fields.Str()
    notes = fields.Str(allow_none=True)
    admin_notes = fields.Str(data_key="adminNotes", allow_none=True)
    reviewed_by = fields.Str(data_key="reviewedBy", allow_none=True)
    reviewed_at = fields.DateTime(data_key="reviewedAt", allow_none=True)
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")


class AppointmentStatsSchema(Schema):
    total = fields.Int()
    pending = fields.Int()
    confirmed = fields.Int()
    completed = fields.Int()
    cancelled = fields.Int()
    rejected = fields.Int()
