# petcare/api/adoption/schemas.py
from marshmallow import Schema, fields, validate, pre_load, EXCLUDE

from petcare.models.adoption import ApplicationStatus, HousingType, Tenure, HoursAlone


class ApplicationSubmitSchema(Schema):
    """
    POST /api/adoption/applications request body.
    Applicant fields may come flat or nested under `applicantInfo`.
    """
    class Meta:
        unknown = EXCLUDE

    pet_id = fields.Str(required=True, data_key="petId", validate=validate.Length(min=1))
    full_name = fields.Str(required=True, data_key="fullName", validate=validate.Length(min=1))
    email = fields.Email(required=True)
    phone = fields.Str(required=True, validate=validate.Length(min=1))
    address = fields.Str(required=True, validate=validate.Length(min=1))
    housing_type = fields.Str(
        required=True, data_key="housingType",
        validate=validate.OneOf([e.value for e in HousingType])
    )
    own_or_rent = fields.Str(
        required=True, data_key="ownOrRent",
        validate=validate.OneOf([e.value for e in Tenure])
    )
    household_members = fields.Str(required=True, data_key="householdMembers", validate=validate.Length(min=1))
    pet_experience = fields.Str(required=True, data_key="petExperience", validate=validate.Length(min=1))
    hours_alone = fields.Str(
        required=True, data_key="hoursAlone",
        validate=validate.OneOf([e.value for e in HoursAlone])
    )
    agreement = fields.Bool(
        required=True,
        validate=validate.Equal(True, error="The adoption agreement must be accepted.")
    )

    @pre_load
    def flatten_applicant_info(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get('applicantInfo'), dict):
            flattened = dict(data['applicantInfo'])
            flattened.update({k: v for k, v in data.items() if k != 'applicantInfo'})
            return flattened
        return data


class ApplicationStatusUpdateSchema(Schema):
    """PUT /api/adoption/applications/<id>. The status value itself is checked by the service."""
    class Meta:
        unknown = EXCLUDE

    status = fields.Str(required=True)
    review_notes = fields.Str(data_key="reviewNotes", allow_none=True)


class ApplicationQuerySchema(Schema):
    """GET /api/adoption/applications query string."""
    class Meta:
        unknown = EXCLUDE

    status = fields.Str(validate=validate.OneOf([e.value for e in ApplicationStatus]))
    pet_id = fields.Str(data_key="petId")


class ApplicationResponseSchema(Schema):
    id = fields.Str()
    application_id = fields.Str(data_key="applicationId")
    status = fields.Str()
    pet_id = fields.Str(data_key="petId")
    pet_name = fields.Str(data_key="petName")
    pet_species = fields.Str(data_key="petSpecies")
    full_name = fields.Str(data_key="fullName")
    email = fields.Str()
    phone = fields.Str()
    address = fields.Str()
    housing_type = fields.Str(data_key="housingType")
    own_or_rent = fields.Str(data_key="ownOrRent")
    household_members = fields.Str(data_key="householdMembers")
    pet_experience = fields.Str(data_key="petExperience")
    hours_alone = fields.Str(data_key="hoursAlone")
    agreement = fields.Bool()
    applicant_user_id = fields.Str(data_key="applicantUserId", allow_none=True)
    submitted_at = fields.DateTime(data_key="submittedAt")
    review_notes = fields.Str(data_key="reviewNotes", allow_none=True)
    reviewed_by = fields.Str(data_key="reviewedBy", allow_none=True)
    reviewed_at = fields.DateTime(data_key="reviewedAt", allow_none=True)
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")


class ApplicationSummarySchema(Schema):
    """Short receipt returned to the applicant after submission."""
    id = fields.Str()
    application_id = fields.Str(data_key="applicationId")
    status = fields.Str()
    pet_id = fields.Str(data_key="petId")
    pet_name = fields.Str(data_key="petName")
    pet_species = fields.Str(data_key="petSpecies")
    submitted_at = fields.DateTime(data_key="submittedAt")
