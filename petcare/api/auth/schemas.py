# petcare/api/auth/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE

from petcare.models.user import UserRole


class RegisterSchema(Schema):
    """POST /api/auth/register request body."""
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(required=True, validate=validate.Length(min=3, max=30))
    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=6))
    full_name = fields.Str(data_key="fullName", allow_none=True)


class LoginSchema(Schema):
    """POST /api/auth/login request body."""
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True)


class UserStatusSchema(Schema):
    """PUT /api/auth/users/<user_id>/status"""
    is_active = fields.Bool(required=True, data_key="isActive")


class UserRoleSchema(Schema):
    """PUT /api/auth/users/<user_id>/role"""
    role = fields.Str(required=True, validate=validate.OneOf([r.value for r in UserRole]))


class UserResponseSchema(Schema):
    """Public user fields. The password hash is never serialized."""
    user_id = fields.Str(data_key="id")
    username = fields.Str()
    email = fields.Email()
    full_name = fields.Str(data_key="fullName", allow_none=True)
    role = fields.Str()
    is_active = fields.Bool(data_key="isActive")
    last_login = fields.DateTime(data_key="lastLogin", allow_none=True)
    created_at = fields.DateTime(data_key="createdAt")
