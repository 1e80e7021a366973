# petcare/api/auth/routes.py
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required, current_user, get_jwt

from petcare.core.security import admin_required
from .schemas import (
    RegisterSchema,
    LoginSchema,
    UserStatusSchema,
    UserRoleSchema,
    UserResponseSchema
)

auth_bp = Blueprint('auth_bp', __name__)


def _user_payload(user):
    return UserResponseSchema().dump(user.to_public_dict())


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create an account and return a bearer token."""
    auth_service = current_app.services['auth']
    data = RegisterSchema().load(request.get_json(silent=True) or {})
    user, token = auth_service.register(
        username=data['username'],
        email=data['email'],
        password=data['password'],
        full_name=data.get('full_name')
    )
    return jsonify({
        "message": "Registration successful",
        "token": token,
        "user": _user_payload(user)
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    auth_service = current_app.services['auth']
    data = LoginSchema().load(request.get_json(silent=True) or {})
    user, token = auth_service.login(data['email'], data['password'])
    return jsonify({
        "message": "Login successful",
        "token": token,
        "user": _user_payload(user)
    }), 200


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def me():
    return jsonify({"user": _user_payload(current_user)}), 200


@auth_bp.route('/logout', methods=['POST'])
@jwt_required()
def logout():
    """Revoke the presented access token."""
    current_app.services['auth'].revoke_token(get_jwt())
    return jsonify({"message": "Logout successful"}), 200


# --- admin user management ---

@auth_bp.route('/users', methods=['GET'])
@admin_required
def list_users():
    users = current_app.services['auth'].list_users()
    return jsonify(UserResponseSchema(many=True).dump([u.to_public_dict() for u in users])), 200


@auth_bp.route('/users/<string:user_id>/status', methods=['PUT'])
@admin_required
def update_user_status(user_id: str):
    data = UserStatusSchema().load(request.get_json(silent=True) or {})
    user = current_app.services['auth'].update_user_status(current_user, user_id, data['is_active'])
    state = "activated" if user.is_active else "deactivated"
    return jsonify({"message": f"User {state} successfully", "user": _user_payload(user)}), 200


@auth_bp.route('/users/<string:user_id>/role', methods=['PUT'])
@admin_required
def update_user_role(user_id: str):
    data = UserRoleSchema().load(request.get_json(silent=True) or {})
    user = current_app.services['auth'].update_user_role(current_user, user_id, data['role'])
    return jsonify({"message": f"User role updated to {user.role.value}", "user": _user_payload(user)}), 200


@auth_bp.route('/users/<string:user_id>', methods=['DELETE'])
@admin_required
def delete_user(user_id: str):
    current_app.services['auth'].delete_user(current_user, user_id)
    return jsonify({"message": "User deleted successfully"}), 200
