# petcare/api/auth/services.py
import uuid
import logging
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional, Tuple
from firebase_admin import firestore
from flask_jwt_extended import create_access_token
from werkzeug.security import generate_password_hash, check_password_hash

from petcare.core.exceptions import (
    ConflictError, ForbiddenError, NotFoundError, UnauthorizedError, BadRequestError
)
from petcare.models.user import User, UserRole
from petcare.utils.datetime_utils import DateTimeUtils


class AuthService:
    """Registration, login, token revocation and admin user management."""
    def __init__(self, db=None):
        self.db = db or firestore.client()
        self.users_ref = self.db.collection('users')
        self.revoked_tokens_ref = self.db.collection('revoked_tokens')
        logging.info("AuthService initialized.")

    # --- lookup ---
    def get_user(self, user_id: str) -> Optional[User]:
        doc = self.users_ref.document(user_id).get()
        if not doc.exists:
            return None
        return User.from_dict(doc.to_dict())

    def _find_one(self, field_name: str, value: str) -> Optional[User]:
        query = self.users_ref.where(field_name, '==', value).limit(1).stream()
        user_doc = next(query, None)
        return User.from_dict(user_doc.to_dict()) if user_doc else None

    def find_by_email(self, email: str) -> Optional[User]:
        return self._find_one('email', email.strip().lower())

    def _require_user(self, user_id: str) -> User:
        user = self.get_user(user_id)
        if not user:
            raise NotFoundError("User not found", "USER_NOT_FOUND")
        return user

    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(identity=user.user_id)

    # --- registration / login ---
    def register(self, username: str, email: str, password: str,
                 full_name: Optional[str] = None, role: UserRole = UserRole.USER) -> Tuple[User, str]:
        """Create an account and return it together with a bearer token."""
        email = email.strip().lower()
        username = username.strip()
        if self._find_one('email', email):
            raise ConflictError("Email already registered", "EMAIL_TAKEN")
        if self._find_one('username', username):
            raise ConflictError("Username already taken", "USERNAME_TAKEN")

        user = User(
            user_id=str(uuid.uuid4()),
            username=username,
            email=email,
            password_hash=generate_password_hash(password),
            full_name=full_name or username,
            role=role
        )
        self.users_ref.document(user.user_id).set(DateTimeUtils.for_firestore(user.to_dict()))
        logging.info(f"User registered (user_id: {user.user_id}, role: {role.value})")
        return user, self.issue_token(user)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        user = self._find_one('email', email.strip().lower())
        if not user:
            raise UnauthorizedError("Invalid email or password", "INVALID_CREDENTIALS")
        if not user.is_active:
            logging.warning(f"Login refused for deactivated account {user.user_id}")
            raise ForbiddenError("Account is deactivated. Please contact support.", "ACCOUNT_DEACTIVATED")
        if not check_password_hash(user.password_hash, password):
            raise UnauthorizedError("Invalid email or password", "INVALID_CREDENTIALS")

        user.last_login = DateTimeUtils.now()
        self.users_ref.document(user.user_id).update({'last_login': user.last_login})
        logging.info(f"User logged in (user_id: {user.user_id})")
        return user, self.issue_token(user)

    # --- blocklist ---
    def revoke_token(self, jwt_payload: Dict[str, Any]) -> None:
        """Store the token's jti with its expiry so later requests with it are refused."""
        expires_at = datetime.fromtimestamp(jwt_payload['exp'], tz=timezone.utc)
        self.revoked_tokens_ref.document(jwt_payload['jti']).set({
            'user_id': jwt_payload.get('sub'),
            'revoked_at': DateTimeUtils.now(),
            'expires_at': expires_at
        })
        logging.info(f"Token revoked. JTI: {jwt_payload['jti'][:8]}...")

    def is_token_revoked(self, jwt_payload: Dict[str, Any]) -> bool:
        doc = self.revoked_tokens_ref.document(jwt_payload['jti']).get()
        return doc.exists

    # --- admin user management ---
    def list_users(self) -> List[User]:
        docs = self.users_ref.order_by('created_at', direction=firestore.Query.DESCENDING).stream()
        return [User.from_dict(doc.to_dict()) for doc in docs]

    def update_user_status(self, admin: User, user_id: str, is_active: bool) -> User:
        if admin.user_id == user_id:
            raise ForbiddenError("You cannot change the status of your own account", "SELF_MODIFICATION")
        user = self._require_user(user_id)
        user.is_active = is_active
        self.users_ref.document(user_id).update({'is_active': is_active})
        logging.info(f"User {user_id} {'activated' if is_active else 'deactivated'} by {admin.user_id}")
        return user

    def update_user_role(self, admin: User, user_id: str, role: str) -> User:
        if admin.user_id == user_id:
            raise ForbiddenError("You cannot change your own role", "SELF_MODIFICATION")
        try:
            new_role = UserRole(role)
        except ValueError:
            raise BadRequestError("Invalid role. Must be user or admin", "INVALID_ROLE")
        user = self._require_user(user_id)
        user.role = new_role
        self.users_ref.document(user_id).update({'role': new_role.value})
        logging.info(f"User {user_id} role changed to {new_role.value} by {admin.user_id}")
        return user

    def delete_user(self, admin: User, user_id: str) -> None:
        if admin.user_id == user_id:
            raise ForbiddenError("You cannot delete your own account", "SELF_MODIFICATION")
        self._require_user(user_id)
        self.users_ref.document(user_id).delete()
        logging.info(f"User {user_id} deleted by {admin.user_id}")
