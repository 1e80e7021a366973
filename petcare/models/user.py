# petcare/models/user.py
from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any

from petcare.utils.datetime_utils import DateTimeUtils


class UserRole(Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass
class User:
    """
    Document structure of the Firestore 'users' collection.
    """
    user_id: str
    username: str
    email: str
    password_hash: str
    full_name: Optional[str] = None
    role: UserRole = UserRole.USER
    is_active: bool = True
    last_login: Optional[datetime] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        processed_data = DateTimeUtils.from_firestore(dict(data))
        role = processed_data.get('role')
        if isinstance(role, str):
            processed_data['role'] = UserRole(role)
        return cls(**processed_data)

    def to_dict(self) -> Dict[str, Any]:
        """Firestore representation (enum stored as its value)."""
        user_dict = asdict(self)
        user_dict['role'] = self.role.value
        return user_dict

    def to_public_dict(self) -> Dict[str, Any]:
        """Everything except the password hash."""
        user_dict = self.to_dict()
        user_dict.pop('password_hash', None)
        return user_dict
