# petcare/models/adoption.py
import secrets
import time
from dataclasses import dataclass, field, asdict, fields as dataclass_fields
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any

from petcare.utils.datetime_utils import DateTimeUtils

_BASE36_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class ApplicationStatus(Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


class HousingType(Enum):
    HOUSE = "house"
    APARTMENT = "apartment"
    CONDO = "condo"
    TOWNHOUSE = "townhouse"
    OTHER = "other"


class Tenure(Enum):
    OWN = "own"
    RENT = "rent"


class HoursAlone(Enum):
    UP_TO_4 = "0-4"
    FOUR_TO_8 = "4-8"
    OVER_8 = "8+"


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_application_id() -> str:
    """Human-readable id: APP-<base36 epoch millis>-<5 random base36 chars>."""
    timestamp = _to_base36(int(time.time() * 1000))
    random_part = "".join(secrets.choice(_BASE36_ALPHABET) for _ in range(5))
    return f"APP-{timestamp}-{random_part}"


@dataclass
class AdoptionApplication:
    """
    Document structure of the Firestore 'adoption_applications' collection.
    `pet_name` and `pet_species` are a snapshot taken at submission time.
    """
    id: str
    application_id: str
    pet_id: str
    pet_name: str
    pet_species: str
    full_name: str
    email: str
    phone: str
    address: str
    housing_type: HousingType
    own_or_rent: Tenure
    household_members: str
    pet_experience: str
    hours_alone: HoursAlone
    agreement: bool
    status: ApplicationStatus = ApplicationStatus.PENDING
    applicant_user_id: Optional[str] = None
    submitted_at: datetime = field(default_factory=DateTimeUtils.now)
    review_notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdoptionApplication":
        known = {f.name for f in dataclass_fields(cls)}
        processed_data = {k: v for k, v in DateTimeUtils.from_firestore(dict(data)).items() if k in known}
        processed_data['status'] = ApplicationStatus(processed_data['status'])
        processed_data['housing_type'] = HousingType(processed_data['housing_type'])
        processed_data['own_or_rent'] = Tenure(processed_data['own_or_rent'])
        processed_data['hours_alone'] = HoursAlone(processed_data['hours_alone'])
        return cls(**processed_data)

    def to_dict(self) -> Dict[str, Any]:
        application_dict = asdict(self)
        for key in ('status', 'housing_type', 'own_or_rent', 'hours_alone'):
            application_dict[key] = getattr(self, key).value
        return application_dict
