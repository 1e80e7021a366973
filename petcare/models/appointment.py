# petcare/models/appointment.py
from dataclasses import dataclass, field, asdict, fields as dataclass_fields
from datetime import date, datetime
from enum import Enum
from typing import Optional, Dict, Any

from petcare.utils.datetime_utils import DateTimeUtils


class AppointmentType(Enum):
    CHECKUP = "Checkup"
    VACCINATION = "Vaccination"
    GROOMING = "Grooming"
    SURGERY = "Surgery"
    EMERGENCY = "Emergency"
    DENTAL = "Dental"
    OTHER = "Other"


class AppointmentStatus(Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    REJECTED = "Rejected"


@dataclass
class Appointment:
    """
    Document structure of the Firestore 'appointments' collection.
    Pet and user display fields are copied in when the appointment is booked.
    """
    appointment_id: str
    pet_id: str
    pet_name: str
    pet_species: str
    user_id: str
    user_email: str
    user_name: str
    type: AppointmentType
    date: date
    time: str
    veterinarian: str
    status: AppointmentStatus = AppointmentStatus.PENDING
    notes: Optional[str] = None
    admin_notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Appointment":
        known = {f.name for f in dataclass_fields(cls)}
        processed_data = {k: v for k, v in DateTimeUtils.from_firestore(dict(data)).items() if k in known}
        processed_data['type'] = AppointmentType(processed_data['type'])
        processed_data['status'] = AppointmentStatus(processed_data['status'])
        processed_data['date'] = DateTimeUtils.to_date(processed_data['date'])
        return cls(**processed_data)

    def to_dict(self) -> Dict[str, Any]:
        appointment_dict = asdict(self)
        appointment_dict['type'] = self.type.value
        appointment_dict['status'] = self.status.value
        return appointment_dict
