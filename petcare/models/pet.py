# petcare/models/pet.py
from dataclasses import dataclass, field, asdict, fields as dataclass_fields
from datetime import date, datetime
from typing import Optional, List, Dict, Any
from enum import Enum
import logging

from petcare.utils.datetime_utils import DateTimeUtils


class PetSpecies(Enum):
    DOG = "Dog"
    CAT = "Cat"
    BIRD = "Bird"
    FISH = "Fish"
    RABBIT = "Rabbit"
    OTHER = "Other"


class PetGender(Enum):
    MALE = "Male"
    FEMALE = "Female"
    UNKNOWN = "Unknown"


class AdoptionStatus(Enum):
    AVAILABLE = "available"
    ADOPTED = "adopted"


# Date-typed keys inside the medical sub-records.
SUB_RECORD_DATE_KEYS = ('date', 'next_due', 'start_date', 'end_date')


@dataclass
class Pet:
    """
    Document structure of the Firestore 'pets' collection.

    Identity, medical sub-records and the adoption flags of one animal.
    `adopted_by_application` remembers which application's approval flipped
    the pet to adopted; a second approval for another application is refused.
    """
    pet_id: str
    name: str
    species: PetSpecies
    breed: Optional[str] = None
    age: Optional[float] = None
    weight: Optional[float] = None
    color: Optional[str] = None
    gender: Optional[PetGender] = None
    size: Optional[str] = None
    image_url: Optional[str] = None
    notes: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    owner: Optional[Dict[str, Any]] = None
    medical_history: List[Dict[str, Any]] = field(default_factory=list)
    vaccinations: List[Dict[str, Any]] = field(default_factory=list)
    medications: List[Dict[str, Any]] = field(default_factory=list)
    appointments: List[Dict[str, Any]] = field(default_factory=list)
    vaccinated: bool = False
    neutered: bool = False
    available_for_adoption: bool = False
    adoption_status: Optional[AdoptionStatus] = None
    adoption_fee: Optional[float] = None
    adopted_by_application: Optional[str] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)

    @property
    def is_adopted(self) -> bool:
        return self.adoption_status == AdoptionStatus.ADOPTED

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pet":
        """
        Build a Pet from a Firestore document.
        Enum strings become enum members, stored datetimes of date-typed
        sub-record fields become plain dates. Unknown keys are ignored.
        """
        known = {f.name for f in dataclass_fields(cls)}
        processed_data = {k: v for k, v in DateTimeUtils.from_firestore(dict(data)).items() if k in known}

        processed_data['species'] = PetSpecies(processed_data['species'])

        gender_str = processed_data.get('gender')
        if isinstance(gender_str, str):
            try:
                processed_data['gender'] = PetGender(gender_str)
            except ValueError:
                logging.warning(f"Invalid PetGender value '{gender_str}' for pet {processed_data.get('pet_id')}. Using Unknown.")
                processed_data['gender'] = PetGender.UNKNOWN

        status_str = processed_data.get('adoption_status')
        if isinstance(status_str, str):
            processed_data['adoption_status'] = AdoptionStatus(status_str)

        for key in ('medical_history', 'vaccinations', 'medications', 'appointments'):
            records = processed_data.get(key) or []
            processed_data[key] = [_sub_record_from_store(r) for r in records]

        return cls(**processed_data)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with enum members replaced by their values."""
        pet_dict = asdict(self)
        pet_dict['species'] = self.species.value
        pet_dict['gender'] = self.gender.value if self.gender else None
        pet_dict['adoption_status'] = self.adoption_status.value if self.adoption_status else None
        return pet_dict


def _sub_record_from_store(record: Dict[str, Any]) -> Dict[str, Any]:
    converted = dict(record)
    for key in SUB_RECORD_DATE_KEYS:
        if isinstance(converted.get(key), (date, datetime)):
            converted[key] = DateTimeUtils.to_date(converted[key])
    return converted
