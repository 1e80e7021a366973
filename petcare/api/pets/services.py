# petcare/api/pets/services.py
import logging
import uuid
from typing import Dict, Any, List, Optional
from firebase_admin import firestore

from petcare.core.exceptions import NotFoundError, BadRequestError
from petcare.models.pet import Pet, PetSpecies, PetGender, AdoptionStatus
from petcare.utils.datetime_utils import DateTimeUtils

# URL segment -> array field on the pet document
SUB_RECORD_FIELDS = {
    'medical-history': 'medical_history',
    'vaccinations': 'vaccinations',
    'medications': 'medications',
}


class PetService:
    """Pet registry: pet documents and their medical sub-records."""
    def __init__(self, db=None):
        self.db = db or firestore.client()
        self.pets_ref = self.db.collection('pets')
        logging.info("PetService initialized.")

    def get_pet(self, pet_id: str) -> Pet:
        doc = self.pets_ref.document(pet_id).get()
        if not doc.exists:
            raise NotFoundError("Pet not found", "PET_NOT_FOUND")
        return Pet.from_dict(doc.to_dict())

    def list_pets(self, species: Optional[str] = None) -> List[Pet]:
        """All pets, newest first, optionally narrowed to one species."""
        if species:
            # Filtered queries are sorted here so they need no composite index.
            pets = [Pet.from_dict(doc.to_dict()) for doc in self.pets_ref.where('species', '==', species).stream()]
            return sorted(pets, key=lambda p: p.created_at, reverse=True)
        docs = self.pets_ref.order_by('created_at', direction=firestore.Query.DESCENDING).stream()
        return [Pet.from_dict(doc.to_dict()) for doc in docs]

    def list_available_pets(self) -> List[Pet]:
        """Pets offered for adoption whose adoption status is still open."""
        docs = self.pets_ref.where('available_for_adoption', '==', True).stream()
        pets = [Pet.from_dict(doc.to_dict()) for doc in docs]
        pets = [p for p in pets if p.adoption_status in (AdoptionStatus.AVAILABLE, None)]
        return sorted(pets, key=lambda p: p.created_at, reverse=True)

    def create_pet(self, pet_data: Dict[str, Any]) -> Pet:
        pet_id = str(uuid.uuid4())
        new_pet = Pet(
            pet_id=pet_id,
            name=pet_data['name'],
            species=PetSpecies(pet_data['species']),
            breed=pet_data.get('breed'),
            age=pet_data.get('age'),
            weight=pet_data.get('weight'),
            color=pet_data.get('color'),
            gender=PetGender(pet_data['gender']) if pet_data.get('gender') else None,
            size=pet_data.get('size'),
            image_url=pet_data.get('image_url'),
            notes=pet_data.get('notes'),
            description=pet_data.get('description'),
            location=pet_data.get('location'),
            owner=pet_data.get('owner'),
            vaccinated=pet_data.get('vaccinated', False),
            neutered=pet_data.get('neutered', False),
            available_for_adoption=pet_data.get('available_for_adoption', False),
            adoption_status=AdoptionStatus(pet_data['adoption_status']) if pet_data.get('adoption_status') else None,
            adoption_fee=pet_data.get('adoption_fee'),
        )
        self.pets_ref.document(pet_id).set(DateTimeUtils.for_firestore(new_pet.to_dict()))
        logging.info(f"Pet created: {pet_id} ({new_pet.species.value} '{new_pet.name}')")
        return new_pet

    def update_pet(self, pet_id: str, update_data: Dict[str, Any]) -> Pet:
        """Partial update of the provided fields only."""
        if not update_data:
            raise BadRequestError("No fields to update were provided", "EMPTY_UPDATE")
        pet_ref = self.pets_ref.document(pet_id)
        if not pet_ref.get().exists:
            raise NotFoundError("Pet not found", "PET_NOT_FOUND")

        changes = dict(update_data)
        # Reopening a pet for adoption forgets which application adopted it.
        if 'adoption_status' in changes and changes['adoption_status'] != AdoptionStatus.ADOPTED.value:
            changes['adopted_by_application'] = None
        changes['updated_at'] = DateTimeUtils.now()
        pet_ref.update(DateTimeUtils.for_firestore(changes))
        logging.info(f"Pet {pet_id} updated with fields: {list(update_data.keys())}")
        return self.get_pet(pet_id)

    def delete_pet(self, pet_id: str) -> Pet:
        pet = self.get_pet(pet_id)
        self.pets_ref.document(pet_id).delete()
        logging.info(f"Pet deleted: {pet_id} ('{pet.name}')")
        return pet

    def add_sub_record(self, pet_id: str, record_kind: str, record: Dict[str, Any]) -> Pet:
        """Append a medical-history, vaccination or medication entry to the pet."""
        field_name = SUB_RECORD_FIELDS[record_kind]
        pet_ref = self.pets_ref.document(pet_id)
        if not pet_ref.get().exists:
            raise NotFoundError("Pet not found", "PET_NOT_FOUND")

        entry = dict(record, record_id=str(uuid.uuid4()))
        pet_ref.update({
            field_name: firestore.ArrayUnion([DateTimeUtils.for_firestore(entry)]),
            'updated_at': DateTimeUtils.now()
        })
        logging.info(f"Added {record_kind} record {entry['record_id']} to pet {pet_id}")
        return self.get_pet(pet_id)
