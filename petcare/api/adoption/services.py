# petcare/api/adoption/services.py
import logging
import uuid
from collections import Counter
from typing import Dict, Any, List, Optional
from firebase_admin import firestore
from firebase_admin.firestore import Transaction

from petcare.core.exceptions import BadRequestError, ConflictError, NotFoundError
from petcare.models.adoption import (
    AdoptionApplication, ApplicationStatus, HousingType, Tenure, HoursAlone,
    generate_application_id
)
from petcare.models.pet import AdoptionStatus
from petcare.utils.datetime_utils import DateTimeUtils


class AdoptionService:
    """
    Adoption applications and their review workflow.

    Status values: pending -> under_review -> approved / rejected -> completed.
    Any value may be set from any other; the only guarded transition is
    approval, which adopts the referenced pet and is refused when another
    application already did.
    """
    def __init__(self, db=None):
        self.db = db or firestore.client()
        self.applications_ref = self.db.collection('adoption_applications')
        self.pets_ref = self.db.collection('pets')
        logging.info("AdoptionService initialized.")

    def submit_application(self, pet_id: str, applicant: Dict[str, Any],
                           applicant_user_id: Optional[str] = None) -> AdoptionApplication:
        """Create a pending application for an available pet."""
        pet_doc = self.pets_ref.document(pet_id).get()
        if not pet_doc.exists:
            raise NotFoundError("Pet not found", "PET_NOT_FOUND")
        pet_data = pet_doc.to_dict()
        if not pet_data.get('available_for_adoption'):
            raise ConflictError("This pet is no longer available for adoption", "PET_UNAVAILABLE")

        application = AdoptionApplication(
            id=str(uuid.uuid4()),
            application_id=generate_application_id(),
            pet_id=pet_id,
            pet_name=pet_data['name'],
            pet_species=pet_data['species'],
            full_name=applicant['full_name'].strip(),
            email=applicant['email'].strip().lower(),
            phone=applicant['phone'].strip(),
            address=applicant['address'].strip(),
            housing_type=HousingType(applicant['housing_type']),
            own_or_rent=Tenure(applicant['own_or_rent']),
            household_members=applicant['household_members'],
            pet_experience=applicant['pet_experience'],
            hours_alone=HoursAlone(applicant['hours_alone']),
            agreement=applicant['agreement'],
            applicant_user_id=applicant_user_id
        )
        self.applications_ref.document(application.id).set(DateTimeUtils.for_firestore(application.to_dict()))
        logging.info(f"Adoption application {application.application_id} submitted for pet {pet_id}")
        return application

    def list_applications(self, status: Optional[str] = None, pet_id: Optional[str] = None) -> List[AdoptionApplication]:
        """Applications matching the filters, most recently submitted first."""
        query = self.applications_ref
        if status:
            query = query.where('status', '==', status)
        if pet_id:
            query = query.where('pet_id', '==', pet_id)
        applications = [AdoptionApplication.from_dict(doc.to_dict()) for doc in query.stream()]
        # Sorted here so the status / pet filters need no composite index.
        return sorted(applications, key=lambda a: a.submitted_at, reverse=True)

    def get_application(self, application_id: str) -> AdoptionApplication:
        doc = self.applications_ref.document(application_id).get()
        if not doc.exists:
            raise NotFoundError("Application not found", "APPLICATION_NOT_FOUND")
        return AdoptionApplication.from_dict(doc.to_dict())

    def update_application_status(self, application_id: str, new_status: str, reviewer_id: Optional[str],
                                  review_notes: Optional[str] = None) -> AdoptionApplication:
        """
        [transaction] Set the review status. Approval also marks the pet adopted,
        in the same transaction that checks nobody else adopted it first.
        """
        try:
            status = ApplicationStatus(new_status)
        except ValueError:
            allowed = ', '.join(s.value for s in ApplicationStatus)
            raise BadRequestError(f"Invalid status. Must be one of: {allowed}", "INVALID_STATUS")

        transaction = self.db.transaction()
        application_ref = self.applications_ref.document(application_id)

        @firestore.transactional
        def _update_in_transaction(transaction: Transaction):
            snapshot = application_ref.get(transaction=transaction)
            if not snapshot.exists:
                raise NotFoundError("Application not found", "APPLICATION_NOT_FOUND")
            application = AdoptionApplication.from_dict(snapshot.to_dict())

            pet_ref = None
            if status == ApplicationStatus.APPROVED:
                pet_ref = self.pets_ref.document(application.pet_id)
                pet_snapshot = pet_ref.get(transaction=transaction)
                if not pet_snapshot.exists:
                    logging.warning(f"Pet {application.pet_id} of application {application_id} no longer exists; skipping cascade")
                    pet_ref = None
                else:
                    pet_data = pet_snapshot.to_dict()
                    adopted_by = pet_data.get('adopted_by_application')
                    if pet_data.get('adoption_status') == AdoptionStatus.ADOPTED.value and adopted_by != application_id:
                        raise ConflictError(
                            f"{pet_data.get('name', 'This pet')} has already been adopted through another application",
                            "PET_ALREADY_ADOPTED"
                        )

            now = DateTimeUtils.now()
            application.status = status
            application.reviewed_at = now
            application.reviewed_by = reviewer_id
            application.updated_at = now
            if review_notes is not None:
                application.review_notes = review_notes

            transaction.update(application_ref, {
                'status': status.value,
                'reviewed_at': now,
                'reviewed_by': reviewer_id,
                'review_notes': application.review_notes,
                'updated_at': now
            })
            if pet_ref is not None:
                transaction.update(pet_ref, {
                    'available_for_adoption': False,
                    'adoption_status': AdoptionStatus.ADOPTED.value,
                    'adopted_by_application': application_id,
                    'updated_at': now
                })
            return application, pet_ref is not None

        try:
            application, cascaded = _update_in_transaction(transaction)
        except ConflictError as e:
            logging.warning(f"Approval of application {application_id} refused: {e.message}")
            raise

        logging.info(f"Application {application.application_id} set to {status.value} by {reviewer_id}")
        if cascaded:
            logging.info(f"Pet {application.pet_id} marked adopted by application {application.application_id}")
        return application

    def delete_application(self, application_id: str) -> None:
        """Hard delete. The pet's adoption state is left untouched."""
        application_ref = self.applications_ref.document(application_id)
        if not application_ref.get().exists:
            raise NotFoundError("Application not found", "APPLICATION_NOT_FOUND")
        application_ref.delete()
        logging.info(f"Adoption application {application_id} deleted")

    def application_stats(self) -> Dict[str, int]:
        """Number of applications per (lower-cased) pet species."""
        counts = Counter()
        for doc in self.applications_ref.stream():
            species = doc.to_dict().get('pet_species')
            if species:
                counts[species.lower()] += 1
        return dict(counts)
