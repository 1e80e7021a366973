# petcare/api/appointments/services.py
import logging
import uuid
from collections import Counter
from typing import Dict, Any, List, Optional
from firebase_admin import firestore

from petcare.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from petcare.models.appointment import Appointment, AppointmentStatus, AppointmentType
from petcare.models.user import User
from petcare.utils.datetime_utils import DateTimeUtils


class AppointmentService:
    """
    Vet appointment booking and review.

    Regular users see and manage only their own appointments; admins see all.
    Status may move between any two values, no adjacency is enforced.
    """
    def __init__(self, default_veterinarian: str, db=None):
        self.db = db or firestore.client()
        self.appointments_ref = self.db.collection('appointments')
        self.pets_ref = self.db.collection('pets')
        self.users_ref = self.db.collection('users')
        self.default_veterinarian = default_veterinarian
        logging.info("AppointmentService initialized.")

    def _require_access(self, appointment: Appointment, caller: User) -> None:
        if caller.is_admin or appointment.user_id == caller.user_id:
            return
        raise ForbiddenError("You do not have access to this appointment", "ACCESS_DENIED")

    def create_appointment(self, caller: User, data: Dict[str, Any]) -> Appointment:
        """Book an appointment for `caller`, copying pet and user display fields in."""
        pet_doc = self.pets_ref.document(data['pet_id']).get()
        if not pet_doc.exists:
            raise NotFoundError("Pet not found", "PET_NOT_FOUND")
        if not self.users_ref.document(caller.user_id).get().exists:
            raise NotFoundError("User not found", "USER_NOT_FOUND")
        pet_data = pet_doc.to_dict()

        appointment = Appointment(
            appointment_id=str(uuid.uuid4()),
            pet_id=data['pet_id'],
            pet_name=pet_data['name'],
            pet_species=pet_data['species'],
            user_id=caller.user_id,
            user_email=caller.email,
            user_name=caller.username,
            type=AppointmentType(data['type']),
            date=data['date'],
            time=data['time'],
            veterinarian=data.get('veterinarian') or self.default_veterinarian,
            notes=data.get('notes')
        )
        self.appointments_ref.document(appointment.appointment_id).set(
            DateTimeUtils.for_firestore(appointment.to_dict())
        )
        logging.info(f"Appointment {appointment.appointment_id} booked by {caller.user_id} for pet {appointment.pet_id}")
        return appointment

    def list_appointments(self, caller: User) -> List[Appointment]:
        """All appointments for admins, otherwise the caller's own; ordered by date then time."""
        query = self.appointments_ref
        if not caller.is_admin:
            query = query.where('user_id', '==', caller.user_id)
        appointments = [Appointment.from_dict(doc.to_dict()) for doc in query.stream()]
        # Sorted here so the per-user query needs no composite index.
        return sorted(appointments, key=lambda a: (a.date, a.time))

    def get_appointment(self, appointment_id: str, caller: User) -> Appointment:
        doc = self.appointments_ref.document(appointment_id).get()
        if not doc.exists:
            raise NotFoundError("Appointment not found", "APPOINTMENT_NOT_FOUND")
        appointment = Appointment.from_dict(doc.to_dict())
        self._require_access(appointment, caller)
        return appointment

    def update_status(self, appointment_id: str, caller: User, new_status: str,
                      admin_notes: Optional[str] = None) -> Appointment:
        try:
            status = AppointmentStatus(new_status)
        except ValueError:
            allowed = ', '.join(s.value for s in AppointmentStatus)
            raise BadRequestError(f"Invalid status. Must be one of: {allowed}", "INVALID_STATUS")

        appointment = self.get_appointment(appointment_id, caller)
        now = DateTimeUtils.now()
        changes = {
            'status': status.value,
            'reviewed_by': caller.user_id,
            'reviewed_at': now,
            'updated_at': now
        }
        if admin_notes is not None:
            changes['admin_notes'] = admin_notes
        self.appointments_ref.document(appointment_id).update(changes)
        logging.info(f"Appointment {appointment_id}: {appointment.status.value} -> {status.value} by {caller.user_id}")
        return self.get_appointment(appointment_id, caller)

    def update_details(self, appointment_id: str, caller: User, update_data: Dict[str, Any]) -> Appointment:
        """Partial update of date, time, type, veterinarian and notes."""
        if not update_data:
            raise BadRequestError("No fields to update were provided", "EMPTY_UPDATE")
        self.get_appointment(appointment_id, caller)

        changes = dict(update_data)
        if 'type' in changes:
            changes['type'] = AppointmentType(changes['type']).value
        changes['updated_at'] = DateTimeUtils.now()
        self.appointments_ref.document(appointment_id).update(DateTimeUtils.for_firestore(changes))
        logging.info(f"Appointment {appointment_id} updated with fields: {list(update_data.keys())}")
        return self.get_appointment(appointment_id, caller)

    def delete_appointment(self, appointment_id: str, caller: User) -> None:
        self.get_appointment(appointment_id, caller)
        self.appointments_ref.document(appointment_id).delete()
        logging.info(f"Appointment {appointment_id} deleted by {caller.user_id}")

    def stats_summary(self) -> Dict[str, int]:
        """Appointment counts: total plus one entry per status."""
        counts = Counter(doc.to_dict().get('status') for doc in self.appointments_ref.stream())
        summary = {'total': sum(counts.values())}
        for status in AppointmentStatus:
            summary[status.value.lower()] = counts.get(status.value, 0)
        return summary
