# petcare/models/__init__.py
from .user import User, UserRole
from .pet import Pet, PetSpecies, PetGender, AdoptionStatus
from .adoption import AdoptionApplication, ApplicationStatus
from .appointment import Appointment, AppointmentStatus, AppointmentType
