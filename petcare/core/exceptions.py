# petcare/core/exceptions.py
from typing import Any, Dict, Optional


class PetCareError(Exception):
    """
    Base class of every error a service raises on purpose.
    The global handler in create_app turns it into `{"error_code", "error"}` JSON.
    """
    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code

    def to_dict(self) -> Dict[str, Any]:
        return {"error_code": self.error_code, "error": self.message}


class BadRequestError(PetCareError):
    status_code = 400
    error_code = "BAD_REQUEST"


class UnauthorizedError(PetCareError):
    status_code = 401
    error_code = "UNAUTHORIZED"


class ForbiddenError(PetCareError):
    status_code = 403
    error_code = "FORBIDDEN"


class NotFoundError(PetCareError):
    status_code = 404
    error_code = "NOT_FOUND"


class ConflictError(PetCareError):
    status_code = 409
    error_code = "CONFLICT"


def first_error_message(messages: Any) -> str:
    """
    Flatten marshmallow's nested error map into one readable line,
    e.g. {"email": ["Missing data for required field."]} -> "email: Missing data for required field."
    """
    if isinstance(messages, dict):
        for field_name, value in messages.items():
            inner = first_error_message(value)
            if field_name == '_schema':
                return inner
            return f"{field_name}: {inner}"
    if isinstance(messages, (list, tuple)) and messages:
        return first_error_message(messages[0])
    return str(messages) if messages else "Invalid request"
