"""
EarnGage Error Taxonomy

Every failure a service raises is one of a closed set of kinds so callers
can branch on the class (or ``.kind``) instead of on message text.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Closed set of failure kinds"""
    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    INVALID_TRANSITION = "invalid_transition"
    DUPLICATE = "duplicate"
    AUTHENTICATION_FAILED = "authentication_failed"
    TRANSPORT = "transport"


class EarnGageError(Exception):
    """Base exception for EarnGage service errors"""

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind.value, "message": self.message}


class NotFoundError(EarnGageError):
    """Raised when a referenced entity does not exist"""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str, entity: Optional[str] = None, entity_id: Optional[str] = None):
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


class ValidationFailedError(EarnGageError):
    """Raised when input is missing a field or carries a bad value"""

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidTransitionError(EarnGageError):
    """Raised when an entity is in the wrong state for the operation"""

    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, message: str, current_status: Optional[str] = None):
        super().__init__(message)
        self.current_status = current_status


class DuplicateError(EarnGageError):
    """Raised when a uniqueness rule would be violated"""

    kind = ErrorKind.DUPLICATE


class AuthenticationError(EarnGageError):
    """Raised for bad credentials"""

    kind = ErrorKind.AUTHENTICATION_FAILED


class TransportError(EarnGageError):
    """Raised when the row store cannot be reached or answers with an error"""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, status: int = 500, details: Any = None):
        super().__init__(message)
        self.status = status
        self.details = details

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["status"] = self.status
        if self.details is not None:
            data["details"] = self.details
        return data


__all__ = [
    "ErrorKind",
    "EarnGageError",
    "NotFoundError",
    "ValidationFailedError",
    "InvalidTransitionError",
    "DuplicateError",
    "AuthenticationError",
    "TransportError",
]
