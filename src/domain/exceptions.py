from enum import Enum
from collections.abc import Mapping
from typing import Any, Optional

class ErrorType(str, Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    WRONG_SCHEMA = "wrong_schema"


ERROR_STATUS_CODES = {
    ErrorType.NOT_FOUND: 404,
    ErrorType.CONFLICT: 409,
    ErrorType.UNAUTHORIZED: 401,
    ErrorType.WRONG_SCHEMA: 422,
}


class RecommendationException(Exception):
    """Base exception for all recommendation catalog errors."""
    pass

class AppError(RecommendationException):
    """
    Expected business-rule failure, identified by its `type` tag.
    Two errors are equal when both the tag and the message match.
    """
    def __init__(self, error_type: str, message: str = ""):
        self.type = ErrorType(error_type).value
        self.message = message
        super().__init__(message or self.type)

    def to_dict(self) -> dict:
        return {'type': self.type, 'message': self.message}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AppError):
            return NotImplemented
        return (self.type, self.message) == (other.type, other.message)

    def __hash__(self) -> int:
        return hash((self.type, self.message))

    def __repr__(self) -> str:
        return f"AppError(type={self.type!r}, message={self.message!r})"

class DatabaseException(RecommendationException):
    """Raised when a database operation fails."""
    pass


def not_found_error(message: str = "") -> AppError:
    return AppError(ErrorType.NOT_FOUND, message)

def conflict_error(message: str = "") -> AppError:
    return AppError(ErrorType.CONFLICT, message)

def unauthorized_error(message: str = "") -> AppError:
    return AppError(ErrorType.UNAUTHORIZED, message)

def wrong_schema_error(message: str = "") -> AppError:
    return AppError(ErrorType.WRONG_SCHEMA, message)


def is_app_error(value: Any) -> bool:
    """
    Tells whether `value` carries a known error `type` and a `message`,
    regardless of its class. Works for AppError instances and plain mappings.
    """
    if isinstance(value, Mapping):
        error_type, has_message = value.get('type'), 'message' in value
    else:
        error_type, has_message = getattr(value, 'type', None), hasattr(value, 'message')

    if not has_message or not isinstance(error_type, str):
        return False
    return error_type in {member.value for member in ErrorType}

def error_type_to_status_code(error_type: str) -> Optional[int]:
    """Returns the HTTP status for a known error type, None otherwise."""
    try:
        return ERROR_STATUS_CODES[ErrorType(error_type)]
    except ValueError:
        return None
