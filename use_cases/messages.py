"""Human-readable texts for failed operations."""

from typing import Optional

from infrastructure.api_client import (
    ApiError,
    ForbiddenError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)

STATUS_MESSAGES = {
    400: "Bad request. Please check your input and try again.",
    401: "Unauthorized. Please log in again.",
    403: "Access denied. You don't have permission to perform this action.",
}

# Known server messages for absence requests -> what the student sees.
ABSENCE_MESSAGES = (
    ("already exists for this date",
     "You have already submitted an absence request for today. Please check your previous requests."),
    ("Cannot request absence for past dates",
     "Cannot submit absence request for past dates. Please check your system time."),
    ("Invalid absence request data",
     "Invalid data provided. Please check all fields and try again."),
    ("more than 30 days in advance",
     "Cannot request absence more than 30 days in advance."),
    ("Student not found",
     "Student record not found. Please contact administrator."),
)


def describe_error(error: Optional[Exception], fallback: str) -> str:
    """Prefer the server's own message; otherwise a status text or the fallback."""
    if isinstance(error, ApiError):
        if error.message:
            if isinstance(error, TransportError):
                return f"{fallback}: server unreachable."
            return error.message
        if isinstance(error, ValidationError) and error.field_errors:
            return "; ".join(f"{k}: {v}" for k, v in error.field_errors.items())
        if isinstance(error, UnauthorizedError):
            return STATUS_MESSAGES[401]
        if isinstance(error, ForbiddenError):
            return STATUS_MESSAGES[403]
        if error.status_code in STATUS_MESSAGES:
            return STATUS_MESSAGES[error.status_code]
    return fallback


def describe_absence_error(error: Optional[Exception]) -> str:
    message = describe_error(error, "Failed to submit absence request")
    server_message = error.message if isinstance(error, ApiError) else ""
    for needle, friendly in ABSENCE_MESSAGES:
        if server_message and needle in server_message:
            return friendly
    return message
