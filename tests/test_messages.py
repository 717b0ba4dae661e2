from infrastructure.api_client import (
    ForbiddenError,
    ServerError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from use_cases.messages import STATUS_MESSAGES, describe_absence_error, describe_error


def test_server_message_wins():
    assert describe_error(ServerError("Form number already used", 400), "Failed") == "Form number already used"


def test_transport_error_names_the_operation():
    error = TransportError("Could not reach the server: refused")
    assert describe_error(error, "Failed to load students") == "Failed to load students: server unreachable."


def test_field_errors_are_joined():
    error = ValidationError("", 400, {"email": "must be valid", "phone": "too short"})
    assert describe_error(error, "Failed") == "email: must be valid; phone: too short"


def test_status_texts_without_server_message():
    assert describe_error(UnauthorizedError("", 401), "Failed") == STATUS_MESSAGES[401]
    assert describe_error(ForbiddenError("", 403), "Failed") == STATUS_MESSAGES[403]
    assert describe_error(ServerError("", 400), "Failed") == STATUS_MESSAGES[400]


def test_fallback_for_unknown_errors():
    assert describe_error(ServerError("", 502), "Failed to save") == "Failed to save"
    assert describe_error(RuntimeError("boom"), "Failed to save") == "Failed to save"
    assert describe_error(None, "Failed to save") == "Failed to save"


def test_known_absence_refusals_are_translated():
    error = ServerError("Absence request already exists for this date", 400)
    assert describe_absence_error(error).startswith("You have already submitted an absence request for today")


def test_unknown_absence_refusal_passes_through():
    error = ServerError("Hostel closed", 400)
    assert describe_absence_error(error) == "Hostel closed"
