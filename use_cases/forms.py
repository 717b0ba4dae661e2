"""Concrete form definitions for every page that submits data."""

from typing import Any, Callable, Dict, List, Mapping, Optional

from use_cases import validators as v
from use_cases.domain_models import PAYMENT_METHODS
from use_cases.form_pipeline import FormStep, MultiStepForm
from use_cases.query_cache import MutationResult

SubmitHandler = Callable[[Dict[str, Any]], MutationResult]

PHONE_PATTERN = r"[6-9]\d{9}"
PINCODE_PATTERN = r"\d{6}"
MONTH_PATTERN = r"\d{4}-(0[1-9]|1[0-2])"
TIME_PATTERN = r"([01]?[0-9]|2[0-3]):[0-5][0-9]"

PHOTO_MAX_BYTES = 5 * 1024 * 1024
PHOTO_CONTENT_TYPES = ("image/jpeg", "image/png")


# --- login ---

LOGIN_SCHEMA = {
    "email": [v.email()],
    "password": [v.required("Password is required")],
}


def login_form(on_submit: SubmitHandler) -> MultiStepForm:
    return MultiStepForm(LOGIN_SCHEMA, on_submit=on_submit)


# --- public student registration ---

REGISTRATION_SCHEMA = {
    "formNumber": [v.required("Form number is required")],
    "email": [v.email()],
    "password": [v.min_length(6, "Password must be at least 6 characters")],
    "enrollmentNo": [v.required("Enrollment number is required")],
    "fullName": [v.required("Full name is required")],
    "phone": [v.matches(PHONE_PATTERN, "Please enter a valid 10-digit phone number")],
    "department": [v.required("Department is required")],
    "batch": [v.required("Batch is required")],
    "pincode": [v.matches(PINCODE_PATTERN, "Please enter a valid 6-digit pincode")],
    "district": [v.required("District is required")],
    "tehsil": [v.required("Tehsil is required")],
    "guardianPhone": [v.matches(PHONE_PATTERN, "Please enter a valid 10-digit guardian phone number")],
    "photo": [
        v.file_required("Photo is required"),
        v.file_constraints(
            max_bytes=PHOTO_MAX_BYTES,
            content_types=PHOTO_CONTENT_TYPES,
            size_message="Photo must be 5 MB or smaller",
            type_message="Photo must be a JPEG or PNG image",
        ),
    ],
}

REGISTRATION_STEPS = (
    FormStep("Personal Information", ("formNumber", "email", "password", "enrollmentNo", "fullName", "phone")),
    FormStep("Academic Information", ("department", "batch")),
    FormStep("Address Information", ("pincode", "district", "tehsil", "guardianPhone")),
    FormStep("Photo Upload", ("photo",)),
)


def registration_form(on_submit: SubmitHandler) -> MultiStepForm:
    return MultiStepForm(REGISTRATION_SCHEMA, REGISTRATION_STEPS, on_submit=on_submit)


def registration_fields(values: Mapping[str, Any]) -> Dict[str, str]:
    """Text parts of the multipart payload; the photo travels separately."""
    return {
        name: str(values.get(name) or "").strip() if name != "password" else str(values.get(name) or "")
        for name in REGISTRATION_SCHEMA
        if name != "photo"
    }


# --- student absence request ---

ABSENCE_SCHEMA = {
    "reason": [v.required("Please provide a reason for today's absence")],
}


def absence_form(on_submit: SubmitHandler) -> MultiStepForm:
    return MultiStepForm(ABSENCE_SCHEMA, on_submit=on_submit)


# --- admin payment ---

def _transaction_id_for_online(values: Mapping[str, Any]) -> Optional[str]:
    if values.get("method") == "ONLINE" and not str(values.get("transactionId") or "").strip():
        return "Transaction ID is required for online payments"
    return None


PAYMENT_SCHEMA = {
    "studentId": [v.positive_int("Please select a valid student")],
    "amount": [v.positive_number("Please enter a valid amount")],
    "method": [v.one_of(PAYMENT_METHODS, "Please select a payment method")],
    "transactionId": [],
}


def payment_form(on_submit: SubmitHandler) -> MultiStepForm:
    return MultiStepForm(
        PAYMENT_SCHEMA,
        on_submit=on_submit,
        cross_checks={"transactionId": _transaction_id_for_online},
        initial={"method": "CASH"},
    )


# --- admin monthly expense ---

EXPENSE_SCHEMA = {
    "monthYear": [
        v.required("Please select a month and year"),
        v.matches(MONTH_PATTERN, "Please select a month and year"),
    ],
    "totalAmount": [v.positive_number("Please enter a valid amount")],
}


def expense_form(on_submit: SubmitHandler) -> MultiStepForm:
    return MultiStepForm(EXPENSE_SCHEMA, on_submit=on_submit)


# --- warden absence cutoff ---

CUTOFF_SCHEMA = {
    "cutoffTime": [
        v.required("Please select a cutoff time"),
        v.matches(TIME_PATTERN, "Please enter a valid time in HH:mm format"),
    ],
}


def cutoff_form(on_submit: SubmitHandler) -> MultiStepForm:
    return MultiStepForm(CUTOFF_SCHEMA, on_submit=on_submit)


# --- admin form numbers ---

def parse_form_numbers(text: str) -> List[str]:
    """One form number per line; blank lines are ignored."""
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def _has_form_numbers(value: Any) -> Optional[str]:
    return None if parse_form_numbers(value or "") else "Please enter at least one form number"


FORM_NUMBERS_SCHEMA = {
    "formNumbers": [_has_form_numbers],
}


def form_numbers_form(on_submit: SubmitHandler) -> MultiStepForm:
    return MultiStepForm(FORM_NUMBERS_SCHEMA, on_submit=on_submit)


# --- rejection / deletion reasons ---

def reason_form(on_submit: SubmitHandler, message: str = "Please provide rejection reason") -> MultiStepForm:
    return MultiStepForm({"reason": [v.required(message)]}, on_submit=on_submit)
