import pytest

from use_cases import forms
from use_cases.query_cache import MutationResult
from use_cases.validators import FilePayload

VALID_REGISTRATION = {
    "formNumber": "F-101",
    "email": "asha@college.in",
    "password": "secret1",
    "enrollmentNo": "EN2024001",
    "fullName": "Asha Patil",
    "phone": "9876543210",
    "department": "CSE",
    "batch": "2024",
    "pincode": "411001",
    "district": "Pune",
    "tehsil": "Haveli",
    "guardianPhone": "9123456780",
}
PHOTO = FilePayload("asha.jpg", b"\xff\xd8" * 100, "image/jpeg")


def walk_to_last_step(form):
    while not form.is_last_step:
        assert form.next(), form.errors


def test_registration_has_four_steps():
    form = forms.registration_form(lambda values: MutationResult(ok=True))
    assert [s.title for s in form.steps] == [
        "Personal Information", "Academic Information", "Address Information", "Photo Upload",
    ]


def test_registration_without_photo_is_never_sent():
    sent = []
    form = forms.registration_form(lambda values: sent.append(values) or MutationResult(ok=True))
    form.update(VALID_REGISTRATION)
    walk_to_last_step(form)

    outcome = form.submit()

    assert outcome.status == "INVALID"
    assert outcome.errors == {"photo": "Photo is required"}
    assert sent == []


def test_registration_with_photo_submits_all_parts():
    sent = []
    form = forms.registration_form(lambda values: sent.append(values) or MutationResult(ok=True))
    form.update(VALID_REGISTRATION)
    walk_to_last_step(form)
    form.set_value("photo", PHOTO)

    assert form.submit().ok
    assert sent[0]["photo"] is PHOTO
    assert forms.registration_fields(sent[0]) == VALID_REGISTRATION


@pytest.mark.parametrize("photo,message", [
    (FilePayload("a.gif", b"GIF", "image/gif"), "Photo must be a JPEG or PNG image"),
    (FilePayload("a.png", b"x" * (forms.PHOTO_MAX_BYTES + 1), "image/png"), "Photo must be 5 MB or smaller"),
    (FilePayload("a.png", b"", "image/png"), "Photo is required"),
])
def test_photo_constraints(photo, message):
    form = forms.registration_form(lambda values: MutationResult(ok=True))
    form.set_value("photo", photo)
    assert form.validate_step(3).errors == {"photo": message}


@pytest.mark.parametrize("field,value", [
    ("phone", "12345"),
    ("phone", "5876543210"),
    ("email", "not-an-email"),
    ("password", "12345"),
])
def test_personal_step_rejects_bad_values(field, value):
    form = forms.registration_form(lambda values: MutationResult(ok=True))
    form.update({**VALID_REGISTRATION, field: value})
    assert form.next() is False
    assert field in form.errors


def test_registration_fields_strip_text_but_not_password():
    fields = forms.registration_fields({**VALID_REGISTRATION, "fullName": "  Asha  ", "password": " pw pw "})
    assert fields["fullName"] == "Asha"
    assert fields["password"] == " pw pw "
    assert "photo" not in fields


def test_online_payment_needs_transaction_id():
    form = forms.payment_form(lambda values: MutationResult(ok=True))
    form.update({"studentId": 4, "amount": 1500, "method": "ONLINE"})
    assert form.submit().errors == {"transactionId": "Transaction ID is required for online payments"}

    form.set_value("transactionId", "UTR123")
    assert form.submit().ok


def test_payment_defaults_to_cash_and_rejects_bad_amount():
    form = forms.payment_form(lambda values: MutationResult(ok=True))
    assert form.values["method"] == "CASH"
    form.update({"studentId": 4, "amount": 0})
    assert form.submit().errors == {"amount": "Please enter a valid amount"}


@pytest.mark.parametrize("month,ok", [("2024-01", True), ("2024-13", False), ("24-01", False), ("", False)])
def test_expense_month_format(month, ok):
    form = forms.expense_form(lambda values: MutationResult(ok=True))
    form.update({"monthYear": month, "totalAmount": 50000})
    assert form.validate_all().ok is ok


@pytest.mark.parametrize("value,ok", [("22:00", True), ("9:30", True), ("24:00", False), ("22:60", False), ("", False)])
def test_cutoff_time_format(value, ok):
    form = forms.cutoff_form(lambda values: MutationResult(ok=True))
    form.set_value("cutoffTime", value)
    assert form.validate_all().ok is ok


def test_form_numbers_parsing():
    assert forms.parse_form_numbers("F-1\n\n  F-2 \n") == ["F-1", "F-2"]
    form = forms.form_numbers_form(lambda values: MutationResult(ok=True))
    form.set_value("formNumbers", "\n \n")
    assert form.submit().errors == {"formNumbers": "Please enter at least one form number"}


def test_reason_form_requires_text():
    form = forms.reason_form(lambda values: MutationResult(ok=True))
    form.set_value("reason", "   ")
    assert form.submit().errors == {"reason": "Please provide rejection reason"}
