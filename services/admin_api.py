"""Endpoints available to the ADMIN role."""

from typing import List, Optional

from infrastructure.api_client import ApiGateway, Endpoint
from use_cases.domain_models import RegistrationRequest, StudentSummary, parse_list

FORM_NUMBERS = Endpoint("POST", "/api/admin/form-numbers")
REGISTRATION_REQUESTS = Endpoint("GET", "/api/admin/registration-requests")
APPROVE_REGISTRATION = Endpoint("PUT", "/api/admin/registration-requests/{id}/approve")
REJECT_REGISTRATION = Endpoint("PUT", "/api/admin/registration-requests/{id}/reject")
STUDENTS = Endpoint("GET", "/api/admin/students")
ASSIGN_MONITOR = Endpoint("POST", "/api/admin/monitor/{student_id}")
ENTER_EXPENSE = Endpoint("POST", "/api/admin/expenses")
REQUEST_DELETION = Endpoint("POST", "/api/admin/deletion-request/{student_id}")
RECORD_PAYMENT = Endpoint("POST", "/api/admin/payments")
STUDENT_PHOTO = Endpoint("GET", "/api/admin/files/student-photo/{filename}", response_type="binary")


def add_form_numbers(gateway: ApiGateway, numbers: List[str]) -> None:
    gateway.send(FORM_NUMBERS.bind(json=list(numbers)))


def get_registration_requests(gateway: ApiGateway) -> List[RegistrationRequest]:
    response = gateway.send(REGISTRATION_REQUESTS.bind())
    return parse_list(RegistrationRequest, response.data)


def approve_registration(gateway: ApiGateway, request_id: int) -> None:
    gateway.send(APPROVE_REGISTRATION.bind(path_params={"id": request_id}))


def reject_registration(gateway: ApiGateway, request_id: int, comments: str) -> None:
    gateway.send(REJECT_REGISTRATION.bind(path_params={"id": request_id}, params={"comments": comments}))


def get_students(gateway: ApiGateway, query: Optional[str] = None) -> List[StudentSummary]:
    response = gateway.send(STUDENTS.bind(params={"query": query or None}))
    return parse_list(StudentSummary, response.data)


def assign_monitor(gateway: ApiGateway, student_id: int) -> None:
    """Toggles the monitor capability; the server decides the new value."""
    gateway.send(ASSIGN_MONITOR.bind(path_params={"student_id": student_id}))


def enter_expense(gateway: ApiGateway, month_year: str, total_amount: float) -> None:
    gateway.send(ENTER_EXPENSE.bind(params={"monthYear": month_year, "totalAmount": total_amount}))


def request_deletion(gateway: ApiGateway, student_id: int, reason: str) -> None:
    gateway.send(REQUEST_DELETION.bind(path_params={"student_id": student_id}, params={"reason": reason}))


def record_payment(gateway: ApiGateway, student_id: int, amount: float, method: str,
                   transaction_id: Optional[str] = None) -> None:
    body = {"studentId": student_id, "amount": amount, "method": method}
    if transaction_id:
        body["transactionId"] = transaction_id
    gateway.send(RECORD_PAYMENT.bind(json=body))


def get_student_photo(gateway: ApiGateway, filename: str) -> bytes:
    return gateway.send(STUDENT_PHOTO.bind(path_params={"filename": filename}))
