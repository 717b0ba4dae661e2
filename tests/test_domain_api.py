from unittest.mock import MagicMock

import pytest

from infrastructure.api_client import ApiResponse
from services import admin_api, auth_api, monitor_api, student_api, warden_api
from use_cases.domain_models import AbsenceRequest, RegistrationRequest, StudentDashboard
from use_cases.validators import FilePayload


@pytest.fixture
def gateway():
    gw = MagicMock()
    gw.send.return_value = ApiResponse(success=True, data=None)
    return gw


def sent(gateway):
    return gateway.send.call_args[0][0]


def test_login_parses_result(gateway):
    gateway.send.return_value = ApiResponse(success=True, data={
        "token": "jwt", "email": "a@b.in", "role": "STUDENT", "isMonitor": True, "fullName": "Asha",
    })

    result = auth_api.login(gateway, "a@b.in", "secret")

    request = sent(gateway)
    assert (request.method, request.url_path) == ("POST", "/api/auth/login")
    assert request.json == {"email": "a@b.in", "password": "secret"}
    assert result.token == "jwt"
    assert result.role == "STUDENT"
    assert result.is_monitor is True


def test_register_is_multipart_with_photo(gateway):
    photo = FilePayload("me.jpg", b"\xff\xd8", "image/jpeg")

    student_api.register(gateway, {"fullName": "Asha", "email": "a@b.in"}, photo)

    request = sent(gateway)
    assert request.url_path == "/api/students/register"
    assert dict(request.form) == {"fullName": "Asha", "email": "a@b.in"}
    assert dict(request.files) == {"photo": ("me.jpg", b"\xff\xd8", "image/jpeg")}


def test_absence_request_body(gateway):
    student_api.submit_absence_request(gateway, "2024-03-01", "Going home")

    request = sent(gateway)
    assert request.method == "POST"
    assert request.json == {"absenceDate": "2024-03-01", "reason": "Going home"}


def test_attendance_history_months_param(gateway):
    gateway.send.return_value = ApiResponse(success=True, data=[
        {"attendanceId": 1, "date": "2024-03-01", "status": "PRESENT", "approvedBy": {"email": "m@b.in"}},
    ])

    records = student_api.get_attendance_history(gateway, 6)

    assert dict(sent(gateway).params) == {"months": 6}
    assert records[0].status == "PRESENT"
    assert records[0].approved_by == "m@b.in"


def test_dashboard_parsed(gateway):
    gateway.send.return_value = ApiResponse(success=True, data={
        "fullName": "Asha", "currentBalance": "1200.50", "pendingBillAmount": 300,
        "netBalance": 900.5, "monthlyExpenses": 3000, "presentDaysThisMonth": 15,
        "totalDaysThisMonth": 20, "isMonitor": False,
    })

    dashboard = student_api.get_dashboard(gateway)

    assert isinstance(dashboard, StudentDashboard)
    assert dashboard.current_balance == 1200.5
    assert dashboard.attendance_percentage == 75.0


def test_registration_requests_parsed(gateway):
    gateway.send.return_value = ApiResponse(success=True, data=[
        {"requestId": 7, "formNumber": "F-1", "fullName": "Asha", "status": "PENDING"},
    ])

    requests_ = admin_api.get_registration_requests(gateway)

    assert requests_ == [RegistrationRequest.from_api({
        "requestId": 7, "formNumber": "F-1", "fullName": "Asha", "status": "PENDING",
    })]


def test_reject_registration_sends_comments_as_query(gateway):
    admin_api.reject_registration(gateway, 7, "Blurry photo")

    request = sent(gateway)
    assert (request.method, request.url_path) == ("PUT", "/api/admin/registration-requests/7/reject")
    assert dict(request.params) == {"comments": "Blurry photo"}


def test_expense_uses_query_params(gateway):
    admin_api.enter_expense(gateway, "2024-01", 50000.0)

    assert dict(sent(gateway).params) == {"monthYear": "2024-01", "totalAmount": 50000.0}


def test_payment_omits_missing_transaction_id(gateway):
    admin_api.record_payment(gateway, 3, 500.0, "CASH")
    assert sent(gateway).json == {"studentId": 3, "amount": 500.0, "method": "CASH"}

    admin_api.record_payment(gateway, 3, 500.0, "ONLINE", "TX9")
    assert sent(gateway).json["transactionId"] == "TX9"


def test_monitor_and_deletion_paths(gateway):
    admin_api.assign_monitor(gateway, 11)
    assert sent(gateway).url_path == "/api/admin/monitor/11"

    admin_api.request_deletion(gateway, 11, "Left hostel")
    request = sent(gateway)
    assert request.url_path == "/api/admin/deletion-request/11"
    assert dict(request.params) == {"reason": "Left hostel"}


def test_student_photo_is_binary(gateway):
    gateway.send.return_value = b"img"

    assert admin_api.get_student_photo(gateway, "a.jpg") == b"img"
    assert sent(gateway).response_type == "binary"


def test_warden_cutoff_roundtrip(gateway):
    gateway.send.return_value = ApiResponse(success=True, data="22:00")
    assert warden_api.get_cutoff_time(gateway) == "22:00"

    warden_api.update_cutoff_time(gateway, "21:30")
    request = sent(gateway)
    assert request.method == "PUT"
    assert request.json == {"cutoffTime": "21:30"}


def test_approve_absence_without_comments_sends_no_params(gateway):
    warden_api.approve_absence_request(gateway, 5)

    assert sent(gateway).params == ()


def test_monitor_early_requests_parsed(gateway):
    gateway.send.return_value = ApiResponse(success=True, data=[{
        "requestId": 9, "absenceDate": "2024-03-02", "reason": "Fever", "status": "PENDING",
        "isLateRequest": False, "student": {"studentId": 4, "fullName": "Ravi", "enrollmentNo": "E4"},
    }])

    early = monitor_api.get_early_absence_requests(gateway)

    assert sent(gateway).url_path == "/api/monitor/absence-requests/early"
    assert isinstance(early[0], AbsenceRequest)
    assert early[0].student_name == "Ravi"
    assert early[0].is_late_request is False


def test_missing_list_is_empty(gateway):
    assert warden_api.get_deletion_requests(gateway) == []
