"""Endpoints available to the STUDENT role (and the public registration form)."""

from typing import List, Mapping, Optional

from infrastructure.api_client import ApiGateway, Endpoint
from use_cases.domain_models import AttendanceRecord, StudentDashboard, parse_list

REGISTER = Endpoint("POST", "/api/students/register")
SUBMIT_ABSENCE_REQUEST = Endpoint("POST", "/api/students/absence-request")
ATTENDANCE_HISTORY = Endpoint("GET", "/api/students/attendance-history")
DASHBOARD = Endpoint("GET", "/api/students/dashboard")


def register(gateway: ApiGateway, fields: Mapping[str, str], photo) -> None:
    """Multipart registration: text fields plus the ``photo`` file part."""
    gateway.send(REGISTER.bind(
        form=fields,
        files={"photo": (photo.name, photo.content, photo.content_type)},
    ))


def submit_absence_request(gateway: ApiGateway, absence_date: str, reason: str) -> None:
    gateway.send(SUBMIT_ABSENCE_REQUEST.bind(json={"absenceDate": absence_date, "reason": reason}))


def get_attendance_history(gateway: ApiGateway, months: Optional[int] = None) -> List[AttendanceRecord]:
    response = gateway.send(ATTENDANCE_HISTORY.bind(params={"months": months}))
    return parse_list(AttendanceRecord, response.data)


def get_dashboard(gateway: ApiGateway) -> StudentDashboard:
    response = gateway.send(DASHBOARD.bind())
    return StudentDashboard.from_api(response.data or {})
