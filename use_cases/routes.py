"""Route table of the application."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from use_cases.session_models import Role

HOME_PATH = "/"
LOGIN_PATH = "/login"
REGISTER_PATH = "/register"
UNAUTHORIZED_PATH = "/unauthorized"
NOT_FOUND_PATH = "/not-found"
DASHBOARD_PATH = "/app/dashboard"


@dataclass(frozen=True)
class Route:
    path: str
    title: str
    public: bool = False
    required_role: Optional[Role] = None
    requires_monitor: bool = False


ROUTES: Tuple[Route, ...] = (
    Route(HOME_PATH, "Home", public=True),
    Route(LOGIN_PATH, "Sign in", public=True),
    Route(REGISTER_PATH, "Student registration", public=True),
    Route(UNAUTHORIZED_PATH, "Access denied", public=True),
    Route(NOT_FOUND_PATH, "Not found", public=True),
    Route(DASHBOARD_PATH, "Dashboard"),
    Route("/app/admin/registrations", "Registration requests", required_role=Role.ADMIN),
    Route("/app/admin/form-numbers", "Form numbers", required_role=Role.ADMIN),
    Route("/app/admin/students", "Students", required_role=Role.ADMIN),
    Route("/app/admin/payments", "Payments", required_role=Role.ADMIN),
    Route("/app/admin/expenses", "Monthly expenses", required_role=Role.ADMIN),
    Route("/app/warden/deletions", "Deletion requests", required_role=Role.WARDEN),
    Route("/app/warden/absence-requests", "Late absence requests", required_role=Role.WARDEN),
    Route("/app/warden/settings", "System settings", required_role=Role.WARDEN),
    Route("/app/student/attendance", "Attendance history", required_role=Role.STUDENT),
    Route("/app/student/absence-requests", "Absence request", required_role=Role.STUDENT),
    Route("/app/monitor/absence-requests", "Early absence requests", required_role=Role.STUDENT, requires_monitor=True),
)

_BY_PATH: Dict[str, Route] = {route.path: route for route in ROUTES}

# Sidebar sections per role; must cover every Role.
ROLE_SECTIONS: Dict[Role, str] = {
    Role.ADMIN: "Administration",
    Role.WARDEN: "Warden",
    Role.STUDENT: "Student",
}


def normalize(path: str) -> str:
    path = (path or "").strip()
    if not path.startswith("/"):
        path = "/" + path
    if path == "/app" or path == "/app/":
        return DASHBOARD_PATH
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def resolve(path: str) -> Route:
    """Look up a path; unknown paths resolve to the not-found route."""
    return _BY_PATH.get(normalize(path), _BY_PATH[NOT_FOUND_PATH])


def protected_routes() -> Tuple[Route, ...]:
    return tuple(route for route in ROUTES if not route.public)
