import json
from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from infrastructure.config import Settings
from infrastructure.storage.session_storage import MemorySessionStorage
from use_cases import bootstrap, hostel_flow, query_keys as keys
from use_cases.validators import FilePayload


def make_response(status, payload):
    response = requests.Response()
    response.status_code = status
    response.reason = "OK" if status < 400 else "Error"
    response._content = json.dumps(payload).encode("utf-8")
    return response


class FakeHostelServer:
    """Answers requests by (method, path); records every call."""

    def __init__(self):
        self.calls = []
        self.routes = {}

    def on(self, method, path, handler):
        self.routes[(method, path)] = handler

    def __call__(self, method, url, **kwargs):
        path = url.replace("http://hostel.test", "")
        self.calls.append((method, path, kwargs))
        handler = self.routes.get((method, path))
        if handler is None:
            return make_response(404, {"success": False, "message": f"No route {path}"})
        status, payload = handler(kwargs)
        return make_response(status, payload)

    def count(self, method, path):
        return sum(1 for m, p, _ in self.calls if (m, p) == (method, path))


@pytest.fixture
def server():
    server = FakeHostelServer()
    server.on("POST", "/api/auth/login", lambda kw: (200, {"success": True, "data": {
        "token": "jwt-admin", "email": kw["json"]["email"], "role": "ADMIN", "isMonitor": False,
    }}))
    return server


@pytest.fixture
def ctx(server):
    http = MagicMock()
    http.request.side_effect = server
    context = bootstrap.build_context(
        settings=Settings(api_base_url="http://hostel.test", api_timeout=5, session_store_path="unused.json"),
        storage=MemorySessionStorage(),
        http=http,
    )
    context.session.login("admin@hostel.in", "pw")
    return context


def test_approving_registration_refreshes_the_list(ctx, server):
    state = {"status": "PENDING"}
    server.on("GET", "/api/admin/registration-requests", lambda kw: (200, {"success": True, "data": [
        {"requestId": 7, "formNumber": "F-7", "fullName": "Asha", "status": state["status"]},
    ]}))

    def approve(kw):
        state["status"] = "APPROVED"
        return 200, {"success": True, "message": "Approved"}
    server.on("PUT", "/api/admin/registration-requests/7/approve", approve)

    before = hostel_flow.registration_requests(ctx)
    assert before.data[0].status == "PENDING"

    result = hostel_flow.approve_registration(ctx, 7)
    assert result.ok
    assert ctx.cache.get(keys.REGISTRATION_REQUESTS).stale

    after = hostel_flow.registration_requests(ctx)
    assert after.data[0].status == "APPROVED"
    assert server.count("GET", "/api/admin/registration-requests") == 2
    assert server.count("PUT", "/api/admin/registration-requests/7/approve") == 1


def test_failed_approval_keeps_cached_list(ctx, server):
    server.on("GET", "/api/admin/registration-requests", lambda kw: (200, {"success": True, "data": []}))
    server.on("PUT", "/api/admin/registration-requests/7/approve",
              lambda kw: (400, {"success": False, "message": "Form number already used"}))
    hostel_flow.registration_requests(ctx)

    result = hostel_flow.approve_registration(ctx, 7)

    assert not result.ok
    assert result.message("Failed to approve registration") == "Form number already used"
    assert not ctx.cache.get(keys.REGISTRATION_REQUESTS).stale


def test_requests_carry_the_session_token(ctx, server):
    server.on("GET", "/api/admin/students", lambda kw: (200, {"success": True, "data": []}))

    hostel_flow.admin_students(ctx)

    _, _, kwargs = server.calls[-1]
    assert kwargs["headers"]["Authorization"] == "Bearer jwt-admin"


def test_401_signs_out_and_clears_cache(ctx, server):
    server.on("GET", "/api/admin/students", lambda kw: (200, {"success": True, "data": []}))
    hostel_flow.admin_students(ctx)
    server.on("GET", "/api/admin/registration-requests", lambda kw: (401, {"message": "Token expired"}))

    entry = hostel_flow.registration_requests(ctx)

    assert entry.is_error
    assert not ctx.session.is_authenticated
    assert ctx.storage.keys() == []
    assert ctx.cache.get(keys.ADMIN_STUDENTS).status == "idle"


def test_cutoff_update_invalidates_both_setting_reads(ctx, server):
    server.on("GET", "/api/warden/settings/absence-cutoff-time", lambda kw: (200, {"success": True, "data": "22:00"}))
    server.on("GET", "/api/warden/settings", lambda kw: (200, {"success": True, "data": []}))
    server.on("PUT", "/api/warden/settings/absence-cutoff-time", lambda kw: (200, {"success": True}))
    hostel_flow.cutoff_time(ctx)
    hostel_flow.all_settings(ctx)

    result = hostel_flow.update_cutoff_time(ctx, {"cutoffTime": " 21:30 "})

    assert result.ok
    assert server.calls[-1][2]["json"] == {"cutoffTime": "21:30"}
    assert ctx.cache.get(keys.CUTOFF_TIME).stale
    assert ctx.cache.get(keys.ALL_SETTINGS).stale


def test_absence_request_is_for_today_and_refreshes_history(ctx, server):
    server.on("GET", "/api/students/attendance-history", lambda kw: (200, {"success": True, "data": []}))
    server.on("POST", "/api/students/absence-request", lambda kw: (200, {"success": True}))
    hostel_flow.attendance_history(ctx, 3)
    hostel_flow.attendance_history(ctx, 6)

    result = hostel_flow.submit_absence_request(ctx, "  Going home ", today=date(2024, 3, 5))

    assert result.ok
    assert server.calls[-1][2]["json"] == {"absenceDate": "2024-03-05", "reason": "Going home"}
    assert ctx.cache.get(keys.attendance_history(3)).stale
    assert ctx.cache.get(keys.attendance_history(6)).stale


def test_registration_goes_out_as_multipart(ctx, server):
    server.on("POST", "/api/students/register", lambda kw: (200, {"success": True}))
    values = {
        "formNumber": "F-1", "email": "a@b.in", "password": "secret1", "enrollmentNo": "E1",
        "fullName": "Asha", "phone": "9876543210", "department": "CSE", "batch": "2024",
        "pincode": "411001", "district": "Pune", "tehsil": "Haveli", "guardianPhone": "9123456780",
        "photo": FilePayload("a.png", b"png", "image/png"),
    }

    assert hostel_flow.register_student(ctx, values).ok

    _, _, kwargs = server.calls[-1]
    assert kwargs["files"] == {"photo": ("a.png", b"png", "image/png")}
    assert kwargs["data"]["fullName"] == "Asha"
    assert "photo" not in kwargs["data"]


def test_payment_and_monitor_refresh_student_lists(ctx, server):
    server.on("GET", "/api/admin/students", lambda kw: (200, {"success": True, "data": []}))
    server.on("POST", "/api/admin/payments", lambda kw: (200, {"success": True}))
    server.on("POST", "/api/admin/monitor/4", lambda kw: (200, {"success": True}))
    hostel_flow.admin_students(ctx)
    hostel_flow.payment_students(ctx)

    assert hostel_flow.record_payment(ctx, {"studentId": "4", "amount": "1500", "method": "ONLINE", "transactionId": " UTR1 "}).ok
    assert server.calls[-1][2]["json"] == {"studentId": 4, "amount": 1500.0, "method": "ONLINE", "transactionId": "UTR1"}
    assert ctx.cache.get(keys.ADMIN_STUDENTS).stale
    assert ctx.cache.get(keys.STUDENTS).stale

    hostel_flow.admin_students(ctx)
    assert hostel_flow.assign_monitor(ctx, 4).ok
    assert ctx.cache.get(keys.ADMIN_STUDENTS).stale


def test_monitor_queue_invalidates_only_itself(ctx, server):
    server.on("GET", "/api/monitor/absence-requests/early", lambda kw: (200, {"success": True, "data": []}))
    server.on("GET", "/api/warden/absence-requests/late", lambda kw: (200, {"success": True, "data": []}))
    server.on("PUT", "/api/monitor/absence-requests/3/reject", lambda kw: (200, {"success": True}))
    hostel_flow.early_absence_requests(ctx)
    hostel_flow.late_absence_requests(ctx)

    assert hostel_flow.reject_early_absence(ctx, 3, " not valid ").ok

    assert server.calls[-1][2]["params"] == [("reason", "not valid")]
    assert ctx.cache.get(keys.EARLY_ABSENCE_REQUESTS).stale
    assert not ctx.cache.get(keys.LATE_ABSENCE_REQUESTS).stale
