"""Read-only views of the records the hostel API returns.

The client renders these and never recomputes server-derived fields
(bill proration, early/late classification, balances).
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional

RequestStatus = Literal["PENDING", "APPROVED", "REJECTED"]
AttendanceStatus = Literal["PRESENT", "ABSENT"]
PaymentMethod = Literal["CASH", "ONLINE", "CHEQUE"]
PAYMENT_METHODS = ("CASH", "ONLINE", "CHEQUE")


def _nested(payload: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = payload.get(key)
    return value if isinstance(value, dict) else {}


def _float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class LoginResult:
    token: str
    email: str
    role: str
    is_monitor: bool = False
    full_name: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "LoginResult":
        return cls(
            token=payload["token"],
            email=payload.get("email", ""),
            role=payload.get("role", ""),
            is_monitor=bool(payload.get("isMonitor", False)),
            full_name=payload.get("fullName"),
        )


@dataclass(frozen=True)
class StudentDashboard:
    full_name: str
    current_balance: float
    pending_bill_amount: float
    net_balance: float
    monthly_expenses: float
    present_days_this_month: int
    total_days_this_month: int
    is_monitor: bool

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "StudentDashboard":
        return cls(
            full_name=payload.get("fullName", ""),
            current_balance=_float(payload.get("currentBalance")),
            pending_bill_amount=_float(payload.get("pendingBillAmount")),
            net_balance=_float(payload.get("netBalance")),
            monthly_expenses=_float(payload.get("monthlyExpenses")),
            present_days_this_month=int(payload.get("presentDaysThisMonth") or 0),
            total_days_this_month=int(payload.get("totalDaysThisMonth") or 0),
            is_monitor=bool(payload.get("isMonitor", False)),
        )

    @property
    def attendance_percentage(self) -> float:
        if not self.total_days_this_month:
            return 0.0
        return self.present_days_this_month / self.total_days_this_month * 100


@dataclass(frozen=True)
class AttendanceRecord:
    attendance_id: int
    date: str
    status: AttendanceStatus
    approved_by: Optional[str] = None
    approved_at: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "AttendanceRecord":
        return cls(
            attendance_id=int(payload.get("attendanceId") or 0),
            date=payload.get("date", ""),
            status=payload.get("status", "ABSENT"),
            approved_by=_nested(payload, "approvedBy").get("email"),
            approved_at=payload.get("approvedAt"),
        )


@dataclass(frozen=True)
class AbsenceRequest:
    request_id: int
    student_id: int
    student_name: str
    enrollment_no: str
    absence_date: str
    reason: str
    status: RequestStatus
    is_late_request: bool
    submitted_at: Optional[str] = None
    comments: Optional[str] = None
    approved_by: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "AbsenceRequest":
        student = _nested(payload, "student")
        return cls(
            request_id=int(payload.get("requestId") or 0),
            student_id=int(student.get("studentId") or 0),
            student_name=student.get("fullName", ""),
            enrollment_no=student.get("enrollmentNo", ""),
            absence_date=payload.get("absenceDate", ""),
            reason=payload.get("reason", ""),
            status=payload.get("status", "PENDING"),
            is_late_request=bool(payload.get("isLateRequest", False)),
            submitted_at=payload.get("submittedAt"),
            comments=payload.get("comments"),
            approved_by=_nested(payload, "approvedBy").get("email"),
        )


@dataclass(frozen=True)
class RegistrationRequest:
    request_id: int
    form_number: str
    email: str
    enrollment_no: str
    full_name: str
    phone: str
    department: str
    batch: str
    district: str
    tehsil: str
    pincode: str
    guardian_phone: str
    photo_url: Optional[str]
    status: RequestStatus
    comments: Optional[str] = None
    reviewed_by: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "RegistrationRequest":
        return cls(
            request_id=int(payload.get("requestId") or 0),
            form_number=payload.get("formNumber", ""),
            email=payload.get("email", ""),
            enrollment_no=payload.get("enrollmentNo", ""),
            full_name=payload.get("fullName", ""),
            phone=payload.get("phone", ""),
            department=payload.get("department", ""),
            batch=payload.get("batch", ""),
            district=payload.get("district", ""),
            tehsil=payload.get("tehsil", ""),
            pincode=payload.get("pincode", ""),
            guardian_phone=payload.get("guardianPhone", ""),
            photo_url=payload.get("photoUrl"),
            status=payload.get("status", "PENDING"),
            comments=payload.get("comments"),
            reviewed_by=payload.get("reviewedBy"),
            created_at=payload.get("createdAt"),
        )


@dataclass(frozen=True)
class StudentSummary:
    student_id: int
    enrollment_no: str
    full_name: str
    email: str
    phone: str
    department: str
    batch: str
    district: str
    is_monitor: bool
    current_balance: float

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "StudentSummary":
        return cls(
            student_id=int(payload.get("studentId") or 0),
            enrollment_no=payload.get("enrollmentNo", ""),
            full_name=payload.get("fullName", ""),
            email=payload.get("email", ""),
            phone=payload.get("phone", ""),
            department=payload.get("department", ""),
            batch=payload.get("batch", ""),
            district=payload.get("district", ""),
            is_monitor=bool(payload.get("isMonitor", False)),
            current_balance=_float(payload.get("currentBalance")),
        )

    def matches(self, term: str) -> bool:
        term = term.strip().lower()
        if not term:
            return True
        return (
            term in self.full_name.lower()
            or term in self.enrollment_no.lower()
            or term in self.email.lower()
        )


@dataclass(frozen=True)
class DeletionRequest:
    request_id: int
    student_id: int
    student_name: str
    enrollment_no: str
    requested_by: str
    reason: str
    status: RequestStatus
    created_at: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "DeletionRequest":
        student = _nested(payload, "student")
        return cls(
            request_id=int(payload.get("requestId") or 0),
            student_id=int(student.get("studentId") or 0),
            student_name=student.get("fullName", ""),
            enrollment_no=student.get("enrollmentNo", ""),
            requested_by=_nested(payload, "requestedBy").get("email", ""),
            reason=payload.get("reason", ""),
            status=payload.get("status", "PENDING"),
            created_at=payload.get("createdAt"),
        )


@dataclass(frozen=True)
class SystemSetting:
    setting_id: int
    key: str
    value: str
    description: str = ""
    updated_by: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "SystemSetting":
        return cls(
            setting_id=int(payload.get("settingId") or 0),
            key=payload.get("settingKey", ""),
            value=payload.get("settingValue", ""),
            description=payload.get("description") or "",
            updated_by=payload.get("updatedBy"),
            updated_at=payload.get("updatedAt"),
        )


@dataclass(frozen=True)
class MonthlyExpense:
    expense_id: int
    month_year: str
    total_amount: float
    created_at: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "MonthlyExpense":
        return cls(
            expense_id=int(payload.get("expenseId") or 0),
            month_year=payload.get("monthYear", ""),
            total_amount=_float(payload.get("totalAmount")),
            created_at=payload.get("createdAt"),
        )


def parse_list(model, data: Any) -> List[Any]:
    """Parse a list payload with ``model.from_api``; a missing list is empty."""
    if not data:
        return []
    return [model.from_api(item) for item in data]
