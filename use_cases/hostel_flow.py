"""Page-level reads and writes: which endpoint, under which cache key, invalidating what.

Every read goes through ``ctx.cache.query`` and every write through
``ctx.cache.mutate`` so the dependency lists live in one place.
"""

from datetime import date
from typing import Any, Dict, Optional

from services import admin_api, monitor_api, student_api, warden_api
from use_cases import forms, query_keys as keys
from use_cases.query_cache import CacheEntry, MutationResult

DEFAULT_HISTORY_MONTHS = 3


# --- public ---

def register_student(ctx, values: Dict[str, Any]) -> MutationResult:
    fields = forms.registration_fields(values)
    photo = values["photo"]
    return ctx.cache.mutate(lambda: student_api.register(ctx.gateway, fields, photo))


# --- student ---

def student_dashboard(ctx) -> CacheEntry:
    return ctx.cache.query(keys.STUDENT_DASHBOARD, lambda: student_api.get_dashboard(ctx.gateway))


def attendance_history(ctx, months: int = DEFAULT_HISTORY_MONTHS) -> CacheEntry:
    return ctx.cache.query(
        keys.attendance_history(months),
        lambda: student_api.get_attendance_history(ctx.gateway, months),
    )


def submit_absence_request(ctx, reason: str, today: Optional[date] = None) -> MutationResult:
    # Requests are always for the current day; the server decides early vs late.
    absence_date = (today or date.today()).isoformat()
    return ctx.cache.mutate(
        lambda: student_api.submit_absence_request(ctx.gateway, absence_date, reason.strip()),
        invalidates=[keys.ATTENDANCE_HISTORY, keys.STUDENT_DASHBOARD],
    )


# --- admin ---

def registration_requests(ctx) -> CacheEntry:
    return ctx.cache.query(keys.REGISTRATION_REQUESTS, lambda: admin_api.get_registration_requests(ctx.gateway))


def approve_registration(ctx, request_id: int) -> MutationResult:
    return ctx.cache.mutate(
        lambda: admin_api.approve_registration(ctx.gateway, request_id),
        invalidates=[keys.REGISTRATION_REQUESTS, keys.ADMIN_STUDENTS, keys.STUDENTS],
    )


def reject_registration(ctx, request_id: int, comments: str) -> MutationResult:
    return ctx.cache.mutate(
        lambda: admin_api.reject_registration(ctx.gateway, request_id, comments.strip()),
        invalidates=[keys.REGISTRATION_REQUESTS],
    )


def add_form_numbers(ctx, text: str) -> MutationResult:
    numbers = forms.parse_form_numbers(text)
    return ctx.cache.mutate(lambda: admin_api.add_form_numbers(ctx.gateway, numbers))


def admin_students(ctx) -> CacheEntry:
    return ctx.cache.query(keys.ADMIN_STUDENTS, lambda: admin_api.get_students(ctx.gateway))


def payment_students(ctx) -> CacheEntry:
    # Filtered locally, so the search box does not refetch on every keystroke.
    return ctx.cache.query(keys.STUDENTS, lambda: admin_api.get_students(ctx.gateway))


def assign_monitor(ctx, student_id: int) -> MutationResult:
    return ctx.cache.mutate(
        lambda: admin_api.assign_monitor(ctx.gateway, student_id),
        invalidates=[keys.ADMIN_STUDENTS, keys.STUDENTS],
    )


def request_deletion(ctx, student_id: int, reason: str) -> MutationResult:
    return ctx.cache.mutate(
        lambda: admin_api.request_deletion(ctx.gateway, student_id, reason.strip()),
        invalidates=[keys.DELETION_REQUESTS],
    )


def record_payment(ctx, values: Dict[str, Any]) -> MutationResult:
    method = values.get("method") or "CASH"
    transaction_id = str(values.get("transactionId") or "").strip() or None
    return ctx.cache.mutate(
        lambda: admin_api.record_payment(
            ctx.gateway,
            int(values["studentId"]),
            float(values["amount"]),
            method,
            transaction_id,
        ),
        invalidates=[keys.ADMIN_STUDENTS, keys.STUDENTS],
    )


def enter_expense(ctx, values: Dict[str, Any]) -> MutationResult:
    return ctx.cache.mutate(
        lambda: admin_api.enter_expense(ctx.gateway, values["monthYear"], float(values["totalAmount"])),
        invalidates=[keys.EXPENSES, keys.ADMIN_STUDENTS, keys.STUDENTS],
    )


def student_photo(ctx, filename: str) -> CacheEntry:
    return ctx.cache.query(keys.student_photo(filename), lambda: admin_api.get_student_photo(ctx.gateway, filename))


# --- warden ---

def deletion_requests(ctx) -> CacheEntry:
    return ctx.cache.query(keys.DELETION_REQUESTS, lambda: warden_api.get_deletion_requests(ctx.gateway))


def approve_deletion(ctx, request_id: int) -> MutationResult:
    return ctx.cache.mutate(
        lambda: warden_api.approve_deletion(ctx.gateway, request_id),
        invalidates=[keys.DELETION_REQUESTS, keys.ADMIN_STUDENTS, keys.STUDENTS],
    )


def reject_deletion(ctx, request_id: int, reason: str) -> MutationResult:
    return ctx.cache.mutate(
        lambda: warden_api.reject_deletion(ctx.gateway, request_id, reason.strip()),
        invalidates=[keys.DELETION_REQUESTS],
    )


def late_absence_requests(ctx) -> CacheEntry:
    return ctx.cache.query(keys.LATE_ABSENCE_REQUESTS, lambda: warden_api.get_late_absence_requests(ctx.gateway))


def approve_late_absence(ctx, request_id: int, comments: Optional[str] = None) -> MutationResult:
    return ctx.cache.mutate(
        lambda: warden_api.approve_absence_request(ctx.gateway, request_id, (comments or "").strip() or None),
        invalidates=[keys.LATE_ABSENCE_REQUESTS],
    )


def reject_late_absence(ctx, request_id: int, reason: str) -> MutationResult:
    return ctx.cache.mutate(
        lambda: warden_api.reject_absence_request(ctx.gateway, request_id, reason.strip()),
        invalidates=[keys.LATE_ABSENCE_REQUESTS],
    )


def cutoff_time(ctx) -> CacheEntry:
    return ctx.cache.query(keys.CUTOFF_TIME, lambda: warden_api.get_cutoff_time(ctx.gateway))


def all_settings(ctx) -> CacheEntry:
    return ctx.cache.query(keys.ALL_SETTINGS, lambda: warden_api.get_all_settings(ctx.gateway))


def update_cutoff_time(ctx, values: Dict[str, Any]) -> MutationResult:
    return ctx.cache.mutate(
        lambda: warden_api.update_cutoff_time(ctx.gateway, str(values["cutoffTime"]).strip()),
        invalidates=[keys.CUTOFF_TIME, keys.ALL_SETTINGS],
    )


def expenses(ctx) -> CacheEntry:
    return ctx.cache.query(keys.EXPENSES, lambda: warden_api.get_expenses(ctx.gateway))


def expense_breakdown(ctx, month_year: str) -> CacheEntry:
    return ctx.cache.query(
        keys.EXPENSES + (month_year,),
        lambda: warden_api.get_expenses_by_month(ctx.gateway, month_year),
    )


# --- monitor ---

def early_absence_requests(ctx) -> CacheEntry:
    return ctx.cache.query(keys.EARLY_ABSENCE_REQUESTS, lambda: monitor_api.get_early_absence_requests(ctx.gateway))


def approve_early_absence(ctx, request_id: int, comments: Optional[str] = None) -> MutationResult:
    return ctx.cache.mutate(
        lambda: monitor_api.approve_absence_request(ctx.gateway, request_id, (comments or "").strip() or None),
        invalidates=[keys.EARLY_ABSENCE_REQUESTS],
    )


def reject_early_absence(ctx, request_id: int, reason: str) -> MutationResult:
    return ctx.cache.mutate(
        lambda: monitor_api.reject_absence_request(ctx.gateway, request_id, reason.strip()),
        invalidates=[keys.EARLY_ABSENCE_REQUESTS],
    )
