import streamlit as st

import ui
from use_cases import hostel_flow
from use_cases.session_models import Role, is_admin, is_monitor
from views import student_view


def _pending(entry):
    if not entry.is_success:
        return "-"
    return sum(1 for r in entry.data if r.status == "PENDING")


def _render_admin(ctx):
    registrations = hostel_flow.registration_requests(ctx)
    students = hostel_flow.admin_students(ctx)
    c1, c2, c3 = st.columns(3)
    c1.metric("Pending registrations", _pending(registrations))
    c2.metric("Students", len(students.data) if students.is_success else "-")
    monitors = [s.full_name for s in students.data or [] if s.is_monitor]
    c3.metric("Monitor", monitors[0] if monitors else "None")
    for entry, message in ((registrations, "Failed to load registration requests"), (students, "Failed to load students")):
        if entry.is_error:
            ui.render_query_state(entry, message)


def _render_warden(ctx):
    deletions = hostel_flow.deletion_requests(ctx)
    late = hostel_flow.late_absence_requests(ctx)
    cutoff = hostel_flow.cutoff_time(ctx)
    c1, c2, c3 = st.columns(3)
    c1.metric("Pending deletions", _pending(deletions))
    c2.metric("Pending late absences", _pending(late))
    c3.metric("Absence cutoff", cutoff.data if cutoff.is_success and cutoff.data else "-")


def render_dashboard(ctx):
    session = ctx.session.snapshot()
    st.title("🏠 Dashboard")
    ui.show_flash()

    if is_admin(session):
        _render_admin(ctx)
    elif session.role is Role.WARDEN:
        _render_warden(ctx)
    else:
        student_view.render_student_dashboard(ctx)
        if is_monitor(session):
            pending = _pending(hostel_flow.early_absence_requests(ctx))
            st.info(f"🎖️ Early absence requests waiting for you: {pending}")
