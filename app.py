from datetime import datetime

import streamlit as st

from infrastructure.observability import setup_observability
import ui
from use_cases import routes
from use_cases.rbac_policy import AccessDecision, evaluate_access
from use_cases.session_models import is_monitor
from utils import session_manager
from views import (
    admin_view, dashboard_view, login_view, monitor_view,
    register_view, student_view, system_view, warden_view,
)

PAGES = {
    routes.LOGIN_PATH: login_view.render_auth_screen,
    routes.REGISTER_PATH: register_view.render_register,
    routes.UNAUTHORIZED_PATH: system_view.render_unauthorized,
    routes.NOT_FOUND_PATH: system_view.render_not_found,
    routes.DASHBOARD_PATH: dashboard_view.render_dashboard,
    "/app/admin/registrations": admin_view.render_registrations,
    "/app/admin/form-numbers": admin_view.render_form_numbers,
    "/app/admin/students": admin_view.render_students,
    "/app/admin/payments": admin_view.render_payments,
    "/app/admin/expenses": admin_view.render_expenses,
    "/app/warden/deletions": warden_view.render_deletions,
    "/app/warden/absence-requests": warden_view.render_late_absences,
    "/app/warden/settings": warden_view.render_settings,
    "/app/student/attendance": student_view.render_attendance,
    "/app/student/absence-requests": student_view.render_absence_request,
    "/app/monitor/absence-requests": monitor_view.render_early_absences,
}


def visible_routes(session):
    """Protected routes the current session may open, in table order."""
    return [
        route for route in routes.protected_routes()
        if evaluate_access(session, route.required_role, route.requires_monitor) is AccessDecision.ALLOW
    ]


def render_sidebar(ctx, current_path):
    session = ctx.session.snapshot()
    with st.sidebar:
        st.markdown("### 🏠 Hostel")
        st.caption(f"{session.user.full_name or session.user.email}")
        section = routes.ROLE_SECTIONS[session.role]
        if is_monitor(session):
            section = f"{section} · Monitor"
        st.caption(section)
        st.divider()

        for route in visible_routes(session):
            kind = "primary" if route.path == current_path else "secondary"
            if st.button(route.title, key=f"nav_{route.path}", type=kind, use_container_width=True):
                session_manager.go(route.path)

        st.divider()
        if st.button("Sign out", key="logout_btn", type="secondary", use_container_width=True):
            session_manager.logout()


def main():
    setup_observability()
    st.set_page_config(page_title="Hostel Management", page_icon="🏠", layout="wide")

    # Health Check (Basic load-balancer heartbeat)
    if st.query_params.get("health") == "1":
        st.write({"status": "ok", "version": "1.0", "uptime": datetime.utcnow().isoformat()})
        st.stop()

    ui.setup_style()

    ctx = session_manager.get_context()
    navigation = session_manager.resolve_current()

    if ctx.session.is_authenticated and navigation.path not in (routes.LOGIN_PATH, routes.REGISTER_PATH):
        render_sidebar(ctx, navigation.path)

    PAGES[navigation.path](ctx)


if __name__ == "__main__":
    main()
