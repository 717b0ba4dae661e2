import streamlit as st

import ui
from use_cases import forms, hostel_flow
from use_cases.messages import describe_absence_error
from utils import session_manager

HISTORY_PERIODS = {1: "Last month", 3: "Last 3 months", 6: "Last 6 months", 12: "Last 12 months"}


def render_student_dashboard(ctx):
    entry = hostel_flow.student_dashboard(ctx)
    if not ui.render_query_state(entry, "Failed to load dashboard"):
        return
    dashboard = entry.data

    st.subheader(f"Welcome, {dashboard.full_name}")
    if dashboard.is_monitor:
        st.caption("🎖️ You are the hostel monitor")

    c1, c2, c3 = st.columns(3)
    c1.metric("Current balance", f"₹{dashboard.current_balance:,.2f}")
    c2.metric("Pending bill", f"₹{dashboard.pending_bill_amount:,.2f}")
    c3.metric("Net balance", f"₹{dashboard.net_balance:,.2f}")

    c4, c5 = st.columns(2)
    c4.metric("Monthly expenses", f"₹{dashboard.monthly_expenses:,.2f}")
    c5.metric(
        "Attendance this month",
        f"{dashboard.present_days_this_month}/{dashboard.total_days_this_month}",
        f"{dashboard.attendance_percentage:.0f}%",
    )


def render_attendance(ctx):
    st.header("📅 Attendance History")
    months = st.selectbox(
        "Period",
        options=list(HISTORY_PERIODS),
        index=1,
        format_func=HISTORY_PERIODS.get,
    )
    entry = hostel_flow.attendance_history(ctx, months)
    if not ui.render_query_state(entry, "Failed to load attendance history", "No attendance records for this period."):
        return

    records = entry.data
    present = sum(1 for r in records if r.status == "PRESENT")
    c1, c2, c3 = st.columns(3)
    c1.metric("Days recorded", len(records))
    c2.metric("Present", present)
    c3.metric("Absent", len(records) - present)

    ui.render_table(
        records,
        {"date": "Date", "status": "Status", "approved_by": "Approved by", "approved_at": "Approved at"},
    )


def render_absence_request(ctx):
    st.header("🙋 Request Absence")
    st.caption(
        "Requests are for today. Before the cutoff time the hostel monitor reviews them; "
        "after it, the warden does."
    )
    ui.show_flash()

    form = session_manager.get_form(
        "absence",
        lambda: forms.absence_form(lambda values: hostel_flow.submit_absence_request(ctx, values["reason"])),
    )
    with st.form("absence_form", clear_on_submit=False):
        reason = st.text_area("Reason", value=form.values.get("reason", ""))
        ui.render_field_error(form.errors, "reason")
        submitted = st.form_submit_button("Submit request", type="primary")

    if submitted:
        form.set_value("reason", reason)
        outcome = form.submit()
        if outcome.ok:
            session_manager.go(st.session_state.current_path, flash=("success", "Absence request submitted"))
        elif outcome.status == "FAILED":
            st.error(describe_absence_error(outcome.result.error))
        else:
            st.rerun()

    st.divider()
    st.subheader("Recent attendance")
    entry = hostel_flow.attendance_history(ctx, 1)
    if ui.render_query_state(entry, "Failed to load attendance history", "No attendance records yet."):
        ui.render_table(entry.data[:10], {"date": "Date", "status": "Status"})
