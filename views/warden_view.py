import pandas as pd
import streamlit as st

import ui
from use_cases import forms, hostel_flow
from utils import session_manager


def _handle_reason_outcome(outcome, form_name, success_message, error_message):
    if outcome is None:
        return
    if outcome.ok:
        session_manager.drop_form(form_name)
        session_manager.go(st.session_state.current_path, flash=("success", success_message))
    elif outcome.status == "FAILED":
        st.error(outcome.result.message(error_message))
    else:
        st.rerun()


def _reason_prompt(form_name, label, handler, message="Please provide rejection reason"):
    form = session_manager.get_form(form_name, lambda: forms.reason_form(handler, message))
    reason = st.text_input(label, value=form.values.get("reason", ""), key=f"{form_name}_input")
    ui.render_field_error(form.errors, "reason")
    if st.button("❌ Reject", key=f"{form_name}_btn"):
        form.set_value("reason", reason)
        return form.submit()
    return None


# --- deletion requests ---

def render_deletions(ctx):
    st.header("🗑️ Deletion Requests")
    ui.show_flash()
    entry = hostel_flow.deletion_requests(ctx)
    if not ui.render_query_state(entry, "Failed to load deletion requests", "No deletion requests."):
        return

    for request in entry.data:
        with st.expander(f"{request.student_name} ({request.enrollment_no})", expanded=request.status == "PENDING"):
            st.markdown(ui.status_badge(request.status), unsafe_allow_html=True)
            st.write(f"**Requested by:** {request.requested_by or '-'}")
            st.write(f"**Reason:** {request.reason}")
            if request.created_at:
                st.caption(f"Requested {request.created_at}")
            if request.status != "PENDING":
                continue

            if st.button("✅ Approve deletion", key=f"approve_del_{request.request_id}", type="primary"):
                result = hostel_flow.approve_deletion(ctx, request.request_id)
                if result.ok:
                    session_manager.go(st.session_state.current_path, flash=("success", "Student deleted"))
                else:
                    st.error(result.message("Failed to approve deletion"))

            form_name = f"reject_del_{request.request_id}"
            outcome = _reason_prompt(
                form_name,
                "Rejection reason",
                lambda values, request_id=request.request_id: hostel_flow.reject_deletion(ctx, request_id, values["reason"]),
            )
            _handle_reason_outcome(outcome, form_name, "Deletion request rejected", "Failed to reject deletion")


# --- late absence requests ---

def render_absence_queue(ctx, entry, approve, reject, scope):
    """Shared by the warden (late) and monitor (early) queues."""
    if not ui.render_query_state(entry, "Failed to load absence requests", f"No {scope} absence requests."):
        return

    pending = [r for r in entry.data if r.status == "PENDING"]
    st.caption(f"{len(pending)} pending of {len(entry.data)}")
    for request in entry.data:
        title = f"{request.student_name} ({request.enrollment_no}) · {request.absence_date}"
        with st.expander(title, expanded=request.status == "PENDING"):
            st.markdown(ui.status_badge(request.status), unsafe_allow_html=True)
            st.write(f"**Reason:** {request.reason}")
            if request.submitted_at:
                st.caption(f"Submitted {request.submitted_at}")
            if request.status != "PENDING":
                if request.comments:
                    st.caption(f"Comments: {request.comments}")
                continue

            comments = st.text_input("Comments (optional)", key=f"{scope}_comments_{request.request_id}")
            if st.button("✅ Approve", key=f"{scope}_approve_{request.request_id}", type="primary"):
                result = approve(ctx, request.request_id, comments)
                if result.ok:
                    session_manager.go(st.session_state.current_path, flash=("success", "Absence request approved"))
                else:
                    st.error(result.message("Failed to approve absence request"))

            form_name = f"{scope}_reject_{request.request_id}"
            outcome = _reason_prompt(
                form_name,
                "Rejection reason",
                lambda values, request_id=request.request_id: reject(ctx, request_id, values["reason"]),
            )
            _handle_reason_outcome(outcome, form_name, "Absence request rejected", "Failed to reject absence request")


def render_late_absences(ctx):
    st.header("⏰ Late Absence Requests")
    st.caption("Requests submitted after the cutoff time.")
    ui.show_flash()
    render_absence_queue(
        ctx,
        hostel_flow.late_absence_requests(ctx),
        hostel_flow.approve_late_absence,
        hostel_flow.reject_late_absence,
        "late",
    )


# --- settings ---

def _render_expenses(ctx):
    st.subheader("Monthly expenses")
    entry = hostel_flow.expenses(ctx)
    if not ui.render_query_state(entry, "Failed to load expenses", "No expenses recorded."):
        return
    ui.render_table(entry.data, {"month_year": "Month", "total_amount": "Total", "created_at": "Entered"})

    month = st.selectbox("Breakdown for", [e.month_year for e in entry.data])
    if month:
        breakdown = hostel_flow.expense_breakdown(ctx, month)
        if ui.render_query_state(breakdown, "Failed to load expense breakdown"):
            data = breakdown.data
            if isinstance(data, list):
                st.dataframe(pd.DataFrame(data), use_container_width=True, hide_index=True)
            else:
                st.json(data)


def render_settings(ctx):
    st.header("⚙️ System Settings")
    ui.show_flash()

    cutoff = hostel_flow.cutoff_time(ctx)
    if ui.render_query_state(cutoff, "Failed to load cutoff time"):
        st.metric("Absence cutoff time", cutoff.data or "-")

    form = session_manager.get_form("cutoff", lambda: forms.cutoff_form(lambda values: hostel_flow.update_cutoff_time(ctx, values)))
    with st.form("cutoff_form"):
        new_cutoff = st.text_input("New cutoff time (HH:mm)", value=form.values.get("cutoffTime") or "", placeholder="22:00")
        ui.render_field_error(form.errors, "cutoffTime")
        submitted = st.form_submit_button("Update cutoff", type="primary")

    if submitted:
        form.set_value("cutoffTime", new_cutoff)
        outcome = form.submit()
        if outcome.ok:
            session_manager.go(st.session_state.current_path, flash=("success", f"Cutoff time set to {new_cutoff.strip()}"))
        elif outcome.status == "FAILED":
            st.error(outcome.result.message("Failed to update cutoff time"))
        else:
            st.rerun()

    st.subheader("All settings")
    settings = hostel_flow.all_settings(ctx)
    if ui.render_query_state(settings, "Failed to load settings", "No settings."):
        ui.render_table(
            settings.data,
            {"key": "Key", "value": "Value", "description": "Description", "updated_by": "Updated by", "updated_at": "Updated at"},
        )

    st.divider()
    _render_expenses(ctx)
