import streamlit as st

import ui
from use_cases import forms, hostel_flow
from use_cases.domain_models import PAYMENT_METHODS
from utils import session_manager


def _render_reason_box(form_name, label, message, handler, button="Confirm"):
    """Inline reason prompt shared by reject and delete actions."""
    form = session_manager.get_form(form_name, lambda: forms.reason_form(handler, message))
    reason = st.text_input(label, value=form.values.get("reason", ""), key=f"{form_name}_input")
    ui.render_field_error(form.errors, "reason")
    if st.button(button, key=f"{form_name}_btn"):
        form.set_value("reason", reason)
        return form.submit()
    return None


# --- registrations ---

def _render_registration(ctx, request):
    with st.expander(f"{request.full_name} · {request.enrollment_no} · form {request.form_number}"):
        st.markdown(ui.status_badge(request.status), unsafe_allow_html=True)
        left, right = st.columns([2, 1])
        with left:
            st.write(f"**Email:** {request.email}")
            st.write(f"**Phone:** {request.phone}  |  **Guardian:** {request.guardian_phone}")
            st.write(f"**Department:** {request.department}  |  **Batch:** {request.batch}")
            st.write(f"**Address:** {request.tehsil}, {request.district} - {request.pincode}")
            if request.created_at:
                st.caption(f"Submitted {request.created_at}")
        with right:
            if request.photo_url:
                filename = request.photo_url.rsplit("/", 1)[-1]
                photo = hostel_flow.student_photo(ctx, filename)
                if photo.is_success:
                    st.image(photo.data, width=140)
                else:
                    st.caption("Photo unavailable")

        if request.status != "PENDING":
            if request.comments:
                st.caption(f"Comments: {request.comments}")
            return

        if st.button("✅ Approve", key=f"approve_reg_{request.request_id}", type="primary"):
            result = hostel_flow.approve_registration(ctx, request.request_id)
            if result.ok:
                session_manager.go(st.session_state.current_path, flash=("success", "Registration approved"))
            else:
                st.error(result.message("Failed to approve registration"))

        outcome = _render_reason_box(
            f"reject_reg_{request.request_id}",
            "Rejection comments",
            "Please provide rejection reason",
            lambda values: hostel_flow.reject_registration(ctx, request.request_id, values["reason"]),
            button="❌ Reject",
        )
        if outcome is not None:
            if outcome.ok:
                session_manager.drop_form(f"reject_reg_{request.request_id}")
                st.rerun()
            elif outcome.status == "FAILED":
                st.error(outcome.result.message("Failed to reject registration"))
            else:
                st.rerun()


def render_registrations(ctx):
    st.header("🧾 Registration Requests")
    ui.show_flash()
    entry = hostel_flow.registration_requests(ctx)
    if not ui.render_query_state(entry, "Failed to load registration requests", "No registration requests."):
        return

    requests_ = entry.data
    status_filter = st.radio("Show", ["PENDING", "APPROVED", "REJECTED", "ALL"], horizontal=True)
    shown = [r for r in requests_ if status_filter == "ALL" or r.status == status_filter]
    st.caption(f"{len(shown)} of {len(requests_)} requests")
    for request in shown:
        _render_registration(ctx, request)


# --- form numbers ---

def render_form_numbers(ctx):
    st.header("🔢 Form Numbers")
    st.caption("Register the paper form numbers students may use. One number per line.")
    ui.show_flash()

    form = session_manager.get_form(
        "form_numbers",
        lambda: forms.form_numbers_form(lambda values: hostel_flow.add_form_numbers(ctx, values["formNumbers"])),
    )
    with st.form("form_numbers_form"):
        text = st.text_area("Form numbers", value=form.values.get("formNumbers", ""), height=180)
        ui.render_field_error(form.errors, "formNumbers")
        submitted = st.form_submit_button("Add form numbers", type="primary")

    if submitted:
        form.set_value("formNumbers", text)
        count = len(forms.parse_form_numbers(text))
        outcome = form.submit()
        if outcome.ok:
            session_manager.go(st.session_state.current_path, flash=("success", f"Added {count} form numbers"))
        elif outcome.status == "FAILED":
            st.error(outcome.result.message("Failed to add form numbers"))
        else:
            st.rerun()


# --- students ---

STUDENT_COLUMNS = {
    "enrollment_no": "Enrollment",
    "full_name": "Name",
    "email": "Email",
    "department": "Department",
    "batch": "Batch",
    "is_monitor": "Monitor",
    "current_balance": "Balance",
}


def render_students(ctx):
    st.header("👥 Students")
    ui.show_flash()
    entry = hostel_flow.admin_students(ctx)
    if not ui.render_query_state(entry, "Failed to load students", "No students yet."):
        return

    students = entry.data
    term = st.text_input("Search", placeholder="Name, enrollment number or email")
    shown = [s for s in students if s.matches(term)]
    ui.render_table(shown, STUDENT_COLUMNS, empty_message="No students match the search.")

    if not shown:
        return
    st.subheader("Manage student")
    student = st.selectbox(
        "Student",
        shown,
        format_func=lambda s: f"{s.full_name} ({s.enrollment_no})",
    )

    col_monitor, col_delete = st.columns(2)
    with col_monitor:
        st.write("**Hostel monitor**")
        if student.is_monitor:
            st.caption("Already the monitor")
        elif st.button("🎖️ Make monitor", key=f"monitor_{student.student_id}"):
            result = hostel_flow.assign_monitor(ctx, student.student_id)
            if result.ok:
                session_manager.go(
                    st.session_state.current_path,
                    flash=("success", f"{student.full_name} is now the monitor"),
                )
            else:
                st.error(result.message("Failed to assign monitor"))

    with col_delete:
        st.write("**Request deletion**")
        form_name = f"delete_{student.student_id}"
        outcome = _render_reason_box(
            form_name,
            "Reason",
            "Please provide a reason for deletion",
            lambda values: hostel_flow.request_deletion(ctx, student.student_id, values["reason"]),
            button="🗑️ Send to warden",
        )
        if outcome is not None:
            if outcome.ok:
                session_manager.drop_form(form_name)
                session_manager.go(
                    st.session_state.current_path,
                    flash=("success", "Deletion request sent to the warden"),
                )
            elif outcome.status == "FAILED":
                st.error(outcome.result.message("Failed to request deletion"))
            else:
                st.rerun()


# --- payments ---

def render_payments(ctx):
    st.header("💳 Record Payment")
    ui.show_flash()
    entry = hostel_flow.payment_students(ctx)
    if not ui.render_query_state(entry, "Failed to load students", "No students to record payments for."):
        return

    form = session_manager.get_form("payment", lambda: forms.payment_form(lambda values: hostel_flow.record_payment(ctx, values)))
    term = st.text_input("Find student", placeholder="Name, enrollment number or email")
    candidates = [s for s in entry.data if s.matches(term)]
    if not candidates:
        st.info("No students match the search.")
        return

    with st.form("payment_form"):
        student = st.selectbox(
            "Student",
            candidates,
            format_func=lambda s: f"{s.full_name} ({s.enrollment_no}) · balance ₹{s.current_balance:,.2f}",
        )
        ui.render_field_error(form.errors, "studentId")
        amount = st.number_input("Amount (₹)", min_value=0.0, step=100.0, value=float(form.values.get("amount") or 0.0))
        ui.render_field_error(form.errors, "amount")
        method = st.selectbox(
            "Method",
            PAYMENT_METHODS,
            index=PAYMENT_METHODS.index(form.values.get("method") or "CASH"),
        )
        transaction_id = st.text_input("Transaction ID (online payments)", value=form.values.get("transactionId") or "")
        ui.render_field_error(form.errors, "transactionId")
        submitted = st.form_submit_button("Record payment", type="primary")

    if submitted:
        form.update({
            "studentId": student.student_id if student else None,
            "amount": amount,
            "method": method,
            "transactionId": transaction_id,
        })
        outcome = form.submit()
        if outcome.ok:
            session_manager.go(
                st.session_state.current_path,
                flash=("success", f"Recorded ₹{amount:,.2f} for {student.full_name}"),
            )
        elif outcome.status == "FAILED":
            st.error(outcome.result.message("Failed to record payment"))
        else:
            st.rerun()


# --- expenses ---

def render_expenses(ctx):
    st.header("🧮 Monthly Expenses")
    st.caption("The server splits the total across students by attendance.")
    ui.show_flash()

    form = session_manager.get_form("expense", lambda: forms.expense_form(lambda values: hostel_flow.enter_expense(ctx, values)))
    with st.form("expense_form"):
        month_year = st.text_input("Month (YYYY-MM)", value=form.values.get("monthYear") or "", placeholder="2024-01")
        ui.render_field_error(form.errors, "monthYear")
        total = st.number_input("Total amount (₹)", min_value=0.0, step=500.0, value=float(form.values.get("totalAmount") or 0.0))
        ui.render_field_error(form.errors, "totalAmount")
        submitted = st.form_submit_button("Save expense", type="primary")

    if submitted:
        form.update({"monthYear": month_year.strip(), "totalAmount": total})
        outcome = form.submit()
        if outcome.ok:
            session_manager.go(st.session_state.current_path, flash=("success", f"Expense for {month_year} saved"))
        elif outcome.status == "FAILED":
            st.error(outcome.result.message("Failed to save expense"))
        else:
            st.rerun()
