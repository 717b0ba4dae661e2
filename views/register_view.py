import streamlit as st

from use_cases import forms, hostel_flow, routes
from use_cases.validators import FilePayload
from utils import session_manager

FIELD_LABELS = {
    "formNumber": "Form number *",
    "email": "Email *",
    "password": "Password *",
    "enrollmentNo": "Enrollment number *",
    "fullName": "Full name *",
    "phone": "Phone *",
    "department": "Department *",
    "batch": "Batch *",
    "pincode": "Pincode *",
    "district": "District *",
    "tehsil": "Tehsil *",
    "guardianPhone": "Guardian phone *",
    "photo": "Photo (JPEG or PNG, up to 5 MB) *",
}


def _to_payload(uploaded):
    if uploaded is None:
        return None
    return FilePayload(name=uploaded.name, content=uploaded.getvalue(), content_type=uploaded.type or "")


def _render_field(form, name):
    value = form.values.get(name)
    if name == "photo":
        uploaded = st.file_uploader(FIELD_LABELS[name], type=["jpg", "jpeg", "png"], key="reg_photo")
        if uploaded is not None:
            value = _to_payload(uploaded)
        elif isinstance(value, FilePayload):
            st.caption(f"Selected: {value.name}")
    elif name == "password":
        value = st.text_input(FIELD_LABELS[name], value=value or "", type="password", key=f"reg_{name}")
    else:
        value = st.text_input(FIELD_LABELS[name], value=value or "", key=f"reg_{name}")
    if name in form.errors:
        st.caption(f":red[{form.errors[name]}]")
    return value


def render_register(ctx):
    st.title("📝 Student Registration")
    form = session_manager.get_form(
        "registration",
        lambda: forms.registration_form(lambda values: hostel_flow.register_student(ctx, values)),
    )

    st.progress(form.progress / 100, text=f"Step {form.current_step + 1} of {form.total_steps}: {form.step.title}")

    collected = {name: _render_field(form, name) for name in form.step.fields}
    form.update(collected)

    col_back, col_next = st.columns(2)
    if form.current_step > 0 and col_back.button("← Back", use_container_width=True):
        form.prev()
        st.rerun()

    if not form.is_last_step:
        if col_next.button("Next →", type="primary", use_container_width=True):
            form.next()
            st.rerun()
    elif col_next.button("Submit registration", type="primary", use_container_width=True):
        outcome = form.submit()
        if outcome.ok:
            session_manager.drop_form("registration")
            session_manager.go(
                routes.LOGIN_PATH,
                flash=("success", "Registration submitted. You can sign in once the admin approves it."),
            )
        elif outcome.status == "FAILED":
            st.error(outcome.result.message("Registration failed"))
        else:
            # Jump back to the first step holding an error.
            form.current_step = next(
                i for i, step in enumerate(form.steps) if any(name in outcome.errors for name in step.fields)
            )
            st.rerun()

    st.divider()
    if st.button("Already registered? Sign in"):
        session_manager.go(routes.LOGIN_PATH)
