import streamlit as st

import ui
from use_cases import forms, routes
from use_cases.query_cache import MutationResult
from use_cases.session_store import LoginFailed
from utils import session_manager


def _sign_in(ctx, values):
    try:
        result = ctx.navigator.login(values["email"], values["password"])
    except LoginFailed as e:
        return MutationResult(ok=False, error=e)
    return MutationResult(ok=True, data=result)


def render_auth_screen(ctx):
    st.title("🏠 Hostel Management")
    st.caption("Sign in to continue")
    ui.show_flash()

    form = session_manager.get_form("login", lambda: forms.login_form(lambda values: _sign_in(ctx, values)))

    with st.form("login_form", clear_on_submit=False):
        email = st.text_input("Email", value=form.values.get("email", ""))
        if "email" in form.errors:
            st.caption(f":red[{form.errors['email']}]")
        password = st.text_input("Password", type="password")
        if "password" in form.errors:
            st.caption(f":red[{form.errors['password']}]")
        submitted = st.form_submit_button("Sign in", type="primary", use_container_width=True)

    if submitted:
        form.update({"email": email, "password": password})
        outcome = form.submit()
        if outcome.ok:
            session_manager.drop_form("login")
            navigation = outcome.result.data
            session_manager.go(navigation.path, flash=("success", "Signed in"))
        elif outcome.status == "FAILED":
            # LoginFailed carries the server's text, or the generic one.
            st.error(outcome.result.error.message)
        else:
            st.rerun()

    st.divider()
    st.write("New student?")
    if st.button("Register for the hostel"):
        session_manager.go(routes.REGISTER_PATH)
