import streamlit as st

from use_cases import routes
from utils import session_manager


def render_unauthorized(ctx):
    st.title("🚫 Access denied")
    st.write("You don't have permission to open this page.")
    if st.button("Back to dashboard", type="primary"):
        session_manager.go(routes.DASHBOARD_PATH)


def render_not_found(ctx):
    st.title("🔎 Page not found")
    st.write("The page you asked for does not exist.")
    target = routes.DASHBOARD_PATH if ctx.session.is_authenticated else routes.LOGIN_PATH
    if st.button("Go home", type="primary"):
        session_manager.go(target)
