import logging
from typing import Callable, Optional

import streamlit as st

from use_cases import bootstrap, routes
from use_cases.auth_flow import NavigationResult
from use_cases.form_pipeline import MultiStepForm

"""
SESSION STATE CONTRACT

Streamlit keeps one st.session_state per browser tab. The hostel session
itself lives in the durable store, so a fresh tab restores the last login.

Keys of st.session_state:

hostel_ctx: AppContext | None
    gateway, session store, query cache and navigator of this tab
    default: None
    owner: session_manager

current_path: str
    route the tab is showing
    default: "/"
    owner: session_manager

forms: dict[str, MultiStepForm]
    in-progress forms, kept across reruns
    default: {}
    owner: views

flash: tuple[str, str] | None
    (level, message) shown once on the next render
    default: None
    owner: ui
"""

log = logging.getLogger(__name__)

PAGE_PARAM = "page"


def init_session_state():
    if "hostel_ctx" not in st.session_state:
        st.session_state.hostel_ctx = None
    if "current_path" not in st.session_state:
        st.session_state.current_path = st.query_params.get(PAGE_PARAM, routes.HOME_PATH)
    if "forms" not in st.session_state:
        st.session_state.forms = {}
    if "flash" not in st.session_state:
        st.session_state.flash = None


def get_context() -> bootstrap.AppContext:
    """Context of this tab, created and hydrated on first use."""
    init_session_state()
    if st.session_state.hostel_ctx is None:
        result = bootstrap.run_startup()
        log.debug(f"Startup steps: {result.planned_steps}")
        if result.status == "STOP":
            st.stop()
        st.session_state.hostel_ctx = result.context
    return st.session_state.hostel_ctx


def get_form(name: str, factory: Callable[[], MultiStepForm]) -> MultiStepForm:
    forms = st.session_state.forms
    if name not in forms:
        forms[name] = factory()
    return forms[name]


def drop_form(name: str) -> None:
    st.session_state.forms.pop(name, None)


def set_path(path: str) -> None:
    st.session_state.current_path = path
    st.query_params[PAGE_PARAM] = path


def resolve_current() -> NavigationResult:
    """Run the gate for the current path and follow any redirect."""
    ctx = get_context()
    result = ctx.navigator.navigate(st.session_state.current_path)
    if result.path == routes.HOME_PATH or (result.path == routes.LOGIN_PATH and ctx.session.is_authenticated):
        target = routes.DASHBOARD_PATH if ctx.session.is_authenticated else routes.LOGIN_PATH
        result = ctx.navigator.navigate(target)
    if result.path != st.session_state.current_path:
        set_path(result.path)
    return result


def go(path: str, flash: Optional[tuple] = None) -> None:
    if flash:
        st.session_state.flash = flash
    set_path(path)
    st.rerun()


def logout():
    ctx = get_context()
    ctx.session.logout()
    st.session_state.forms = {}
    go(routes.LOGIN_PATH)
