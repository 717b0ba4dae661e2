from unittest.mock import MagicMock, patch

import pytest
import streamlit as st

from infrastructure.config import Settings
from infrastructure.storage.session_storage import MemorySessionStorage
from use_cases import bootstrap, routes
from use_cases.domain_models import LoginResult
from use_cases.form_pipeline import MultiStepForm
from utils import session_manager


@pytest.fixture
def query_params():
    params = {}
    with patch.object(session_manager.st, "query_params", params):
        yield params


@pytest.fixture
def ctx(query_params):
    context = bootstrap.build_context(
        Settings(api_base_url="http://hostel.test"),
        storage=MemorySessionStorage(),
        http=MagicMock(),
    )
    st.session_state.clear()
    session_manager.init_session_state()
    st.session_state.hostel_ctx = context
    return context


def sign_in(ctx, role="STUDENT", is_monitor=False):
    ctx.session._authenticate = lambda email, password: LoginResult("jwt", email, role, is_monitor)
    ctx.session.login("u@hostel.in", "pw")


def test_init_session_state(query_params):
    st.session_state.clear()
    session_manager.init_session_state()
    assert st.session_state.hostel_ctx is None
    assert st.session_state.current_path == routes.HOME_PATH
    assert st.session_state.forms == {}
    assert st.session_state.flash is None


def test_current_path_comes_from_query_params(query_params):
    query_params["page"] = "/app/student/attendance"
    st.session_state.clear()
    session_manager.init_session_state()
    assert st.session_state.current_path == "/app/student/attendance"


def test_get_context_runs_startup_once(query_params):
    st.session_state.clear()
    fake = bootstrap.StartupResult(status="CONTINUE", planned_steps=(), context=MagicMock())
    with patch("utils.session_manager.bootstrap.run_startup", return_value=fake) as mock_startup:
        first = session_manager.get_context()
        second = session_manager.get_context()

    assert first is second is fake.context
    mock_startup.assert_called_once()


def test_home_redirects_to_login_when_signed_out(ctx, query_params):
    result = session_manager.resolve_current()

    assert result.path == routes.LOGIN_PATH
    assert st.session_state.current_path == routes.LOGIN_PATH
    assert query_params["page"] == routes.LOGIN_PATH


def test_home_and_login_redirect_to_dashboard_when_signed_in(ctx, query_params):
    sign_in(ctx)
    assert session_manager.resolve_current().path == routes.DASHBOARD_PATH

    st.session_state.current_path = routes.LOGIN_PATH
    assert session_manager.resolve_current().path == routes.DASHBOARD_PATH


def test_protected_path_remembers_destination(ctx, query_params):
    st.session_state.current_path = "/app/warden/settings"

    result = session_manager.resolve_current()

    assert result.path == routes.LOGIN_PATH
    assert ctx.navigator.pending_destination == "/app/warden/settings"


def test_get_form_keeps_instance_across_reruns(ctx):
    factory = MagicMock(side_effect=lambda: MultiStepForm({"x": []}))
    first = session_manager.get_form("f", factory)
    second = session_manager.get_form("f", factory)
    session_manager.drop_form("f")

    assert first is second
    assert factory.call_count == 1
    assert "f" not in st.session_state.forms


@patch("streamlit.rerun")
def test_logout(mock_rerun, ctx, query_params):
    sign_in(ctx, role="ADMIN")
    st.session_state.forms = {"payment": object()}

    session_manager.logout()

    assert not ctx.session.is_authenticated
    assert st.session_state.forms == {}
    assert st.session_state.current_path == routes.LOGIN_PATH
    mock_rerun.assert_called_once()
