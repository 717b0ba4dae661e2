from unittest.mock import MagicMock, patch

from infrastructure.api_client import ServerError
from use_cases.domain_models import RegistrationRequest
from use_cases.query_cache import MutationResult
from views import admin_view

PENDING = RegistrationRequest.from_api({
    "requestId": 7, "formNumber": "F-7", "fullName": "Ravi Kumar", "status": "PENDING",
})


def fake_streamlit():
    fake = MagicMock()
    fake.columns.side_effect = lambda spec: [MagicMock() for _ in range(spec if isinstance(spec, int) else len(spec))]
    fake.button.side_effect = lambda label, key=None, **kwargs: key == "approve_reg_7"
    fake.session_state.current_path = "/app/admin/registrations"
    return fake


@patch("views.admin_view._render_reason_box", return_value=None)
@patch("views.admin_view.session_manager.go")
@patch("views.admin_view.hostel_flow.approve_registration", return_value=MutationResult(ok=True))
def test_approve_shows_message_after_rerun(mock_approve, mock_go, _reason_box):
    fake = fake_streamlit()
    with patch.object(admin_view, "st", fake):
        admin_view._render_registration(MagicMock(), PENDING)

    mock_approve.assert_called_once()
    mock_go.assert_called_once_with("/app/admin/registrations", flash=("success", "Registration approved"))
    fake.rerun.assert_not_called()


@patch("views.admin_view._render_reason_box", return_value=None)
@patch("views.admin_view.session_manager.go")
@patch("views.admin_view.hostel_flow.approve_registration")
def test_failed_approve_stays_on_page(mock_approve, mock_go, _reason_box):
    mock_approve.return_value = MutationResult(ok=False, error=ServerError("Form number already used", 400))
    fake = fake_streamlit()
    with patch.object(admin_view, "st", fake):
        admin_view._render_registration(MagicMock(), PENDING)

    mock_go.assert_not_called()
    fake.error.assert_called_once_with("Form number already used")
