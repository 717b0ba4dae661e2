import pytest

from use_cases.session_models import Role, SessionSnapshot, SessionStatus, SessionUser, is_admin, is_monitor


def test_user_json_roundtrip_keeps_role_enum() -> None:
    user = SessionUser(id=3, email="a@b.in", role=Role.WARDEN, full_name="Meera")
    assert SessionUser.from_json(user.to_json()) == user


@pytest.mark.parametrize("raw", ["", "[]", '{"email": "a@b.in"}', '{"email": "a@b.in", "role": "OWNER"}'])
def test_malformed_user_raises_value_error(raw) -> None:
    with pytest.raises(ValueError):
        SessionUser.from_json(raw)


def test_is_admin() -> None:
    admin = SessionSnapshot(SessionStatus.AUTHENTICATED, SessionUser(1, "a@b.in", Role.ADMIN), "t")
    student = SessionSnapshot(SessionStatus.AUTHENTICATED, SessionUser(2, "s@b.in", Role.STUDENT), "t")
    assert is_admin(admin) is True
    assert is_admin(student) is False
    assert is_admin(SessionSnapshot()) is False


def test_monitor_capability_only_for_students() -> None:
    student = SessionSnapshot(SessionStatus.AUTHENTICATED, SessionUser(2, "s@b.in", Role.STUDENT), "t", is_monitor=True)
    warden = SessionSnapshot(SessionStatus.AUTHENTICATED, SessionUser(3, "w@b.in", Role.WARDEN), "t", is_monitor=True)
    assert is_monitor(student) is True
    assert is_monitor(warden) is False
