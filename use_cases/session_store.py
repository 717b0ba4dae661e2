"""Process-wide authentication state with an explicit lifecycle.

UNAUTHENTICATED -> (login) AUTHENTICATING -> AUTHENTICATED
AUTHENTICATED -> (logout / 401 from the gateway) UNAUTHENTICATED

The store is the only writer of the three durable storage keys. Storage
writes happen under the same lock as the in-memory transition.
"""

import logging
import threading
from typing import Callable, List, Optional

from infrastructure.api_client import ApiError
from use_cases.domain_models import LoginResult
from use_cases.session_models import Role, SessionSnapshot, SessionStatus, SessionUser

log = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"
IS_MONITOR_KEY = "isMonitor"
STORAGE_KEYS = (TOKEN_KEY, USER_KEY, IS_MONITOR_KEY)

DEFAULT_LOGIN_ERROR = "Invalid credentials"

SessionListener = Callable[[SessionSnapshot], None]


class LoginFailed(Exception):
    """Raised by ``SessionStore.login``; the message is shown to the user as-is."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class SessionStore:
    def __init__(self, storage, authenticate: Callable[[str, str], LoginResult]):
        self._storage = storage
        self._authenticate = authenticate
        self._lock = threading.RLock()
        self._state = SessionSnapshot()
        self._listeners: List[SessionListener] = []

    # --- reads ---

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return self._state

    @property
    def status(self) -> SessionStatus:
        return self.snapshot().status

    @property
    def user(self) -> Optional[SessionUser]:
        return self.snapshot().user

    @property
    def token(self) -> Optional[str]:
        return self.snapshot().token

    @property
    def is_authenticated(self) -> bool:
        return self.snapshot().is_authenticated

    @property
    def is_monitor(self) -> bool:
        return self.snapshot().is_monitor

    def has_role(self, role) -> bool:
        user = self.user
        if user is None:
            return False
        try:
            return user.role is Role(role)
        except ValueError:
            return False

    def subscribe(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    # --- transitions ---

    def _transition(self, state: SessionSnapshot) -> None:
        self._state = state
        log.debug(f"Session -> {state.status.value}")

    def _notify(self, state: SessionSnapshot) -> None:
        for listener in list(self._listeners):
            listener(state)

    def hydrate(self) -> SessionSnapshot:
        """Restore a persisted session. The stored token is trusted until the server rejects it."""
        with self._lock:
            token = self._storage.get_item(TOKEN_KEY)
            raw_user = self._storage.get_item(USER_KEY)
            if not token or not raw_user:
                self._transition(SessionSnapshot())
                return self._state
            try:
                user = SessionUser.from_json(raw_user)
            except ValueError as e:
                log.warning(f"⚠️ Discarding persisted session: {e}")
                self._storage.remove_items(*STORAGE_KEYS)
                self._transition(SessionSnapshot())
                return self._state

            is_monitor = self._storage.get_item(IS_MONITOR_KEY) == "true"
            self._transition(SessionSnapshot(
                status=SessionStatus.AUTHENTICATED,
                user=user,
                token=token,
                is_monitor=is_monitor,
            ))
            log.info(f"Restored session for {user.email} ({user.role.value})")
            state = self._state
        self._notify(state)
        return state

    def login(self, email: str, password: str) -> SessionSnapshot:
        # Any previous session is dropped from memory and storage before the new attempt.
        with self._lock:
            was_authenticated = self._state.is_authenticated
            self._storage.remove_items(*STORAGE_KEYS)
            self._transition(SessionSnapshot(status=SessionStatus.AUTHENTICATING))
            state = self._state
        if was_authenticated:
            self._notify(state)

        try:
            result = self._authenticate(email.strip(), password)
            if not isinstance(result.token, str) or not result.token.strip():
                raise ValueError("login response carries no token")
            if not isinstance(result.role, str):
                raise ValueError(f"login response carries no role: {result.role!r}")
            role = Role(result.role)
        except ApiError as e:
            with self._lock:
                self._transition(SessionSnapshot())
            log.info(f"Login rejected for {email.strip()}: {e.message or type(e).__name__}")
            raise LoginFailed(e.message or DEFAULT_LOGIN_ERROR, e) from e
        except (KeyError, ValueError) as e:
            with self._lock:
                self._transition(SessionSnapshot())
            log.error(f"Malformed login response: {e!r}")
            raise LoginFailed(DEFAULT_LOGIN_ERROR, e) from e

        user = SessionUser(id=0, email=result.email or email.strip(), role=role, full_name=result.full_name)
        is_monitor = bool(result.is_monitor)
        with self._lock:
            self._storage.set_items({
                TOKEN_KEY: result.token,
                USER_KEY: user.to_json(),
                IS_MONITOR_KEY: "true" if is_monitor else "false",
            })
            self._transition(SessionSnapshot(
                status=SessionStatus.AUTHENTICATED,
                user=user,
                token=result.token,
                is_monitor=is_monitor,
            ))
            state = self._state
        log.info(f"✅ Signed in {user.email} as {role.value}")
        self._notify(state)
        return state

    def logout(self) -> None:
        with self._lock:
            was_authenticated = self._state.is_authenticated
            self._storage.remove_items(*STORAGE_KEYS)
            if self._state.status is SessionStatus.UNAUTHENTICATED and not was_authenticated:
                return
            self._transition(SessionSnapshot())
            state = self._state
        log.info("Signed out")
        self._notify(state)
