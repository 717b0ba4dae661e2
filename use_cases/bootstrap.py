"""Startup orchestration: build the shared services and restore the session."""

import logging
from dataclasses import dataclass
from functools import partial
from typing import Literal, Optional, Tuple

import requests

from infrastructure import observability
from infrastructure.api_client import ApiGateway, UnauthorizedError
from infrastructure.config import Settings, load_settings
from infrastructure.storage.session_storage import FileSessionStorage
from services import auth_api
from use_cases.auth_flow import Navigator
from use_cases.query_cache import QueryCache
from use_cases.session_models import SessionSnapshot
from use_cases.session_store import SessionStore

log = logging.getLogger(__name__)

StartupStatus = Literal["CONTINUE", "STOP"]


@dataclass
class AppContext:
    """Everything a page needs; one instance per running app."""

    settings: Settings
    storage: object
    gateway: ApiGateway
    session: SessionStore
    cache: QueryCache
    navigator: Navigator


@dataclass(frozen=True)
class StartupResult:
    """Result contract for startup/bootstrap orchestration."""

    status: StartupStatus
    planned_steps: Tuple[str, ...]
    context: Optional[AppContext] = None


def build_context(
    settings: Optional[Settings] = None,
    storage=None,
    http: Optional[requests.Session] = None,
) -> AppContext:
    """Wire gateway, session and cache together. Does not touch storage yet."""
    settings = settings or load_settings()
    storage = storage if storage is not None else FileSessionStorage(settings.session_store_path)

    gateway = ApiGateway(settings.api_base_url, timeout=settings.api_timeout, http=http)
    session = SessionStore(storage, authenticate=partial(auth_api.login, gateway))
    gateway.token_provider = lambda: session.token
    cache = QueryCache()

    def on_unauthorized(error: UnauthorizedError) -> None:
        if session.is_authenticated:
            log.warning("🔒 Server rejected the session token, signing out")
            session.logout()

    def on_session_change(state: SessionSnapshot) -> None:
        if state.is_authenticated:
            observability.bind_user(state.user.id, state.role.value)
        else:
            # Cached data belongs to the previous user.
            cache.clear()
            observability.bind_user(None, None)

    gateway.add_unauthorized_listener(on_unauthorized)
    session.subscribe(on_session_change)

    return AppContext(
        settings=settings,
        storage=storage,
        gateway=gateway,
        session=session,
        cache=cache,
        navigator=Navigator(session),
    )


def run_startup(
    settings: Optional[Settings] = None,
    storage=None,
    http: Optional[requests.Session] = None,
) -> StartupResult:
    """Build the application context and restore any persisted session."""
    executed_steps = []

    context = build_context(settings, storage, http)
    executed_steps.append("build_context")
    log.info(f"API base URL: {context.settings.api_base_url}")

    state = context.session.hydrate()
    executed_steps.append("hydrate_session")
    if state.is_authenticated:
        executed_steps.append("session_restored")

    return StartupResult(status="CONTINUE", planned_steps=tuple(executed_steps), context=context)
