"""Authentication flow orchestration (application layer)."""

import logging
from dataclasses import dataclass
from typing import Optional

from use_cases import routes
from use_cases.rbac_policy import AccessDecision, evaluate_access
from use_cases.session_store import SessionStore

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigationResult:
    """Where the user ends up after asking for ``requested``."""

    decision: AccessDecision
    path: str
    requested: str
    route: routes.Route


class Navigator:
    """
    Runs the access gate on every navigation and remembers the page an
    unauthenticated user asked for, so login can return them there.
    """

    def __init__(self, session: SessionStore):
        self.session = session
        self.pending_destination: Optional[str] = None

    def navigate(self, path: str) -> NavigationResult:
        requested = routes.normalize(path)
        route = routes.resolve(requested)

        if route.public:
            return NavigationResult(AccessDecision.ALLOW, route.path, requested, route)

        decision = evaluate_access(
            self.session.snapshot(),
            required_role=route.required_role,
            requires_monitor=route.requires_monitor,
            target=route.path,
        )
        if decision is AccessDecision.REDIRECT_LOGIN:
            self.pending_destination = route.path
            return NavigationResult(decision, routes.LOGIN_PATH, requested, routes.resolve(routes.LOGIN_PATH))
        if decision is AccessDecision.REDIRECT_UNAUTHORIZED:
            return NavigationResult(decision, routes.UNAUTHORIZED_PATH, requested, routes.resolve(routes.UNAUTHORIZED_PATH))
        return NavigationResult(decision, route.path, requested, route)

    def after_login(self) -> str:
        """Destination after a successful login; the remembered path is consumed."""
        destination = self.pending_destination or routes.DASHBOARD_PATH
        self.pending_destination = None
        return destination

    def login(self, email: str, password: str) -> NavigationResult:
        """Sign in and navigate to the remembered destination. Raises ``LoginFailed``."""
        self.session.login(email, password)
        return self.navigate(self.after_login())
