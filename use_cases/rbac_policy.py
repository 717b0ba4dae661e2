"""Centralized Role-Based Access Control logic."""

import logging
from enum import Enum
from typing import Optional

from use_cases.session_models import Role, SessionSnapshot

log = logging.getLogger(__name__)


class AccessDecision(str, Enum):
    ALLOW = "ALLOW"
    REDIRECT_LOGIN = "REDIRECT_LOGIN"
    REDIRECT_UNAUTHORIZED = "REDIRECT_UNAUTHORIZED"


def evaluate_access(
    session: SessionSnapshot,
    required_role: Optional[Role] = None,
    requires_monitor: bool = False,
    target: str = "",
) -> AccessDecision:
    """
    Decides whether the current session may open a page.
    Pure function of its inputs; evaluated again on every navigation.
    """
    if not session.is_authenticated:
        return AccessDecision.REDIRECT_LOGIN

    if required_role is not None and session.role is not Role(required_role):
        log.warning(
            f"RBAC denied: user={session.user.email} role={session.role.value} "
            f"target={target or '-'} reason=role_required:{Role(required_role).value}"
        )
        return AccessDecision.REDIRECT_UNAUTHORIZED

    if requires_monitor and not session.is_monitor:
        log.warning(
            f"RBAC denied: user={session.user.email} role={session.role.value} "
            f"target={target or '-'} reason=monitor_required"
        )
        return AccessDecision.REDIRECT_UNAUTHORIZED

    return AccessDecision.ALLOW
