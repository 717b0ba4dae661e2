"""Application layer contracts for orchestrating high-level flows."""

from .auth_flow import NavigationResult, Navigator
from .bootstrap import AppContext, StartupResult, StartupStatus, build_context, run_startup
from .form_pipeline import FormStep, MultiStepForm, StepValidation, SubmitOutcome
from .query_cache import CacheEntry, MutationResult, QueryCache
from .rbac_policy import AccessDecision, evaluate_access
from .session_models import Role, SessionSnapshot, SessionStatus, SessionUser, is_admin, is_monitor
from .session_store import LoginFailed, SessionStore

__all__ = [
    "AccessDecision",
    "AppContext",
    "CacheEntry",
    "FormStep",
    "LoginFailed",
    "MultiStepForm",
    "MutationResult",
    "NavigationResult",
    "Navigator",
    "QueryCache",
    "Role",
    "SessionSnapshot",
    "SessionStatus",
    "SessionStore",
    "SessionUser",
    "StartupResult",
    "StartupStatus",
    "StepValidation",
    "SubmitOutcome",
    "build_context",
    "evaluate_access",
    "is_admin",
    "is_monitor",
    "run_startup",
]
