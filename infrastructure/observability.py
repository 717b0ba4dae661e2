"""
Logging and Sentry setup for the hostel desk.
Bearer tokens, JWTs and passwords are scrubbed before any event leaves the process.
"""

import os
import logging
import re
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)

# Patterns to scrub in Sentry events: (pattern, replacement)
SENSITIVE_PATTERNS = [
    (re.compile(r"(Bearer\s+)[A-Za-z0-9_\-\.=]+", re.IGNORECASE), r"\1[REDACTED]"),
    (re.compile(r"[A-Za-z0-9_\-]{10,}\.[A-Za-z0-9_\-]{10,}\.[A-Za-z0-9_\-]{10,}"), "[REDACTED]"),  # JWT-looking strings
]
SENSITIVE_KEYS = {"password", "token", "authorization"}


def _mask_string(val: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        val = pattern.sub(replacement, val)
    return val


def _recursive_scrub(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {
            k: "[REDACTED]" if str(k).lower() in SENSITIVE_KEYS else _recursive_scrub(v)
            for k, v in obj.items()
        }
    elif isinstance(obj, list):
        return [_recursive_scrub(i) for i in obj]
    elif isinstance(obj, str):
        return _mask_string(obj)
    return obj


def _scrub_sensitive_data(event: Dict[str, Any], hint: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sentry before_send hook. Scrubs bearer tokens and passwords from
    stack frame locals and request data before the event leaves the process.
    """
    if "exception" in event and "values" in event["exception"]:
        for exc in event["exception"]["values"]:
            if "stacktrace" in exc and "frames" in exc["stacktrace"]:
                for frame in exc["stacktrace"]["frames"]:
                    if "vars" in frame:
                        frame["vars"] = _recursive_scrub(frame["vars"])
    if "request" in event:
        event["request"] = _recursive_scrub(event["request"])
    if "breadcrumbs" in event:
        event["breadcrumbs"] = _recursive_scrub(event["breadcrumbs"])
    return event


def setup_observability() -> None:
    """
    Initializes global system logging and Sentry (if DSN is present).
    Should be called once at application startup.
    """
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    sentry_dsn = os.getenv("SENTRY_DSN")
    if sentry_dsn:
        import sentry_sdk
        sentry_env = os.getenv("SENTRY_ENV", "development")

        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=sentry_env,
            traces_sample_rate=1.0,
            send_default_pii=False,
            before_send=_scrub_sensitive_data
        )
        log.info(f"Sentry SDK initialized (env: {sentry_env})")
    else:
        log.info("SENTRY_DSN not provided. Running without Sentry.")

    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


def bind_user(user_id: Optional[int], role: Optional[str]) -> None:
    """Attach the signed-in user to Sentry events, or detach when None."""
    import sentry_sdk
    if user_id is None and role is None:
        sentry_sdk.set_user(None)
    else:
        sentry_sdk.set_user({"id": user_id, "role": role})
