"""Session DTOs shared across application layers."""

import json
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Role(str, Enum):
    ADMIN = "ADMIN"
    WARDEN = "WARDEN"
    STUDENT = "STUDENT"


class SessionStatus(str, Enum):
    UNAUTHENTICATED = "UNAUTHENTICATED"
    AUTHENTICATING = "AUTHENTICATING"
    AUTHENTICATED = "AUTHENTICATED"


@dataclass(frozen=True)
class SessionUser:
    id: int
    email: str
    role: Role
    full_name: Optional[str] = None

    def to_json(self) -> str:
        data: Dict[str, Any] = asdict(self)
        data["role"] = self.role.value
        return json.dumps(data)

    @classmethod
    def from_json(cls, raw: str) -> "SessionUser":
        """Raises ValueError on anything that is not a complete user record."""
        try:
            data = json.loads(raw)
            return cls(
                id=int(data.get("id") or 0),
                email=str(data["email"]),
                role=Role(data["role"]),
                full_name=data.get("full_name"),
            )
        except (TypeError, KeyError, AttributeError) as e:
            raise ValueError(f"Malformed stored user: {e}") from e


@dataclass(frozen=True)
class SessionSnapshot:
    status: SessionStatus = SessionStatus.UNAUTHENTICATED
    user: Optional[SessionUser] = None
    token: Optional[str] = None
    is_monitor: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.token is not None

    @property
    def role(self) -> Optional[Role]:
        return self.user.role if self.user is not None else None


def is_admin(session: SessionSnapshot) -> bool:
    return session.role is Role.ADMIN


def is_monitor(session: SessionSnapshot) -> bool:
    return session.role is Role.STUDENT and session.is_monitor
