from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from ..core.constants import LOGIN_PATH
from ..core.enums import DecisionKind, DenyReason, EffectiveRole


@dataclass(frozen=True)
class Section:
    """A protected area of the application.

    ``allowed_roles`` is the allow-list of effective roles. ``admin_only``
    marks admin-designated areas, which base admins may always enter.
    """

    path: str
    allowed_roles: FrozenSet[EffectiveRole] = field(default_factory=frozenset)
    admin_only: bool = False

    def matches(self, path: str) -> bool:
        prefix = self.path.rstrip("/")
        return path == self.path or path == prefix or path.startswith(prefix + "/")


@dataclass(frozen=True)
class Decision:
    kind: DecisionKind
    target: Optional[str] = None
    reason: Optional[DenyReason] = None
    message: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.kind == DecisionKind.ALLOW

    @classmethod
    def allow(cls) -> "Decision":
        return cls(kind=DecisionKind.ALLOW)

    @classmethod
    def redirect(cls, target: str) -> "Decision":
        return cls(kind=DecisionKind.REDIRECT, target=target)

    @classmethod
    def unauthenticated(cls) -> "Decision":
        return cls(
            kind=DecisionKind.DENY,
            target=LOGIN_PATH,
            reason=DenyReason.UNAUTHENTICATED,
            message="You are logged out. Please log in again.",
        )

    @classmethod
    def forbidden(cls, home: str) -> "Decision":
        return cls(
            kind=DecisionKind.DENY,
            target=home,
            reason=DenyReason.FORBIDDEN,
            message="Access denied. You don't have permission to access this page.",
        )

    @classmethod
    def not_found(cls, home: str) -> "Decision":
        return cls(kind=DecisionKind.DENY, target=home, reason=DenyReason.NOT_FOUND, message="Page not found.")

    def to_dict(self) -> dict:
        return {
            "decision": self.kind.value,
            "redirect_to": self.target,
            "reason": self.reason.value if self.reason else None,
            "message": self.message,
        }
