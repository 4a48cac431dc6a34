from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Base role stored on the user account."""

    MANAGER = "manager"
    PM = "pm"
    OPERATIONS_KSA = "operations_ksa"
    OPERATIONS_UAE = "operations_uae"
    ADMIN = "admin"


class EffectiveRole(str, Enum):
    """Role that governs what the current session may see. Never admin."""

    MANAGER = "manager"
    PM = "pm"
    OPERATIONS_KSA = "operations_ksa"
    OPERATIONS_UAE = "operations_uae"

    @classmethod
    def from_role(cls, role: Role) -> "EffectiveRole":
        if role == Role.ADMIN:
            raise ValueError("admin is not an effective role")
        return cls(role.value)


class DecisionKind(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    REDIRECT = "redirect"


class DenyReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
