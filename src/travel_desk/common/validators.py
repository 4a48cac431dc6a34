from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..core.enums import EffectiveRole, Role
from ..core.exceptions import InvalidRoleError, ValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def require_json_object(data) -> dict:
    """Request bodies are JSON objects; a missing body counts as empty."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("JSON object body required")
    return data


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def normalize_email(value: str) -> str:
    """Lower-case and trim an e-mail address, rejecting malformed ones."""
    if value is not None and not isinstance(value, str):
        raise ValidationError("Invalid email address")
    email = (value or "").strip().lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Invalid email address")
    return email


def parse_role(value: Optional[str]) -> Role:
    try:
        return Role((value or "").strip())
    except (ValueError, AttributeError):
        raise InvalidRoleError("Invalid role specified")


def parse_budget(value) -> Decimal:
    try:
        budget = Decimal(str(value).strip())
    except (InvalidOperation, AttributeError):
        raise ValidationError("Annual travel budget must be a number")
    if not budget.is_finite():
        raise ValidationError("Annual travel budget must be a number")
    if budget < 0:
        raise ValidationError("Annual travel budget cannot be negative")
    return budget


def parse_effective_role(value) -> EffectiveRole:
    """Parse a role an admin may act as; ``admin`` itself is rejected."""
    if isinstance(value, EffectiveRole):
        return value
    try:
        return EffectiveRole((value or "").strip())
    except (ValueError, AttributeError):
        raise InvalidRoleError("Invalid role")
