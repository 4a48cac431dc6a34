from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_ADMIN_EFFECTIVE_ROLE, FALLBACK_HOME_PATH, HOME_PATHS
from ..core.enums import EffectiveRole, Role
from ..users.model import User


def resolve_effective_role(user: Optional[User]) -> Optional[EffectiveRole]:
    """Role that currently governs what ``user`` may see.

    ``None`` means nobody is logged in. Admins act as their ``active_role``,
    falling back to ``DEFAULT_ADMIN_EFFECTIVE_ROLE`` until they first switch.
    Any ``active_role`` on a non-admin account is ignored.
    """
    if user is None:
        return None
    if user.role == Role.ADMIN:
        return user.active_role or DEFAULT_ADMIN_EFFECTIVE_ROLE
    return EffectiveRole.from_role(user.role)


def home_path_for(role: Optional[EffectiveRole]) -> str:
    return HOME_PATHS.get(role, FALLBACK_HOME_PATH)
