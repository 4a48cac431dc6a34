from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..access.resolver import home_path_for, resolve_effective_role
from ..core.constants import DEFAULT_ANNUAL_TRAVEL_BUDGET
from ..core.enums import EffectiveRole, Role
from .model import User


def user_to_dict(user: Optional[User]) -> Optional[dict]:
    """Public JSON shape of a user. Never includes the password hash."""
    if user is None:
        return None

    effective_role = resolve_effective_role(user)
    return {
        "id": user.id,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "role": user.role.value,
        "active_role": user.active_role.value if user.active_role else None,
        "effective_role": effective_role.value if effective_role else None,
        "home": home_path_for(effective_role),
        "annual_travel_budget": str(user.annual_travel_budget),
    }


def user_from_dict(data: dict) -> User:
    active_role = data.get("active_role")
    budget = data.get("annual_travel_budget")
    return User(
        id=str(data["id"]),
        email=data["email"],
        first_name=data.get("first_name") or "",
        last_name=data.get("last_name") or "",
        role=Role(data["role"]),
        active_role=EffectiveRole(active_role) if active_role else None,
        annual_travel_budget=Decimal(str(budget)) if budget is not None else DEFAULT_ANNUAL_TRAVEL_BUDGET,
    )
