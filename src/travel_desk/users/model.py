from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.constants import DEFAULT_ANNUAL_TRAVEL_BUDGET
from ..core.enums import EffectiveRole, Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object, no database access. ``active_role`` only carries meaning
    for admins; it is ignored for every other base role.
    """

    id: str
    email: str
    first_name: str
    last_name: str
    role: Role
    active_role: Optional[EffectiveRole] = None
    password_hash: Optional[str] = None
    annual_travel_budget: Decimal = DEFAULT_ANNUAL_TRAVEL_BUDGET
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
