from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import EffectiveRole, Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        email: str,
        first_name: str,
        last_name: str,
        role: Role,
        password_hash: Optional[str],
        annual_travel_budget: Decimal,
    ) -> str:
        raise NotImplementedError

    def update_user(
        self,
        user_id: str,
        *,
        email: str,
        first_name: str,
        last_name: str,
        role: Role,
        active_role: Optional[EffectiveRole],
        annual_travel_budget: Decimal,
    ) -> bool:
        raise NotImplementedError

    def set_active_role(self, user_id: str, active_role: EffectiveRole) -> None:
        raise NotImplementedError

    def update_password(self, user_id: str, password_hash: str) -> None:
        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError
