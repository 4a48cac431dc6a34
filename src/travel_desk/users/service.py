from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import (
    normalize_email,
    parse_budget,
    parse_role,
    require_min_length,
    require_non_empty,
)
from ..core.constants import DEFAULT_ANNUAL_TRAVEL_BUDGET, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, InvalidRoleError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _password_matches(password_hash: Optional[str], password: str) -> bool:
    if not password_hash or not isinstance(password, str):
        return False
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # e.g. placeholder hashes or corrupted values
        return False


class AuthService:
    """Use case: login, self-registration and password changes."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> User:
        email = email.strip().lower() if isinstance(email, str) else ""
        user = self._users.get_by_email(email) if email else None
        if not user or not _password_matches(user.password_hash, password):
            logger.info("Failed login for %s", email)
            raise AuthenticationError("Invalid email or password")

        logger.info("User %s logged in", user.id)
        return user

    def register(self, *, email: str, password: str, first_name: str, last_name: str, role: str) -> User:
        email = normalize_email(email)
        first_name = require_non_empty(first_name, "First name")
        last_name = require_non_empty(last_name, "Last name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        base_role = parse_role(role)
        if base_role == Role.ADMIN:
            raise InvalidRoleError("Admin accounts cannot be self-registered")

        if self._users.get_by_email(email):
            raise ValidationError("Email already registered")

        user_id = self._users.create_user(
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=base_role,
            password_hash=generate_password_hash(password),
            annual_travel_budget=DEFAULT_ANNUAL_TRAVEL_BUDGET,
        )
        logger.info("Registered user %s with role %s", user_id, base_role.value)
        return self._users.get_by_id(user_id)

    def change_password(self, *, user: User, current_password: str, new_password: str) -> None:
        if not current_password or not new_password:
            raise ValidationError("Current password and new password are required")
        if not _password_matches(user.password_hash, current_password):
            raise AuthenticationError("Current password is incorrect")
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)

        self._users.update_password(user.id, generate_password_hash(new_password))
        logger.info("User %s changed password", user.id)


class UserService:
    """Use case: manage user accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def _require_admin(current_user: Optional[User]) -> None:
        if current_user is None or current_user.role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

    def list_users(self, *, current_user: Optional[User]) -> Sequence[User]:
        self._require_admin(current_user)
        return self._users.list_all()

    def create_user(
        self,
        *,
        current_user: Optional[User],
        email: str,
        first_name: str,
        last_name: str,
        role: str,
        annual_travel_budget=None,
        password: Optional[str] = None,
    ) -> User:
        self._require_admin(current_user)

        email = normalize_email(email)
        first_name = require_non_empty(first_name, "First name")
        last_name = require_non_empty(last_name, "Last name")
        base_role = parse_role(role)
        budget = parse_budget(annual_travel_budget) if annual_travel_budget is not None else DEFAULT_ANNUAL_TRAVEL_BUDGET

        password_hash = None
        if password:
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        if self._users.get_by_email(email):
            raise ValidationError("User with this email already exists")

        user_id = self._users.create_user(
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=base_role,
            password_hash=password_hash,
            annual_travel_budget=budget,
        )
        logger.info("Admin %s created user %s (%s)", current_user.id, user_id, base_role.value)
        return self._users.get_by_id(user_id)

    def update_user(self, *, current_user: Optional[User], user_id: str, changes: dict) -> User:
        self._require_admin(current_user)

        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User not found")

        email = user.email
        if changes.get("email") is not None:
            email = normalize_email(changes["email"])
            other = self._users.get_by_email(email)
            if other and other.id != user.id:
                raise ValidationError("User with this email already exists")

        first_name = user.first_name
        if changes.get("first_name") is not None:
            first_name = require_non_empty(changes["first_name"], "First name")

        last_name = user.last_name
        if changes.get("last_name") is not None:
            last_name = require_non_empty(changes["last_name"], "Last name")

        role = parse_role(changes["role"]) if changes.get("role") is not None else user.role
        # Only admins carry an active role.
        active_role = user.active_role if role == Role.ADMIN else None

        budget = user.annual_travel_budget
        if changes.get("annual_travel_budget") is not None:
            budget = parse_budget(changes["annual_travel_budget"])

        if not self._users.update_user(
            user.id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=role,
            active_role=active_role,
            annual_travel_budget=budget,
        ):
            raise ValidationError("User not found")

        logger.info("Admin %s updated user %s", current_user.id, user.id)
        return self._users.get_by_id(user.id)

    def delete_user(self, *, current_user: Optional[User], user_id: str) -> None:
        self._require_admin(current_user)

        if current_user.id == user_id:
            raise ValidationError("Cannot delete your own account")
        if not self._users.delete_by_id(user_id):
            raise ValidationError("User not found")

        logger.info("Admin %s deleted user %s", current_user.id, user_id)
