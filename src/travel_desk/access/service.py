from __future__ import annotations

import logging
from typing import Optional, Union

from ..common.validators import parse_effective_role
from ..core.enums import EffectiveRole, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, StaleAuthorizationError
from ..users.model import User
from ..users.repository import UserRepository
from .model import Decision, Section
from .resolver import home_path_for, resolve_effective_role
from .route_table import RouteTable

logger = logging.getLogger(__name__)

LANDING_PATH = "/"


def authorize(effective_role: Optional[EffectiveRole], section: Section, is_admin_base: bool) -> Decision:
    """Decide whether a session acting as ``effective_role`` may enter ``section``.

    Fails closed: anything that is not explicitly allowed is denied.
    """
    if effective_role is None:
        return Decision.unauthenticated()
    if is_admin_base and section.admin_only:
        return Decision.allow()
    if effective_role in section.allowed_roles:
        return Decision.allow()
    return Decision.forbidden(home_path_for(effective_role))


class AccessController:
    """Use case: decide render / deny / redirect for a requested path.

    Holds no per-user state, so every call works from the user record it is
    given. Callers must pass a freshly fetched user on each request.
    """

    def __init__(self, routes: Optional[RouteTable] = None):
        self._routes = routes or RouteTable()

    @property
    def routes(self) -> RouteTable:
        return self._routes

    def authorize(self, effective_role: Optional[EffectiveRole], section: Section, is_admin_base: bool) -> Decision:
        return authorize(effective_role, section, is_admin_base)

    def check(self, user: Optional[User], path: str) -> Decision:
        if self._routes.is_public(path):
            return Decision.allow()

        effective_role = resolve_effective_role(user)
        if effective_role is None:
            return Decision.unauthenticated()

        if path == LANDING_PATH:
            return Decision.redirect(home_path_for(effective_role))

        section = self._routes.match(path)
        if section is None:
            return Decision.not_found(home_path_for(effective_role))

        return self.authorize(effective_role, section, user.is_admin)


class RoleSwitchService:
    """Use case: an admin previews the application as another role."""

    def __init__(self, users: UserRepository):
        self._users = users

    def switch_role(self, *, requesting_user: Optional[User], target_role: Union[str, EffectiveRole, None]) -> User:
        """Persist ``active_role`` and return the user as re-read from storage.

        The returned record is the only identity callers may authorize with
        afterwards; anything fetched before the switch is stale.
        """
        if requesting_user is None:
            raise AuthenticationError("Unauthorized")
        if requesting_user.role != Role.ADMIN:
            logger.warning("Role switch refused for non-admin user %s", requesting_user.id)
            raise AuthorizationError("Admin access required")

        target = parse_effective_role(target_role)
        self._users.set_active_role(requesting_user.id, target)

        refreshed = self._users.get_by_id(requesting_user.id)
        if refreshed is None or resolve_effective_role(refreshed) != target:
            raise StaleAuthorizationError("Role switch could not be confirmed")

        logger.info("Admin %s switched role to %s", requesting_user.id, target.value)
        return refreshed
