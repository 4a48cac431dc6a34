"""HTTP client for the Travel Desk API.

Mirrors what the single-page front end does: it asks the server who the user
is before every navigation and computes the routing decision locally with the
same ``AccessController`` the server enforces. The local decision is only a UX
convenience; the server re-checks every request.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

import requests

from .access.model import Decision
from .access.resolver import resolve_effective_role
from .access.service import AccessController
from .common.validators import parse_effective_role
from .core.constants import IDENTITY_FETCH_TIMEOUT_SECONDS
from .core.enums import EffectiveRole
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    InvalidRoleError,
    StaleAuthorizationError,
    ValidationError,
)
from .users.model import User
from .users.serialization import user_from_dict

logger = logging.getLogger(__name__)

_ERROR_BY_STATUS = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthorizationError,
    409: StaleAuthorizationError,
}


def _raise_for_response(resp) -> None:
    try:
        message = (resp.json() or {}).get("message") or resp.reason
    except ValueError:
        message = resp.reason
    raise _ERROR_BY_STATUS.get(resp.status_code, DomainError)(message)


class TravelDeskClient:
    def __init__(
        self,
        base_url: str,
        *,
        http: Optional[requests.Session] = None,
        timeout: float = IDENTITY_FETCH_TIMEOUT_SECONDS,
        access_controller: Optional[AccessController] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._http = http or requests.Session()
        self._timeout = timeout
        self._access = access_controller or AccessController()

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def login(self, email: str, password: str) -> User:
        resp = self._http.post(
            self._url("/api/login"),
            json={"email": email, "password": password},
            timeout=self._timeout,
        )
        if resp.status_code != 200:
            _raise_for_response(resp)
        return user_from_dict(resp.json())

    def logout(self) -> None:
        self._http.post(self._url("/api/logout"), timeout=self._timeout)

    def current_user(self) -> Optional[User]:
        """Fetch the identity from the server; ``None`` means unauthenticated.

        A timeout, connection error or unexpected status also yields ``None``.
        There is no cached fallback.
        """
        try:
            resp = self._http.get(
                self._url("/api/user"),
                headers={"Cache-Control": "no-cache"},
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning("Identity fetch failed: %s", e)
            return None

        if resp.status_code == 401:
            return None
        if resp.status_code != 200:
            logger.warning("Identity fetch returned HTTP %s", resp.status_code)
            return None
        return user_from_dict(resp.json())

    def switch_role(self, role: Union[str, EffectiveRole]) -> User:
        """Switch the admin's active role and return the refetched identity.

        The switch must be confirmed by the server before the identity is read
        again; the new role is never applied optimistically.
        """
        target = parse_effective_role(role)
        resp = self._http.post(
            self._url("/api/admin/switch-role"),
            json={"role": target.value},
            timeout=self._timeout,
        )
        if resp.status_code != 200:
            if resp.status_code == 400:
                raise InvalidRoleError("Invalid role")
            _raise_for_response(resp)

        user = self.current_user()
        if user is None or resolve_effective_role(user) != target:
            raise StaleAuthorizationError("Role switch could not be confirmed")
        return user

    def navigate(self, path: str) -> Decision:
        return self._access.check(self.current_user(), path)
