from __future__ import annotations

import logging
from typing import Optional

import mysql.connector
from flask import g, session

from ..users.model import User
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)

# Storage failures while looking up the session user mean "not logged in".
IDENTITY_FETCH_ERRORS = (mysql.connector.Error, TimeoutError, ConnectionError)

_CACHE_KEY = "current_user"


class IdentityProvider:
    """Current user for the active request, backed by the session cookie.

    The cookie carries only the user id. The user record (and so the role)
    is read from storage once per request and kept on ``flask.g`` until the
    request ends or ``invalidate`` is called.
    """

    def __init__(self, users: UserRepository):
        self._users = users

    def get_current_user(self) -> Optional[User]:
        if _CACHE_KEY not in g:
            g.current_user = self._load()
        return g.current_user

    def invalidate(self) -> None:
        g.pop(_CACHE_KEY, None)

    def login(self, user: User) -> None:
        session.clear()
        session.permanent = True
        session["user_id"] = user.id
        self.invalidate()

    def logout(self) -> None:
        session.clear()
        self.invalidate()

    def _load(self) -> Optional[User]:
        user_id = session.get("user_id")
        if not user_id:
            return None

        try:
            user = self._users.get_by_id(str(user_id))
        except IDENTITY_FETCH_ERRORS:
            logger.warning("Identity fetch failed for session user %s", user_id, exc_info=True)
            return None

        if user is None:
            # Account deleted while the session was alive.
            session.pop("user_id", None)
        return user
