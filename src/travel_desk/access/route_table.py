from __future__ import annotations

from typing import Iterable, Iterator, Optional

from ..core.enums import EffectiveRole
from .model import Section

ALL_ROLES = frozenset(EffectiveRole)
OPERATIONS_ROLES = frozenset({EffectiveRole.OPERATIONS_KSA, EffectiveRole.OPERATIONS_UAE})

# Dashboard sections rendered by the client router.
PAGE_SECTIONS = (
    Section("/manager", frozenset({EffectiveRole.MANAGER})),
    Section("/pm", frozenset({EffectiveRole.PM})),
    Section("/operations", OPERATIONS_ROLES),
    Section("/admin", admin_only=True),
    Section("/admin/users", admin_only=True),
)

API_SECTIONS = (
    Section("/api/dashboard", ALL_ROLES),
    Section("/api/change-password", ALL_ROLES),
    Section("/api/users", admin_only=True),
    Section("/api/admin", admin_only=True),
)

DEFAULT_SECTIONS = PAGE_SECTIONS + API_SECTIONS

# Reachable without a session; matched exactly.
PUBLIC_PATHS = frozenset(
    {
        "/login",
        "/api/login",
        "/api/logout",
        "/api/register",
        "/api/user",
        "/api/access",
    }
)


class RouteTable:
    """Static path -> section mapping, matched by longest path prefix."""

    def __init__(self, sections: Iterable[Section] = DEFAULT_SECTIONS, public_paths: Iterable[str] = PUBLIC_PATHS):
        self._sections = sorted(sections, key=lambda s: len(s.path), reverse=True)
        self._public = frozenset(public_paths)

    def __iter__(self) -> Iterator[Section]:
        return iter(self._sections)

    def is_public(self, path: str) -> bool:
        return path in self._public

    def match(self, path: str) -> Optional[Section]:
        for section in self._sections:
            if section.matches(path):
                return section
        return None
