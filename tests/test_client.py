from __future__ import annotations

import pytest
import requests

from travel_desk.client import TravelDeskClient
from travel_desk.core.enums import DenyReason, EffectiveRole, Role
from travel_desk.core.exceptions import AuthorizationError, InvalidRoleError, StaleAuthorizationError
from travel_desk.users.serialization import user_to_dict


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload
        self.reason = "fake"

    def json(self):
        if self._payload is None:
            raise ValueError("no body")
        return self._payload


class FakeServer:
    """Stands in for requests.Session; keeps one user server-side."""

    def __init__(self, user=None):
        self.user = user
        self.get_error = None
        self.switch_status = 200
        self.apply_switch = True
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs.get("timeout")))
        if self.get_error is not None:
            raise self.get_error
        if self.user is None:
            return FakeResponse(401, {"message": "Unauthorized"})
        return FakeResponse(200, user_to_dict(self.user))

    def post(self, url, json=None, **kwargs):
        from dataclasses import replace

        self.calls.append(("POST", url, kwargs.get("timeout")))
        if url.endswith("/api/admin/switch-role"):
            if self.switch_status != 200:
                return FakeResponse(self.switch_status, {"message": "refused"})
            if self.apply_switch:
                self.user = replace(self.user, active_role=EffectiveRole(json["role"]))
            return FakeResponse(200, {"message": "Role switched successfully"})
        return FakeResponse(200, {})


def test_navigation_refetches_identity_every_time(make_user):
    server = FakeServer(make_user(Role.PM))
    client = TravelDeskClient("http://travel.local", http=server, timeout=3)

    assert client.navigate("/pm").allowed
    assert client.navigate("/pm").allowed

    gets = [c for c in server.calls if c[0] == "GET"]
    assert len(gets) == 2
    assert all(timeout == 3 for _, _, timeout in gets)


def test_identity_timeout_is_unauthenticated(make_user):
    server = FakeServer(make_user(Role.PM))
    server.get_error = requests.exceptions.Timeout("slow")
    client = TravelDeskClient("http://travel.local", http=server)

    decision = client.navigate("/pm")

    assert decision.reason == DenyReason.UNAUTHENTICATED
    assert decision.target == "/login"


def test_server_error_on_identity_is_unauthenticated(make_user):
    server = FakeServer(make_user(Role.PM))
    server.get = lambda url, **kwargs: FakeResponse(500, {"message": "boom"})
    client = TravelDeskClient("http://travel.local", http=server)

    assert client.current_user() is None


def test_switch_role_then_navigate(make_user):
    server = FakeServer(make_user(Role.ADMIN, active_role=EffectiveRole.MANAGER))
    client = TravelDeskClient("http://travel.local", http=server)
    assert not client.navigate("/pm").allowed

    user = client.switch_role("pm")

    assert user.active_role == EffectiveRole.PM
    assert client.navigate("/pm").allowed
    # The switch is posted before the identity is fetched again.
    methods = [c[0] for c in server.calls]
    assert methods[methods.index("POST") + 1] == "GET"


def test_switch_role_refused_by_server(make_user):
    server = FakeServer(make_user(Role.PM))
    server.switch_status = 403
    client = TravelDeskClient("http://travel.local", http=server)

    with pytest.raises(AuthorizationError):
        client.switch_role("operations_uae")


def test_switch_role_rejects_admin_target_locally(make_user):
    server = FakeServer(make_user(Role.ADMIN))
    client = TravelDeskClient("http://travel.local", http=server)

    with pytest.raises(InvalidRoleError):
        client.switch_role("admin")
    assert server.calls == []


def test_unconfirmed_switch_is_stale(make_user):
    server = FakeServer(make_user(Role.ADMIN, active_role=EffectiveRole.MANAGER))
    server.apply_switch = False
    client = TravelDeskClient("http://travel.local", http=server)

    with pytest.raises(StaleAuthorizationError):
        client.switch_role(EffectiveRole.OPERATIONS_KSA)
