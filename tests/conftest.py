from __future__ import annotations

import uuid
from dataclasses import replace
from decimal import Decimal
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from travel_desk.container import build_services
from travel_desk.core.enums import EffectiveRole, Role
from travel_desk.main import create_app
from travel_desk.users.model import User


class InMemoryUsers:
    def __init__(self):
        self._by_id: dict[str, User] = {}
        self.fail_reads = None

    def add(self, user: User) -> User:
        self._by_id[user.id] = user
        return user

    def get_by_id(self, user_id: str) -> Optional[User]:
        if self.fail_reads is not None:
            raise self.fail_reads
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        for u in self._by_id.values():
            if u.email == email:
                return u
        return None

    def list_all(self):
        return list(self._by_id.values())

    def create_user(self, *, email, first_name, last_name, role, password_hash, annual_travel_budget) -> str:
        user_id = str(uuid.uuid4())
        self._by_id[user_id] = User(
            id=user_id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=role,
            password_hash=password_hash,
            annual_travel_budget=annual_travel_budget,
        )
        return user_id

    def update_user(self, user_id, *, email, first_name, last_name, role, active_role, annual_travel_budget) -> bool:
        user = self._by_id.get(user_id)
        if not user:
            return False
        self._by_id[user_id] = replace(
            user,
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=role,
            active_role=active_role,
            annual_travel_budget=annual_travel_budget,
        )
        return True

    def set_active_role(self, user_id: str, active_role: EffectiveRole) -> None:
        user = self._by_id.get(user_id)
        if user and user.role == Role.ADMIN:
            self._by_id[user_id] = replace(user, active_role=active_role)

    def update_password(self, user_id: str, password_hash: str) -> None:
        self._by_id[user_id] = replace(self._by_id[user_id], password_hash=password_hash)

    def delete_by_id(self, user_id: str) -> bool:
        return self._by_id.pop(user_id, None) is not None


PASSWORD = "secret123"


def make_user(role: Role, *, active_role: Optional[EffectiveRole] = None, email: Optional[str] = None,
              user_id: Optional[str] = None) -> User:
    user_id = user_id or str(uuid.uuid4())
    return User(
        id=user_id,
        email=email or f"{role.value}-{user_id[:8]}@example.com",
        first_name=role.value.title(),
        last_name="Tester",
        role=role,
        active_role=active_role,
        password_hash=generate_password_hash(PASSWORD),
        annual_travel_budget=Decimal("15000"),
    )


@pytest.fixture(name="make_user")
def make_user_fixture():
    return make_user


@pytest.fixture
def password():
    return PASSWORD


@pytest.fixture
def users_repo():
    return InMemoryUsers()


@pytest.fixture
def add_user(users_repo):
    def _add(role: Role, **kwargs) -> User:
        return users_repo.add(make_user(role, **kwargs))

    return _add


@pytest.fixture
def container(users_repo):
    return build_services(users_repo)


@pytest.fixture
def app(container):
    return create_app(container=container, settings_module="travel_desk.settings.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user: User):
        resp = client.post("/api/login", json={"email": user.email, "password": PASSWORD})
        assert resp.status_code == 200
        return resp

    return _login
