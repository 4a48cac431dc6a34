from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .access.identity import IdentityProvider
from .access.route_table import RouteTable
from .access.service import AccessController, RoleSwitchService
from .database.connection import DBConfig, DatabaseConnection
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository

    identity: IdentityProvider
    auth_service: AuthService
    user_service: UserService
    access_controller: AccessController
    role_switch_service: RoleSwitchService


def build_services(users_repo: UserRepository, *, conn: Optional[DatabaseConnection] = None,
                   routes: Optional[RouteTable] = None) -> Container:
    return Container(
        conn=conn,
        users_repo=users_repo,
        identity=IdentityProvider(users_repo),
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        access_controller=AccessController(routes),
        role_switch_service=RoleSwitchService(users_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(MySQLUserRepository(conn), conn=conn)
