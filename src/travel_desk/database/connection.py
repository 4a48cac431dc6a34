from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector

from ..core.constants import IDENTITY_FETCH_TIMEOUT_SECONDS


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connection_timeout: int = IDENTITY_FETCH_TIMEOUT_SECONDS
    # Server-side cap on SELECT statements (MySQL MAX_EXECUTION_TIME); 0 disables it.
    query_timeout_ms: int = IDENTITY_FETCH_TIMEOUT_SECONDS * 1000

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "travel_desk")),
            connection_timeout=int(db_config.get("connection_timeout", IDENTITY_FETCH_TIMEOUT_SECONDS)),
            query_timeout_ms=int(db_config.get("query_timeout_ms", IDENTITY_FETCH_TIMEOUT_SECONDS * 1000)),
        )


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    A SELECT running past ``query_timeout_ms`` is aborted by the server and
    surfaces as ``mysql.connector.Error``.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        conn = mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=int(self._config.connection_timeout),
        )
        if self._config.query_timeout_ms > 0:
            cur = conn.cursor()
            try:
                cur.execute("SET SESSION MAX_EXECUTION_TIME = %s", (int(self._config.query_timeout_ms),))
                cur.close()
            except mysql.connector.Error:
                conn.close()
                raise
        return conn
