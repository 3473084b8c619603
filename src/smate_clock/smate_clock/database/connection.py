from __future__ import annotations

from dataclasses import dataclass

import mysql.connector

from ..core.constants import DEFAULT_STORE_TIMEOUT_SECONDS
from ..core.exceptions import TransientError


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    timeout_seconds: int = DEFAULT_STORE_TIMEOUT_SECONDS


class DatabaseConnection:
    """DB connection factory passed explicitly to repositories.

    Note: We create short-lived connections per operation; every session is
    bounded by ``timeout_seconds`` (connect, row-lock wait and SELECT time).
    """

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def timeout_seconds(self) -> int:
        return int(self._config.timeout_seconds)

    def connect(self):
        try:
            conn = mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                connection_timeout=self.timeout_seconds,
                time_zone="+00:00",
            )
        except mysql.connector.Error as e:
            raise TransientError("Store unavailable") from e

        try:
            cur = conn.cursor()
            try:
                cur.execute("SET SESSION innodb_lock_wait_timeout=%s", (self.timeout_seconds,))
                cur.execute("SET SESSION max_execution_time=%s", (self.timeout_seconds * 1000,))
            finally:
                cur.close()
        except mysql.connector.Error as e:
            conn.close()
            raise TransientError("Store unavailable") from e
        return conn
