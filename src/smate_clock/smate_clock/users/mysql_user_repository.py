from __future__ import annotations

from typing import Any, Dict, Optional

import mysql.connector

from ..core.enums import Role
from ..core.exceptions import InvalidStateError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, auth_subject, email, name, role, created_at, updated_at"


def row_to_user(row: Dict[str, Any], *, prefix: str = "") -> User:
    return User(
        user_id=int(row[f"{prefix}user_id"]),
        auth_subject=row.get(f"{prefix}auth_subject"),
        email=row[f"{prefix}email"],
        name=row.get(f"{prefix}name"),
        role=Role(row[f"{prefix}role"]),
        created_at=row[f"{prefix}created_at"],
        updated_at=row.get(f"{prefix}updated_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_subject(self, auth_subject: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE auth_subject=%s", (auth_subject,))
            row = fetchone(cur)
            return row_to_user(row) if row else None

    def create_user(self, *, auth_subject: str, email: str, name: Optional[str], role: Role) -> User:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(auth_subject, email, name, role, created_at, updated_at)
                    VALUES(%s,%s,%s,%s,UTC_TIMESTAMP(6),UTC_TIMESTAMP(6))
                    """,
                    (auth_subject, email, name, role.value),
                )
                cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (cur.lastrowid,))
                return row_to_user(fetchone(cur))
        except mysql.connector.IntegrityError as e:
            # Two first requests for the same subject may race; the loser reads the winner's row.
            existing = self.get_by_subject(auth_subject)
            if existing:
                return existing
            raise InvalidStateError("Email is already registered to another user") from e

    def upsert_by_subject(self, *, auth_subject: str, email: str, name: Optional[str], role: Role) -> User:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT {_COLUMNS} FROM users WHERE auth_subject=%s FOR UPDATE", (auth_subject,))
                row = fetchone(cur)
                if row:
                    cur.execute(
                        """
                        UPDATE users
                        SET email=%s, name=%s, role=%s, updated_at=UTC_TIMESTAMP(6)
                        WHERE user_id=%s
                        """,
                        (email, name, role.value, int(row["user_id"])),
                    )
                    user_id = int(row["user_id"])
                else:
                    cur.execute(
                        """
                        INSERT INTO users(auth_subject, email, name, role, created_at, updated_at)
                        VALUES(%s,%s,%s,%s,UTC_TIMESTAMP(6),UTC_TIMESTAMP(6))
                        """,
                        (auth_subject, email, name, role.value),
                    )
                    user_id = int(cur.lastrowid)
                cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
                return row_to_user(fetchone(cur))
        except mysql.connector.IntegrityError as e:
            raise InvalidStateError("Email is already registered to another user") from e
