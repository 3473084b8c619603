from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import TransientError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Server-side conditions that clear up on retry.
_TRANSIENT_ERRNOS = {
    errorcode.ER_LOCK_WAIT_TIMEOUT,
    errorcode.ER_LOCK_DEADLOCK,
    3024,  # ER_QUERY_TIMEOUT (max_execution_time exceeded)
}


def is_transient(exc: mysql.connector.Error) -> bool:
    if isinstance(exc, (mysql.connector.OperationalError, mysql.connector.InterfaceError)):
        return True
    return getattr(exc, "errno", None) in _TRANSIENT_ERRNOS


def _rollback_quietly(conn) -> None:
    # A dropped connection cannot roll back; the server discards the transaction.
    try:
        conn.rollback()
    except mysql.connector.Error as e:
        logger.debug("rollback failed: %s", e)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cur)`` inside one transaction.

    Commits on success, rolls back on any error. Connectivity, timeout and
    deadlock failures are re-raised as ``TransientError``; integrity errors
    propagate unchanged so repositories can map them.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        _rollback_quietly(conn)
        if is_transient(e):
            logger.warning("store call failed transiently: %s", e)
            raise TransientError("Store unavailable or timed out") from e
        raise
    except Exception:
        _rollback_quietly(conn)
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
