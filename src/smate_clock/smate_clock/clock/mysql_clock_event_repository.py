from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.enums import ClockEventKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..locations.mysql_location_repository import row_to_location
from ..users.mysql_user_repository import row_to_user
from .model import ClockEvent
from .repository import ClockEventRepository

logger = logging.getLogger(__name__)

_EVENT_COLUMNS = "e.event_id, e.user_id, e.location_id, e.seq, e.kind, e.lat, e.lng, e.note, e.timestamp"
_USER_COLUMNS = (
    "u.user_id AS u_user_id, u.auth_subject AS u_auth_subject, u.email AS u_email, u.name AS u_name, "
    "u.role AS u_role, u.created_at AS u_created_at, u.updated_at AS u_updated_at"
)
_LOCATION_COLUMNS = (
    "l.location_id AS l_location_id, l.name AS l_name, l.lat AS l_lat, l.lng AS l_lng, l.radius AS l_radius"
)

_ENRICHED_SELECT = f"""
    SELECT {_EVENT_COLUMNS}, {_USER_COLUMNS}, {_LOCATION_COLUMNS}
    FROM clock_events e
    JOIN users u ON u.user_id = e.user_id
    JOIN locations l ON l.location_id = e.location_id
"""


def row_to_event(row: Dict[str, Any], *, with_user: bool = False, with_location: bool = False) -> ClockEvent:
    return ClockEvent(
        event_id=int(row["event_id"]),
        user_id=int(row["user_id"]),
        location_id=int(row["location_id"]),
        seq=int(row["seq"]),
        kind=ClockEventKind(row["kind"]),
        lat=float(row["lat"]),
        lng=float(row["lng"]),
        timestamp=row["timestamp"],
        note=row.get("note"),
        user=row_to_user(row, prefix="u_") if with_user else None,
        location=row_to_location(row, prefix="l_") if with_location else None,
    )


class MySQLClockEventRepository(ClockEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_latest_for_user(self, user_id: int) -> Optional[ClockEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EVENT_COLUMNS}
                FROM clock_events e
                WHERE e.user_id=%s
                ORDER BY e.seq DESC
                LIMIT 1
                """,
                (user_id,),
            )
            row = fetchone(cur)
            return row_to_event(row) if row else None

    def append(
        self,
        *,
        user_id: int,
        location_id: int,
        kind: ClockEventKind,
        lat: float,
        lng: float,
        note: Optional[str],
        expected_seq: int,
    ) -> Optional[ClockEvent]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # Per-user lock for the read-check-insert sequence.
                cur.execute("SELECT user_id FROM users WHERE user_id=%s FOR UPDATE", (user_id,))
                if not fetchone(cur):
                    return None

                cur.execute(
                    "SELECT seq, timestamp FROM clock_events WHERE user_id=%s ORDER BY seq DESC LIMIT 1",
                    (user_id,),
                )
                last = fetchone(cur)
                current_seq = int(last["seq"]) if last else 0
                if current_seq != int(expected_seq):
                    logger.info("append for user %s lost to a concurrent append (seq %s)", user_id, current_seq)
                    return None

                # Store time, nudged past the previous event so ordering stays strict.
                cur.execute(
                    """
                    INSERT INTO clock_events(user_id, location_id, seq, kind, lat, lng, note, timestamp)
                    VALUES(
                        %s,%s,%s,%s,%s,%s,%s,
                        GREATEST(UTC_TIMESTAMP(6), COALESCE(%s + INTERVAL 1 MICROSECOND, UTC_TIMESTAMP(6)))
                    )
                    """,
                    (
                        user_id,
                        location_id,
                        current_seq + 1,
                        kind.value,
                        float(lat),
                        float(lng),
                        note,
                        last["timestamp"] if last else None,
                    ),
                )
                event_id = int(cur.lastrowid)

                cur.execute(f"{_ENRICHED_SELECT} WHERE e.event_id=%s", (event_id,))
                return row_to_event(fetchone(cur), with_user=True, with_location=True)
        except mysql.connector.IntegrityError as e:
            # UNIQUE(user_id, seq) rejected a second append on the same sequence.
            logger.info("append for user %s rejected by store: %s", user_id, e)
            return None

    def list_for_user(self, user_id: int) -> Sequence[ClockEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_ENRICHED_SELECT} WHERE e.user_id=%s ORDER BY e.timestamp DESC, e.seq DESC", (user_id,))
            return [row_to_event(r, with_user=True, with_location=True) for r in fetchall(cur)]

    def list_latest_clocked_in(self) -> Sequence[ClockEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_ENRICHED_SELECT}
                JOIN (
                    SELECT user_id, MAX(seq) AS seq
                    FROM clock_events
                    GROUP BY user_id
                ) latest ON latest.user_id = e.user_id AND latest.seq = e.seq
                WHERE e.kind='IN'
                ORDER BY e.timestamp DESC
                """
            )
            return [row_to_event(r, with_user=True, with_location=True) for r in fetchall(cur)]

    def list_between(self, *, start: datetime, end: datetime) -> Sequence[ClockEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_ENRICHED_SELECT}
                WHERE e.timestamp BETWEEN %s AND %s
                ORDER BY e.timestamp ASC, e.event_id ASC
                """,
                (start, end),
            )
            return [row_to_event(r, with_user=True, with_location=True) for r in fetchall(cur)]
