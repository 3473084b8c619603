from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Location
from .repository import LocationRepository


def row_to_location(row: Dict[str, Any], *, prefix: str = "") -> Location:
    return Location(
        location_id=int(row[f"{prefix}location_id"]),
        name=row[f"{prefix}name"],
        lat=float(row[f"{prefix}lat"]),
        lng=float(row[f"{prefix}lng"]),
        radius=float(row[f"{prefix}radius"]),
    )


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, location_id: int) -> Optional[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT location_id, name, lat, lng, radius FROM locations WHERE location_id=%s",
                (int(location_id),),
            )
            row = fetchone(cur)
            return row_to_location(row) if row else None

    def list_all(self) -> Sequence[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT location_id, name, lat, lng, radius FROM locations ORDER BY location_id")
            return [row_to_location(r) for r in fetchall(cur)]
