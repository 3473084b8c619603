from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import ClockEventKind
from ..locations.model import Location
from ..users.model import User


@dataclass(frozen=True)
class ClockEvent:
    """Domain entity: one immutable entry of a user's clock ledger.

    ``seq`` numbers a user's events from 1 without gaps; ``timestamp`` is
    assigned by the store and increases with ``seq``. ``user`` and
    ``location`` are filled in by read models that join them.
    """

    event_id: int
    user_id: int
    location_id: int
    seq: int
    kind: ClockEventKind
    lat: float
    lng: float
    timestamp: datetime
    note: Optional[str] = None
    user: Optional[User] = None
    location: Optional[Location] = None

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "type": self.kind.value,
            "lat": self.lat,
            "lng": self.lng,
            "note": self.note,
            "timestamp": to_iso(self.timestamp),
            "user": self.user.to_dict() if self.user else {"id": self.user_id},
            "location": self.location.to_dict() if self.location else {"id": self.location_id},
        }
