from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ClockEventKind
from .model import ClockEvent


class ClockEventRepository(Protocol):
    """Append-only store of clock events. There is no update or delete."""

    def get_latest_for_user(self, user_id: int) -> Optional[ClockEvent]:
        raise NotImplementedError

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
        """Atomically append the user's event number ``expected_seq + 1``.

        The store assigns the timestamp. Returns the stored event with user
        and location attached, or ``None`` when the user's latest sequence is
        no longer ``expected_seq`` (a concurrent append won).
        """

        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[ClockEvent]:
        """Events of one user, newest first, with user and location attached."""

        raise NotImplementedError

    def list_latest_clocked_in(self) -> Sequence[ClockEvent]:
        """Each user's latest event where that event is an IN."""

        raise NotImplementedError

    def list_between(self, *, start: datetime, end: datetime) -> Sequence[ClockEvent]:
        """Events with ``start <= timestamp <= end`` in one read, with users attached."""

        raise NotImplementedError
