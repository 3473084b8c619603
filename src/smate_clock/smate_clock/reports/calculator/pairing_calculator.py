from __future__ import annotations

from datetime import datetime
from typing import Iterable

from ...core.enums import ClockEventKind
from ...clock.model import ClockEvent
from .base import WorkedTimeCalculator


class OpenInPairingCalculator(WorkedTimeCalculator):
    """Pair each OUT with the user's open IN.

    An IN replaces any open IN (the earlier one contributes nothing); an OUT
    without an open IN contributes nothing. Users with events but no pairs
    still appear with 0.
    """

    def worked_ms(self, events: Iterable[ClockEvent]) -> dict[int, int]:
        totals: dict[int, int] = {}
        open_in: dict[int, datetime] = {}

        for e in events:
            totals.setdefault(e.user_id, 0)
            if e.kind == ClockEventKind.IN:
                open_in[e.user_id] = e.timestamp
            elif e.user_id in open_in:
                started = open_in.pop(e.user_id)
                totals[e.user_id] += int((e.timestamp - started).total_seconds() * 1000)

        return totals
