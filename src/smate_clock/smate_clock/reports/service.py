from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_REPORT_DAYS, MAX_REPORT_DAYS, MS_PER_HOUR
from ..core.exceptions import UnauthorizedError
from ..clock.repository import ClockEventRepository
from ..users.model import User
from .calculator.base import WorkedTimeCalculator
from .calculator.pairing_calculator import OpenInPairingCalculator
from .model import HoursReport, StaffHours


class ReportingService:
    def __init__(
        self,
        events: ClockEventRepository,
        *,
        calculator: Optional[WorkedTimeCalculator] = None,
    ):
        self._events = events
        self._calculator = calculator or OpenInPairingCalculator()

    def build_hours_report(
        self,
        acting_user: Optional[User],
        *,
        window_days: int = DEFAULT_REPORT_DAYS,
        now: Optional[datetime] = None,
    ) -> HoursReport:
        if acting_user is None:
            raise UnauthorizedError("Unauthorized")
        if not 0 < int(window_days) <= MAX_REPORT_DAYS:
            raise ValueError(f"window_days must be between 1 and {MAX_REPORT_DAYS}")

        end = now or now_utc()
        start = end - timedelta(days=int(window_days))

        # One read; everything below works on this snapshot.
        events = sorted(self._events.list_between(start=start, end=end), key=lambda e: (e.timestamp, e.seq))

        names: dict[int, Optional[str]] = {}
        for e in events:
            if e.user_id not in names:
                names[e.user_id] = e.user.display_name if e.user else None

        per_staff = [
            StaffHours(user_id=user_id, name=names.get(user_id), hours=round(total / MS_PER_HOUR, 2))
            for user_id, total in self._calculator.worked_ms(events).items()
        ]

        total_hours = sum(s.hours for s in per_staff)
        return HoursReport(
            window_days=int(window_days),
            start=start,
            end=end,
            avg_hours_per_day=round(total_hours / int(window_days), 2),
            people_per_day=len({e.user_id for e in events}),
            per_staff=per_staff,
        )
