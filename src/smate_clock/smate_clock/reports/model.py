from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class StaffHours:
    user_id: int
    name: Optional[str]
    hours: float

    def to_dict(self) -> dict:
        return {"userId": self.user_id, "name": self.name, "hours": self.hours}


@dataclass(frozen=True)
class HoursReport:
    """Read-model for the trailing-window hours report.

    ``people_per_day`` counts distinct users with any event in the whole
    window; it is not averaged per day despite the name.
    """

    window_days: int
    start: datetime
    end: datetime
    avg_hours_per_day: float = 0.0
    people_per_day: int = 0
    per_staff: list[StaffHours] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "windowDays": self.window_days,
            "avgHoursPerDay": self.avg_hours_per_day,
            "peoplePerDay": self.people_per_day,
            "totalHoursPerStaff": [s.to_dict() for s in self.per_staff],
        }
