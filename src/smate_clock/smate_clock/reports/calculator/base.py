from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ...clock.model import ClockEvent


class WorkedTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked_ms(self, events: Iterable[ClockEvent]) -> dict[int, int]:
        """Worked milliseconds per user id for events in ascending time order."""

        raise NotImplementedError
