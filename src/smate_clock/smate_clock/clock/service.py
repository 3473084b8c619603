from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.enums import ClockEventKind, Role
from ..core.exceptions import ForbiddenError, InvalidStateError, OutsidePerimeterError, UnauthorizedError
from ..locations.model import Location
from ..locations.service import LocationRegistry
from ..users.model import User
from .model import ClockEvent
from .repository import ClockEventRepository

logger = logging.getLogger(__name__)

ALREADY_CLOCKED_IN = "Already clocked in"
NOT_CLOCKED_IN = "Not clocked in"


def _require_user(acting_user: Optional[User]) -> User:
    if acting_user is None:
        raise UnauthorizedError("Unauthorized")
    return acting_user


class ClockLedgerService:
    """Use case: clock in/out against a geofenced location.

    Per user the ledger alternates IN, OUT, IN, ... starting with IN; having
    no events means clocked out. Illegal transitions are rejected, never
    corrected.
    """

    def __init__(self, events: ClockEventRepository, locations: LocationRegistry):
        self._events = events
        self._locations = locations

    def _admit(self, acting_user: Optional[User], location_id: int, lat: float, lng: float) -> tuple[User, Location]:
        user = _require_user(acting_user)
        location = self._locations.require(location_id)

        distance = location.distance_to(lat, lng)
        if distance > location.radius:
            logger.warning(
                "user %s is %.1fm from location %s (radius %.1fm)",
                user.user_id,
                distance,
                location.location_id,
                location.radius,
            )
            raise OutsidePerimeterError("Outside allowed perimeter")
        return user, location

    def _append(
        self,
        *,
        user: User,
        location: Location,
        kind: ClockEventKind,
        lat: float,
        lng: float,
        note: Optional[str],
        latest: Optional[ClockEvent],
        conflict_message: str,
    ) -> ClockEvent:
        event = self._events.append(
            user_id=user.user_id,
            location_id=location.location_id,
            kind=kind,
            lat=lat,
            lng=lng,
            note=note,
            expected_seq=latest.seq if latest else 0,
        )
        if event is None:
            raise InvalidStateError(conflict_message)

        logger.info("user %s clocked %s at location %s", user.user_id, kind.value, location.location_id)
        return event

    def clock_in(
        self,
        acting_user: Optional[User],
        location_id: int,
        lat: float,
        lng: float,
        note: Optional[str] = None,
    ) -> ClockEvent:
        user, location = self._admit(acting_user, location_id, lat, lng)

        latest = self._events.get_latest_for_user(user.user_id)
        if latest and latest.kind == ClockEventKind.IN:
            raise InvalidStateError(ALREADY_CLOCKED_IN)

        return self._append(
            user=user,
            location=location,
            kind=ClockEventKind.IN,
            lat=lat,
            lng=lng,
            note=note,
            latest=latest,
            conflict_message=ALREADY_CLOCKED_IN,
        )

    def clock_out(
        self,
        acting_user: Optional[User],
        location_id: int,
        lat: float,
        lng: float,
        note: Optional[str] = None,
    ) -> ClockEvent:
        user, location = self._admit(acting_user, location_id, lat, lng)

        latest = self._events.get_latest_for_user(user.user_id)
        if not latest or latest.kind != ClockEventKind.IN:
            raise InvalidStateError(NOT_CLOCKED_IN)

        return self._append(
            user=user,
            location=location,
            kind=ClockEventKind.OUT,
            lat=lat,
            lng=lng,
            note=note,
            latest=latest,
            conflict_message=NOT_CLOCKED_IN,
        )

    def list_for_user(self, acting_user: Optional[User]) -> Sequence[ClockEvent]:
        user = _require_user(acting_user)
        return self._events.list_for_user(user.user_id)

    def list_currently_clocked_in(self, acting_user: Optional[User]) -> Sequence[ClockEvent]:
        user = _require_user(acting_user)
        if user.role != Role.MANAGER:
            raise ForbiddenError("Forbidden")
        return self._events.list_latest_clocked_in()
