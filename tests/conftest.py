from __future__ import annotations

import threading
from datetime import datetime, timedelta
from typing import Optional

import pytest

from smate_clock.auth.claims import VerifiedClaims
from smate_clock.clock.model import ClockEvent
from smate_clock.container import assemble_container
from smate_clock.core.enums import ClockEventKind, Role
from smate_clock.core.exceptions import InvalidStateError, UnauthorizedError
from smate_clock.locations.model import Location
from smate_clock.main import create_app
from smate_clock.users.model import User

SF_LAT = 37.7749
SF_LNG = -122.4194


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class InMemoryUsers:
    def __init__(self, clock: FakeClock):
        self._clock = clock
        self._by_id: dict[int, User] = {}
        self._id = 0

    def add(self, *, auth_subject: str, email: str, name: Optional[str], role: Role) -> User:
        self._id += 1
        now = self._clock()
        user = User(
            user_id=self._id,
            auth_subject=auth_subject,
            email=email,
            name=name,
            role=role,
            created_at=now,
            updated_at=now,
        )
        self._by_id[user.user_id] = user
        return user

    def all(self) -> list[User]:
        return list(self._by_id.values())

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_subject(self, auth_subject: str) -> Optional[User]:
        for u in self._by_id.values():
            if u.auth_subject == auth_subject:
                return u
        return None

    def _check_email(self, email: str, *, except_id: Optional[int] = None) -> None:
        for u in self._by_id.values():
            if u.email == email and u.user_id != except_id:
                raise InvalidStateError("Email is already registered to another user")

    def create_user(self, *, auth_subject: str, email: str, name: Optional[str], role: Role) -> User:
        existing = self.get_by_subject(auth_subject)
        if existing:
            return existing
        self._check_email(email)
        return self.add(auth_subject=auth_subject, email=email, name=name, role=role)

    def upsert_by_subject(self, *, auth_subject: str, email: str, name: Optional[str], role: Role) -> User:
        existing = self.get_by_subject(auth_subject)
        if not existing:
            return self.create_user(auth_subject=auth_subject, email=email, name=name, role=role)
        self._check_email(email, except_id=existing.user_id)
        updated = User(
            user_id=existing.user_id,
            auth_subject=auth_subject,
            email=email,
            name=name,
            role=role,
            created_at=existing.created_at,
            updated_at=self._clock(),
        )
        self._by_id[existing.user_id] = updated
        return updated


class InMemoryLocations:
    def __init__(self, locations: list[Location]):
        self._by_id = {loc.location_id: loc for loc in locations}

    def get_by_id(self, location_id: int) -> Optional[Location]:
        return self._by_id.get(location_id)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda loc: loc.location_id)


class InMemoryClockEvents:
    """Append-only event store; ``append`` is atomic like the MySQL version."""

    def __init__(self, clock: FakeClock, users: InMemoryUsers, locations: InMemoryLocations):
        self._clock = clock
        self._users = users
        self._locations = locations
        self._events: list[ClockEvent] = []
        self._lock = threading.Lock()

    def all(self) -> list[ClockEvent]:
        return list(self._events)

    def _enrich(self, e: ClockEvent) -> ClockEvent:
        return ClockEvent(
            event_id=e.event_id,
            user_id=e.user_id,
            location_id=e.location_id,
            seq=e.seq,
            kind=e.kind,
            lat=e.lat,
            lng=e.lng,
            timestamp=e.timestamp,
            note=e.note,
            user=self._users.get_by_id(e.user_id),
            location=self._locations.get_by_id(e.location_id),
        )

    def _latest(self, user_id: int) -> Optional[ClockEvent]:
        mine = [e for e in self._events if e.user_id == user_id]
        return max(mine, key=lambda e: e.seq) if mine else None

    def seed(self, *, user_id: int, kind: ClockEventKind, timestamp: datetime, location_id: int = 1) -> ClockEvent:
        """Insert a historical event with a fixed timestamp (reports)."""
        latest = self._latest(user_id)
        event = ClockEvent(
            event_id=len(self._events) + 1,
            user_id=user_id,
            location_id=location_id,
            seq=(latest.seq if latest else 0) + 1,
            kind=kind,
            lat=SF_LAT,
            lng=SF_LNG,
            timestamp=timestamp,
        )
        self._events.append(event)
        return event

    def get_latest_for_user(self, user_id: int) -> Optional[ClockEvent]:
        return self._latest(user_id)

    def append(self, *, user_id, location_id, kind, lat, lng, note, expected_seq) -> Optional[ClockEvent]:
        with self._lock:
            latest = self._latest(user_id)
            if (latest.seq if latest else 0) != expected_seq:
                return None
            timestamp = self._clock()
            if latest and timestamp <= latest.timestamp:
                timestamp = latest.timestamp + timedelta(microseconds=1)
            event = ClockEvent(
                event_id=len(self._events) + 1,
                user_id=user_id,
                location_id=location_id,
                seq=expected_seq + 1,
                kind=kind,
                lat=lat,
                lng=lng,
                timestamp=timestamp,
                note=note,
            )
            self._events.append(event)
            return self._enrich(event)

    def list_for_user(self, user_id: int):
        mine = [self._enrich(e) for e in self._events if e.user_id == user_id]
        return sorted(mine, key=lambda e: (e.timestamp, e.seq), reverse=True)

    def list_latest_clocked_in(self):
        latest = [self._latest(uid) for uid in {e.user_id for e in self._events}]
        out = [self._enrich(e) for e in latest if e and e.kind == ClockEventKind.IN]
        return sorted(out, key=lambda e: e.timestamp, reverse=True)

    def list_between(self, *, start: datetime, end: datetime):
        return [self._enrich(e) for e in self._events if start <= e.timestamp <= end]


class FakeAuthenticator:
    """Maps opaque test tokens to claims."""

    def __init__(self):
        self.tokens: dict[str, VerifiedClaims] = {}

    def authenticate(self, token: str) -> VerifiedClaims:
        claims = self.tokens.get(token)
        if claims is None:
            raise UnauthorizedError("Invalid token")
        return claims


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 2, 2, 8, 0, 0))


@pytest.fixture
def location() -> Location:
    return Location(location_id=1, name="Main Hospital", lat=SF_LAT, lng=SF_LNG, radius=2000)


@pytest.fixture
def users_repo(clock) -> InMemoryUsers:
    return InMemoryUsers(clock)


@pytest.fixture
def locations_repo(location) -> InMemoryLocations:
    return InMemoryLocations([location])


@pytest.fixture
def events_repo(clock, users_repo, locations_repo) -> InMemoryClockEvents:
    return InMemoryClockEvents(clock, users_repo, locations_repo)


@pytest.fixture
def authenticator() -> FakeAuthenticator:
    return FakeAuthenticator()


@pytest.fixture
def container(users_repo, locations_repo, events_repo, authenticator):
    return assemble_container(
        users_repo=users_repo,
        locations_repo=locations_repo,
        events_repo=events_repo,
        authenticator=authenticator,
    )


@pytest.fixture
def care_user(users_repo) -> User:
    return users_repo.add(auth_subject="auth0|care", email="care@local.test", name="Care Worker", role=Role.CARE)


@pytest.fixture
def manager(users_repo) -> User:
    return users_repo.add(auth_subject="auth0|manager", email="manager@local.test", name="Manager", role=Role.MANAGER)


@pytest.fixture
def client(container):
    app = create_app(container, settings_module="smate_clock.config.testing")
    return app.test_client()
