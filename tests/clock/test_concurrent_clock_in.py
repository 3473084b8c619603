from __future__ import annotations

import threading

from smate_clock.clock.service import ClockLedgerService
from smate_clock.core.enums import ClockEventKind
from smate_clock.core.exceptions import InvalidStateError
from smate_clock.locations.service import LocationRegistry

from conftest import SF_LAT, SF_LNG


class BarrierOnRead:
    """Holds every reader until both requests have read the latest event."""

    def __init__(self, inner, parties: int):
        self._inner = inner
        self._barrier = threading.Barrier(parties, timeout=5)

    def get_latest_for_user(self, user_id):
        latest = self._inner.get_latest_for_user(user_id)
        self._barrier.wait()
        return latest

    def __getattr__(self, name):
        return getattr(self._inner, name)


def test_two_concurrent_clock_ins_one_wins(events_repo, locations_repo, care_user):
    ledger = ClockLedgerService(BarrierOnRead(events_repo, 2), LocationRegistry(locations_repo))
    results: list[object] = []
    lock = threading.Lock()

    def attempt():
        try:
            outcome = ledger.clock_in(care_user, 1, SF_LAT, SF_LNG)
        except InvalidStateError as e:
            outcome = e
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=attempt) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    successes = [r for r in results if not isinstance(r, InvalidStateError)]
    failures = [r for r in results if isinstance(r, InvalidStateError)]
    assert len(successes) == 1
    assert len(failures) == 1
    assert failures[0].message == "Already clocked in"
    assert [e.kind for e in events_repo.all()] == [ClockEventKind.IN]
