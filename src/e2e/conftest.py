import itertools
import json
from pathlib import Path

import pytest

from placesearch.models import Place


def make_place(name: str, pid: int, district: str = "Roma", region: str = "Lazio") -> Place:
    return Place(name=name, iso_code="IT-XX", regional_code=f"Z{pid:03d}",
                 id=pid, district=district, region=region)


def write_seed(tmp: Path, rows: list, name: str = "places.json") -> str:
    path = tmp / name
    path.write_text(json.dumps(rows), encoding="utf-8")
    return str(path)


class ManualScheduler:
    """
    Deterministic stand-in for the UI timeline:
      - after()/after_cancel() keep timers on a fake millisecond clock,
      - advance(ms) fires due timers in order,
      - submit() parks lookups in `jobs` until the test runs them.
    """
    def __init__(self) -> None:
        self.now = 0
        self._timers: dict = {}
        self._ids = itertools.count()
        self.jobs: list = []

    def after(self, delay_ms, callback):
        h = next(self._ids)
        self._timers[h] = (self.now + delay_ms, h, callback)
        return h

    def after_cancel(self, handle):
        self._timers.pop(handle, None)

    def submit(self, work, done):
        self.jobs.append((work, done))

    def advance(self, ms: int) -> None:
        target = self.now + ms
        while True:
            due = [t for t in self._timers.values() if t[0] <= target]
            if not due:
                break
            when, h, cb = min(due)
            del self._timers[h]
            self.now = when
            cb()
        self.now = target

    def run_job(self, i: int = 0) -> None:
        work, done = self.jobs.pop(i)
        try:
            result = work()
        except Exception as exc:
            done(None, exc)
        else:
            done(result, None)


class FakeLookup:
    """Records every search and answers from a term -> places table."""
    def __init__(self, table=None, fail_on=()):
        self.table = table or {}
        self.fail_on = set(fail_on)
        self.calls: list = []

    def search(self, term, limit):
        self.calls.append((term, limit))
        if term in self.fail_on:
            from placesearch_client.lookup import LookupFailed
            raise LookupFailed(f"backend down for {term!r}")
        return list(self.table.get(term, []))


@pytest.fixture
def clock():
    return ManualScheduler()


@pytest.fixture
def seed_file(tmp_path: Path) -> str:
    rows = [
        {"name": "Roma", "isoCode": "IT-RM", "belfioreCode": "H501", "cityId": 58091,
         "district": "Roma", "region": "Lazio"},
        {"name": "Romagnano Sesia", "isoCode": "IT-NO", "belfioreCode": "H502", "cityId": 3129,
         "district": "Novara", "region": "Piemonte"},
        {"name": "Bari", "isoCode": "IT-BA", "belfioreCode": "A662", "cityId": 72006,
         "district": "Bari", "region": "Puglia"},
        {"name": "Fiumicino", "isoCode": "IT-RM", "belfioreCode": "M297", "cityId": 58120,
         "district": "Roma", "region": "Lazio"},
        {"name": "Milano", "isoCode": "IT-MI", "belfioreCode": "F205", "cityId": 15146,
         "district": "Milano", "region": "Lombardia"},
    ]
    return write_seed(tmp_path, rows)
