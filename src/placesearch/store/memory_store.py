# placesearch/store/memory_store.py
from __future__ import annotations
import dataclasses
import threading
from typing import Dict, Iterable, Iterator, Optional

from .api import PlaceStore
from ..models import Place


class MemoryStore(PlaceStore):
    """In-memory CRUD keyed by place id; insertion order, every access under one lock."""
    def __init__(self, places: Optional[Iterable[Place]] = None) -> None:
        self._rows: Dict[int, Place] = {}
        self._lock = threading.Lock()
        if places:
            for p in places:
                self._rows.setdefault(int(p.id), p)

    # C
    def create(self, p: Place) -> None:
        with self._lock:
            self._rows[int(p.id)] = p

    def bulk_create(self, items: Iterable[Place]) -> int:
        n = 0
        with self._lock:
            for p in items:
                self._rows[int(p.id)] = p; n += 1
        return n

    # R
    def read(self, pid: int) -> Place:
        with self._lock:
            p = self._rows.get(int(pid))
        if p is None:
            raise KeyError(pid)
        return p

    def read_many(self, ids: Iterable[int]) -> Iterator[Place]:
        for pid in ids:
            with self._lock:
                p = self._rows.get(int(pid))
            if p is not None:
                yield p

    def read_all(self, limit: Optional[int] = None) -> list[Place]:
        with self._lock:
            rows = list(self._rows.values())
        return rows if limit is None else rows[:max(0, limit)]

    def count(self) -> int:
        with self._lock:
            return len(self._rows)

    # U
    def update(
        self,
        pid: int,
        *,
        name: Optional[str] = None,
        iso_code: Optional[str] = None,
        regional_code: Optional[str] = None,
        district: Optional[str] = None,
        region: Optional[str] = None,
    ) -> None:
        changes = {
            k: v for k, v in (
                ("name", name), ("iso_code", iso_code), ("regional_code", regional_code),
                ("district", district), ("region", region),
            ) if v is not None
        }
        with self._lock:
            p = self._rows.get(int(pid))
            if p is None:
                raise KeyError(pid)
            self._rows[int(pid)] = dataclasses.replace(p, **changes)

    # D
    def delete(self, pid: int) -> None:
        with self._lock:
            self._rows.pop(int(pid), None)

    def close(self) -> None:
        with self._lock:
            self._rows.clear()
