# placesearch/store/api.py
from __future__ import annotations
from typing import Protocol, Iterable, Iterator, Optional

from ..models import Place


class StoreError(RuntimeError):
    """The candidate store could not be read or written."""


class PlaceStore(Protocol):
    # Create
    def create(self, p: Place) -> None: ...
    def bulk_create(self, items: Iterable[Place]) -> int: ...
    # Read
    def read(self, pid: int) -> Place: ...
    def read_many(self, ids: Iterable[int]) -> Iterator[Place]: ...
    def read_all(self, limit: Optional[int] = None) -> list[Place]: ...
    def count(self) -> int: ...
    # Update
    def update(
        self,
        pid: int,
        *,
        name: Optional[str] = None,
        iso_code: Optional[str] = None,
        regional_code: Optional[str] = None,
        district: Optional[str] = None,
        region: Optional[str] = None,
    ) -> None: ...
    # Delete
    def delete(self, pid: int) -> None: ...
    # lifecycle
    def close(self) -> None: ...


def make_store(dsn: str, *, places: Optional[Iterable[Place]] = None) -> PlaceStore:
    """
    Factory:
      - sqlite:///path -> SQLiteStore (schema created on open; seeding is the caller's job)
      - memory://      -> MemoryStore (seeded with `places` when given)
    """
    if dsn.startswith("sqlite:///"):
        from .sqlite_store import SQLiteStore
        return SQLiteStore(dsn.removeprefix("sqlite:///"))

    if dsn.startswith("memory://"):
        from .memory_store import MemoryStore
        return MemoryStore(places=places)

    raise ValueError(f"Unsupported store DSN: {dsn}")
