# placesearch/store/sqlite_store.py
from __future__ import annotations
import os
import sqlite3
import threading
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

from .api import PlaceStore, StoreError
from ..models import Place

# seq keeps seeding order, which is the ranking tie-break order
_SCHEMA = """
CREATE TABLE IF NOT EXISTS places (
  seq INTEGER PRIMARY KEY AUTOINCREMENT,
  id INTEGER NOT NULL UNIQUE,
  name TEXT NOT NULL,
  iso_code TEXT NOT NULL,
  regional_code TEXT NOT NULL,
  district TEXT NOT NULL,
  region TEXT NOT NULL
);
"""

_MAX_SQLITE_INT = 2**63 - 1

_COLS = "name,iso_code, regional_code, id, district, region"

_UPSERT = (
    f"INSERT INTO places({_COLS}) VALUES (?,?,?,?,?,?) "
    "ON CONFLICT(id) DO UPDATE SET name=excluded.name, iso_code=excluded.iso_code, "
    "regional_code=excluded.regional_code, district=excluded.district, region=excluded.region"
)


def _row(p: Place) -> tuple:
    return (p.name, p.iso_code, p.regional_code, int(p.id), p.district, p.region)


def _place(r: tuple) -> Place:
    return Place(name=r[0], iso_code=r[1], regional_code=r[2], id=int(r[3]), district=r[4], region=r[5])


class SQLiteStore(PlaceStore):
    """CRUD over a single SQLite file. One connection, shared across threads behind a lock."""
    def __init__(self, db_path: str) -> None:
        self.path = db_path
        self._lock = threading.Lock()
        try:
            os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
            self.conn = sqlite3.connect(db_path, check_same_thread=False)
            self.conn.executescript(_SCHEMA)
        except (OSError, sqlite3.Error) as exc:
            raise StoreError(f"cannot open place store {db_path!r}: {exc}") from exc

    @contextmanager
    def _cursor(self):
        with self._lock:
            try:
                yield self.conn
            except sqlite3.Error as exc:
                raise StoreError(f"place store {self.path!r}: {exc}") from exc

    # ---- Create ----
    def create(self, p: Place) -> None:
        with self._cursor() as c:
            c.execute(_UPSERT, _row(p))
            c.commit()

    def bulk_create(self, items: Iterable[Place]) -> int:
        rows = [_row(p) for p in items]
        with self._cursor() as c:
            c.executemany(_UPSERT, rows)
            c.commit()
        return len(rows)

    # ---- Read ----
    def read(self, pid: int) -> Place:
        with self._cursor() as c:
            r = c.execute(f"SELECT {_COLS} FROM places WHERE id=?", (int(pid),)).fetchone()
        if r is None:
            raise KeyError(pid)
        return _place(r)

    def read_many(self, ids: Iterable[int]) -> Iterator[Place]:
        for pid in ids:
            try:
                yield self.read(pid)
            except KeyError:
                continue

    def read_all(self, limit: Optional[int] = None) -> list[Place]:
        sql = f"SELECT {_COLS} FROM places ORDER BY seq"
        args: tuple = ()
        # limits past SQLite's 64-bit INTEGER range mean "everything"
        if limit is not None and int(limit) < _MAX_SQLITE_INT:
            sql += " LIMIT ?"
            args = (max(0, int(limit)),)
        with self._cursor() as c:
            return [_place(r) for r in c.execute(sql, args).fetchall()]

    def count(self) -> int:
        with self._cursor() as c:
            return int(c.execute("SELECT COUNT(*) FROM places").fetchone()[0])

    # ---- Update ----
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
        sets, vals = [], []
        if name is not None:           sets += ["name=?"];           vals += [name]
        if iso_code is not None:       sets += ["iso_code=?"];       vals += [iso_code]
        if regional_code is not None:  sets += ["regional_code=?"];  vals += [regional_code]
        if district is not None:       sets += ["district=?"];       vals += [district]
        if region is not None:         sets += ["region=?"];         vals += [region]
        if not sets:
            return
        vals += [int(pid)]
        with self._cursor() as c:
            cur = c.execute(f"UPDATE places SET {', '.join(sets)} WHERE id=?", vals)
            c.commit()
        if cur.rowcount == 0:
            raise KeyError(pid)

    # ---- Delete ----
    def delete(self, pid: int) -> None:
        with self._cursor() as c:
            c.execute("DELETE FROM places WHERE id=?", (int(pid),))
            c.commit()

    # ---- lifecycle ----
    def close(self) -> None:
        with self._lock:
            self.conn.close()
