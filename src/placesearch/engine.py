# placesearch/engine.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from . import config as CFG
from .loader import load_places
from .models import Place
from .ranking import rank
from .store.api import PlaceStore, make_store

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - the candidate set, held by a PlaceStore (SQLite or in-memory),
      - seeding from .json/.csv files (loader.load_places),
      - the ranking pipeline (ranking.rank).

    Public API (used by CLI/Flask):
      * build(sources, ...): load seed files -> store (seeded only when empty)
      * load(...):           attach an existing store
      * search(query, limit): ranked places
      * list_all(limit):      places in store order
      * shutdown():           close underlying resources

    Storage DSNs (via store.api.make_store):
      - "sqlite:///path/to/places.sqlite"
      - "memory://"
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self._store: Optional[PlaceStore] = None

    # /* ~~~ Seed a store from source files ~~~ */
    def build(
        self,
        sources: Iterable[str],
        *,
        db_dsn: Optional[str] = None,          # e.g., "sqlite:///./places.sqlite" or "memory://"
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)

        sources = list(sources)
        if not sources:
            raise ValueError("build(): at least one seed file is required")

        log.info("Loading places from %s", sources)
        places: List[Place] = load_places(sources)

        dsn = db_dsn or CFG.STORE_DSN
        log.info("Initializing place store: %s", dsn)
        store = make_store(dsn, places=places)

        # memory:// is seeded by make_store; seed SQLite on first build only
        if not dsn.startswith("memory://"):
            if store.count() == 0:
                store.bulk_create(places)
            else:
                log.info("Store already holds %d places; seed files not re-applied", store.count())

        self._store = store
        log.info("Engine build() complete: places=%d", store.count())

    # /* ~~~ Attach an already-seeded store ~~~ */
    def load(self, *, db_dsn: Optional[str] = None, verbose: bool = False) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)

        dsn = db_dsn or CFG.STORE_DSN
        if dsn.startswith("memory://"):
            raise ValueError("load(): an in-memory store has nothing to load; use build()")

        log.info("Initializing place store: %s", dsn)
        self._store = make_store(dsn)
        log.info("Engine load() complete: places=%d", self._store.count())

    def attach(self, store: PlaceStore) -> None:
        """Use a store the caller already built."""
        self._store = store

    # ------------- query -------------

    @property
    def store(self) -> PlaceStore:
        if self._store is None:
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        return self._store

    # /* ~~~ Rank the whole candidate set against a user query ~~~ */
    def search(self, query: str, *, limit: int = CFG.DEFAULT_LIMIT) -> List[Place]:
        candidates = self.store.read_all()
        results = rank(query, candidates, limit)
        log.debug("search %r: %d/%d candidates matched (limit=%d)",
                  query, len(results), len(candidates), limit)
        return results

    def list_all(self, *, limit: int = CFG.LIST_LIMIT) -> List[Place]:
        return self.store.read_all(limit=limit)

    def count(self) -> int:
        return self.store.count()

    # ------------- teardown -------------

    # /* ~~~ Close underlying resources (DB handles, etc.) ~~~ */
    def shutdown(self) -> None:
        try:
            if self._store:
                self._store.close()
        finally:
            self._store = None
            log.info("Engine shutdown complete")
