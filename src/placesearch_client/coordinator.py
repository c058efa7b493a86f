"""
Input coordinator for a place-search box.

Turns a bursty keystroke stream into a few well-timed lookups:

  on_input -> debounce (DEBOUNCE_MS) -> drop repeats -> min-length gate
           -> lookup (off the timeline) -> apply only if still the latest

Every state change is published as a ViewState snapshot to `on_change`.
All entry points are expected to be called from the scheduler's timeline
(the UI thread), so no locking is needed here.
"""
from __future__ import annotations
import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Protocol

from placesearch.models import Place
from . import config as CFG
from .scheduler import Scheduler

log = logging.getLogger(__name__)


class Lookup(Protocol):
    def search(self, term: str, limit: int) -> List[Place]: ...


@dataclass(frozen=True)
class SearchRequest:
    term: str
    sequence_id: int


@dataclass(frozen=True)
class ViewState:
    term: str = ""
    places: List[Place] = field(default_factory=list)
    is_loading: bool = False
    error_message: str = ""
    show_dropdown: bool = False
    selected: Optional[Place] = None


class InputCoordinator:
    def __init__(
        self,
        lookup: Lookup,
        scheduler: Scheduler,
        *,
        limit: int = CFG.DEFAULT_LIMIT,
        debounce_ms: int = CFG.DEBOUNCE_MS,
        min_length: int = CFG.MIN_QUERY_LENGTH,
        blur_grace_ms: int = CFG.BLUR_GRACE_MS,
        on_change: Optional[Callable[[ViewState], None]] = None,
        on_selected: Optional[Callable[[Optional[Place]], None]] = None,
    ) -> None:
        self._lookup = lookup
        self._scheduler = scheduler
        self.limit = limit
        self.debounce_ms = debounce_ms
        self.min_length = min_length
        self.blur_grace_ms = blur_grace_ms
        self._on_change = on_change
        self._on_selected = on_selected

        self._state = ViewState()
        self._pending_term = ""
        self._last_term: Optional[str] = None   # last debounced term, for repeat suppression
        self._seq = 0                           # highest issued request id
        self._debounce_handle: Any = None
        self._blur_handle: Any = None

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def current_sequence_id(self) -> int:
        return self._seq

    # ---------- user events ----------

    def on_input(self, term: str) -> None:
        """Record the latest raw term and restart the debounce timer."""
        self._pending_term = term
        self._set(term=term)
        self._cancel_debounce()
        self._debounce_handle = self._scheduler.after(self.debounce_ms, self._on_debounced)

    def on_select(self, place: Place) -> None:
        self._reset_pipeline()
        self._set(selected=place, term=place.name, show_dropdown=False, is_loading=False)
        if self._on_selected:
            self._on_selected(place)

    def on_clear(self) -> None:
        self._reset_pipeline()
        self._pending_term = ""
        self._set(term="", places=[], selected=None, show_dropdown=False,
                  is_loading=False, error_message="")
        if self._on_selected:
            self._on_selected(None)

    def on_focus(self) -> None:
        self._cancel_blur()
        if self._state.places:
            self._set(show_dropdown=True)

    def on_blur(self) -> None:
        # grace period lets a click on a visible item land first
        self._cancel_blur()
        self._blur_handle = self._scheduler.after(self.blur_grace_ms, self._hide_dropdown)

    # ---------- pipeline ----------

    def _on_debounced(self) -> None:
        self._debounce_handle = None
        term = self._pending_term
        if term == self._last_term:
            log.debug("suppressing repeated term %r", term)
            return
        self._last_term = term

        self._seq += 1   # supersedes anything still in flight
        if len(term.strip()) < self.min_length:
            self._set(places=[], is_loading=False, show_dropdown=False)
            return

        req = SearchRequest(term=term, sequence_id=self._seq)
        self._set(is_loading=True, error_message="")
        log.debug("dispatching %s", req)
        self._scheduler.submit(
            lambda: self._lookup.search(req.term, self.limit),
            lambda result, exc: self._on_lookup_done(req, result, exc),
        )

    def _on_lookup_done(self, req: SearchRequest, result: Optional[List[Place]],
                        exc: Optional[BaseException]) -> None:
        if req.sequence_id != self._seq:
            log.debug("discarding stale response for %s (current=%d)", req, self._seq)
            return
        if exc is not None:
            log.warning("lookup for %r failed: %s", req.term, exc)
            self._set(places=[], is_loading=False, show_dropdown=False,
                      error_message=CFG.ERROR_MESSAGE)
            return
        places = list(result or [])
        self._set(places=places, is_loading=False, show_dropdown=bool(places))

    def _hide_dropdown(self) -> None:
        self._blur_handle = None
        self._set(show_dropdown=False)

    # ---------- internals ----------

    def _reset_pipeline(self) -> None:
        self._cancel_debounce()
        self._cancel_blur()
        self._last_term = None
        self._seq += 1

    def _cancel_debounce(self) -> None:
        if self._debounce_handle is not None:
            self._scheduler.after_cancel(self._debounce_handle)
            self._debounce_handle = None

    def _cancel_blur(self) -> None:
        if self._blur_handle is not None:
            self._scheduler.after_cancel(self._blur_handle)
            self._blur_handle = None

    def _set(self, **changes: Any) -> None:
        self._state = dataclasses.replace(self._state, **changes)
        if self._on_change:
            self._on_change(self._state)
