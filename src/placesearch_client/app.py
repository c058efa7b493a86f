# placesearch_client/app.py
# CustomTkinter place picker hosting one InputCoordinator.
# - Keystrokes feed the coordinator; Tk's after()/after_cancel() is its timeline.
# - Lookups run on background threads and hop back with after(0, ...).

from __future__ import annotations
import argparse
import logging
import threading
from typing import Any, Callable, List, Optional

import customtkinter as ctk

from placesearch.models import Place
from . import config as CFG
from .coordinator import InputCoordinator, ViewState
from .lookup import LookupClient

log = logging.getLogger(__name__)


class TkScheduler:
    """Scheduler backed by a Tk widget's event loop."""

    def __init__(self, widget: ctk.CTk) -> None:
        self._widget = widget

    def after(self, delay_ms: int, callback: Callable[[], None]) -> str:
        return self._widget.after(delay_ms, callback)

    def after_cancel(self, handle: str) -> None:
        self._widget.after_cancel(handle)

    def submit(self, work: Callable[[], Any], done) -> None:
        def _worker() -> None:
            try:
                result = work()
            except Exception as exc:
                self._widget.after(0, lambda err=exc: done(None, err))
                return
            self._widget.after(0, lambda: done(result, None))
        threading.Thread(target=_worker, daemon=True).start()


class PlacePickerApp(ctk.CTk):
    """Dark-themed search box with a results dropdown and a selection label."""

    def __init__(self, api_url: str = CFG.API_URL, limit: int = CFG.DEFAULT_LIMIT) -> None:
        super().__init__()

        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        self.title("Place Search")
        self.geometry("560x420")
        self.minsize(420, 320)
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._client = LookupClient(api_url)
        self._shown: List[Place] = []
        self.coordinator = InputCoordinator(
            self._client, TkScheduler(self), limit=limit,
            on_change=self._render, on_selected=self._on_selected,
        )

        self._build_search()
        self._build_dropdown()
        self._build_status()
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    # --------- UI sections ---------

    def _build_search(self) -> None:
        box = ctk.CTkFrame(self, corner_radius=10)
        box.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))
        box.grid_columnconfigure(0, weight=1)

        self.entry = ctk.CTkEntry(box, placeholder_text="Search for a city…")
        self.entry.grid(row=0, column=0, sticky="ew", padx=(12, 6), pady=10)
        self.entry.bind("<KeyRelease>", self._on_key)
        self.entry.bind("<FocusIn>", lambda _ev: self.coordinator.on_focus())
        self.entry.bind("<FocusOut>", lambda _ev: self.coordinator.on_blur())

        ctk.CTkButton(box, text="Clear", width=70, command=self.coordinator.on_clear).grid(
            row=0, column=1, padx=(0, 12), pady=10
        )

    def _build_dropdown(self) -> None:
        self.dropdown = ctk.CTkScrollableFrame(self, corner_radius=10)
        self.dropdown.grid(row=2, column=0, sticky="nsew", padx=12, pady=6)
        self.dropdown.grid_columnconfigure(0, weight=1)

    def _build_status(self) -> None:
        self.lbl_status = ctk.CTkLabel(self, text="", anchor="w")
        self.lbl_status.grid(row=3, column=0, sticky="ew", padx=12, pady=(6, 12))

    # --------- events ---------

    def _on_key(self, _ev=None) -> None:
        self.coordinator.on_input(self.entry.get())

    def _on_selected(self, place: Optional[Place]) -> None:
        self.entry.delete(0, "end")
        if place is not None:
            self.entry.insert(0, place.name)
            log.info("Selected %s (%s)", place.name, place.regional_code)

    # --------- rendering ---------

    def _render(self, state: ViewState) -> None:
        shown = state.places if state.show_dropdown else []
        if shown != self._shown:
            for child in self.dropdown.winfo_children():
                child.destroy()
            for i, place in enumerate(shown):
                ctk.CTkButton(
                    self.dropdown, anchor="w", fg_color="transparent",
                    text=f"{place.name}  ·  {place.district} ({place.region})",
                    command=lambda p=place: self.coordinator.on_select(p),
                ).grid(row=i, column=0, sticky="ew", pady=1)
            self._shown = list(shown)

        if state.error_message:
            self.lbl_status.configure(text=state.error_message, text_color="#ff8080")
        elif state.is_loading:
            self.lbl_status.configure(text="Searching…", text_color="gray70")
        elif state.selected is not None:
            s = state.selected
            self.lbl_status.configure(
                text=f"Selected: {s.name} · {s.iso_code} · {s.regional_code} · {s.region}",
                text_color="gray70",
            )
        else:
            self.lbl_status.configure(text="", text_color="gray70")

    # --------- lifecycle ---------

    def _on_close(self) -> None:
        self._client.close()
        self.destroy()


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Desktop place picker backed by the search API")
    ap.add_argument("--url", default=CFG.API_URL)
    ap.add_argument("-k", type=int, default=CFG.DEFAULT_LIMIT)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    app = PlacePickerApp(api_url=args.url, limit=args.k)
    app.mainloop()
    return 0
