"""
Client side of place search: an input coordinator that debounces keystrokes,
suppresses repeats, gates short terms and applies only the latest lookup.

The desktop widget lives in placesearch_client.app and is not imported here,
so the coordinator stays usable without a display.
"""
from .coordinator import InputCoordinator, SearchRequest, ViewState
from .lookup import LookupClient, LookupFailed
from .scheduler import Scheduler, ThreadScheduler

__all__ = [
    "InputCoordinator", "LookupClient", "LookupFailed",
    "Scheduler", "SearchRequest", "ThreadScheduler", "ViewState",
]
