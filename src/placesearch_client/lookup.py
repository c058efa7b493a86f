from __future__ import annotations
import logging
from typing import Any, List, Optional

import requests

from placesearch.models import Place
from . import config as CFG

log = logging.getLogger(__name__)


class LookupFailed(RuntimeError):
    """A lookup could not be completed (transport, status, timeout or payload)."""


class LookupClient:
    """
    Blocking HTTP client for the place search service.

    GET {base_url}/search?name=<term>&limit=<n> -> {query, count, results}
    GET {base_url}/all?limit=<n>                -> {count, results}
    """

    def __init__(self, base_url: str = CFG.API_URL, *,
                 timeout: float = CFG.REQUEST_TIMEOUT_S,
                 session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def search(self, term: str, limit: int = CFG.DEFAULT_LIMIT) -> List[Place]:
        data = self._get("/search", {"name": term, "limit": limit})
        return self._places(data)

    def list_all(self, limit: int = 100) -> List[Place]:
        data = self._get("/all", {"limit": limit})
        return self._places(data)

    def close(self) -> None:
        self.session.close()

    # ---- internals ----

    def _get(self, path: str, params: dict[str, Any]) -> Any:
        url = self.base_url + path
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.Timeout as exc:
            raise LookupFailed(f"{url}: timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            # HTTPError, ConnectionError and JSON decode errors all land here
            raise LookupFailed(f"{url}: {exc}") from exc
        except ValueError as exc:
            raise LookupFailed(f"{url}: invalid JSON body") from exc

    @staticmethod
    def _places(data: Any) -> List[Place]:
        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            raise LookupFailed("response has no results list")
        try:
            return [Place.from_wire(row) for row in data["results"]]
        except (TypeError, ValueError) as exc:
            raise LookupFailed(f"malformed place in response: {exc}") from exc
