from __future__ import annotations
import os

API_URL: str = os.environ.get("PLACESEARCH_API_URL", "http://127.0.0.1:8000")
DEFAULT_LIMIT: int = int(os.environ.get("PLACESEARCH_DEFAULT_LIMIT", "10"))

# input pipeline timing
MIN_QUERY_LENGTH: int = int(os.environ.get("PLACESEARCH_MIN_QUERY_LENGTH", "2"))
DEBOUNCE_MS: int = int(os.environ.get("PLACESEARCH_DEBOUNCE_MS", "300"))
BLUR_GRACE_MS: int = int(os.environ.get("PLACESEARCH_BLUR_GRACE_MS", "200"))

# seconds; a timed-out lookup counts as a failed one
REQUEST_TIMEOUT_S: float = float(os.environ.get("PLACESEARCH_REQUEST_TIMEOUT", "5"))

ERROR_MESSAGE = "Error searching places. Please try again."
