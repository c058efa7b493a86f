from __future__ import annotations


def normalize_name(text: str) -> str:
    """Lowercase only. Names are compared as stored, including inner spacing."""
    return text.lower()


def normalize_query(text: str | None) -> str:
    """Lowercase and trim the user's query; None becomes the empty string."""
    if not text:
        return ""
    return text.strip().lower()
