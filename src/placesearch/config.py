from __future__ import annotations
import os

# Result sizes
DEFAULT_LIMIT: int = int(os.environ.get("PLACESEARCH_DEFAULT_LIMIT", "10"))
LIST_LIMIT: int = int(os.environ.get("PLACESEARCH_LIST_LIMIT", "100"))

# Candidate store: "memory://" or "sqlite:///path/to/places.sqlite"
STORE_DSN: str = os.environ.get("PLACESEARCH_STORE_DSN", "memory://")

# Seed files (.json / .csv), os.pathsep separated in the env var
SEED_PATHS: list[str] = [
    p for p in os.environ.get("PLACESEARCH_SEED", "data/places.json").split(os.pathsep) if p
]

# Progress logging (set PLACESEARCH_VERBOSE=1 to enable)
VERBOSE: bool = os.environ.get("PLACESEARCH_VERBOSE") == "1"

# /* ~~~ score tiers, first match wins ~~~ */
EXACT_SCORE = 1000
PREFIX_SCORE = 800
SUBSTRING_SCORE = 600
FUZZY_SCORE = 400           # whole-name edit distance
FUZZY_PREFIX_SCORE = 300    # edit distance against the name's leading slice
EDIT_PENALTY = 50           # per edit
MAX_EDITS = 2
MIN_FUZZY_OVERLAP = 3       # max(len) - distance must reach this
