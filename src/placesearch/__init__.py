"""
Place search engine.

Scores a query against a candidate set of places with a tiered similarity
function (exact > prefix > substring > edit distance) and returns the best
matches in a stable order.

Example Usage:
    from placesearch import Engine

    eng = Engine()
    eng.build(["data/places.json"], db_dsn="memory://")
    for place in eng.search("rom", limit=5):
        print(place.name, place.district)
"""

from .engine import Engine
from .models import Place
from .ranking import levenshtein, rank, similarity
from .store import StoreError, make_store

__version__ = "1.0.0"
__all__ = ["Engine", "Place", "StoreError", "levenshtein", "make_store", "rank", "similarity"]
