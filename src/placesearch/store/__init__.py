from .api import PlaceStore, StoreError, make_store

__all__ = ["PlaceStore", "StoreError", "make_store"]
