"""HTTP surface for the place search engine (Flask)."""
from .web import app, main

__all__ = ["app", "main"]
