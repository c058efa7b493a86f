from __future__ import annotations
import argparse
import logging
from flask import Flask, request, jsonify
from placesearch import Engine, StoreError
from placesearch import config as CFG

log = logging.getLogger(__name__)

app = Flask(__name__)
_engine: Engine | None = None


def _parse_limit(raw: str | None, default: int) -> int:
    """Absent, unparseable or negative limits fall back to the default."""
    if raw is None or raw == "":
        return default
    try:
        n = int(raw)
    except ValueError:
        return default
    return n if n >= 0 else default


def _usage():
    return {
        "message": "Please provide a name query parameter",
        "example": "/search?name=Roma&limit=10",
    }


def _require_engine() -> Engine:
    if _engine is None:
        raise StoreError("place store is not initialized")
    return _engine


# ---------- API ----------
@app.get("/search")
def api_search():
    name = request.args.get("name", "", type=str)
    limit_raw = request.args.get("limit")
    log.info("Search request received: name=%r, limit=%r", name, limit_raw)
    if not name:
        return jsonify(_usage())
    limit = _parse_limit(limit_raw, CFG.DEFAULT_LIMIT)
    places = _require_engine().search(name, limit=limit)
    return jsonify({
        "query": name,
        "count": len(places),
        "results": [p.to_wire() for p in places],
    })


@app.get("/all")
def api_all():
    limit_raw = request.args.get("limit")
    log.info("Listing request received: limit=%r", limit_raw)
    limit = _parse_limit(limit_raw, CFG.LIST_LIMIT)
    places = _require_engine().list_all(limit=limit)
    return jsonify({"count": len(places), "results": [p.to_wire() for p in places]})


@app.get("/health")
def health():
    return jsonify({"ok": True, "count": _require_engine().count()})


@app.get("/")
def home():
    return jsonify(_usage())


@app.errorhandler(StoreError)
def store_unavailable(exc: StoreError):
    log.error("Place store failure: %s", exc)
    return jsonify({"error": str(exc)}), 503


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the place search HTTP API on top of Engine")
    mode = ap.add_mutually_exclusive_group(required=True)
    mode.add_argument("--build", action="store_true")
    mode.add_argument("--load", action="store_true")
    ap.add_argument("--seed", nargs="+", default=CFG.SEED_PATHS)
    ap.add_argument("--db", dest="db", default=None)  # DSN: "sqlite:///path" or "memory://"
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    if args.build:
        _engine.build(sources=args.seed, db_dsn=args.db, verbose=args.verbose or CFG.VERBOSE)
    else:
        if not args.db:
            ap.error("--load requires --db")
        _engine.load(db_dsn=args.db, verbose=args.verbose or CFG.VERBOSE)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose, threaded=True)
    finally:
        _engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
