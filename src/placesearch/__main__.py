from __future__ import annotations
import argparse, json
from placesearch import Engine
from placesearch import config as CFG


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Place search CLI (Engine-backed)")
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--build", action="store_true", help="Seed a store from --seed files")
    g.add_argument("--load", action="store_true", help="Open an existing store")

    p.add_argument("--seed", nargs="+", default=CFG.SEED_PATHS, help="Seed files (.json/.csv) or folders")
    p.add_argument("--db", default=None, help='Store DSN: "sqlite:///path" or "memory://"')
    p.add_argument("-k", type=int, default=CFG.DEFAULT_LIMIT, help="Max results")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--json", action="store_true", help="Emit wire-shaped JSON")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)

    eng = Engine()
    try:
        if args.build:
            eng.build(sources=args.seed, db_dsn=args.db, verbose=args.verbose)
        else:
            if not args.db:
                p.error("--load requires --db")
            eng.load(db_dsn=args.db, verbose=args.verbose)

        def run_query(q: str):
            rows = eng.search(q, limit=args.k)
            if args.json:
                print(json.dumps({"query": q, "count": len(rows),
                                  "results": [r.to_wire() for r in rows]},
                                 ensure_ascii=False, indent=2))
            else:
                if not rows:
                    print("(no matches)"); return
                print("#  Id      Code  Name                           District / Region")
                for i, r in enumerate(rows, 1):
                    print(f"{i:<2} {r.id:<7} {r.regional_code:<5} {r.name:<30} {r.district} / {r.region}")

        if args.q:
            run_query(args.q)

        if args.repl:
            print("Type a place name (empty line to exit).")
            while True:
                try:
                    q = input("> ").strip()
                except (EOFError, KeyboardInterrupt):
                    break
                if not q:
                    break
                run_query(q)

        return 0
    finally:
        eng.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
