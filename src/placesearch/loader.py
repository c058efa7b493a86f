from __future__ import annotations
import csv
import json
import logging
import os
from typing import Any, Iterable, Iterator, List, Mapping

from .models import Place

log = logging.getLogger(__name__)

SUPPORTED_EXTS = (".json", ".csv")


def _iter_seed_files(paths: Iterable[str]) -> Iterator[str]:
    """Yield seed files; directories are scanned recursively for *.json / *.csv."""
    for p in paths:
        if os.path.isdir(p):
            for dirpath, _, filenames in os.walk(p):
                for fn in sorted(filenames):
                    if fn.lower().endswith(SUPPORTED_EXTS):
                        yield os.path.join(dirpath, fn)
        elif os.path.isfile(p):
            yield p
        else:
            raise FileNotFoundError(p)


def _json_rows(path: str) -> List[Mapping[str, Any]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    # accept both a bare list and a listing response {"count": n, "results": [...]}
    if isinstance(data, dict):
        data = data.get("results", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of place records")
    return data


def _csv_rows(path: str) -> List[Mapping[str, Any]]:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return list(csv.DictReader(f))


def load_places(paths: Iterable[str]) -> List[Place]:
    """
    Read seed files into Place records, preserving file order.
    Malformed records are skipped, duplicate ids keep their first occurrence.
    """
    places: List[Place] = []
    seen: set[int] = set()
    skipped = 0
    file_count = 0

    for path in _iter_seed_files(paths):
        ext = os.path.splitext(path)[1].lower()
        if ext == ".json":
            rows = _json_rows(path)
        elif ext == ".csv":
            rows = _csv_rows(path)
        else:
            raise ValueError(f"unsupported seed file type: {path}")
        file_count += 1

        for i, row in enumerate(rows):
            try:
                if not isinstance(row, Mapping):
                    raise ValueError("record is not an object")
                place = Place.from_wire(row)
            except ValueError as exc:
                skipped += 1
                log.warning("%s: skipping record %d: %s", path, i, exc)
                continue
            if place.id in seen:
                skipped += 1
                log.warning("%s: skipping duplicate cityId %d (%s)", path, place.id, place.name)
                continue
            seen.add(place.id)
            places.append(place)

    log.info("Loaded %d places from %d file(s), %d skipped", len(places), file_count, skipped)
    return places
