from __future__ import annotations
from typing import Iterable, List, NamedTuple, Optional

from . import config as CFG
from .models import Place
from .normalize import normalize_name, normalize_query


class ScoredMatch(NamedTuple):
    score: int
    position: int     # index in the candidate set, used for tie-breaks
    place: Place


def levenshtein(a: str, b: str) -> int:
    """
    Classic edit distance (insert / delete / substitute, each cost 1).
    Two rolling rows instead of the full matrix; the shorter string is
    kept on the inner loop.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)
    if len(a) < len(b):
        a, b = b, a

    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        cur = [i] + [0] * len(b)
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                cur[j] = prev[j - 1]
            else:
                cur[j] = 1 + min(prev[j - 1],   # substitution
                                 cur[j - 1],    # insertion
                                 prev[j])       # deletion
        prev = cur
    return prev[-1]


def similarity(query: str, name: str) -> int:
    """
    Tiered score of an already-normalized query against a normalized name.

      exact        -> 1000
      prefix       -> 800
      substring    -> 600
      edit distance on the whole name, d <= 2     -> 400 - 50*d
      edit distance on the name's leading slice   -> 300 - 50*d'
      otherwise    -> 0

    Tiers short-circuit: edit distance is only consulted when the query
    is not a substring of the name.
    """
    if not query:
        return 0
    if query == name:
        return CFG.EXACT_SCORE
    if name.startswith(query):
        return CFG.PREFIX_SCORE
    if query in name:
        return CFG.SUBSTRING_SCORE

    d = levenshtein(query, name)
    longest = max(len(query), len(name))
    if d <= CFG.MAX_EDITS and longest - d >= CFG.MIN_FUZZY_OVERLAP:
        return CFG.FUZZY_SCORE - CFG.EDIT_PENALTY * d

    if len(name) >= len(query):
        d_prefix = levenshtein(query, name[:len(query)])
        if d_prefix <= CFG.MAX_EDITS:
            return CFG.FUZZY_PREFIX_SCORE - CFG.EDIT_PENALTY * d_prefix

    return 0


def score_candidates(query: str, candidates: Iterable[Place]) -> List[ScoredMatch]:
    """Score every candidate, keep the positive ones, best first (stable)."""
    rows: List[ScoredMatch] = []
    for pos, place in enumerate(candidates):
        sc = similarity(query, normalize_name(place.name))
        if sc > 0:
            rows.append(ScoredMatch(sc, pos, place))
    rows.sort(key=lambda r: (-r.score, r.position))
    return rows


def rank(query: str, candidates: Optional[Iterable[Place]], limit: int) -> List[Place]:
    """
    Return at most `limit` places ordered by descending similarity to `query`.
    Ties keep the candidates' original order. An empty query, an empty or
    missing candidate set, or limit <= 0 all yield [].
    """
    q = normalize_query(query)
    if not q or candidates is None or limit <= 0:
        return []
    return [r.place for r in score_candidates(q, candidates)[:limit]]
