"""Text normalization and substring ranking for city typeahead.

Pure functions only; callers own the place-name universe. Ranking is a
linear scan per call, which is fine for a few thousand names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

DEFAULT_LIMIT = 8

_WHITESPACE_RE = re.compile(r"\s+")
_DISALLOWED_RE = re.compile(r"[^\w\s/(),.-]")


@dataclass(frozen=True)
class Candidate:
    place: str
    match_index: int
    length: int

    @property
    def sort_key(self):
        return (self.match_index, self.length, self.place)


def normalize(text: Optional[str]) -> str:
    """Lower-case, collapse whitespace, drop punctuation we don't match on, trim."""
    if not text:
        return ""
    s = str(text).lower()
    s = _WHITESPACE_RE.sub(" ", s)
    s = _DISALLOWED_RE.sub("", s)
    return s.strip()


def find_candidates(universe: Iterable[str], query: Optional[str]) -> List[Candidate]:
    """All places whose normalized form contains the normalized query, unordered."""
    q = normalize(query)
    if not q:
        return []

    out = []
    for place in universe:
        idx = normalize(place).find(q)
        if idx != -1:
            out.append(Candidate(place=place, match_index=idx, length=len(place)))
    return out


def rank_cities(universe: Iterable[str], query: Optional[str], limit: int = DEFAULT_LIMIT) -> List[str]:
    """
    Rank places against a query.

    Order: earliest match first, then shorter original name, then
    alphabetical. Blank queries return nothing.
    """
    if limit <= 0:
        return []
    candidates = sorted(find_candidates(universe, query), key=lambda c: c.sort_key)
    return [c.place for c in candidates[:limit]]
