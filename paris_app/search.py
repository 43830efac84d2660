"""Accent-insensitive search across arrondissements, quartiers and green spaces."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Sequence, Tuple

from .models import AdministrativeUnit, District, GreenSpace

MIN_QUERY_LENGTH = 2
MAX_UNITS = 3
MAX_DISTRICTS = 3
MAX_GREEN_SPACES = 5


@dataclass(frozen=True)
class SearchResults:
    units: Tuple[AdministrativeUnit, ...] = ()
    districts: Tuple[District, ...] = ()
    green_spaces: Tuple[GreenSpace, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.units or self.districts or self.green_spaces)


def normalize_text(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", (text or "").lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def search(
    query: str,
    units: Sequence[AdministrativeUnit],
    districts: Sequence[District],
    green_spaces: Sequence[GreenSpace],
) -> SearchResults:
    if len(query) < MIN_QUERY_LENGTH:
        return SearchResults()
    needle = normalize_text(query)

    def hit(name: str) -> bool:
        return needle in normalize_text(name)

    return SearchResults(
        units=tuple(u for u in units if hit(u.name) or (u.code and query in u.code))[:MAX_UNITS],
        districts=tuple(d for d in districts if hit(d.name))[:MAX_DISTRICTS],
        green_spaces=tuple(g for g in green_spaces if hit(g.name))[:MAX_GREEN_SPACES],
    )


__all__ = ["SearchResults", "normalize_text", "search"]
