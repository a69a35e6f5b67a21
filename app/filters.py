"""Country filtering for the loaded catalog."""

from __future__ import annotations

from typing import AbstractSet, Iterable

from .models import CatalogEntry


def filter_entries(
    entries: Iterable[CatalogEntry], selected_countries: AbstractSet[str]
) -> list[CatalogEntry]:
    """Return entries watchable in any selected country, deduplicated.

    An empty selection yields no results. Entries sharing an identity are
    collapsed to the first one seen; entries without an availability list are
    skipped.
    """

    if not selected_countries:
        return []

    selected = frozenset(selected_countries)
    seen: set[str] = set()
    matches: list[CatalogEntry] = []
    for entry in entries:
        if not entry.available_in(selected):
            continue
        identity = entry.identity
        if identity in seen:
            continue
        seen.add(identity)
        matches.append(entry)
    return matches
