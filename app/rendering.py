"""Sorting and display mapping for catalog entries."""

from __future__ import annotations

from typing import Iterable, Sequence

from pydantic import BaseModel, Field

from .countries import country_display_name
from .models import CatalogEntry
from .utils import first_non_empty

SYNOPSIS_LINE_LENGTH = 13
SYNOPSIS_EXCERPT_LENGTH = SYNOPSIS_LINE_LENGTH * 2
ELLIPSIS = "..."

UNKNOWN_TYPE_LABEL = "Unknown"
UNKNOWN_YEAR_LABEL = "N/A"
NO_IMAGE_TEXT = "画像なし"
NO_SYNOPSIS_TEXT = "概要はありません"
NO_RESULTS_TEXT = "該当する作品が見つかりませんでした"
NO_RESULTS_HINT = "フィルター条件を変更してください"


class SynopsisExcerpt(BaseModel):
    """Two-line preview of an entry synopsis."""

    first_line: str
    second_line: str
    truncated: bool = False

    @property
    def text(self) -> str:
        return f"{self.first_line}\n{self.second_line}"


class Card(BaseModel):
    """Display record for one entry in the results list."""

    identity: str
    title: str
    image_url: str | None = None
    alt_text: str = ""
    synopsis: SynopsisExcerpt
    type_label: str
    year_label: str
    rating_badge: str | None = None
    country_tags: list[str] = Field(default_factory=list)


class DetailRecord(BaseModel):
    """Full-text fields shown in the detail overlay."""

    identity: str
    title: str
    synopsis: str


def sort_entries(entries: Iterable[CatalogEntry]) -> list[CatalogEntry]:
    """Order by rating then year, both descending; ties keep input order."""

    return sorted(
        entries,
        key=lambda entry: (-entry.rating_value, -entry.year_value),
    )


def format_title(entry: CatalogEntry) -> str:
    """Return the title, with the localized title appended when it adds text."""

    localized = entry.localized_title
    if not localized or localized in entry.title:
        return entry.title
    return f"{entry.title} ({localized})"


def resolve_image(entry: CatalogEntry) -> str | None:
    return first_non_empty(entry.image, entry.image_url) or None


def synopsis_excerpt(text: str) -> SynopsisExcerpt:
    """Cut ``text`` into a two-line preview of at most 26 characters."""

    head = text[:SYNOPSIS_EXCERPT_LENGTH]
    first = head[:SYNOPSIS_LINE_LENGTH]
    second = head[SYNOPSIS_LINE_LENGTH:]
    if len(text) > SYNOPSIS_EXCERPT_LENGTH:
        return SynopsisExcerpt(first_line=first, second_line=second + ELLIPSIS, truncated=True)
    return SynopsisExcerpt(first_line=first, second_line=second)


def card_synopsis(entry: CatalogEntry) -> str:
    return first_non_empty(entry.synopsis_ja, entry.synopsis_japanese, entry.synopsis)


def full_synopsis(entry: CatalogEntry) -> str:
    return first_non_empty(
        entry.synopsis_ja_full,
        entry.synopsis_japanese,
        entry.synopsis,
        NO_SYNOPSIS_TEXT,
    )


def country_tags(entry: CatalogEntry) -> list[str]:
    return [country_display_name(code) for code in entry.countries or []]


def display_number(value: object) -> str:
    """Render a raw dataset value, dropping the fraction of integral floats."""

    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def year_label(entry: CatalogEntry) -> str:
    year = entry.year
    if not year or isinstance(year, bool):
        return UNKNOWN_YEAR_LABEL
    return display_number(year)


def rating_badge(entry: CatalogEntry) -> str | None:
    """Return the raw rating for display, or ``None`` when absent or zero."""

    rating = entry.rating
    if not rating or isinstance(rating, bool):
        return None
    return display_number(rating)


def render_card(entry: CatalogEntry) -> Card:
    return Card(
        identity=entry.identity,
        title=format_title(entry),
        image_url=resolve_image(entry),
        alt_text=entry.title,
        synopsis=synopsis_excerpt(card_synopsis(entry)),
        type_label=entry.type or UNKNOWN_TYPE_LABEL,
        year_label=year_label(entry),
        rating_badge=rating_badge(entry),
        country_tags=country_tags(entry),
    )


def render_detail(entry: CatalogEntry) -> DetailRecord:
    return DetailRecord(
        identity=entry.identity,
        title=format_title(entry),
        synopsis=full_synopsis(entry),
    )


def render_results(
    entries: Iterable[CatalogEntry],
) -> tuple[list[CatalogEntry], list[Card]]:
    """Sort filtered entries and map each one to its card."""

    ordered = sort_entries(entries)
    return ordered, [render_card(entry) for entry in ordered]


def find_by_identity(
    entries: Sequence[CatalogEntry], identity: str
) -> CatalogEntry | None:
    for entry in entries:
        if entry.identity == identity:
            return entry
    return None
