"""Pydantic models describing catalog entries and display records."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import first_non_empty, parse_leading_float, parse_leading_int

TimestampKind = Literal["fetched", "missing", "unknown"]

TIMESTAMP_MISSING_TEXT = "データ未取得"
TIMESTAMP_UNKNOWN_TEXT = "不明"


def marker_code(marker: Any) -> str | None:
    """Resolve an availability marker to its country code.

    Markers are either bare codes (``"US"``) or objects carrying a ``code``
    field (``{"code": "US", "name": "..."}``); any other shape has no code.
    """

    if isinstance(marker, str):
        return marker
    if isinstance(marker, dict):
        code = marker.get("code")
        if isinstance(code, str):
            return code
    return None


class CatalogEntry(BaseModel):
    """A single streaming-catalog entry as stored in the dataset."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    id: str | None = None
    title: str = ""
    title_ja: str | None = Field(default=None, alias="titleJa")
    japanese_title: str | None = Field(default=None, alias="japaneseTitle")
    type: str | None = None
    year: Any = None
    rating: Any = None
    synopsis_ja: str | None = Field(default=None, alias="synopsisJa")
    synopsis_ja_full: str | None = Field(default=None, alias="synopsisJaFull")
    synopsis_japanese: str | None = Field(default=None, alias="synopsisJapanese")
    synopsis: str | None = None
    image: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    countries: list[str] | None = None

    @field_validator(
        "title_ja",
        "japanese_title",
        "type",
        "synopsis_ja",
        "synopsis_ja_full",
        "synopsis_japanese",
        "synopsis",
        "image",
        "image_url",
        mode="before",
    )
    @classmethod
    def _coerce_optional_text(cls, value: object) -> str | None:
        if value is None or isinstance(value, (dict, list, bool)):
            return None
        return str(value)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: object) -> str | None:
        # A zero id is treated as absent so identity falls back to the title.
        if value is None or isinstance(value, (dict, list, bool)):
            return None
        if isinstance(value, (int, float)) and not value:
            return None
        return str(value)

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, value: object) -> str:
        if value is None or isinstance(value, (dict, list, bool)):
            return ""
        return str(value)

    @field_validator("countries", mode="before")
    @classmethod
    def _normalise_countries(cls, value: object) -> list[str] | None:
        """Collapse both marker shapes into plain country codes."""

        if not isinstance(value, list):
            return None
        codes: list[str] = []
        for marker in value:
            code = marker_code(marker)
            if code is not None:
                codes.append(code)
        return codes

    @property
    def identity(self) -> str:
        """Return the identifier used for deduplication and detail lookups."""

        return self.id or self.title

    @property
    def localized_title(self) -> str:
        return first_non_empty(self.title_ja, self.japanese_title)

    @property
    def rating_value(self) -> float:
        return parse_leading_float(self.rating)

    @property
    def year_value(self) -> int:
        return parse_leading_int(self.year)

    def available_in(self, selected: set[str] | frozenset[str]) -> bool:
        """Return whether any availability code is in ``selected``."""

        if self.countries is None:
            return False
        return any(code in selected for code in self.countries)


class TimestampDisplay(BaseModel):
    """Rendered state of the dataset's last-updated timestamp."""

    kind: TimestampKind
    text: str
    value: datetime | None = None

    @classmethod
    def fetched(cls, value: datetime) -> "TimestampDisplay":
        local = value.astimezone() if value.tzinfo is not None else value
        text = (
            f"{local.year}年{local.month}月{local.day}日 "
            f"{local.hour}時{local.minute:02d}分"
        )
        return cls(kind="fetched", text=text, value=value)

    @classmethod
    def missing(cls) -> "TimestampDisplay":
        return cls(kind="missing", text=TIMESTAMP_MISSING_TEXT)

    @classmethod
    def unknown(cls) -> "TimestampDisplay":
        return cls(kind="unknown", text=TIMESTAMP_UNKNOWN_TEXT)
