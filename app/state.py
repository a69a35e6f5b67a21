"""In-memory application state for the viewer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel

from .models import CatalogEntry, TimestampDisplay
from .rendering import Card, DetailRecord, render_detail

StatusKind = Literal["", "loading", "success", "error"]
DetailState = Literal["closed", "open"]


class Status(BaseModel):
    """Status line text plus its style classifier."""

    message: str = ""
    kind: StatusKind = ""

    @classmethod
    def loading(cls) -> "Status":
        return cls(message="データを読み込み中...", kind="loading")

    @classmethod
    def loaded(cls, count: int) -> "Status":
        return cls(message=f"データ読み込み完了: {count}件", kind="success")

    @classmethod
    def failed(cls, reason: str) -> "Status":
        return cls(message=f"エラー: {reason}", kind="error")


class DetailView:
    """Overlay showing one entry's full text; starts closed."""

    def __init__(self) -> None:
        self._record: DetailRecord | None = None

    @property
    def state(self) -> DetailState:
        return "open" if self._record is not None else "closed"

    @property
    def is_open(self) -> bool:
        return self._record is not None

    @property
    def record(self) -> DetailRecord | None:
        return self._record

    def open(self, entry: CatalogEntry) -> DetailRecord:
        self._record = render_detail(entry)
        return self._record

    def close(self) -> None:
        self._record = None


@dataclass
class AppState:
    """Everything the page shows, owned by a single controller."""

    selected_countries: set[str] = field(default_factory=set)
    entries: tuple[CatalogEntry, ...] = ()
    select_all: bool = False
    deselect_all: bool = False
    status: Status = field(default_factory=Status)
    timestamp: TimestampDisplay | None = None
    reload_in_flight: bool = False
    loaded_once: bool = False
    results: list[CatalogEntry] = field(default_factory=list)
    cards: list[Card] = field(default_factory=list)
    detail: DetailView = field(default_factory=DetailView)

    @property
    def result_count(self) -> int:
        return len(self.cards)

    def to_payload(self) -> dict[str, object]:
        """Return a JSON-serialisable snapshot for the API."""

        detail = self.detail.record
        return {
            "status": self.status.model_dump(),
            "timestamp": self.timestamp.model_dump(mode="json") if self.timestamp else None,
            "reloadInFlight": self.reload_in_flight,
            "selectedCountries": sorted(self.selected_countries),
            "selectAll": self.select_all,
            "deselectAll": self.deselect_all,
            "totalEntries": len(self.entries),
            "resultCount": self.result_count,
            "cards": [card.model_dump() for card in self.cards],
            "detail": {
                "state": self.detail.state,
                **(detail.model_dump() if detail else {}),
            },
        }
