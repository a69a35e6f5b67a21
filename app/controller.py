"""Command handling for the viewer page."""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, TypeVar, Union

from .countries import COUNTRY_CODES
from .errors import EntryNotFoundError, FetchError, ParseError, ReloadInProgressError
from .filters import filter_entries
from .rendering import DetailRecord, find_by_identity, render_results
from .services.catalog_loader import CatalogLoader
from .state import AppState, Status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reload:
    """Fetch the dataset again and re-apply the current filters."""


@dataclass(frozen=True)
class ToggleCountry:
    code: str
    checked: bool


@dataclass(frozen=True)
class SelectAllToggled:
    checked: bool


@dataclass(frozen=True)
class DeselectAllToggled:
    checked: bool


@dataclass(frozen=True)
class OpenDetail:
    identity: str


@dataclass(frozen=True)
class CloseDetail:
    """Hide the detail overlay."""


UIEvent = Union[
    Reload, ToggleCountry, SelectAllToggled, DeselectAllToggled, OpenDetail, CloseDetail
]
EventT = TypeVar("EventT")
Handler = Callable[[Any], Union[Awaitable[Any], Any]]


class CatalogController:
    """Owns the application state and applies UI commands to it."""

    def __init__(
        self,
        loader: CatalogLoader,
        *,
        default_countries: Iterable[str] = COUNTRY_CODES,
        country_codes: Iterable[str] = COUNTRY_CODES,
    ) -> None:
        self._loader = loader
        self._country_codes = tuple(country_codes)
        self.state = AppState(selected_countries=set(default_countries))
        self._handlers: dict[type, Handler] = {}

        self.register(Reload, self._on_reload)
        self.register(ToggleCountry, self._on_toggle_country)
        self.register(SelectAllToggled, self._on_select_all)
        self.register(DeselectAllToggled, self._on_deselect_all)
        self.register(OpenDetail, self._on_open_detail)
        self.register(CloseDetail, self._on_close_detail)

    def register(self, event_type: type[EventT], handler: Callable[[EventT], Any]) -> None:
        """Route events of ``event_type`` to ``handler``, replacing any previous one."""

        self._handlers[event_type] = handler

    async def dispatch(self, event: UIEvent) -> Any:
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"No handler registered for {type(event).__name__}")
        result = handler(event)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def ensure_loaded(self) -> None:
        """Load the dataset the first time the page is opened."""

        if self.state.loaded_once or self.state.reload_in_flight:
            return
        await self.dispatch(Reload())

    def apply_filters(self) -> None:
        state = self.state
        matches = filter_entries(state.entries, state.selected_countries)
        state.results, state.cards = render_results(matches)

    async def _on_reload(self, _: Reload) -> AppState:
        state = self.state
        if state.reload_in_flight:
            raise ReloadInProgressError("A reload is already in progress")

        state.reload_in_flight = True
        state.loaded_once = True
        state.status = Status.loading()
        try:
            try:
                result = await self._loader.load()
            except (FetchError, ParseError) as exc:
                logger.warning("Catalog reload failed: %s", exc)
                state.status = Status.failed(str(exc))
                return state

            state.entries = tuple(result.entries)
            state.status = Status.loaded(len(result.entries))
            self.apply_filters()
            state.timestamp = await self._loader.fetch_timestamp()
        finally:
            state.reload_in_flight = False
        return state

    def _on_toggle_country(self, event: ToggleCountry) -> AppState:
        if event.checked:
            self.state.selected_countries.add(event.code)
        else:
            self.state.selected_countries.discard(event.code)
        self.apply_filters()
        return self.state

    def _on_select_all(self, event: SelectAllToggled) -> AppState:
        state = self.state
        state.select_all = event.checked
        if event.checked:
            state.deselect_all = False
            state.selected_countries = set(self._country_codes)
            self.apply_filters()
        return state

    def _on_deselect_all(self, event: DeselectAllToggled) -> AppState:
        state = self.state
        state.deselect_all = event.checked
        if event.checked:
            state.select_all = False
            state.selected_countries = set()
            self.apply_filters()
        return state

    def _on_open_detail(self, event: OpenDetail) -> DetailRecord:
        entry = find_by_identity(self.state.results, event.identity)
        if entry is None:
            raise EntryNotFoundError(f"No entry {event.identity!r} in current results")
        return self.state.detail.open(entry)

    def _on_close_detail(self, _: CloseDetail) -> AppState:
        self.state.detail.close()
        return self.state
