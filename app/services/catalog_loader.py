"""Client for the pre-fetched catalog dataset and its metadata."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from ..errors import FetchError, ParseError
from ..models import CatalogEntry, TimestampDisplay

logger = logging.getLogger(__name__)

_DATETIME_ADAPTER = TypeAdapter(datetime)


@dataclass(slots=True)
class LoadResult:
    """Entries parsed from one successful load."""

    entries: list[CatalogEntry] = field(default_factory=list)
    skipped: int = 0


class CatalogLoader:
    """Fetches the entries and metadata resources over HTTP."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        entries_path: str = "data/unogs-data.json",
        metadata_path: str = "data/metadata.json",
    ) -> None:
        self._client = http_client
        self._entries_path = entries_path
        self._metadata_path = metadata_path

    async def load(self) -> LoadResult:
        """Fetch and parse the entry list."""

        payload = await self._fetch_entries_payload()
        entries, skipped = self._parse_entries(payload)
        logger.info("Loaded %d catalog entries (%d skipped)", len(entries), skipped)
        return LoadResult(entries=entries, skipped=skipped)

    async def fetch_timestamp(self) -> TimestampDisplay:
        """Return the dataset's last-updated display; never raises."""

        try:
            response = await self._client.get(self._metadata_path)
            response.raise_for_status()
            metadata = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Failed to fetch catalog metadata: %s", exc)
            return TimestampDisplay.unknown()

        if not isinstance(metadata, dict):
            logger.warning("Unexpected catalog metadata structure")
            return TimestampDisplay.unknown()

        raw = metadata.get("lastUpdated")
        if not raw:
            return TimestampDisplay.missing()
        try:
            value = _DATETIME_ADAPTER.validate_python(raw)
        except ValidationError:
            logger.warning("Unparseable lastUpdated value in metadata: %r", raw)
            return TimestampDisplay.unknown()
        try:
            return TimestampDisplay.fetched(value)
        except (OverflowError, OSError, ValueError) as exc:
            logger.warning("Cannot display lastUpdated value %r: %s", raw, exc)
            return TimestampDisplay.unknown()

    async def _fetch_entries_payload(self) -> Any:
        try:
            response = await self._client.get(self._entries_path)
        except httpx.HTTPError as exc:
            logger.warning("Catalog request failed: %s", exc)
            raise FetchError(f"データの読み込みに失敗しました: {exc}") from exc

        if not response.is_success:
            logger.warning(
                "Catalog request returned %s for %s",
                response.status_code,
                response.request.url,
            )
            raise FetchError(
                f"データの読み込みに失敗しました: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.warning("Catalog response is not valid JSON: %s", exc)
            raise ParseError(f"データの解析に失敗しました: {exc}") from exc

    @staticmethod
    def _parse_entries(payload: Any) -> tuple[list[CatalogEntry], int]:
        if not isinstance(payload, list):
            raise ParseError("データの形式が不正です: 作品の配列ではありません")

        entries: list[CatalogEntry] = []
        skipped = 0
        for index, record in enumerate(payload):
            if not isinstance(record, dict):
                logger.warning("Skipping catalog record %d: not an object", index)
                skipped += 1
                continue
            try:
                entries.append(CatalogEntry.model_validate(record))
            except ValidationError as exc:
                logger.warning("Skipping catalog record %d: %s", index, exc)
                skipped += 1
        return entries, skipped
