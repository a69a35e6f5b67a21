from __future__ import annotations

from typing import Any

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.controller import CatalogController
from app.errors import ParseError
from app.main import register_routes
from app.models import CatalogEntry, TimestampDisplay
from app.services.catalog_loader import CatalogLoader, LoadResult


class StaticLoader(CatalogLoader):
    """Loader stub serving fixed records for route testing."""

    def __init__(self, records: list[dict[str, Any]], *, fail: bool = False) -> None:
        # Deliberately skip super().__init__ to avoid touching external systems.
        self.records = records
        self.fail = fail
        self.calls = 0

    async def load(self) -> LoadResult:  # type: ignore[override]
        self.calls += 1
        if self.fail:
            raise ParseError("データの形式が不正です")
        return LoadResult(
            entries=[CatalogEntry.model_validate(record) for record in self.records],
        )

    async def fetch_timestamp(self) -> TimestampDisplay:
        return TimestampDisplay.unknown()


def build_app(controller: CatalogController) -> FastAPI:
    app = FastAPI()
    register_routes(app)
    app.state.controller = controller
    return app


def test_viewer_page_auto_loads_and_renders_cards(sample_records) -> None:
    loader = StaticLoader(sample_records)
    app = build_app(CatalogController(loader, default_countries=["US"]))

    with TestClient(app) as client:
        response = client.get("/")
        client.get("/")

    assert response.status_code == 200
    assert loader.calls == 1
    assert 'data-work-id="us-only"' in response.text
    assert 'data-work-id="de-only"' not in response.text
    assert "データ読み込み完了: 3件" in response.text
    assert 'class="timestamp unknown">不明<' in response.text


def test_viewer_page_shows_empty_message(sample_records) -> None:
    app = build_app(CatalogController(StaticLoader(sample_records), default_countries=()))

    with TestClient(app) as client:
        response = client.get("/")

    assert "該当する作品が見つかりませんでした" in response.text


def test_country_toggle_updates_results(sample_records) -> None:
    app = build_app(CatalogController(StaticLoader(sample_records), default_countries=()))

    with TestClient(app) as client:
        client.post("/api/reload")
        response = client.post("/api/countries", json={"code": "US", "checked": True})

    assert response.status_code == 200
    payload = response.json()
    assert payload["resultCount"] == 1
    assert payload["selectedCountries"] == ["US"]
    assert payload["cards"][0]["identity"] == "us-only"


def test_select_all_then_deselect_all(sample_records) -> None:
    app = build_app(CatalogController(StaticLoader(sample_records), default_countries=()))

    with TestClient(app) as client:
        client.post("/api/reload")
        selected = client.post("/api/select-all", json={"checked": True}).json()
        cleared = client.post("/api/deselect-all", json={"checked": True}).json()

    assert selected["resultCount"] == 2
    assert selected["selectAll"] is True
    assert cleared["resultCount"] == 0
    assert cleared["selectAll"] is False
    assert cleared["deselectAll"] is True


def test_detail_endpoints(sample_records) -> None:
    app = build_app(CatalogController(StaticLoader(sample_records)))

    with TestClient(app) as client:
        client.post("/api/reload")
        opened = client.post("/api/detail/de-only")
        page = client.get("/")
        closed = client.delete("/api/detail")
        missing = client.post("/api/detail/does-not-exist")

    assert opened.status_code == 200
    assert opened.json()["state"] == "open"
    assert opened.json()["synopsis"] == "概要はありません"
    assert 'class="modal open"' in page.text
    assert closed.json() == {"state": "closed"}
    assert missing.status_code == 404


def test_placeholder_like_title_is_rendered_literally() -> None:
    records = [{"id": "odd", "title": "__RESULTS__", "countries": ["US"]}]
    app = build_app(CatalogController(StaticLoader(records)))

    with TestClient(app) as client:
        client.post("/api/reload")
        client.post("/api/detail/odd")
        page = client.get("/")

    assert '<h2 id="modalTitle">__RESULTS__</h2>' in page.text
    assert page.text.count('class="result-card"') == 1


def test_reload_failure_is_reported_as_status(sample_records) -> None:
    app = build_app(CatalogController(StaticLoader(sample_records, fail=True)))

    with TestClient(app) as client:
        response = client.post("/api/reload")

    assert response.status_code == 200
    assert response.json()["status"] == {
        "message": "エラー: データの形式が不正です",
        "kind": "error",
    }


def test_invalid_toggle_payload_is_rejected(sample_records) -> None:
    app = build_app(CatalogController(StaticLoader(sample_records)))

    with TestClient(app) as client:
        response = client.post("/api/select-all", json={"checked": "maybe"})
        not_json = client.post(
            "/api/countries",
            content=b"nope",
            headers={"Content-Type": "application/json"},
        )

    assert response.status_code == 400
    assert not_json.status_code == 400


def test_healthcheck() -> None:
    app = build_app(CatalogController(StaticLoader([])))

    with TestClient(app) as client:
        assert client.get("/healthz").json() == {"status": "ok"}
