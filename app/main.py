"""Entry point for the FastAPI-powered catalog viewer."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ValidationError

from .config import settings
from .controller import (
    CatalogController,
    CloseDetail,
    DeselectAllToggled,
    OpenDetail,
    Reload,
    SelectAllToggled,
    ToggleCountry,
)
from .errors import EntryNotFoundError, ReloadInProgressError
from .services.catalog_loader import CatalogLoader
from .web import render_viewer_page

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app: FastAPI


class CountryToggle(BaseModel):
    code: str
    checked: bool


class CheckedToggle(BaseModel):
    checked: bool


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    exit_stack = AsyncExitStack()
    data_client = await exit_stack.enter_async_context(
        httpx.AsyncClient(
            base_url=settings.resolve_data_base_url(),
            timeout=httpx.Timeout(None),
        )
    )
    loader = CatalogLoader(
        data_client,
        entries_path=settings.entries_path,
        metadata_path=settings.metadata_path,
    )
    fastapi_app.state.controller = CatalogController(
        loader, default_countries=settings.default_countries
    )

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        await exit_stack.aclose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Browse streaming catalog entries by availability country",
        version="1.0.0",
        lifespan=lifespan,
    )

    fastapi_app.mount(
        "/data",
        StaticFiles(directory=settings.data_dir, check_dir=False),
        name="data",
    )

    register_routes(fastapi_app)
    return fastapi_app


def get_controller(app: FastAPI) -> CatalogController:
    controller = getattr(app.state, "controller", None)
    if not isinstance(controller, CatalogController):
        raise RuntimeError("Catalog controller not initialised")
    return controller


async def _read_model(request: Request, model: type[BaseModel]) -> Any:
    try:
        payload = await request.json()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid JSON payload") from exc
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.errors()) from exc


def register_routes(fastapi_app: FastAPI) -> None:
    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get("/", response_class=HTMLResponse)
    async def viewer_page() -> HTMLResponse:
        controller = get_controller(fastapi_app)
        await controller.ensure_loaded()
        return HTMLResponse(
            render_viewer_page(controller.state, app_name=settings.app_name)
        )

    @fastapi_app.get("/api/state")
    async def state_endpoint() -> JSONResponse:
        controller = get_controller(fastapi_app)
        return JSONResponse(controller.state.to_payload())

    @fastapi_app.post("/api/reload")
    async def reload_endpoint() -> JSONResponse:
        controller = get_controller(fastapi_app)
        try:
            state = await controller.dispatch(Reload())
        except ReloadInProgressError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return JSONResponse(state.to_payload())

    @fastapi_app.post("/api/countries")
    async def toggle_country_endpoint(request: Request) -> JSONResponse:
        controller = get_controller(fastapi_app)
        toggle = await _read_model(request, CountryToggle)
        state = await controller.dispatch(
            ToggleCountry(code=toggle.code, checked=toggle.checked)
        )
        return JSONResponse(state.to_payload())

    @fastapi_app.post("/api/select-all")
    async def select_all_endpoint(request: Request) -> JSONResponse:
        controller = get_controller(fastapi_app)
        toggle = await _read_model(request, CheckedToggle)
        state = await controller.dispatch(SelectAllToggled(checked=toggle.checked))
        return JSONResponse(state.to_payload())

    @fastapi_app.post("/api/deselect-all")
    async def deselect_all_endpoint(request: Request) -> JSONResponse:
        controller = get_controller(fastapi_app)
        toggle = await _read_model(request, CheckedToggle)
        state = await controller.dispatch(DeselectAllToggled(checked=toggle.checked))
        return JSONResponse(state.to_payload())

    @fastapi_app.post("/api/detail/{identity:path}")
    async def open_detail_endpoint(identity: str) -> JSONResponse:
        controller = get_controller(fastapi_app)
        try:
            record = await controller.dispatch(OpenDetail(identity=identity))
        except EntryNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return JSONResponse({"state": "open", **record.model_dump()})

    @fastapi_app.delete("/api/detail")
    async def close_detail_endpoint() -> JSONResponse:
        controller = get_controller(fastapi_app)
        await controller.dispatch(CloseDetail())
        return JSONResponse({"state": "closed"})


app = create_app()


if __name__ == "__main__":  # pragma: no cover - manual execution
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.environment == "development",
    )
