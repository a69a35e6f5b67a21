"""Module executed when running ``python -m unogs_viewer``."""

from __future__ import annotations

import logging

import uvicorn

from app.config import settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Serve the viewer using the configured host, port and data source."""

    logging.basicConfig(level=logging.INFO)
    logger.info(
        "Serving %s with catalog data from %s",
        settings.app_name,
        settings.resolve_data_base_url(),
    )
    uvicorn.run(
        "app.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.environment == "development",
        log_level="debug" if settings.environment == "development" else "info",
    )


if __name__ == "__main__":  # pragma: no cover - runtime entrypoint
    main()
