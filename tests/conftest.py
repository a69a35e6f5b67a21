"""Pytest configuration and shared catalog fixtures."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest


# Ensure the application package is importable when running tests without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO tests to run on asyncio without requiring trio."""

    return "asyncio"


@pytest.fixture
def sample_records() -> list[dict[str, Any]]:
    """Raw dataset records covering both marker shapes and missing fields."""

    return [
        {
            "id": "us-only",
            "title": "Only In America",
            "rating": "7.1",
            "year": "2019",
            "countries": ["US"],
        },
        {
            "id": "de-only",
            "title": "Nur In Deutschland",
            "rating": 8.4,
            "year": 2020,
            "countries": [{"code": "DE"}],
        },
        {
            "title": "No Markers",
            "rating": "9.9",
        },
    ]
