"""Installable entry point for the streaming catalog viewer."""

from __future__ import annotations

from app.main import app, create_app
from app.filters import filter_entries
from app.rendering import render_results

__all__ = ["app", "create_app", "filter_entries", "render_results"]
