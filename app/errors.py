"""Exception types raised by the viewer."""

from __future__ import annotations


class ViewerError(Exception):
    """Base class for catalog viewer failures."""


class FetchError(ViewerError):
    """The catalog resource could not be retrieved."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(ViewerError):
    """The catalog resource was retrieved but is not a JSON entry list."""


class ReloadInProgressError(ViewerError):
    """A reload was requested while another one is still running."""


class EntryNotFoundError(ViewerError, KeyError):
    """No entry with the requested identity is in the current results."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Entry not found"
