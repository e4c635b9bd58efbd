"""Error kinds raised across the apropos pipeline.

Connection failures and malformed server data propagate to the entry points,
which surface them to the user. Aborting the picker is not an error.
"""

from __future__ import annotations


class AproposError(Exception):
    """Base class for errors surfaced to the user by the CLI."""


class ReplConnectionError(AproposError, ConnectionError):
    """No live nREPL session, a transport failure, or a server-side error."""


class MalformedSymbolName(AproposError, ValueError):
    """A qualified symbol name without the ``namespace/name`` separator."""

    def __init__(self, qualified_name: str) -> None:
        super().__init__(f"malformed qualified symbol name: {qualified_name!r}")
        self.qualified_name = qualified_name


__all__ = [
    "AproposError",
    "MalformedSymbolName",
    "ReplConnectionError",
]
