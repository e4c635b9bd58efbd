"""REPL connection interface consumed by the apropos pipeline.

The pipeline only needs symbol search, the namespace list, and a handful of
fire-and-forget actions. ``NreplConnection`` implements them over nREPL.
"""

from __future__ import annotations

from typing import Protocol

from ..symbols import SymbolRecord
from .nrepl import NreplConnection, discover_port


class ReplConnection(Protocol):
    def ensure_connected(self) -> None:
        """Raise ``ReplConnectionError`` unless a live session exists."""

    def search_symbols(
        self,
        query: str,
        namespace: str | None = None,
        include_doc: bool = False,
    ) -> list[SymbolRecord]: ...

    def list_namespaces(self) -> list[str]: ...

    def find_definition(self, name: str) -> None: ...

    def show_doc(self, name: str) -> None: ...

    def lookup_external_doc(self, name: str) -> None: ...

    def set_active_namespace(self, ns: str) -> None: ...


__all__ = ["NreplConnection", "ReplConnection", "discover_port"]
