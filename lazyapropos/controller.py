"""Apropos entry points: symbol picker, doc picker and namespace picker.

The controller only sequences work: check the connection, compute the
preselection target from the caller's context, assemble sources and hand them
to the picker runtime together with a keymap built for this invocation.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

from .config import AproposConfig
from .log import get_logger
from .picker.keys import KeyComboBinding
from .picker.session import PickerSession, PresentOptions, Selection
from .sources import (
    SourceAction,
    SourceDescriptor,
    build_namespace_source,
    build_symbol_sources,
    resolve_actions,
)
from .symbols import SEPARATOR, symbol_namespace
from .ui_theme import resolve_theme

if TYPE_CHECKING:
    from .connection import ReplConnection
    from .picker.runtime import PickerRuntime

log = get_logger(__name__)

SYMBOL_BUFFER = "*lazyapropos*"
NAMESPACE_BUFFER = "*lazyapropos-ns*"


class AproposMode(Enum):
    PLAIN = "plain"
    WITH_DOC = "doc"
    NAMESPACE_FIRST = "ns"


def symbol_preselect_pattern(symbol: str | None) -> re.Pattern[str] | None:
    """Match candidates whose bare or qualified name equals ``symbol``."""
    if not symbol:
        return None
    return re.compile(rf"(^|{re.escape(SEPARATOR)}){re.escape(symbol)}$")


def namespace_preselect_pattern(ns: str | None) -> re.Pattern[str] | None:
    if not ns:
        return None
    return re.compile(rf"^{re.escape(ns)}$")


class AproposController:
    """Top-level apropos commands bound to one connection and runtime."""

    def __init__(
        self,
        connection: ReplConnection,
        runtime: PickerRuntime,
        config: AproposConfig,
        *,
        context_symbol: str | None = None,
        context_namespace: str | None = None,
        doc_width: int | None = None,
    ) -> None:
        self.connection = connection
        self.runtime = runtime
        self.config = config
        self.context_symbol = context_symbol
        self.context_namespace = context_namespace
        self.doc_width = doc_width
        self.theme = resolve_theme(config.theme_name, no_color=config.no_color)

    def _symbol_handlers(self) -> dict[str, Callable[[str], object]]:
        return {
            "find-definition": self.connection.find_definition,
            "show-doc": self.connection.show_doc,
            "lookup-external-doc": self.connection.lookup_external_doc,
            "set-ns": lambda value: self.connection.set_active_namespace(symbol_namespace(value)),
        }

    def _namespace_handlers(self) -> dict[str, Callable[[str], object]]:
        return {
            "browse-ns": lambda ns: self.choose_symbol(preselect_source=ns),
            "find-definition": self.connection.find_definition,
            "show-doc": self.connection.show_doc,
            "lookup-external-doc": self.connection.lookup_external_doc,
            "set-ns": self.connection.set_active_namespace,
        }

    def symbol_actions(self) -> tuple[SourceAction, ...]:
        return resolve_actions(self.config.symbol_actions, self._symbol_handlers())

    def namespace_actions(self) -> tuple[SourceAction, ...]:
        return resolve_actions(self.config.namespace_actions, self._namespace_handlers())

    def symbol_keymap(self, include_doc: bool) -> tuple[KeyComboBinding, ...]:
        """Bindings for switching modes from the symbol picker."""
        keys = self.config.key_bindings

        def toggle_doc(session: PickerSession) -> None:
            source = session.current_source()
            name = source.name if source is not None else None
            session.run_after_exit(lambda: self.choose_symbol(preselect_source=name, include_doc=not include_doc))

        def namespaces(session: PickerSession) -> None:
            value = session.current_value()
            session.run_after_exit(lambda: self.choose_namespace(value))

        return (
            KeyComboBinding((keys["toggle_doc"],), toggle_doc, "toggle docs"),
            KeyComboBinding((keys["namespaces"],), namespaces, "namespaces"),
        )

    def namespace_keymap(self) -> tuple[KeyComboBinding, ...]:
        """Bindings for jumping from a namespace to its symbols."""
        keys = self.config.key_bindings

        def browse(session: PickerSession) -> None:
            ns = session.current_value()
            session.run_after_exit(lambda: self.choose_symbol(preselect_source=ns))

        return (KeyComboBinding((keys["browse_namespace"],), browse, "browse namespace"),)

    def symbol_sources(self, include_doc: bool) -> list[SourceDescriptor]:
        follow = include_doc and self.config.doc_follow
        return build_symbol_sources(
            self.connection,
            self.config.excluded_namespaces,
            include_doc,
            follow,
            actions=self.symbol_actions(),
            descending=self.config.namespace_sort_descending,
            theme=self.theme,
            width=self.doc_width,
        )

    def namespace_source(self) -> SourceDescriptor:
        return build_namespace_source(
            self.connection,
            self.config.excluded_namespaces,
            actions=self.namespace_actions(),
            theme=self.theme,
        )

    def choose_symbol(self, preselect_source: str | None = None, include_doc: bool = False) -> Selection | None:
        """Browse every non-excluded symbol, grouped per namespace."""
        self.connection.ensure_connected()
        preselect = symbol_preselect_pattern(self.context_symbol)
        sources = self.symbol_sources(include_doc)
        if preselect_source is not None:

            def move_to_source(session: PickerSession) -> None:
                if not session.select_first_in_source(preselect_source):
                    log.debug("preselect source %s has no candidates", preselect_source)

            self.runtime.add_ready_hook(move_to_source)
        options = PresentOptions(
            buffer_name=SYMBOL_BUFFER,
            keymap=self.symbol_keymap(include_doc),
            preselect=preselect,
            candidate_limit=None,
        )
        return self.runtime.present(sources, options)

    def choose_symbol_with_doc(self, preselect_source: str | None = None) -> Selection | None:
        return self.choose_symbol(preselect_source, include_doc=True)

    def choose_namespace(self, default: str | None = None) -> Selection | None:
        """Browse namespaces, preselecting ``default`` (or its namespace part)."""
        self.connection.ensure_connected()
        if default and SEPARATOR in default:
            default = symbol_namespace(default)
        if not default:
            default = self.context_namespace
        source = self.namespace_source()
        options = PresentOptions(
            buffer_name=NAMESPACE_BUFFER,
            keymap=self.namespace_keymap(),
            preselect=namespace_preselect_pattern(default),
            candidate_limit=None,
        )
        return self.runtime.present([source], options)

    def apropos(self, mode: AproposMode | str = AproposMode.PLAIN) -> Selection | None:
        """Route to the picker for ``mode``."""
        mode = AproposMode(mode)
        if mode is AproposMode.WITH_DOC:
            return self.choose_symbol_with_doc()
        if mode is AproposMode.NAMESPACE_FIRST:
            return self.choose_namespace()
        return self.choose_symbol()


__all__ = [
    "AproposController",
    "AproposMode",
    "NAMESPACE_BUFFER",
    "SYMBOL_BUFFER",
    "namespace_preselect_pattern",
    "symbol_preselect_pattern",
]
