"""Key-combo registry primitives for picker keymaps.

Keymaps are declarative lists of bindings built fresh for every picker
session; a binding handler receives the live session.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .session import PickerSession

KeyHandler = Callable[["PickerSession"], object]


def normalize_key_token(key: str) -> str:
    """Canonicalize named key tokens while leaving printable chars untouched."""
    if len(key) == 1:
        return key
    return key.strip().upper().replace("-", "_")


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single session command."""

    combos: tuple[str, ...]
    handler: KeyHandler
    description: str = ""


class KeyComboRegistry:
    """Small key-dispatch table with key normalization."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else normalize_key_token
        self._handlers: dict[str, KeyHandler] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[self._normalize(combo)] = binding.handler
        return self

    def register_bindings(self, bindings: Iterable[KeyComboBinding]) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def __contains__(self, key: str) -> bool:
        return self._normalize(key) in self._handlers

    def dispatch(self, key: str, session: PickerSession) -> bool:
        """Invoke the handler bound to ``key``; ``False`` when nothing is bound."""
        handler = self._handlers.get(self._normalize(key))
        if handler is None:
            return False
        handler(session)
        return True


__all__ = [
    "KeyComboBinding",
    "KeyComboRegistry",
    "KeyHandler",
    "normalize_key_token",
]
