"""Fuzzy-selection picker: session model, rendering and terminal runtime."""

from .keys import KeyComboBinding, KeyComboRegistry, normalize_key_token
from .render import render_frame
from .runtime import PickerRuntime
from .session import PickerEntry, PickerSession, PresentOptions, Selection

__all__ = [
    "KeyComboBinding",
    "KeyComboRegistry",
    "PickerEntry",
    "PickerRuntime",
    "PickerSession",
    "PresentOptions",
    "Selection",
    "normalize_key_token",
    "render_frame",
]
