"""Persistent JSON config helpers.

Stores namespace exclusions, doc follow mode, sort order, key tokens, action
tables, theme and nREPL endpoint. Malformed or missing config falls back to
defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from .namespaces import DEFAULT_EXCLUDED_NAMESPACES
from .sources import DEFAULT_NAMESPACE_ACTIONS, DEFAULT_SYMBOL_ACTIONS

APP_NAME = "lazyapropos"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_NREPL_HOST = "localhost"
DEFAULT_KEY_BINDINGS: dict[str, str] = {
    "toggle_doc": "CTRL_D",
    "namespaces": "CTRL_O",
    "browse_namespace": "CTRL_B",
}


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON."""
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def _string_list(value: object) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def load_excluded_namespaces(data: dict[str, object] | None = None) -> tuple[str, ...]:
    """Return exclusion rules; defaults when unset, empty list is honored."""
    data = load_config() if data is None else data
    rules = _string_list(data.get("excluded_namespaces"))
    if rules is None:
        return DEFAULT_EXCLUDED_NAMESPACES
    return tuple(rules)


def load_doc_follow(data: dict[str, object] | None = None) -> bool:
    """Only explicit booleans are accepted; anything else means ``False``."""
    data = load_config() if data is None else data
    value = data.get("doc_follow")
    return value if isinstance(value, bool) else False


def load_namespace_sort_descending(data: dict[str, object] | None = None) -> bool:
    data = load_config() if data is None else data
    value = data.get("namespace_sort")
    return isinstance(value, str) and value.strip().lower() == "descending"


def load_theme_name(data: dict[str, object] | None = None) -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    data = load_config() if data is None else data
    value = data.get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_key_bindings(data: dict[str, object] | None = None) -> dict[str, str]:
    """Merge configured key tokens over defaults; unknown commands are dropped."""
    data = load_config() if data is None else data
    bindings = dict(DEFAULT_KEY_BINDINGS)
    value = data.get("keys")
    if not isinstance(value, dict):
        return bindings
    for command, token in value.items():
        if command in bindings and isinstance(token, str) and token.strip():
            bindings[command] = token.strip().upper()
    return bindings


def _load_action_table(value: object, default: tuple[tuple[str, str], ...]) -> tuple[tuple[str, str], ...]:
    """Read an ordered ``[[label, action_id], ...]`` table.

    Malformed rows are dropped; an absent or entirely invalid table falls back
    to ``default``.
    """
    if not isinstance(value, list):
        return default
    table: list[tuple[str, str]] = []
    for row in value:
        if not isinstance(row, list) or len(row) != 2:
            continue
        label, action_id = row
        if isinstance(label, str) and isinstance(action_id, str) and label and action_id:
            table.append((label, action_id))
    return tuple(table) if table else default


def load_symbol_actions(data: dict[str, object] | None = None) -> tuple[tuple[str, str], ...]:
    data = load_config() if data is None else data
    return _load_action_table(data.get("symbol_actions"), DEFAULT_SYMBOL_ACTIONS)


def load_namespace_actions(data: dict[str, object] | None = None) -> tuple[tuple[str, str], ...]:
    data = load_config() if data is None else data
    return _load_action_table(data.get("namespace_actions"), DEFAULT_NAMESPACE_ACTIONS)


def load_nrepl_endpoint(data: dict[str, object] | None = None) -> tuple[str, int | None]:
    """Return ``(host, port)``; port is ``None`` unless a valid TCP port is set."""
    data = load_config() if data is None else data
    host = data.get("nrepl_host")
    port = data.get("nrepl_port")
    if not isinstance(host, str) or not host.strip():
        host = DEFAULT_NREPL_HOST
    if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
        port = None
    return host.strip(), port


@dataclass(frozen=True)
class AproposConfig:
    """Configuration resolved once at startup and read-only afterwards."""

    excluded_namespaces: tuple[str, ...] = DEFAULT_EXCLUDED_NAMESPACES
    doc_follow: bool = False
    namespace_sort_descending: bool = False
    theme_name: str | None = None
    no_color: bool = False
    key_bindings: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_KEY_BINDINGS))
    symbol_actions: tuple[tuple[str, str], ...] = DEFAULT_SYMBOL_ACTIONS
    namespace_actions: tuple[tuple[str, str], ...] = DEFAULT_NAMESPACE_ACTIONS
    nrepl_host: str = DEFAULT_NREPL_HOST
    nrepl_port: int | None = None


def load_apropos_config() -> AproposConfig:
    """Read the config file once and resolve every recognised option."""
    data = load_config()
    host, port = load_nrepl_endpoint(data)
    return AproposConfig(
        excluded_namespaces=load_excluded_namespaces(data),
        doc_follow=load_doc_follow(data),
        namespace_sort_descending=load_namespace_sort_descending(data),
        theme_name=load_theme_name(data),
        key_bindings=load_key_bindings(data),
        symbol_actions=load_symbol_actions(data),
        namespace_actions=load_namespace_actions(data),
        nrepl_host=host,
        nrepl_port=port,
    )


__all__ = [
    "AproposConfig",
    "CONFIG_PATH",
    "DEFAULT_KEY_BINDINGS",
    "load_apropos_config",
    "load_config",
    "load_doc_follow",
    "load_excluded_namespaces",
    "load_key_bindings",
    "load_namespace_actions",
    "load_namespace_sort_descending",
    "load_nrepl_endpoint",
    "load_symbol_actions",
    "load_theme_name",
    "save_config",
]
