"""nREPL connection backed by ``nrepl-python-client``.

Symbol search and namespace listing use the cider-nrepl ``apropos`` and
``ns-list`` ops; definitions and docs come from ``info``. Each request carries
a fresh id and responses are read until one reports ``done``.
"""

from __future__ import annotations

import uuid
import webbrowser
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any
from urllib.parse import quote, unquote, urlparse

import nrepl

from ..editor import launch_editor
from ..errors import ReplConnectionError
from ..log import get_logger
from ..symbols import SEPARATOR, SymbolRecord
from ..ui_theme import DEFAULT_THEME, UITheme
from .docs import render_doc

log = get_logger(__name__)

PORT_FILE = ".nrepl-port"
CLOJUREDOCS_URL = "https://clojuredocs.org"
DEFAULT_NAMESPACE = "user"

# ClojureDocs escapes characters that are not URL-safe in var names.
_CLOJUREDOCS_ESCAPES = {"?": "_q", "/": "_fs", "\\": "_bs"}


def discover_port(directory: Path) -> int | None:
    """Read the port written to ``.nrepl-port`` by Leiningen/clojure CLI."""
    try:
        raw = (directory / PORT_FILE).read_text(encoding="utf-8").strip()
    except OSError:
        return None
    if not raw.isdigit():
        return None
    port = int(raw)
    return port if 0 < port < 65536 else None


def clojuredocs_url(name: str) -> str:
    """Return the ClojureDocs page for a qualified var or a namespace."""
    ns, sep, var = name.partition(SEPARATOR)
    if not sep:
        return f"{CLOJUREDOCS_URL}/{quote(ns)}"
    escaped = "".join(_CLOJUREDOCS_ESCAPES.get(ch, ch) for ch in var)
    return f"{CLOJUREDOCS_URL}/{quote(ns)}/{quote(escaped)}"


def _file_path(file_ref: str) -> Path | None:
    """Resolve an ``info`` file reference to a local path (``None`` for jars)."""
    if file_ref.startswith("file:"):
        return Path(unquote(urlparse(file_ref).path))
    if file_ref.startswith("jar:") or "://" in file_ref:
        return None
    return Path(file_ref)


class NreplConnection:
    """Synchronous nREPL client implementing ``ReplConnection``."""

    def __init__(
        self,
        host: str,
        port: int | None,
        *,
        session: str | None = None,
        connect: Callable[[str], Any] = nrepl.connect,
        theme: UITheme = DEFAULT_THEME,
        no_color: bool = False,
        open_url: Callable[[str], object] = webbrowser.open,
    ) -> None:
        self.host = host
        self.port = port
        self.session = session
        self.theme = theme
        self.no_color = no_color
        self._connect = connect
        self._open_url = open_url
        self._transport: Any = None

    @property
    def uri(self) -> str:
        return f"nrepl://{self.host}:{self.port}"

    @property
    def connected(self) -> bool:
        return self._transport is not None

    def ensure_connected(self) -> None:
        """Open the transport once; raise ``ReplConnectionError`` on failure."""
        if self._transport is not None:
            return
        if self.port is None:
            raise ReplConnectionError("no nREPL port configured and no .nrepl-port file found")
        try:
            self._transport = self._connect(self.uri)
        except OSError as exc:
            raise ReplConnectionError(f"cannot connect to {self.uri}: {exc}") from exc
        log.info("connected to %s", self.uri)

    def close(self) -> None:
        if self._transport is None:
            return
        try:
            self._transport.close()
        finally:
            self._transport = None

    def request(self, op: str, **params: object) -> list[dict[str, Any]]:
        """Send one op and collect its responses up to the ``done`` status."""
        if self._transport is None:
            raise ReplConnectionError("not connected to an nREPL server")
        msg_id = uuid.uuid4().hex
        message: dict[str, object] = {"op": op, "id": msg_id}
        if self.session:
            message["session"] = self.session
        message.update({key: value for key, value in params.items() if value is not None})
        log.debug("nrepl request %s", message)

        responses: list[dict[str, Any]] = []
        try:
            self._transport.write(message)
            while True:
                response = self._transport.read()
                if response is None:
                    raise ReplConnectionError(f"{self.uri} closed the connection during {op!r}")
                if response.get("id") not in (None, msg_id):
                    continue
                responses.append(response)
                status = response.get("status") or ()
                if "unknown-op" in status:
                    raise ReplConnectionError(
                        f"nREPL server does not support {op!r}; is cider-nrepl middleware loaded?"
                    )
                if "error" in status or "eval-error" in status:
                    raise ReplConnectionError(f"nREPL {op!r} failed: {response.get('err') or status}")
                if "done" in status:
                    return responses
        except ReplConnectionError:
            raise
        except OSError as exc:
            self._transport = None
            raise ReplConnectionError(f"nREPL transport failure during {op!r}: {exc}") from exc

    @staticmethod
    def _merged(responses: list[dict[str, Any]]) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for response in responses:
            merged.update(response)
        return merged

    def search_symbols(
        self,
        query: str,
        namespace: str | None = None,
        include_doc: bool = False,
    ) -> list[SymbolRecord]:
        responses = self.request(
            "apropos",
            query=query,
            ns=namespace,
            **{"docs?": "t" if include_doc else None},
        )
        matches = self._merged(responses).get("apropos-matches") or []
        return [SymbolRecord.from_response(entry) for entry in matches if isinstance(entry, Mapping)]

    def list_namespaces(self) -> list[str]:
        names = self._merged(self.request("ns-list")).get("ns-list") or []
        return [name for name in names if isinstance(name, str)]

    def info(self, name: str) -> dict[str, Any]:
        """Return the ``info`` response for a qualified var or namespace name.

        An empty dict means the server has no information for ``name``.
        """
        ns, sep, var = name.partition(SEPARATOR)
        if sep:
            merged = self._merged(self.request("info", ns=ns, sym=var))
        else:
            merged = self._merged(self.request("info", ns=DEFAULT_NAMESPACE, sym=name))
        if "no-info" in (merged.get("status") or ()):
            return {}
        return merged

    def find_definition(self, name: str) -> None:
        info = self.info(name)
        file_ref = info.get("file")
        if not isinstance(file_ref, str) or not file_ref:
            print(f"No definition found for {name}")
            return
        line = info.get("line") if isinstance(info.get("line"), int) else None
        path = _file_path(file_ref)
        if path is not None:
            error = launch_editor(path, line)
            if error is None:
                return
            log.warning(error)
        print(f"{file_ref}:{line}" if line else file_ref)

    def show_doc(self, name: str) -> None:
        info = self.info(name)
        if not info:
            print(f"No documentation for {name}")
            return
        print(render_doc(info, theme=self.theme, no_color=self.no_color))

    def lookup_external_doc(self, name: str) -> None:
        url = clojuredocs_url(name)
        print(url)
        self._open_url(url)

    def set_active_namespace(self, ns: str) -> None:
        if not self.session:
            log.warning("no nREPL session given; namespace change will not persist")
        self.request("eval", code=f"(in-ns '{ns})")
        print(f"REPL namespace set to {ns}")


__all__ = [
    "CLOJUREDOCS_URL",
    "NreplConnection",
    "PORT_FILE",
    "clojuredocs_url",
    "discover_port",
]
