"""Command-line front door for lazyapropos.

Parses CLI options, resolves configuration and the nREPL endpoint, then
dispatches into the interactive picker (or prints sources with ``--list``).
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
import termios
from pathlib import Path

from .config import load_apropos_config
from .connection import NreplConnection, discover_port
from .controller import AproposController, AproposMode
from .errors import AproposError
from .log import get_console_log, get_logger
from .picker.runtime import PickerRuntime
from .sources import SourceDescriptor, sorted_candidates
from .ui_theme import available_theme_names, resolve_theme

log = get_logger(__name__)

TTY_REQUIRED_MESSAGE = "interactive mode needs a terminal; use --list"


def _port(value: str) -> int:
    """argparse type for TCP port numbers."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}") from exc
    if not 0 < parsed < 65536:
        raise argparse.ArgumentTypeError("port must be between 1 and 65535")
    return parsed


def render_source_list(sources: list[SourceDescriptor]) -> str:
    """Render sources as plain text: a header per source, one candidate per line."""
    out: list[str] = []
    for source in sources:
        out.append(f"{source.name}\n")
        for candidate in sorted_candidates(source):
            first, _, rest = candidate.label.partition("\n")
            out.append(f"  {first}\n")
            if source.multiline and rest:
                out.extend(f"  {line}\n" for line in rest.split("\n"))
    return "".join(out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse Clojure namespaces and symbols of a running nREPL server."
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in AproposMode],
        default=AproposMode.PLAIN.value,
        help="plain symbols, symbols with docs, or namespaces first.",
    )
    parser.add_argument("--host", default=None, help="nREPL host (default: config or localhost).")
    parser.add_argument("--port", type=_port, default=None, help="nREPL port (default: config or .nrepl-port).")
    parser.add_argument("--session", default=None, help="nREPL session id used when setting the namespace.")
    parser.add_argument("--symbol", default=None, help="Symbol at point, preselected in the symbol picker.")
    parser.add_argument("--ns", default=None, help="Current namespace, preselected in the namespace picker.")
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="RULE",
        help="Exclude a namespace (exact or prefix*). Repeatable; replaces configured rules.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--list", action="store_true", help="Print sources and exit without the picker.")
    parser.add_argument("--log-level", default="warning", help="Console log level (default: warning).")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the picker for the requested mode."""
    args = build_parser().parse_args(argv)
    get_console_log(args.log_level)

    config = load_apropos_config()
    overrides: dict[str, object] = {"no_color": args.no_color or config.no_color}
    if args.theme is not None:
        overrides["theme_name"] = args.theme
    if args.exclude is not None:
        overrides["excluded_namespaces"] = tuple(args.exclude)
    config = dataclasses.replace(config, **overrides)

    host = args.host or config.nrepl_host
    port = args.port or config.nrepl_port or discover_port(Path.cwd())
    theme = resolve_theme(config.theme_name, no_color=config.no_color)
    connection = NreplConnection(host, port, session=args.session, theme=theme, no_color=config.no_color)
    runtime = PickerRuntime(theme)
    controller = AproposController(
        connection,
        runtime,
        config,
        context_symbol=args.symbol,
        context_namespace=args.ns,
    )
    mode = AproposMode(args.mode)

    try:
        if args.list:
            connection.ensure_connected()
            if mode is AproposMode.NAMESPACE_FIRST:
                sources = [controller.namespace_source()]
            else:
                sources = controller.symbol_sources(include_doc=mode is AproposMode.WITH_DOC)
            sys.stdout.write(render_source_list(sources))
            return
        controller.apropos(mode)
    except AproposError as exc:
        log.error("%s", exc)
        raise SystemExit(str(exc)) from exc
    except termios.error as exc:
        log.error("cannot set up the terminal: %s", exc)
        raise SystemExit(TTY_REQUIRED_MESSAGE) from exc
    except OSError as exc:
        log.error("terminal I/O failed: %s", exc)
        raise SystemExit(f"terminal I/O failed: {exc}") from exc
    finally:
        connection.close()


if __name__ == "__main__":
    main()
