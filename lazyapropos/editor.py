"""Open definitions in the user's ``$EDITOR``.

Jump targets are ``+line path`` pairs, understood by vi, emacs, nano and most
terminal editors. Failures come back as messages so callers can print the
location instead.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from pathlib import Path


def editor_command(target: Path, line: int | None = None) -> list[str] | None:
    """Build the argv for opening ``target`` at ``line``; ``None`` without an editor."""
    argv = shlex.split(os.environ.get("EDITOR", ""))
    if not argv:
        return None
    if line is not None and line > 0:
        argv.append(f"+{line}")
    argv.append(str(target))
    return argv


def launch_editor(target: Path, line: int | None = None) -> str | None:
    """Run the editor in the foreground; return an error message on failure."""
    argv = editor_command(target, line)
    if argv is None:
        return "Cannot open definition: $EDITOR is not set."
    try:
        subprocess.run(argv, check=False)
    except OSError as exc:
        return f"Cannot open definition with {argv[0]}: {exc}"
    return None


__all__ = ["editor_command", "launch_editor"]
