"""Terminal driver for picker sessions.

``PickerRuntime.present`` renders a session, feeds it keys until it is done,
restores the terminal and only then runs the chosen action or after-exit
continuation. Ready hooks fire once, after the first frame of the next
session, and are discarded.
"""

from __future__ import annotations

import shutil
import sys
from collections.abc import Callable, Sequence

from ..log import get_logger
from ..sources import SourceDescriptor
from ..ui_theme import DEFAULT_THEME, UITheme
from .reader import read_key
from .render import render_frame
from .session import PickerSession, PresentOptions, Selection
from .terminal import TerminalController

log = get_logger(__name__)

ReadyHook = Callable[[PickerSession], object]


class PickerRuntime:
    """Run picker sessions on a terminal."""

    def __init__(
        self,
        theme: UITheme = DEFAULT_THEME,
        *,
        stdin_fd: int | None = None,
        stdout_fd: int | None = None,
        read_key_fn: Callable[[int], str] = read_key,
        terminal_factory: Callable[[int, int], TerminalController] = TerminalController,
        terminal_size: Callable[[], tuple[int, int]] | None = None,
    ) -> None:
        self.theme = theme
        self._stdin_fd = stdin_fd
        self._stdout_fd = stdout_fd
        self.read_key_fn = read_key_fn
        self.terminal_factory = terminal_factory
        self.terminal_size = terminal_size if terminal_size is not None else self._default_terminal_size
        self._ready_hooks: list[ReadyHook] = []

    @property
    def stdin_fd(self) -> int:
        return sys.stdin.fileno() if self._stdin_fd is None else self._stdin_fd

    @property
    def stdout_fd(self) -> int:
        return sys.stdout.fileno() if self._stdout_fd is None else self._stdout_fd

    @staticmethod
    def _default_terminal_size() -> tuple[int, int]:
        term = shutil.get_terminal_size((80, 24))
        return term.columns, term.lines

    def add_ready_hook(self, hook: ReadyHook) -> None:
        """Register a callback for the next session's first rendered frame."""
        self._ready_hooks.append(hook)

    @property
    def pending_ready_hooks(self) -> int:
        return len(self._ready_hooks)

    def _take_ready_hooks(self) -> list[ReadyHook]:
        hooks, self._ready_hooks = self._ready_hooks, []
        return hooks

    def _draw(self, terminal: TerminalController, session: PickerSession) -> None:
        width, height = self.terminal_size()
        terminal.write_frame(render_frame(session, width, height, self.theme))
        session.dirty = False

    def present(self, sources: Sequence[SourceDescriptor], options: PresentOptions) -> Selection | None:
        """Show ``sources`` and return the committed selection, or ``None``.

        Hooks registered before this call belong to this session only. They
        are detached before the session starts, so a failed start drops them.
        """
        hooks = self._take_ready_hooks()
        session = PickerSession(sources, options)
        if options.preselect is not None:
            session.apply_preselect(options.preselect)
        log.debug("presenting %s with %d sources", options.buffer_name, len(session.sources))

        terminal = self.terminal_factory(self.stdin_fd, self.stdout_fd)
        with terminal.raw_mode():
            self._draw(terminal, session)
            for hook in hooks:
                hook(session)
            while not session.done:
                if session.dirty:
                    self._draw(terminal, session)
                key = self.read_key_fn(self.stdin_fd)
                if not key:
                    session.abort()
                    break
                session.handle_key(key)
        return self.finish(session)

    def finish(self, session: PickerSession) -> Selection | None:
        """Run the session outcome after the terminal has been restored."""
        if session.after_exit is not None:
            session.after_exit()
            return None
        selection = session.result
        if selection is None:
            log.debug("picker aborted")
            return None
        if selection.action is not None:
            for value in selection.values:
                log.info("%s: %s", selection.action.label, value)
                selection.action.handler(value)
        return selection


__all__ = ["PickerRuntime", "ReadyHook"]
