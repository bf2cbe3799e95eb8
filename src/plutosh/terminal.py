"""Terminal input with readline-like features.

Provides:
- Command history with up/down arrow navigation
- Tab completion for verbs and for paths relative to the shell's cwd
- Persistent history across sessions
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Iterable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion, PathCompleter
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings

from .verbs import VERBS


def history_path() -> Path:
    """Get path to command history file."""
    if os.name == "nt":
        base = os.environ.get("APPDATA") or str(Path.home())
        return Path(base) / "plutosh" / "history"
    return Path(os.environ.get("XDG_DATA_HOME", str(Path.home() / ".local" / "share"))) / "plutosh" / "history"


class ShellCompleter(Completer):
    """Completes verb names in first position and paths everywhere else."""

    def __init__(self, cwd_getter: Callable[[], str], verbs: Optional[Iterable[str]] = None):
        self.cwd_getter = cwd_getter
        self.verbs = sorted(verbs if verbs is not None else VERBS)
        self._paths = PathCompleter(get_paths=lambda: [self.cwd_getter()], expanduser=True)

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        word = document.get_word_before_cursor(WORD=True)

        if not text.strip() or text.lstrip() == word:
            for verb in self.verbs:
                if verb.startswith(word.lower()):
                    yield Completion(verb, start_position=-len(word))
            return

        # PathCompleter reads the whole document as one path, so give it the last word only
        yield from self._paths.get_completions(Document(word, len(word)), complete_event)


class TerminalInput:
    """Line input for the REPL.

    Usage:
        terminal = TerminalInput(cwd_getter=lambda: session.cwd)
        while True:
            line = terminal.prompt([("class:path", cwd), ("", " $ ")])
            if line is None:  # EOF/Ctrl+D
                break
    """

    def __init__(
        self,
        cwd_getter: Optional[Callable[[], str]] = None,
        history_enabled: bool = True,
        interactive: Optional[bool] = None,
    ):
        self.cwd_getter = cwd_getter or os.getcwd
        self._history_enabled = history_enabled
        self._interactive = sys.stdin.isatty() if interactive is None else interactive
        self._session: Optional[PromptSession] = None

        if self._interactive:
            self._setup_prompt_toolkit()

    def _setup_prompt_toolkit(self) -> None:
        if self._history_enabled:
            path = history_path()
            path.parent.mkdir(parents=True, exist_ok=True)
            history = FileHistory(str(path))
        else:
            history = InMemoryHistory()

        bindings = KeyBindings()

        @bindings.add("c-l")
        def clear_screen(event):
            """Clear the screen."""
            event.app.renderer.clear()

        self._session = PromptSession(
            history=history,
            completer=ShellCompleter(self.cwd_getter),
            complete_while_typing=False,  # Only complete on Tab
            key_bindings=bindings,
            enable_history_search=True,  # Ctrl+R for reverse search
        )

    def prompt(self, message) -> Optional[str]:
        """Read one line. Returns None on EOF or Ctrl+C.

        ``message`` is a plain string or a list of ``(style, text)`` fragments.
        """
        try:
            if self._session is not None:
                return self._session.prompt(FormattedText(message) if isinstance(message, list) else message)
            plain = "".join(text for _, text in message) if isinstance(message, list) else message
            return input(plain)
        except (EOFError, KeyboardInterrupt):
            return None

    @property
    def has_advanced_features(self) -> bool:
        return self._session is not None
