"""Command interpreter.

The single entry point the REPL (or any other caller) uses: feed it one raw
line, get back one ``CommandResult``.
"""

from __future__ import annotations

import logging
from typing import Optional

from .parser import Pipe, Plain, Redirect, classify
from .pipe import run_pipe
from .redirect import redirect
from .result import CommandResult, ErrorKind
from .session import Session
from .verbs import lookup

logger = logging.getLogger(__name__)


class CommandInterpreter:
    """Classifies a line and routes it to a verb, the redirector or the pipe.

    Each interpreter owns its ``Session``; two interpreters never share a
    working directory.
    """

    def __init__(self, session: Optional[Session] = None) -> None:
        self.session = session or Session()

    @property
    def cwd(self) -> str:
        return self.session.cwd

    def interpret(self, raw_line: str) -> CommandResult:
        parsed = classify(raw_line)
        logger.debug("classified %r as %s", raw_line, type(parsed).__name__)
        try:
            return self._dispatch(parsed)
        except OSError as e:
            logger.warning("command %r failed: %s", raw_line, e)
            return CommandResult.failure(ErrorKind.IO_ERROR, f"Error: {e.strerror or e}")
        except UnicodeError as e:
            logger.warning("command %r failed: %s", raw_line, e)
            return CommandResult.failure(ErrorKind.IO_ERROR, f"Error: {e}")

    def _dispatch(self, parsed) -> CommandResult:
        if isinstance(parsed, Pipe):
            return run_pipe(self.session, parsed.left, parsed.right)
        if isinstance(parsed, Redirect):
            return redirect(self.session, parsed.tokens, parsed.mode)
        return self._run_plain(parsed)

    def _run_plain(self, parsed: Plain) -> CommandResult:
        if not parsed.tokens:
            return CommandResult.success()
        verb = lookup(parsed.verb)
        if verb is None:
            return CommandResult.failure(ErrorKind.UNKNOWN_COMMAND, f"Unknown command: {parsed.verb}")
        return verb.handler(self.session, parsed.tokens)
