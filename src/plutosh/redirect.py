"""Output redirection: ``verb > file`` and ``verb >> file``."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .parser import RedirectMode
from .paths import resolve
from .result import CommandResult, ErrorKind, require_tokens
from .session import Session
from .verbs import lookup

logger = logging.getLogger(__name__)

_ARROWS = {m.value for m in RedirectMode}


def _format_error(mode: RedirectMode) -> CommandResult:
    return CommandResult.failure(
        ErrorKind.BAD_REDIRECT,
        f"Error: Output redirection should be in the format: command {mode.value} file",
    )


def _arrow_index(tokens: List[str]) -> Optional[int]:
    for i, tok in enumerate(tokens[1:], start=1):
        if tok in _ARROWS:
            return i
    return None


def redirect(session: Session, tokens: Optional[Sequence[str]], mode: RedirectMode) -> CommandResult:
    """Run the verb before the arrow and write its output to the file after it.

    ``tokens`` is shaped ``[verb, *args, arrow, file, ...]``. Anything after
    the file name is ignored. When the verb itself fails, its error is
    returned and the file is left alone.
    """
    tokens = require_tokens(tokens)
    if len(tokens) < 3:
        return _format_error(mode)

    arrow = _arrow_index(tokens)
    if arrow is None or arrow + 1 >= len(tokens):
        return _format_error(mode)

    verb = lookup(tokens[0])
    if verb is None:
        return CommandResult.failure(ErrorKind.UNKNOWN_COMMAND, "Error: Unknown command.")

    # Resolved before the verb runs, so a cd does not move the target
    file_name = tokens[arrow + 1]
    path = resolve(file_name, session.cwd, session.home)

    result = verb.handler(session, tokens[:arrow])
    if not result.ok:
        return result

    file_mode = "a" if mode is RedirectMode.APPEND else "w"
    # surrogateescape round-trips undecodable filenames and non-UTF-8 file bytes
    with open(path, file_mode, encoding="utf-8", errors="surrogateescape", newline="") as f:
        f.write(result.output)
    logger.debug("%s output %s %s", verb.name, mode.value, path)

    if mode is RedirectMode.APPEND:
        return CommandResult.success(f"Output successfully appended to {file_name}")
    return CommandResult.success(f"Output successfully written to {file_name}")


def append_output_to_file(session: Session, tokens: Optional[Sequence[str]]) -> CommandResult:
    return redirect(session, tokens, RedirectMode.APPEND)


def forward_arrow(session: Session, tokens: Optional[Sequence[str]]) -> CommandResult:
    return redirect(session, tokens, RedirectMode.TRUNCATE)
