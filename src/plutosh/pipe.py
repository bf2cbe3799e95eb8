"""Two-stage ``a | b``.

Both stages run independently, left then right; nothing flows from the left
stage's output into the right stage. The right stage's result is returned.
Failures of the left stage are reported ahead of it.
"""

from __future__ import annotations

import logging

from .parser import split_pipe, tokenize
from .result import CommandResult, ErrorKind
from .session import Session
from .verbs import lookup

logger = logging.getLogger(__name__)


def run_stage(session: Session, command: str) -> CommandResult:
    tokens = tokenize(command)
    if not tokens:
        return CommandResult.failure(ErrorKind.INVALID_ARGUMENT, "Error: Empty command in pipe.")

    verb = lookup(tokens[0])
    if verb is None:
        return CommandResult.failure(
            ErrorKind.UNKNOWN_COMMAND, f"Unknown command in pipe: {tokens[0].lower()}"
        )
    return verb.handler(session, tokens)


def handle_pipe(session: Session, line: str) -> CommandResult:
    if "|" not in line:
        return run_stage(session, line)
    return run_pipe(session, *split_pipe(line))


def run_pipe(session: Session, left: str, right: str) -> CommandResult:
    first = run_stage(session, left)
    if not first.ok:
        logger.info("pipe stage %r failed: %s", left, first.output)
    second = run_stage(session, right)

    if first.ok:
        return second
    return CommandResult(
        output="\n".join(part for part in (first.output.rstrip("\n"), second.output) if part),
        error=second.error or first.error,
    )
