"""Command results.

Every verb returns a ``CommandResult``: the exact text a user would see,
tagged with an ``ErrorKind`` when the command failed. Success and failure
share the same text channel so the REPL can print either verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class InvalidArgumentError(ValueError):
    """Raised when a handler is called without an argument list."""


class ErrorKind(str, Enum):
    """Categories of user-facing command failures."""
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    NOT_EMPTY = "not_empty"
    IS_A_DIRECTORY = "is_a_directory"
    NOT_A_DIRECTORY = "not_a_directory"
    UNSUPPORTED_FLAG = "unsupported_flag"
    MISSING_OPERAND = "missing_operand"
    UNKNOWN_COMMAND = "unknown_command"
    BAD_REDIRECT = "bad_redirect"
    IO_ERROR = "io_error"


@dataclass(frozen=True)
class CommandResult:
    output: str = ""
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        return self.output

    @classmethod
    def success(cls, output: str = "") -> "CommandResult":
        return cls(output=output)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "CommandResult":
        return cls(output=message, error=kind)


def require_tokens(tokens) -> list[str]:
    """Return ``tokens`` as a list, failing fast on ``None``."""
    if tokens is None:
        raise InvalidArgumentError("argument list must not be None")
    return list(tokens)
