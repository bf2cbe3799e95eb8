"""Tokenizing and classifying raw input lines.

A line becomes exactly one of three shapes before anything runs:

- ``Pipe``: the line contains ``|`` (checked first, nothing else is looked at)
- ``Redirect``: the line contains ``>>`` (append) or else ``>`` (truncate)
- ``Plain``: everything else

Classification looks at the raw line, not the tokens, so ``pwd>out`` is
still a redirect (and then rejected by the redirector for its shape).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Union

from .result import InvalidArgumentError


class RedirectMode(str, Enum):
    TRUNCATE = ">"
    APPEND = ">>"


@dataclass(frozen=True)
class Plain:
    tokens: List[str]

    @property
    def verb(self) -> str:
        return self.tokens[0].lower() if self.tokens else ""


@dataclass(frozen=True)
class Redirect:
    tokens: List[str]
    mode: RedirectMode


@dataclass(frozen=True)
class Pipe:
    left: str
    right: str


ParsedCommand = Union[Plain, Redirect, Pipe]


def tokenize(line: str) -> List[str]:
    """Split on runs of whitespace. No quoting or escaping is honored."""
    return line.strip().split()


def split_pipe(line: str) -> tuple[str, str]:
    """Split on the first ``|`` into two trimmed stages."""
    left, _, right = line.partition("|")
    return left.strip(), right.strip()


def classify(line: str) -> ParsedCommand:
    if line is None:
        raise InvalidArgumentError("input line must not be None")

    if "|" in line:
        left, right = split_pipe(line)
        return Pipe(left=left, right=right)
    if ">>" in line:
        return Redirect(tokens=tokenize(line), mode=RedirectMode.APPEND)
    if ">" in line:
        return Redirect(tokens=tokenize(line), mode=RedirectMode.TRUNCATE)
    return Plain(tokens=tokenize(line))
