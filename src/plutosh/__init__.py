"""PlutoShell: an interactive shell emulating a handful of POSIX filesystem verbs.

The core is ``CommandInterpreter.interpret``: one raw line in, one
``CommandResult`` out.
"""

from .interpreter import CommandInterpreter
from .parser import Pipe, Plain, Redirect, RedirectMode, classify, tokenize
from .paths import resolve
from .result import CommandResult, ErrorKind, InvalidArgumentError
from .session import Session
from .verbs import VERBS, Verb, lookup

__all__ = [
    "CommandInterpreter",
    "CommandResult",
    "ErrorKind",
    "InvalidArgumentError",
    "Pipe",
    "Plain",
    "Redirect",
    "RedirectMode",
    "Session",
    "VERBS",
    "Verb",
    "classify",
    "lookup",
    "resolve",
    "tokenize",
]

__version__ = "0.1.0"
