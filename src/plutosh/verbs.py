"""Built-in verbs.

Each handler takes the ``Session`` and the full token list of one command
(token 0 is the verb itself) and returns a ``CommandResult``. Relative paths
are resolved against ``session.cwd``; handlers never call ``os.chdir``.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from .paths import parent_of, resolve
from .result import CommandResult, ErrorKind, require_tokens
from .session import Session

logger = logging.getLogger(__name__)

Handler = Callable[[Session, Optional[Sequence[str]]], CommandResult]

LS_UNSUPPORTED = "Error: This i argument isn't supported\n"


def _resolve(session: Session, token: str) -> str:
    return resolve(token, session.cwd, session.home)


def _combine(results: List[CommandResult]) -> CommandResult:
    """Join per-operand results into one, tagged with the first failure."""
    text = "\n".join(r.output for r in results)
    error = next((r.error for r in results if r.error is not None), None)
    return CommandResult(output=text, error=error)


def _split_flags(args: Sequence[str]) -> tuple[list[str], list[str]]:
    flags = [a for a in args if a.startswith("-") and len(a) > 1]
    operands = [a for a in args if not (a.startswith("-") and len(a) > 1)]
    return flags, operands


def _holds_cwd(session: Session, path: str) -> bool:
    """True when ``path`` is the working directory or one of its ancestors."""
    try:
        return os.path.commonpath([path, session.cwd]) == path
    except ValueError:  # different drives on Windows
        return False


def _refuse_cwd(name: str, verb: str) -> CommandResult:
    return CommandResult.failure(
        ErrorKind.INVALID_ARGUMENT,
        f"{verb}: refusing to remove '{name}': it contains the working directory",
    )


# -- navigation ---------------------------------------------------------------


def cd(session: Session, tokens: Optional[Sequence[str]]) -> CommandResult:
    args = require_tokens(tokens)[1:]
    if not args:
        return CommandResult.success()

    target = args[0]
    if target == "..":
        parent = parent_of(session.cwd)
        if parent is not None:
            session.change_dir(parent)
        return CommandResult.success()

    path = _resolve(session, target)
    if session.change_dir(path):
        logger.debug("cwd -> %s", session.cwd)
        return CommandResult.success()
    if os.path.exists(path):
        return CommandResult.failure(ErrorKind.NOT_A_DIRECTORY, f"cd: not a directory: {target}")
    return CommandResult.failure(ErrorKind.NOT_FOUND, f"cd: no such directory: {target}")


def pwd(session: Session, tokens: Optional[Sequence[str]]) -> CommandResult:
    require_tokens(tokens)
    return CommandResult.success(session.cwd)


def _list_dir(root: str, rel: str, show_hidden: bool, recursive: bool, out: List[str]) -> None:
    # Depth-first pre-order: a directory's name comes before its contents.
    here = os.path.join(root, rel) if rel else root
    for name in os.listdir(here):
        if not show_hidden and name.startswith("."):
            continue
        entry = os.path.join(rel, name) if rel else name
        out.append(entry)
        full = os.path.join(root, entry)
        if recursive and os.path.isdir(full) and not os.path.islink(full):
            _list_dir(root, entry, show_hidden, recursive, out)


def ls(session: Session, tokens: Optional[Sequence[str]]) -> CommandResult:
    args = require_tokens(tokens)[1:]
    show_hidden = False
    recursive = False
    targets: List[str] = []

    for arg in args:
        if arg == "-a":
            show_hidden = True
        elif arg == "-r":
            recursive = True
        elif arg.startswith("-"):
            return CommandResult.failure(ErrorKind.UNSUPPORTED_FLAG, LS_UNSUPPORTED)
        else:
            targets.append(arg)

    if len(targets) > 1:
        return CommandResult.failure(
            ErrorKind.INVALID_ARGUMENT, "Error: ls accepts at most one directory.\n"
        )

    if targets:
        name = targets[0]
        path = _resolve(session, name)
    else:
        name = "."
        path = session.cwd

    if not os.path.exists(path):
        return CommandResult.failure(ErrorKind.NOT_FOUND, f"Error: {name} does not exist.\n")
    if not os.path.isdir(path):
        return CommandResult.success(name + "\n")

    entries: List[str] = []
    _list_dir(path, "", show_hidden, recursive, entries)
    return CommandResult.success("".join(e + "\n" for e in entries))


# -- creation -----------------------------------------------------------------


def mkdir(session: Session, tokens: Optional[Sequence[str]]) -> CommandResult:
    """Create a directory and any missing parents.

    ``mkdir <path> [base]`` resolves ``path`` against ``base`` when given,
    otherwise against the working directory.
    """
    args = require_tokens(tokens)[1:]
    if not args or not args[0].strip():
        return CommandResult.failure(ErrorKind.INVALID_ARGUMENT, "Error: Invalid directory name.")

    name = args[0]
    base = _resolve(session, args[1]) if len(args) > 1 else session.cwd
    target = resolve(name, base, session.home)

    if os.path.exists(target):
        return CommandResult.failure(ErrorKind.ALREADY_EXISTS, "Error: Directory already exists.")

    os.makedirs(target)
    logger.debug("created directory %s", target)
    return CommandResult.success(f"Directory '{name}' created at {target}")


def _touch_one(session: Session, name: str) -> CommandResult:
    path = _resolve(session, name)
    if os.path.exists(path):
        os.utime(path, None)
        return CommandResult.success(f"File '{name}' updated successfully.")
    with open(path, "a", encoding="utf-8"):
        pass
    return CommandResult.success(f"File '{name}' created successfully.")


def touch(session: Session, tokens: Optional[Sequence[str]]) -> CommandResult:
    args = require_tokens(tokens)[1:]
    if not args:
        return CommandResult.failure(ErrorKind.MISSING_OPERAND, "touch: missing file operand")
    return _combine([_touch_one(session, name) for name in args])


# -- removal ------------------------------------------------------------------


def _rm_one(session: Session, name: str, recursive: bool) -> CommandResult:
    path = _resolve(session, name)
    if not os.path.lexists(path):
        return CommandResult.failure(ErrorKind.NOT_FOUND, f"Error: {name} does not exist.")

    if os.path.isdir(path) and not os.path.islink(path):
        if not recursive:
            return CommandResult.failure(ErrorKind.IS_A_DIRECTORY, f"Error: {name} is a directory.")
        shutil.rmtree(path)
        logger.debug("removed tree %s", path)
        return CommandResult.success(f"Directory '{name}' deleted.")

    os.remove(path)
    logger.debug("removed file %s", path)
    return CommandResult.success(f"File '{name}' deleted.")


def rm(session: Session, tokens: Optional[Sequence[str]]) -> CommandResult:
    flags, operands = _split_flags(require_tokens(tokens)[1:])
    for flag in flags:
        if flag != "-r":
            return CommandResult.failure(ErrorKind.UNSUPPORTED_FLAG, f"rm: unsupported option '{flag}'")
    if not operands:
        return CommandResult.failure(ErrorKind.MISSING_OPERAND, "rm: missing operand")

    for name in operands:
        if _holds_cwd(session, _resolve(session, name)):
            return _refuse_cwd(name, "rm")

    recursive = "-r" in flags
    return _combine([_rm_one(session, name, recursive) for name in operands])


def rmdir(session: Session, tokens: Optional[Sequence[str]]) -> CommandResult:
    args = require_tokens(tokens)[1:]
    if not args:
        return CommandResult.failure(ErrorKind.MISSING_OPERAND, "rmdir: missing operand")

    name = args[0]
    path = _resolve(session, name)
    if not os.path.exists(path):
        return CommandResult.failure(ErrorKind.NOT_FOUND, "Error: Directory does not exist.")
    if not os.path.isdir(path):
        return CommandResult.failure(ErrorKind.NOT_A_DIRECTORY, f"Error: {name} is not a directory.")
    if _holds_cwd(session, path):
        return _refuse_cwd(name, "rmdir")
    if os.listdir(path):
        return CommandResult.failure(ErrorKind.NOT_EMPTY, "Error: Directory is not empty.")

    os.rmdir(path)
    return CommandResult.success(f"Directory '{name}' deleted.")


# -- content ------------------------------------------------------------------


def mv(session: Session, tokens: Optional[Sequence[str]]) -> CommandResult:
    args = require_tokens(tokens)[1:]
    if len(args) < 2:
        return CommandResult.failure(ErrorKind.MISSING_OPERAND, "mv: missing destination file operand")

    src_name, dst_name = args[0], args[1]
    src = _resolve(session, src_name)
    dst = _resolve(session, dst_name)

    if not os.path.lexists(src):
        return CommandResult.failure(
            ErrorKind.NOT_FOUND, f"mv: cannot stat '{src_name}': No such file or directory"
        )
    if _holds_cwd(session, src):
        return CommandResult.failure(
            ErrorKind.INVALID_ARGUMENT, f"mv: refusing to move '{src_name}': it contains the working directory"
        )
    if os.path.isdir(dst):
        dst = os.path.join(dst, os.path.basename(src))

    shutil.move(src, dst)
    logger.debug("moved %s -> %s", src, dst)
    return CommandResult.success("File moved successfully and original file deleted.")


def cat(session: Session, tokens: Optional[Sequence[str]]) -> CommandResult:
    """Concatenate files in argument order.

    A missing file or directory operand adds an inline error line and the
    remaining files are still read.
    """
    args = require_tokens(tokens)[1:]
    if not args:
        return CommandResult.failure(ErrorKind.MISSING_OPERAND, "cat: missing file operand")

    parts: List[str] = []
    error: Optional[ErrorKind] = None
    for name in args:
        path = _resolve(session, name)
        if os.path.isdir(path):
            parts.append(f"cat: {name}: Is a directory\n")
            error = error or ErrorKind.IS_A_DIRECTORY
            continue
        if not os.path.exists(path):
            parts.append(f"cat: {name}: No such file or directory\n")
            error = error or ErrorKind.NOT_FOUND
            continue
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as f:
            parts.append(f.read())

    return CommandResult(output="".join(parts), error=error)


def help_(session: Session, tokens: Optional[Sequence[str]]) -> CommandResult:
    require_tokens(tokens)
    width = max(len(name) for name in VERBS)
    lines = [f"{name.ljust(width)}  {verb.summary}" for name, verb in VERBS.items()]
    return CommandResult.success("\n".join(lines))


@dataclass(frozen=True)
class Verb:
    name: str
    handler: Handler
    summary: str
    usage: str = ""


VERBS: Dict[str, Verb] = {
    v.name: v
    for v in (
        Verb("cd", cd, "Change the working directory", "cd [dir | .. | ~]"),
        Verb("pwd", pwd, "Print the working directory", "pwd"),
        Verb("ls", ls, "List directory contents", "ls [-a] [-r] [dir]"),
        Verb("mkdir", mkdir, "Create a directory and missing parents", "mkdir <path> [base]"),
        Verb("touch", touch, "Create a file or update its timestamp", "touch <file>..."),
        Verb("rm", rm, "Remove files, or directories with -r", "rm [-r] <path>..."),
        Verb("rmdir", rmdir, "Remove an empty directory", "rmdir <dir>"),
        Verb("mv", mv, "Move a file", "mv <source> <dest>"),
        Verb("cat", cat, "Print file contents", "cat <file>..."),
        Verb("help", help_, "Show this help", "help"),
    )
}


def lookup(name: str) -> Optional[Verb]:
    """Find a verb by name, case-insensitively."""
    return VERBS.get(name.lower())
