"""PlutoShell CLI - a small POSIX-like filesystem shell.

Usage:
    plutosh                 # Start interactive shell
    plutosh -c "ls -a"      # Interpret a single line and exit
    plutosh --cwd /tmp      # Start in another directory
"""

from __future__ import annotations

import argparse
import os
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel

from .config import Settings
from .interpreter import CommandInterpreter
from .log import setup_logging
from .result import CommandResult
from .session import Session
from .terminal import TerminalInput

console = Console()

EXIT_COMMAND = "exit"


def print_result(result: CommandResult, out: Optional[Console] = None) -> None:
    """Print a result verbatim, errors in red, ending with exactly one newline."""
    out = out or console
    if not result.output:
        return
    # Undecodable bytes (surrogate escapes) are shown as U+FFFD on screen
    text = result.output.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
    end = "" if text.endswith("\n") else "\n"
    style = None if result.ok else "red"
    out.print(text, end=end, style=style, markup=False, highlight=False, soft_wrap=True)


def prompt_fragments(cwd: str, settings: Settings) -> list[tuple[str, str]]:
    return [
        (f"fg:ansi{settings.path_color}", cwd),
        (f"fg:ansi{settings.prompt_color}", " $ "),
    ]


def run_once(interpreter: CommandInterpreter, line: str) -> int:
    result = interpreter.interpret(line)
    print_result(result)
    return 0 if result.ok else 1


def repl(interpreter: CommandInterpreter, terminal: TerminalInput, settings: Settings) -> int:
    while True:
        line = terminal.prompt(prompt_fragments(interpreter.cwd, settings))
        if line is None:
            console.print()
            return 0

        line = line.strip()
        if not line:
            continue
        if line == EXIT_COMMAND:
            return 0

        print_result(interpreter.interpret(line))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plutosh",
        description="PlutoShell: a small shell for cd, ls, mkdir, touch, rm, rmdir, mv and cat",
    )
    parser.add_argument("-c", dest="command", metavar="LINE", help="Interpret LINE and exit")
    parser.add_argument("--cwd", help="Starting directory (default: current directory)")
    parser.add_argument("--no-history", action="store_true", help="Do not persist command history")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level for diagnostics on stderr",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    settings = Settings.load()
    if args.no_history:
        settings.history_enabled = False
    if args.log_level:
        settings.log_level = args.log_level
    setup_logging(settings.log_level)

    start = os.path.abspath(os.path.expanduser(args.cwd)) if args.cwd else os.getcwd()
    if not os.path.isdir(start):
        console.print(f"[red]Not a directory:[/red] {start}")
        raise SystemExit(2)

    interpreter = CommandInterpreter(Session(cwd=start))

    if args.command is not None:
        raise SystemExit(run_once(interpreter, args.command))

    terminal = TerminalInput(
        cwd_getter=lambda: interpreter.cwd,
        history_enabled=settings.history_enabled,
    )
    if terminal.has_advanced_features:
        console.print(
            Panel.fit(
                "[bold cyan]PlutoShell[/bold cyan]\n"
                "Type [bold]help[/bold] for commands, [bold]exit[/bold] to quit.\n"
                "[dim]Arrow keys for history, Tab for completion[/dim]",
                title="plutosh",
            )
        )

    raise SystemExit(repl(interpreter, terminal, settings))


if __name__ == "__main__":
    main()
