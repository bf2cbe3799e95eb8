"""Tests for terminal input and completion."""

from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document

from plutosh.terminal import ShellCompleter, TerminalInput, history_path


def _complete(completer, text):
    return [c.text for c in completer.get_completions(Document(text), CompleteEvent())]


class TestShellCompleter:
    """Tests for ShellCompleter."""

    def test_verbs_at_line_start(self, tmp_path):
        completer = ShellCompleter(lambda: str(tmp_path))
        assert _complete(completer, "rm") == ["rm", "rmdir"]

    def test_paths_relative_to_cwd(self, tmp_path):
        (tmp_path / "alpha.txt").write_text("")
        (tmp_path / "beta.txt").write_text("")
        completer = ShellCompleter(lambda: str(tmp_path))
        assert _complete(completer, "cat al") == ["pha.txt"]


class TestTerminalInput:
    """Tests for TerminalInput in non-interactive mode."""

    def test_plain_input(self, monkeypatch):
        prompts = []
        monkeypatch.setattr("builtins.input", lambda p: prompts.append(p) or "ls -a")
        terminal = TerminalInput(interactive=False)
        assert terminal.prompt([("", "/tmp"), ("", " $ ")]) == "ls -a"
        assert prompts == ["/tmp $ "]
        assert terminal.has_advanced_features is False

    def test_eof_returns_none(self, monkeypatch):
        def raise_eof(_):
            raise EOFError

        monkeypatch.setattr("builtins.input", raise_eof)
        assert TerminalInput(interactive=False).prompt("$ ") is None

    def test_history_path_honors_xdg(self, tmp_path, monkeypatch):
        monkeypatch.setattr("plutosh.terminal.os.name", "posix")
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        assert history_path() == tmp_path / "plutosh" / "history"
