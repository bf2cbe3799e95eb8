"""Tests for output redirection."""

import os
import sys

import pytest

from plutosh.parser import RedirectMode
from plutosh.redirect import append_output_to_file, forward_arrow, redirect
from plutosh.result import ErrorKind, InvalidArgumentError


def _read(session, name):
    with open(os.path.join(session.cwd, name), encoding="utf-8") as f:
        return f.read()


class TestForwardArrow:
    """Tests for '>' (truncate)."""

    def test_writes_pwd(self, session):
        result = forward_arrow(session, ["pwd", ">", "testFile.txt"])
        assert result.output == "Output successfully written to testFile.txt"
        assert _read(session, "testFile.txt") == session.cwd

    def test_truncates(self, session):
        with open(os.path.join(session.cwd, "out.txt"), "w") as f:
            f.write("old content that is long")
        forward_arrow(session, ["pwd", ">", "out.txt"])
        assert _read(session, "out.txt") == session.cwd

    def test_verb_arguments_before_arrow(self, session):
        os.mkdir(os.path.join(session.cwd, "d"))
        open(os.path.join(session.cwd, "d", "inner.txt"), "w").close()
        forward_arrow(session, ["ls", "d", ">", "listing.txt"])
        assert _read(session, "listing.txt") == "inner.txt\n"

    def test_insufficient_arguments(self, session):
        result = forward_arrow(session, ["ls", ">"])
        assert result.output == "Error: Output redirection should be in the format: command > file"
        assert result.error is ErrorKind.BAD_REDIRECT

    def test_null_args(self, session):
        with pytest.raises(InvalidArgumentError):
            forward_arrow(session, None)

    def test_null_args_is_value_error(self, session):
        with pytest.raises(ValueError):
            redirect(session, None, RedirectMode.TRUNCATE)


class TestAppendOutputToFile:
    """Tests for '>>' (append)."""

    def test_valid_command(self, session):
        result = append_output_to_file(session, ["pwd", ">>", "outputTest.txt"])
        assert result.output == "Output successfully appended to outputTest.txt"
        assert session.cwd in _read(session, "outputTest.txt")

    def test_keeps_existing_content(self, session):
        with open(os.path.join(session.cwd, "outputTest.txt"), "w") as f:
            f.write("Existing content\n")
        result = append_output_to_file(session, ["pwd", ">>", "outputTest.txt"])
        assert result.output == "Output successfully appended to outputTest.txt"
        content = _read(session, "outputTest.txt")
        assert content.startswith("Existing content\n")
        assert session.cwd in content

    def test_unknown_command(self, session):
        result = append_output_to_file(session, ["unknownCommand", ">>", "outputTest.txt"])
        assert result.output == "Error: Unknown command."
        assert not os.path.exists(os.path.join(session.cwd, "outputTest.txt"))

    def test_insufficient_arguments(self, session):
        result = append_output_to_file(session, ["ls", ">>"])
        assert result.output == "Error: Output redirection should be in the format: command >> file"

    def test_failing_verb_leaves_file_alone(self, session):
        result = append_output_to_file(session, ["ls", "missing", ">>", "out.txt"])
        assert result.output == "Error: missing does not exist.\n"
        assert not os.path.exists(os.path.join(session.cwd, "out.txt"))


class TestRedirectTarget:
    """Tests for where and how the target file is written."""

    def test_target_resolved_before_verb_runs(self, session):
        start = session.cwd
        os.mkdir(os.path.join(start, "sub"))
        result = forward_arrow(session, ["cd", "sub", ">", "out.txt"])
        assert result.ok
        assert os.path.isfile(os.path.join(start, "out.txt"))
        assert not os.path.exists(os.path.join(start, "sub", "out.txt"))

    @pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that accepts non-UTF-8 names")
    def test_undecodable_filename_round_trips(self, interpreter, session):
        with open(os.path.join(os.fsencode(session.cwd), b"bad\xff.txt"), "wb"):
            pass
        result = interpreter.interpret("ls > out.txt")
        assert result.output == "Output successfully written to out.txt"
        with open(os.path.join(session.cwd, "out.txt"), "rb") as f:
            assert b"bad\xff.txt\n" in f.read()

    def test_cat_copies_binary_content(self, interpreter, session):
        payload = b"\x89PNG\r\n\x1a\n\xff\x00tail"
        with open(os.path.join(session.cwd, "image.bin"), "wb") as f:
            f.write(payload)
        interpreter.interpret("cat image.bin > copy.bin")
        with open(os.path.join(session.cwd, "copy.bin"), "rb") as f:
            assert f.read() == payload
