"""Shared fixtures: every test gets a session rooted in its own tmp directory."""

import pytest

from plutosh.interpreter import CommandInterpreter
from plutosh.session import Session


@pytest.fixture
def session(tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    return Session(cwd=str(work), home=str(home))


@pytest.fixture
def interpreter(session):
    return CommandInterpreter(session)
