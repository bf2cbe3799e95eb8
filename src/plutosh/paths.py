"""Path helpers.

Tokens typed at the prompt are resolved against the session's working
directory, never against the process cwd, so a shell session can move around
without calling ``os.chdir``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional


def resolve(token: str, cwd: str, home: Optional[str] = None) -> str:
    """Return the absolute, normalized path for ``token``.

    ``~`` (alone or as a ``~/`` prefix) expands to ``home``. Existence is not
    checked; each verb decides what a missing path means.
    """
    home = home or str(Path.home())
    if token == "~":
        return os.path.normpath(home)
    if token.startswith("~/") or token.startswith("~" + os.sep):
        token = os.path.join(home, token[2:])

    if not os.path.isabs(token):
        token = os.path.join(cwd, token)
    return os.path.normpath(token)


def parent_of(path: str) -> Optional[str]:
    """Return the parent directory of ``path``, or None at a filesystem root."""
    parent = os.path.dirname(os.path.normpath(path))
    if not parent or parent == os.path.normpath(path):
        return None
    return parent
