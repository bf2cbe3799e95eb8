from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _default_home() -> str:
    return str(Path.home())


@dataclass
class Session:
    """Per-shell state: the working directory used to resolve relative paths.

    ``cwd`` is always an absolute, existing directory at rest; only a
    successful ``cd`` changes it.
    """
    cwd: str = field(default_factory=os.getcwd)
    home: str = field(default_factory=_default_home)

    def __post_init__(self):
        self.cwd = os.path.abspath(self.cwd)
        self.home = os.path.abspath(self.home)

    def change_dir(self, path: str) -> bool:
        """Commit ``path`` as the new working directory if it is a directory."""
        if not os.path.isdir(path):
            return False
        self.cwd = os.path.abspath(path)
        return True
