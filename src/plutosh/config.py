from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

APP = "plutosh"


def config_dir() -> Path:
    """
    Cross-platform config directory:
      - Windows: %APPDATA%\\plutosh
      - macOS/Linux: $XDG_CONFIG_HOME/plutosh or ~/.config/plutosh
    """
    if os.name == "nt":
        base = os.environ.get("APPDATA") or str(Path.home())
        return Path(base) / APP
    return Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config"))) / APP


def config_path() -> Path:
    return config_dir() / "config.json"


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    history_enabled: bool = True
    log_level: str = "WARNING"
    prompt_color: str = "white"   # the " $ " part of the prompt
    path_color: str = "blue"      # the cwd part of the prompt

    @staticmethod
    def load(path: Optional[Path] = None) -> "Settings":
        path = path or config_path()

        data: dict = {}
        if path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                data = {}

        s = Settings(
            history_enabled=bool(data.get("history_enabled", Settings.history_enabled)),
            log_level=str(data.get("log_level", Settings.log_level)),
            prompt_color=str(data.get("prompt_color", Settings.prompt_color)),
            path_color=str(data.get("path_color", Settings.path_color)),
        )

        # Environment overrides (highest priority)
        if "PLUTOSH_HISTORY" in os.environ:
            s.history_enabled = _as_bool(os.environ["PLUTOSH_HISTORY"])
        s.log_level = os.environ.get("PLUTOSH_LOG_LEVEL", s.log_level)
        s.prompt_color = os.environ.get("PLUTOSH_PROMPT_COLOR", s.prompt_color)
        s.path_color = os.environ.get("PLUTOSH_PATH_COLOR", s.path_color)

        s.log_level = s.log_level.upper()
        return s

    def save(self, path: Optional[Path] = None) -> Path:
        path = path or config_path()
        path.parent.mkdir(parents=True, exist_ok=True)

        payload = {
            "history_enabled": self.history_enabled,
            "log_level": self.log_level,
            "prompt_color": self.prompt_color,
            "path_color": self.path_color,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return path
