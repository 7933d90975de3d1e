"""
Environment-backed settings loader.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_CONFIG_PATH = Path("~/.config/choosy.yml")


@dataclass
class Settings:
    config_path: Path = DEFAULT_CONFIG_PATH
    log_level: str = "WARNING"
    verbose: bool = False


def load_settings() -> Settings:
    # Load from .env if present
    load_dotenv()

    def _bool_env(name: str, default: bool = False) -> bool:
        raw = os.getenv(name)
        if raw is None:
            return default
        return str(raw).strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        config_path=Path(os.getenv("CHOOSY_CONFIG") or DEFAULT_CONFIG_PATH).expanduser(),
        log_level=(os.getenv("CHOOSY_LOG_LEVEL") or "WARNING").upper(),
        verbose=_bool_env("CHOOSY_VERBOSE", False),
    )
