from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

import yaml
from dotenv import dotenv_values

from .session import DEFAULT_SEPARATOR
from .storage import DEFAULT_STORAGE_KEY


@dataclass
class Settings:
    storage_file: Path
    storage_key: str
    default_separator: str
    log_level: str


def load_settings(config_path: str = "config.yaml") -> Settings:
    project_root = Path(__file__).resolve().parent.parent
    env_path = project_root / ".env"
    config_file = Path(config_path)
    if not config_file.exists():
        config_file = project_root / config_path
    raw_env = dotenv_values(env_path) if env_path.exists() else {}
    env = {str(k).lstrip("\ufeff"): (v or "") for k, v in raw_env.items()}

    def get_env(name: str, default: str = "") -> str:
        # Process environment overrides .env file.
        v = os.getenv(name)
        if v is not None and v != "":
            return v.strip()
        value = str(env.get(name, default))
        return value.replace("\ufeff", "").strip()

    cfg = {}
    if config_file.exists():
        with open(config_file, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

    return Settings(
        storage_file=Path(
            get_env("FLASHDECK_STORAGE_FILE", cfg.get("storage_file", "data/flashdeck.json"))
        ),
        storage_key=str(cfg.get("storage_key", DEFAULT_STORAGE_KEY)),
        default_separator=str(cfg.get("default_separator", DEFAULT_SEPARATOR)),
        log_level=get_env("LOG_LEVEL", cfg.get("log_level", "WARNING")).upper(),
    )
