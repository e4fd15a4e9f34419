"""Helpers for loading config defaults from .env.defaults and .env.

`.env.defaults` is the version-controlled catalogue of every setting the
harness reads. `.env` is an optional local override layer holding things
like test credentials. On CI (`CI=true`) the `.env` layer is skipped and
values must come from the real environment.
"""
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict


@lru_cache(maxsize=1)
def load_defaults() -> Dict[str, str]:
    """Load key/value defaults from `.env.defaults`, then overlay `.env`.

    Returns an empty dict if neither file exists.
    """
    dirs: list[Path] = []
    repo_root = Path(__file__).resolve().parent.parent.parent
    dirs.append(repo_root)

    try:
        cwd = Path.cwd()
        if cwd.resolve() != repo_root.resolve():
            dirs.append(cwd)
    except (OSError, FileNotFoundError):
        pass

    merged: Dict[str, str] = {}

    for directory in dirs:
        defaults_path = directory / ".env.defaults"
        if defaults_path.exists():
            merged.update(_parse_env_file(defaults_path))

    if os.getenv("CI", "").lower() != "true":
        for directory in dirs:
            env_path = directory / ".env"
            if env_path.exists():
                merged.update(_parse_env_file(env_path))

    return merged


def get_setting(key: str, fallback: str | None = None) -> str | None:
    """Environment variable first, then .env/.env.defaults, then fallback."""
    value = os.getenv(key)
    if value is not None and value != "":
        return value
    return load_defaults().get(key, fallback)


def _parse_env_file(env_path: Path) -> Dict[str, str]:
    defaults: Dict[str, str] = {}
    with env_path.open("r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            value = value.strip()
            if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
                value = value[1:-1]
            defaults[key.strip()] = value
    return defaults
