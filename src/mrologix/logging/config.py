"""Persisted logging configuration (currently just the log level)."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional


def _config_path(config_file: Optional[os.PathLike[str] | str] = None) -> Path:
    """Resolve the config path: explicit argument, ``MROLOGIX_LOG_CONFIG``,
    then ``$MROLOGIX_CONFIG_DIR/logging.json`` (default ``~/.mrologix``)."""

    if config_file is not None:
        return Path(config_file)
    raw = (os.environ.get("MROLOGIX_LOG_CONFIG") or "").strip()
    if raw:
        return Path(raw).expanduser()
    config_dir = (os.environ.get("MROLOGIX_CONFIG_DIR") or "").strip()
    base = Path(config_dir).expanduser() if config_dir else Path.home() / ".mrologix"
    return base / "logging.json"


def load_config(config_file: Optional[os.PathLike[str] | str] = None) -> Dict[str, Any]:
    """Load the logging configuration JSON file.

    Missing files, unreadable files and non-object payloads all yield an
    empty configuration.
    """

    path = _config_path(config_file)
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(
    config: Dict[str, Any],
    config_file: Optional[os.PathLike[str] | str] = None,
) -> Path:
    path = _config_path(config_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(config, handle, indent=2, sort_keys=True)
        handle.write("\n")
    return path


def _level_number(level: str | int) -> int | None:
    if isinstance(level, int):
        return level
    candidate = logging.getLevelName(str(level).strip().upper())
    return candidate if isinstance(candidate, int) else None


def load_log_level(config_file: Optional[os.PathLike[str] | str] = None) -> Optional[int]:
    """Return the persisted numeric log level, if one is configured."""

    value = load_config(config_file).get("log_level")
    if value is None:
        return None
    return _level_number(value)


def save_log_level(
    level: str | int,
    config_file: Optional[os.PathLike[str] | str] = None,
) -> Path:
    """Persist ``level`` and return the config path.

    Raises
    ------
    ValueError
        If ``level`` is not a known logging level.
    """

    numeric = _level_number(level)
    if numeric is None:
        raise ValueError(f"Unknown logging level: {level!r}")
    config = load_config(config_file)
    config["log_level"] = logging.getLevelName(numeric)
    return save_config(config, config_file)


__all__ = [
    "load_config",
    "save_config",
    "load_log_level",
    "save_log_level",
]
