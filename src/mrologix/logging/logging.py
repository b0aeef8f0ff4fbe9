"""Logger setup shared by the API, the assistant and the CLI.

Modules call ``get_logger(__file__)`` or ``get_logger(__name__)``; both end up
as a dotted ``mrologix.*`` logger name. Handlers are attached once per name:
a file handler under ``MROLOGIX_LOG_DIR`` and, unless ``MROLOGIX_LOG_CONSOLE``
turns it off, a stderr handler.

Per-call context (which invocation, which loop round) is attached with
:func:`bind`, so one request's lines can be picked out of a shared log.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, MutableMapping

from .config import load_log_level

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# logger name -> True once handlers are attached
_LOGGER_INITIALIZED: dict[str, bool] = {}

_PACKAGE_ROOT = Path(__file__).resolve().parents[1]


def _resolve_log_dir(log_dir=None) -> Path:
    if log_dir is not None:
        return Path(log_dir)
    raw = (os.environ.get("MROLOGIX_LOG_DIR") or "").strip()
    return Path(raw).expanduser() if raw else Path.home() / ".mrologix" / "logs"


def _resolve_log_file(log_file=None, log_dir=None) -> Path:
    if log_file is not None:
        return Path(log_file)
    return _resolve_log_dir(log_dir) / "mrologix.log"


def ensure_log_dir(log_dir=None) -> Path:
    dir_ = _resolve_log_dir(log_dir)
    dir_.mkdir(parents=True, exist_ok=True)
    return dir_


def _console_enabled(default: bool) -> bool:
    raw = (os.environ.get("MROLOGIX_LOG_CONSOLE") or "").strip().lower()
    if raw in {"0", "false", "no", "off"}:
        return False
    if raw in {"1", "true", "yes", "on"}:
        return True
    return default


def _env_level() -> int | None:
    raw = (os.environ.get("MROLOGIX_LOG_LEVEL") or "").strip().upper()
    if not raw:
        return None
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else None


def logger_name(name: str | os.PathLike[str]) -> str:
    """Dotted logger name for a module name or a source file path.

    Paths inside the package become ``mrologix.<package>.<module>``; other
    paths fall back to their stem.
    """

    text = os.fspath(name)
    if not text.endswith(".py"):
        return text
    path = Path(text).resolve()
    try:
        relative = path.relative_to(_PACKAGE_ROOT)
    except ValueError:
        return path.stem
    parts = list(relative.with_suffix("").parts)
    if parts and parts[-1] == "__init__":
        parts.pop()
    return ".".join([_PACKAGE_ROOT.name, *parts])


def get_logger(
    name="mrologix",
    level=None,
    log_file=None,
    log_dir=None,
    console=True,
    filemode="a",
    fmt=DEFAULT_FORMAT,
    datefmt=DEFAULT_DATEFMT,
    encoding="utf-8",
    propagate=False,
):
    """Return the logger for ``name``, attaching handlers on first use.

    The level is, in order: ``level``, ``MROLOGIX_LOG_LEVEL``, the persisted
    level from ``mrologix logging set-level``, then INFO. ``console`` is the
    default for the stderr handler; ``MROLOGIX_LOG_CONSOLE`` overrides it.
    """

    resolved = logger_name(name)
    logger = logging.getLogger(resolved)
    if _LOGGER_INITIALIZED.get(resolved):
        return logger

    if level is None:
        level = _env_level() or load_log_level() or logging.INFO
    if log_file is None:
        ensure_log_dir(log_dir)
    logger.setLevel(level)
    logger.propagate = propagate
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    file_handler = logging.FileHandler(_resolve_log_file(log_file, log_dir), mode=filemode, encoding=encoding)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if _console_enabled(console):
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    _LOGGER_INITIALIZED[resolved] = True
    return logger


class ContextAdapter(logging.LoggerAdapter):
    """Prefix every message with ``key=value`` pairs, e.g. ``[call=call_1 fn=search_sdr_reports]``."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        context = " ".join(f"{key}={value}" for key, value in self.extra.items() if value is not None)
        if not context:
            return msg, kwargs
        return f"[{context}] {msg}", kwargs


def bind(logger: logging.Logger | logging.LoggerAdapter, **context: Any) -> ContextAdapter:
    """Attach context to ``logger``; binding an adapter again merges the context."""

    if isinstance(logger, ContextAdapter):
        return ContextAdapter(logger.logger, {**logger.extra, **context})
    return ContextAdapter(logger, context)


def reset_logger(name=None):
    """Detach and close the handlers of ``name`` (or of every configured logger).

    The next :func:`get_logger` call for that name configures it afresh, which
    is how ``mrologix logging set-level`` applies a new level.
    """

    names = list(_LOGGER_INITIALIZED) if name is None else [logger_name(name)]
    for n in names:
        logger = logging.getLogger(n)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        _LOGGER_INITIALIZED.pop(n, None)


def get_configured_level(name="mrologix"):
    """Return the effective level name of ``name``."""

    level = logging.getLogger(logger_name(name)).getEffectiveLevel()
    return logging.getLevelName(level)
