"""Centralised logging configuration for the media provider backend.

``setup_logging()`` is called once from ``main.py`` and ``validate_service.py``.
Levels and the optional rotating log file come from ``MEDIA_LOG_*``
environment variables; records carry a ``shortpathname`` attribute so the
format string can show paths relative to the container's ``/app`` root.
"""
from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.utils.env import get_bool_env, get_env

DEFAULT_LOG_FILE = "media-providers.log"

# Container source roots stripped from record paths
_SOURCE_ROOTS = ("/app/",)

# Chatty third-party loggers pinned to WARNING
_QUIET_LOGGERS = (
    "httpcore",
    "httpcore.http11",
    "httpcore.connection",
    "httpx",
    "urllib3",
    "asyncio",
    "multipart",
    "python_multipart",
    "h11",
)

_base_record_factory = logging.getLogRecordFactory()
_record_factory_installed = False
_configured = False


def _level(name: str, fallback: str) -> str:
    candidate = (get_env(name) or "").strip().upper()
    if candidate and isinstance(getattr(logging, candidate, None), int):
        return candidate
    return fallback


def _short_path(pathname: str) -> str:
    for root in _SOURCE_ROOTS:
        if pathname.startswith(root):
            return pathname[len(root):]
    return pathname


def _install_record_factory() -> None:
    global _record_factory_installed
    if _record_factory_installed:
        return

    def factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = _base_record_factory(*args, **kwargs)
        record.shortpathname = _short_path(getattr(record, "pathname", "") or "")
        return record

    logging.setLogRecordFactory(factory)
    _record_factory_installed = True


def _format_string() -> str:
    timestamp = "%(asctime)s.%(msecs)03d" if get_bool_env("MEDIA_LOG_TIME_MS", default=False) else "%(asctime)s"
    return f"{timestamp} %(levelname)s [%(shortpathname)s:%(lineno)d] - %(message)s"


def _file_handler(level: str) -> Optional[Dict[str, Any]]:
    """Daily rotating file handler when ``MEDIA_LOG_DIR`` is set."""

    directory = get_env("MEDIA_LOG_DIR")
    if not directory:
        return None

    log_dir = Path(directory)
    log_dir.mkdir(parents=True, exist_ok=True)
    filename = get_env("MEDIA_LOG_FILE", default=DEFAULT_LOG_FILE) or DEFAULT_LOG_FILE
    return {
        "class": "logging.handlers.TimedRotatingFileHandler",
        "level": level,
        "formatter": "standard",
        "filename": str(log_dir / filename),
        "when": "midnight",
        "backupCount": int(get_env("MEDIA_LOG_RETENTION", default="7") or "7"),
        "encoding": "utf-8",
    }


def _build_config() -> Dict[str, Any]:
    root_level = _level("MEDIA_LOG_LEVEL", "INFO")

    handlers: Dict[str, Dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": _level("MEDIA_LOG_CONSOLE_LEVEL", root_level),
            "formatter": "standard",
            "stream": "ext://sys.stdout",
        },
    }
    file_handler = _file_handler(_level("MEDIA_LOG_FILE_LEVEL", root_level))
    if file_handler is not None:
        handlers["file"] = file_handler
    handler_names: List[str] = list(handlers)

    server_logger = {"level": "WARNING", "handlers": handler_names, "propagate": False}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"standard": {"format": _format_string(), "datefmt": "%Y-%m-%d %H:%M:%S"}},
        "handlers": handlers,
        "root": {"level": root_level, "handlers": handler_names},
        "loggers": {
            "uvicorn": dict(server_logger),
            "uvicorn.error": dict(server_logger),
            "uvicorn.access": {
                "level": _level("MEDIA_ACCESS_LOG_LEVEL", "WARNING"),
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(force: bool = False) -> None:
    """Configure console and optional file logging; repeat calls are no-ops unless ``force``."""

    global _configured
    if _configured and not force:
        return

    _install_record_factory()
    logging.config.dictConfig(_build_config())
    logging.captureWarnings(True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True


__all__ = ["setup_logging"]
