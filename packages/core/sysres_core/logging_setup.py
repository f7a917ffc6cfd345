"""JSON-lines file logging for the console tools."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import LoggingConfig, config_root


_LOGGER_NAME = "sysres"

# Keys passed through ``extra=`` that end up in the JSON payload.
_EXTRA_FIELDS = ("event", "domain", "crash_id")


def log_dir() -> Path:
    path = config_root() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def configure_logging(
    cfg: LoggingConfig | None = None,
    directory: Path | None = None,
    name: str = _LOGGER_NAME,
) -> logging.Logger:
    """Attach the rotating JSON file handler, plus a stderr handler when enabled.

    Idempotent per logger name: a logger that already has handlers is returned as is.
    """
    cfg = cfg or LoggingConfig()
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(cfg.level)
    path = (directory or log_dir()) / "sysres.log"
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(path),
        when="midnight",
        backupCount=cfg.keep_log_files,
        encoding="utf-8",
    )
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)

    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(console)

    logger.debug(f"logging to {path}", extra={"event": "logging_configured"})
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


def install_excepthook(logger: logging.Logger | None = None) -> None:
    """Record uncaught errors in the log, then defer to the previous hook so they still reach stderr."""
    logger = logger or get_logger()
    previous = sys.excepthook

    def _log_uncaught(exc_type, exc_value, exc_tb) -> None:
        if not issubclass(exc_type, KeyboardInterrupt):
            crash_id = str(uuid.uuid4())
            logger.critical(
                f"uncaught exception crash_id={crash_id}",
                exc_info=(exc_type, exc_value, exc_tb),
                extra={"event": "uncaught_exception", "crash_id": crash_id},
            )
        previous(exc_type, exc_value, exc_tb)

    sys.excepthook = _log_uncaught
