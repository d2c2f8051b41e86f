"""JSON-lines logging for the render service.

Records go to ``<config root>/logs/promocard.log`` (rotated daily) and,
optionally, to the console. Anything passed through ``extra=`` is kept as a
top-level field of the JSON line, so call sites log structured values
(``event``, ``variant``, ``status`` ...) instead of formatting them into the
message.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import config_root


ROOT_LOGGER = "promocard"
LOG_FILE = "promocard.log"

_RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


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
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(
    level: str = "INFO",
    keep_files: int = 7,
    console: bool = True,
    directory: Path | None = None,
) -> logging.Logger:
    """Attach handlers to the ``promocard`` logger once; later calls are no-ops."""
    logger = logging.getLogger(ROOT_LOGGER)
    if logger.handlers:
        return logger

    level_no = logging.getLevelName(level.upper())
    logger.setLevel(level_no if isinstance(level_no, int) else logging.INFO)
    target = Path(directory) if directory else log_dir()
    target.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(target / LOG_FILE),
        when="midnight",
        backupCount=max(2, keep_files),
        encoding="utf-8",
    )
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logger.addHandler(console_handler)

    logger.info("logging configured", extra={"event": "logging_configured", "log_path": str(target / LOG_FILE)})
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """``promocard`` or one of its children (``get_logger("server")`` -> ``promocard.server``)."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)
