from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

MAX_BYTES = 2_000_000
BACKUP_COUNT = 5
HANDLER_PREFIX = "gestorpro:"

ROOT_FILES = (("app.log", logging.INFO), ("errors.log", logging.ERROR))
CHANNEL_FILES = {
    "gestorpro.sales": "sales.log",
    "gestorpro.store": "store.log",
}


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _handler(path: Path, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8")
    handler.set_name(HANDLER_PREFIX + path.name)
    handler.setFormatter(JsonFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
    handler.setLevel(level)
    return handler


def _attach(logger: logging.Logger, path: Path, level: int) -> None:
    name = HANDLER_PREFIX + path.name
    if any(h.get_name() == name for h in logger.handlers):
        return
    logger.addHandler(_handler(path, level))


def setup_logging(logs_dir: Path, level: int = logging.INFO) -> None:
    """Attach the rotating JSON file handlers. Calling it again is a no-op."""
    logs_dir = Path(logs_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)
    for filename, min_level in ROOT_FILES:
        _attach(root, logs_dir / filename, min_level)

    # Channel loggers still propagate to app.log.
    for channel, filename in CHANNEL_FILES.items():
        logger = logging.getLogger(channel)
        logger.setLevel(logging.INFO)
        _attach(logger, logs_dir / filename, logging.INFO)
