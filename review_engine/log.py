from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from review_engine.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_FILE = "review_engine.log"


def build_handlers(settings: Settings) -> list[logging.Handler]:
    """Rotating file handler under ``settings.log_dir`` plus a stderr handler."""

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = [
        RotatingFileHandler(log_dir / LOG_FILE, maxBytes=2_000_000, backupCount=3, encoding="utf-8"),
        logging.StreamHandler(),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(settings: Settings) -> None:
    root = logging.getLogger()
    if root.handlers:
        # Already configured by the host process; only apply the level.
        root.setLevel(settings.log_level.upper())
        return
    logging.basicConfig(level=settings.log_level.upper(), handlers=build_handlers(settings))
