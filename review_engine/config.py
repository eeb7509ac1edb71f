from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_dir: str = "logs"
    output_dir: str = "outputs"


def load_settings() -> Settings:
    """Read settings from the environment, after the first ``.env`` found."""

    for base in (Path.cwd(), PROJECT_ROOT):
        if (base / ".env").exists():
            load_dotenv(base / ".env")
            break

    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO").strip() or "INFO",
        log_dir=os.getenv("LOG_DIR", "logs").strip() or "logs",
        output_dir=os.getenv("REVIEW_OUTPUT_DIR", "outputs").strip() or "outputs",
    )
