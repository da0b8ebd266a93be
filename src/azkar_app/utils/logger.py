#!filepath: src/azkar_app/utils/logger.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.logging import RichHandler


class LoggingSettings(BaseSettings):
    """Logging configuration isolated from the rest of the environment.

    Reads values from .env and the process environment, ignoring keys that
    are unrelated to logging.

    Attributes:
        log_dir: Directory for log files.
        console_level: Console handler level.
        file_level: File handler level.
        file_name: Log file name.
        max_bytes: Maximum file size before rotating.
        backup_count: How many rotated files to keep.
        rich_tracebacks: Whether the console renders rich tracebacks.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        env_prefix="AZKAR_",
    )

    log_dir: Path = Field(default=Path("data/logs"), validation_alias="AZKAR_LOG_DIR")
    console_level: str = Field(default="INFO", validation_alias="AZKAR_CONSOLE_LEVEL")
    file_level: str = Field(default="DEBUG", validation_alias="AZKAR_FILE_LEVEL")
    file_name: str = Field(default="app.log", validation_alias="AZKAR_LOG_FILE")
    max_bytes: int = Field(default=2_000_000, validation_alias="AZKAR_LOG_MAX_BYTES")
    backup_count: int = Field(default=3, validation_alias="AZKAR_LOG_BACKUP_COUNT")
    rich_tracebacks: bool = Field(default=True, validation_alias="AZKAR_RICH_TRACEBACKS")


@dataclass(slots=True)
class _Runtime:
    configured: bool = False


_runtime: _Runtime = _Runtime()


def configure_logging(*, settings: Optional[LoggingSettings] = None) -> None:
    """Configure global logging once, with a Rich console and a rotating file.

    Args:
        settings: Optional override, mostly for tests.
    """
    if _runtime.configured:
        return

    s = settings or LoggingSettings()
    s.log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    console_level = getattr(logging, s.console_level.upper(), logging.INFO)
    file_level = getattr(logging, s.file_level.upper(), logging.DEBUG)

    console_handler = RichHandler(
        rich_tracebacks=bool(s.rich_tracebacks),
        markup=False,
        show_path=False,
        show_level=True,
        log_time_format="[%X]",
    )
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))

    file_handler = RotatingFileHandler(
        filename=str(s.log_dir / s.file_name),
        maxBytes=int(s.max_bytes),
        backupCount=int(s.backup_count),
        encoding="utf_8",
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )

    root.addHandler(console_handler)
    root.addHandler(file_handler)

    for noisy in ("urllib3", "requests", "charset_normalizer"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    _runtime.configured = True


def get_logger(name: str = "azkar_app", level: str | None = None) -> logging.Logger:
    """Return a logger with global logging already configured.

    Args:
        name: Logger name.
        level: Optional level override.

    Returns:
        Configured logger.
    """
    configure_logging()
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger
