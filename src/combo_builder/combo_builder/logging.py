"""Loguru logging configuration.

Call setup_logging() once at application startup to configure sinks.
All other modules simply do `from loguru import logger` and log normally.
"""

import sys
from pathlib import Path

from loguru import logger

# Log directory at project root
LOG_DIR = Path(__file__).resolve().parents[3] / "logs"


def setup_logging(level: str = "INFO", log_dir: Path | None = LOG_DIR) -> None:
    """Configure loguru with a stderr sink and, optionally, a rotating file sink.

    Args:
        level: Minimum log level (default INFO).
        log_dir: Directory for the rotating log file; None disables it.
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    )

    if log_dir is None:
        return

    # Rotate every day, keep a week
    log_dir.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_dir / "combo_builder.log",
        level=level,
        rotation="1 day",
        retention="7 days",
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
    )
