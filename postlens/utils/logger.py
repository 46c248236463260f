"""
Loguru setup for PostLens.

One console sink is always installed. A rotated file sink is added when
`LoggingConfig.log_to_file` is set; it writes JSON records when
`serialize` is on.
"""

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from postlens.config import LoggingConfig

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(config: "LoggingConfig") -> None:
    """
    Replace loguru's sinks according to the logging section of the config.

    Args:
        config: Logging settings (level, file sink, rotation, retention)
    """
    logger.remove()
    logger.add(sys.stderr, level=config.level, format=CONSOLE_FORMAT, colorize=True)

    if not config.log_to_file:
        return

    log_path = Path(config.log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_path / "postlens_{time:YYYY-MM-DD}.log",
        level=config.level,
        format=FILE_FORMAT,
        rotation=config.file_rotation,
        retention=config.file_retention,
        compression=config.compression,
        serialize=config.serialize,
        enqueue=True,
    )


def get_logger(name: str):
    """Logger bound to a module name."""
    return logger.bind(module=name)
