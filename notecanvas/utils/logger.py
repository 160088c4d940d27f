"""Logging configuration using Loguru."""

import logging
import sys
from pathlib import Path

from loguru import logger


class InterceptHandler(logging.Handler):
    """Route stdlib logging records (uvicorn, fastapi) into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(
    level: str = "INFO",
    log_to_file: bool = True,
    log_dir: str = "logs",
    file_rotation: str = "10 MB",
    file_retention: str = "7 days",
    compression: str = "zip",
    serialize: bool = True,
    intercept_stdlib: bool = True,
) -> None:
    """Configure Loguru console and rotating file sinks."""
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        colorize=True,
        serialize=False,
    )

    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        # Serialized records keep the bound context (canvas_id, edge_id, ...)
        logger.add(
            log_path / "notecanvas_{time:YYYY-MM-DD}.log",
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation=file_rotation,
            retention=file_retention,
            compression=compression,
            serialize=serialize,
            enqueue=True,
        )

    if intercept_stdlib:
        logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def get_logger(name: str):
    """Get a logger instance for a module."""
    return logger.bind(module=name)
