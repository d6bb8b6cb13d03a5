# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-07
# Updated: 2026-02-14
# Description: logging_utils.py
# -----------------------------------------------------------------------------
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

import colorlog

BASE_LOGGER_NAME = "shop_assistant"

_TRUTHY = ("1", "true", "yes", "y")


def log_file_path() -> Path:
    return Path(os.getenv("SHOP_LOG_FILE", "./logs/shop_assistant.log"))


def _file_logging_enabled() -> bool:
    return os.getenv("SHOP_LOG_TO_FILE", "1").lower() in _TRUTHY


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(
            fmt=(
                "%(log_color)s%(asctime)s [%(levelname)s] "
                "%(name)s:%(lineno)d:%(reset)s %(message_log_color)s%(message)s"
            ),
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
            secondary_log_colors={
                "message": {
                    "INFO": "white",
                    "WARNING": "yellow",
                    "ERROR": "light_red",
                    "CRITICAL": "red",
                }
            },
            style="%",
        )
    )
    return handler


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)

    # Rotating file keeps the UI log tail bounded
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=int(os.getenv("SHOP_LOG_MAX_BYTES", str(5 * 1024 * 1024))),
        backupCount=int(os.getenv("SHOP_LOG_BACKUP_COUNT", "5")),
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    return handler


def _create_logger(full_name: str) -> logging.Logger:
    """
    Internal helper to create/configure a logger with a given full name.
    Handlers are attached once per logger name.
    """
    logger = logging.getLogger(full_name)

    if not logger.handlers:
        logger.addHandler(_console_handler())

        if _file_logging_enabled():
            logger.addHandler(_file_handler(log_file_path()))

        level_name = os.getenv("SHOP_LOG_LEVEL", "INFO").upper()
        logger.setLevel(getattr(logging, level_name, logging.INFO))
        logger.propagate = False

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Generic logger that does not include a class name.
    """
    full_name = f"{BASE_LOGGER_NAME}.{name}" if name else BASE_LOGGER_NAME
    return _create_logger(full_name)


def get_class_logger(cls: type) -> logging.Logger:
    """
    Returns a logger whose name includes module + class, e.g.:

      shop_assistant.services.InventorySyncService.InventorySyncService
      shop_assistant.chat.OllamaChat.OllamaChat
    """
    module = getattr(cls, "__module__", "unknown_module")
    classname = getattr(cls, "__name__", "UnknownClass")
    return _create_logger(f"{BASE_LOGGER_NAME}.{module}.{classname}")


def tail_log_lines(max_lines: int = 200) -> List[str]:
    """Last `max_lines` lines of the current log file (empty when file logging is off)."""
    path = log_file_path()
    if not path.exists():
        return []
    with path.open("r", encoding="utf-8", errors="replace") as f:
        lines = f.readlines()
    return [line.rstrip("\n") for line in lines[-max_lines:]]
