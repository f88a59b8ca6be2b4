#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Logging setup for the ROM bridge.

- Level-specific console formats with optional ANSI colors
- Structured JSON records (argument or ROM_BRIDGE_LOG_JSON=1)
- Optional rotating log file
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

ROOT_LOGGER_NAME = "rom_bridge"
DEFAULT_MAX_LOG_SIZE = "5MB"

# =====================================================================================================
# Formatters
# =====================================================================================================


class FastFormatter(logging.Formatter):
    """Console/file formatter with one pre-built format per level."""

    _FORMATS = {
        logging.ERROR: "[{asctime}] ERROR   [{name}] {message}",
        logging.WARNING: "[{asctime}] WARNING [{name}] {message}",
        logging.INFO: "[{asctime}] INFO    {message}",
        logging.DEBUG: "[{asctime}] DEBUG   {name}:{lineno} - {message}",
    }

    _COLORS = {
        logging.ERROR: '\033[91m',    # Red
        logging.WARNING: '\033[93m',  # Yellow
        logging.INFO: '\033[92m',     # Green
        logging.DEBUG: '\033[94m',    # Blue
    }
    _RESET = '\033[0m'

    def __init__(self, enable_colors: bool = False):
        super().__init__()
        self.enable_colors = enable_colors
        self._formatters = {
            level: logging.Formatter(fmt, style='{', datefmt='%H:%M:%S')
            for level, fmt in self._FORMATS.items()
        }

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelno
        if level >= logging.ERROR:
            level = logging.ERROR
        formatter = self._formatters.get(level, self._formatters[logging.INFO])
        text = formatter.format(record)
        if self.enable_colors and level in self._COLORS:
            return f"{self._COLORS[level]}{text}{self._RESET}"
        return text


class JsonFormatter(logging.Formatter):
    """Structured JSON formatter."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "thread": record.threadName,
            "process": record.process,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


# =====================================================================================================
# Setup
# =====================================================================================================


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_size_string(size_str: str) -> int:
    """Parse size string ('10MB', '512KB', '2048') into bytes."""
    size_str = size_str.upper().strip()
    multipliers = (('GB', 1024 ** 3), ('MB', 1024 ** 2), ('KB', 1024), ('B', 1))

    for suffix, multiplier in multipliers:
        if size_str.endswith(suffix):
            try:
                return int(float(size_str[:-len(suffix)].strip()) * multiplier)
            except ValueError:
                break

    try:
        return int(float(size_str))
    except ValueError:
        return 5 * 1024 * 1024


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[str] = None,
    enable_file_logging: bool = False,
    enable_console_logging: bool = True,
    max_log_size: str = DEFAULT_MAX_LOG_SIZE,
    backup_count: int = 3,
    structured_json: Optional[bool] = None,
) -> Dict[str, Any]:
    """Configure the ``rom_bridge`` logger tree.

    Only the package logger is touched, so an embedding host keeps control of
    the root logger.
    """
    numeric_level = getattr(logging, str(log_level).upper(), logging.INFO)
    use_json = structured_json if structured_json is not None else _env_bool("ROM_BRIDGE_LOG_JSON")

    bridge_logger = logging.getLogger(ROOT_LOGGER_NAME)
    bridge_logger.setLevel(numeric_level)
    for handler in bridge_logger.handlers[:]:
        bridge_logger.removeHandler(handler)
        handler.close()

    handlers: Dict[str, logging.Handler] = {}

    if enable_console_logging:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        enable_colors = (hasattr(sys.stdout, 'isatty') and
                         sys.stdout.isatty() and
                         os.environ.get('TERM') != 'dumb')
        console_handler.setFormatter(JsonFormatter() if use_json else FastFormatter(enable_colors=enable_colors))
        bridge_logger.addHandler(console_handler)
        handlers['console'] = console_handler

    log_dir_path: Optional[Path] = None
    if enable_file_logging:
        log_dir_path = Path(log_dir) if log_dir else Path("logs")
        log_dir_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            str(log_dir_path / "rom_bridge.log"),
            maxBytes=_parse_size_string(max_log_size),
            backupCount=backup_count,
            encoding='utf-8',
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JsonFormatter() if use_json else FastFormatter())
        bridge_logger.addHandler(file_handler)
        handlers['file'] = file_handler

    bridge_logger.debug(
        "Logging initialized (level=%s, json=%s, file=%s)",
        logging.getLevelName(numeric_level), use_json, enable_file_logging,
    )

    return {
        'logger': bridge_logger,
        'handlers': handlers,
        'log_dir': log_dir_path,
    }


def cleanup_logging() -> None:
    bridge_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in bridge_logger.handlers[:]:
        bridge_logger.removeHandler(handler)
        handler.close()
