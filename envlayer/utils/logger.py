"""
Logging Utilities
=================

Centralized logging configuration, optionally driven by ``LOG_*`` keys.
"""

import logging
import logging.handlers
import os
import sys
from typing import Optional

from ..core.accessor import TypedAccessor
from ..core.convert import parse_decimal, parse_int
from ..core.errors import ConversionError

_SIZE_UNITS = (('KB', 1024), ('MB', 1024 ** 2), ('GB', 1024 ** 3))


def setup_logging(
    config: Optional[TypedAccessor] = None,
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    max_file_size: str = "10MB",
    backup_count: int = 5
) -> logging.Logger:
    """
    Set up centralized logging configuration.

    Args:
        config: Configuration to read ``LOG_LEVEL``, ``LOG_FILE``,
            ``LOG_MAX_FILE_SIZE`` and ``LOG_BACKUP_COUNT`` from
        log_level: Logging level
        log_file: Log file path
        max_file_size: Maximum log file size
        backup_count: Number of backup files to keep

    Returns:
        Configured logger

    Raises:
        ConversionError: ``max_file_size`` is not a valid size
    """
    if config is not None:
        if hasattr(config, "signed"):
            logging_config = config.signed("LOG")
        else:
            logging_config = config
        log_level = logging_config.get_str('LEVEL', log_level)
        log_file = logging_config.get_str('FILE', log_file or "") or None
        max_file_size = logging_config.get_str('MAX_FILE_SIZE', max_file_size)
        backup_count = logging_config.get_int('BACKUP_COUNT', backup_count)

    # Convert log level string to logging constant
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    size_bytes = _parse_size(max_file_size)

    # Create logs directory if it doesn't exist
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=size_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    app_logger = logging.getLogger('envlayer')
    app_logger.debug(f"Logging initialized - Level: {log_level}, File: {log_file}")

    return app_logger


def _parse_size(size_str: str) -> int:
    """
    Parse size string to bytes.

    Args:
        size_str: Size string (e.g., '10MB', '1GB')

    Returns:
        Size in bytes

    Raises:
        ConversionError: the size is not a number of bytes or a KB/MB/GB amount
    """
    size = size_str.upper().strip()

    for suffix, factor in _SIZE_UNITS:
        if size.endswith(suffix):
            amount = parse_decimal(size[:-len(suffix)])
            if not amount.is_finite() or amount < 0:
                raise ConversionError(f"invalid size: {size_str!r}")
            return int(amount * factor)

    # Plain byte counts must be whole numbers
    value = parse_int(size)
    if value < 0:
        raise ConversionError(f"invalid size: {size_str!r}")
    return value
