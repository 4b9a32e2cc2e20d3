"""
logging_config.py — Centralized Logging Configuration for the Checkout Service

This module configures unified logging behavior for the entire application.

Features:
    • Console output, plus an optional log file (LOG_FILE)
    • Process ID tagging for multi-process visibility
    • Standardized log format for all modules
    • Reduced verbosity for external dependencies (pika, httpx)
"""

import logging
import sys

from . import config

LOG_FORMAT = '%(asctime)s - %(levelname)s - [PID:%(process)d] - %(message)s'


def setup_logging(level=logging.INFO, log_file=None):
    """
    Configures the global logging system for the application.

    Args:
        level (int): Root log level. Defaults to INFO.
        log_file (str): Optional path of a persistent log file. Defaults to config.LOG_FILE;
            an empty value disables file output.
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    log_file = config.LOG_FILE if log_file is None else log_file
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

    # Reduce verbosity from external libraries
    logging.getLogger("pika").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name):
    """
    Returns a logger for the given module or component name.

    Use this instead of calling `logging.getLogger()` directly to keep naming consistent.
    """
    return logging.getLogger(name)
