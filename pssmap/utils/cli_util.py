"""Command line utilities."""

import logging
import os

from rich.traceback import install


def initialize_cli_tool() -> None:
    """Initializes all relevant context and tools for pssmap cli tools."""
    install(width=120)
    initialize_logger_config()


def initialize_logger_config() -> None:
    """Initializes the logging framework with a basic config, allowing the user
    to pass the warning level via an environment variable ``LOG_LEVEL``."""
    log_level = os.environ.get('LOG_LEVEL', "WARNING").upper()
    logging.basicConfig(level=log_level)
