"""
Logging setup for CLI commands.
"""
import logging

from label_translator.core.logging_config import LogCategory, setup_logging


def setup_cli_logging(name: str, verbose: bool = False) -> logging.Logger:
    """
    Configure logging for a CLI command.

    Console output is limited to warnings unless ``verbose`` is set, so log
    lines do not break the progress display.
    """
    setup_logging(level="DEBUG" if verbose else "WARNING")
    return logging.getLogger(f"{LogCategory.CLI.value}.{name}")
