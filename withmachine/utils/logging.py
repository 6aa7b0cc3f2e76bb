# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Logging and debug infrastructure for with-machine.

This module provides:
1. Centralized logging configuration
2. Debug mode via WITH_MACHINE_DEBUG env var or the --debug flag
3. Log levels via WITH_MACHINE_LOG_LEVEL env var
4. Dual output: Rich console on stderr, rotating file log for debugging

The console always writes to stderr. Stdout belongs to the wrapped command.

Usage:
    from withmachine.utils.logging import get_logger, configure_logging

    # In CLI entry point:
    configure_logging(debug=debug)

    # In any module:
    logger = get_logger(__name__)
    logger.debug("Detailed debug info")
    logger.error("Something failed", exc=exception)

Environment Variables:
    WITH_MACHINE_DEBUG=1          Enable debug mode (debug echoed to stderr)
    WITH_MACHINE_LOG_LEVEL=DEBUG  Set log level (DEBUG, INFO, WARNING, ERROR)
    WITH_MACHINE_LOG_FILE=/path   Override log file location
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from withmachine.paths import HostPaths

ROOT_LOGGER_NAME = "withmachine"

# Global state
_configured = False
_debug_mode = False
_log_file: Optional[Path] = None

# Shared Rich console instance (stderr only)
console = Console(stderr=True)


def _get_log_file() -> Path:
    """Get the log file path, creating its directory if needed."""
    log_file = _log_file or HostPaths.log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    return log_file


def is_debug_mode() -> bool:
    """Check if debug mode is enabled."""
    return _debug_mode or _debug_env()


def _debug_env() -> bool:
    return os.environ.get("WITH_MACHINE_DEBUG", "").lower() in ("1", "true", "yes")


def configure_logging(
    debug: bool = False,
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    force: bool = False,
) -> None:
    """Configure the logging system.

    Called with defaults the first time a logger is requested, and again
    with force=True from the CLI entry point once flags and config are known.

    Args:
        debug: Enable debug mode (debug output echoed to the console)
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Override log file path
        force: Reconfigure even if logging was already set up
    """
    global _configured, _debug_mode, _log_file

    if _configured and not force:
        return

    _debug_mode = debug or _debug_env()

    if log_file:
        _log_file = log_file

    # Determine log level
    if log_level:
        level_name = log_level.upper()
    else:
        level_name = os.environ.get(
            "WITH_MACHINE_LOG_LEVEL", "DEBUG" if _debug_mode else "INFO"
        ).upper()

    level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    # Clear any existing handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    # File handler with rotation (captures everything at the configured level)
    try:
        file_handler = RotatingFileHandler(
            _get_log_file(),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)
    except OSError:
        # Can't write log file, continue without it
        pass

    # Console output is handled by WithMachineLogger, keep records off the root
    root_logger.propagate = False

    _configured = True

    root_logger.debug(f"Logging configured: level={level_name}, debug={_debug_mode}")
    root_logger.debug(f"Log file: {_log_file or HostPaths.log_file()}")


class WithMachineLogger:
    """Logging with Rich console output on stderr.

    Records always go to the log file. Console output is opt-in for debug
    and info, and on by default for warnings and errors.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)
        self.console = console

    def debug(self, message: str, console_output: bool = False) -> None:
        """Log debug message.

        Only echoed to the console with console_output=True or in debug mode.
        """
        self.logger.debug(message)
        if console_output or is_debug_mode():
            self.console.print(f"[dim]\\[DEBUG] {escape(message)}[/dim]", highlight=False)

    def info(self, message: str, console_output: bool = False) -> None:
        self.logger.info(message)
        if console_output:
            self.console.print(f"[blue]{escape(message)}[/blue]", highlight=False)

    def warning(self, message: str, console_output: bool = True) -> None:
        self.logger.warning(message)
        if console_output:
            self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]", highlight=False)

    def error(
        self,
        message: str,
        exc: Optional[BaseException] = None,
        console_output: bool = True,
    ) -> None:
        """Log error message (red output).

        Args:
            message: Error message
            exc: Optional exception to include in log
            console_output: Output to console
        """
        if exc:
            self.logger.error(f"{message}: {exc}", exc_info=exc)
            error_msg = f"{message}: {exc}"
        else:
            self.logger.error(message)
            error_msg = message

        if console_output:
            self.console.print(f"[red]✗ {escape(error_msg)}[/red]", highlight=False)


def get_logger(name: str) -> WithMachineLogger:
    """Get or create a logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        WithMachineLogger instance
    """
    if not _configured:
        configure_logging()

    # Ensure name is under the withmachine namespace
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return WithMachineLogger(name)


def log_startup_info() -> None:
    """Log startup diagnostic information (call from main entry points)."""
    logger = get_logger("withmachine.startup")
    logger.debug(f"Python: {sys.version}")
    logger.debug(f"Platform: {sys.platform}")
    logger.debug(f"Argv: {sys.argv}")
    logger.debug(f"Debug mode: {is_debug_mode()}")

    for var in ["WITH_MACHINE_DEBUG", "WITH_MACHINE_LOG_LEVEL", "WITH_MACHINE_CONFIG"]:
        value = os.environ.get(var)
        if value:
            logger.debug(f"ENV {var}={value}")
