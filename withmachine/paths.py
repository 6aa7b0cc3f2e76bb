# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Centralized path definitions for with-machine.

Usage:
    from withmachine.paths import HostPaths

    config_file = HostPaths.config_file()
    log_file = HostPaths.log_file()
"""

import os
from pathlib import Path

APP_NAME = "with-machine"


class HostPaths:
    """Paths on the host machine where with-machine runs."""

    @staticmethod
    def config_dir() -> Path:
        """~/.config/with-machine/"""
        return Path.home() / ".config" / APP_NAME

    @staticmethod
    def config_file() -> Path:
        """~/.config/with-machine/config.yml (or $WITH_MACHINE_CONFIG)"""
        env_config = os.getenv("WITH_MACHINE_CONFIG")
        if env_config:
            return Path(env_config)
        return HostPaths.config_dir() / "config.yml"

    @staticmethod
    def data_dir() -> Path:
        """~/.local/share/with-machine/"""
        return Path.home() / ".local" / "share" / APP_NAME

    @staticmethod
    def log_file() -> Path:
        """~/.local/share/with-machine/logs/with-machine.log (or $WITH_MACHINE_LOG_FILE)"""
        env_log_file = os.getenv("WITH_MACHINE_LOG_FILE")
        if env_log_file:
            return Path(env_log_file)
        return HostPaths.data_dir() / "logs" / f"{APP_NAME}.log"
