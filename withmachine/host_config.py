# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Host-side configuration for with-machine."""

import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from withmachine.models.host_config import HostConfigModel
from withmachine.paths import HostPaths
from withmachine.utils.logging import get_logger

logger = get_logger(__name__)


class HostConfig:
    """Manages host-side configuration from ~/.config/with-machine/config.yml."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or HostPaths.config_file()
        self._model = self._load()

    def _load(self) -> HostConfigModel:
        """Load configuration from file, falling back to defaults."""
        if not self.config_path.exists():
            return HostConfigModel()

        try:
            with open(self.config_path) as f:
                raw_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {self.config_path}: {e}")
            return HostConfigModel()

        if not isinstance(raw_config, dict):
            logger.warning(f"Ignoring {self.config_path}: expected a mapping")
            return HostConfigModel()

        try:
            return HostConfigModel.model_validate(raw_config)
        except ValidationError as e:
            logger.warning(f"Config validation errors in {self.config_path}: {e}")
            return HostConfigModel()

    @property
    def provider(self) -> List[str]:
        return list(self._model.provider)

    @property
    def strict_decode(self) -> bool:
        return self._model.strict_decode

    @property
    def log_level(self) -> Optional[str]:
        return self._model.log_level

    def machine_name(self, override: Optional[str] = None) -> str:
        """Resolve the machine name.

        Priority:
        1. Explicit override (--machine)
        2. WITH_MACHINE_NAME environment variable
        3. 'machine' from the config file (defaults to "default")
        """
        if override:
            return override
        env_name = os.getenv("WITH_MACHINE_NAME")
        if env_name:
            return env_name
        return self._model.machine


def get_config() -> HostConfig:
    """Load the host configuration."""
    return HostConfig()
