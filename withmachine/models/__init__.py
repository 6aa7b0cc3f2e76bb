# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Pydantic models for with-machine."""

from withmachine.models.host_config import HostConfigModel
from withmachine.models.machine import (
    AuthOptions,
    Driver,
    EngineOptions,
    HostOptions,
    MachineDescriptor,
)

__all__ = [
    "AuthOptions",
    "Driver",
    "EngineOptions",
    "HostConfigModel",
    "HostOptions",
    "MachineDescriptor",
]
