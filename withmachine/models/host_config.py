# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Pydantic model for host configuration (~/.config/with-machine/config.yml)."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HostConfigModel(BaseModel):
    """Host-side configuration.

    Example config.yml:
        machine: dev
        provider: [docker-machine]
        strict_decode: false
        log_level: INFO
    """

    model_config = ConfigDict(extra="ignore")

    machine: str = "default"
    provider: List[str] = Field(default_factory=lambda: ["docker-machine"])
    strict_decode: bool = False
    log_level: Optional[str] = None

    @field_validator("machine")
    @classmethod
    def validate_machine(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("machine must not be empty")
        return v

    @field_validator("provider", mode="before")
    @classmethod
    def validate_provider(cls, v):
        # Accept a single command string as shorthand
        if isinstance(v, str):
            v = [v]
        if not v:
            raise ValueError("provider must name a command")
        return v
