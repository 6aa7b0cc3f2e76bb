# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Pydantic models for the document printed by `docker-machine inspect`.

Only the fields needed to build a client environment are modelled. Anything
else in the document is ignored, and every modelled field falls back to its
zero value when absent or null. Keys match case-insensitively, an exact
match taking precedence.

Validation context:
    strict    True to raise on a mistyped field instead of zeroing it
    dropped   list that collects the names of zeroed fields
"""

from typing import Annotated, Any, Callable

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    WrapValidator,
    model_validator,
)


def _zero_on_error(zero: Callable[[], Any]) -> WrapValidator:
    """Replace a value that fails validation with its zero value."""

    def validate(value: Any, handler: Callable[[Any], Any], info: ValidationInfo) -> Any:
        try:
            return handler(value)
        except ValidationError:
            context = info.context or {}
            if context.get("strict"):
                raise
            dropped = context.get("dropped")
            if dropped is not None:
                dropped.append(info.field_name)
            return zero()

    return WrapValidator(validate)


class _InspectModel(BaseModel):
    """Immutable, permissive base for inspect document sections."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        known = {}
        for name, field in cls.model_fields.items():
            alias = field.alias or name
            known[alias.lower()] = alias
            known.setdefault(name.lower(), name)

        exact = {key for key in data if key in known.values()}
        normalized = {}
        for key, value in data.items():
            # null means "not set", same as a missing key
            if value is None:
                continue
            if key in exact:
                normalized[key] = value
                continue
            canonical = known.get(key.lower(), key) if isinstance(key, str) else key
            if canonical not in exact:
                normalized.setdefault(canonical, value)
        return normalized


LenientStr = Annotated[str, _zero_on_error(str)]
LenientBool = Annotated[bool, _zero_on_error(bool)]


class Driver(_InspectModel):
    ip_address: LenientStr = Field(default="", alias="IPAddress")
    machine_name: LenientStr = Field(default="", alias="MachineName")


class AuthOptions(_InspectModel):
    store_path: LenientStr = Field(default="", alias="StorePath")


class EngineOptions(_InspectModel):
    tls_verify: LenientBool = Field(default=False, alias="TlsVerify")


class HostOptions(_InspectModel):
    auth_options: Annotated[AuthOptions, _zero_on_error(AuthOptions)] = Field(
        default_factory=AuthOptions, alias="AuthOptions"
    )
    engine_options: Annotated[EngineOptions, _zero_on_error(EngineOptions)] = Field(
        default_factory=EngineOptions, alias="EngineOptions"
    )


class MachineDescriptor(_InspectModel):
    """Resolved state of one docker machine.

    Built once from a single provider invocation and never modified.
    """

    driver: Annotated[Driver, _zero_on_error(Driver)] = Field(
        default_factory=Driver, alias="Driver"
    )
    host_options: Annotated[HostOptions, _zero_on_error(HostOptions)] = Field(
        default_factory=HostOptions, alias="HostOptions"
    )

    @property
    def ip_address(self) -> str:
        return self.driver.ip_address

    @property
    def machine_name(self) -> str:
        return self.driver.machine_name

    @property
    def store_path(self) -> str:
        return self.host_options.auth_options.store_path

    @property
    def tls_verify(self) -> bool:
        return self.host_options.engine_options.tls_verify
