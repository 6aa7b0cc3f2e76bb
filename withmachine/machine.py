# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Resolve a docker machine into a MachineDescriptor.

The inspection provider (docker-machine by default) is run once with the
machine name. Its stdout is captured in full; stdin and stderr stay attached
to the terminal so it can prompt or report on its own.

Decoding is permissive by default. Missing fields, nulls and mistyped values
become zero values one field at a time, and unparseable JSON gives an empty
description, rather than an error. Pass strict=True to raise
MalformedDescriptorError instead.
"""

import json
import subprocess
from typing import List, Sequence

from pydantic import ValidationError

from withmachine.errors import MalformedDescriptorError, ProviderInvocationError
from withmachine.models.machine import MachineDescriptor
from withmachine.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PROVIDER = ("docker-machine",)


def decode_descriptor(document: str, strict: bool = False) -> MachineDescriptor:
    """Decode an inspect document into a MachineDescriptor.

    A mistyped field is zeroed on its own; the rest of the document is kept.

    Args:
        document: JSON text printed by the provider
        strict: Raise instead of falling back to zero values

    Returns:
        MachineDescriptor (all defaults if the document is not a JSON object
        and strict is False)

    Raises:
        MalformedDescriptorError: If strict and the document is unusable
    """
    try:
        data = json.loads(document)
    except ValueError as e:
        return _reject(f"Provider output is not valid JSON: {e}", document, strict)

    if not isinstance(data, dict):
        return _reject(
            f"Provider output is a JSON {type(data).__name__}, expected an object",
            document,
            strict,
        )

    dropped: List[str] = []
    try:
        descriptor = MachineDescriptor.model_validate(
            data, context={"strict": strict, "dropped": dropped}
        )
    except ValidationError as e:
        return _reject(f"Provider output does not describe a machine: {e}", document, strict)

    if dropped:
        logger.warning(f"Ignoring mistyped fields in provider output: {', '.join(dropped)}")

    if strict and not descriptor.ip_address:
        raise MalformedDescriptorError("Provider output has no Driver.IPAddress", document)

    return descriptor


def _reject(message: str, document: str, strict: bool) -> MachineDescriptor:
    if strict:
        raise MalformedDescriptorError(message, document)
    logger.warning(f"{message}; using empty machine description")
    return MachineDescriptor()


def inspect_machine(
    name: str,
    provider: Sequence[str] = DEFAULT_PROVIDER,
    strict: bool = False,
) -> MachineDescriptor:
    """Return information about a docker machine.

    Args:
        name: Machine name passed to `<provider> inspect`
        provider: Provider command prefix
        strict: Fail on malformed provider output

    Raises:
        ValueError: If name is empty
        ProviderInvocationError: If the provider can't be started or exits non-zero
        MalformedDescriptorError: If strict and the output can't be decoded
    """
    if not name:
        raise ValueError("machine name must not be empty")

    cmd = [*provider, "inspect", name]
    logger.debug(f"Inspecting machine: {' '.join(cmd)}")

    try:
        result = subprocess.run(cmd, stdout=subprocess.PIPE)
    except OSError as e:
        raise ProviderInvocationError(name, cmd, cause=e) from e

    if result.returncode != 0:
        raise ProviderInvocationError(name, cmd, returncode=result.returncode)

    document = result.stdout.decode("utf-8", errors="replace")
    descriptor = decode_descriptor(document, strict=strict)
    logger.debug(
        f"Machine {name}: ip={descriptor.ip_address!r} "
        f"name={descriptor.machine_name!r} tls_verify={descriptor.tls_verify}"
    )
    return descriptor
