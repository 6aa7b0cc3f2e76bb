# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Project a MachineDescriptor into docker client environment variables."""

from typing import Dict, List, Sequence, Tuple

from withmachine.models.machine import MachineDescriptor

DOCKER_TLS_VERIFY = "DOCKER_TLS_VERIFY"
DOCKER_HOST = "DOCKER_HOST"
DOCKER_CERT_PATH = "DOCKER_CERT_PATH"
DOCKER_MACHINE_NAME = "DOCKER_MACHINE_NAME"

# docker-machine engines always listen for TLS on this port
DOCKER_DAEMON_PORT = "2376"

EnvAssignments = List[Tuple[str, str]]


def machine_env(machine: MachineDescriptor) -> EnvAssignments:
    """Build the environment a docker client needs to reach a machine.

    Never fails: absent fields project to empty strings.
    """
    verify = "1" if machine.tls_verify else "0"
    host = f"{machine.ip_address}:{DOCKER_DAEMON_PORT}"

    return [
        (DOCKER_TLS_VERIFY, verify),
        (DOCKER_HOST, host),
        (DOCKER_CERT_PATH, machine.store_path),
        (DOCKER_MACHINE_NAME, machine.machine_name),
    ]


def env_dict(assignments: Sequence[Tuple[str, str]]) -> Dict[str, str]:
    """Convert assignments into a subprocess env mapping.

    Raises:
        ValueError: If a key is assigned twice
    """
    env: Dict[str, str] = {}
    for key, value in assignments:
        if key in env:
            raise ValueError(f"duplicate environment key: {key}")
        env[key] = value
    return env
