# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Pytest fixtures for with-machine tests.

The inspection provider is replaced by a small Python script that prints a
canned document, records how it was called, and exits with a chosen status.
"""

import json
import os
import sys
from pathlib import Path
from typing import List

import pytest
import yaml

FAKE_PROVIDER_SCRIPT = """\
import sys

document, calls, stderr_text, exit_code = sys.argv[1:5]
with open(calls, "a") as f:
    f.write(" ".join(sys.argv[5:]) + "\\n")
with open(stderr_text) as f:
    sys.stderr.write(f.read())
with open(document) as f:
    sys.stdout.write(f.read())
sys.exit(int(exit_code))
"""

INSPECT_DOCUMENT = {
    "ConfigVersion": 3,
    "Driver": {
        "IPAddress": "192.168.99.100",
        "MachineName": "dev",
        "SSHUser": "docker",
        "SSHPort": 22,
        "CPU": 1,
        "Memory": 1024,
    },
    "DriverName": "virtualbox",
    "HostOptions": {
        "Driver": "",
        "Memory": 0,
        "Disk": 0,
        "EngineOptions": {
            "ArbitraryFlags": [],
            "InsecureRegistry": [],
            "StorageDriver": "",
            "TlsVerify": True,
            "InstallURL": "https://get.docker.com",
        },
        "AuthOptions": {
            "CertDir": "/home/user/.docker/machine/certs",
            "StorePath": "/home/user/.docker/machine/machines/dev",
            "ServerCertPath": "/home/user/.docker/machine/machines/dev/server.pem",
        },
    },
    "Name": "dev",
}


class FakeProvider:
    """Handle on a fake docker-machine executable."""

    def __init__(self, command: List[str], calls_file: Path):
        self.command = command
        self.calls_file = calls_file

    def calls(self) -> List[str]:
        """Arguments of every invocation, one string per call."""
        if not self.calls_file.exists():
            return []
        return self.calls_file.read_text().splitlines()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep config, logs and env overrides inside the test's tmp_path."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("WITH_MACHINE_CONFIG", str(tmp_path / "config.yml"))
    monkeypatch.setenv("WITH_MACHINE_LOG_FILE", str(tmp_path / "logs" / "with-machine.log"))
    for var in ("WITH_MACHINE_NAME", "WITH_MACHINE_DEBUG", "WITH_MACHINE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture
def fake_provider(tmp_path):
    """Factory for fake providers.

    Usage:
        provider = fake_provider(document={"Driver": {...}}, exit_code=0, stderr="")
        inspect_machine("dev", provider=provider.command)
    """
    script = tmp_path / "fake-docker-machine.py"
    script.write_text(FAKE_PROVIDER_SCRIPT)

    def make(document=INSPECT_DOCUMENT, exit_code: int = 0, stderr: str = "") -> FakeProvider:
        doc_file = tmp_path / "inspect-output.json"
        if isinstance(document, str):
            doc_file.write_text(document)
        else:
            doc_file.write_text(json.dumps(document, indent=4))
        stderr_file = tmp_path / "inspect-stderr.txt"
        stderr_file.write_text(stderr)
        calls_file = tmp_path / "provider-calls.txt"
        command = [
            sys.executable,
            str(script),
            str(doc_file),
            str(calls_file),
            str(stderr_file),
            str(exit_code),
        ]
        return FakeProvider(command, calls_file)

    return make


@pytest.fixture
def write_config(tmp_path):
    """Write ~/.config/with-machine/config.yml (via WITH_MACHINE_CONFIG)."""

    def write(**values) -> Path:
        config_path = tmp_path / "config.yml"
        config_path.write_text(yaml.safe_dump(values))
        return config_path

    return write


def python_command(code: str) -> List[str]:
    """A target command running a Python snippet."""
    return [sys.executable, "-c", code]


@pytest.fixture
def python_cmd():
    return python_command


@pytest.fixture
def stdin_from(tmp_path):
    """Point file descriptor 0 at a file holding the given text.

    Usage:
        stdin_from("hello\n")
        run_command(...)  # child reads "hello\n" on stdin
    """
    saved = os.dup(0)

    def feed(text: str) -> None:
        stdin_file = tmp_path / "stdin.txt"
        stdin_file.write_text(text)
        with open(stdin_file) as f:
            os.dup2(f.fileno(), 0)

    yield feed

    os.dup2(saved, 0)
    os.close(saved)
