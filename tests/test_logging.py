# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Tests for logging configuration."""

import logging

from click.testing import CliRunner

from withmachine.cli import cli
from withmachine.utils import logging as wm_logging
from withmachine.utils.logging import configure_logging, get_logger, is_debug_mode


def test_log_file_written(tmp_path):
    configure_logging(force=True)
    get_logger("withmachine.test").warning("disk is on fire", console_output=False)

    log_file = tmp_path / "logs" / "with-machine.log"
    assert "disk is on fire" in log_file.read_text()


def test_names_forced_into_namespace():
    assert get_logger("elsewhere").name == "withmachine.elsewhere"
    assert get_logger("withmachine.runner").name == "withmachine.runner"


def test_log_level_from_env(monkeypatch):
    monkeypatch.setenv("WITH_MACHINE_LOG_LEVEL", "ERROR")
    configure_logging(force=True)
    assert logging.getLogger("withmachine").level == logging.ERROR


def test_debug_flag_resets(monkeypatch):
    configure_logging(debug=True, force=True)
    assert is_debug_mode()

    configure_logging(force=True)
    assert not is_debug_mode()


def test_debug_env(monkeypatch):
    monkeypatch.setenv("WITH_MACHINE_DEBUG", "1")
    configure_logging(force=True)
    assert is_debug_mode()
    assert logging.getLogger("withmachine").level == logging.DEBUG


def test_unwritable_log_file_is_not_fatal(tmp_path, monkeypatch):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    monkeypatch.setenv("WITH_MACHINE_LOG_FILE", str(blocker / "sub" / "with-machine.log"))

    configure_logging(force=True)

    assert logging.getLogger("withmachine").handlers == []


def test_debug_output_goes_to_console(fake_provider, write_config, python_cmd):
    fake = fake_provider()
    write_config(provider=fake.command)

    result = CliRunner().invoke(cli, ["--debug", "--", *python_cmd("pass")])

    assert result.exit_code == 0
    assert "DOCKER_HOST=192.168.99.100:2376" in result.output
    configure_logging(force=True)
    assert wm_logging._debug_mode is False