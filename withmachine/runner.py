# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Run the target command and report how it terminated.

The child gets exactly the environment it is given. Nothing from the parent
environment is inherited, PATH included, so commands outside the default
search path need an absolute path. Stdin, stdout and stderr are the parent's.

A run ends in one of two outcomes:
    ExitedNormally(code)         the child called exit(code)
    AbnormalTermination(...)     the child never started, or a signal killed it
"""

import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Union

from withmachine.errors import AbnormalTerminationError
from withmachine.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExitedNormally:
    code: int


@dataclass(frozen=True)
class AbnormalTermination:
    """The child could not be started (cause) or was killed (signal)."""

    argv: Sequence[str]
    cause: Optional[BaseException] = None
    signal: Optional[int] = None


ExecutionOutcome = Union[ExitedNormally, AbnormalTermination]


def run_command(argv: Sequence[str], env: Mapping[str, str]) -> ExecutionOutcome:
    """Run argv with env and block until it terminates.

    Args:
        argv: Command name followed by its arguments
        env: Complete child environment

    Returns:
        ExitedNormally or AbnormalTermination

    Raises:
        ValueError: If argv is empty
    """
    if not argv:
        raise ValueError("command must not be empty")

    argv = list(argv)
    logger.debug(f"Running: {argv}")
    for key, value in env.items():
        logger.debug(f"  {key}={value}")

    try:
        proc = subprocess.Popen(argv, env=dict(env))
    except OSError as e:
        logger.debug(f"Failed to start {argv[0]}: {e}")
        return AbnormalTermination(argv=argv, cause=e)

    with proc:
        try:
            returncode = proc.wait()
        except KeyboardInterrupt:
            # The terminal delivered SIGINT to the child too; report its outcome
            returncode = proc.wait()

    if returncode < 0:
        logger.debug(f"{argv[0]} killed by signal {-returncode}")
        return AbnormalTermination(argv=argv, signal=-returncode)

    logger.debug(f"{argv[0]} exited with status {returncode}")
    return ExitedNormally(returncode)


def exit_status(outcome: ExecutionOutcome) -> int:
    """Map an outcome to the status this program should exit with.

    Raises:
        AbnormalTerminationError: If the child did not exit normally
    """
    if isinstance(outcome, ExitedNormally):
        return outcome.code
    raise AbnormalTerminationError(outcome.argv, cause=outcome.cause, signal_number=outcome.signal)
