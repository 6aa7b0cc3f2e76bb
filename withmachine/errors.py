# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Exception classes for with-machine.

Every error carries the exit status the CLI terminates with and an optional
hint. handle_errors turns them into an error panel on stderr.
"""

import signal
from typing import Optional, Sequence

# Exit statuses for fatal conditions, kept apart from pass-through child codes
EXIT_PROVIDER_FAILED = 125
EXIT_CANNOT_EXECUTE = 126
EXIT_COMMAND_NOT_FOUND = 127
EXIT_SIGNAL_BASE = 128
EXIT_INTERRUPTED = EXIT_SIGNAL_BASE + 2  # SIGINT


class WithMachineError(Exception):
    """Base class for fatal with-machine errors."""

    title = "Error"
    exit_code = 1

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.hint = hint


class ProviderInvocationError(WithMachineError):
    """Raised when the inspection provider cannot be run or exits non-zero."""

    title = "Provider Error"
    exit_code = EXIT_PROVIDER_FAILED

    def __init__(
        self,
        machine: str,
        command: Sequence[str],
        cause: Optional[BaseException] = None,
        returncode: Optional[int] = None,
    ):
        self.machine = machine
        self.command = list(command)
        self.cause = cause
        self.returncode = returncode

        cmdline = " ".join(self.command)
        if cause is not None:
            message = f"Failed to run '{cmdline}': {cause}"
        else:
            message = f"'{cmdline}' exited with status {returncode}"

        hint = None
        if isinstance(cause, FileNotFoundError):
            hint = f"Install {self.command[0]} or set 'provider' in the config file"
        elif returncode is not None:
            hint = f"Check that machine '{machine}' exists: {self.command[0]} ls"
        super().__init__(message, hint=hint)


class MalformedDescriptorError(WithMachineError):
    """Raised by strict decoding when the provider document is unusable."""

    title = "Malformed Machine Description"
    exit_code = EXIT_PROVIDER_FAILED

    def __init__(self, message: str, document: str = ""):
        self.document = document
        super().__init__(message, hint="Retry without --strict to accept partial documents")


class AbnormalTerminationError(WithMachineError):
    """Raised when the target command did not start or did not exit normally."""

    title = "Command Failed"

    def __init__(
        self,
        argv: Sequence[str],
        cause: Optional[BaseException] = None,
        signal_number: Optional[int] = None,
    ):
        self.argv = list(argv)
        self.cause = cause
        self.signal_number = signal_number

        if signal_number is not None:
            self.exit_code = EXIT_SIGNAL_BASE + signal_number
            message = f"'{self.argv[0]}' was terminated by {_signal_name(signal_number)}"
        elif isinstance(cause, FileNotFoundError):
            self.exit_code = EXIT_COMMAND_NOT_FOUND
            message = f"Command not found: {self.argv[0]}"
        else:
            self.exit_code = EXIT_CANNOT_EXECUTE
            message = f"Cannot execute '{self.argv[0]}': {cause}"

        hint = None
        if isinstance(cause, FileNotFoundError):
            # The child does not inherit PATH from the parent
            hint = "Use an absolute path to the command"
        super().__init__(message, hint=hint)


def _signal_name(signal_number: int) -> str:
    try:
        return signal.Signals(signal_number).name
    except ValueError:
        return f"signal {signal_number}"
