# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""with-machine CLI.

Run COMMAND in an environment defined by docker-machine:

    with-machine docker ps
    with-machine --machine dev docker-compose up -d
"""

import functools
import sys
from typing import Callable, Optional, Tuple

import click
from rich.markup import escape
from rich.panel import Panel

from withmachine import __version__
from withmachine.environment import env_dict, machine_env
from withmachine.errors import EXIT_INTERRUPTED, WithMachineError
from withmachine.host_config import get_config
from withmachine.machine import inspect_machine
from withmachine.runner import exit_status, run_command
from withmachine.utils.logging import configure_logging, console, get_logger, log_startup_info

logger = get_logger(__name__)

ARGUMENTS_HELP = """\b
Arguments:
  COMMAND  the command to run (typically 'docker')
  ARGS     optional arguments to COMMAND
"""


def show_error_panel(title: str, message: str, hint: Optional[str] = None) -> None:
    """Display a formatted error panel on stderr."""
    content = escape(message)
    if hint:
        content += f"\n\n[blue]Hint:[/blue] {escape(hint)}"
    console.print(Panel(content, title=f"[red]{title}[/red]", border_style="red"))


def handle_errors(func: Callable) -> Callable:
    """Decorator that wraps the command with standard error handling.

    WithMachineError exits with the error's own exit code, Ctrl-C with 130,
    any other exception with 1. SystemExit and ClickException pass through.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except click.ClickException:
            raise
        except KeyboardInterrupt:
            logger.warning("Interrupted", console_output=False)
            console.print("\n[yellow]Cancelled[/yellow]")
            sys.exit(EXIT_INTERRUPTED)
        except WithMachineError as exc:
            logger.error(exc.title, exc=exc, console_output=False)
            show_error_panel(exc.title, str(exc), exc.hint)
            sys.exit(exc.exit_code)
        except Exception as exc:
            logger.error("Unexpected error", exc=exc, console_output=False)
            show_error_panel("Error", str(exc))
            sys.exit(1)

    return wrapper


@click.command(
    name="with-machine",
    epilog=ARGUMENTS_HELP,
    context_settings={"allow_interspersed_args": False},
)
@click.version_option(version=__version__, message="%(prog)s %(version)s")
@click.option(
    "--machine",
    "-m",
    metavar="NAME",
    default=None,
    help="docker machine name (default: $WITH_MACHINE_NAME, config file, or 'default')",
)
@click.option("--strict", is_flag=True, help="Fail if the machine description is incomplete")
@click.option("--debug", is_flag=True, help="Show debug output on stderr")
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@handle_errors
def cli(machine: Optional[str], strict: bool, debug: bool, command: Tuple[str, ...]):
    """Run COMMAND in an environment defined by docker-machine.

    The command sees only DOCKER_TLS_VERIFY, DOCKER_HOST, DOCKER_CERT_PATH
    and DOCKER_MACHINE_NAME. Its exit status becomes ours.
    """
    config = get_config()
    configure_logging(debug=debug, log_level=config.log_level, force=True)
    log_startup_info()

    name = config.machine_name(machine)
    descriptor = inspect_machine(
        name,
        provider=config.provider,
        strict=strict or config.strict_decode,
    )
    env = env_dict(machine_env(descriptor))

    outcome = run_command(command, env)
    sys.exit(exit_status(outcome))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
