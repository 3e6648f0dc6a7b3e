"""CLI error reporting for java-info.

Lookup failures and configuration problems end a command with a red panel on
stderr and a non-zero exit status:

- 1: the class, method or source could not be produced (a ``Failure``)
- 2: the environment or options describe an invalid configuration
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import override

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from java_info.errors import JavaInfoConfigError
from java_info.failures import Failure

logger = logging.getLogger(__name__)
console = Console(stderr=True)

EXIT_LOOKUP_FAILED = 1
EXIT_BAD_CONFIGURATION = 2


class CLIError(Exception):
    """A command that could not produce its result."""

    def __init__(
        self,
        message: str,
        command: str | None = None,
        failure: Failure | None = None,
        exit_code: int = EXIT_LOOKUP_FAILED,
    ) -> None:
        """Initialise CLI error with context.

        Args:
            message: What went wrong, for the user
            command: Name of the CLI command that failed (e.g., "javadoc")
            failure: Lookup failure behind the error, if any
            exit_code: Process exit status to use

        """
        super().__init__(message)
        self.command = command
        self.failure = failure
        self.exit_code = exit_code

    @classmethod
    def from_failure(cls, failure: Failure, command: str) -> CLIError:
        """Wrap a lookup failure returned by the engine."""
        return cls(failure.message, command=command, failure=failure)

    @override
    def __str__(self) -> str:
        message = super().__str__()
        if self.failure is not None:
            message = f"{message} ({self.failure.kind.value}: {self.failure.identifier})"
        if self.command:
            return f"java-info {self.command}: {message}"
        return message


@contextmanager
def cli_error_handler(command: str, title: str) -> Generator[None]:
    """Report errors raised inside a command and exit with their status.

    ``JavaInfoConfigError`` exits with ``EXIT_BAD_CONFIGURATION``; any other
    unexpected exception is reported like a failed lookup.

    Args:
        command: CLI command name for error context.
        title: Panel title for the error display.

    """
    try:
        yield
    except CLIError as e:
        _report(e, title)
        raise typer.Exit(e.exit_code) from e
    except JavaInfoConfigError as e:
        error = CLIError(str(e), command=command, exit_code=EXIT_BAD_CONFIGURATION)
        _report(error, "Invalid configuration")
        raise typer.Exit(error.exit_code) from e
    except Exception as e:
        logger.exception(f"Unexpected error in {command}")
        error = CLIError(str(e), command=command)
        _report(error, title)
        raise typer.Exit(error.exit_code) from e


def _report(error: CLIError, title: str) -> None:
    if error.failure is not None:
        logger.info(f"{title}: {error}")
        title = f"{title} ({error.failure.kind.value})"
    else:
        logger.error(f"{title}: {error}")
    console.print(Panel(Text(str(error), style="red"), title=title, border_style="red"))
