# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors)."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import typer
from rich.console import Console
from rich.logging import RichHandler

from ..console import get_console_manager
from ..errors import ModReleaseError
from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import section as core_section
from ..logging import warn as core_warn


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    console: Console
    use_emoji: bool
    debug_enabled: bool = False

    def section(self, title: str) -> None:
        """Render a section header."""

        core_section(title, use_color=self.console.is_terminal)

    def info(self, message: str) -> None:
        """Log an informational message."""

        core_info(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        """Log a success message."""

        core_ok(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        """Log a warning message."""

        core_warn(message, use_emoji=self.use_emoji)

    def fail(self, message: str) -> None:
        """Log a failure message."""

        core_fail(message, use_emoji=self.use_emoji)

    def echo(self, message: str) -> None:
        """Write ``message`` verbatim to stdout."""

        typer.echo(message)

    def debug(self, message: str) -> None:
        """Emit ``message`` only when debug output is enabled."""

        if self.debug_enabled:
            self.console.print(f"[debug] {message}", style="dim", markup=False)


def build_cli_logger(*, emoji: bool, debug: bool = False) -> CLILogger:
    """Return a :class:`CLILogger` and route library logging through Rich.

    Args:
        emoji: Whether log output may include emoji glyphs.
        debug: Whether debug output from library loggers should be shown.

    Returns:
        CLILogger: Logger bound to the shared console.
    """

    manager = get_console_manager()
    manager.reset()
    console = manager.get(color=True, emoji=emoji)
    root = logging.getLogger("modrelease")
    root.handlers.clear()
    root.setLevel(logging.DEBUG if debug else logging.WARNING)
    root.addHandler(RichHandler(console=console, show_time=False, show_path=False, markup=False))
    root.propagate = False
    return CLILogger(console=console, use_emoji=emoji, debug_enabled=debug)


@contextmanager
def exit_on_error(*, emoji: bool = True) -> Iterator[None]:
    """Translate command failures into a logged message and ``typer.Exit``.

    Args:
        emoji: Whether the failure message may include emoji glyphs.

    Raises:
        typer.Exit: With the exit code of a :class:`CLIError`, or ``1`` for
            any other modrelease error.
    """

    try:
        yield
    except CLIError as exc:
        core_fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=exc.exit_code) from exc
    except ModReleaseError as exc:
        core_fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=1) from exc
    except FileNotFoundError as exc:
        core_fail(f"file not found: {exc.filename or exc}", use_emoji=emoji)
        raise typer.Exit(code=1) from exc


__all__ = ["CLIError", "CLILogger", "build_cli_logger", "exit_on_error"]
