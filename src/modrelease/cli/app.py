# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from .commands import register_commands
from .typer_ext import create_typer

app = create_typer(name="modrelease", help_text="Compose and verify modpack releases from a modlist catalog.")
register_commands(app)


def main() -> None:
    """Run the ``modrelease`` console script."""

    app()


__all__ = ["app", "main"]
