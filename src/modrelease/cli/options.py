# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Option declarations and option models shared by modrelease commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer

from ..config import ReleaseConfig, check_game_version, load_config
from ..errors import ConfigError
from .shared import CLIError, CLILogger, build_cli_logger

ROOT_OPTION = Annotated[
    Path,
    typer.Option(
        "--root",
        "-r",
        help="Project root holding the catalog and configuration.",
        show_default=False,
    ),
]
CATALOG_OPTION = Annotated[
    Path | None,
    typer.Option("--catalog", "-c", help="Catalog CSV; defaults to the configured catalog_path."),
]
GAME_VERSION_OPTION = Annotated[
    str | None,
    typer.Option("--game-version", "-g", help="Minecraft version to release; defaults to the configured game_version."),
]
SOURCE_DIR_OPTION = Annotated[
    Path | None,
    typer.Option("--source-dir", help="Flat directory of downloaded artifacts."),
]
OUTPUT_DIR_OPTION = Annotated[
    Path | None,
    typer.Option("--output-dir", help="Directory receiving release trees and archives."),
]
JOBS_OPTION = Annotated[
    int | None,
    typer.Option("--jobs", "-j", min=1, help="Concurrent copy workers used during placement."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Show debug output from the release engine."),
]


@dataclass(slots=True)
class CommonOptions:
    """Options accepted by every command."""

    root: Path
    catalog: Path | None = None
    emoji: bool = True
    debug: bool = False

    def overrides(self, **extra: Any) -> dict[str, Any]:
        """Return configuration overrides derived from CLI options."""

        values: dict[str, Any] = {"catalog_path": self.catalog, **extra}
        return {key: value.resolve() if isinstance(value, Path) else value for key, value in values.items()}


@dataclass(slots=True)
class CommandContext:
    """Resolved configuration and logger for one command invocation."""

    config: ReleaseConfig
    logger: CLILogger

    def require_game_version(self, game_version: str | None) -> str:
        """Return ``game_version`` or the configured default.

        Raises:
            CLIError: If neither is available or the version cannot name a release directory.
        """

        resolved = game_version or self.config.game_version
        if not resolved:
            raise CLIError("no game version given; pass --game-version or set game_version in the configuration")
        try:
            return check_game_version(resolved)
        except ConfigError as exc:
            raise CLIError(str(exc)) from exc


def build_context(options: CommonOptions, **overrides: Any) -> CommandContext:
    """Return the :class:`CommandContext` for ``options``.

    Args:
        options: Common CLI options.
        **overrides: Additional configuration values supplied by the command.

    Returns:
        CommandContext: Loaded configuration plus a CLI logger.

    Raises:
        CLIError: If the configuration cannot be loaded.
    """

    logger = build_cli_logger(emoji=options.emoji, debug=options.debug)
    root = options.root.resolve()
    try:
        config = load_config(root, overrides=options.overrides(**overrides))
    except ConfigError as exc:
        raise CLIError(str(exc)) from exc
    logger.debug(f"root={root} catalog={config.catalog_path}")
    return CommandContext(config=config, logger=logger)


__all__ = [
    "CATALOG_OPTION",
    "DEBUG_OPTION",
    "EMOJI_OPTION",
    "GAME_VERSION_OPTION",
    "JOBS_OPTION",
    "OUTPUT_DIR_OPTION",
    "ROOT_OPTION",
    "SOURCE_DIR_OPTION",
    "CommandContext",
    "CommonOptions",
    "build_context",
]
