# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for release builds."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import (
    CONFIG_FILE_NAME,
    DEFAULT_ARCHIVE_NAME,
    DEFAULT_CATALOG_NAME,
    DEFAULT_OUTPUT_DIR_NAME,
    DEFAULT_SOURCE_DIR_NAME,
)
from .errors import ConfigError
from .release.exclusions import ExclusionPolicy

PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "modrelease"
_RESERVED_VERSION_NAMES: Final[frozenset[str]] = frozenset({"", ".", ".."})


def check_game_version(game_version: str) -> str:
    """Return ``game_version`` if it can name a directory directly under the output directory.

    Raises:
        ConfigError: If the version is blank, a relative path marker or contains a separator.
    """

    if game_version.strip() in _RESERVED_VERSION_NAMES or "/" in game_version or "\\" in game_version:
        raise ConfigError(f"invalid game version {game_version!r}: expected a single path component")
    return game_version


class ExclusionConfig(BaseModel):
    """Additional internal-artifact patterns kept out of release archives."""

    model_config = ConfigDict(validate_assignment=True)

    file_patterns: list[str] = Field(default_factory=list)
    directory_patterns: list[str] = Field(default_factory=list)

    def policy(self) -> ExclusionPolicy:
        """Return the default exclusion policy extended with these patterns."""

        return ExclusionPolicy.with_extras(
            file_patterns=self.file_patterns,
            directory_patterns=self.directory_patterns,
        )


class ReleaseConfig(BaseModel):
    """Primary configuration container used by release builds."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    catalog_path: Path = Path(DEFAULT_CATALOG_NAME)
    source_dir: Path = Path(DEFAULT_SOURCE_DIR_NAME)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR_NAME)
    archive_name: str = DEFAULT_ARCHIVE_NAME
    game_version: str | None = None
    jobs: int = Field(default=1, ge=1)
    fresh_output: bool = True
    exclusions: ExclusionConfig = Field(default_factory=ExclusionConfig)

    @field_validator("game_version")
    @classmethod
    def _check_game_version(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            return check_game_version(value)
        except ConfigError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("archive_name")
    @classmethod
    def _check_archive_name(cls, value: str) -> str:
        if "/" in value or "\\" in value:
            raise ValueError("archive_name must be a file name, not a path")
        try:
            value.format(game_version="0")
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError("archive_name may only use the {game_version} placeholder") from exc
        return value

    def anchored(self, root: Path) -> ReleaseConfig:
        """Return a copy whose relative paths are resolved against ``root``."""

        updates: dict[str, Path] = {}
        for name in ("catalog_path", "source_dir", "output_dir"):
            value: Path = getattr(self, name)
            updates[name] = value if value.is_absolute() else (root / value)
        return self.model_copy(update=updates)

    def release_root(self, game_version: str) -> Path:
        """Return the directory receiving the placed artifacts for ``game_version``.

        Raises:
            ConfigError: If ``game_version`` cannot name a directory of its own.
        """

        return self.output_dir / check_game_version(game_version)

    def archive_path(self, game_version: str) -> Path:
        """Return the archive path for ``game_version``."""

        return self.output_dir / self.archive_name.format(game_version=check_game_version(game_version))

    def exclusion_policy(self) -> ExclusionPolicy:
        """Return the exclusion policy configured for this build."""

        return self.exclusions.policy()


def _read_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML: {exc}") from exc


def find_config_payload(root: Path) -> tuple[Mapping[str, Any], Path | None]:
    """Return the raw configuration mapping discovered under ``root``.

    ``modrelease.toml`` takes precedence over ``[tool.modrelease]`` in
    ``pyproject.toml``.

    Returns:
        tuple[Mapping[str, Any], Path | None]: Payload and the file it came
        from, or an empty mapping and ``None`` when neither exists.
    """

    dedicated = root / CONFIG_FILE_NAME
    if dedicated.is_file():
        return _read_toml(dedicated), dedicated
    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        tool_section = _read_toml(pyproject).get(PYPROJECT_TOOL_KEY)
        if isinstance(tool_section, Mapping):
            section = tool_section.get(PYPROJECT_SECTION_KEY)
            if isinstance(section, Mapping):
                return section, pyproject
    return {}, None


def load_config(root: Path, *, overrides: Mapping[str, Any] | None = None) -> ReleaseConfig:
    """Load the release configuration for the project at ``root``.

    Args:
        root: Project root holding the configuration and catalog.
        overrides: Values taking precedence over the file, typically CLI options;
            ``None`` values are ignored.

    Returns:
        ReleaseConfig: Validated configuration with paths anchored at ``root``.

    Raises:
        ConfigError: If the configuration file is unreadable or invalid.
    """

    payload, source = find_config_payload(root)
    data = {key.replace("-", "_"): value for key, value in payload.items()}
    if overrides:
        data.update({key: value for key, value in overrides.items() if value is not None})
    try:
        config = ReleaseConfig.model_validate(data)
    except ValidationError as exc:
        origin = source or root
        raise ConfigError(f"{origin}: invalid configuration\n{exc}") from exc
    return config.anchored(root)


__all__ = [
    "ExclusionConfig",
    "ReleaseConfig",
    "check_game_version",
    "find_config_payload",
    "load_config",
]
