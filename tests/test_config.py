# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for release configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from modrelease.config import ReleaseConfig, load_config
from modrelease.errors import ConfigError


def test_defaults_are_anchored_at_root(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.catalog_path == tmp_path / "modlist.csv"
    assert config.source_dir == tmp_path / "download"
    assert config.release_root("1.21.8") == tmp_path / "release" / "1.21.8"
    assert config.archive_path("1.21.8") == tmp_path / "release" / "modpack-1.21.8.zip"
    assert config.jobs == 1
    assert config.fresh_output is True


def test_dedicated_file_wins_over_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.modrelease]\ngame_version = "1.20.1"\n', encoding="utf-8")
    (tmp_path / "modrelease.toml").write_text(
        """
game-version = "1.21.8"
jobs = 4
source_dir = "/srv/cache"

[exclusions]
file_patterns = ["*.log"]
""".strip(),
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.game_version == "1.21.8"
    assert config.jobs == 4
    assert config.source_dir == Path("/srv/cache")
    assert config.exclusion_policy().matches("mods/debug.log")
    assert config.exclusion_policy().matches("verification-extra.txt")


def test_pyproject_section(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.modrelease]\ngame_version = "1.20.1"\noutput_dir = "dist"\n',
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.game_version == "1.20.1"
    assert config.output_dir == tmp_path / "dist"


def test_overrides_take_precedence(tmp_path: Path) -> None:
    (tmp_path / "modrelease.toml").write_text("jobs = 4\n", encoding="utf-8")

    config = load_config(tmp_path, overrides={"jobs": 2, "game_version": None})

    assert config.jobs == 2
    assert config.game_version is None


@pytest.mark.parametrize(
    "payload",
    ["jobs = 0\n", 'archive_name = "out/pack.zip"\n', 'archive_name = "{name}.zip"\n', "unknown = 1\n"],
)
def test_invalid_configuration(tmp_path: Path, payload: str) -> None:
    (tmp_path / "modrelease.toml").write_text(payload, encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid configuration"):
        load_config(tmp_path)


def test_malformed_toml(tmp_path: Path) -> None:
    (tmp_path / "modrelease.toml").write_text("jobs = [\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid TOML"):
        load_config(tmp_path)


def test_validate_assignment() -> None:
    config = ReleaseConfig()

    with pytest.raises(ValueError):
        config.jobs = 0


@pytest.mark.parametrize("version", ["", " ", ".", "..", "1.21/8", "..\\1.21.8"])
def test_release_paths_reject_versions_outside_output_dir(tmp_path: Path, version: str) -> None:
    config = load_config(tmp_path)

    with pytest.raises(ConfigError, match="invalid game version"):
        config.release_root(version)
    with pytest.raises(ConfigError, match="invalid game version"):
        config.archive_path(version)


def test_configured_game_version_must_be_a_single_component(tmp_path: Path) -> None:
    (tmp_path / "modrelease.toml").write_text('game_version = ".."\n', encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid configuration"):
        load_config(tmp_path)
