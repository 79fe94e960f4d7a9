# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants describing the catalog and release layout."""

from __future__ import annotations

from typing import Final

DEFAULT_CATALOG_NAME: Final[str] = "modlist.csv"
DEFAULT_SOURCE_DIR_NAME: Final[str] = "download"
DEFAULT_OUTPUT_DIR_NAME: Final[str] = "release"
DEFAULT_ARCHIVE_NAME: Final[str] = "modpack-{game_version}.zip"
CONFIG_FILE_NAME: Final[str] = "modrelease.toml"
MANIFEST_FILE_NAME: Final[str] = "README.md"

MODS_DIR: Final[str] = "mods"
OPTIONAL_DIR: Final[str] = f"{MODS_DIR}/optional"
SERVER_DIR: Final[str] = f"{MODS_DIR}/server"

EXPECTED_FILES_REPORT: Final[str] = "expected-release-files.txt"
ACTUAL_FILES_REPORT: Final[str] = "actual-release-files.txt"
MISSING_FILES_REPORT: Final[str] = "verification-missing.txt"
EXTRA_FILES_REPORT: Final[str] = "verification-extra.txt"

DEFAULT_EXCLUDED_FILE_PATTERNS: Final[tuple[str, ...]] = (
    "expected-release-files.*",
    "actual-release-files.*",
    "verification-missing.*",
    "verification-extra.*",
)
DEFAULT_EXCLUDED_DIRECTORY_PATTERNS: Final[tuple[str, ...]] = ("reconcile-*",)

# Column order of the catalog CSV; also the canonical hashing order.
CATALOG_COLUMNS: Final[tuple[str, ...]] = (
    "Group",
    "Type",
    "ID",
    "Name",
    "Jar",
    "ClientSide",
    "ServerSide",
    "GameVersion",
    "Version",
    "Description",
    "Url",
    "RecordHash",
)
HASH_COLUMN: Final[str] = "RecordHash"

__all__ = [
    "ACTUAL_FILES_REPORT",
    "CATALOG_COLUMNS",
    "CONFIG_FILE_NAME",
    "DEFAULT_ARCHIVE_NAME",
    "DEFAULT_CATALOG_NAME",
    "DEFAULT_EXCLUDED_DIRECTORY_PATTERNS",
    "DEFAULT_EXCLUDED_FILE_PATTERNS",
    "DEFAULT_OUTPUT_DIR_NAME",
    "DEFAULT_SOURCE_DIR_NAME",
    "EXPECTED_FILES_REPORT",
    "EXTRA_FILES_REPORT",
    "HASH_COLUMN",
    "MANIFEST_FILE_NAME",
    "MISSING_FILES_REPORT",
    "MODS_DIR",
    "OPTIONAL_DIR",
    "SERVER_DIR",
]
