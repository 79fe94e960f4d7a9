# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import pytest

from modrelease.catalog import CatalogRecord, seal_record, write_catalog

RecordFactory = Callable[..., CatalogRecord]

GAME_VERSION = "1.21.8"


def _make_record(**overrides: Any) -> CatalogRecord:
    identifier = overrides.pop("id", "fabric-api")
    values: dict[str, Any] = {
        "group": "required",
        "kind": "mod",
        "id": identifier,
        "name": identifier.replace("-", " ").title(),
        "artifact_filename": f"{identifier}-1.jar",
        "client_support": "required",
        "server_support": "required",
        "game_version": GAME_VERSION,
        "version": "1.0.0",
        "description": f"{identifier} description",
        "url": f"https://modrinth.com/mod/{identifier}",
    }
    values.update(overrides)
    sealed = "integrity_hash" not in values
    record = CatalogRecord(**values)
    return seal_record(record) if sealed else record


@pytest.fixture
def make_record() -> RecordFactory:
    """Return a factory building sealed records with sensible defaults."""

    return _make_record


@pytest.fixture
def write_modlist(tmp_path: Path) -> Callable[[Iterable[CatalogRecord]], Path]:
    """Return a helper writing records to ``modlist.csv`` under ``tmp_path``."""

    def _write(records: Iterable[CatalogRecord]) -> Path:
        path = tmp_path / "modlist.csv"
        write_catalog(path, records)
        return path

    return _write


@pytest.fixture
def source_pool(tmp_path: Path) -> Callable[[Iterable[CatalogRecord]], Path]:
    """Return a helper populating a flat download directory for ``records``."""

    def _populate(records: Iterable[CatalogRecord]) -> Path:
        pool = tmp_path / "download"
        pool.mkdir(exist_ok=True)
        for record in records:
            if record.artifact_filename:
                (pool / record.artifact_filename).write_bytes(f"jar:{record.id}".encode())
        return pool

    return _populate
