# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for realising an expected set on disk."""

from __future__ import annotations

from pathlib import Path

import pytest

from modrelease.release import (
    PlacementFailedError,
    SourceArtifactMissingError,
    build_expected_set,
    collect_tree_paths,
    execute_placement,
    verify_release,
)

VERSION = "1.21.8"


@pytest.fixture
def catalog(make_record):
    return [
        make_record(id="fabric-api"),
        make_record(id="sodium", group="optional"),
        make_record(id="fabric-installer", kind="installer", client_support="unsupported"),
    ]


def test_places_every_artifact_byte_for_byte(tmp_path: Path, catalog, source_pool) -> None:
    pool = source_pool(catalog)
    expected = build_expected_set(catalog, VERSION)
    dest = tmp_path / "release" / VERSION

    result = execute_placement(expected, pool, dest)

    assert result.ok
    assert result.copied_count == 3
    assert (dest / "mods" / "fabric-api-1.jar").read_bytes() == b"jar:fabric-api"
    assert (dest / "mods" / "optional" / "sodium-1.jar").read_bytes() == b"jar:sodium"
    assert (dest / "mods" / "server" / "fabric-installer-1.jar").read_bytes() == b"jar:fabric-installer"


def test_missing_sources_are_collected_not_fatal(tmp_path: Path, catalog, source_pool) -> None:
    pool = source_pool(catalog[:1])
    expected = build_expected_set(catalog, VERSION)
    dest = tmp_path / "out"

    result = execute_placement(expected, pool, dest)

    assert result.copied == ["mods/fabric-api-1.jar"]
    assert [error.record_id for error in result.errors] == ["sodium", "fabric-installer"]
    assert all(isinstance(error, SourceArtifactMissingError) for error in result.errors)
    assert (dest / "mods" / "fabric-api-1.jar").is_file()
    with pytest.raises(PlacementFailedError) as excinfo:
        result.raise_for_errors()
    assert len(excinfo.value.errors) == 2
    assert "2 expected artifact(s) missing" in str(excinfo.value)


def test_source_pool_is_flat(tmp_path: Path, make_record) -> None:
    record = make_record(id="iris")
    pool = tmp_path / "download"
    (pool / "nested").mkdir(parents=True)
    (pool / "nested" / "iris-1.jar").write_bytes(b"jar")

    result = execute_placement(build_expected_set([record], VERSION), pool, tmp_path / "out")

    assert not result.ok
    assert result.errors[0].source == pool / "iris-1.jar"


def test_second_run_is_idempotent(tmp_path: Path, catalog, source_pool) -> None:
    pool = source_pool(catalog)
    expected = build_expected_set(catalog, VERSION)
    dest = tmp_path / "out"

    first = execute_placement(expected, pool, dest)
    first_listing = collect_tree_paths(dest)
    second = execute_placement(expected, pool, dest)

    assert first.copied == second.copied
    assert collect_tree_paths(dest) == first_listing
    for listing in (first_listing, collect_tree_paths(dest)):
        assert verify_release(expected.paths, listing).ok


def test_parallel_copy_matches_serial_order(tmp_path: Path, make_record, source_pool) -> None:
    catalog = [make_record(id=f"mod-{index:02d}") for index in range(12)]
    pool = source_pool(catalog)
    expected = build_expected_set(catalog, VERSION)

    result = execute_placement(expected, pool, tmp_path / "out", jobs=4)

    assert result.copied == sorted(expected.paths)
    assert len(collect_tree_paths(tmp_path / "out")) == 12
