# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for building the expected file set."""

from __future__ import annotations

import pytest

from modrelease.catalog import CatalogSnapshot, Group, Kind
from modrelease.release import (
    DuplicateDestinationError,
    ExclusionPolicy,
    PlacementCategory,
    PlacementError,
    build_expected_set,
)

VERSION = "1.21.8"


def test_required_and_optional_scenario(make_record) -> None:
    catalog = CatalogSnapshot.of(
        [
            make_record(id="fabric-api", artifact_filename="fabric-api-1.jar"),
            make_record(id="sodium", group="optional", artifact_filename="sodium-1.jar"),
        ],
    )

    expected = build_expected_set(catalog, VERSION)

    assert expected.paths == {"mods/fabric-api-1.jar", "mods/optional/sodium-1.jar"}
    entry = expected.get("mods/optional/sodium-1.jar")
    assert entry is not None
    assert entry.source_record_id == "sodium"
    assert entry.category is PlacementCategory.OPTIONAL


def test_entries_are_sorted_by_path(make_record) -> None:
    catalog = [make_record(id="zoomify"), make_record(id="appleskin"), make_record(id="chunky", kind="server")]

    expected = build_expected_set(catalog, VERSION)

    assert [entry.relative_path for entry in expected] == [
        "mods/appleskin-1.jar",
        "mods/server/chunky-1.jar",
        "mods/zoomify-1.jar",
    ]
    assert expected.categories() == {PlacementCategory.ROOT: 2, PlacementCategory.SERVER: 1}


@pytest.mark.parametrize("version", ["1.21.8", "1.20.1", "1.21.9"])
def test_blocked_rows_never_emit(make_record, version: str) -> None:
    catalog = [
        make_record(id="optifine", group="block", game_version=version),
        make_record(id="server-core", group="block", kind=Kind.SERVER, game_version=version),
    ]

    assert len(build_expected_set(catalog, version)) == 0


def test_rows_for_other_versions_are_skipped(make_record) -> None:
    catalog = [make_record(id="sodium", game_version="1.20.1"), make_record(id="sodium")]

    expected = build_expected_set(catalog, VERSION)

    assert expected.paths == {"mods/sodium-1.jar"}
    assert expected.game_version == VERSION


def test_duplicate_destination_names_both_records(make_record) -> None:
    catalog = [
        make_record(id="sodium", artifact_filename="sodium.jar"),
        make_record(id="sodium-extra", group="required", artifact_filename="sodium.jar"),
    ]

    with pytest.raises(DuplicateDestinationError) as excinfo:
        build_expected_set(catalog, VERSION)

    assert excinfo.value.relative_path == "mods/sodium.jar"
    assert excinfo.value.record_ids == ("sodium", "sodium-extra")


def test_same_filename_in_different_subtrees_is_allowed(make_record) -> None:
    catalog = [
        make_record(id="lithium", artifact_filename="lithium.jar"),
        make_record(id="lithium-server", kind="server", artifact_filename="lithium.jar"),
    ]

    expected = build_expected_set(catalog, VERSION)

    assert expected.paths == {"mods/lithium.jar", "mods/server/lithium.jar"}


def test_admin_rows_join_optional_subtree(make_record) -> None:
    catalog = [make_record(id="reeses", group=Group.ADMIN, artifact_filename="reeses-1.jar")]

    assert build_expected_set(catalog, VERSION).paths == {"mods/optional/reeses-1.jar"}


def test_shipped_row_without_artifact_blocks_build(make_record) -> None:
    with pytest.raises(PlacementError):
        build_expected_set([make_record(artifact_filename="")], VERSION)


def test_artifact_named_like_an_internal_report_is_rejected(make_record) -> None:
    catalog = [make_record(id="verifier", artifact_filename="verification-extra.jar")]

    with pytest.raises(PlacementError, match="internal-artifact pattern"):
        build_expected_set(catalog, VERSION)


def test_configured_exclusions_apply_to_shipped_paths(make_record) -> None:
    policy = ExclusionPolicy.with_extras(file_patterns=["*.log.jar"])
    catalog = [make_record(id="debug", artifact_filename="debug.log.jar"), make_record(id="sodium")]

    with pytest.raises(PlacementError, match="'debug'"):
        build_expected_set(catalog, VERSION, exclusions=policy)
    assert build_expected_set(catalog[1:], VERSION, exclusions=policy).paths == {"mods/sodium-1.jar"}


def test_membership(make_record) -> None:
    expected = build_expected_set([make_record(id="sodium")], VERSION)

    assert "mods/sodium-1.jar" in expected
    assert "mods/optional/sodium-1.jar" not in expected
    assert expected.get("mods/missing.jar") is None
