# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the README manifest rows and rendering."""

from __future__ import annotations

from modrelease.release import PlacementCategory, build_expected_set, build_manifest_rows, render_readme

VERSION = "1.21.8"


def test_category_follows_placement_subtree(make_record) -> None:
    catalog = [
        make_record(id="fabric-api"),
        make_record(id="sodium", group="optional"),
        make_record(id="reeses", group="admin"),
        make_record(id="fabric-installer", kind="installer", group="required", client_support="unsupported"),
        make_record(id="optifine", group="block"),
    ]
    expected = build_expected_set(catalog, VERSION)

    rows = build_manifest_rows(catalog, expected)

    assert [(row.id, row.category) for row in rows] == [
        ("fabric-api", PlacementCategory.ROOT),
        ("reeses", PlacementCategory.OPTIONAL),
        ("sodium", PlacementCategory.OPTIONAL),
        ("fabric-installer", PlacementCategory.SERVER),
    ]
    assert rows[-1].kind == "installer"


def test_render_readme_single_table(make_record) -> None:
    catalog = [
        make_record(id="fabric-api", version="0.129.0", description="Core | hooks"),
        make_record(id="complementary", kind="shaderpack", group="optional"),
    ]
    expected = build_expected_set(catalog, VERSION)

    text = render_readme(build_manifest_rows(catalog, expected), VERSION)
    lines = text.splitlines()

    assert lines[0] == "# Modpack for Minecraft 1.21.8"
    assert "| Name | ID | Version | Description | Category | Type |" in lines
    assert "| Fabric Api | fabric-api | 0.129.0 | Core \\| hooks | root | mod |" in lines
    assert sum(1 for line in lines if line.startswith("| Name |")) == 1
    assert any("| optional | shaderpack |" in line for line in lines)
