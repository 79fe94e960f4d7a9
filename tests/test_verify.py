# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the expected-vs-actual verifier."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from modrelease.release import (
    DEFAULT_EXCLUSIONS,
    ExclusionPolicy,
    VerificationMismatchError,
    collect_archive_paths,
    collect_tree_paths,
    find_excluded_entries,
    verify_release,
    write_diagnostics,
)

EXPECTED = {"mods/fabric-api-1.jar", "mods/optional/sodium-1.jar"}


def test_exact_match_is_ok() -> None:
    result = verify_release(EXPECTED, sorted(EXPECTED))

    assert result.ok
    result.raise_for_mismatch()


def test_missing_and_extra_paths() -> None:
    result = verify_release(EXPECTED, ["mods/fabric-api-1.jar", "mods/old-sodium.jar"])

    assert result.missing == {"mods/optional/sodium-1.jar"}
    assert result.extra == {"mods/old-sodium.jar"}
    with pytest.raises(VerificationMismatchError) as excinfo:
        result.raise_for_mismatch()
    assert "missing: mods/optional/sodium-1.jar" in str(excinfo.value)
    assert "extra: mods/old-sodium.jar" in str(excinfo.value)


def test_internal_artifacts_are_not_extra() -> None:
    actual = [
        *EXPECTED,
        "expected-release-files.txt",
        "actual-release-files.txt",
        "verification-extra.txt",
        "reconcile-2024/notes.md",
    ]

    result = verify_release(EXPECTED, actual)

    assert result.ok


def test_archive_mode_reports_leaked_internal_artifacts() -> None:
    actual = [*EXPECTED, "reconcile-2024/verification-missing.txt"]

    result = verify_release(EXPECTED, actual, forbid_excluded=True)

    assert result.extra == frozenset()
    assert result.leaked == {"reconcile-2024/verification-missing.txt"}
    assert not result.ok


def test_windows_separators_are_normalised() -> None:
    assert verify_release(EXPECTED, ["mods\\fabric-api-1.jar", "mods\\optional\\sodium-1.jar"]).ok


@pytest.mark.parametrize(
    ("path", "excluded"),
    [
        ("expected-release-files.txt", True),
        ("logs/actual-release-files.csv", True),
        ("verification-missing.json", True),
        ("reconcile-2024/verification-missing.txt", True),
        ("reconcile-tmp/mods/sodium.jar", True),
        ("mods/reconcile-helper.jar", False),
        ("mods/verification-tools.jar", False),
        ("mods/fabric-api-1.jar", False),
    ],
)
def test_default_exclusions(path: str, excluded: bool) -> None:
    assert DEFAULT_EXCLUSIONS.matches(path) is excluded


def test_exclusion_policy_extras() -> None:
    policy = ExclusionPolicy.with_extras(file_patterns=["*.log", " "], directory_patterns=["scratch"])

    assert policy.matches("build.log")
    assert policy.matches("scratch/file.jar")
    assert policy.matches("reconcile-1/file.jar")
    assert policy.file_patterns.count("*.log") == 1
    assert find_excluded_entries(["mods/a.jar", "build.log"], policy) == ["build.log"]


def test_collect_tree_paths(tmp_path: Path) -> None:
    (tmp_path / "mods" / "optional").mkdir(parents=True)
    (tmp_path / "mods" / "a.jar").write_bytes(b"a")
    (tmp_path / "mods" / "optional" / "b.jar").write_bytes(b"b")

    assert collect_tree_paths(tmp_path) == ["mods/a.jar", "mods/optional/b.jar"]
    assert collect_tree_paths(tmp_path / "absent") == []


def test_collect_archive_paths_skips_directories(tmp_path: Path) -> None:
    archive = tmp_path / "pack.zip"
    with zipfile.ZipFile(archive, "w") as handle:
        handle.writestr("mods/", b"")
        handle.writestr("mods/a.jar", b"a")

    assert collect_archive_paths(archive) == ["mods/a.jar"]


def test_write_diagnostics(tmp_path: Path) -> None:
    actual = ["mods/fabric-api-1.jar", "mods/stale.jar"]
    result = verify_release(EXPECTED, actual)

    written = write_diagnostics(tmp_path, expected_paths=EXPECTED, actual_paths=actual, result=result)

    assert {path.name for path in written} == {
        "expected-release-files.txt",
        "actual-release-files.txt",
        "verification-missing.txt",
        "verification-extra.txt",
    }
    assert (tmp_path / "verification-missing.txt").read_text(encoding="utf-8") == "mods/optional/sodium-1.jar\n"
    assert (tmp_path / "verification-extra.txt").read_text(encoding="utf-8") == "mods/stale.jar\n"


def test_write_diagnostics_removes_stale_diff_reports(tmp_path: Path) -> None:
    (tmp_path / "verification-missing.txt").write_text("old\n", encoding="utf-8")
    result = verify_release(EXPECTED, EXPECTED)

    write_diagnostics(tmp_path, expected_paths=EXPECTED, actual_paths=EXPECTED, result=result)

    assert not (tmp_path / "verification-missing.txt").exists()
    assert (tmp_path / "expected-release-files.txt").read_text(encoding="utf-8").splitlines() == sorted(EXPECTED)
