# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Compare the expected file set with what a release actually contains."""

from __future__ import annotations

import os
import zipfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..constants import (
    ACTUAL_FILES_REPORT,
    EXPECTED_FILES_REPORT,
    EXTRA_FILES_REPORT,
    MISSING_FILES_REPORT,
)
from .errors import VerificationMismatchError
from .exclusions import DEFAULT_EXCLUSIONS, ExclusionPolicy


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """Diff between expected and actual release paths.

    Attributes:
        missing: Expected paths absent from the release.
        extra: Present paths that are neither expected nor excluded.
        leaked: Excluded internal artifacts found where they must never
            appear; only populated when verifying an assembled archive.
    """

    missing: frozenset[str] = field(default_factory=frozenset)
    extra: frozenset[str] = field(default_factory=frozenset)
    leaked: frozenset[str] = field(default_factory=frozenset)

    @property
    def ok(self) -> bool:
        """Return ``True`` when the release matches the expected set exactly."""

        return not (self.missing or self.extra or self.leaked)

    def raise_for_mismatch(self, *, subject: str = "release tree") -> None:
        """Raise :class:`VerificationMismatchError` when the diff is non-empty."""

        if not self.ok:
            raise VerificationMismatchError(self, subject=subject)


def _normalise(path: str) -> str:
    return path.replace("\\", "/").lstrip("/")


def verify_release(
    expected_paths: Iterable[str],
    actual_paths: Iterable[str],
    *,
    exclusions: ExclusionPolicy = DEFAULT_EXCLUSIONS,
    forbid_excluded: bool = False,
) -> VerificationResult:
    """Diff ``expected_paths`` against ``actual_paths``.

    Args:
        expected_paths: Relative paths a correct release contains.
        actual_paths: Relative paths found in the release tree or archive.
        exclusions: Internal artifacts ignored when computing ``extra``.
        forbid_excluded: When ``True`` excluded artifacts present in
            ``actual_paths`` are reported as ``leaked``.

    Returns:
        VerificationResult: The missing/extra/leaked diff.
    """

    expected = {_normalise(path) for path in expected_paths}
    actual = {_normalise(path) for path in actual_paths}
    excluded = {path for path in actual if exclusions.matches(path)}
    return VerificationResult(
        missing=frozenset(expected - actual),
        extra=frozenset(actual - expected - excluded),
        leaked=frozenset(excluded - expected) if forbid_excluded else frozenset(),
    )


def collect_tree_paths(root: Path) -> list[str]:
    """Return every file beneath ``root`` as a sorted POSIX relative path."""

    if not root.is_dir():
        return []
    collected: list[str] = []
    for dirpath, _dirnames, filenames in os.walk(root):
        directory = Path(dirpath)
        collected.extend((directory / name).relative_to(root).as_posix() for name in filenames)
    return sorted(collected)


def collect_archive_paths(archive: Path) -> list[str]:
    """Return the file members of the zip ``archive`` as sorted POSIX paths."""

    with zipfile.ZipFile(archive) as handle:
        return sorted(_normalise(info.filename) for info in handle.infolist() if not info.is_dir())


def write_diagnostics(
    directory: Path,
    *,
    expected_paths: Iterable[str],
    actual_paths: Iterable[str],
    result: VerificationResult,
) -> list[Path]:
    """Write the expected/actual listings and any non-empty diff to ``directory``.

    Stale ``missing``/``extra`` reports from an earlier run are removed when
    the corresponding set is empty.

    Args:
        directory: Directory receiving the diagnostic files.
        expected_paths: Expected relative paths.
        actual_paths: Actual relative paths.
        result: Diff computed for the two listings.

    Returns:
        list[Path]: Files written by this call.
    """

    directory.mkdir(parents=True, exist_ok=True)
    reports = {
        EXPECTED_FILES_REPORT: sorted(set(expected_paths)),
        ACTUAL_FILES_REPORT: sorted(set(actual_paths)),
        MISSING_FILES_REPORT: sorted(result.missing),
        EXTRA_FILES_REPORT: sorted(result.extra | result.leaked),
    }
    written: list[Path] = []
    for name, lines in reports.items():
        target = directory / name
        if not lines and name in {MISSING_FILES_REPORT, EXTRA_FILES_REPORT}:
            target.unlink(missing_ok=True)
            continue
        target.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        written.append(target)
    return written


__all__ = [
    "VerificationResult",
    "collect_archive_paths",
    "collect_tree_paths",
    "verify_release",
    "write_diagnostics",
]
