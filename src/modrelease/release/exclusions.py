# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Predicate identifying internal artifacts that never ship in a release."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import PurePosixPath

from ..constants import DEFAULT_EXCLUDED_DIRECTORY_PATTERNS, DEFAULT_EXCLUDED_FILE_PATTERNS


@dataclass(frozen=True, slots=True)
class ExclusionPolicy:
    """Glob patterns matching verification diagnostics and reconcile scratch trees.

    ``file_patterns`` are matched against the final path component and
    ``directory_patterns`` against every parent directory component.
    """

    file_patterns: tuple[str, ...] = DEFAULT_EXCLUDED_FILE_PATTERNS
    directory_patterns: tuple[str, ...] = DEFAULT_EXCLUDED_DIRECTORY_PATTERNS

    @classmethod
    def with_extras(
        cls,
        *,
        file_patterns: Sequence[str] = (),
        directory_patterns: Sequence[str] = (),
    ) -> ExclusionPolicy:
        """Return the default policy extended with additional patterns."""

        return cls(
            file_patterns=_merge_unique(DEFAULT_EXCLUDED_FILE_PATTERNS, file_patterns),
            directory_patterns=_merge_unique(DEFAULT_EXCLUDED_DIRECTORY_PATTERNS, directory_patterns),
        )

    def matches(self, relative_path: str) -> bool:
        """Return ``True`` when ``relative_path`` is an internal artifact.

        Args:
            relative_path: POSIX path relative to a release root or archive.

        Returns:
            bool: ``True`` if the file name or any parent directory matches.
        """

        parts = PurePosixPath(relative_path.replace("\\", "/")).parts
        if not parts:
            return False
        *directories, name = parts
        if any(fnmatchcase(name, pattern) for pattern in self.file_patterns):
            return True
        return any(fnmatchcase(part, pattern) for part in directories for pattern in self.directory_patterns)

    def filter(self, paths: Iterable[str]) -> list[str]:
        """Return the sorted subset of ``paths`` matched by the policy."""

        return sorted(path for path in paths if self.matches(path))


DEFAULT_EXCLUSIONS = ExclusionPolicy()


def find_excluded_entries(paths: Iterable[str], policy: ExclusionPolicy = DEFAULT_EXCLUSIONS) -> list[str]:
    """Return the entries of an archive listing that must never ship."""

    return policy.filter(paths)


def _merge_unique(primary: Sequence[str], extras: Sequence[str]) -> tuple[str, ...]:
    """Return ``primary`` followed by new, non-blank ``extras``."""

    merged: list[str] = []
    for candidate in (*primary, *extras):
        trimmed = candidate.strip()
        if trimmed and trimmed not in merged:
            merged.append(trimmed)
    return tuple(merged)


__all__ = ["DEFAULT_EXCLUSIONS", "ExclusionPolicy", "find_excluded_entries"]
