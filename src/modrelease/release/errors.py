# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exceptions raised while composing, realising and verifying a release."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import ModReleaseError

if TYPE_CHECKING:
    from .verify import VerificationResult


class ReleaseError(ModReleaseError):
    """Base class for release engine errors."""


class PlacementError(ReleaseError):
    """Raised when a record selected for a release cannot form a destination path."""


class DuplicateDestinationError(ReleaseError):
    """Raised when two records resolve to the same relative path."""

    def __init__(self, relative_path: str, first_id: str, second_id: str) -> None:
        super().__init__(
            f"records '{first_id}' and '{second_id}' both resolve to {relative_path}",
        )
        self.relative_path = relative_path
        self.record_ids = (first_id, second_id)


class SourceArtifactMissingError(ReleaseError):
    """Recorded when an expected artifact is absent from the source pool."""

    def __init__(self, relative_path: str, record_id: str, source: Path) -> None:
        super().__init__(f"{relative_path}: source artifact {source} for '{record_id}' not found")
        self.relative_path = relative_path
        self.record_id = record_id
        self.source = source


class PlacementFailedError(ReleaseError):
    """Aggregate raised once the executor has placed everything it could."""

    def __init__(self, errors: Sequence[SourceArtifactMissingError]) -> None:
        self.errors: tuple[SourceArtifactMissingError, ...] = tuple(errors)
        details = "\n".join(f"  - {error}" for error in self.errors)
        super().__init__(f"{len(self.errors)} expected artifact(s) missing from the source pool\n{details}")


class VerificationMismatchError(ReleaseError):
    """Raised when the realised release differs from the expected file set."""

    def __init__(self, result: VerificationResult, *, subject: str = "release tree") -> None:
        lines = [f"{subject} does not match the expected file set"]
        for label, paths in (("missing", result.missing), ("extra", result.extra), ("leaked", result.leaked)):
            lines.extend(f"  {label}: {path}" for path in sorted(paths))
        super().__init__("\n".join(lines))
        self.result = result
        self.subject = subject


__all__ = (
    "DuplicateDestinationError",
    "PlacementError",
    "PlacementFailedError",
    "ReleaseError",
    "SourceArtifactMissingError",
    "VerificationMismatchError",
)
