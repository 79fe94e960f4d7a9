# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exceptions raised while parsing, validating and loading catalog rows."""

from __future__ import annotations

from collections.abc import Sequence

from ..errors import ModReleaseError


class CatalogError(ModReleaseError):
    """Base class for catalog errors."""


class RecordProblem(CatalogError):
    """Problem attributed to a single catalog row.

    Attributes:
        record_id: Identifier of the offending record when known.
        row_number: One-based data row number within the catalog file.
        reason: Human-readable description of the problem.
    """

    def __init__(self, reason: str, *, record_id: str | None = None, row_number: int | None = None) -> None:
        location = []
        if row_number is not None:
            location.append(f"row {row_number}")
        if record_id:
            location.append(f"'{record_id}'")
        prefix = " ".join(location)
        super().__init__(f"{prefix}: {reason}" if prefix else reason)
        self.record_id = record_id
        self.row_number = row_number
        self.reason = reason


class CatalogValidationError(RecordProblem):
    """Raised when a catalog row carries malformed field values."""


class CorruptRecordError(RecordProblem):
    """Raised when a row's integrity hash is malformed or does not match its fields."""


class CatalogLoadError(CatalogError):
    """Aggregate of every row problem encountered during one catalog load."""

    def __init__(self, problems: Sequence[RecordProblem]) -> None:
        self.problems: tuple[RecordProblem, ...] = tuple(problems)
        corrupt = sum(1 for problem in self.problems if isinstance(problem, CorruptRecordError))
        summary = f"catalog rejected: {len(self.problems)} problem row(s), {corrupt} corrupt"
        details = "\n".join(f"  - {problem}" for problem in self.problems)
        super().__init__(f"{summary}\n{details}" if details else summary)

    @property
    def corrupt(self) -> tuple[CorruptRecordError, ...]:
        """Return the subset of problems caused by integrity failures."""

        return tuple(problem for problem in self.problems if isinstance(problem, CorruptRecordError))


__all__ = (
    "CatalogError",
    "CatalogLoadError",
    "CatalogValidationError",
    "CorruptRecordError",
    "RecordProblem",
)
