# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Realise an expected set on disk from the flat source artifact pool."""

from __future__ import annotations

import logging
import shutil
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path

from .errors import PlacementFailedError, SourceArtifactMissingError
from .expected import ExpectedFileEntry, ExpectedSet

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class PlacementResult:
    """Outcome of one executor run."""

    copied: list[str] = field(default_factory=list)
    errors: list[SourceArtifactMissingError] = field(default_factory=list)

    @property
    def copied_count(self) -> int:
        """Return the number of artifacts written to the destination tree."""

        return len(self.copied)

    @property
    def ok(self) -> bool:
        """Return ``True`` when every expected artifact was placed."""

        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise :class:`PlacementFailedError` when any artifact was missing."""

        if self.errors:
            raise PlacementFailedError(self.errors)


def place_entry(entry: ExpectedFileEntry, *, source_dir: Path, dest_root: Path) -> SourceArtifactMissingError | None:
    """Copy the artifact of ``entry`` to its destination.

    Args:
        entry: Expected entry to realise.
        source_dir: Flat directory of downloaded artifacts keyed by filename.
        dest_root: Release root receiving the artifact.

    Returns:
        SourceArtifactMissingError | None: The error describing a missing
        source artifact, or ``None`` when the copy succeeded.
    """

    source = source_dir / entry.artifact_filename
    if not source.is_file():
        return SourceArtifactMissingError(entry.relative_path, entry.source_record_id, source)
    destination = dest_root.joinpath(*entry.relative_path.split("/"))
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, destination)
    LOGGER.debug("placed %s -> %s", source, entry.relative_path)
    return None


def execute_placement(
    expected: ExpectedSet,
    source_dir: Path,
    dest_root: Path,
    *,
    jobs: int = 1,
) -> PlacementResult:
    """Copy every expected artifact from ``source_dir`` into ``dest_root``.

    Missing artifacts do not stop the run; every artifact that can be found is
    placed before the collected errors are returned.

    Args:
        expected: Expected set describing the destinations.
        source_dir: Flat directory of already-downloaded artifacts.
        dest_root: Release root; created when absent.
        jobs: Number of concurrent copy workers.

    Returns:
        PlacementResult: Paths copied and errors, both in expected-set order.
    """

    dest_root.mkdir(parents=True, exist_ok=True)
    runner = partial(place_entry, source_dir=source_dir, dest_root=dest_root)
    entries = list(expected)
    if jobs > 1 and len(entries) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            outcomes = list(executor.map(runner, entries))
    else:
        outcomes = [runner(entry) for entry in entries]

    result = PlacementResult()
    for entry, error in zip(entries, outcomes, strict=True):
        if error is None:
            result.copied.append(entry.relative_path)
        else:
            LOGGER.warning("%s", error)
            result.errors.append(error)
    return result


__all__ = ["PlacementResult", "execute_placement", "place_entry"]
