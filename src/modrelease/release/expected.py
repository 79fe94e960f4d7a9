# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Build the complete, conflict-free expected file set of a release."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from ..catalog.model import CatalogRecord
from .errors import DuplicateDestinationError, PlacementError
from .exclusions import DEFAULT_EXCLUSIONS, ExclusionPolicy
from .placement import DEFAULT_RESOLVER, PlacementCategory, PlacementResolver

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExpectedFileEntry:
    """One file a correct release must contain."""

    relative_path: str
    source_record_id: str
    artifact_filename: str
    category: PlacementCategory


@dataclass(frozen=True, slots=True)
class ExpectedSet:
    """Expected entries of one release, ordered by relative path."""

    game_version: str
    entries: tuple[ExpectedFileEntry, ...]
    _by_path: dict[str, ExpectedFileEntry] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Index entries by path, rejecting duplicates."""

        by_path: dict[str, ExpectedFileEntry] = {}
        for entry in self.entries:
            existing = by_path.get(entry.relative_path)
            if existing is not None:
                raise DuplicateDestinationError(
                    entry.relative_path,
                    existing.source_record_id,
                    entry.source_record_id,
                )
            by_path[entry.relative_path] = entry
        object.__setattr__(self, "entries", tuple(sorted(self.entries, key=lambda item: item.relative_path)))
        object.__setattr__(self, "_by_path", by_path)

    def __iter__(self) -> Iterator[ExpectedFileEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, relative_path: object) -> bool:
        return relative_path in self._by_path

    @property
    def paths(self) -> frozenset[str]:
        """Return every expected relative path."""

        return frozenset(self._by_path)

    def get(self, relative_path: str) -> ExpectedFileEntry | None:
        """Return the entry placed at ``relative_path`` if any."""

        return self._by_path.get(relative_path)

    def categories(self) -> Counter[PlacementCategory]:
        """Return how many entries land in each placement subtree."""

        return Counter(entry.category for entry in self.entries)


def build_expected_set(
    catalog: Iterable[CatalogRecord],
    target_version: str,
    *,
    resolver: PlacementResolver | None = None,
    exclusions: ExclusionPolicy = DEFAULT_EXCLUSIONS,
) -> ExpectedSet:
    """Resolve every catalog record for ``target_version``.

    Args:
        catalog: Catalog records, typically a :class:`CatalogSnapshot`.
        target_version: Game version the release is built for.
        resolver: Optional resolver overriding the default rule table.
        exclusions: Internal-artifact patterns no shipped path may match.

    Returns:
        ExpectedSet: Entries for every record that ships.

    Raises:
        DuplicateDestinationError: If two records resolve to the same path.
        PlacementError: If a shipped record cannot form a destination or its
            destination would be treated as an internal artifact.
    """

    active = resolver or DEFAULT_RESOLVER
    entries: list[ExpectedFileEntry] = []
    owners: dict[str, str] = {}
    for record in catalog:
        rule = active.match(record, target_version)
        if rule.category is None:
            LOGGER.debug("skipping %s: %s", record.id, rule.name)
            continue
        relative_path = active.resolve(record, target_version)
        if relative_path is None:  # pragma: no cover - category checked above
            continue
        if exclusions.matches(relative_path):
            raise PlacementError(
                f"record '{record.id}' resolves to {relative_path}, which matches an internal-artifact pattern",
            )
        if relative_path in owners:
            raise DuplicateDestinationError(relative_path, owners[relative_path], record.id)
        owners[relative_path] = record.id
        entries.append(
            ExpectedFileEntry(
                relative_path=relative_path,
                source_record_id=record.id,
                artifact_filename=record.artifact_filename,
                category=rule.category,
            ),
        )
    return ExpectedSet(game_version=target_version, entries=tuple(entries))


__all__ = ["ExpectedFileEntry", "ExpectedSet", "build_expected_set"]
