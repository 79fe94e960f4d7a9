# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Immutable catalog snapshot handed to release builds."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .model import CatalogRecord, Group


def is_listed(record: CatalogRecord, *, include_blocked: bool = True, game_version: str | None = None) -> bool:
    """Return whether ``record`` is visible in inventory listings.

    Inventory visibility is deliberately independent from release placement:
    blocked rows stay listable unless the caller opts out.
    """

    if game_version is not None and record.game_version != game_version:
        return False
    return include_blocked or record.group is not Group.BLOCK


@dataclass(frozen=True, slots=True)
class CatalogSnapshot:
    """Catalog rows loaded once for a build and never mutated afterwards."""

    records: tuple[CatalogRecord, ...]
    source: Path | None = None

    @classmethod
    def of(cls, records: Iterable[CatalogRecord], *, source: Path | None = None) -> CatalogSnapshot:
        """Return a snapshot holding ``records`` in iteration order."""

        return cls(records=tuple(records), source=source)

    def __iter__(self) -> Iterator[CatalogRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def game_versions(self) -> tuple[str, ...]:
        """Return the distinct game versions present, in first-seen order."""

        return tuple(dict.fromkeys(record.game_version for record in self.records if record.game_version))

    def inventory(
        self,
        *,
        include_blocked: bool = True,
        game_version: str | None = None,
    ) -> tuple[CatalogRecord, ...]:
        """Return records visible in inventory views.

        Args:
            include_blocked: When ``False`` rows in the ``block`` group are hidden.
            game_version: Optional game version filter.

        Returns:
            tuple[CatalogRecord, ...]: Matching records in catalog order.
        """

        return tuple(
            record
            for record in self.records
            if is_listed(record, include_blocked=include_blocked, game_version=game_version)
        )


__all__ = ["CatalogSnapshot", "is_listed"]
