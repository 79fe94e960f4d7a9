# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""README table describing the contents of a release."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from ..catalog.model import CatalogRecord
from .expected import ExpectedSet
from .placement import DEFAULT_RESOLVER, PlacementCategory, PlacementResolver

MANIFEST_COLUMNS: Final[tuple[str, ...]] = ("Name", "ID", "Version", "Description", "Category", "Type")
_CATEGORY_ORDER: Final[dict[PlacementCategory, int]] = {category: index for index, category in enumerate(PlacementCategory)}


@dataclass(frozen=True, slots=True)
class ManifestRow:
    """One line of the README table."""

    name: str
    id: str
    version: str
    description: str
    category: PlacementCategory
    kind: str

    def cells(self) -> tuple[str, ...]:
        """Return the row's cells in :data:`MANIFEST_COLUMNS` order."""

        return (self.name, self.id, self.version, self.description, self.category.value, self.kind)


def build_manifest_rows(
    catalog: Iterable[CatalogRecord],
    expected: ExpectedSet,
    *,
    resolver: PlacementResolver | None = None,
) -> list[ManifestRow]:
    """Return README rows for every record that ships in ``expected``.

    The category reflects the subtree the artifact is placed in, so a
    required server component is listed as ``server``, not ``root``.

    Args:
        catalog: Catalog records the expected set was built from.
        expected: Expected set of the release.
        resolver: Resolver used to build ``expected``.

    Returns:
        list[ManifestRow]: Rows ordered by category (root, optional, server)
        then case-insensitive name.
    """

    active = resolver or DEFAULT_RESOLVER
    rows: list[ManifestRow] = []
    for record in catalog:
        relative_path = active.resolve(record, expected.game_version)
        entry = expected.get(relative_path) if relative_path is not None else None
        if entry is None or entry.source_record_id != record.id:
            continue
        rows.append(
            ManifestRow(
                name=record.name,
                id=record.id,
                version=record.version,
                description=record.description,
                category=entry.category,
                kind=record.kind.value,
            ),
        )
    rows.sort(key=lambda row: (_CATEGORY_ORDER[row.category], row.name.casefold(), row.id))
    return rows


def _escape_cell(value: str) -> str:
    return " ".join(value.replace("|", "\\|").split())


def render_readme(rows: Iterable[ManifestRow], game_version: str) -> str:
    """Render a markdown README with one combined table of ``rows``."""

    materialised = list(rows)
    lines = [
        f"# Modpack for Minecraft {game_version}",
        "",
        f"{len(materialised)} file(s) in this release.",
        "",
        "| " + " | ".join(MANIFEST_COLUMNS) + " |",
        "| " + " | ".join("---" for _ in MANIFEST_COLUMNS) + " |",
    ]
    lines.extend("| " + " | ".join(_escape_cell(cell) for cell in row.cells()) + " |" for row in materialised)
    return "\n".join(lines) + "\n"


__all__ = ["MANIFEST_COLUMNS", "ManifestRow", "build_manifest_rows", "render_readme"]
