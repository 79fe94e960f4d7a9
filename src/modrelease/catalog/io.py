# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CSV helpers for reading and writing the modlist catalog."""

from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator
from pathlib import Path

from ..constants import CATALOG_COLUMNS, HASH_COLUMN
from .errors import CatalogError
from .model import CatalogRecord


def iter_catalog_rows(path: Path) -> Iterator[tuple[int, dict[str, str | None]]]:
    """Yield ``(row_number, row)`` pairs from the catalog CSV at ``path``.

    Args:
        path: Filesystem path to the catalog document.

    Returns:
        Iterator[tuple[int, dict[str, str | None]]]: One-based data row numbers
        paired with rows keyed by column name. Blank lines are skipped.

    Raises:
        FileNotFoundError: If the catalog file does not exist.
        CatalogError: If the header lacks a required column or the file is not
            valid UTF-8.
    """
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8-sig", newline="") as stream:
        try:
            yield from _read_rows(path, csv.DictReader(stream))
        except UnicodeDecodeError as exc:
            raise CatalogError(f"{path}: not valid UTF-8 at byte {exc.start}: {exc.reason}") from exc


def _read_rows(path: Path, reader: csv.DictReader[str]) -> Iterator[tuple[int, dict[str, str | None]]]:
    header = tuple(reader.fieldnames or ())
    missing = [column for column in CATALOG_COLUMNS if column not in header and column != HASH_COLUMN]
    if missing:
        raise CatalogError(f"{path}: catalog header is missing column(s): {', '.join(missing)}")
    for row_number, row in enumerate(reader, start=1):
        if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
            continue
        yield row_number, dict(row)


def write_catalog(path: Path, records: Iterable[CatalogRecord]) -> int:
    """Write ``records`` to ``path`` using the canonical column order.

    Args:
        path: Destination CSV path; parent directories are created.
        records: Records to serialise, written in iteration order.

    Returns:
        int: Number of rows written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", encoding="utf-8", newline="") as stream:
        writer = csv.DictWriter(stream, fieldnames=list(CATALOG_COLUMNS), lineterminator="\n")
        writer.writeheader()
        for record in records:
            writer.writerow(record.to_row())
            count += 1
    return count


__all__ = ["iter_catalog_rows", "write_catalog"]
