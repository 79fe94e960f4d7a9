# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Load the catalog CSV into an immutable, integrity-checked snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import CatalogLoadError, CatalogValidationError, CorruptRecordError, RecordProblem
from .integrity import validate_record
from .io import iter_catalog_rows
from .model import CatalogRecord
from .snapshot import CatalogSnapshot

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class CatalogLoader:
    """Read every catalog row and reject the load when any row is defective."""

    path: Path

    def load(self, *, verify_integrity: bool = True) -> CatalogSnapshot:
        """Parse the catalog and return a snapshot.

        Every row is checked before failing so a single load reports the
        complete set of malformed and corrupt rows.

        Args:
            verify_integrity: When ``False`` stored hashes are not checked;
                used by the ``seal`` workflow that recomputes them.

        Returns:
            CatalogSnapshot: Snapshot of all rows in file order.

        Raises:
            CatalogLoadError: If at least one row is malformed or corrupt.
        """

        records, problems = self.scan(verify_integrity=verify_integrity)
        if problems:
            raise CatalogLoadError(problems)
        LOGGER.debug("loaded %d catalog rows from %s", len(records), self.path)
        return CatalogSnapshot.of(records, source=self.path)

    def scan(self, *, verify_integrity: bool = True) -> tuple[list[CatalogRecord], list[RecordProblem]]:
        """Return parsed records alongside every row problem encountered.

        Args:
            verify_integrity: Whether stored hashes are validated.

        Returns:
            tuple[list[CatalogRecord], list[RecordProblem]]: Well-formed,
            intact records and the problems of the remaining rows.
        """

        records: list[CatalogRecord] = []
        problems: list[RecordProblem] = []
        for row_number, row in iter_catalog_rows(self.path):
            try:
                record = CatalogRecord.from_row(row, row_number=row_number)
            except CatalogValidationError as exc:
                problems.append(exc)
                continue
            if verify_integrity:
                try:
                    validate_record(record, row_number=row_number)
                except CorruptRecordError as exc:
                    LOGGER.warning("corrupt catalog row: %s", exc)
                    problems.append(exc)
                    continue
            records.append(record)
        return records, problems


def load_catalog(path: Path, *, verify_integrity: bool = True) -> CatalogSnapshot:
    """Return the snapshot stored at ``path``; see :meth:`CatalogLoader.load`."""

    return CatalogLoader(path).load(verify_integrity=verify_integrity)


__all__ = ["CatalogLoader", "load_catalog"]
