# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Public export surface for the modlist catalog."""

from __future__ import annotations

from .errors import (
    CatalogError,
    CatalogLoadError,
    CatalogValidationError,
    CorruptRecordError,
    RecordProblem,
)
from .integrity import compute_record_hash, is_well_formed_hash, seal_record, validate_record
from .io import iter_catalog_rows, write_catalog
from .loader import CatalogLoader, load_catalog
from .model import CatalogRecord, Group, Kind, Support
from .snapshot import CatalogSnapshot, is_listed

__all__ = [
    "CatalogError",
    "CatalogLoadError",
    "CatalogLoader",
    "CatalogRecord",
    "CatalogSnapshot",
    "CatalogValidationError",
    "CorruptRecordError",
    "Group",
    "Kind",
    "RecordProblem",
    "Support",
    "compute_record_hash",
    "is_listed",
    "is_well_formed_hash",
    "iter_catalog_rows",
    "load_catalog",
    "seal_record",
    "validate_record",
    "write_catalog",
]
