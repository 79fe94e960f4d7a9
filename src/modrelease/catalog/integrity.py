# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Integrity hashing for catalog records."""

from __future__ import annotations

import hashlib
import json
import re
import unicodedata
from typing import Final

from .errors import CorruptRecordError
from .model import CatalogRecord

HASH_PATTERN: Final[re.Pattern[str]] = re.compile(r"[0-9a-f]{64}")


def canonical_payload(record: CatalogRecord) -> bytes:
    """Return the canonical byte serialisation covered by the integrity hash.

    Every field except the hash participates, in declaration order, as a
    ``[column, value]`` pair. Text is NFC normalised and encoded as UTF-8 so the
    digest does not depend on platform, locale or input method.

    Args:
        record: Record whose fields should be serialised.

    Returns:
        bytes: Compact JSON document describing the record.
    """

    pairs = [[column, unicodedata.normalize("NFC", value)] for column, value in record.hashed_fields()]
    return json.dumps(pairs, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def compute_record_hash(record: CatalogRecord) -> str:
    """Return the hex-encoded SHA-256 digest of ``record``'s canonical payload."""

    return hashlib.sha256(canonical_payload(record)).hexdigest()


def is_well_formed_hash(value: str) -> bool:
    """Return ``True`` when ``value`` is exactly 64 lowercase hexadecimal characters."""

    return HASH_PATTERN.fullmatch(value) is not None


def validate_record(record: CatalogRecord, *, row_number: int | None = None) -> None:
    """Ensure the stored hash of ``record`` matches its current field values.

    Args:
        record: Record to check.
        row_number: Optional catalog row number used in error messages.

    Raises:
        CorruptRecordError: If the stored hash is malformed or stale.
    """

    stored = record.integrity_hash
    if not is_well_formed_hash(stored):
        raise CorruptRecordError(
            f"integrity hash {stored!r} is not 64 lowercase hex characters",
            record_id=record.id,
            row_number=row_number,
        )
    expected = compute_record_hash(record)
    if stored != expected:
        raise CorruptRecordError(
            f"integrity hash mismatch (stored {stored}, computed {expected})",
            record_id=record.id,
            row_number=row_number,
        )


def seal_record(record: CatalogRecord) -> CatalogRecord:
    """Return ``record`` carrying a freshly computed integrity hash."""

    return record.with_hash(compute_record_hash(record))


__all__ = [
    "HASH_PATTERN",
    "canonical_payload",
    "compute_record_hash",
    "is_well_formed_hash",
    "seal_record",
    "validate_record",
]
