# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for record integrity hashing."""

from __future__ import annotations

import dataclasses

import pytest

from modrelease.catalog import (
    CatalogRecord,
    CorruptRecordError,
    Group,
    Kind,
    Support,
    compute_record_hash,
    is_well_formed_hash,
    seal_record,
    validate_record,
)
from modrelease.catalog.integrity import canonical_payload

_FIELD_EDITS = {
    "group": Group.OPTIONAL,
    "kind": Kind.SHADERPACK,
    "id": "fabric-api-fork",
    "name": "Fabric API Fork",
    "artifact_filename": "fabric-api-2.jar",
    "client_support": Support.OPTIONAL,
    "server_support": Support.UNSUPPORTED,
    "game_version": "1.21.9",
    "version": "1.0.1",
    "description": "changed",
    "url": "https://example.invalid/fabric-api",
}


def test_hash_is_deterministic(make_record) -> None:
    record = make_record()

    first = compute_record_hash(record)
    second = compute_record_hash(record)

    assert first == second
    assert is_well_formed_hash(first)


def test_hash_ignores_stored_hash(make_record) -> None:
    record = make_record()
    tampered = record.with_hash("f" * 64)

    assert compute_record_hash(tampered) == compute_record_hash(record)


@pytest.mark.parametrize("field_name", sorted(_FIELD_EDITS))
def test_every_field_contributes_to_hash(make_record, field_name: str) -> None:
    record = make_record()
    edited = dataclasses.replace(record, **{field_name: _FIELD_EDITS[field_name]})

    assert compute_record_hash(edited) != compute_record_hash(record)


def test_hash_is_stable_across_unicode_normal_forms(make_record) -> None:
    composed = make_record(description="Caf\u00e9 shaders")
    decomposed = make_record(description="Cafe\u0301 shaders")

    assert compute_record_hash(composed) == compute_record_hash(decomposed)


def test_canonical_payload_excludes_hash_column(make_record) -> None:
    payload = canonical_payload(make_record()).decode("utf-8")

    assert "RecordHash" not in payload
    assert payload.startswith('[["Group","required"],["Type","mod"]')


def test_validate_accepts_sealed_record(make_record) -> None:
    validate_record(make_record())


def test_validate_rejects_stale_hash(make_record) -> None:
    record = make_record()
    edited = dataclasses.replace(record, version="9.9.9")

    with pytest.raises(CorruptRecordError, match="mismatch"):
        validate_record(edited)


@pytest.mark.parametrize("stored", ["", "abc", "A" * 64, "g" * 64, "0" * 63, "0" * 65])
def test_validate_rejects_malformed_hash(make_record, stored: str) -> None:
    record = make_record(integrity_hash=stored)

    with pytest.raises(CorruptRecordError, match="64 lowercase hex"):
        validate_record(record)


def test_validate_succeeds_iff_hash_matches(make_record) -> None:
    record = make_record()
    wrong = record.with_hash("0" * 64)

    assert record.integrity_hash == compute_record_hash(record)
    validate_record(record)
    with pytest.raises(CorruptRecordError):
        validate_record(wrong)


def test_seal_record_recomputes_hash(make_record) -> None:
    record = make_record(integrity_hash="")

    sealed = seal_record(record)

    assert isinstance(sealed, CatalogRecord)
    assert sealed.integrity_hash == compute_record_hash(record)
    assert dataclasses.replace(sealed, integrity_hash="") == record
