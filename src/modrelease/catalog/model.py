# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Catalog record model and the enumerations describing each row."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Final, TypeVar

from ..constants import CATALOG_COLUMNS
from .errors import CatalogValidationError

_EnumT = TypeVar("_EnumT", bound="_CatalogEnum")


class _CatalogEnum(str, Enum):
    """String enum parsed case-insensitively from catalog text."""

    @classmethod
    def parse(cls: type[_EnumT], value: str | _EnumT, *, key: str) -> _EnumT:
        """Return the member matching ``value``.

        Args:
            value: Raw catalog text or an existing member.
            key: Column name used in error messages.

        Returns:
            The enum member whose value matches ``value``.

        Raises:
            CatalogValidationError: If ``value`` names no member.
        """

        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        allowed = ", ".join(member.value for member in cls)
        raise CatalogValidationError(f"unknown {key} {value!r} (expected one of: {allowed})")


class Group(_CatalogEnum):
    """Install group a catalog row belongs to."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    ADMIN = "admin"
    BLOCK = "block"

    @property
    def is_optional(self) -> bool:
        """Return ``True`` for groups installed as optional content."""

        return self in (Group.OPTIONAL, Group.ADMIN)


class Kind(_CatalogEnum):
    """Artifact type of a catalog row."""

    MOD = "mod"
    SHADERPACK = "shaderpack"
    RESOURCEPACK = "resourcepack"
    DATAPACK = "datapack"
    SERVER = "server"
    LAUNCHER = "launcher"
    INSTALLER = "installer"


class Support(_CatalogEnum):
    """Whether an artifact is meaningful on one side of the game."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    UNSUPPORTED = "unsupported"


_FORBIDDEN_FILENAME_CHARS: Final[tuple[str, ...]] = ("/", "\\")


@dataclass(frozen=True, slots=True)
class CatalogRecord:
    """One row of the modlist catalog.

    Field declaration order is significant: it is the canonical order used by
    the integrity hash and the column order of the CSV document.
    """

    group: Group
    kind: Kind
    id: str
    name: str
    artifact_filename: str
    client_support: Support
    server_support: Support
    game_version: str
    version: str = ""
    description: str = ""
    url: str = ""
    integrity_hash: str = ""

    def __post_init__(self) -> None:
        """Coerce enum fields and enforce the per-row invariants."""

        try:
            object.__setattr__(self, "group", Group.parse(self.group, key="Group"))
            object.__setattr__(self, "kind", Kind.parse(self.kind, key="Type"))
            object.__setattr__(self, "client_support", Support.parse(self.client_support, key="ClientSide"))
            object.__setattr__(self, "server_support", Support.parse(self.server_support, key="ServerSide"))
        except CatalogValidationError as exc:
            raise CatalogValidationError(exc.reason, record_id=self.id or None) from exc
        if not self.id.strip():
            raise CatalogValidationError("expected 'ID' to be a non-empty string")
        if not self.name.strip():
            raise CatalogValidationError("expected 'Name' to be a non-empty string", record_id=self.id)
        filename = self.artifact_filename
        if any(char in filename for char in _FORBIDDEN_FILENAME_CHARS) or filename in {".", ".."}:
            raise CatalogValidationError(
                f"artifact filename {filename!r} must be a bare file name",
                record_id=self.id,
            )

    @classmethod
    def from_row(cls, row: Mapping[str, str | None], *, row_number: int | None = None) -> CatalogRecord:
        """Build a record from a CSV row keyed by catalog column names.

        Args:
            row: Mapping of column name to raw cell text.
            row_number: One-based data row number used in error messages.

        Returns:
            CatalogRecord: Parsed record; the stored hash is carried verbatim.

        Raises:
            CatalogValidationError: If the row carries malformed values.
        """

        values = {field_name: (row.get(column) or "").strip() for field_name, column in FIELD_COLUMNS.items()}
        try:
            return cls(**values)  # type: ignore[arg-type]
        except CatalogValidationError as exc:
            raise CatalogValidationError(
                exc.reason,
                record_id=exc.record_id or values["id"] or None,
                row_number=row_number,
            ) from exc

    def to_row(self) -> dict[str, str]:
        """Return the record as a CSV row keyed by catalog column names."""

        row: dict[str, str] = {}
        for field_name, column in FIELD_COLUMNS.items():
            value = getattr(self, field_name)
            row[column] = value.value if isinstance(value, Enum) else value
        return row

    def hashed_fields(self) -> tuple[tuple[str, str], ...]:
        """Return ``(column, text)`` pairs covered by the integrity hash, in canonical order."""

        pairs: list[tuple[str, str]] = []
        for field_name, column in FIELD_COLUMNS.items():
            if field_name == "integrity_hash":
                continue
            value = getattr(self, field_name)
            pairs.append((column, value.value if isinstance(value, Enum) else value))
        return tuple(pairs)

    def with_hash(self, digest: str) -> CatalogRecord:
        """Return a copy of the record carrying ``digest`` as its integrity hash."""

        return replace(self, integrity_hash=digest)


FIELD_COLUMNS: Final[dict[str, str]] = dict(
    zip(
        (item.name for item in fields(CatalogRecord)),
        CATALOG_COLUMNS,
        strict=True,
    ),
)


__all__ = [
    "FIELD_COLUMNS",
    "CatalogRecord",
    "Group",
    "Kind",
    "Support",
]
