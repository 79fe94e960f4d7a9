# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Compress a realised release tree into a deterministic zip archive."""

from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..constants import MANIFEST_FILE_NAME
from .exclusions import DEFAULT_EXCLUSIONS, ExclusionPolicy
from .verify import collect_tree_paths

LOGGER = logging.getLogger(__name__)

# Fixed member timestamp so identical trees produce identical archives.
_ZIP_EPOCH: Final[tuple[int, int, int, int, int, int]] = (1980, 1, 1, 0, 0, 0)
_FILE_MODE: Final[int] = 0o644 << 16


@dataclass(frozen=True, slots=True)
class AssembledPackage:
    """Archive written by :func:`assemble_package`."""

    archive_path: Path
    entries: tuple[str, ...]
    skipped: tuple[str, ...]


def _zip_info(name: str) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(name, date_time=_ZIP_EPOCH)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = _FILE_MODE
    return info


def assemble_package(
    release_root: Path,
    archive_path: Path,
    *,
    exclusions: ExclusionPolicy = DEFAULT_EXCLUSIONS,
    manifest_text: str | None = None,
) -> AssembledPackage:
    """Write ``release_root`` to ``archive_path``.

    Entries are written in sorted order with fixed timestamps. Every path
    matched by ``exclusions`` is left out even if it exists on disk, as is the
    archive itself when it lives under ``release_root``.

    Args:
        release_root: Directory produced by the placement executor.
        archive_path: Destination zip file; parent directories are created.
        exclusions: Predicate naming internal artifacts.
        manifest_text: Optional README contents stored at the archive root.

    Returns:
        AssembledPackage: Archive location plus included and skipped entries.
    """

    archive_path.parent.mkdir(parents=True, exist_ok=True)
    resolved_archive = archive_path.resolve()
    included: list[str] = []
    skipped: list[str] = []
    with zipfile.ZipFile(archive_path, "w") as handle:
        for relative in collect_tree_paths(release_root):
            source = release_root / relative
            if source.resolve() == resolved_archive or exclusions.matches(relative):
                skipped.append(relative)
                continue
            if manifest_text is not None and relative == MANIFEST_FILE_NAME:
                skipped.append(relative)
                continue
            handle.writestr(_zip_info(relative), source.read_bytes())
            included.append(relative)
        if manifest_text is not None:
            handle.writestr(_zip_info(MANIFEST_FILE_NAME), manifest_text.encode("utf-8"))
            included.append(MANIFEST_FILE_NAME)
    if skipped:
        LOGGER.debug("left %d internal file(s) out of %s", len(skipped), archive_path)
    return AssembledPackage(archive_path=archive_path, entries=tuple(sorted(included)), skipped=tuple(skipped))


__all__ = ["AssembledPackage", "assemble_package"]
