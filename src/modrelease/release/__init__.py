# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Release composition and verification engine."""

from __future__ import annotations

from .assemble import AssembledPackage, assemble_package
from .errors import (
    DuplicateDestinationError,
    PlacementError,
    PlacementFailedError,
    ReleaseError,
    SourceArtifactMissingError,
    VerificationMismatchError,
)
from .exclusions import DEFAULT_EXCLUSIONS, ExclusionPolicy, find_excluded_entries
from .executor import PlacementResult, execute_placement
from .expected import ExpectedFileEntry, ExpectedSet, build_expected_set
from .manifest import ManifestRow, build_manifest_rows, render_readme
from .placement import (
    DEFAULT_RULES,
    PlacementCategory,
    PlacementResolver,
    PlacementRule,
    resolve_placement,
)
from .verify import (
    VerificationResult,
    collect_archive_paths,
    collect_tree_paths,
    verify_release,
    write_diagnostics,
)

__all__ = [
    "DEFAULT_EXCLUSIONS",
    "DEFAULT_RULES",
    "AssembledPackage",
    "DuplicateDestinationError",
    "ExclusionPolicy",
    "ExpectedFileEntry",
    "ExpectedSet",
    "ManifestRow",
    "PlacementCategory",
    "PlacementError",
    "PlacementFailedError",
    "PlacementResolver",
    "PlacementResult",
    "PlacementRule",
    "ReleaseError",
    "SourceArtifactMissingError",
    "VerificationMismatchError",
    "VerificationResult",
    "assemble_package",
    "build_expected_set",
    "build_manifest_rows",
    "collect_archive_paths",
    "collect_tree_paths",
    "execute_placement",
    "find_excluded_entries",
    "render_readme",
    "resolve_placement",
    "verify_release",
    "write_diagnostics",
]
