# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""End-to-end release build: expected set, placement, verification, archive."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ..catalog.model import CatalogRecord
from ..constants import MANIFEST_FILE_NAME
from .assemble import AssembledPackage, assemble_package
from .errors import ReleaseError
from .executor import PlacementResult, execute_placement
from .expected import ExpectedSet, build_expected_set
from .manifest import build_manifest_rows, render_readme
from .verify import (
    VerificationResult,
    collect_archive_paths,
    collect_tree_paths,
    verify_release,
    write_diagnostics,
)

if TYPE_CHECKING:
    from ..config import ReleaseConfig

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReleaseReport:
    """Summary of a successful release build."""

    game_version: str
    release_root: Path
    expected: ExpectedSet
    placement: PlacementResult
    tree_verification: VerificationResult
    archive_verification: VerificationResult
    package: AssembledPackage


def _prepare_release_root(release_root: Path, output_dir: Path, *, fresh: bool) -> None:
    resolved_root = release_root.resolve()
    if resolved_root.parent != output_dir.resolve():
        raise ReleaseError(f"release root {release_root} is not a direct child of {output_dir}")
    if fresh and release_root.exists():
        LOGGER.debug("removing previous release tree %s", release_root)
        shutil.rmtree(release_root)
    release_root.mkdir(parents=True, exist_ok=True)


def verify_tree(expected: ExpectedSet, release_root: Path, config: ReleaseConfig) -> VerificationResult:
    """Verify ``release_root`` against ``expected`` and write diagnostic listings.

    Listings are only written when ``release_root`` exists.

    Raises:
        VerificationMismatchError: If files are missing or unexpected.
    """

    actual = collect_tree_paths(release_root)
    result = verify_release(expected.paths, actual, exclusions=config.exclusion_policy())
    if release_root.is_dir():
        write_diagnostics(release_root, expected_paths=expected.paths, actual_paths=actual, result=result)
    result.raise_for_mismatch(subject=f"release tree {release_root}")
    return result


def verify_archive(expected: ExpectedSet, archive: Path, config: ReleaseConfig) -> VerificationResult:
    """Verify the listing of ``archive``; internal artifacts inside it are rejected.

    Raises:
        VerificationMismatchError: If entries are missing, unexpected or leaked.
    """

    actual = collect_archive_paths(archive)
    result = verify_release(
        expected.paths | {MANIFEST_FILE_NAME},
        actual,
        exclusions=config.exclusion_policy(),
        forbid_excluded=True,
    )
    result.raise_for_mismatch(subject=f"archive {archive}")
    return result


def build_release(
    catalog: Iterable[CatalogRecord],
    game_version: str,
    *,
    config: ReleaseConfig,
) -> ReleaseReport:
    """Build, verify and package the release for ``game_version``.

    Stages run strictly in sequence. Missing source artifacts are collected
    across the whole placement run before failing; duplicate destinations and
    verification mismatches halt the build immediately.

    Args:
        catalog: Immutable catalog snapshot loaded for this build.
        game_version: Game version to release.
        config: Anchored release configuration.

    Returns:
        ReleaseReport: Details of the verified release and its archive.

    Raises:
        ConfigError: If ``game_version`` cannot name its own release directory.
        DuplicateDestinationError: If two records resolve to one path.
        PlacementError: If a shipped artifact would be dropped as an internal file.
        ReleaseError: If the release root escapes the output directory.
        PlacementFailedError: If expected artifacts are absent from the pool.
        VerificationMismatchError: If the tree or archive differs from the expected set.
    """

    release_root = config.release_root(game_version)
    records = tuple(catalog)
    expected = build_expected_set(records, game_version, exclusions=config.exclusion_policy())
    LOGGER.info("expected %d file(s) for %s", len(expected), game_version)

    _prepare_release_root(release_root, config.output_dir, fresh=config.fresh_output)
    placement = execute_placement(expected, config.source_dir, release_root, jobs=config.jobs)
    placement.raise_for_errors()

    tree_result = verify_tree(expected, release_root, config)

    readme = render_readme(build_manifest_rows(records, expected), game_version)
    package = assemble_package(
        release_root,
        config.archive_path(game_version),
        exclusions=config.exclusion_policy(),
        manifest_text=readme,
    )
    archive_result = verify_archive(expected, package.archive_path, config)

    return ReleaseReport(
        game_version=game_version,
        release_root=release_root,
        expected=expected,
        placement=placement,
        tree_verification=tree_result,
        archive_verification=archive_result,
        package=package,
    )


__all__ = ["ReleaseReport", "build_release", "verify_archive", "verify_tree"]
