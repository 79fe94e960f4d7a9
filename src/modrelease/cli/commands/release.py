# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Release commands: planning, building, verifying and documenting a release."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ...catalog import CatalogLoader
from ...release import (
    VerificationMismatchError,
    VerificationResult,
    build_expected_set,
    build_manifest_rows,
    render_readme,
)
from ...release.pipeline import build_release, verify_archive, verify_tree
from ..options import (
    CATALOG_OPTION,
    DEBUG_OPTION,
    EMOJI_OPTION,
    GAME_VERSION_OPTION,
    JOBS_OPTION,
    OUTPUT_DIR_OPTION,
    ROOT_OPTION,
    SOURCE_DIR_OPTION,
    CommonOptions,
    build_context,
)
from ..shared import CLIError, CLILogger, exit_on_error
from ..typer_ext import SortedTyper
from .catalog import load_snapshot

VERIFICATION_EXIT_CODE = 2

KEEP_OUTPUT_OPTION = Annotated[
    bool,
    typer.Option("--keep-output", help="Place into the existing release tree instead of starting fresh."),
]
ARCHIVE_OPTION = Annotated[
    Path | None,
    typer.Option("--archive", "-a", help="Verify this archive instead of the release tree; relative to --root."),
]
OUTPUT_FILE_OPTION = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Write the README to this file instead of stdout."),
]


def _report_mismatch(result: VerificationResult, logger: CLILogger) -> None:
    for label, paths in (("missing", result.missing), ("extra", result.extra), ("leaked", result.leaked)):
        for path in sorted(paths):
            logger.fail(f"{label}: {path}")


def plan(
    root: ROOT_OPTION = Path("."),
    catalog: CATALOG_OPTION = None,
    game_version: GAME_VERSION_OPTION = None,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Print the expected file set of a release without touching the filesystem."""

    with exit_on_error(emoji=emoji):
        context = build_context(CommonOptions(root=root, catalog=catalog, emoji=emoji, debug=debug))
        version = context.require_game_version(game_version)
        snapshot = load_snapshot(CatalogLoader(context.config.catalog_path), context.logger)
        expected = build_expected_set(snapshot, version, exclusions=context.config.exclusion_policy())
        for entry in expected:
            context.logger.echo(f"{entry.relative_path}\t{entry.source_record_id}")
        counts = expected.categories()
        summary = ", ".join(f"{category.value}={count}" for category, count in sorted(counts.items()))
        context.logger.info(f"{len(expected)} expected file(s) for {version} ({summary or 'empty'})")


def build(
    root: ROOT_OPTION = Path("."),
    catalog: CATALOG_OPTION = None,
    game_version: GAME_VERSION_OPTION = None,
    source_dir: SOURCE_DIR_OPTION = None,
    output_dir: OUTPUT_DIR_OPTION = None,
    jobs: JOBS_OPTION = None,
    keep_output: KEEP_OUTPUT_OPTION = False,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Place, verify and package the release for a game version."""

    with exit_on_error(emoji=emoji):
        context = build_context(
            CommonOptions(root=root, catalog=catalog, emoji=emoji, debug=debug),
            source_dir=source_dir,
            output_dir=output_dir,
            jobs=jobs,
            fresh_output=False if keep_output else None,
        )
        logger = context.logger
        version = context.require_game_version(game_version)
        snapshot = load_snapshot(CatalogLoader(context.config.catalog_path), logger)
        logger.section(f"Release {version}")
        try:
            report = build_release(snapshot, version, config=context.config)
        except VerificationMismatchError as exc:
            _report_mismatch(exc.result, logger)
            raise CLIError(f"{exc.subject} failed verification", exit_code=VERIFICATION_EXIT_CODE) from exc
        logger.ok(f"placed {report.placement.copied_count} file(s) under {report.release_root}")
        logger.ok(f"wrote {report.package.archive_path} ({len(report.package.entries)} entries)")


def verify(
    root: ROOT_OPTION = Path("."),
    catalog: CATALOG_OPTION = None,
    game_version: GAME_VERSION_OPTION = None,
    output_dir: OUTPUT_DIR_OPTION = None,
    archive: ARCHIVE_OPTION = None,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Diff an existing release tree or archive against the expected file set."""

    with exit_on_error(emoji=emoji):
        context = build_context(
            CommonOptions(root=root, catalog=catalog, emoji=emoji, debug=debug),
            output_dir=output_dir,
        )
        logger = context.logger
        version = context.require_game_version(game_version)
        snapshot = load_snapshot(CatalogLoader(context.config.catalog_path), logger)
        expected = build_expected_set(snapshot, version, exclusions=context.config.exclusion_policy())
        try:
            if archive is not None:
                anchored = archive if archive.is_absolute() else root.resolve() / archive
                verify_archive(expected, anchored, context.config)
                subject = str(archive)
            else:
                verify_tree(expected, context.config.release_root(version), context.config)
                subject = str(context.config.release_root(version))
        except VerificationMismatchError as exc:
            _report_mismatch(exc.result, logger)
            raise CLIError(f"{exc.subject} failed verification", exit_code=VERIFICATION_EXIT_CODE) from exc
        logger.ok(f"{subject} matches the {len(expected)} expected file(s)")


def readme(
    root: ROOT_OPTION = Path("."),
    catalog: CATALOG_OPTION = None,
    game_version: GAME_VERSION_OPTION = None,
    output: OUTPUT_FILE_OPTION = None,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Render the README table of a release."""

    with exit_on_error(emoji=emoji):
        context = build_context(CommonOptions(root=root, catalog=catalog, emoji=emoji, debug=debug))
        version = context.require_game_version(game_version)
        snapshot = load_snapshot(CatalogLoader(context.config.catalog_path), context.logger)
        expected = build_expected_set(snapshot, version, exclusions=context.config.exclusion_policy())
        text = render_readme(build_manifest_rows(snapshot, expected), version)
        if output is None:
            context.logger.echo(text.rstrip("\n"))
            return
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        context.logger.ok(f"wrote {output}")


def register(app: SortedTyper) -> None:
    """Attach release commands to ``app``."""

    app.command("plan")(plan)
    app.command("build")(build)
    app.command("verify")(verify)
    app.command("readme")(readme)


__all__ = ["build", "plan", "readme", "register", "verify"]
