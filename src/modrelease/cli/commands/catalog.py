# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Catalog commands: integrity validation, re-sealing and inventory listing."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from ...catalog import (
    CatalogLoader,
    CatalogLoadError,
    CatalogSnapshot,
    seal_record,
    write_catalog,
)
from ..options import (
    CATALOG_OPTION,
    DEBUG_OPTION,
    EMOJI_OPTION,
    GAME_VERSION_OPTION,
    ROOT_OPTION,
    CommonOptions,
    build_context,
)
from ..shared import CLIError, CLILogger, exit_on_error
from ..typer_ext import SortedTyper

CHECK_OPTION = Annotated[
    bool,
    typer.Option("--check", help="Report rows whose hash would change without rewriting the catalog."),
]
HIDE_BLOCKED_OPTION = Annotated[
    bool,
    typer.Option("--hide-blocked", help="Hide rows in the block group."),
]


def report_load_error(error: CatalogLoadError, logger: CLILogger) -> CLIError:
    """Log every problem row of ``error`` and return the matching :class:`CLIError`."""

    for problem in error.problems:
        logger.fail(str(problem))
    return CLIError(f"catalog rejected: {len(error.problems)} problem row(s), {len(error.corrupt)} corrupt")


def load_snapshot(loader: CatalogLoader, logger: CLILogger) -> CatalogSnapshot:
    """Load the catalog, converting an aggregate load failure into a :class:`CLIError`."""

    try:
        return loader.load()
    except CatalogLoadError as exc:
        raise report_load_error(exc, logger) from exc


def validate(
    root: ROOT_OPTION = Path("."),
    catalog: CATALOG_OPTION = None,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Check that every catalog row is well formed and carries a matching integrity hash."""

    with exit_on_error(emoji=emoji):
        context = build_context(CommonOptions(root=root, catalog=catalog, emoji=emoji, debug=debug))
        snapshot = load_snapshot(CatalogLoader(context.config.catalog_path), context.logger)
        context.logger.ok(f"{len(snapshot)} catalog row(s) intact")


def seal(
    root: ROOT_OPTION = Path("."),
    catalog: CATALOG_OPTION = None,
    check: CHECK_OPTION = False,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Recompute the integrity hash of every row after intentional edits."""

    with exit_on_error(emoji=emoji):
        context = build_context(CommonOptions(root=root, catalog=catalog, emoji=emoji, debug=debug))
        logger = context.logger
        path = context.config.catalog_path
        records, problems = CatalogLoader(path).scan(verify_integrity=False)
        if problems:
            raise report_load_error(CatalogLoadError(problems), logger)
        sealed = [seal_record(record) for record in records]
        changed = [before.id for before, after in zip(records, sealed, strict=True) if before != after]
        if check:
            for record_id in changed:
                logger.warn(f"hash out of date: {record_id}")
            if changed:
                raise CLIError(f"{len(changed)} row(s) need sealing")
            logger.ok("all integrity hashes are current")
            return
        write_catalog(path, sealed)
        logger.ok(f"sealed {len(sealed)} row(s), {len(changed)} hash(es) updated")


def list_records(
    root: ROOT_OPTION = Path("."),
    catalog: CATALOG_OPTION = None,
    game_version: GAME_VERSION_OPTION = None,
    hide_blocked: HIDE_BLOCKED_OPTION = False,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """List catalog rows, including blocked ones unless --hide-blocked is given."""

    with exit_on_error(emoji=emoji):
        context = build_context(CommonOptions(root=root, catalog=catalog, emoji=emoji, debug=debug))
        snapshot = load_snapshot(CatalogLoader(context.config.catalog_path), context.logger)
        rows = snapshot.inventory(include_blocked=not hide_blocked, game_version=game_version)
        table = Table(title=f"{len(rows)} catalog row(s)", show_lines=False)
        for column in ("ID", "Name", "Group", "Type", "GameVersion", "Jar"):
            table.add_column(column, overflow="fold")
        for record in rows:
            table.add_row(
                record.id,
                record.name,
                record.group.value,
                record.kind.value,
                record.game_version,
                record.artifact_filename,
            )
        context.logger.console.print(table)


def register(app: SortedTyper) -> None:
    """Attach catalog commands to ``app``."""

    app.command("validate")(validate)
    app.command("seal")(seal)
    app.command("list")(list_records)


__all__ = ["list_records", "load_snapshot", "register", "report_load_error", "seal", "validate"]
