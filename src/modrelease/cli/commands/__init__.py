# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Built-in CLI command registration."""

from __future__ import annotations

from ..typer_ext import SortedTyper
from . import catalog, release


def register_commands(app: SortedTyper) -> None:
    """Register the catalog and release commands on ``app``."""

    catalog.register(app)
    release.register(app)


__all__ = ["register_commands"]
