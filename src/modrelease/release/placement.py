# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Ordered placement rules mapping catalog records to release paths.

Rules are evaluated top to bottom and the first matching rule decides the
outcome. A rule either excludes the record from the release (``category`` is
``None``) or places its artifact beneath the subtree of its category:

========  =====================  ====================================
order     rule                   outcome
========  =====================  ====================================
1         other-game-version     excluded
2         blocked                excluded
3         server-only            ``mods/server/<artifact>``
4         required               ``mods/<artifact>``
5         optional               ``mods/optional/<artifact>``
========  =====================  ====================================
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final

from ..catalog.model import CatalogRecord, Group, Kind, Support
from ..constants import MODS_DIR, OPTIONAL_DIR, SERVER_DIR
from .errors import PlacementError

PlacementPredicate = Callable[[CatalogRecord, str], bool]


class PlacementCategory(str, Enum):
    """Release subtree an artifact is placed in."""

    ROOT = "root"
    OPTIONAL = "optional"
    SERVER = "server"

    @property
    def subtree(self) -> str:
        """Return the POSIX directory, relative to the release root, of this category."""

        return _SUBTREES[self]


_SUBTREES: Final[dict[PlacementCategory, str]] = {
    PlacementCategory.ROOT: MODS_DIR,
    PlacementCategory.OPTIONAL: OPTIONAL_DIR,
    PlacementCategory.SERVER: SERVER_DIR,
}

SERVER_KINDS: Final[frozenset[Kind]] = frozenset({Kind.SERVER, Kind.INSTALLER})


@dataclass(frozen=True, slots=True)
class PlacementRule:
    """Single ``(predicate, destination)`` entry of the placement table."""

    name: str
    predicate: PlacementPredicate
    category: PlacementCategory | None

    def matches(self, record: CatalogRecord, target_version: str) -> bool:
        """Return ``True`` when the rule applies to ``record``."""

        return self.predicate(record, target_version)


def targets_other_version(record: CatalogRecord, target_version: str) -> bool:
    """Return ``True`` when ``record`` was resolved for a different game version."""

    return record.game_version != target_version


def is_blocked(record: CatalogRecord, _target_version: str) -> bool:
    """Return ``True`` for rows in the ``block`` group."""

    return record.group is Group.BLOCK


def is_server_only(record: CatalogRecord, _target_version: str) -> bool:
    """Return ``True`` for server/installer artifacts and rows without client support."""

    if record.kind in SERVER_KINDS:
        return True
    return record.client_support is Support.UNSUPPORTED and record.server_support is not Support.UNSUPPORTED


def is_required(record: CatalogRecord, _target_version: str) -> bool:
    """Return ``True`` for rows in the ``required`` group."""

    return record.group is Group.REQUIRED


def is_optional(record: CatalogRecord, _target_version: str) -> bool:
    """Return ``True`` for rows in the ``optional`` or ``admin`` groups."""

    return record.group.is_optional


DEFAULT_RULES: Final[tuple[PlacementRule, ...]] = (
    PlacementRule("other-game-version", targets_other_version, None),
    PlacementRule("blocked", is_blocked, None),
    PlacementRule("server-only", is_server_only, PlacementCategory.SERVER),
    PlacementRule("required", is_required, PlacementCategory.ROOT),
    PlacementRule("optional", is_optional, PlacementCategory.OPTIONAL),
)


class PlacementResolver:
    """Evaluate an ordered rule table against catalog records."""

    def __init__(self, rules: Sequence[PlacementRule] = DEFAULT_RULES) -> None:
        """Create a resolver over ``rules``.

        Args:
            rules: Rules evaluated in order; the first match wins.
        """

        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[PlacementRule, ...]:
        """Return the rule table in evaluation order."""

        return self._rules

    def match(self, record: CatalogRecord, target_version: str) -> PlacementRule:
        """Return the first rule matching ``record``.

        Raises:
            PlacementError: If no rule applies.
        """

        for rule in self._rules:
            if rule.matches(record, target_version):
                return rule
        raise PlacementError(f"no placement rule matched record '{record.id}'")

    def resolve_category(self, record: CatalogRecord, target_version: str) -> PlacementCategory | None:
        """Return the subtree category for ``record`` or ``None`` when it does not ship."""

        return self.match(record, target_version).category

    def resolve(self, record: CatalogRecord, target_version: str) -> str | None:
        """Return the relative destination of ``record`` for ``target_version``.

        Args:
            record: Catalog record to place.
            target_version: Game version the release is built for.

        Returns:
            str | None: POSIX path relative to the release root, or ``None``
            when the record is not part of the release.

        Raises:
            PlacementError: If the record ships but has no artifact filename.
        """

        category = self.resolve_category(record, target_version)
        if category is None:
            return None
        if not record.artifact_filename:
            raise PlacementError(
                f"record '{record.id}' is placed in {category.subtree}/ but has no artifact filename",
            )
        return f"{category.subtree}/{record.artifact_filename}"


DEFAULT_RESOLVER: Final[PlacementResolver] = PlacementResolver()


def resolve_placement(record: CatalogRecord, target_version: str) -> str | None:
    """Resolve ``record`` with the default rule table; see :meth:`PlacementResolver.resolve`."""

    return DEFAULT_RESOLVER.resolve(record, target_version)


__all__ = [
    "DEFAULT_RESOLVER",
    "DEFAULT_RULES",
    "PlacementCategory",
    "PlacementPredicate",
    "PlacementResolver",
    "PlacementRule",
    "SERVER_KINDS",
    "resolve_placement",
]
