# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Root of the modrelease exception hierarchy."""

from __future__ import annotations


class ModReleaseError(RuntimeError):
    """Base class for every error raised by catalog and release operations."""


class ConfigError(ModReleaseError):
    """Raised when configuration input is invalid."""


__all__ = ("ConfigError", "ModReleaseError")
