"""Exceptions raised by the router generator.

Every error is fatal for a generation run: nothing is retried and no
partial output is produced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from routergen.models import SelectorEntry


class RouterGenError(Exception):
    """Base class for all router generation errors."""


class ConfigurationError(RouterGenError):
    """Invalid generator input detected before any work begins."""


class ResolutionError(RouterGenError):
    """A module's selector list could not be obtained."""

    def __init__(self, message: str, module: str | None = None) -> None:
        super().__init__(message)
        self.module = module


class CollisionError(RouterGenError):
    """Two entries claim the same selector."""

    def __init__(self, first: SelectorEntry, second: SelectorEntry) -> None:
        msg = (
            f"Selector {first.selector_hex} is claimed by both "
            f"{first.module}.{first.signature} and "
            f"{second.module}.{second.signature}"
        )
        super().__init__(msg)
        self.first = first
        self.second = second
