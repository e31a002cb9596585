"""Keeps the active view format valid as the format list changes."""

import logging

from opguard.domain.enums import ViewFormatKey
from opguard.domain.models.expense import ViewFormat

logger = logging.getLogger(__name__)


class UnknownViewFormatError(ValueError):
    """Selected format key is not among the currently available formats."""


def reconcile_selection(previous: ViewFormatKey | str | None, formats: list[ViewFormat]) -> ViewFormatKey | None:
    """Keep the previous key if still offered, else the first format, else None."""
    keys = [f.key for f in formats]
    if previous is not None and previous in keys:
        return ViewFormatKey(previous)
    return keys[0] if keys else None


class ViewFormatSelector:
    """Active format is always a member of `formats`, or None when there are none."""

    def __init__(self, formats: list[ViewFormat] | None = None) -> None:
        self._formats: list[ViewFormat] = []
        self._active: ViewFormatKey | None = None
        self.update_formats(formats or [])

    @property
    def formats(self) -> list[ViewFormat]:
        return list(self._formats)

    @property
    def active_key(self) -> ViewFormatKey | None:
        return self._active

    @property
    def active(self) -> ViewFormat | None:
        for f in self._formats:
            if f.key == self._active:
                return f
        return None

    def update_formats(self, formats: list[ViewFormat]) -> ViewFormatKey | None:
        self._formats = list(formats)
        self._active = reconcile_selection(self._active, self._formats)
        return self._active

    def select(self, key: ViewFormatKey | str) -> ViewFormatKey:
        """Explicit user choice. Non-member keys are rejected and the selection is kept."""
        for f in self._formats:
            if f.key == key:
                self._active = f.key
                return f.key
        logger.warning("Rejected view format %r; available: %s", key, [f.key.value for f in self._formats])
        raise UnknownViewFormatError(f"View format {key!r} is not available")
