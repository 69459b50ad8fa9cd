"""Mask mode enum.

A mask is either an inclusion set or an exclusion set. On the wire the
mode is encoded per field as ``1`` (include) or ``0`` (exclude).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class FieldMaskType(StrEnum):
    """How a mask's entries are interpreted."""

    INCLUDE = "include"
    EXCLUDE = "exclude"

    @property
    def marker(self) -> int:
        """Wire marker for fields of this mode."""
        return 1 if self is FieldMaskType.INCLUDE else 0

    @classmethod
    def from_marker(cls, value: Any) -> FieldMaskType:
        """Map a marker value to a mode by truthiness."""
        return cls.INCLUDE if value else cls.EXCLUDE
