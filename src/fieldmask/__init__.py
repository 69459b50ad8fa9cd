"""fieldmask — include/exclude field masks for key-value records."""

from __future__ import annotations

from fieldmask.domain.errors import InvalidMaskInput
from fieldmask.domain.mask import FieldMask, MaskSource
from fieldmask.domain.types import FieldMaskType

__version__ = "0.1.0"

__all__ = [
    "FieldMask",
    "FieldMaskType",
    "InvalidMaskInput",
    "MaskSource",
    "__version__",
]
