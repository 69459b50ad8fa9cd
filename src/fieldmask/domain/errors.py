"""Mask construction errors."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class InvalidMaskInput(ValueError):
    """A marker mapping mixes include and exclude markers."""

    def __init__(self, fields: Mapping[str, Any]) -> None:
        self.fields = dict(fields)
        included = sorted(k for k, v in self.fields.items() if v)
        excluded = sorted(k for k, v in self.fields.items() if not v)
        msg = (
            "Invalid field mask input: markers must be all 1 or all 0 "
            f"(included={included}, excluded={excluded})"
        )
        super().__init__(msg)
