"""Pydantic section models with code-baked defaults.

Sparse TOML contract: defaults baked here, the config file only holds
overrides. An empty file is a valid configuration.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, model_validator

from fieldmask.domain.mask import FieldMask
from fieldmask.domain.types import FieldMaskType


class MaskConfig(BaseModel):
    """[mask] section."""

    model_config = {"frozen": True}

    empty_mapping_mode: FieldMaskType = FieldMaskType.INCLUDE
    default: FieldMask | None = None  # applied when a request carries no mask

    @model_validator(mode="before")
    @classmethod
    def _coerce_default(cls, data: Any) -> Any:
        """Build ``default`` with this section's ``empty_mapping_mode``."""
        if not isinstance(data, dict) or data.get("default") is None:
            return data
        mode = FieldMaskType(data.get("empty_mapping_mode", FieldMaskType.INCLUDE))
        try:
            default = FieldMask.coerce(data["default"], empty_mode=mode)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc
        return {**data, "default": default}


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False
