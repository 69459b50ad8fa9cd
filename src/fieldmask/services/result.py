"""Result envelope for ProjectionService calls.

INVARIANT: service methods never raise for bad mask input; the failure
is reported in ``error`` and ``ok`` is derived from it.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, computed_field


class ErrorCode(StrEnum):
    """Why a service call was rejected."""

    INVALID_MASK = "INVALID_MASK"  # mixed include/exclude markers
    UNSUPPORTED_INPUT = "UNSUPPORTED_INPUT"  # wrong type, missing operand, non-mapping record
    UNKNOWN_OPERATION = "UNKNOWN_OPERATION"


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    ``data`` carries the operation payload; ``warnings`` is filled only when
    the call succeeded in a degraded way (e.g. no mask to apply).
    """

    model_config = {"frozen": True}

    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, op: str, data: dict[str, Any], *warnings: str) -> ServiceResult:
        return cls(op=op, data=data, warnings=list(warnings))

    @classmethod
    def failure(cls, op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        return cls(op=op, error=ServiceError(code=code, message=message, detail=detail))
