"""ProjectionService — mask operations for callers that speak wire form.

Request handlers and config loaders hold masks as plain data (lists,
strings, ``{field: 0|1}`` mappings). This service coerces them with the
configured empty-mapping mode, runs the domain operation, and folds
domain errors into a :class:`ServiceResult` instead of raising.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from fieldmask.config.logging import configure_from_config
from fieldmask.config.settings import FieldMaskSettings
from fieldmask.domain.errors import InvalidMaskInput
from fieldmask.domain.mask import FieldMask, MaskSource
from fieldmask.services.result import ErrorCode, ServiceResult

logger = structlog.get_logger(__name__)

COMBINE_OPS = ("join", "intersect", "negate")


class _Rejected(Exception):
    """Internal: carries a failure result out of nested helpers."""

    def __init__(self, result: ServiceResult) -> None:
        super().__init__(result.op)
        self.result = result


class ProjectionService:
    """Coerce, combine, and apply masks using configured defaults.

    Constructing the service applies the ``[logging]`` section.
    """

    def __init__(self, settings: FieldMaskSettings) -> None:
        self._settings = settings
        configure_from_config(settings.logging)

    def _coerce(self, op: str, source: MaskSource) -> FieldMask:
        log = logger.bind(op=op)
        try:
            return FieldMask.coerce(source, empty_mode=self._settings.mask.empty_mapping_mode)
        except InvalidMaskInput as exc:
            log.debug("mask_rejected", code=ErrorCode.INVALID_MASK.value, fields=exc.fields)
            raise _Rejected(
                ServiceResult.failure(op, ErrorCode.INVALID_MASK, str(exc), fields=exc.fields)
            ) from exc
        except TypeError as exc:
            log.debug("mask_rejected", code=ErrorCode.UNSUPPORTED_INPUT.value, reason=str(exc))
            raise _Rejected(
                ServiceResult.failure(op, ErrorCode.UNSUPPORTED_INPUT, str(exc))
            ) from exc

    @staticmethod
    def _describe(mask: FieldMask) -> dict[str, Any]:
        return {"type": mask.type.value, "fields": sorted(mask.entries), "mask": mask.get()}

    def normalize(self, source: MaskSource) -> ServiceResult:
        """Coerce *source* and return its canonical description."""
        try:
            mask = self._coerce("normalize", source)
        except _Rejected as rejected:
            return rejected.result
        return ServiceResult.success("normalize", self._describe(mask))

    def combine(
        self,
        op: str,
        left: MaskSource,
        right: MaskSource | None = None,
    ) -> ServiceResult:
        """Run ``join``, ``intersect`` or ``negate`` on wire-form masks.

        *right* is required for the binary operations and ignored by
        ``negate``.
        """
        if op not in COMBINE_OPS:
            return ServiceResult.failure(
                op,
                ErrorCode.UNKNOWN_OPERATION,
                f"Unknown mask operation: {op!r}",
                allowed=list(COMBINE_OPS),
            )
        if op != "negate" and right is None:
            return ServiceResult.failure(op, ErrorCode.UNSUPPORTED_INPUT, f"{op} needs two masks")
        try:
            left_mask = self._coerce(op, left)
            if op == "negate":
                result = left_mask.negate()
            else:
                result = getattr(left_mask, op)(self._coerce(op, right))
        except _Rejected as rejected:
            return rejected.result
        logger.debug("masks_combined", op=op, mask=result)
        return ServiceResult.success(op, self._describe(result))

    def project(
        self,
        records: Mapping[str, Any] | Iterable[Mapping[str, Any]],
        source: MaskSource | None = None,
    ) -> ServiceResult:
        """Apply a mask to one record or a sequence of records.

        Without *source* the ``[mask] default`` from settings is used; with
        neither, records pass through unchanged and a warning is attached.
        Output is always a list under ``data["records"]``.
        """
        op = "project"
        batch = [records] if isinstance(records, Mapping) else list(records)
        for index, record in enumerate(batch):
            if not isinstance(record, Mapping):
                return ServiceResult.failure(
                    op,
                    ErrorCode.UNSUPPORTED_INPUT,
                    f"Record {index} is {type(record).__name__}, not a mapping",
                    index=index,
                )

        if source is None:
            mask = self._settings.mask.default
        else:
            try:
                mask = self._coerce(op, source)
            except _Rejected as rejected:
                return rejected.result

        if mask is None:
            data = {"records": [dict(r) for r in batch], "count": len(batch), "type": None, "mask": None}
            return ServiceResult.success(
                op, data, "No mask given and no default configured; records unchanged"
            )

        logger.debug("records_projected", op=op, mask=mask, count=len(batch))
        data = {
            "records": [mask.apply(r) for r in batch],
            "count": len(batch),
            "type": mask.type.value,
            "mask": mask.get(),
        }
        return ServiceResult.success(op, data)
