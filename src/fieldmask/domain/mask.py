"""FieldMask — an inclusion or exclusion set of record field names.

A mask is a predicate over field names:

- ``INCLUDE`` masks select a field iff it is listed.
- ``EXCLUDE`` masks select a field iff it is *not* listed.

The empty include mask selects nothing; the empty exclude mask selects
everything. Masks are treated as values: ``negate``, ``join`` and
``intersect`` return new masks. ``add`` is the only mutator.

Wire form (``get()`` / ``coerce()``)::

    {"id": 1, "name": 1}     # include id and name
    {"password": 0}          # everything except password
    ["id", "name"]           # include id and name
    "id name"                # same, whitespace separated

INVARIANT: every marker in one mapping agrees on the mode.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, TypeAlias

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from fieldmask.domain.errors import InvalidMaskInput
from fieldmask.domain.types import FieldMaskType


def _field_names(fields: Iterable[str] | str) -> Iterable[str]:
    return fields.split() if isinstance(fields, str) else fields


class FieldMask:
    """A set of field names paired with an include/exclude mode."""

    __slots__ = ("type", "_entries")

    def __init__(
        self,
        type: FieldMaskType = FieldMaskType.INCLUDE,  # noqa: A002
        fields: Iterable[str] | str = (),
    ) -> None:
        self.type = FieldMaskType(type)
        self._entries: set[str] = set()
        self.add(*_field_names(fields))

    # --- Construction ---

    @classmethod
    def include(cls, fields: Iterable[str] | str) -> FieldMask:
        """Mask selecting only *fields* (a string is split on whitespace)."""
        return cls(FieldMaskType.INCLUDE, fields)

    @classmethod
    def exclude(cls, fields: Iterable[str] | str) -> FieldMask:
        """Mask selecting everything except *fields*."""
        return cls(FieldMaskType.EXCLUDE, fields)

    @classmethod
    def coerce(
        cls,
        source: MaskSource,
        *,
        empty_mode: FieldMaskType = FieldMaskType.INCLUDE,
    ) -> FieldMask:
        """Build a mask from any accepted input.

        An existing mask is returned as-is, not copied: a later ``add`` on
        the result also changes the caller's mask. Strings are split on
        whitespace and, like other iterables, give an include mask.
        Mappings infer their mode from the markers; an empty mapping gets
        *empty_mode*.

        Raises:
            InvalidMaskInput: The mapping mixes truthy and falsey markers.
            TypeError: *source* is not a supported input type.
        """
        if isinstance(source, FieldMask):
            return source
        if isinstance(source, str):
            return cls.include(source)
        if isinstance(source, Mapping):
            return cls._from_markers(source, empty_mode)
        if isinstance(source, (bytes, bytearray)) or not isinstance(source, Iterable):
            msg = f"Cannot build a field mask from {type(source).__name__}"
            raise TypeError(msg)
        return cls.include(source)

    from_ = coerce

    @classmethod
    def _from_markers(cls, markers: Mapping[str, Any], empty_mode: FieldMaskType) -> FieldMask:
        mode: FieldMaskType | None = None
        for value in markers.values():
            value_mode = FieldMaskType.from_marker(value)
            if mode is None:
                mode = value_mode
            elif value_mode is not mode:
                raise InvalidMaskInput(markers)
        if mode is None:
            mode = empty_mode
        return cls(mode, markers.keys())

    # --- Mutation ---

    def add(self, *fields: str) -> FieldMask:
        """Add *fields* to the entry set. Returns ``self`` for chaining."""
        self._entries.update(fields)
        return self

    # --- Queries ---

    @property
    def entries(self) -> frozenset[str]:
        """Snapshot of the listed field names."""
        return frozenset(self._entries)

    def get(self) -> dict[str, int]:
        """Wire form: each entry mapped to ``1`` (include) or ``0`` (exclude)."""
        marker = self.type.marker
        return {field: marker for field in sorted(self._entries)}

    def includes(self, field: str) -> bool:
        """Whether *field* is selected by this mask."""
        if self.type is FieldMaskType.EXCLUDE:
            return field not in self._entries
        return field in self._entries

    def excludes(self, field: str) -> bool:
        """Whether *field* is dropped by this mask."""
        return not self.includes(field)

    def equals(self, other: MaskSource) -> bool:
        """Same mode and same entry set, after coercing *other*."""
        other_mask = FieldMask.coerce(other)
        return self.type is other_mask.type and self._entries == other_mask._entries

    # --- Algebra ---

    def negate(self) -> FieldMask:
        """Flip the mode, keeping the entries."""
        if self.type is FieldMaskType.EXCLUDE:
            return FieldMask.include(self._entries)
        return FieldMask.exclude(self._entries)

    def join(self, other: MaskSource) -> FieldMask:
        """Union-like combination; the result keeps this mask's mode.

        - exclude + any: stop excluding whatever *other* selects.
        - include + include: union of the listed fields.
        - include + exclude: unchanged.
        """
        other_mask = FieldMask.coerce(other)
        if self.type is FieldMaskType.EXCLUDE:
            return FieldMask.exclude(f for f in self._entries if not other_mask.includes(f))
        result = FieldMask.include(self._entries)
        if other_mask.type is FieldMaskType.INCLUDE:
            result.add(*other_mask._entries)
        return result

    def intersect(self, other: MaskSource) -> FieldMask:
        """Restrictive combination; the result keeps this mask's mode.

        - include + any: keep only the fields *other* also selects.
        - exclude + exclude: union of the excluded fields.
        - exclude + include: unchanged.
        """
        other_mask = FieldMask.coerce(other)
        if self.type is FieldMaskType.INCLUDE:
            return FieldMask.include(f for f in self._entries if other_mask.includes(f))
        result = FieldMask.exclude(self._entries)
        if other_mask.type is FieldMaskType.EXCLUDE:
            result.add(*other_mask._entries)
        return result

    # --- Projection ---

    def apply(self, record: Mapping[str, Any]) -> dict[str, Any]:
        """Return a new dict holding only the selected items of *record*.

        Values are passed through by reference and key order is preserved.
        """
        return {key: value for key, value in record.items() if self.includes(key)}

    # --- Python protocol ---

    def __contains__(self, field: object) -> bool:
        return isinstance(field, str) and self.includes(field)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        try:
            return self.equals(other)  # type: ignore[arg-type]
        except (TypeError, InvalidMaskInput):
            return NotImplemented

    __hash__ = None  # type: ignore[assignment]  # mutable via add()

    def __invert__(self) -> FieldMask:
        return self.negate()

    def __or__(self, other: MaskSource) -> FieldMask:
        return self.join(other)

    def __and__(self, other: MaskSource) -> FieldMask:
        return self.intersect(other)

    def __repr__(self) -> str:
        return f"FieldMask.{self.type.value}({sorted(self._entries)!r})"

    # --- pydantic ---

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Validate any ``coerce`` input; serialize to the ``get()`` mapping."""
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda mask: mask.get()
            ),
        )

    @classmethod
    def _validate(cls, value: Any) -> FieldMask:
        try:
            return cls.coerce(value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc


MaskSource: TypeAlias = FieldMask | str | Mapping[str, Any] | Iterable[str]
