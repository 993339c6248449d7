from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union

from geodata_extractor.errors import SchemaError


class DecodeType(Enum):
    """How the bytes of one header field are turned into a value.

    The value is the fixed byte width of the type, or None for text whose length
    is given by the field range.
    """

    INT16_BE = "int16_be"
    UINT16_BE = "uint16_be"
    INT32_BE = "int32_be"
    IBM_FLOAT32 = "ibm_float32"
    IEEE_FLOAT32 = "ieee_float32"
    FIXED_STRING = "fixed_string"

    @property
    def width(self) -> Optional[int]:
        return _WIDTHS[self]

    @property
    def is_numeric(self) -> bool:
        return self is not DecodeType.FIXED_STRING


_WIDTHS: Dict[DecodeType, Optional[int]] = {
    DecodeType.INT16_BE: 2,
    DecodeType.UINT16_BE: 2,
    DecodeType.INT32_BE: 4,
    DecodeType.IBM_FLOAT32: 4,
    DecodeType.IEEE_FLOAT32: 4,
    DecodeType.FIXED_STRING: None,
}


@dataclass(frozen=True)
class FieldRange:
    """Half-open byte range ``[start, end)`` inside a fixed-size block (0-based)."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if int(self.start) < 0:
            raise SchemaError(f"negative start offset: {self.start}")
        if int(self.start) >= int(self.end):
            raise SchemaError(f"start offset {self.start} must be < end offset {self.end}")

    @property
    def length(self) -> int:
        return int(self.end - self.start)

    def slice(self, block: bytes) -> bytes:
        return bytes(block[self.start : self.end])


@dataclass(frozen=True)
class FieldSpec:
    """One named field of a schema: where it lives and how it decodes."""

    name: str
    range: FieldRange
    type: DecodeType

    def __post_init__(self) -> None:
        if not self.name:
            raise SchemaError("field name must be a non-empty string")
        width = self.type.width
        if width is not None and self.range.length != width:
            raise SchemaError(
                f"field '{self.name}': {self.type.name} needs {width} bytes, "
                f"range [{self.range.start}, {self.range.end}) spans {self.range.length}"
            )


FieldLike = Union[FieldSpec, Tuple[str, int, int, DecodeType]]


@dataclass(frozen=True)
class FormatSchema:
    """
    Immutable, ordered mapping of field names to byte ranges and decode types.

    One instance describes one block layout of one format revision (for SEG-Y: the
    400-byte binary header of rev0 or rev1, or the 240-byte trace header). Instances
    are shared read-only across parses; revision selection means picking a different
    constant, never branching inside the decoder.

    block_size:
      Declared size of the block the schema describes, or None when the block is
      exactly as long as its furthest field.
    """

    name: str
    fields: Tuple[FieldSpec, ...]
    block_size: Optional[int] = None
    _index: Dict[str, FieldSpec] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: Dict[str, FieldSpec] = {}
        for spec in self.fields:
            if spec.name in index:
                raise SchemaError(f"schema '{self.name}': duplicate field name '{spec.name}'")
            if self.block_size is not None and spec.range.end > int(self.block_size):
                raise SchemaError(
                    f"schema '{self.name}': field '{spec.name}' ends at {spec.range.end}, "
                    f"beyond block size {self.block_size}"
                )
            index[spec.name] = spec
        object.__setattr__(self, "_index", index)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(s.name for s in self.fields)

    @property
    def required_size(self) -> int:
        """Smallest block length that holds every declared field."""
        return max((s.range.end for s in self.fields), default=0)

    @property
    def read_size(self) -> int:
        """Number of bytes one block occupies in a stream."""
        return int(self.block_size) if self.block_size is not None else self.required_size

    @property
    def has_text_fields(self) -> bool:
        return any(s.type is DecodeType.FIXED_STRING for s in self.fields)

    def __getitem__(self, name: str) -> FieldSpec:
        return self._index[name]

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


def _as_field_spec(item: FieldLike) -> FieldSpec:
    if isinstance(item, FieldSpec):
        return item
    try:
        name, start, end, dtype = item
    except (TypeError, ValueError) as exc:
        raise SchemaError(f"expected (name, start, end, type), got {item!r}") from exc
    if not isinstance(dtype, DecodeType):
        raise SchemaError(f"field '{name}': unknown decode type {dtype!r}")
    return FieldSpec(name=str(name), range=FieldRange(int(start), int(end)), type=dtype)


def build_schema(name: str, fields: Iterable[FieldLike], *, block_size: Optional[int] = None) -> FormatSchema:
    """Build a validated schema from field specs or ``(name, start, end, type)`` tuples.

    Raises SchemaError for any malformed field; the check depends only on the
    definitions, never on input data.
    """
    if block_size is not None and int(block_size) <= 0:
        raise SchemaError(f"schema '{name}': block size must be > 0, got {block_size}")
    specs = tuple(_as_field_spec(f) for f in fields)
    return FormatSchema(name=name, fields=specs, block_size=None if block_size is None else int(block_size))


@dataclass(frozen=True)
class SchemaBuilder:
    """
    Step-wise schema definition.

    Each ``add_field`` returns a new builder, so a partially built layout can be
    extended into several revisions without copying state by hand. Validation is
    deferred to ``build()``.
    """

    name: str
    block_size: Optional[int] = None
    entries: Tuple[Tuple[str, int, int, DecodeType], ...] = ()

    def add_field(self, name: str, start: int, end: int, type: DecodeType) -> "SchemaBuilder":
        return SchemaBuilder(
            name=self.name,
            block_size=self.block_size,
            entries=self.entries + ((name, start, end, type),),
        )

    def build(self) -> FormatSchema:
        return build_schema(self.name, self.entries, block_size=self.block_size)
