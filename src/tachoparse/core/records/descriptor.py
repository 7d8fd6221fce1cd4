from __future__ import annotations

import enum
from dataclasses import dataclass

from tachoparse.core.base.types import FileKind, Generation
from tachoparse.core.wire.schema import Shape


class Layout(enum.Enum):
    """How the bytes of an element are framed on the wire."""

    ELEMENT = "element"              # card EF payload, length from the TLV header
    FIELDS = "fields"                # Gen1 VU block, then a 128-byte signature
    RECORD_ARRAYS = "record_arrays"  # Gen2 VU block, arrays up to the signature array
    VALUE = "value"                  # fixed-width VU value, unsigned


@dataclass(frozen=True)
class RecordDescriptor:
    tag: int
    name: str
    kind: FileKind
    generation: Generation
    shape: Shape | None
    signed: bool = False
    repeatable: bool = False
    layout: Layout = Layout.ELEMENT

    @property
    def field_name(self) -> str:
        """Result key: the element name qualified by its generation."""
        return self.name + self.generation.suffix


@dataclass(frozen=True)
class RecordType:
    """Gen2 VU record type as announced in a record array header."""

    code: int
    name: str
    shape: Shape
