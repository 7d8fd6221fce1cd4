"""Tag registry: (file kind, generation, tag) to record descriptor.

Built once at import time from the record tables and read-only afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from tachoparse.core.base.types import FileKind, Generation
from tachoparse.core.records import (
    CARD_DESCRIPTORS,
    RECORD_TYPES,
    VU_DESCRIPTORS,
    RecordDescriptor,
    RecordType,
)

lg = logging.getLogger(__name__)


class TagRegistry:
    """Read-only index of record descriptors.

    Card lookups try the specific card kind before the EFs common to every
    card; Gen2v2 lookups try Gen2v2 layouts before Gen2v1 ones.
    """

    def __init__(
        self,
        descriptors: Iterable[RecordDescriptor],
        record_types: Mapping[Generation, Mapping[int, RecordType]] | None = None,
    ) -> None:
        index: dict[tuple[FileKind, Generation, int], RecordDescriptor] = {}
        for desc in descriptors:
            key = (desc.kind, desc.generation, desc.tag)
            if key in index:
                raise ValueError(
                    f"duplicate descriptor {desc.kind.value} {desc.generation.label} {desc.tag:04X}"
                )
            index[key] = desc
        self._index = MappingProxyType(index)

        types: dict[tuple[Generation, int], RecordType] = {}
        for generation, table in (record_types or {}).items():
            for code, rtype in table.items():
                types[(generation, code)] = rtype
        self._record_types = MappingProxyType(types)

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self):
        return iter(self._index.values())

    def lookup(self, kind: FileKind, generation: Generation, tag: int) -> RecordDescriptor | None:
        for g in _generations(generation):
            for k in _kinds(kind):
                desc = self._index.get((k, g, tag))
                if desc is not None:
                    return desc
        return None

    def lookup_record_type(self, generation: Generation, code: int) -> RecordType | None:
        for g in _generations(generation):
            rtype = self._record_types.get((g, code))
            if rtype is not None:
                return rtype
        return None


def _generations(generation: Generation) -> tuple[Generation, ...]:
    if generation is Generation.GEN2_V2:
        return (Generation.GEN2_V2, Generation.GEN2_V1)
    return (generation,)


def _kinds(kind: FileKind) -> tuple[FileKind, ...]:
    if kind in (FileKind.CARD, FileKind.VU):
        return (kind,)
    return (kind, FileKind.CARD)


REGISTRY = TagRegistry((*CARD_DESCRIPTORS, *VU_DESCRIPTORS), RECORD_TYPES)
