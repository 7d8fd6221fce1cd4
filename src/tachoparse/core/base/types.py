"""Shared enums and value types for decoded tachograph data."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Generation(enum.IntEnum):
    """Tachograph generation, ordered so that a latch only moves upwards."""

    UNKNOWN = 0
    GEN1 = 1
    GEN2_V1 = 2
    GEN2_V2 = 3

    @property
    def suffix(self) -> str:
        """Field-name suffix used for values decoded under this generation."""
        return _SUFFIXES[self]

    @property
    def is_gen2(self) -> bool:
        return self >= Generation.GEN2_V1

    @property
    def family(self) -> Generation:
        """GEN1 or GEN2_V1; Gen2 sub-versions share keys and signatures."""
        if self.is_gen2:
            return Generation.GEN2_V1
        return self

    @property
    def label(self) -> str:
        return _LABELS[self]


_SUFFIXES = {
    Generation.UNKNOWN: "",
    Generation.GEN1: "_1",
    Generation.GEN2_V1: "_2",
    Generation.GEN2_V2: "_2_v2",
}

_LABELS = {
    Generation.UNKNOWN: "unknown",
    Generation.GEN1: "gen1",
    Generation.GEN2_V1: "gen2v1",
    Generation.GEN2_V2: "gen2v2",
}


class FileKind(enum.Enum):
    """Kind of download a tag belongs to.

    ``CARD`` holds the elementary files common to every card type; the
    specific card kinds hold the files only that type of card carries.
    """

    CARD = "card"
    DRIVER_CARD = "driver_card"
    WORKSHOP_CARD = "workshop_card"
    CONTROL_CARD = "control_card"
    COMPANY_CARD = "company_card"
    VU = "vu"


# typeOfTachographCardId (EquipmentType)
CARD_KINDS: dict[int, FileKind] = {
    0x01: FileKind.DRIVER_CARD,
    0x02: FileKind.WORKSHOP_CARD,
    0x03: FileKind.CONTROL_CARD,
    0x04: FileKind.COMPANY_CARD,
}


class DiagnosticKind(enum.Enum):
    TRUNCATED = "truncated"
    UNKNOWN_TAG = "unknown_tag"
    UNKNOWN_RECORD_TYPE = "unknown_record_type"
    MALFORMED = "malformed"
    KEY_NOT_FOUND = "key_not_found"


@dataclass(frozen=True)
class Diagnostic:
    """A decode note attached to a position and, where known, a field."""

    kind: DiagnosticKind
    offset: int
    message: str
    tag: int | None = None
    field: str | None = None
    fatal: bool = False

    def __str__(self) -> str:
        where = f"@{self.offset:06X}"
        if self.tag is not None:
            where += f" tag={self.tag:04X}"
        if self.field:
            where += f" {self.field}"
        return f"{self.kind.value} {where}: {self.message}"


@dataclass(frozen=True)
class Malformed:
    """Marker stored in place of a value that could not be decoded."""

    raw: bytes
    reason: str


class AuthStatus(enum.Enum):
    """Outcome of a signature check. Data about the file, not an error."""

    VALID = "valid"
    INVALID = "invalid"
    KEY_NOT_FOUND = "key_not_found"
