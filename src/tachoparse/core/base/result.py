from __future__ import annotations

from dataclasses import dataclass, field

from tachoparse.core.base.types import AuthStatus, FileKind, Generation


@dataclass
class Result:
    """Decoded download: field name to decoded value.

    Fields absent from the input are absent here. Signature blocks are kept
    apart from the values they sign, keyed by the signed field's name.
    ``consumed`` is the number of input bytes the decoder got through.
    """

    generation: Generation = Generation.UNKNOWN
    fields: dict[str, object] = field(default_factory=dict)
    signatures: dict[str, bytes] = field(default_factory=dict)
    authentication: dict[str, AuthStatus] = field(default_factory=dict)
    consumed: int = 0

    def __contains__(self, name: str) -> bool:
        return name in self.fields

    def __getitem__(self, name: str) -> object:
        return self.fields[name]

    def get(self, name: str, default: object = None) -> object:
        return self.fields.get(name, default)

    def to_dict(self) -> dict[str, object]:
        """Return the result as JSON-native values."""
        from tachoparse.core.export import to_native

        out: dict[str, object] = {"generation": self.generation.label}
        out.update(to_native(self.fields))
        if self.signatures:
            out["signatures"] = to_native(self.signatures)
        if self.authentication:
            out["authentication"] = to_native(self.authentication)
        return out


@dataclass
class Card(Result):
    """Decoded card download (TLV encoded)."""

    kind: FileKind = FileKind.CARD

    def to_dict(self) -> dict[str, object]:
        out = super().to_dict()
        out["card_kind"] = self.kind.value
        return out


@dataclass
class Vu(Result):
    """Decoded vehicle unit download (TV encoded).

    Blocks that may repeat in one download (activities, detailed speed)
    are stored as lists in download order.
    """
