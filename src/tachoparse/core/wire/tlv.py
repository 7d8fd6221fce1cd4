"""BER-TLV as used by Gen2 certificates (Annex 1C, Appendix 11)."""

from __future__ import annotations

from dataclasses import dataclass, field

from tachoparse.core.wire.cursor import Cursor


@dataclass
class TLV:
    """A single BER-TLV node.

    ``encoded`` keeps the complete tag-length-value bytes, since Gen2
    certificate signatures are computed over the encoded body.
    """

    tag: int
    value: bytes = b""
    encoded: bytes = b""
    children: list[TLV] = field(default_factory=list)

    @property
    def constructed(self) -> bool:
        return bool(self.encoded[:1] and self.encoded[0] & 0x20)

    def find(self, tag: int) -> TLV | None:
        return next((c for c in self.children if c.tag == tag), None)

    def require(self, tag: int) -> TLV:
        """Like find(), but a missing child is an error."""
        child = self.find(tag)
        if child is None:
            raise KeyError(f"missing tag {tag:X} in {self.tag:X}")
        return child

    def __repr__(self) -> str:
        if self.children:
            return f"TLV({self.tag:X}, {self.children!r})"
        return f"TLV({self.tag:X}, {self.value.hex().upper()})"


def parse(data: bytes) -> list[TLV]:
    """Parse a byte sequence into a list of BER-TLV nodes.

    Raises TruncatedError if a tag, length or value runs past the end.
    """
    cur = Cursor(data)
    nodes = []
    while not cur.at_end:
        nodes.append(_node(cur))
    return nodes


def parse_one(data: bytes) -> TLV:
    """Parse the first node of data, ignoring anything after it.

    Certificate EFs are sized for the largest key, so the encoded
    certificate is often followed by padding.
    """
    return _node(Cursor(data))


def _node(cur: Cursor) -> TLV:
    start = cur.offset
    tag = _tag(cur)
    value = cur.take(_length(cur))
    node = TLV(tag=tag, value=value, encoded=cur.since(start))
    if node.constructed:
        node.children = parse(value)
    return node


def _tag(cur: Cursor) -> int:
    tag = cur.uint(1)
    if tag & 0x1F != 0x1F:
        return tag
    # subsequent bytes have bit 8 set while more follow
    while True:
        b = cur.uint(1)
        tag = tag << 8 | b
        if not b & 0x80:
            return tag


def _length(cur: Cursor) -> int:
    first = cur.uint(1)
    if first < 0x80:
        return first
    return cur.uint(first & 0x7F)
