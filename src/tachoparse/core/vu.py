"""Vehicle unit download decoder (TV).

Blocks carry no length. A Gen1 block is as long as its fields, some of
which are counted lists; a Gen2 block is as long as its record arrays.
An unknown TREP therefore ends the decode.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from tachoparse.core.base.errors import TruncatedError
from tachoparse.core.base.result import Vu
from tachoparse.core.base.types import Diagnostic, DiagnosticKind, FileKind, Generation
from tachoparse.core.generation import GenerationLatch
from tachoparse.core.pki import CertificateStore, SignedBlock, authenticate, chain
from tachoparse.core.records.descriptor import Layout, RecordDescriptor
from tachoparse.core.records.vu import (
    RECORD_TYPE_MEMBER_STATE_CERTIFICATE,
    RECORD_TYPE_SIGNATURE,
    RECORD_TYPE_VU_CERTIFICATE,
    SIGNATURE_LENGTH_1,
)
from tachoparse.core.registry import REGISTRY
from tachoparse.core.wire.cursor import Cursor
from tachoparse.core.wire.logging import ELEMENT, log_hex
from tachoparse.core.wire.schema import PayloadDecoder

lg = logging.getLogger(__name__)

TREP_LENGTH = 2

_CERTIFICATE_RECORDS = (RECORD_TYPE_MEMBER_STATE_CERTIFICATE, RECORD_TYPE_VU_CERTIFICATE)
_CERTIFICATE_FIELDS = {
    "member_state_certificate": RECORD_TYPE_MEMBER_STATE_CERTIFICATE,
    "vu_certificate": RECORD_TYPE_VU_CERTIFICATE,
}


@dataclass
class _Block:
    value: object
    signed: bytes = b""
    signature: bytes | None = None
    certificates: dict[int, bytes] = field(default_factory=dict)


def _fields(decoder: PayloadDecoder, desc: RecordDescriptor, cursor: Cursor) -> _Block:
    # the signature covers every field except the certificates
    block = _Block(value={})
    signed = []
    for name, shape in desc.shape.fields:
        start = cursor.offset
        block.value[name] = decoder.decode(shape, cursor, f"{desc.field_name}.{name}")
        if name in _CERTIFICATE_FIELDS:
            block.certificates[_CERTIFICATE_FIELDS[name]] = cursor.since(start)
        else:
            signed.append(cursor.since(start))
    block.signed = b"".join(signed)
    block.signature = cursor.take(SIGNATURE_LENGTH_1)
    return block


def _record_arrays(decoder: PayloadDecoder, desc: RecordDescriptor, cursor: Cursor) -> _Block:
    block = _Block(value={})
    signed = []
    while True:
        header_at = cursor.offset
        code = cursor.uint(1)
        size = cursor.uint(2)
        count = cursor.uint(2)
        records = cursor.sub(size * count)

        if code == RECORD_TYPE_SIGNATURE:
            block.signed = b"".join(signed)
            block.signature = records.window
            return block
        if code not in _CERTIFICATE_RECORDS:
            signed.append(cursor.since(header_at))

        rtype = REGISTRY.lookup_record_type(desc.generation, code)
        if rtype is None:
            name = f"record_type_{code:02X}"
            decoder.note(
                DiagnosticKind.UNKNOWN_RECORD_TYPE, header_at,
                f"unknown record type {code:02X}, {count} x {size} bytes kept raw",
                f"{desc.field_name}.{name}",
            )
            values = [records.take(size) for _ in range(count)]
        elif rtype.shape.width is not None and rtype.shape.width != size:
            name = rtype.name
            decoder.note(
                DiagnosticKind.MALFORMED, header_at,
                f"{name} records are {size} bytes, expected {rtype.shape.width}; kept raw",
                f"{desc.field_name}.{name}",
            )
            values = [records.take(size) for _ in range(count)]
        else:
            name = rtype.name
            path = f"{desc.field_name}.{name}"
            values = []
            for i in range(count):
                record = records.sub(size)
                if code in _CERTIFICATE_RECORDS:
                    block.certificates[code] = record.window
                values.append(decoder.decode_element(rtype.shape, record, f"{path}[{i}]"))
        block.value.setdefault(name, []).extend(values)


def _value(decoder: PayloadDecoder, desc: RecordDescriptor, cursor: Cursor) -> _Block:
    return _Block(decoder.decode(desc.shape, cursor, desc.field_name))


_LAYOUTS: dict[Layout, Callable[[PayloadDecoder, RecordDescriptor, Cursor], _Block]] = {
    Layout.FIELDS: _fields,
    Layout.RECORD_ARRAYS: _record_arrays,
    Layout.VALUE: _value,
}


@dataclass
class _Signed:
    name: str
    family: Generation
    offset: int
    tag: int
    block: _Block


def decode_vu(
    data: bytes,
    *,
    store: CertificateStore | None = None,
) -> tuple[Vu, list[Diagnostic]]:
    """Decode a vehicle unit download.

    Decoding stops at the first unknown TREP or at a block that runs past
    the end of the input; both leave a fatal diagnostic and everything
    decoded before that point in the result.
    """
    data = bytes(data)
    vu = Vu()
    diagnostics: list[Diagnostic] = []
    latch = GenerationLatch()
    signed: list[_Signed] = []
    cursor = Cursor(data)

    def note(kind, offset, message, tag=None):
        diag = Diagnostic(kind=kind, offset=offset, message=message, tag=tag, fatal=True)
        lg.debug("%s", diag)
        diagnostics.append(diag)

    while not cursor.at_end:
        start = cursor.offset
        if cursor.remaining < TREP_LENGTH:
            note(DiagnosticKind.TRUNCATED, start, "trailing byte where a block tag should start")
            break
        tag = cursor.uint(2)
        desc = REGISTRY.lookup(FileKind.VU, latch.observe_vu(tag), tag)
        if desc is None:
            note(DiagnosticKind.UNKNOWN_TAG, start, f"unknown block {tag:04X}, decoding stopped", tag)
            break

        decoder = PayloadDecoder(diagnostics, tag)
        try:
            block = _LAYOUTS[desc.layout](decoder, desc, cursor)
        except TruncatedError as e:
            note(DiagnosticKind.TRUNCATED, start, f"{desc.field_name} truncated: {e}", tag)
            break

        lg.log(ELEMENT, "%04X %-36s %5d bytes", tag, desc.field_name, cursor.offset - start)
        log_hex(lg, "  ", cursor.since(start))

        name = desc.field_name
        if desc.repeatable:
            entries = vu.fields.setdefault(name, [])
            name = f"{name}[{len(entries)}]"
            entries.append(block.value)
        else:
            vu.fields[name] = block.value
        if block.signature is not None:
            vu.signatures[name] = block.signature
            signed.append(_Signed(name, desc.generation.family, start, tag, block))
        vu.consumed = cursor.offset

    vu.generation = latch.generation
    if store is not None:
        _authenticate(vu, signed, store, diagnostics)
    return vu, diagnostics


def _authenticate(
    vu: Vu,
    signed: list[_Signed],
    store: CertificateStore,
    diagnostics: list[Diagnostic],
) -> None:
    for family in (Generation.GEN1, Generation.GEN2_V1):
        entries = [s for s in signed if s.family is family]
        if not entries:
            continue
        certificates: dict[int, bytes] = {}
        for s in entries:
            certificates.update(s.block.certificates)

        key_id = None
        extended = store
        if RECORD_TYPE_VU_CERTIFICATE in certificates:
            chain_data = [
                certificates[c] for c in _CERTIFICATE_RECORDS if c in certificates
            ]
            extended, opened = chain(store, family, chain_data)
            if opened[-1] is not None:
                key_id = opened[-1].key_id

        blocks = [
            SignedBlock(s.name, key_id, s.block.signed, s.block.signature, s.offset, s.tag)
            for s in entries
        ]
        vu.authentication.update(authenticate(extended, family, blocks, diagnostics))
