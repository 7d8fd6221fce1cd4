"""Card download decoder (TLV).

A card download is a run of elements::

    file identifier (2) | appendix (1) | length (2) | value (length)

The appendix tells data from signature and Gen1 from Gen2. Signatures
follow the data element they sign and carry the same file identifier.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tachoparse.core.base.errors import TruncatedError
from tachoparse.core.base.result import Card
from tachoparse.core.base.types import Diagnostic, DiagnosticKind, Generation
from tachoparse.core.generation import (
    APPENDIX_DATA_1,
    APPENDIX_DATA_2,
    APPENDIX_SIGNATURE_1,
    APPENDIX_SIGNATURE_2,
    GenerationLatch,
    appendix_generation,
)
from tachoparse.core.pki import CertificateStore, SignedBlock, authenticate, chain
from tachoparse.core.records.card import CERTIFICATE_CHAIN
from tachoparse.core.registry import REGISTRY
from tachoparse.core.wire.cursor import Cursor
from tachoparse.core.wire.logging import ELEMENT, log_hex
from tachoparse.core.wire.schema import PayloadDecoder

lg = logging.getLogger(__name__)

TAG_LENGTH = 2
HEADER_LENGTH = 5


@dataclass
class _Element:
    name: str
    tag: int
    offset: int
    payload: bytes
    signed: bool = True
    signature: bytes | None = None


def decode_card(
    data: bytes,
    *,
    store: CertificateStore | None = None,
) -> tuple[Card, list[Diagnostic]]:
    """Decode a card download.

    Returns the card and the diagnostics collected on the way. Raises
    TruncatedError, with the partial card attached, only when a single
    byte is left where an element tag should start.

    With ``store`` given, signed elements are checked and the outcome is
    stored in ``Card.authentication``.
    """
    data = bytes(data)
    card = Card()
    diagnostics: list[Diagnostic] = []
    latch = GenerationLatch()
    elements: dict[tuple[int, Generation], _Element] = {}
    cursor = Cursor(data)
    consumed = 0

    def note(kind, offset, message, tag=None, fatal=False):
        diag = Diagnostic(kind=kind, offset=offset, message=message, tag=tag, fatal=fatal)
        lg.debug("%s", diag)
        diagnostics.append(diag)

    while not cursor.at_end:
        start = cursor.offset
        if cursor.remaining < TAG_LENGTH:
            _finish(card, latch, start)
            raise TruncatedError(
                f"{cursor.remaining} byte left at offset {start:#x}, expected an element tag",
                partial=card,
            )
        if cursor.remaining < HEADER_LENGTH:
            note(DiagnosticKind.TRUNCATED, start,
                 f"incomplete element header, {cursor.remaining} bytes left",
                 tag=int.from_bytes(cursor.peek(TAG_LENGTH), "big"), fatal=True)
            break

        tag = cursor.uint(2)
        appendix = cursor.uint(1)
        length = cursor.uint(2)
        if length > cursor.remaining:
            note(DiagnosticKind.TRUNCATED, start,
                 f"element claims {length} bytes, {cursor.remaining} left",
                 tag=tag, fatal=True)
            break
        body = cursor.sub(length)
        payload = body.window
        consumed = cursor.offset

        latch.observe_card(tag, appendix, payload)
        family = appendix_generation(appendix)

        if appendix in (APPENDIX_SIGNATURE_1, APPENDIX_SIGNATURE_2):
            element = elements.get((tag, family))
            if element is None:
                note(DiagnosticKind.UNKNOWN_TAG, start,
                     f"signature {appendix:02X} without a data element", tag=tag)
                continue
            if not element.signed:
                note(DiagnosticKind.UNKNOWN_TAG, start,
                     f"signature {appendix:02X} after unsigned element {element.name}", tag=tag)
                continue
            lg.log(ELEMENT, "%04X/%02X %-36s %5d bytes", tag, appendix, "signature", length)
            element.signature = payload
            card.signatures[element.name] = payload
            continue

        if appendix not in (APPENDIX_DATA_1, APPENDIX_DATA_2):
            note(DiagnosticKind.UNKNOWN_TAG, start,
                 f"unknown appendix {appendix:02X}, {length} bytes skipped", tag=tag)
            continue

        desc = REGISTRY.lookup(latch.kind, latch.element_generation(appendix), tag)
        if desc is None:
            note(DiagnosticKind.UNKNOWN_TAG, start,
                 f"unknown element {tag:04X}/{appendix:02X}, {length} bytes skipped", tag=tag)
            continue

        lg.log(ELEMENT, "%04X/%02X %-36s %5d bytes", tag, appendix, desc.field_name, length)
        log_hex(lg, "  ", payload)
        decoder = PayloadDecoder(diagnostics, tag)
        card.fields[desc.field_name] = decoder.decode_element(desc.shape, body, desc.field_name)
        elements[(tag, family)] = _Element(desc.field_name, tag, start, payload, desc.signed)

    _finish(card, latch, consumed)

    if store is not None:
        _authenticate(card, elements, store, diagnostics)
    return card, diagnostics


def _finish(card: Card, latch: GenerationLatch, consumed: int) -> None:
    card.generation = latch.generation
    card.kind = latch.kind
    card.consumed = consumed


def _authenticate(
    card: Card,
    elements: dict[tuple[int, Generation], _Element],
    store: CertificateStore,
    diagnostics: list[Diagnostic],
) -> None:
    for family, chain_tags in CERTIFICATE_CHAIN.items():
        signed = [
            e for (tag, g), e in elements.items() if g is family and e.signature is not None
        ]
        if not signed:
            continue
        certificates = [elements[(t, family)].payload for t in chain_tags if (t, family) in elements]
        extended, opened = chain(store, family, certificates)

        key_id = None
        if (chain_tags[-1], family) in elements and opened[-1] is not None:
            key_id = opened[-1].key_id
        blocks = [
            SignedBlock(e.name, key_id, e.payload, e.signature, e.offset, e.tag) for e in signed
        ]
        card.authentication.update(authenticate(extended, family, blocks, diagnostics))
