"""Signature checks against a certificate store."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from tachoparse.core.base.errors import CertificateError
from tachoparse.core.base.types import AuthStatus, Diagnostic, DiagnosticKind, Generation
from tachoparse.core.pki import gen1, gen2
from tachoparse.core.pki.store import Certificate, CertificateStore, EcKey, RsaKey
from tachoparse.core.wire.logging import ELEMENT

lg = logging.getLogger(__name__)


def verify(
    store: CertificateStore,
    generation: Generation,
    key_id: bytes,
    signed: bytes,
    signature: bytes,
) -> AuthStatus:
    """Check one signature with the key stored under key_id."""
    cert = store.lookup(generation, key_id)
    if cert is None:
        return AuthStatus.KEY_NOT_FOUND
    if isinstance(cert.key, RsaKey):
        ok = gen1.verify_signature(cert.key, signed, signature)
    else:
        ok = gen2.verify_signature(cert.key, signed, signature)
    return AuthStatus.VALID if ok else AuthStatus.INVALID


def _open(store: CertificateStore, generation: Generation, data: bytes) -> Certificate | None:
    if generation.is_gen2:
        parsed = gen2.parse_certificate(data)
        car = parsed.certificate.authority
        signer = store.lookup(generation, car)
        if signer is None:
            lg.debug("no key %s for certificate %s", car.hex().upper(),
                     parsed.certificate.key_id.hex().upper())
            return None
        if not isinstance(signer.key, EcKey) or not gen2.verify_certificate(parsed, signer.key):
            raise CertificateError(
                f"certificate {parsed.certificate.key_id.hex().upper()} signature invalid"
            )
        return parsed.certificate

    car = gen1.authority_reference(data)
    signer = store.lookup(generation, car)
    if signer is None:
        lg.debug("no key %s for gen1 certificate", car.hex().upper())
        return None
    if not isinstance(signer.key, RsaKey):
        raise CertificateError(f"key {car.hex().upper()} is not an RSA key")
    return gen1.recover(data, signer.key)


def chain(
    store: CertificateStore,
    generation: Generation,
    certificates: Sequence[bytes],
) -> tuple[CertificateStore, list[Certificate | None]]:
    """Chain certificates found in a download off a trusted store.

    ``certificates`` run from the authority towards the holder. Each one
    whose signer is known and whose signature checks out is added to the
    returned store; the input store is left as it was. The returned list
    holds the opened certificate, or None, for each input in order.
    """
    opened: list[Certificate | None] = []
    for data in certificates:
        try:
            cert = _open(store, generation, data)
        except CertificateError as e:
            lg.debug("certificate not chained: %s", e)
            cert = None
        opened.append(cert)
        if cert is not None:
            lg.debug("chained certificate %s", cert.key_id.hex().upper())
            store = store.extended([cert])
    return store, opened


@dataclass(frozen=True)
class SignedBlock:
    """A signed span of a download and the key expected to have signed it."""

    name: str
    key_id: bytes | None
    data: bytes
    signature: bytes
    offset: int = 0
    tag: int | None = None


def authenticate(
    store: CertificateStore,
    generation: Generation,
    blocks: Iterable[SignedBlock],
    diagnostics: list[Diagnostic],
) -> dict[str, AuthStatus]:
    """Verify every block, adding a KEY_NOT_FOUND note where no key is known."""
    out: dict[str, AuthStatus] = {}
    for block in blocks:
        if block.key_id is None:
            status = AuthStatus.KEY_NOT_FOUND
        else:
            status = verify(store, generation, block.key_id, block.data, block.signature)
        if status is AuthStatus.KEY_NOT_FOUND:
            diagnostics.append(Diagnostic(
                kind=DiagnosticKind.KEY_NOT_FOUND,
                offset=block.offset,
                message="no key to check signature",
                tag=block.tag,
                field=block.name,
            ))
        lg.log(ELEMENT, "signature %-36s %s", block.name, status.value)
        out[block.name] = status
    return out
