"""Trusted public keys for signature checks.

The store is an immutable value. It is built once from the embedded dataset
(or a replacement file) and passed to the decoders. Keys recovered from a
download are added with extended(), which returns a new store.
"""

from __future__ import annotations

import functools
import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from importlib import resources
from pathlib import Path
from types import MappingProxyType

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from tachoparse.core.base.errors import CertificateError
from tachoparse.core.base.types import Generation

lg = logging.getLogger(__name__)

_DATASET = "certificates.json"


@dataclass(frozen=True)
class Curve:
    name: str
    oid: str
    size: int

    def ec_curve(self) -> ec.EllipticCurve:
        return _EC_CURVES[self.name]()

    def hash_algorithm(self) -> hashes.HashAlgorithm:
        """Hash paired with the curve size (Annex 1C Appendix 11, CSM_50)."""
        if self.size <= 256:
            return hashes.SHA256()
        if self.size <= 384:
            return hashes.SHA384()
        return hashes.SHA512()


_EC_CURVES = {
    "brainpoolP256r1": ec.BrainpoolP256R1,
    "brainpoolP384r1": ec.BrainpoolP384R1,
    "brainpoolP512r1": ec.BrainpoolP512R1,
    "secp256r1": ec.SECP256R1,
    "secp384r1": ec.SECP384R1,
    "secp521r1": ec.SECP521R1,
}

CURVES: dict[str, Curve] = {
    c.name: c
    for c in (
        Curve("brainpoolP256r1", "1.3.36.3.3.2.8.1.1.7", 256),
        Curve("brainpoolP384r1", "1.3.36.3.3.2.8.1.1.11", 384),
        Curve("brainpoolP512r1", "1.3.36.3.3.2.8.1.1.13", 512),
        Curve("secp256r1", "1.2.840.10045.3.1.7", 256),
        Curve("secp384r1", "1.3.132.0.34", 384),
        Curve("secp521r1", "1.3.132.0.35", 521),
    )
}

CURVES_BY_OID: dict[str, Curve] = {c.oid: c for c in CURVES.values()}


@dataclass(frozen=True)
class RsaKey:
    """Gen1 public key."""

    modulus: int
    exponent: int

    def public_key(self) -> rsa.RSAPublicKey:
        return rsa.RSAPublicNumbers(self.exponent, self.modulus).public_key()


@dataclass(frozen=True)
class EcKey:
    """Gen2 public key: curve and uncompressed point (04 || x || y)."""

    curve: Curve
    point: bytes

    def public_key(self) -> ec.EllipticCurvePublicKey:
        try:
            return ec.EllipticCurvePublicKey.from_encoded_point(
                self.curve.ec_curve(), self.point,
            )
        except ValueError as e:
            raise CertificateError(f"invalid point on {self.curve.name}: {e}") from e


@dataclass(frozen=True)
class Certificate:
    """A trusted key, identified by its holder reference (CHR)."""

    key_id: bytes
    generation: Generation
    key: RsaKey | EcKey
    authority: bytes | None = None
    holder_authorisation: bytes | None = None
    effective: datetime | None = None
    expires: datetime | None = None


class CertificateStore:
    """Read-only registry of certificates keyed by (generation family, key id)."""

    def __init__(self, certificates: Iterable[Certificate] = (), version: str = "") -> None:
        index: dict[tuple[Generation, bytes], Certificate] = {}
        for cert in certificates:
            index[(cert.generation.family, bytes(cert.key_id))] = cert
        self._index = MappingProxyType(index)
        self._version = version

    @property
    def version(self) -> str:
        return self._version

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self):
        return iter(self._index.values())

    def count(self, generation: Generation) -> int:
        family = generation.family
        return sum(1 for g, _ in self._index if g == family)

    def lookup(self, generation: Generation, key_id: bytes) -> Certificate | None:
        """Return the certificate for key_id, or None if it is not known."""
        return self._index.get((generation.family, bytes(key_id)))

    def extended(self, certificates: Iterable[Certificate]) -> CertificateStore:
        """Return a new store with extra certificates; this one is unchanged."""
        return CertificateStore([*self._index.values(), *certificates], self._version)


# ---------------------------------------------------------------------------
# Dataset loading
# ---------------------------------------------------------------------------


def _gen1_entry(entry: dict) -> Certificate:
    return Certificate(
        key_id=bytes.fromhex(entry["key_id"]),
        generation=Generation.GEN1,
        key=RsaKey(
            modulus=int(entry["modulus"], 16),
            exponent=int(entry["exponent"], 16),
        ),
    )


def _gen2_entry(entry: dict) -> Certificate:
    curve = CURVES.get(entry["curve"])
    if curve is None:
        raise CertificateError(f"unsupported curve {entry['curve']!r}")
    return Certificate(
        key_id=bytes.fromhex(entry["key_id"]),
        generation=Generation.GEN2_V1,
        key=EcKey(curve=curve, point=bytes.fromhex(entry["point"])),
    )


def parse_dataset(doc: dict) -> CertificateStore:
    """Build a store from a decoded dataset document."""
    try:
        certs = [_gen1_entry(e) for e in doc.get("gen1", [])]
        certs += [_gen2_entry(e) for e in doc.get("gen2", [])]
    except (KeyError, ValueError) as e:
        raise CertificateError(f"invalid certificate dataset: {e}") from e
    return CertificateStore(certs, version=str(doc.get("version", "")))


def load_store(path: str | Path | None = None) -> CertificateStore:
    """Load a certificate dataset; the embedded one unless a path is given."""
    if path is None:
        text = (resources.files("tachoparse.core.pki") / "data" / _DATASET).read_text()
    else:
        text = Path(path).read_text()
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise CertificateError(f"invalid certificate dataset: {e}") from e
    store = parse_dataset(doc)
    lg.debug(
        "certificate dataset %s: %d gen1, %d gen2",
        store.version or "-", store.count(Generation.GEN1), store.count(Generation.GEN2_V1),
    )
    return store


@functools.lru_cache(maxsize=None)
def default_store() -> CertificateStore:
    """The embedded dataset, loaded on first use and shared afterwards."""
    return load_store()
