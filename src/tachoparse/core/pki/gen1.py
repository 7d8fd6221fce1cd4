"""Gen1 (RSA) certificates and signatures (Annex 1B, Appendix 11).

A Gen1 certificate is 194 bytes: Sign (128) || Cn' (58) || CAR (8).
Opening Sign with the authority's key gives Sr = 6A || Cr' || H' || BC,
and the certificate content C' = Cr' || Cn' must hash (SHA-1) to H'.
"""

from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from tachoparse.core.base.errors import CertificateError
from tachoparse.core.base.types import Generation
from tachoparse.core.pki.store import Certificate, RsaKey
from tachoparse.core.wire.primitives import time_real

CERTIFICATE_LENGTH = 194
SIGNATURE_LENGTH = 128
ROOT_KEY_LENGTH = 144

_NO_EXPIRY = b"\xff\xff\xff\xff"


def _sha1(data: bytes) -> bytes:
    digest = hashes.Hash(hashes.SHA1())
    digest.update(data)
    return digest.finalize()


def authority_reference(certificate: bytes) -> bytes:
    """CAR of an unopened certificate: the key that signed it."""
    if len(certificate) != CERTIFICATE_LENGTH:
        raise CertificateError(f"gen1 certificate must be 194 bytes, got {len(certificate)}")
    return certificate[186:194]


def recover(certificate: bytes, signer: RsaKey) -> Certificate:
    """Open a certificate with its authority's key and return the holder's key.

    Raises CertificateError if the recovered block or its hash does not check out.
    """
    car = authority_reference(certificate)
    sign, cn = certificate[:128], certificate[128:186]

    sr_int = pow(int.from_bytes(sign, "big"), signer.exponent, signer.modulus)
    sr = sr_int.to_bytes(SIGNATURE_LENGTH, "big")
    if sr[0] != 0x6A or sr[-1] != 0xBC:
        raise CertificateError("certificate recovery failed: bad header or trailer")

    cr, h = sr[1:107], sr[107:127]
    content = cr + cn
    if _sha1(content) != h:
        raise CertificateError("certificate recovery failed: hash mismatch")

    # C': CPI(1) CAR(8) CHA(7) EOV(4) CHR(8) n(128) e(8)
    if content[1:9] != car:
        raise CertificateError("certificate authority reference mismatch")
    eov = content[16:20]
    return Certificate(
        key_id=content[20:28],
        generation=Generation.GEN1,
        key=RsaKey(
            modulus=int.from_bytes(content[28:156], "big"),
            exponent=int.from_bytes(content[156:164], "big"),
        ),
        authority=car,
        holder_authorisation=content[9:16],
        expires=None if eov == _NO_EXPIRY else time_real(eov),
    )


def root_key(data: bytes) -> Certificate:
    """Parse a plain Gen1 public key file: CHR(8) || n(128) || e(8)."""
    if len(data) != ROOT_KEY_LENGTH:
        raise CertificateError(f"gen1 root key must be 144 bytes, got {len(data)}")
    return Certificate(
        key_id=data[:8],
        generation=Generation.GEN1,
        key=RsaKey(
            modulus=int.from_bytes(data[8:136], "big"),
            exponent=int.from_bytes(data[136:144], "big"),
        ),
    )


def verify_signature(key: RsaKey, data: bytes, signature: bytes) -> bool:
    """RSA PKCS#1 v1.5 signature with SHA-1 over data."""
    try:
        key.public_key().verify(signature, data, padding.PKCS1v15(), hashes.SHA1())
    except (InvalidSignature, ValueError):
        return False
    return True
