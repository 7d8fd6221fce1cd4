"""Gen2 (ECC) certificates and signatures (Annex 1C, Appendix 11).

Certificate layout::

    7F21 certificate
      7F4E body                          <- signed bytes, tag and length included
        5F29 profile identifier
        42   authority reference (CAR)
        5F4C holder authorisation (CHA)
        7F49 public key
          06 domain parameters (curve OID)
          86 public point
        5F20 holder reference (CHR)
        5F25 effective date
        5F24 expiration date
      5F37 signature (r || s)
"""

from __future__ import annotations

from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature

from tachoparse.core.base.errors import CertificateError, DecodeError, MalformedError
from tachoparse.core.base.types import Generation
from tachoparse.core.pki.store import CURVES_BY_OID, Certificate, EcKey
from tachoparse.core.wire import tlv
from tachoparse.core.wire.primitives import time_real

TAG_CERTIFICATE = 0x7F21
TAG_BODY = 0x7F4E
TAG_PROFILE = 0x5F29
TAG_CAR = 0x42
TAG_CHA = 0x5F4C
TAG_PUBLIC_KEY = 0x7F49
TAG_DOMAIN_PARAMETERS = 0x06
TAG_PUBLIC_POINT = 0x86
TAG_CHR = 0x5F20
TAG_EFFECTIVE = 0x5F25
TAG_EXPIRATION = 0x5F24
TAG_SIGNATURE = 0x5F37


def decode_oid(data: bytes) -> str:
    """Decode an ASN.1 OID from DER bytes to dotted notation."""
    if not data:
        return ""
    components = [data[0] // 40, data[0] % 40]
    value = 0
    for byte in data[1:]:
        value = (value << 7) | (byte & 0x7F)
        if not (byte & 0x80):
            components.append(value)
            value = 0
    return ".".join(str(c) for c in components)


@dataclass(frozen=True)
class ParsedCertificate:
    certificate: Certificate
    profile: int
    body: bytes
    signature: bytes


def parse_certificate(data: bytes) -> ParsedCertificate:
    """Parse an encoded certificate; trailing padding is ignored.

    Raises CertificateError if the structure or the curve is not recognised.
    """
    try:
        root = tlv.parse_one(data)
        if root.tag != TAG_CERTIFICATE:
            raise CertificateError(f"not a certificate: tag {root.tag:X}")
        body = root.require(TAG_BODY)
        signature = root.require(TAG_SIGNATURE).value
        key = body.require(TAG_PUBLIC_KEY)
        oid = decode_oid(key.require(TAG_DOMAIN_PARAMETERS).value)
        point = key.require(TAG_PUBLIC_POINT).value
        profile = body.require(TAG_PROFILE).value
        car = body.require(TAG_CAR).value
        cha = body.require(TAG_CHA).value
        chr_ = body.require(TAG_CHR).value
        effective = body.require(TAG_EFFECTIVE).value
        expiration = body.require(TAG_EXPIRATION).value
    except (DecodeError, KeyError, IndexError) as e:
        raise CertificateError(f"invalid certificate: {e}") from e

    curve = CURVES_BY_OID.get(oid)
    if curve is None:
        raise CertificateError(f"unsupported curve {oid}")
    if len(effective) != 4 or len(expiration) != 4:
        raise CertificateError("certificate dates must be 4 bytes")

    cert = Certificate(
        key_id=chr_,
        generation=Generation.GEN2_V1,
        key=EcKey(curve=curve, point=point),
        authority=car,
        holder_authorisation=cha,
        effective=time_real(effective),
        expires=time_real(expiration),
    )
    return ParsedCertificate(
        certificate=cert,
        profile=profile[0] if profile else 0,
        body=body.encoded,
        signature=signature,
    )


def verify_signature(key: EcKey, data: bytes, signature: bytes) -> bool:
    """ECDSA over data with the hash matching the key's curve.

    ``signature`` is the plain r || s concatenation used on the wire.
    """
    if not signature or len(signature) % 2:
        return False
    half = len(signature) // 2
    r = int.from_bytes(signature[:half], "big")
    s = int.from_bytes(signature[half:], "big")
    try:
        key.public_key().verify(
            encode_dss_signature(r, s), data, ec.ECDSA(key.curve.hash_algorithm()),
        )
    except (InvalidSignature, CertificateError, ValueError):
        return False
    return True


def verify_certificate(parsed: ParsedCertificate, signer: EcKey) -> bool:
    return verify_signature(signer, parsed.body, parsed.signature)


def describe(data: bytes) -> dict[str, object]:
    """Certificate EF contents as plain values, for the decoded card."""
    try:
        parsed = parse_certificate(data)
    except CertificateError as e:
        raise MalformedError(str(e)) from e
    cert = parsed.certificate
    return {
        "profile_identifier": parsed.profile,
        "authority_reference": cert.authority,
        "holder_authorisation": cert.holder_authorisation,
        "curve": cert.key.curve.name,
        "public_point": cert.key.point,
        "holder_reference": cert.key_id,
        "effective_date": cert.effective,
        "expiration_date": cert.expires,
        "signature": parsed.signature,
    }
