from tachoparse.core.base import (
    AuthStatus,
    Card,
    CertificateError,
    DecodeError,
    Diagnostic,
    DiagnosticKind,
    FileKind,
    Generation,
    Malformed,
    MalformedError,
    Result,
    TachoError,
    TruncatedError,
    Vu,
)
from tachoparse.core.card import decode_card
from tachoparse.core.export import to_json, to_native
from tachoparse.core.pki import Certificate, CertificateStore, default_store, load_store, verify
from tachoparse.core.registry import REGISTRY, TagRegistry
from tachoparse.core.vu import decode_vu

__all__ = [
    "AuthStatus",
    "Card",
    "Certificate",
    "CertificateError",
    "CertificateStore",
    "DecodeError",
    "Diagnostic",
    "DiagnosticKind",
    "FileKind",
    "Generation",
    "Malformed",
    "MalformedError",
    "REGISTRY",
    "Result",
    "TachoError",
    "TagRegistry",
    "TruncatedError",
    "Vu",
    "decode_card",
    "decode_vu",
    "default_store",
    "load_store",
    "to_json",
    "to_native",
    "verify",
]
