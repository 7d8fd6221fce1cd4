from tachoparse.core import (
    AuthStatus,
    Card,
    CertificateStore,
    Diagnostic,
    DiagnosticKind,
    Generation,
    TruncatedError,
    Vu,
    decode_card,
    decode_vu,
    default_store,
    load_store,
    to_json,
)

__all__ = [
    "AuthStatus",
    "Card",
    "CertificateStore",
    "Diagnostic",
    "DiagnosticKind",
    "Generation",
    "TruncatedError",
    "Vu",
    "decode_card",
    "decode_vu",
    "default_store",
    "load_store",
    "to_json",
]
