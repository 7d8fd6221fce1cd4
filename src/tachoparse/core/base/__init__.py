from tachoparse.core.base.errors import (
    CertificateError,
    DecodeError,
    MalformedError,
    TachoError,
    TruncatedError,
)
from tachoparse.core.base.result import Card, Result, Vu
from tachoparse.core.base.types import (
    AuthStatus,
    Diagnostic,
    DiagnosticKind,
    FileKind,
    Generation,
    Malformed,
)

__all__ = [
    "AuthStatus",
    "Card",
    "CertificateError",
    "DecodeError",
    "Diagnostic",
    "DiagnosticKind",
    "FileKind",
    "Generation",
    "Malformed",
    "MalformedError",
    "Result",
    "TachoError",
    "TruncatedError",
    "Vu",
]
