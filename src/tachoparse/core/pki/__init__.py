from tachoparse.core.pki.store import (
    CURVES,
    Certificate,
    CertificateStore,
    Curve,
    EcKey,
    RsaKey,
    default_store,
    load_store,
    parse_dataset,
)
from tachoparse.core.pki.verify import SignedBlock, authenticate, chain, verify

__all__ = [
    "CURVES",
    "Certificate",
    "CertificateStore",
    "Curve",
    "EcKey",
    "RsaKey",
    "SignedBlock",
    "authenticate",
    "chain",
    "default_store",
    "load_store",
    "parse_dataset",
    "verify",
]
