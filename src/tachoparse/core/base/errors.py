from __future__ import annotations


class TachoError(Exception):
    """Base class for all tachoparse errors."""


class DecodeError(TachoError):
    """A byte sequence could not be decoded."""


class TruncatedError(DecodeError):
    """Input ended in the middle of a value or element header.

    When raised by a top-level decoder, ``partial`` carries whatever was
    decoded before the truncation point.
    """

    def __init__(self, message: str, partial: object | None = None) -> None:
        super().__init__(message)
        self.partial = partial


class MalformedError(DecodeError):
    """A value has the right size but cannot be interpreted."""


class CertificateError(TachoError):
    """A certificate could not be parsed or recovered."""
