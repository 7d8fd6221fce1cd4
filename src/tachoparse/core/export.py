"""Conversion of decoded results to JSON."""

from __future__ import annotations

import enum
import json
from datetime import date, datetime

from tachoparse.core.base.result import Result
from tachoparse.core.base.types import Malformed


def to_native(value: object) -> object:
    """Convert a decoded value to plain JSON types.

    Times become ISO 8601 strings, bytes become upper-case hex and enums
    their value. A Malformed marker becomes {"error": reason, "raw": hex}.
    """
    if isinstance(value, Malformed):
        return {"error": value.reason, "raw": value.raw.hex().upper()}
    if isinstance(value, dict):
        return {str(k): to_native(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_native(v) for v in value]
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex().upper()
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def to_json(result: Result, pretty: bool = False) -> str:
    """Serialise a decoded card or VU, compact or indented."""
    if pretty:
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    return json.dumps(result.to_dict(), separators=(",", ":"), ensure_ascii=False)
