from __future__ import annotations

import pytest

from builders import tlv
from tachoparse.core.base.errors import TruncatedError
from tachoparse.core.pki.gen2 import decode_oid
from tachoparse.core.wire import tlv as ber


def test_parse_nested() -> None:
    data = tlv(0x7F4E, tlv(0x42, b"\x01\x02") + tlv(0x7F49, tlv(0x86, b"\x04\xAA")))
    (root,) = ber.parse(data)
    assert root.tag == 0x7F4E
    assert root.constructed
    assert root.encoded == data
    assert root.require(0x42).value == b"\x01\x02"
    assert root.require(0x7F49).require(0x86).value == b"\x04\xAA"
    assert root.find(0x5F20) is None


def test_require_missing_tag() -> None:
    (node,) = ber.parse(tlv(0x7F21, tlv(0x42, b"")))
    with pytest.raises(KeyError):
        node.require(0x5F37)


def test_long_form_length() -> None:
    value = bytes(range(200))
    (node,) = ber.parse(tlv(0x5F37, value))
    assert node.tag == 0x5F37
    assert node.value == value


def test_parse_one_ignores_padding() -> None:
    data = tlv(0x7F21, tlv(0x42, b"\x01")) + b"\x00" * 20
    node = ber.parse_one(data)
    assert node.tag == 0x7F21
    assert node.require(0x42).value == b"\x01"


@pytest.mark.parametrize(
    "data",
    [
        b"\x42\x05\x01\x02",
        b"\x7F",
        b"\x42",
    ],
)
def test_truncated(data: bytes) -> None:
    with pytest.raises(TruncatedError):
        ber.parse(data)


@pytest.mark.parametrize(
    "data, expected",
    [
        (bytes.fromhex("2B2403030208010107"), "1.3.36.3.3.2.8.1.1.7"),
        (bytes.fromhex("2A8648CE3D030107"), "1.2.840.10045.3.1.7"),
        (b"", ""),
    ],
)
def test_decode_oid(data: bytes, expected: str) -> None:
    assert decode_oid(data) == expected
