from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from tachoparse.core.base.errors import MalformedError, TruncatedError
from tachoparse.core.wire import primitives as p
from tachoparse.core.wire.cursor import Cursor


def test_cursor_reads_and_bounds() -> None:
    cursor = Cursor(b"\x01\x02\x03\x04\x05")
    assert cursor.uint(2) == 0x0102
    sub = cursor.sub(2)
    assert sub.window == b"\x03\x04"
    assert sub.offset == 2
    assert cursor.remaining == 1
    with pytest.raises(TruncatedError):
        cursor.take(2)
    assert cursor.since(0) == b"\x01\x02\x03\x04"


def test_sub_cursor_never_reads_past_its_end() -> None:
    cursor = Cursor(b"\x00" * 8)
    sub = cursor.sub(3)
    sub.take(3)
    with pytest.raises(TruncatedError):
        sub.take(1)


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"\x12\x34", 1234),
        (b"\x00\x09", 9),
        (b"", 0),
    ],
)
def test_bcd(data: bytes, expected: int) -> None:
    assert p.bcd(data) == expected


def test_bcd_rejects_hex_digits() -> None:
    with pytest.raises(MalformedError):
        p.bcd(b"\x1A")


def test_time_real() -> None:
    assert p.time_real(b"\x65\x92\x00\x80") == datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"\x20\x24\x02\x29", date(2024, 2, 29)),
        (b"\x00\x00\x00\x00", None),
    ],
)
def test_datef(data: bytes, expected: date | None) -> None:
    assert p.datef(data) == expected


def test_datef_rejects_impossible_date() -> None:
    with pytest.raises(MalformedError):
        p.datef(b"\x20\x23\x02\x30")


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"\x01MUSTERMANN  ", "MUSTERMANN"),
        (b"\x02\xa3\xf3d\xbc", "Łódź"),
        (b"\xffanything", ""),
        (b"\x01\xff\xff\xff", ""),
    ],
)
def test_code_page_string(data: bytes, expected: str) -> None:
    assert p.code_page_string(data) == expected


def test_code_page_string_unknown_code_page() -> None:
    with pytest.raises(MalformedError):
        p.code_page_string(b"\x42abc")


def test_ia5_trims_padding() -> None:
    assert p.ia5(b"DF0000012345  \x00\x00") == "DF0000012345"
    assert p.ia5(b"\xff\xff") == ""


@pytest.mark.parametrize(
    "code, expected",
    [
        (0x0D, "D"),
        (0x11, "F"),
        (0x28, "PL"),
        (0xFD, "EC"),
        (0x60, "60"),
    ],
)
def test_nation(code: int, expected: str) -> None:
    assert p.nation(bytes([code])) == expected


def test_activity_change() -> None:
    assert p.activity_change(b"\x18\x3c") == {
        "slot": "driver",
        "driving_status": "single",
        "card_inserted": True,
        "activity": "driving",
        "minutes": 60,
    }
    value = p.activity_change(b"\xa0\x00")
    assert value["slot"] == "co-driver"
    assert value["card_inserted"] is False
    assert value["activity"] == "break/rest"


def test_card_slots_status() -> None:
    assert p.card_slots_status(b"\x21") == {"driver": "driver_card", "co_driver": "workshop_card"}
    assert p.card_slots_status(b"\x00") == {"driver": "no_card", "co_driver": "no_card"}


@pytest.mark.parametrize(
    "value, expected",
    [
        (52301, round(52 + 301 / 600, 6)),
        (-13250, round(-(13 + 250 / 600), 6)),
        (0x7FFFFF, None),
    ],
)
def test_geo_coordinate(value: int, expected: float | None) -> None:
    assert p.geo_coordinate(value.to_bytes(3, "big", signed=True)) == expected


def test_month_year() -> None:
    assert p.month_year(b"\x03\x24") == "03/24"
