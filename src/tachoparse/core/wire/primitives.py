"""Primitive data types shared by card and VU data (Annex 1B/1C, chapter 2).

Each decoder takes exactly the bytes of one value and returns a plain
Python value. Content that cannot be interpreted raises MalformedError;
callers own the width and never hand over short input.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from tachoparse.core.base.errors import MalformedError

# codePage byte -> Python codec (ISO/IEC 8859 parts, KOI8 for Gen2)
_CODE_PAGES: dict[int, str] = {
    0x00: "latin-1",
    0x01: "iso8859-1",
    0x02: "iso8859-2",
    0x03: "iso8859-3",
    0x04: "iso8859-4",
    0x05: "iso8859-5",
    0x06: "iso8859-6",
    0x07: "iso8859-7",
    0x08: "iso8859-8",
    0x09: "iso8859-9",
    0x0A: "iso8859-10",
    0x0B: "iso8859-11",
    0x0D: "iso8859-13",
    0x0E: "iso8859-14",
    0x0F: "iso8859-15",
    0x10: "iso8859-16",
    0x50: "koi8-r",
    0x55: "koi8-u",
}

_NO_CODE_PAGE = 0xFF

NATIONS: dict[int, str] = {
    0x00: "",
    0x01: "A",
    0x02: "AL",
    0x03: "AND",
    0x04: "ARM",
    0x05: "AZ",
    0x06: "B",
    0x07: "BG",
    0x08: "BIH",
    0x09: "BY",
    0x0A: "CH",
    0x0B: "CY",
    0x0C: "CZ",
    0x0D: "D",
    0x0E: "DK",
    0x0F: "E",
    0x10: "EST",
    0x11: "F",
    0x12: "FIN",
    0x13: "FL",
    0x14: "FR",
    0x15: "UK",
    0x16: "GE",
    0x17: "GR",
    0x18: "H",
    0x19: "HR",
    0x1A: "I",
    0x1B: "IRL",
    0x1C: "IS",
    0x1D: "KZ",
    0x1E: "L",
    0x1F: "LT",
    0x20: "LV",
    0x21: "M",
    0x22: "MC",
    0x23: "MD",
    0x24: "MK",
    0x25: "N",
    0x26: "NL",
    0x27: "P",
    0x28: "PL",
    0x29: "RO",
    0x2A: "RSM",
    0x2B: "RUS",
    0x2C: "S",
    0x2D: "SK",
    0x2E: "SLO",
    0x2F: "TM",
    0x30: "TR",
    0x31: "UA",
    0x32: "V",
    0x33: "YU",
    0x34: "MNE",
    0x35: "SRB",
    0x36: "UZ",
    0x37: "TJ",
    0xFD: "EC",
    0xFE: "EUR",
    0xFF: "WLD",
}

ACTIVITIES = ("break/rest", "availability", "work", "driving")

# EquipmentType values as they appear in card slots and card numbers
EQUIPMENT_TYPES: dict[int, str] = {
    0x00: "reserved",
    0x01: "driver_card",
    0x02: "workshop_card",
    0x03: "control_card",
    0x04: "company_card",
    0x05: "manufacturing_card",
    0x06: "vehicle_unit",
    0x07: "motion_sensor",
    0x08: "gnss_facility",
    0x09: "remote_communication_device",
    0x0A: "its_interface_module",
    0x0B: "plaque",
    0x0C: "m1_n1_adapter",
    0x0D: "european_root_ca",
    0x0E: "member_state_ca",
    0x0F: "external_gnss_connection",
}


# -- integers ----------------------------------------------------------------


def uint(data: bytes) -> int:
    """Unsigned big-endian integer of any width."""
    return int.from_bytes(data, "big")


def bcd(data: bytes) -> int:
    """Packed BCD; every nibble must be a decimal digit."""
    value = 0
    for b in data:
        hi, lo = b >> 4, b & 0x0F
        if hi > 9 or lo > 9:
            raise MalformedError(f"invalid BCD digits {data.hex().upper()}")
        value = value * 100 + hi * 10 + lo
    return value


# -- dates and times ---------------------------------------------------------


def time_real(data: bytes) -> datetime:
    """TimeReal: seconds since 1970-01-01 00:00 UTC."""
    return datetime.fromtimestamp(uint(data), tz=timezone.utc)


def datef(data: bytes) -> date | None:
    """Datef: BCD yyyy mm dd. All zero means no date."""
    if not any(data):
        return None
    digits = bcd(data)
    year, month, day = digits // 10000, (digits // 100) % 100, digits % 100
    try:
        return date(year, month, day)
    except ValueError as e:
        raise MalformedError(f"invalid date {data.hex().upper()}: {e}") from e


def month_year(data: bytes) -> str:
    """BCD mm yy, as in ExtendedSerialNumber.monthYear."""
    digits = bcd(data)
    return f"{digits // 100:02d}/{digits % 100:02d}"


# -- strings -----------------------------------------------------------------


def _trim(data: bytes) -> bytes:
    return data.rstrip(b" \x00")


def ia5(data: bytes) -> str:
    """Fixed-length IA5String, trailing padding removed."""
    if data and all(b == 0xFF for b in data):
        return ""
    return _trim(data).decode("latin-1")


def code_page_string(data: bytes) -> str:
    """Code page byte followed by text in that character set."""
    if not data:
        raise MalformedError("empty code-page string")
    code_page, text = data[0], data[1:]
    if code_page == _NO_CODE_PAGE:
        return ""
    codec = _CODE_PAGES.get(code_page)
    if codec is None:
        raise MalformedError(f"invalid code page {code_page:#04x}")
    if text and all(b == 0xFF for b in text):
        return ""
    try:
        return _trim(text).decode(codec)
    except UnicodeDecodeError as e:
        raise MalformedError(f"cannot decode text as {codec}: {e}") from e


# -- codes -------------------------------------------------------------------


def nation(data: bytes) -> str:
    """NationNumeric as its distinguishing sign, or hex if unassigned."""
    code = data[0]
    return NATIONS.get(code, f"{code:02X}")


def equipment_type(data: bytes) -> str:
    code = data[0]
    return EQUIPMENT_TYPES.get(code, f"{code:02X}")


def activity_change(data: bytes) -> dict[str, object]:
    """ActivityChangeInfo, bit layout 'scpaattttttttttt'."""
    word = uint(data)
    return {
        "slot": "co-driver" if word & 0x8000 else "driver",
        "driving_status": "crew" if word & 0x4000 else "single",
        "card_inserted": not (word & 0x2000),
        "activity": ACTIVITIES[(word >> 11) & 0x03],
        "minutes": word & 0x07FF,
    }


def card_slots_status(data: bytes) -> dict[str, str]:
    """CardSlotsStatus, 'ccccdddd' with co-driver slot in the high nibble."""
    b = data[0]
    return {"driver": _slot(b & 0x0F), "co_driver": _slot(b >> 4)}


def _slot(code: int) -> str:
    if code == 0:
        return "no_card"
    return EQUIPMENT_TYPES.get(code, f"{code:X}")


def geo_coordinate(data: bytes) -> float | None:
    """Signed ±DDMM.M x 10; out-of-range values mean 'unknown position'."""
    value = int.from_bytes(data, "big", signed=True)
    magnitude = abs(value)
    if magnitude > 180000:
        return None
    degrees = magnitude // 1000 + (magnitude % 1000) / 600
    return round(-degrees if value < 0 else degrees, 6)


def hex_string(data: bytes) -> str:
    return data.hex().upper()
