"""Data types shared between card and VU record layouts."""

from __future__ import annotations

from tachoparse.core.wire import primitives as p
from tachoparse.core.wire.schema import Blob, Prim, Records, struct

# -- primitives --------------------------------------------------------------

U8 = Prim(1, p.uint)
U16 = Prim(2, p.uint)
U24 = Prim(3, p.uint)
U32 = Prim(4, p.uint)

TIME_REAL = Prim(4, p.time_real)
DATEF = Prim(4, p.datef)
BCD2 = Prim(2, p.bcd)
ODOMETER = U24
NATION = Prim(1, p.nation)
EQUIPMENT_TYPE = Prim(1, p.equipment_type)
ACTIVITY_CHANGE = Prim(2, p.activity_change)
CARD_SLOTS_STATUS = Prim(1, p.card_slots_status)
GEO_COORDINATE = Prim(3, p.geo_coordinate)

NAME = Prim(36, p.code_page_string)
ADDRESS = NAME
VEHICLE_REGISTRATION_NUMBER = Prim(14, p.code_page_string)
LANGUAGE = Prim(2, p.ia5)
CARD_NUMBER = Prim(16, p.ia5)
VIN = Prim(17, p.ia5)
TYRE_SIZE = Prim(15, p.ia5)
APPROVAL_NUMBER_1 = Prim(8, p.ia5)
APPROVAL_NUMBER_2 = Prim(16, p.ia5)
PART_NUMBER = Prim(16, p.ia5)
KEY_IDENTIFIER = Prim(8, p.hex_string)

SIGNATURE_1 = Blob(128)


def ia5(width: int) -> Prim:
    return Prim(width, p.ia5)


# -- composites --------------------------------------------------------------

EXTENDED_SERIAL_NUMBER = struct(
    ("serial_number", U32),
    ("month_year", Prim(2, p.month_year)),
    ("type", EQUIPMENT_TYPE),
    ("manufacturer_code", U8),
)

FULL_CARD_NUMBER = struct(
    ("card_type", EQUIPMENT_TYPE),
    ("card_issuing_member_state", NATION),
    ("card_number", CARD_NUMBER),
)

FULL_CARD_NUMBER_AND_GENERATION = FULL_CARD_NUMBER.extend(
    ("generation", U8),
)

VEHICLE_REGISTRATION = struct(
    ("vehicle_registration_nation", NATION),
    ("vehicle_registration_number", VEHICLE_REGISTRATION_NUMBER),
)

HOLDER_NAME = struct(
    ("holder_surname", NAME),
    ("holder_first_names", NAME),
)

SOFTWARE_IDENTIFICATION = struct(
    ("vu_software_version", ia5(4)),
    ("vu_soft_installation_date", TIME_REAL),
)

SPECIFIC_CONDITION_RECORD = struct(
    ("entry_time", TIME_REAL),
    ("specific_condition_type", U8),
)

PLACE_RECORD_1 = struct(
    ("entry_time", TIME_REAL),
    ("entry_type_daily_work_period", U8),
    ("daily_work_period_country", NATION),
    ("daily_work_period_region", U8),
    ("vehicle_odometer_value", ODOMETER),
)

GNSS_PLACE_RECORD = struct(
    ("time_stamp", TIME_REAL),
    ("gnss_accuracy", U8),
    ("geo_coordinates", struct(
        ("latitude", GEO_COORDINATE),
        ("longitude", GEO_COORDINATE),
    )),
)

GNSS_PLACE_AUTH_RECORD = GNSS_PLACE_RECORD.extend(
    ("authentication_status", U8),
)

PLACE_RECORD_2 = PLACE_RECORD_1.extend(
    ("entry_gnss_place_record", GNSS_PLACE_RECORD),
)

PLACE_AUTH_RECORD = PLACE_RECORD_1.extend(
    ("entry_gnss_place_auth_record", GNSS_PLACE_AUTH_RECORD),
)

PREVIOUS_VEHICLE_INFO_1 = struct(
    ("vehicle_registration_identification", VEHICLE_REGISTRATION),
    ("card_withdrawal_time", TIME_REAL),
)

PREVIOUS_VEHICLE_INFO_2 = PREVIOUS_VEHICLE_INFO_1.extend(
    ("vu_generation", U8),
)

DETAILED_SPEED_BLOCK = struct(
    ("speed_block_begin_date", TIME_REAL),
    ("speeds_per_second", Prim(60, list)),
)

MANUFACTURER_SPECIFIC_EVENT_FAULT_DATA = struct(
    ("manufacturer_code", U8),
    ("manufacturer_specific_error_code", Prim(3, p.hex_string)),
)

CARD_STRUCTURE_VERSION = Prim(2, p.hex_string)

SEAL_RECORD = struct(
    ("equipment_type", EQUIPMENT_TYPE),
    ("extended_seal_identifier", struct(
        ("manufacturer_code", Prim(2, p.hex_string)),
        ("seal_identifier", Prim(8, p.hex_string)),
    )),
)

# five slots, unused ones zero-filled
SEAL_DATA_VU = Records(SEAL_RECORD, count=5, skip_empty=True)

SEAL_DATA_CARD = struct(
    ("no_of_seal_records", U8),
    ("seal_records", SEAL_DATA_VU),
)
