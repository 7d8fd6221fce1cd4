"""Tachograph card elementary files (Annex 1B/1C, Appendix 2 and 7).

Every EF is listed once per generation it exists in. Gen2v2 entries only
appear where the layout differs from Gen2v1; lookups fall back to Gen2v1.
"""

from __future__ import annotations

from tachoparse.core.base.errors import MalformedError
from tachoparse.core.base.types import FileKind, Generation
from tachoparse.core.pki import gen2
from tachoparse.core.records.common import (
    ADDRESS,
    APPROVAL_NUMBER_1,
    APPROVAL_NUMBER_2,
    BCD2,
    CARD_NUMBER,
    DATEF,
    EXTENDED_SERIAL_NUMBER,
    FULL_CARD_NUMBER,
    GNSS_PLACE_AUTH_RECORD,
    GNSS_PLACE_RECORD,
    HOLDER_NAME,
    KEY_IDENTIFIER,
    LANGUAGE,
    NAME,
    NATION,
    ODOMETER,
    PART_NUMBER,
    PLACE_AUTH_RECORD,
    PLACE_RECORD_1,
    PLACE_RECORD_2,
    SEAL_DATA_CARD,
    SPECIFIC_CONDITION_RECORD,
    TIME_REAL,
    TYRE_SIZE,
    U8,
    U16,
    VEHICLE_REGISTRATION,
    VIN,
    ia5,
)
from tachoparse.core.records.descriptor import RecordDescriptor
from tachoparse.core.wire import primitives as p
from tachoparse.core.wire.schema import Blob, Prim, Records, Struct, struct

GEN1 = Generation.GEN1
GEN2 = Generation.GEN2_V1
GEN2_V2 = Generation.GEN2_V2

CARD = FileKind.CARD
DRIVER = FileKind.DRIVER_CARD
WORKSHOP = FileKind.WORKSHOP_CARD
CONTROL = FileKind.CONTROL_CARD
COMPANY = FileKind.COMPANY_CARD

# -- file identifiers ----------------------------------------------------------

EF_ICC = 0x0002
EF_IC = 0x0005
EF_APPLICATION_IDENTIFICATION = 0x0501
EF_EVENTS_DATA = 0x0502
EF_FAULTS_DATA = 0x0503
EF_DRIVER_ACTIVITY_DATA = 0x0504
EF_VEHICLES_USED = 0x0505
EF_PLACES = 0x0506
EF_CURRENT_USAGE = 0x0507
EF_CONTROL_ACTIVITY_DATA = 0x0508
EF_WORKSHOP_CARD_DOWNLOAD = 0x0509
EF_CALIBRATION = 0x050A
EF_SENSOR_INSTALLATION_DATA = 0x050B
EF_CONTROLLER_ACTIVITY_DATA = 0x050C
EF_COMPANY_ACTIVITY_DATA = 0x050D
EF_CARD_DOWNLOAD = 0x050E
EF_IDENTIFICATION = 0x0520
EF_DRIVING_LICENCE_INFO = 0x0521
EF_SPECIFIC_CONDITIONS = 0x0522
EF_VEHICLE_UNITS_USED = 0x0523
EF_GNSS_PLACES = 0x0524
EF_APPLICATION_IDENTIFICATION_V2 = 0x0525
EF_PLACES_AUTHENTICATION = 0x0526
EF_GNSS_PLACES_AUTHENTICATION = 0x0527
EF_BORDER_CROSSINGS = 0x0528
EF_LOAD_UNLOAD_OPERATIONS = 0x0529
EF_LOAD_TYPE_ENTRIES = 0x0530
EF_VU_CONFIGURATION = 0x0540
EF_CARD_CERTIFICATE = 0xC100
EF_CARD_SIGN_CERTIFICATE = 0xC101
EF_CA_CERTIFICATE = 0xC108
EF_LINK_CERTIFICATE = 0xC109


# -- driver activity cyclic buffer ---------------------------------------------

_DAILY_HEADER = 12


def _ring(buf: bytes, pos: int, n: int) -> bytes:
    end = pos + n
    if end <= len(buf):
        return buf[pos:end]
    return buf[pos:] + buf[: end - len(buf)]


def _daily_record(data: bytes) -> dict[str, object]:
    changes = data[_DAILY_HEADER:]
    if len(changes) % 2:
        raise MalformedError(f"odd activity change length {len(changes)}")
    return {
        "activity_previous_record_length": p.uint(data[0:2]),
        "activity_record_length": p.uint(data[2:4]),
        "activity_record_date": p.time_real(data[4:8]),
        "activity_daily_presence_counter": p.bcd(data[8:10]),
        "activity_day_distance": p.uint(data[10:12]),
        "activity_change_info": [
            p.activity_change(changes[i : i + 2]) for i in range(0, len(changes), 2)
        ],
    }


def driver_activity(data: bytes) -> dict[str, object]:
    """CardDriverActivity: two pointers and a cyclic buffer of daily records.

    Records are chained backwards through their previous-record length,
    starting from the newest. They are returned oldest first.
    """
    if len(data) < 4:
        raise MalformedError("activity data shorter than its pointers")
    oldest, newest = p.uint(data[0:2]), p.uint(data[2:4])
    buf = data[4:]
    out: dict[str, object] = {
        "activity_pointer_oldest_day_record": oldest,
        "activity_pointer_newest_record": newest,
        "activity_daily_records": [],
    }
    if not any(buf):
        return out
    size = len(buf)
    if oldest >= size or newest >= size:
        raise MalformedError(f"activity pointers {oldest}/{newest} outside {size}-byte buffer")

    records = []
    pos, walked = newest, 0
    while True:
        header = _ring(buf, pos, _DAILY_HEADER)
        previous, length = p.uint(header[0:2]), p.uint(header[2:4])
        if length < _DAILY_HEADER or length > size:
            raise MalformedError(f"activity record at {pos} has length {length}")
        records.append(_daily_record(_ring(buf, pos, length)))
        walked += length
        if pos == oldest or previous == 0:
            break
        if walked >= size:
            raise MalformedError("activity records do not reach the oldest record")
        pos = (pos - previous) % size
    records.reverse()
    out["activity_daily_records"] = records
    return out


DRIVER_ACTIVITY = Prim(None, driver_activity)


# -- shared pieces --------------------------------------------------------------

def _icc(approval_number: Prim) -> Struct:
    return struct(
        ("clock_stop", U8),
        ("card_extended_serial_number", EXTENDED_SERIAL_NUMBER),
        ("card_approval_number", approval_number),
        ("card_personaliser_id", U8),
        ("embedder_ic_assembler_id", struct(
            ("country_code", ia5(2)),
            ("module_embedder", Prim(2, p.hex_string)),
            ("manufacturer_information", U8),
        )),
        ("ic_identifier", Prim(2, p.hex_string)),
    )


def _pointer_records(pointer: str, width: Prim, item) -> Struct:
    return struct(
        (pointer, width),
        ("records", Records(item, skip_empty=True)),
    )


CARD_ICC_IDENTIFICATION_1 = _icc(APPROVAL_NUMBER_1)
CARD_ICC_IDENTIFICATION_2 = _icc(APPROVAL_NUMBER_2)

CARD_CHIP_IDENTIFICATION = struct(
    ("ic_serial_number", Prim(4, p.hex_string)),
    ("ic_manufacturing_references", Prim(4, p.hex_string)),
)

_APPLICATION_HEADER = struct(
    ("type_of_tachograph_card_id", Prim(1, p.equipment_type)),
    ("card_structure_version", Prim(2, p.hex_string)),
)

DRIVER_APPLICATION_IDENTIFICATION_1 = _APPLICATION_HEADER.extend(
    ("no_of_events_per_type", U8),
    ("no_of_faults_per_type", U8),
    ("activity_structure_length", U16),
    ("no_of_card_vehicle_records", U16),
    ("no_of_card_place_records", U8),
)

DRIVER_APPLICATION_IDENTIFICATION_2 = _APPLICATION_HEADER.extend(
    ("no_of_events_per_type", U8),
    ("no_of_faults_per_type", U8),
    ("activity_structure_length", U16),
    ("no_of_card_vehicle_records", U16),
    ("no_of_card_place_records", U16),
    ("no_of_gnss_ad_records", U16),
    ("no_of_specific_condition_records", U16),
    ("no_of_card_vehicle_unit_records", U16),
)

WORKSHOP_APPLICATION_IDENTIFICATION_1 = DRIVER_APPLICATION_IDENTIFICATION_1.extend(
    ("no_of_calibration_records", U8),
)

WORKSHOP_APPLICATION_IDENTIFICATION_2 = _APPLICATION_HEADER.extend(
    ("no_of_events_per_type", U8),
    ("no_of_faults_per_type", U8),
    ("activity_structure_length", U16),
    ("no_of_card_vehicle_records", U16),
    ("no_of_card_place_records", U16),
    ("no_of_calibration_records", U8),
    ("no_of_gnss_ad_records", U16),
    ("no_of_specific_condition_records", U16),
    ("no_of_card_vehicle_unit_records", U16),
)

CONTROL_APPLICATION_IDENTIFICATION = _APPLICATION_HEADER.extend(
    ("no_of_control_activity_records", U16),
)

COMPANY_APPLICATION_IDENTIFICATION = _APPLICATION_HEADER.extend(
    ("no_of_company_activity_records", U16),
)

APPLICATION_IDENTIFICATION_V2 = struct(
    ("no_of_border_crossing_records", U16),
    ("no_of_load_unload_records", U16),
    ("no_of_load_type_entry_records", U16),
    ("vu_configuration_length_range", U16),
)

CARD_EVENT_RECORD = struct(
    ("event_type", U8),
    ("event_begin_time", TIME_REAL),
    ("event_end_time", TIME_REAL),
    ("event_vehicle_registration", VEHICLE_REGISTRATION),
)

CARD_FAULT_RECORD = struct(
    ("fault_type", U8),
    ("fault_begin_time", TIME_REAL),
    ("fault_end_time", TIME_REAL),
    ("fault_vehicle_registration", VEHICLE_REGISTRATION),
)

CARD_EVENT_DATA = Records(CARD_EVENT_RECORD, skip_empty=True)
CARD_FAULT_DATA = Records(CARD_FAULT_RECORD, skip_empty=True)

CARD_VEHICLE_RECORD_1 = struct(
    ("vehicle_odometer_begin", ODOMETER),
    ("vehicle_odometer_end", ODOMETER),
    ("vehicle_first_use", TIME_REAL),
    ("vehicle_last_use", TIME_REAL),
    ("vehicle_registration", VEHICLE_REGISTRATION),
    ("vu_data_block_counter", BCD2),
)

CARD_VEHICLE_RECORD_2 = CARD_VEHICLE_RECORD_1.extend(
    ("vehicle_identification_number", VIN),
)

VEHICLES_USED_1 = _pointer_records("vehicle_pointer_newest_record", U16, CARD_VEHICLE_RECORD_1)
VEHICLES_USED_2 = _pointer_records("vehicle_pointer_newest_record", U16, CARD_VEHICLE_RECORD_2)

PLACES_1 = _pointer_records("place_pointer_newest_record", U8, PLACE_RECORD_1)
PLACES_2 = _pointer_records("place_pointer_newest_record", U16, PLACE_RECORD_2)
PLACES_2_V2 = _pointer_records("place_pointer_newest_record", U16, PLACE_AUTH_RECORD)

CURRENT_USAGE = struct(
    ("session_open_time", TIME_REAL),
    ("session_open_vehicle", VEHICLE_REGISTRATION),
)

_CONTROL_RECORD = struct(
    ("control_type", U8),
    ("control_time", TIME_REAL),
    ("control_card_number", FULL_CARD_NUMBER),
    ("control_vehicle_registration", VEHICLE_REGISTRATION),
    ("control_download_period_begin", TIME_REAL),
    ("control_download_period_end", TIME_REAL),
)

CONTROL_ACTIVITY_DATA = _CONTROL_RECORD

CARD_DOWNLOAD = struct(
    ("last_card_download", TIME_REAL),
)

CARD_IDENTIFICATION = struct(
    ("card_issuing_member_state", NATION),
    ("card_number", CARD_NUMBER),
    ("card_issuing_authority_name", NAME),
    ("card_issue_date", TIME_REAL),
    ("card_validity_begin", TIME_REAL),
    ("card_expiry_date", TIME_REAL),
)

DRIVER_CARD_HOLDER_IDENTIFICATION = struct(
    ("card_holder_name", HOLDER_NAME),
    ("card_holder_birth_date", DATEF),
    ("card_holder_preferred_language", LANGUAGE),
)

WORKSHOP_CARD_HOLDER_IDENTIFICATION = struct(
    ("workshop_name", NAME),
    ("workshop_address", ADDRESS),
    ("card_holder_name", HOLDER_NAME),
    ("card_holder_preferred_language", LANGUAGE),
)

CONTROL_CARD_HOLDER_IDENTIFICATION = struct(
    ("control_body_name", NAME),
    ("control_body_address", ADDRESS),
    ("card_holder_name", HOLDER_NAME),
    ("card_holder_preferred_language", LANGUAGE),
)

COMPANY_CARD_HOLDER_IDENTIFICATION = struct(
    ("company_name", NAME),
    ("company_address", ADDRESS),
    ("card_holder_preferred_language", LANGUAGE),
)


def _identification(holder_name: str, holder) -> Struct:
    return struct(
        ("card_identification", CARD_IDENTIFICATION),
        (holder_name, holder),
    )


IDENTIFICATION = {
    CARD: _identification("card_holder_identification", Blob()),
    DRIVER: _identification("driver_card_holder_identification", DRIVER_CARD_HOLDER_IDENTIFICATION),
    WORKSHOP: _identification("workshop_card_holder_identification", WORKSHOP_CARD_HOLDER_IDENTIFICATION),
    CONTROL: _identification("control_card_holder_identification", CONTROL_CARD_HOLDER_IDENTIFICATION),
    COMPANY: _identification("company_card_holder_identification", COMPANY_CARD_HOLDER_IDENTIFICATION),
}

DRIVING_LICENCE_INFO = struct(
    ("driving_licence_issuing_authority", NAME),
    ("driving_licence_issuing_nation", NATION),
    ("driving_licence_number", ia5(16)),
)

SPECIFIC_CONDITIONS_1 = Records(SPECIFIC_CONDITION_RECORD, skip_empty=True)
SPECIFIC_CONDITIONS_2 = _pointer_records(
    "condition_pointer_newest_record", U16, SPECIFIC_CONDITION_RECORD,
)

CARD_VEHICLE_UNIT_RECORD = struct(
    ("time_stamp", TIME_REAL),
    ("manufacturer_code", U8),
    ("device_id", U8),
    ("vu_software_version", ia5(4)),
)

VEHICLE_UNITS_USED = _pointer_records(
    "vehicle_unit_pointer_newest_record", U16, CARD_VEHICLE_UNIT_RECORD,
)

GNSS_ACCUMULATED_DRIVING_RECORD = struct(
    ("time_stamp", TIME_REAL),
    ("gnss_place_record", GNSS_PLACE_RECORD),
    ("vehicle_odometer_value", ODOMETER),
)

GNSS_AUTH_ACCUMULATED_DRIVING_RECORD = struct(
    ("time_stamp", TIME_REAL),
    ("gnss_place_auth_record", GNSS_PLACE_AUTH_RECORD),
    ("vehicle_odometer_value", ODOMETER),
)

GNSS_PLACES_2 = _pointer_records("gnss_ad_pointer_newest_record", U16, GNSS_ACCUMULATED_DRIVING_RECORD)
GNSS_PLACES_2_V2 = _pointer_records(
    "gnss_ad_pointer_newest_record", U16, GNSS_AUTH_ACCUMULATED_DRIVING_RECORD,
)

_AUTH_STATUS_RECORD = struct(
    ("entry_time", TIME_REAL),
    ("authentication_status", U8),
)

PLACES_AUTHENTICATION = _pointer_records(
    "place_auth_pointer_newest_record", U16, _AUTH_STATUS_RECORD,
)
GNSS_PLACES_AUTHENTICATION = _pointer_records(
    "gnss_auth_pointer_newest_record", U16, _AUTH_STATUS_RECORD,
)

BORDER_CROSSINGS = _pointer_records("border_crossing_pointer_newest_record", U16, struct(
    ("country_left", NATION),
    ("country_entered", NATION),
    ("gnss_place_auth_record", GNSS_PLACE_AUTH_RECORD),
    ("vehicle_odometer_value", ODOMETER),
))

LOAD_UNLOAD_OPERATIONS = _pointer_records("load_unload_pointer_newest_record", U16, struct(
    ("time_stamp", TIME_REAL),
    ("operation_type", U8),
    ("gnss_place_auth_record", GNSS_PLACE_AUTH_RECORD),
    ("vehicle_odometer_value", ODOMETER),
))

LOAD_TYPE_ENTRIES = _pointer_records("load_type_entry_pointer_newest_record", U16, struct(
    ("time_stamp", TIME_REAL),
    ("load_type_entered", U8),
))

# -- workshop, control and company cards ------------------------------------------

WORKSHOP_CARD_DOWNLOAD = struct(
    ("no_of_calibrations_since_download", U16),
)

WORKSHOP_CARD_CALIBRATION_RECORD_1 = struct(
    ("calibration_purpose", U8),
    ("vehicle_identification_number", VIN),
    ("vehicle_registration", VEHICLE_REGISTRATION),
    ("w_vehicle_characteristic_constant", U16),
    ("k_constant_of_recording_equipment", U16),
    ("l_tyre_circumference", U16),
    ("tyre_size", TYRE_SIZE),
    ("authorised_speed", U8),
    ("old_odometer_value", ODOMETER),
    ("new_odometer_value", ODOMETER),
    ("old_time_value", TIME_REAL),
    ("new_time_value", TIME_REAL),
    ("next_calibration_date", TIME_REAL),
    ("vu_part_number", PART_NUMBER),
    ("vu_serial_number", EXTENDED_SERIAL_NUMBER),
    ("sensor_serial_number", EXTENDED_SERIAL_NUMBER),
)

CALIBRATION_1 = struct(
    ("calibration_total_number", U16),
    ("calibration_pointer_newest_record", U8),
    ("calibration_records", Records(WORKSHOP_CARD_CALIBRATION_RECORD_1, skip_empty=True)),
)

WORKSHOP_CARD_CALIBRATION_RECORD_2 = WORKSHOP_CARD_CALIBRATION_RECORD_1.extend(
    ("sensor_gnss_serial_number", EXTENDED_SERIAL_NUMBER),
    ("rcm_serial_number", EXTENDED_SERIAL_NUMBER),
    ("seal_data_card", SEAL_DATA_CARD),
)

CALIBRATION_2 = struct(
    ("calibration_total_number", U16),
    ("calibration_pointer_newest_record", U8),
    ("calibration_records", Records(WORKSHOP_CARD_CALIBRATION_RECORD_2, skip_empty=True)),
)

CONTROLLER_ACTIVITY_DATA = _pointer_records("control_pointer_newest_record", U16, struct(
    ("control_type", U8),
    ("control_time", TIME_REAL),
    ("controlled_card_number", FULL_CARD_NUMBER),
    ("controlled_vehicle_registration", VEHICLE_REGISTRATION),
    ("control_download_period_begin", TIME_REAL),
    ("control_download_period_end", TIME_REAL),
))

COMPANY_ACTIVITY_DATA = _pointer_records("company_pointer_newest_record", U16, struct(
    ("company_activity_type", U8),
    ("company_activity_time", TIME_REAL),
    ("card_number_information", FULL_CARD_NUMBER),
    ("vehicle_registration_information", VEHICLE_REGISTRATION),
    ("download_period_begin", TIME_REAL),
    ("download_period_end", TIME_REAL),
))

# -- certificates ----------------------------------------------------------------

CERTIFICATE_1 = struct(
    ("signature", Blob(128)),
    ("public_key_remainder", Blob(58)),
    ("certification_authority_reference", KEY_IDENTIFIER),
)

CERTIFICATE_2 = Prim(None, gen2.describe)

# Certificates found on a card, from the authority towards the data signer.
CERTIFICATE_CHAIN = {
    GEN1: (EF_CA_CERTIFICATE, EF_CARD_CERTIFICATE),
    GEN2: (EF_LINK_CERTIFICATE, EF_CA_CERTIFICATE, EF_CARD_SIGN_CERTIFICATE),
}


# -- descriptor table ----------------------------------------------------------

def _ef(tag, name, kind, generation, shape, signed=True) -> RecordDescriptor:
    return RecordDescriptor(
        tag=tag, name=name, kind=kind, generation=generation, shape=shape, signed=signed,
    )


def _common(generation: Generation) -> list[RecordDescriptor]:
    g1 = generation is GEN1
    return [
        _ef(EF_ICC, "card_icc_identification", CARD, generation,
            CARD_ICC_IDENTIFICATION_1 if g1 else CARD_ICC_IDENTIFICATION_2, signed=False),
        _ef(EF_IC, "card_chip_identification", CARD, generation,
            CARD_CHIP_IDENTIFICATION, signed=False),
        _ef(EF_EVENTS_DATA, "card_event_data", CARD, generation, CARD_EVENT_DATA),
        _ef(EF_FAULTS_DATA, "card_fault_data", CARD, generation, CARD_FAULT_DATA),
        _ef(EF_DRIVER_ACTIVITY_DATA, "driver_activity_data", CARD, generation, DRIVER_ACTIVITY),
        _ef(EF_VEHICLES_USED, "vehicles_used", CARD, generation,
            VEHICLES_USED_1 if g1 else VEHICLES_USED_2),
        _ef(EF_PLACES, "places", CARD, generation, PLACES_1 if g1 else PLACES_2),
        _ef(EF_CURRENT_USAGE, "current_usage", CARD, generation, CURRENT_USAGE),
        _ef(EF_CONTROL_ACTIVITY_DATA, "control_activity_data", CARD, generation,
            CONTROL_ACTIVITY_DATA),
        _ef(EF_CARD_DOWNLOAD, "card_download", CARD, generation, CARD_DOWNLOAD),
        _ef(EF_DRIVING_LICENCE_INFO, "driving_licence_info", CARD, generation,
            DRIVING_LICENCE_INFO),
        _ef(EF_SPECIFIC_CONDITIONS, "specific_conditions", CARD, generation,
            SPECIFIC_CONDITIONS_1 if g1 else SPECIFIC_CONDITIONS_2),
        *[
            _ef(EF_IDENTIFICATION, "identification", kind, generation, shape)
            for kind, shape in IDENTIFICATION.items()
        ],
        _ef(EF_APPLICATION_IDENTIFICATION, "application_identification", DRIVER, generation,
            DRIVER_APPLICATION_IDENTIFICATION_1 if g1 else DRIVER_APPLICATION_IDENTIFICATION_2),
        _ef(EF_APPLICATION_IDENTIFICATION, "application_identification", WORKSHOP, generation,
            WORKSHOP_APPLICATION_IDENTIFICATION_1 if g1 else WORKSHOP_APPLICATION_IDENTIFICATION_2),
        _ef(EF_APPLICATION_IDENTIFICATION, "application_identification", CONTROL, generation,
            CONTROL_APPLICATION_IDENTIFICATION),
        _ef(EF_APPLICATION_IDENTIFICATION, "application_identification", COMPANY, generation,
            COMPANY_APPLICATION_IDENTIFICATION),
        _ef(EF_WORKSHOP_CARD_DOWNLOAD, "workshop_card_download", WORKSHOP, generation,
            WORKSHOP_CARD_DOWNLOAD),
        _ef(EF_CALIBRATION, "calibration", WORKSHOP, generation,
            CALIBRATION_1 if g1 else CALIBRATION_2),
        _ef(EF_SENSOR_INSTALLATION_DATA, "sensor_installation_data", WORKSHOP, generation, Blob()),
        _ef(EF_CONTROLLER_ACTIVITY_DATA, "controller_activity_data", CONTROL, generation,
            CONTROLLER_ACTIVITY_DATA),
        _ef(EF_COMPANY_ACTIVITY_DATA, "company_activity_data", COMPANY, generation,
            COMPANY_ACTIVITY_DATA),
    ]


CARD_DESCRIPTORS: tuple[RecordDescriptor, ...] = (
    *_common(GEN1),
    _ef(EF_CARD_CERTIFICATE, "card_certificate", CARD, GEN1, CERTIFICATE_1, signed=False),
    _ef(EF_CA_CERTIFICATE, "ca_certificate", CARD, GEN1, CERTIFICATE_1, signed=False),

    *_common(GEN2),
    _ef(EF_VEHICLE_UNITS_USED, "vehicle_units_used", CARD, GEN2, VEHICLE_UNITS_USED),
    _ef(EF_GNSS_PLACES, "gnss_places", CARD, GEN2, GNSS_PLACES_2),
    _ef(EF_CARD_CERTIFICATE, "card_certificate", CARD, GEN2, CERTIFICATE_2, signed=False),
    _ef(EF_CARD_SIGN_CERTIFICATE, "card_sign_certificate", CARD, GEN2, CERTIFICATE_2, signed=False),
    _ef(EF_CA_CERTIFICATE, "ca_certificate", CARD, GEN2, CERTIFICATE_2, signed=False),
    _ef(EF_LINK_CERTIFICATE, "link_certificate", CARD, GEN2, CERTIFICATE_2, signed=False),

    _ef(EF_PLACES, "places", CARD, GEN2_V2, PLACES_2_V2),
    _ef(EF_GNSS_PLACES, "gnss_places", CARD, GEN2_V2, GNSS_PLACES_2_V2),
    _ef(EF_APPLICATION_IDENTIFICATION_V2, "application_identification_v2", CARD, GEN2_V2,
        APPLICATION_IDENTIFICATION_V2),
    _ef(EF_PLACES_AUTHENTICATION, "places_authentication", CARD, GEN2_V2, PLACES_AUTHENTICATION),
    _ef(EF_GNSS_PLACES_AUTHENTICATION, "gnss_places_authentication", CARD, GEN2_V2,
        GNSS_PLACES_AUTHENTICATION),
    _ef(EF_BORDER_CROSSINGS, "border_crossings", CARD, GEN2_V2, BORDER_CROSSINGS),
    _ef(EF_LOAD_UNLOAD_OPERATIONS, "load_unload_operations", CARD, GEN2_V2, LOAD_UNLOAD_OPERATIONS),
    _ef(EF_LOAD_TYPE_ENTRIES, "load_type_entries", CARD, GEN2_V2, LOAD_TYPE_ENTRIES),
    _ef(EF_VU_CONFIGURATION, "vu_configuration", CARD, GEN2_V2, Blob()),
)
