"""Vehicle unit download blocks (Annex 1B/1C, Appendix 7).

A VU download is a run of TREP-tagged blocks. Gen1 blocks are a fixed
sequence of fields followed by a 128-byte RSA signature. Gen2 blocks are
a sequence of record arrays, each announcing its record type, record size
and record count, closed by a signature record array.
"""

from __future__ import annotations

from tachoparse.core.base.types import FileKind, Generation
from tachoparse.core.pki import gen2
from tachoparse.core.records.common import (
    ACTIVITY_CHANGE,
    ADDRESS,
    APPROVAL_NUMBER_1,
    APPROVAL_NUMBER_2,
    CARD_NUMBER,
    CARD_SLOTS_STATUS,
    CARD_STRUCTURE_VERSION,
    DETAILED_SPEED_BLOCK,
    EXTENDED_SERIAL_NUMBER,
    FULL_CARD_NUMBER,
    FULL_CARD_NUMBER_AND_GENERATION,
    GNSS_PLACE_AUTH_RECORD,
    GNSS_PLACE_RECORD,
    HOLDER_NAME,
    MANUFACTURER_SPECIFIC_EVENT_FAULT_DATA,
    NAME,
    NATION,
    ODOMETER,
    PART_NUMBER,
    PLACE_AUTH_RECORD,
    PLACE_RECORD_1,
    PLACE_RECORD_2,
    PREVIOUS_VEHICLE_INFO_1,
    PREVIOUS_VEHICLE_INFO_2,
    SEAL_DATA_VU,
    SOFTWARE_IDENTIFICATION,
    SPECIFIC_CONDITION_RECORD,
    TIME_REAL,
    TYRE_SIZE,
    U8,
    U16,
    VEHICLE_REGISTRATION,
    VEHICLE_REGISTRATION_NUMBER,
    VIN,
    ia5,
)
from tachoparse.core.records.descriptor import Layout, RecordDescriptor, RecordType
from tachoparse.core.wire.schema import Blob, Prim, Records, struct

GEN1 = Generation.GEN1
GEN2 = Generation.GEN2_V1
GEN2_V2 = Generation.GEN2_V2

VU = FileKind.VU

SIGNATURE_LENGTH_1 = 128
CERTIFICATE_LENGTH_1 = 194

TREP_DOWNLOAD_INTERFACE_VERSION = 0x7600

# -- shared records --------------------------------------------------------------

VU_DOWNLOADABLE_PERIOD = struct(
    ("min_downloadable_time", TIME_REAL),
    ("max_downloadable_time", TIME_REAL),
)

VU_OVER_SPEEDING_CONTROL_DATA = struct(
    ("last_overspeed_control_time", TIME_REAL),
    ("first_overspeed_since", TIME_REAL),
    ("number_of_overspeed_since", U8),
)

VU_TIME_ADJUSTMENT_GNSS_RECORD = struct(
    ("old_time_value", TIME_REAL),
    ("new_time_value", TIME_REAL),
)


# -- Gen1 blocks --------------------------------------------------------------------

VU_DOWNLOAD_ACTIVITY_DATA_1 = struct(
    ("downloading_time", TIME_REAL),
    ("full_card_number", FULL_CARD_NUMBER),
    ("company_or_workshop_name", NAME),
)

VU_COMPANY_LOCKS_RECORD_1 = struct(
    ("lock_in_time", TIME_REAL),
    ("lock_out_time", TIME_REAL),
    ("company_name", NAME),
    ("company_address", ADDRESS),
    ("company_card_number", FULL_CARD_NUMBER),
)

VU_CONTROL_ACTIVITY_RECORD_1 = struct(
    ("control_type", U8),
    ("control_time", TIME_REAL),
    ("control_card_number", FULL_CARD_NUMBER),
    ("download_period_begin_time", TIME_REAL),
    ("download_period_end_time", TIME_REAL),
)

OVERVIEW_1 = struct(
    ("member_state_certificate", Blob(CERTIFICATE_LENGTH_1)),
    ("vu_certificate", Blob(CERTIFICATE_LENGTH_1)),
    ("vehicle_identification_number", VIN),
    ("vehicle_registration_identification", VEHICLE_REGISTRATION),
    ("current_date_time", TIME_REAL),
    ("vu_downloadable_period", VU_DOWNLOADABLE_PERIOD),
    ("card_slots_status", CARD_SLOTS_STATUS),
    ("vu_download_activity_data", VU_DOWNLOAD_ACTIVITY_DATA_1),
    ("vu_company_locks_data", Records(VU_COMPANY_LOCKS_RECORD_1, count_width=1)),
    ("vu_control_activity_data", Records(VU_CONTROL_ACTIVITY_RECORD_1, count_width=1)),
)

VU_CARD_IW_RECORD_1 = struct(
    ("card_holder_name", HOLDER_NAME),
    ("full_card_number", FULL_CARD_NUMBER),
    ("card_expiry_date", TIME_REAL),
    ("card_insertion_time", TIME_REAL),
    ("vehicle_odometer_value_at_insertion", ODOMETER),
    ("card_slot_number", U8),
    ("card_withdrawal_time", TIME_REAL),
    ("vehicle_odometer_value_at_withdrawal", ODOMETER),
    ("previous_vehicle_info", PREVIOUS_VEHICLE_INFO_1),
    ("manual_input_flag", U8),
)

VU_PLACE_DAILY_WORK_PERIOD_RECORD_1 = struct(
    ("full_card_number", FULL_CARD_NUMBER),
    ("place_record", PLACE_RECORD_1),
)

ACTIVITIES_1 = struct(
    ("date_of_day_downloaded", TIME_REAL),
    ("odometer_value_midnight", ODOMETER),
    ("vu_card_iw_data", Records(VU_CARD_IW_RECORD_1, count_width=2)),
    ("vu_activity_daily_data", Records(ACTIVITY_CHANGE, count_width=2)),
    ("vu_place_daily_work_period_data", Records(VU_PLACE_DAILY_WORK_PERIOD_RECORD_1, count_width=1)),
    ("vu_specific_condition_data", Records(SPECIFIC_CONDITION_RECORD, count_width=2)),
)

_CARD_NUMBERS_1 = (
    ("card_number_driver_slot_begin", FULL_CARD_NUMBER),
    ("card_number_codriver_slot_begin", FULL_CARD_NUMBER),
    ("card_number_driver_slot_end", FULL_CARD_NUMBER),
    ("card_number_codriver_slot_end", FULL_CARD_NUMBER),
)

VU_FAULT_RECORD_1 = struct(
    ("fault_type", U8),
    ("fault_record_purpose", U8),
    ("fault_begin_time", TIME_REAL),
    ("fault_end_time", TIME_REAL),
    *_CARD_NUMBERS_1,
)

VU_EVENT_RECORD_1 = struct(
    ("event_type", U8),
    ("event_record_purpose", U8),
    ("event_begin_time", TIME_REAL),
    ("event_end_time", TIME_REAL),
    *_CARD_NUMBERS_1,
    ("similar_events_number", U8),
)

VU_OVER_SPEEDING_EVENT_RECORD_1 = struct(
    ("event_type", U8),
    ("event_record_purpose", U8),
    ("event_begin_time", TIME_REAL),
    ("event_end_time", TIME_REAL),
    ("max_speed_value", U8),
    ("average_speed_value", U8),
    ("card_number_driver_slot_begin", FULL_CARD_NUMBER),
    ("similar_events_number", U8),
)

VU_TIME_ADJUSTMENT_RECORD_1 = struct(
    ("old_time_value", TIME_REAL),
    ("new_time_value", TIME_REAL),
    ("workshop_name", NAME),
    ("workshop_address", ADDRESS),
    ("workshop_card_number", FULL_CARD_NUMBER),
)

EVENTS_AND_FAULTS_1 = struct(
    ("vu_fault_data", Records(VU_FAULT_RECORD_1, count_width=1)),
    ("vu_event_data", Records(VU_EVENT_RECORD_1, count_width=1)),
    ("vu_over_speeding_control_data", VU_OVER_SPEEDING_CONTROL_DATA),
    ("vu_over_speeding_event_data", Records(VU_OVER_SPEEDING_EVENT_RECORD_1, count_width=1)),
    ("vu_time_adjustment_data", Records(VU_TIME_ADJUSTMENT_RECORD_1, count_width=1)),
)

DETAILED_SPEED_1 = struct(
    ("vu_detailed_speed_data", Records(DETAILED_SPEED_BLOCK, count_width=2)),
)

VU_IDENTIFICATION_1 = struct(
    ("vu_manufacturer_name", NAME),
    ("vu_manufacturer_address", ADDRESS),
    ("vu_part_number", PART_NUMBER),
    ("vu_serial_number", EXTENDED_SERIAL_NUMBER),
    ("vu_software_identification", SOFTWARE_IDENTIFICATION),
    ("vu_manufacturing_date", TIME_REAL),
    ("vu_approval_number", APPROVAL_NUMBER_1),
)

SENSOR_PAIRED_1 = struct(
    ("sensor_serial_number", EXTENDED_SERIAL_NUMBER),
    ("sensor_approval_number", APPROVAL_NUMBER_1),
    ("sensor_pairing_date_first", TIME_REAL),
)

VU_CALIBRATION_RECORD_1 = struct(
    ("calibration_purpose", U8),
    ("workshop_name", NAME),
    ("workshop_address", ADDRESS),
    ("workshop_card_number", FULL_CARD_NUMBER),
    ("workshop_card_expiry_date", TIME_REAL),
    ("vehicle_identification_number", VIN),
    ("vehicle_registration_identification", VEHICLE_REGISTRATION),
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
)

TECHNICAL_DATA_1 = struct(
    ("vu_identification", VU_IDENTIFICATION_1),
    ("sensor_paired", SENSOR_PAIRED_1),
    ("vu_calibration_data", Records(VU_CALIBRATION_RECORD_1, count_width=1)),
)


# -- Gen2 record types ----------------------------------------------------------------

RECORD_TYPE_SIGNATURE = 0x08
RECORD_TYPE_MEMBER_STATE_CERTIFICATE = 0x04
RECORD_TYPE_VU_CERTIFICATE = 0x0F

_CARD_NUMBERS_2 = (
    ("card_number_and_gen_driver_slot", FULL_CARD_NUMBER_AND_GENERATION),
    ("card_number_and_gen_codriver_slot", FULL_CARD_NUMBER_AND_GENERATION),
)

VU_CARD_IW_RECORD_2 = struct(
    ("card_holder_name", HOLDER_NAME),
    ("full_card_number_and_generation", FULL_CARD_NUMBER_AND_GENERATION),
    ("card_expiry_date", TIME_REAL),
    ("card_insertion_time", TIME_REAL),
    ("vehicle_odometer_value_at_insertion", ODOMETER),
    ("card_slot_number", U8),
    ("card_withdrawal_time", TIME_REAL),
    ("vehicle_odometer_value_at_withdrawal", ODOMETER),
    ("previous_vehicle_info", PREVIOUS_VEHICLE_INFO_2),
    ("manual_input_flag", U8),
)

VU_COMPANY_LOCKS_RECORD_2 = struct(
    ("lock_in_time", TIME_REAL),
    ("lock_out_time", TIME_REAL),
    ("company_name", NAME),
    ("company_address", ADDRESS),
    ("company_card_number_and_generation", FULL_CARD_NUMBER_AND_GENERATION),
)

VU_CONTROL_ACTIVITY_RECORD_2 = struct(
    ("control_type", U8),
    ("control_time", TIME_REAL),
    ("control_card_number_and_generation", FULL_CARD_NUMBER_AND_GENERATION),
    ("download_period_begin_time", TIME_REAL),
    ("download_period_end_time", TIME_REAL),
)

VU_DOWNLOAD_ACTIVITY_DATA_2 = struct(
    ("downloading_time", TIME_REAL),
    ("full_card_number_and_generation", FULL_CARD_NUMBER_AND_GENERATION),
    ("company_or_workshop_name", NAME),
)

VU_GNSS_AD_RECORD_2 = struct(
    ("time_stamp", TIME_REAL),
    *_CARD_NUMBERS_2,
    ("gnss_place_record", GNSS_PLACE_RECORD),
    ("vehicle_odometer_value", ODOMETER),
)

VU_GNSS_AD_RECORD_2_V2 = struct(
    ("time_stamp", TIME_REAL),
    *_CARD_NUMBERS_2,
    ("gnss_place_auth_record", GNSS_PLACE_AUTH_RECORD),
    ("vehicle_odometer_value", ODOMETER),
)

VU_IDENTIFICATION_2 = struct(
    ("vu_manufacturer_name", NAME),
    ("vu_manufacturer_address", ADDRESS),
    ("vu_part_number", PART_NUMBER),
    ("vu_serial_number", EXTENDED_SERIAL_NUMBER),
    ("vu_software_identification", SOFTWARE_IDENTIFICATION),
    ("vu_manufacturing_date", TIME_REAL),
    ("vu_approval_number", APPROVAL_NUMBER_2),
    ("vu_generation", U8),
    ("vu_ability", U8),
)

VU_IDENTIFICATION_2_V2 = VU_IDENTIFICATION_2.extend(
    ("vu_digital_map_version", ia5(12)),
)

VU_OVER_SPEEDING_EVENT_RECORD_2 = struct(
    ("event_type", U8),
    ("event_record_purpose", U8),
    ("event_begin_time", TIME_REAL),
    ("event_end_time", TIME_REAL),
    ("max_speed_value", U8),
    ("average_speed_value", U8),
    ("card_number_and_gen_driver_slot_begin", FULL_CARD_NUMBER_AND_GENERATION),
    ("similar_events_number", U8),
)

VU_PLACE_DAILY_WORK_PERIOD_RECORD_2 = struct(
    ("full_card_number_and_generation", FULL_CARD_NUMBER_AND_GENERATION),
    ("place_record", PLACE_RECORD_2),
)

VU_PLACE_DAILY_WORK_PERIOD_RECORD_2_V2 = struct(
    ("full_card_number_and_generation", FULL_CARD_NUMBER_AND_GENERATION),
    ("place_auth_record", PLACE_AUTH_RECORD),
)

VU_TIME_ADJUSTMENT_RECORD_2 = struct(
    ("old_time_value", TIME_REAL),
    ("new_time_value", TIME_REAL),
    ("workshop_name", NAME),
    ("workshop_address", ADDRESS),
    ("workshop_card_number_and_generation", FULL_CARD_NUMBER_AND_GENERATION),
)

SENSOR_PAIRED_RECORD = struct(
    ("sensor_serial_number", EXTENDED_SERIAL_NUMBER),
    ("sensor_approval_number", APPROVAL_NUMBER_2),
    ("sensor_pairing_date", TIME_REAL),
)

SENSOR_EXTERNAL_GNSS_COUPLED_RECORD = struct(
    ("sensor_serial_number", EXTENDED_SERIAL_NUMBER),
    ("sensor_approval_number", APPROVAL_NUMBER_2),
    ("sensor_coupling_date", TIME_REAL),
)

_ALL_CARD_NUMBERS_2 = (
    ("card_number_and_gen_driver_slot_begin", FULL_CARD_NUMBER_AND_GENERATION),
    ("card_number_and_gen_codriver_slot_begin", FULL_CARD_NUMBER_AND_GENERATION),
    ("card_number_and_gen_driver_slot_end", FULL_CARD_NUMBER_AND_GENERATION),
    ("card_number_and_gen_codriver_slot_end", FULL_CARD_NUMBER_AND_GENERATION),
)

VU_EVENT_RECORD_2 = struct(
    ("event_type", U8),
    ("event_record_purpose", U8),
    ("event_begin_time", TIME_REAL),
    ("event_end_time", TIME_REAL),
    *_ALL_CARD_NUMBERS_2,
    ("similar_events_number", U8),
    ("manufacturer_specific_event_fault_data", MANUFACTURER_SPECIFIC_EVENT_FAULT_DATA),
)

VU_FAULT_RECORD_2 = struct(
    ("fault_type", U8),
    ("fault_record_purpose", U8),
    ("fault_begin_time", TIME_REAL),
    ("fault_end_time", TIME_REAL),
    *_ALL_CARD_NUMBERS_2,
    ("manufacturer_specific_event_fault_data", MANUFACTURER_SPECIFIC_EVENT_FAULT_DATA),
)

VU_POWER_SUPPLY_INTERRUPTION_RECORD_2 = struct(
    ("event_type", U8),
    ("event_record_purpose", U8),
    ("event_begin_time", TIME_REAL),
    ("event_end_time", TIME_REAL),
    *_ALL_CARD_NUMBERS_2,
    ("similar_events_number", U8),
)

VU_CARD_RECORD_2 = struct(
    ("card_number_and_generation_information", FULL_CARD_NUMBER_AND_GENERATION),
    ("card_extended_serial_number", EXTENDED_SERIAL_NUMBER),
    ("card_structure_version", CARD_STRUCTURE_VERSION),
    ("card_number", CARD_NUMBER),
)

VU_CALIBRATION_RECORD_2 = VU_CALIBRATION_RECORD_1.extend(
    ("sensor_serial_number", EXTENDED_SERIAL_NUMBER),
    ("sensor_gnss_serial_number", EXTENDED_SERIAL_NUMBER),
    ("rcm_serial_number", EXTENDED_SERIAL_NUMBER),
    ("seal_data_vu", SEAL_DATA_VU),
)

VU_CALIBRATION_RECORD_2_V2 = VU_CALIBRATION_RECORD_2.extend(
    ("by_default_load_type", U8),
    ("calibration_country", NATION),
    ("calibration_country_timestamp", TIME_REAL),
)

SENSOR_PAIRED_2 = struct(
    ("sensor_serial_number", EXTENDED_SERIAL_NUMBER),
    ("sensor_approval_number", APPROVAL_NUMBER_2),
    ("sensor_pairing_date_first", TIME_REAL),
)

VU_ITS_CONSENT_RECORD = struct(
    ("card_number_and_gen", FULL_CARD_NUMBER_AND_GENERATION),
    ("consent", U8),
)

VU_BORDER_CROSSING_RECORD = struct(
    *_CARD_NUMBERS_2,
    ("country_left", NATION),
    ("country_entered", NATION),
    ("gnss_place_auth_record", GNSS_PLACE_AUTH_RECORD),
    ("vehicle_odometer_value", ODOMETER),
)

VU_LOAD_UNLOAD_RECORD = struct(
    ("time_stamp", TIME_REAL),
    ("operation_type", U8),
    *_CARD_NUMBERS_2,
    ("gnss_place_auth_record", GNSS_PLACE_AUTH_RECORD),
    ("vehicle_odometer_value", ODOMETER),
)

CERTIFICATE_2 = Prim(None, gen2.describe)


def _types(*entries: tuple[int, str, object]) -> dict[int, RecordType]:
    return {code: RecordType(code, name, shape) for code, name, shape in entries}


RECORD_TYPES: dict[Generation, dict[int, RecordType]] = {
    GEN2: _types(
        (0x01, "activity_change_info", ACTIVITY_CHANGE),
        (0x02, "card_slots_status", CARD_SLOTS_STATUS),
        (0x03, "current_date_time", TIME_REAL),
        (0x04, "member_state_certificate", CERTIFICATE_2),
        (0x05, "odometer_value_midnight", ODOMETER),
        (0x06, "date_of_day_downloaded", TIME_REAL),
        (0x07, "sensor_paired", SENSOR_PAIRED_2),
        (0x08, "signature", Blob()),
        (0x09, "specific_condition_record", SPECIFIC_CONDITION_RECORD),
        (0x0A, "vehicle_identification_number", VIN),
        (0x0B, "vehicle_registration_number", VEHICLE_REGISTRATION_NUMBER),
        (0x0C, "vu_calibration_record", VU_CALIBRATION_RECORD_2),
        (0x0D, "vu_card_iw_record", VU_CARD_IW_RECORD_2),
        (0x0E, "vu_card_record", VU_CARD_RECORD_2),
        (0x0F, "vu_certificate", CERTIFICATE_2),
        (0x10, "vu_company_locks_record", VU_COMPANY_LOCKS_RECORD_2),
        (0x11, "vu_control_activity_record", VU_CONTROL_ACTIVITY_RECORD_2),
        (0x12, "vu_detailed_speed_block", DETAILED_SPEED_BLOCK),
        (0x13, "vu_downloadable_period", VU_DOWNLOADABLE_PERIOD),
        (0x14, "vu_download_activity_data", VU_DOWNLOAD_ACTIVITY_DATA_2),
        (0x15, "vu_event_record", VU_EVENT_RECORD_2),
        (0x16, "vu_gnss_ad_record", VU_GNSS_AD_RECORD_2),
        (0x17, "vu_its_consent_record", VU_ITS_CONSENT_RECORD),
        (0x18, "vu_fault_record", VU_FAULT_RECORD_2),
        (0x19, "vu_identification", VU_IDENTIFICATION_2),
        (0x1A, "vu_over_speeding_control_data", VU_OVER_SPEEDING_CONTROL_DATA),
        (0x1B, "vu_over_speeding_event_record", VU_OVER_SPEEDING_EVENT_RECORD_2),
        (0x1C, "vu_place_daily_work_period_record", VU_PLACE_DAILY_WORK_PERIOD_RECORD_2),
        (0x1D, "vu_time_adjustment_gnss_record", VU_TIME_ADJUSTMENT_GNSS_RECORD),
        (0x1E, "vu_time_adjustment_record", VU_TIME_ADJUSTMENT_RECORD_2),
        (0x1F, "vu_power_supply_interruption_record", VU_POWER_SUPPLY_INTERRUPTION_RECORD_2),
        (0x20, "sensor_paired_record", SENSOR_PAIRED_RECORD),
        (0x21, "sensor_external_gnss_coupled_record", SENSOR_EXTERNAL_GNSS_COUPLED_RECORD),
    ),
    GEN2_V2: _types(
        (0x0C, "vu_calibration_record", VU_CALIBRATION_RECORD_2_V2),
        (0x16, "vu_gnss_ad_record", VU_GNSS_AD_RECORD_2_V2),
        (0x19, "vu_identification", VU_IDENTIFICATION_2_V2),
        (0x1C, "vu_place_daily_work_period_record", VU_PLACE_DAILY_WORK_PERIOD_RECORD_2_V2),
        (0x22, "vu_border_crossing_record", VU_BORDER_CROSSING_RECORD),
        (0x23, "vu_load_unload_record", VU_LOAD_UNLOAD_RECORD),
        (0x24, "vehicle_registration_identification", VEHICLE_REGISTRATION),
    ),
}


# -- descriptor table ------------------------------------------------------------

def _block(tag, name, generation, shape=None, repeatable=False) -> RecordDescriptor:
    return RecordDescriptor(
        tag=tag,
        name=name,
        kind=VU,
        generation=generation,
        shape=shape,
        signed=True,
        repeatable=repeatable,
        layout=Layout.FIELDS if generation is GEN1 else Layout.RECORD_ARRAYS,
    )


def _gen2_blocks(base: int, generation: Generation) -> list[RecordDescriptor]:
    return [
        _block(base + 1, "overview", generation),
        _block(base + 2, "activities", generation, repeatable=True),
        _block(base + 3, "events_and_faults", generation),
        _block(base + 4, "detailed_speed", generation, repeatable=True),
        _block(base + 5, "technical_data", generation),
    ]


VU_DESCRIPTORS: tuple[RecordDescriptor, ...] = (
    _block(0x7601, "overview", GEN1, OVERVIEW_1),
    _block(0x7602, "activities", GEN1, ACTIVITIES_1, repeatable=True),
    _block(0x7603, "events_and_faults", GEN1, EVENTS_AND_FAULTS_1),
    _block(0x7604, "detailed_speed", GEN1, DETAILED_SPEED_1, repeatable=True),
    _block(0x7605, "technical_data", GEN1, TECHNICAL_DATA_1),
    *_gen2_blocks(0x7620, GEN2),
    *_gen2_blocks(0x7630, GEN2_V2),
    RecordDescriptor(
        tag=TREP_DOWNLOAD_INTERFACE_VERSION,
        name="download_interface_version",
        kind=VU,
        generation=GEN2_V2,
        shape=struct(("generation", U8), ("version", U8)),
        layout=Layout.VALUE,
    ),
)
