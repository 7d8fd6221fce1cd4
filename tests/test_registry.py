from __future__ import annotations

import pytest

from tachoparse.core.base.types import FileKind, Generation
from tachoparse.core.records import Layout, RecordDescriptor
from tachoparse.core.registry import REGISTRY, TagRegistry
from tachoparse.core.wire.schema import Blob


def test_common_card_file() -> None:
    desc = REGISTRY.lookup(FileKind.CARD, Generation.GEN1, 0x050E)
    assert desc is not None
    assert desc.field_name == "card_download_1"


def test_specific_kind_before_common() -> None:
    driver = REGISTRY.lookup(FileKind.DRIVER_CARD, Generation.GEN1, 0x0520)
    common = REGISTRY.lookup(FileKind.CARD, Generation.GEN1, 0x0520)
    assert driver.kind is FileKind.DRIVER_CARD
    assert common.kind is FileKind.CARD


def test_specific_kind_falls_back_to_common() -> None:
    desc = REGISTRY.lookup(FileKind.WORKSHOP_CARD, Generation.GEN2_V1, 0x0505)
    assert desc.kind is FileKind.CARD
    assert desc.field_name == "vehicles_used_2"


def test_kind_specific_files_stay_with_their_kind() -> None:
    assert REGISTRY.lookup(FileKind.WORKSHOP_CARD, Generation.GEN1, 0x050A) is not None
    assert REGISTRY.lookup(FileKind.DRIVER_CARD, Generation.GEN1, 0x050A) is None


def test_gen2_v2_override_and_fallback() -> None:
    places = REGISTRY.lookup(FileKind.CARD, Generation.GEN2_V2, 0x0506)
    assert places.generation is Generation.GEN2_V2
    assert places.field_name == "places_2_v2"
    events = REGISTRY.lookup(FileKind.CARD, Generation.GEN2_V2, 0x0502)
    assert events.generation is Generation.GEN2_V1
    assert REGISTRY.lookup(FileKind.CARD, Generation.GEN2_V1, 0x0525) is None


@pytest.mark.parametrize(
    "tag, name, layout",
    [
        (0x7601, "overview_1", Layout.FIELDS),
        (0x7604, "detailed_speed_1", Layout.FIELDS),
        (0x7622, "activities_2", Layout.RECORD_ARRAYS),
        (0x7635, "technical_data_2_v2", Layout.RECORD_ARRAYS),
        (0x7600, "download_interface_version_2_v2", Layout.VALUE),
    ],
)
def test_vu_blocks(tag: int, name: str, layout: Layout) -> None:
    from tachoparse.core.generation import VU_GENERATIONS

    desc = REGISTRY.lookup(FileKind.VU, VU_GENERATIONS[tag], tag)
    assert desc.field_name == name
    assert desc.layout is layout


def test_unknown_tag() -> None:
    assert REGISTRY.lookup(FileKind.VU, Generation.GEN1, 0x7699) is None
    assert REGISTRY.lookup(FileKind.CARD, Generation.GEN1, 0x0999) is None


def test_record_types() -> None:
    assert REGISTRY.lookup_record_type(Generation.GEN2_V1, 0x0A).name == "vehicle_identification_number"
    assert REGISTRY.lookup_record_type(Generation.GEN2_V1, 0x22) is None
    assert REGISTRY.lookup_record_type(Generation.GEN2_V2, 0x22).name == "vu_border_crossing_record"
    # v2 falls back to v1 for unchanged record types
    assert REGISTRY.lookup_record_type(Generation.GEN2_V2, 0x0A) is not None


def test_duplicate_descriptor_rejected() -> None:
    desc = RecordDescriptor(0x0501, "x", FileKind.CARD, Generation.GEN1, Blob())
    with pytest.raises(ValueError):
        TagRegistry([desc, desc])


@pytest.mark.parametrize(
    "generation, code, width",
    [
        (Generation.GEN2_V1, 0x07, 28),
        (Generation.GEN2_V1, 0x0C, 246),
        (Generation.GEN2_V2, 0x0C, 252),
        (Generation.GEN2_V1, 0x0E, 45),
        (Generation.GEN2_V1, 0x15, 91),
        (Generation.GEN2_V1, 0x18, 90),
        (Generation.GEN2_V2, 0x18, 90),
        (Generation.GEN2_V1, 0x1F, 87),
    ],
)
def test_record_type_widths(generation: Generation, code: int, width: int) -> None:
    assert REGISTRY.lookup_record_type(generation, code).shape.width == width


def test_signed_flags() -> None:
    assert REGISTRY.lookup(FileKind.CARD, Generation.GEN1, 0x0504).signed
    assert not REGISTRY.lookup(FileKind.CARD, Generation.GEN1, 0xC100).signed


def test_registry_is_populated() -> None:
    assert len(REGISTRY) == len(list(REGISTRY))
    assert len(REGISTRY) > 80
