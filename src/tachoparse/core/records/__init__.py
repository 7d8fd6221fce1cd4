from tachoparse.core.records.card import CARD_DESCRIPTORS
from tachoparse.core.records.descriptor import Layout, RecordDescriptor, RecordType
from tachoparse.core.records.vu import RECORD_TYPES, VU_DESCRIPTORS

__all__ = [
    "CARD_DESCRIPTORS",
    "Layout",
    "RECORD_TYPES",
    "RecordDescriptor",
    "RecordType",
    "VU_DESCRIPTORS",
]
