from tachoparse.core.wire.cursor import Cursor
from tachoparse.core.wire.logging import ELEMENT, TRACE
from tachoparse.core.wire.schema import Blob, PayloadDecoder, Prim, Records, Struct, struct

__all__ = [
    "Blob",
    "Cursor",
    "ELEMENT",
    "PayloadDecoder",
    "Prim",
    "Records",
    "Struct",
    "TRACE",
    "struct",
]
