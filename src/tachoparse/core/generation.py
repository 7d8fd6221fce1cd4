"""Generation and card kind detection."""

from __future__ import annotations

import logging

from tachoparse.core.base.types import CARD_KINDS, FileKind, Generation
from tachoparse.core.records.card import (
    EF_APPLICATION_IDENTIFICATION,
    EF_APPLICATION_IDENTIFICATION_V2,
)

lg = logging.getLogger(__name__)

# Card element appendix byte
APPENDIX_DATA_1 = 0x00
APPENDIX_SIGNATURE_1 = 0x01
APPENDIX_DATA_2 = 0x02
APPENDIX_SIGNATURE_2 = 0x03

# TREP -> generation of the block layout
VU_GENERATIONS: dict[int, Generation] = {
    0x7600: Generation.GEN2_V2,
    **{0x7600 + trep: Generation.GEN1 for trep in range(0x01, 0x06)},
    **{0x7620 + trep: Generation.GEN2_V1 for trep in range(0x01, 0x06)},
    **{0x7630 + trep: Generation.GEN2_V2 for trep in range(0x01, 0x06)},
}


def appendix_generation(appendix: int) -> Generation:
    """Generation family an appendix byte belongs to, UNKNOWN if invalid."""
    if appendix in (APPENDIX_DATA_1, APPENDIX_SIGNATURE_1):
        return Generation.GEN1
    if appendix in (APPENDIX_DATA_2, APPENDIX_SIGNATURE_2):
        return Generation.GEN2_V1
    return Generation.UNKNOWN


class GenerationLatch:
    """Tracks the generation and card kind seen so far in one download.

    The generation only moves upwards: once Gen2 structures have been seen
    the download stays Gen2, even though Gen2 cards also carry the Gen1
    application.
    """

    def __init__(self) -> None:
        self.generation = Generation.UNKNOWN
        self.kind = FileKind.CARD

    def latch(self, generation: Generation) -> None:
        if generation > self.generation:
            lg.debug("generation %s -> %s", self.generation.label, generation.label)
            self.generation = generation

    def observe_card(self, tag: int, appendix: int, payload: bytes) -> None:
        data = appendix in (APPENDIX_DATA_1, APPENDIX_DATA_2)
        if tag == EF_APPLICATION_IDENTIFICATION and data:
            if payload and self.kind is FileKind.CARD:
                kind = CARD_KINDS.get(payload[0])
                if kind is not None:
                    lg.debug("card kind %s", kind.value)
                    self.kind = kind
            if appendix == APPENDIX_DATA_1:
                self.latch(Generation.GEN1)
            elif appendix == APPENDIX_DATA_2:
                self.latch(_structure_generation(payload))
        elif tag == EF_APPLICATION_IDENTIFICATION_V2 and appendix == APPENDIX_DATA_2:
            self.latch(Generation.GEN2_V2)

    def element_generation(self, appendix: int) -> Generation:
        """Descriptor generation for a card element with this appendix."""
        family = appendix_generation(appendix)
        if family is Generation.GEN2_V1 and self.generation.is_gen2:
            return self.generation
        return family

    def observe_vu(self, tag: int) -> Generation:
        """Generation of the block layout for a TREP; UNKNOWN if not a TREP."""
        generation = VU_GENERATIONS.get(tag, Generation.UNKNOWN)
        self.latch(generation)
        return generation


def _structure_generation(payload: bytes) -> Generation:
    # cardStructureVersion: major 01 is Gen2, minor 01 is its second version
    if len(payload) >= 3 and payload[1] >= 1 and payload[2] >= 1:
        return Generation.GEN2_V2
    return Generation.GEN2_V1
