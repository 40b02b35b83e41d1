"""
TES3 content file codec.
"""

from .effects import EffectIndex, parse_effect_index
from .records import (
    ALCH,
    TES3,
    FileType,
    FileHeader,
    Record,
    Subrecord,
    RecordResult,
    DecodedFile,
)
from .codec import Tes3Codec

__all__ = [
    "EffectIndex",
    "parse_effect_index",
    "ALCH",
    "TES3",
    "FileType",
    "FileHeader",
    "Record",
    "Subrecord",
    "RecordResult",
    "DecodedFile",
    "Tes3Codec",
]
