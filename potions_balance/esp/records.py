"""
Record-level data types for TES3 content files.

Records are kept close to the wire: a tag, flags, and an ordered list of raw
subrecords. Only the handful of subrecords the balancing core reads
(HEDR, NAME, ALDT, ENAM) get typed views, everything else stays bytes and is
written back untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


# Record tags
TES3 = "TES3"
ALCH = "ALCH"

# Subrecord tags
HEDR = "HEDR"
MAST = "MAST"
DATA = "DATA"
NAME = "NAME"
ALDT = "ALDT"
ENAM = "ENAM"


class FileType(IntEnum):
    """HEDR file type; ESP for plugins, ESM for masters."""
    ESP = 0
    ESM = 1
    ESS = 32


@dataclass
class Subrecord:
    """One tagged field of a record."""
    tag: str
    data: bytes


@dataclass
class Record:
    """
    A decoded record.

    Attributes:
        tag: Four-letter record type (e.g., 'ALCH')
        flags: Record flags word, preserved as read
        subrecords: Ordered subrecords
    """
    tag: str
    flags: int = 0
    subrecords: list[Subrecord] = field(default_factory=list)

    def first(self, tag: str) -> Subrecord | None:
        """First subrecord with the given tag, or None."""
        for sub in self.subrecords:
            if sub.tag == tag:
                return sub
        return None

    def all(self, tag: str) -> list[Subrecord]:
        """All subrecords with the given tag, in order."""
        return [sub for sub in self.subrecords if sub.tag == tag]


@dataclass
class FileHeader:
    """
    Typed view of the TES3 header record.

    Attributes:
        version: HEDR version bits as stored (u32)
        file_type: Plugin/master/save marker
        author: Author string (32 bytes on disk)
        description: Description string (256 bytes on disk)
        record_count: Number of records after the header
        masters: (name, size) pairs from MAST/DATA subrecords
    """
    version: int
    file_type: FileType
    author: str
    description: str
    record_count: int = 0
    masters: list[tuple[str, int]] = field(default_factory=list)


@dataclass
class RecordResult:
    """
    Outcome of decoding one record.

    The codec reports per-record failures instead of raising so the caller
    can decide which record types are worth aborting over.
    """
    tag: str
    offset: int
    record: Record | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True if the record decoded."""
        return self.error is None


@dataclass
class DecodedFile:
    """Header plus per-record results of one content file."""
    header: FileHeader
    records: list[RecordResult] = field(default_factory=list)
