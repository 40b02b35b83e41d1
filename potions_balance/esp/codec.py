"""
TES3 content file reader/writer.

Wire layout (little-endian):

    record    := tag[4] size:u32 reserved:u32 flags:u32 payload[size]
    payload   := subrecord*
    subrecord := tag[4] size:u32 data[size]

Decoding is lenient per record: a record whose payload does not split
cleanly into subrecords is reported as a failed RecordResult and scanning
goes on. A record header cut short by end of file, or a payload running past
it, means the stream itself is broken and raises FileDecodeError.

Potion subrecords:
    ALDT = weight:f32 value:u32 auto_calculate:u32                   (12 bytes)
    ENAM = index:i16 skill:i8 attribute:i8 range:i32 area:i32
           duration:i32 magnitude_min:i32 magnitude_max:i32           (24 bytes)
"""

from __future__ import annotations

import struct
from pathlib import Path

from ..config.constants import get_encoding
from ..errors import FileDecodeError
from .records import (
    TES3,
    HEDR,
    MAST,
    DATA,
    DecodedFile,
    FileHeader,
    FileType,
    Record,
    RecordResult,
    Subrecord,
)


RECORD_HEADER = struct.Struct("<4sIII")
SUBRECORD_HEADER = struct.Struct("<4sI")
HEDR_LAYOUT = struct.Struct("<II32s256sI")
ALDT_LAYOUT = struct.Struct("<fII")
ENAM_LAYOUT = struct.Struct("<hbbiiiii")
MASTER_SIZE = struct.Struct("<Q")

AUTHOR_SIZE = 32
DESCRIPTION_SIZE = 256


# =============================================================================
# Fixed-size field helpers
# =============================================================================

def decode_zstring(data: bytes, encoding: str) -> str:
    """Decode a NUL-terminated (or NUL-padded) string."""
    end = data.find(b"\0")
    if end >= 0:
        data = data[:end]
    return data.decode(encoding, errors="replace")


def encode_fixed_string(text: str, size: int, encoding: str) -> bytes:
    """Encode text into a NUL-padded field; keeps at least one terminating NUL."""
    raw = text.encode(encoding, errors="replace")[: size - 1]
    return raw + b"\0" * (size - len(raw))


def unpack_aldt(data: bytes) -> tuple[float, int, int]:
    """
    Unpack potion data.

    Returns:
        (weight, value, flags); bit 0 of flags is auto-calculate

    Raises:
        ValueError: If the subrecord has the wrong size
    """
    if len(data) != ALDT_LAYOUT.size:
        raise ValueError(f"ALDT has {len(data)} bytes, expected {ALDT_LAYOUT.size}")
    return ALDT_LAYOUT.unpack(data)


def pack_aldt(weight: float, value: int, flags: int) -> bytes:
    return ALDT_LAYOUT.pack(weight, value, flags)


def unpack_enam(data: bytes) -> tuple[int, int, int, int, int, int, int, int]:
    """
    Unpack one effect entry.

    Returns:
        (index, skill, attribute, range, area, duration, magnitude_min, magnitude_max)

    Raises:
        ValueError: If the subrecord has the wrong size
    """
    if len(data) != ENAM_LAYOUT.size:
        raise ValueError(f"ENAM has {len(data)} bytes, expected {ENAM_LAYOUT.size}")
    return ENAM_LAYOUT.unpack(data)


def pack_enam(index: int, skill: int, attribute: int, range_: int, area: int,
              duration: int, magnitude_min: int, magnitude_max: int) -> bytes:
    return ENAM_LAYOUT.pack(index, skill, attribute, range_, area,
                            duration, magnitude_min, magnitude_max)


# =============================================================================
# Codec
# =============================================================================

class Tes3Codec:
    """
    Decodes content files into records and encodes records back to bytes.

    Args:
        code_page: Game language ("en" or "ru"); selects the string encoding
    """

    def __init__(self, code_page: str = "en"):
        self.code_page = code_page
        self.encoding = get_encoding(code_page)

    # ---------------------------------------------------------------- decoding

    def read_file(self, path: Path) -> DecodedFile:
        """Read and decode a whole content file."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise FileDecodeError(path, e.strerror or str(e)) from e
        return self.decode(data, path)

    def decode(self, data: bytes, path: Path | str = "<memory>") -> DecodedFile:
        """
        Decode a content file image.

        Raises:
            FileDecodeError: Missing/invalid TES3 header or broken record stream
        """
        results = list(self._iter_records(data, path))
        if not results or results[0].tag != TES3 or not results[0].ok:
            raise FileDecodeError(path)
        header = self._decode_header(results[0].record, path)
        return DecodedFile(header=header, records=results[1:])

    def _iter_records(self, data: bytes, path):
        view = memoryview(data)
        offset = 0
        while offset < len(data):
            if len(data) - offset < RECORD_HEADER.size:
                raise FileDecodeError(path, f"truncated record header at offset {offset}")
            raw_tag, size, _reserved, flags = RECORD_HEADER.unpack_from(view, offset)
            tag = raw_tag.decode("latin-1")
            start = offset + RECORD_HEADER.size
            end = start + size
            if end > len(data):
                raise FileDecodeError(path, f"record '{tag}' at offset {offset} runs past end of file")
            try:
                subrecords = self._split_subrecords(view[start:end])
            except ValueError as e:
                yield RecordResult(tag=tag, offset=offset, error=str(e))
            else:
                yield RecordResult(tag=tag, offset=offset, record=Record(tag, flags, subrecords))
            offset = end

    @staticmethod
    def _split_subrecords(payload: memoryview) -> list[Subrecord]:
        subrecords = []
        offset = 0
        while offset < len(payload):
            if len(payload) - offset < SUBRECORD_HEADER.size:
                raise ValueError(f"truncated subrecord header at payload offset {offset}")
            raw_tag, size = SUBRECORD_HEADER.unpack_from(payload, offset)
            tag = raw_tag.decode("latin-1")
            start = offset + SUBRECORD_HEADER.size
            if start + size > len(payload):
                raise ValueError(f"subrecord '{tag}' overruns its record")
            subrecords.append(Subrecord(tag, bytes(payload[start:start + size])))
            offset = start + size
        return subrecords

    def _decode_header(self, record: Record, path) -> FileHeader:
        if not record.subrecords or record.subrecords[0].tag != HEDR:
            raise FileDecodeError(path)
        hedr = record.subrecords[0].data
        if len(hedr) != HEDR_LAYOUT.size:
            raise FileDecodeError(path)
        version, file_type, author, description, count = HEDR_LAYOUT.unpack(hedr)
        try:
            file_type = FileType(file_type)
        except ValueError:
            raise FileDecodeError(path, f"unknown file type {file_type}") from None

        masters = []
        pending = None
        for sub in record.subrecords[1:]:
            if sub.tag == MAST:
                pending = decode_zstring(sub.data, self.encoding)
            elif sub.tag == DATA and pending is not None and len(sub.data) == MASTER_SIZE.size:
                masters.append((pending, MASTER_SIZE.unpack(sub.data)[0]))
                pending = None

        return FileHeader(
            version=version,
            file_type=file_type,
            author=decode_zstring(author, self.encoding),
            description=decode_zstring(description, self.encoding),
            record_count=count,
            masters=masters,
        )

    # ---------------------------------------------------------------- encoding

    def encode_header(self, header: FileHeader) -> Record:
        """Build the TES3 record for a header."""
        hedr = HEDR_LAYOUT.pack(
            header.version,
            int(header.file_type),
            encode_fixed_string(header.author, AUTHOR_SIZE, self.encoding),
            encode_fixed_string(header.description, DESCRIPTION_SIZE, self.encoding),
            header.record_count,
        )
        subrecords = [Subrecord(HEDR, hedr)]
        for name, size in header.masters:
            subrecords.append(Subrecord(MAST, name.encode(self.encoding, errors="replace") + b"\0"))
            subrecords.append(Subrecord(DATA, MASTER_SIZE.pack(size)))
        return Record(TES3, 0, subrecords)

    @staticmethod
    def encode_record(record: Record) -> bytes:
        """Serialize one record."""
        payload = b"".join(
            SUBRECORD_HEADER.pack(sub.tag.encode("latin-1"), len(sub.data)) + sub.data
            for sub in record.subrecords
        )
        return RECORD_HEADER.pack(record.tag.encode("latin-1"), len(payload), 0, record.flags) + payload

    def encode(self, header: FileHeader, records: list[Record]) -> bytes:
        """Serialize a header followed by records into a file image."""
        parts = [self.encode_record(self.encode_header(header))]
        parts.extend(self.encode_record(record) for record in records)
        return b"".join(parts)
