"""
Output assembly: header, records, timestamp, atomic write.

The generated plugin carries the sentinel author so the next run recognizes
it, and its mtime is pinned just after the newest input so mtime-ordered
launchers load it last.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from ..config.constants import (
    FORMAT_VERSION,
    MAX_TIMESTAMP_SECONDS,
    OUTPUT_DESCRIPTION,
    OUTPUT_TIME_OFFSET_SECONDS,
    SENTINEL_AUTHOR,
)
from ..errors import NoPotionsFoundError, OutputWriteError, TimestampOverflowError
from ..esp.codec import Tes3Codec
from ..esp.records import FileHeader, FileType
from ..potions.merge import MergeResult
from ..potions.model import PotionRecord
from ..utils.helpers import write_atomic
from ..utils.logger import get_logger


def derive_output_time(newest_input: int) -> int:
    """
    Output mtime for a given newest input mtime.

    Raises:
        TimestampOverflowError: Result exceeds the signed 64-bit second range
    """
    output_time = newest_input + OUTPUT_TIME_OFFSET_SECONDS
    if output_time > MAX_TIMESTAMP_SECONDS:
        raise TimestampOverflowError(newest_input)
    return output_time


def output_time_for(merge: MergeResult) -> int:
    """Output mtime for a merge, from its newest non-self input."""
    newest = merge.newest_input_time()
    if newest is None:
        raise NoPotionsFoundError()
    return derive_output_time(newest)


def describe_output(table_name: Optional[str] = None) -> str:
    """Header description, naming the table when one was applied."""
    if table_name:
        return f"{OUTPUT_DESCRIPTION} Table: {table_name}."
    return OUTPUT_DESCRIPTION


def build_header(record_count: int, description: str = OUTPUT_DESCRIPTION) -> FileHeader:
    return FileHeader(
        version=FORMAT_VERSION,
        file_type=FileType.ESP,
        author=SENTINEL_AUTHOR,
        description=description,
        record_count=record_count,
    )


def assemble(potions: Iterable[PotionRecord], codec: Tes3Codec,
             description: str = OUTPUT_DESCRIPTION) -> bytes:
    """
    Encode potions into a plugin image.

    Records are emitted sorted by normalized identifier so that the same
    merged set always produces the same bytes.
    """
    ordered = sorted(potions, key=lambda p: p.identifier)
    header = build_header(len(ordered), description)
    return codec.encode(header, [potion.to_record() for potion in ordered])


def write_plugin(
    path: Path | str,
    potions: Iterable[PotionRecord],
    modification_time: int,
    codec: Tes3Codec,
    description: str = OUTPUT_DESCRIPTION,
) -> Path:
    """
    Write the plugin and stamp its modification time.

    Nothing is left at the destination on failure.

    Raises:
        TimestampOverflowError: The platform cannot represent the time
        OutputWriteError: Any I/O failure
    """
    path = Path(path)
    potions = list(potions)
    data = assemble(potions, codec, description)
    try:
        write_atomic(path, data, modification_time)
    except OverflowError as e:
        raise TimestampOverflowError(modification_time - OUTPUT_TIME_OFFSET_SECONDS) from e
    except OSError as e:
        raise OutputWriteError(path, e.strerror or str(e)) from e

    get_logger().info(f"Wrote {len(potions)} potions to {path} (mtime={modification_time})")
    return path
