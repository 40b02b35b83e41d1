"""
Potion extraction from decoded content files.

Responsibilities:
- Pick potion (ALCH) records out of a decoded file
- Build PotionRecord views with normalized identifiers
- Apply the decode-error policy (potion failures fatal, others skipped)
- Reject two potions of the same file that share a normalized identifier
- Recognize files produced by this tool
"""

from __future__ import annotations

from pathlib import Path

from ..config.constants import SENTINEL_AUTHOR
from ..errors import DuplicateIdentifierError, PotionRecordError
from ..esp.codec import decode_zstring, unpack_aldt, unpack_enam
from ..esp.records import ALCH, ALDT, ENAM, NAME, DecodedFile, FileHeader, Record
from ..utils.logger import get_logger
from .model import EffectEntry, PotionRecord, normalize_identifier


def is_self_produced(header: FileHeader, sentinel: str = SENTINEL_AUTHOR) -> bool:
    """True if the header's author marks the file as this tool's output."""
    return header.author == sentinel


def extract_potion(
    record: Record,
    encoding: str,
    path: Path | str | None = None,
    source: str = "",
) -> PotionRecord:
    """
    Build a PotionRecord from a raw ALCH record.

    Raises:
        PotionRecordError: Missing NAME/ALDT or a malformed ALDT/ENAM
    """
    name = record.first(NAME)
    if name is None:
        raise PotionRecordError(path, "missing NAME field in ALCH record")
    raw_identifier = decode_zstring(name.data, encoding)
    if not raw_identifier.strip():
        raise PotionRecordError(path, "empty NAME field in ALCH record")

    aldt = record.first(ALDT)
    if aldt is None:
        raise PotionRecordError(path, "missing ALDT field", raw_identifier)

    try:
        weight, value, flags = unpack_aldt(aldt.data)
        effects = []
        for enam in record.all(ENAM):
            index, skill, attribute, range_, area, duration, mag_min, mag_max = unpack_enam(enam.data)
            effects.append(EffectEntry(
                effect_index=index,
                duration=duration,
                magnitude_min=mag_min,
                magnitude_max=mag_max,
                skill=skill,
                attribute=attribute,
                range=range_,
                area=area,
            ))
    except ValueError as e:
        raise PotionRecordError(path, str(e), raw_identifier) from e

    return PotionRecord(
        identifier=normalize_identifier(raw_identifier),
        raw_identifier=raw_identifier,
        value=value,
        weight=weight,
        flags=flags,
        effects=tuple(effects),
        source=source,
        record=record,
    )


def extract_potions(decoded: DecodedFile, encoding: str, path: Path | str) -> list[PotionRecord]:
    """
    Extract every potion of one decoded file, in file order.

    Records of other types that failed to decode are skipped; a potion
    record that failed to decode aborts with file context.

    Raises:
        PotionRecordError: A potion record is malformed
        DuplicateIdentifierError: Two potions normalize to the same identifier
    """
    logger = get_logger()
    path = Path(path)
    potions: list[PotionRecord] = []
    seen: dict[str, str] = {}

    for result in decoded.records:
        if not result.ok:
            if result.tag == ALCH:
                raise PotionRecordError(path, result.error)
            logger.debug(f"{path.name}: skipping undecodable {result.tag} record at offset {result.offset} ({result.error})")
            continue
        if result.tag != ALCH:
            continue

        potion = extract_potion(result.record, encoding, path, source=path.name)
        first = seen.get(potion.identifier)
        if first is not None:
            raise DuplicateIdentifierError(path, potion.identifier, first, potion.raw_identifier)
        seen[potion.identifier] = potion.raw_identifier
        potions.append(potion)

    return potions
