"""
Potion data model.

PotionRecord is the typed view the balancing core works with. It remembers
the raw record it was decoded from so that re-encoding only rewrites ALDT and
ENAM and leaves model, icon, script and name subrecords byte-identical.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from ..esp.codec import pack_aldt, pack_enam
from ..esp.records import ALCH, ALDT, ENAM, NAME, Record, Subrecord


AUTO_CALCULATE_FLAG = 0x1


def normalize_identifier(raw: str) -> str:
    """
    Normalize a potion identifier into its merge key.

    Uppercase, surrounding whitespace removed, inner whitespace runs
    collapsed to a single space.

    Examples:
        >>> normalize_identifier("p_Restore  health_s ")
        'P_RESTORE HEALTH_S'
    """
    return " ".join(raw.split()).upper()


@dataclass(frozen=True)
class EffectEntry:
    """One ENAM entry of a potion."""
    effect_index: int
    duration: int
    magnitude_min: int
    magnitude_max: int
    skill: int = -1
    attribute: int = -1
    range: int = 0
    area: int = 0

    def pack(self) -> bytes:
        return pack_enam(
            self.effect_index, self.skill, self.attribute, self.range, self.area,
            self.duration, self.magnitude_min, self.magnitude_max,
        )


@dataclass(frozen=True)
class PotionRecord:
    """
    A decoded potion.

    Attributes:
        identifier: Normalized identifier (merge key)
        raw_identifier: Identifier exactly as stored
        value: Gold value (u32)
        weight: Weight (single precision on disk)
        flags: ALDT flags word; bit 0 = auto-calculate value
        effects: ENAM entries in file order
        source: Name of the content file the record came from
        record: Raw record, used as the template when re-encoding
    """
    identifier: str
    raw_identifier: str
    value: int
    weight: float
    flags: int = 0
    effects: tuple[EffectEntry, ...] = ()
    source: str = ""
    record: Record | None = field(default=None, compare=False, repr=False)

    @property
    def auto_calculate(self) -> bool:
        return bool(self.flags & AUTO_CALCULATE_FLAG)

    @property
    def single_effect(self) -> EffectEntry | None:
        """The only effect, or None when there are zero or several."""
        return self.effects[0] if len(self.effects) == 1 else None

    def with_fields(self, **changes) -> PotionRecord:
        """Copy with some fields replaced."""
        return replace(self, **changes)

    def to_record(self) -> Record:
        """
        Encode back into a raw ALCH record.

        ALDT and ENAM payloads are regenerated from this object; every other
        subrecord is copied from the template record.
        """
        if self.record is None:
            return build_potion_record(
                self.raw_identifier, self.value, self.weight, self.effects, flags=self.flags,
            )

        effects = iter(self.effects)
        subrecords = []
        aldt_written = False
        for sub in self.record.subrecords:
            if sub.tag == ALDT and not aldt_written:
                subrecords.append(Subrecord(ALDT, pack_aldt(self.weight, self.value, self.flags)))
                aldt_written = True
            elif sub.tag == ENAM:
                effect = next(effects, None)
                if effect is not None:
                    subrecords.append(Subrecord(ENAM, effect.pack()))
            else:
                subrecords.append(Subrecord(sub.tag, sub.data))
        subrecords.extend(Subrecord(ENAM, effect.pack()) for effect in effects)
        return Record(ALCH, self.record.flags, subrecords)


def build_potion_record(
    raw_identifier: str,
    value: int,
    weight: float,
    effects: tuple[EffectEntry, ...] | list[EffectEntry] = (),
    flags: int = 0,
    encoding: str = "cp1252",
    extra: list[Subrecord] | None = None,
) -> Record:
    """
    Build a minimal ALCH record from scratch.

    Used for potions that have no template record and by test fixtures.
    """
    subrecords = [Subrecord(NAME, raw_identifier.encode(encoding) + b"\0")]
    subrecords.extend(extra or [])
    subrecords.append(Subrecord(ALDT, pack_aldt(weight, value, flags)))
    subrecords.extend(Subrecord(ENAM, effect.pack()) for effect in effects)
    return Record(ALCH, 0, subrecords)
