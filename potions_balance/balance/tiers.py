"""
Potion tiers and tierless categories.

Vanilla potions encode their quality in the identifier suffix:
    P_RESTORE_HEALTH_B  bargain
    P_RESTORE_HEALTH_C  cheap
    P_RESTORE_HEALTH_S  standard
    P_RESTORE_HEALTH_Q  quality
    P_RESTORE_HEALTH_E  exclusive

A single trailing marker from EXTRA_MARKERS may follow the suffix
(P_RESTORE_HEALTH_S_CHG is still standard).
"""

from __future__ import annotations

from enum import Enum, IntEnum


class Tier(IntEnum):
    """Quality tiers, ordered cheapest to best."""
    BARGAIN = 0
    CHEAP = 1
    STANDARD = 2
    QUALITY = 3
    EXCLUSIVE = 4

    @property
    def label(self) -> str:
        return self.name.title()


class TierlessCategory(Enum):
    """Effects that have one price regardless of quality."""
    MARK = "mark"
    TELEPORT = "teleport"
    CURE_POISON_OR_PARALYZE = "cure_poison_or_paralyze"
    CURE_COMMON_DISEASE = "cure_common_disease"
    CURE_BLIGHT_DISEASE = "cure_blight_disease"
    VAMPIRISM = "vampirism"

    @property
    def label(self) -> str:
        return TIERLESS_LABELS[self]


TIERLESS_LABELS = {
    TierlessCategory.MARK: "Mark",
    TierlessCategory.TELEPORT: "Teleport",
    TierlessCategory.CURE_POISON_OR_PARALYZE: "Cure Poison / Paralyzation",
    TierlessCategory.CURE_COMMON_DISEASE: "Cure Common Disease",
    TierlessCategory.CURE_BLIGHT_DISEASE: "Cure Blight Disease",
    TierlessCategory.VAMPIRISM: "Vampirism",
}

TIER_SUFFIXES = {
    "_B": Tier.BARGAIN,
    "_C": Tier.CHEAP,
    "_S": Tier.STANDARD,
    "_Q": Tier.QUALITY,
    "_E": Tier.EXCLUSIVE,
}

EXTRA_MARKERS = ("_CHG",)


def tier_from_identifier(identifier: str) -> Tier | None:
    """
    Derive the tier from a normalized identifier.

    Examples:
        >>> tier_from_identifier("P_HEALTHPOTION_S")
        <Tier.STANDARD: 2>
        >>> tier_from_identifier("P_HEALTHPOTION_S_CHG")
        <Tier.STANDARD: 2>
        >>> tier_from_identifier("P_HEALTHPOTION_Z") is None
        True
    """
    stem = identifier.upper()
    for marker in EXTRA_MARKERS:
        if stem.endswith(marker):
            stem = stem[: -len(marker)]
            break
    return TIER_SUFFIXES.get(stem[-2:]) if len(stem) >= 2 else None
