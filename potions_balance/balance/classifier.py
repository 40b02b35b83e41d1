"""
Potion classification.

classify() is a pure function of a potion's normalized identifier and its
single effect. It never looks at value, weight or the balance table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..errors import PotionRecordError
from ..esp.effects import EffectIndex, parse_effect_index
from ..potions.model import PotionRecord
from .effects import (
    EffectKind,
    EffectShape,
    TIERLESS_CATEGORIES,
    effect_kind,
    effect_shape,
)
from .tiers import Tier, TierlessCategory, tier_from_identifier


# Untouched reasons
AUTO_CALCULATED = "auto_calculated"
EFFECT_COUNT = "effect_count"
DAMAGE_EFFECT = "damage_effect"
NO_CATEGORY = "no_category"
NO_TIER = "no_tier"


@dataclass(frozen=True)
class Untouched:
    """The record is emitted unchanged."""
    reason: str


@dataclass(frozen=True)
class Tierless:
    """Priced by category; duration and magnitude are never changed."""
    category: TierlessCategory
    effect: EffectIndex


@dataclass(frozen=True)
class Tiered:
    """Priced by tier; duration/magnitude follow the effect's kind and shape."""
    tier: Tier
    effect: EffectIndex

    @property
    def kind(self) -> EffectKind:
        return effect_kind(self.effect)

    @property
    def shape(self) -> EffectShape:
        return effect_shape(self.effect)


Classification = Union[Untouched, Tierless, Tiered]


def classify(record: PotionRecord) -> Classification:
    """
    Classify one potion.

    Rules, in order:
        1. Auto-calculated or not exactly one effect: untouched
        2. Effect index outside the catalog: fatal
        3. Damage-kind effect: untouched, whatever the tier
        4. Effect with no duration or magnitude: its tierless category, or
           untouched if it has none
        5. Tier suffix on the identifier: tiered, otherwise untouched

    Raises:
        PotionRecordError: The single effect index is not a known effect
    """
    if record.auto_calculate:
        return Untouched(AUTO_CALCULATED)
    entry = record.single_effect
    if entry is None:
        return Untouched(EFFECT_COUNT)

    try:
        effect = parse_effect_index(entry.effect_index)
    except ValueError as e:
        raise PotionRecordError(
            record.source or None,
            f"Invalid potion '{record.raw_identifier}' ({e})",
        ) from e

    if effect_kind(effect) is EffectKind.DAMAGE:
        return Untouched(DAMAGE_EFFECT)

    if effect_shape(effect) is EffectShape.NONE:
        category = TIERLESS_CATEGORIES.get(effect)
        if category is None:
            return Untouched(NO_CATEGORY)
        return Tierless(category, effect)

    tier = tier_from_identifier(record.identifier)
    if tier is None:
        return Untouched(NO_TIER)
    return Tiered(tier, effect)


def describe(classification: Classification) -> str:
    """Short label used in logs and reports."""
    if isinstance(classification, Tiered):
        return f"{classification.tier.label} / {classification.kind.value} / {classification.shape.value}"
    if isinstance(classification, Tierless):
        return classification.category.label
    return f"untouched ({classification.reason})"
