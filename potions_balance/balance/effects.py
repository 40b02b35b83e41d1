"""
Static effect lookup tables.

EFFECT_KINDS and EFFECT_SHAPES are total over EffectIndex and built once at
import. Classification reads them; nothing mutates them.

Note the Restore kind also covers Damage Health/Magicka/Fatigue: those
potions use the restore duration/magnitude pair. Only the elemental damage
effects are of Damage kind and are never rebalanced.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from ..esp.effects import EffectIndex
from .tiers import TierlessCategory


class EffectKind(Enum):
    DAMAGE = "damage"
    RESTORE = "restore"
    OTHER = "other"


class EffectShape(Enum):
    """Which of duration/magnitude an effect actually uses."""
    NONE = "none"
    DURATION = "duration"
    MAGNITUDE = "magnitude"
    DURATION_AND_MAGNITUDE = "duration_and_magnitude"


_DAMAGE = {
    EffectIndex.FIRE_DAMAGE,
    EffectIndex.FROST_DAMAGE,
    EffectIndex.SHOCK_DAMAGE,
}

_RESTORE = {
    EffectIndex.RESTORE_HEALTH,
    EffectIndex.RESTORE_MAGICKA,
    EffectIndex.RESTORE_FATIGUE,
    EffectIndex.DAMAGE_HEALTH,
    EffectIndex.DAMAGE_MAGICKA,
    EffectIndex.DAMAGE_FATIGUE,
}

_NO_ATTRIBUTES = {
    EffectIndex.MARK,
    EffectIndex.RECALL,
    EffectIndex.DIVINE_INTERVENTION,
    EffectIndex.ALMSIVI_INTERVENTION,
    EffectIndex.CURE_COMMON_DISEASE,
    EffectIndex.CURE_BLIGHT_DISEASE,
    EffectIndex.CURE_CORPRUS_DISEASE,
    EffectIndex.CURE_POISON,
    EffectIndex.CURE_PARALYZATION,
    EffectIndex.VAMPIRISM,
}

_MAGNITUDE_ONLY = {
    EffectIndex.DISPEL,
    EffectIndex.RESTORE_ATTRIBUTE,
    EffectIndex.RESTORE_SKILL,
}

_DURATION_ONLY = {
    EffectIndex.WATER_BREATHING,
    EffectIndex.WATER_WALKING,
    EffectIndex.INVISIBILITY,
    EffectIndex.PARALYZE,
    EffectIndex.SILENCE,
    EffectIndex.SUMMON_SCAMP,
    EffectIndex.SUMMON_CLANNFEAR,
    EffectIndex.SUMMON_DAEDROTH,
    EffectIndex.SUMMON_DREMORA,
    EffectIndex.SUMMON_ANCESTRAL_GHOST,
    EffectIndex.SUMMON_SKELETAL_MINION,
    EffectIndex.SUMMON_LEAST_BONEWALKER,
    EffectIndex.SUMMON_GREATER_BONEWALKER,
    EffectIndex.SUMMON_BONELORD,
    EffectIndex.SUMMON_WINGED_TWILIGHT,
    EffectIndex.SUMMON_HUNGER,
    EffectIndex.SUMMON_GOLDEN_SAINT,
    EffectIndex.SUMMON_FLAME_ATRONACH,
    EffectIndex.SUMMON_FROST_ATRONACH,
    EffectIndex.SUMMON_STORM_ATRONACH,
    EffectIndex.BOUND_DAGGER,
    EffectIndex.BOUND_LONGSWORD,
    EffectIndex.BOUND_MACE,
    EffectIndex.BOUND_BATTLE_AXE,
    EffectIndex.BOUND_SPEAR,
    EffectIndex.BOUND_LONGBOW,
    EffectIndex.BOUND_CUIRASS,
    EffectIndex.BOUND_HELM,
    EffectIndex.BOUND_BOOTS,
    EffectIndex.BOUND_SHIELD,
    EffectIndex.BOUND_GLOVES,
    EffectIndex.CORPRUS,
    EffectIndex.SUMMON_CENTURION_SPHERE,
    EffectIndex.SUMMON_FABRICANT,
    EffectIndex.SUMMON_CREATURE_01,
    EffectIndex.SUMMON_CREATURE_02,
    EffectIndex.SUMMON_CREATURE_03,
    EffectIndex.SUMMON_CREATURE_04,
    EffectIndex.SUMMON_CREATURE_05,
    EffectIndex.STUNTED_MAGICKA,
}


def _kind(effect: EffectIndex) -> EffectKind:
    if effect in _DAMAGE:
        return EffectKind.DAMAGE
    if effect in _RESTORE:
        return EffectKind.RESTORE
    return EffectKind.OTHER


def _shape(effect: EffectIndex) -> EffectShape:
    if effect in _NO_ATTRIBUTES:
        return EffectShape.NONE
    if effect in _DURATION_ONLY:
        return EffectShape.DURATION
    if effect in _MAGNITUDE_ONLY:
        return EffectShape.MAGNITUDE
    return EffectShape.DURATION_AND_MAGNITUDE


EFFECT_KINDS: Mapping[EffectIndex, EffectKind] = MappingProxyType(
    {effect: _kind(effect) for effect in EffectIndex}
)

EFFECT_SHAPES: Mapping[EffectIndex, EffectShape] = MappingProxyType(
    {effect: _shape(effect) for effect in EffectIndex}
)

# Shape-NONE effects that have a tierless price. Cure Corprus is absent on
# purpose: it is left untouched.
TIERLESS_CATEGORIES: Mapping[EffectIndex, TierlessCategory] = MappingProxyType({
    EffectIndex.MARK: TierlessCategory.MARK,
    EffectIndex.RECALL: TierlessCategory.TELEPORT,
    EffectIndex.DIVINE_INTERVENTION: TierlessCategory.TELEPORT,
    EffectIndex.ALMSIVI_INTERVENTION: TierlessCategory.TELEPORT,
    EffectIndex.CURE_POISON: TierlessCategory.CURE_POISON_OR_PARALYZE,
    EffectIndex.CURE_PARALYZATION: TierlessCategory.CURE_POISON_OR_PARALYZE,
    EffectIndex.CURE_COMMON_DISEASE: TierlessCategory.CURE_COMMON_DISEASE,
    EffectIndex.CURE_BLIGHT_DISEASE: TierlessCategory.CURE_BLIGHT_DISEASE,
    EffectIndex.VAMPIRISM: TierlessCategory.VAMPIRISM,
})


def effect_kind(effect: EffectIndex) -> EffectKind:
    return EFFECT_KINDS[effect]


def effect_shape(effect: EffectIndex) -> EffectShape:
    return EFFECT_SHAPES[effect]
