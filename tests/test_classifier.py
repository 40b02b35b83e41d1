"""
Tests for effect tables, tier parsing and classification.
"""

import pytest

from potions_balance.balance.classifier import (
    AUTO_CALCULATED,
    DAMAGE_EFFECT,
    EFFECT_COUNT,
    NO_CATEGORY,
    NO_TIER,
    Tiered,
    Tierless,
    Untouched,
    classify,
)
from potions_balance.balance.effects import (
    EFFECT_KINDS,
    EFFECT_SHAPES,
    EffectKind,
    EffectShape,
)
from potions_balance.balance.tiers import Tier, TierlessCategory, tier_from_identifier
from potions_balance.errors import PotionRecordError
from potions_balance.esp.effects import EffectIndex
from potions_balance.potions.model import EffectEntry, PotionRecord, normalize_identifier


def _potion(identifier: str, *effects: int, flags: int = 0) -> PotionRecord:
    return PotionRecord(
        identifier=normalize_identifier(identifier),
        raw_identifier=identifier,
        value=10,
        weight=1.0,
        flags=flags,
        effects=tuple(EffectEntry(int(e), 1, 1, 1) for e in effects),
    )


class TestEffectTables:
    """Static kind/shape tables."""

    def test_tables_are_total(self):
        assert set(EFFECT_KINDS) == set(EffectIndex)
        assert set(EFFECT_SHAPES) == set(EffectIndex)

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            EFFECT_KINDS[EffectIndex.FIRE_DAMAGE] = EffectKind.OTHER

    @pytest.mark.parametrize("effect,kind", [
        (EffectIndex.FIRE_DAMAGE, EffectKind.DAMAGE),
        (EffectIndex.FROST_DAMAGE, EffectKind.DAMAGE),
        (EffectIndex.SHOCK_DAMAGE, EffectKind.DAMAGE),
        (EffectIndex.RESTORE_HEALTH, EffectKind.RESTORE),
        (EffectIndex.DAMAGE_FATIGUE, EffectKind.RESTORE),
        (EffectIndex.FORTIFY_ATTRIBUTE, EffectKind.OTHER),
        (EffectIndex.SUN_DAMAGE, EffectKind.OTHER),
    ])
    def test_kinds(self, effect, kind):
        assert EFFECT_KINDS[effect] is kind

    @pytest.mark.parametrize("effect,shape", [
        (EffectIndex.MARK, EffectShape.NONE),
        (EffectIndex.CURE_CORPRUS_DISEASE, EffectShape.NONE),
        (EffectIndex.WATER_BREATHING, EffectShape.DURATION),
        (EffectIndex.SUMMON_CREATURE_03, EffectShape.DURATION),
        (EffectIndex.BOUND_GLOVES, EffectShape.DURATION),
        (EffectIndex.DISPEL, EffectShape.MAGNITUDE),
        (EffectIndex.RESTORE_SKILL, EffectShape.MAGNITUDE),
        (EffectIndex.RESTORE_HEALTH, EffectShape.DURATION_AND_MAGNITUDE),
        (EffectIndex.LEVITATE, EffectShape.DURATION_AND_MAGNITUDE),
    ])
    def test_shapes(self, effect, shape):
        assert EFFECT_SHAPES[effect] is shape


class TestTierSuffix:
    @pytest.mark.parametrize("identifier,tier", [
        ("P_RESTORE_HEALTH_B", Tier.BARGAIN),
        ("P_RESTORE_HEALTH_C", Tier.CHEAP),
        ("P_RESTORE_HEALTH_S", Tier.STANDARD),
        ("P_RESTORE_HEALTH_Q", Tier.QUALITY),
        ("P_RESTORE_HEALTH_E", Tier.EXCLUSIVE),
        ("P_RESTORE_HEALTH_E_CHG", Tier.EXCLUSIVE),
        ("P_RESTORE_HEALTH_Z", None),
        ("P_RESTORE_HEALTH_CHG", None),
        ("S", None),
    ])
    def test_suffix(self, identifier, tier):
        assert tier_from_identifier(identifier) is tier

    def test_tiers_are_ordered(self):
        assert Tier.BARGAIN < Tier.CHEAP < Tier.STANDARD < Tier.QUALITY < Tier.EXCLUSIVE


class TestClassify:
    """classify() rules."""

    def test_tiered_restore(self):
        result = classify(_potion("p_healthpotion_s", EffectIndex.RESTORE_HEALTH))
        assert result == Tiered(Tier.STANDARD, EffectIndex.RESTORE_HEALTH)
        assert result.kind is EffectKind.RESTORE
        assert result.shape is EffectShape.DURATION_AND_MAGNITUDE

    def test_auto_calculated_is_untouched(self):
        result = classify(_potion("P_A_S", EffectIndex.RESTORE_HEALTH, flags=1))
        assert result == Untouched(AUTO_CALCULATED)

    def test_multiple_effects_are_untouched(self):
        result = classify(_potion("P_A_S", EffectIndex.RESTORE_HEALTH, EffectIndex.RESTORE_FATIGUE))
        assert result == Untouched(EFFECT_COUNT)

    def test_no_effects_are_untouched(self):
        assert classify(_potion("P_A_S")) == Untouched(EFFECT_COUNT)

    def test_damage_is_untouched_even_with_tier(self):
        assert classify(_potion("P_FIRE_S", EffectIndex.FIRE_DAMAGE)) == Untouched(DAMAGE_EFFECT)

    def test_damage_without_suffix_is_untouched(self):
        assert classify(_potion("P_FIRE_Z", EffectIndex.FIRE_DAMAGE)) == Untouched(DAMAGE_EFFECT)

    def test_missing_suffix_is_untouched(self):
        assert classify(_potion("P_LEVITATE_Z", EffectIndex.LEVITATE)) == Untouched(NO_TIER)

    @pytest.mark.parametrize("effect,category", [
        (EffectIndex.MARK, TierlessCategory.MARK),
        (EffectIndex.RECALL, TierlessCategory.TELEPORT),
        (EffectIndex.ALMSIVI_INTERVENTION, TierlessCategory.TELEPORT),
        (EffectIndex.CURE_PARALYZATION, TierlessCategory.CURE_POISON_OR_PARALYZE),
        (EffectIndex.CURE_COMMON_DISEASE, TierlessCategory.CURE_COMMON_DISEASE),
        (EffectIndex.CURE_BLIGHT_DISEASE, TierlessCategory.CURE_BLIGHT_DISEASE),
        (EffectIndex.VAMPIRISM, TierlessCategory.VAMPIRISM),
    ])
    def test_tierless_ignores_suffix(self, effect, category):
        assert classify(_potion("P_ANY_Q", effect)) == Tierless(category, effect)
        assert classify(_potion("P_ANY", effect)) == Tierless(category, effect)

    def test_cure_corprus_is_untouched(self):
        assert classify(_potion("P_CURE_CORPRUS", EffectIndex.CURE_CORPRUS_DISEASE)) == Untouched(NO_CATEGORY)

    def test_unknown_effect_index_is_fatal(self):
        with pytest.raises(PotionRecordError, match="Invalid potion 'P_Odd_S'"):
            classify(_potion("P_Odd_S", 200))

    def test_classification_depends_only_on_identifier_and_effect(self):
        a = _potion("P_X_Q", EffectIndex.FEATHER)
        b = a.with_fields(value=9999, weight=42.0, source="Other.esp")
        assert classify(a) == classify(b)
