"""
Magic effect catalog.

The game addresses magic effects by a fixed 16-bit index. Only indices
0..142 exist; anything else in an ENAM subrecord is invalid data.
"""

from enum import IntEnum


class EffectIndex(IntEnum):
    WATER_BREATHING = 0
    SWIFT_SWIM = 1
    WATER_WALKING = 2
    SHIELD = 3
    FIRE_SHIELD = 4
    LIGHTNING_SHIELD = 5
    FROST_SHIELD = 6
    BURDEN = 7
    FEATHER = 8
    JUMP = 9
    LEVITATE = 10
    SLOW_FALL = 11
    LOCK = 12
    OPEN = 13
    FIRE_DAMAGE = 14
    SHOCK_DAMAGE = 15
    FROST_DAMAGE = 16
    DRAIN_ATTRIBUTE = 17
    DRAIN_HEALTH = 18
    DRAIN_MAGICKA = 19
    DRAIN_FATIGUE = 20
    DRAIN_SKILL = 21
    DAMAGE_ATTRIBUTE = 22
    DAMAGE_HEALTH = 23
    DAMAGE_MAGICKA = 24
    DAMAGE_FATIGUE = 25
    DAMAGE_SKILL = 26
    POISON = 27
    WEAKNESS_TO_FIRE = 28
    WEAKNESS_TO_FROST = 29
    WEAKNESS_TO_SHOCK = 30
    WEAKNESS_TO_MAGICKA = 31
    WEAKNESS_TO_COMMON_DISEASE = 32
    WEAKNESS_TO_BLIGHT_DISEASE = 33
    WEAKNESS_TO_CORPRUS_DISEASE = 34
    WEAKNESS_TO_POISON = 35
    WEAKNESS_TO_NORMAL_WEAPONS = 36
    DISINTEGRATE_WEAPON = 37
    DISINTEGRATE_ARMOR = 38
    INVISIBILITY = 39
    CHAMELEON = 40
    LIGHT = 41
    SANCTUARY = 42
    NIGHT_EYE = 43
    CHARM = 44
    PARALYZE = 45
    SILENCE = 46
    BLIND = 47
    SOUND = 48
    CALM_HUMANOID = 49
    CALM_CREATURE = 50
    FRENZY_HUMANOID = 51
    FRENZY_CREATURE = 52
    DEMORALIZE_HUMANOID = 53
    DEMORALIZE_CREATURE = 54
    RALLY_HUMANOID = 55
    RALLY_CREATURE = 56
    DISPEL = 57
    SOULTRAP = 58
    TELEKINESIS = 59
    MARK = 60
    RECALL = 61
    DIVINE_INTERVENTION = 62
    ALMSIVI_INTERVENTION = 63
    DETECT_ANIMAL = 64
    DETECT_ENCHANTMENT = 65
    DETECT_KEY = 66
    SPELL_ABSORPTION = 67
    REFLECT = 68
    CURE_COMMON_DISEASE = 69
    CURE_BLIGHT_DISEASE = 70
    CURE_CORPRUS_DISEASE = 71
    CURE_POISON = 72
    CURE_PARALYZATION = 73
    RESTORE_ATTRIBUTE = 74
    RESTORE_HEALTH = 75
    RESTORE_MAGICKA = 76
    RESTORE_FATIGUE = 77
    RESTORE_SKILL = 78
    FORTIFY_ATTRIBUTE = 79
    FORTIFY_HEALTH = 80
    FORTIFY_MAGICKA = 81
    FORTIFY_FATIGUE = 82
    FORTIFY_SKILL = 83
    FORTIFY_MAXIMUM_MAGICKA = 84
    ABSORB_ATTRIBUTE = 85
    ABSORB_HEALTH = 86
    ABSORB_MAGICKA = 87
    ABSORB_FATIGUE = 88
    ABSORB_SKILL = 89
    RESIST_FIRE = 90
    RESIST_FROST = 91
    RESIST_SHOCK = 92
    RESIST_MAGICKA = 93
    RESIST_COMMON_DISEASE = 94
    RESIST_BLIGHT_DISEASE = 95
    RESIST_CORPRUS_DISEASE = 96
    RESIST_POISON = 97
    RESIST_NORMAL_WEAPONS = 98
    RESIST_PARALYSIS = 99
    REMOVE_CURSE = 100
    TURN_UNDEAD = 101
    SUMMON_SCAMP = 102
    SUMMON_CLANNFEAR = 103
    SUMMON_DAEDROTH = 104
    SUMMON_DREMORA = 105
    SUMMON_ANCESTRAL_GHOST = 106
    SUMMON_SKELETAL_MINION = 107
    SUMMON_LEAST_BONEWALKER = 108
    SUMMON_GREATER_BONEWALKER = 109
    SUMMON_BONELORD = 110
    SUMMON_WINGED_TWILIGHT = 111
    SUMMON_HUNGER = 112
    SUMMON_GOLDEN_SAINT = 113
    SUMMON_FLAME_ATRONACH = 114
    SUMMON_FROST_ATRONACH = 115
    SUMMON_STORM_ATRONACH = 116
    FORTIFY_ATTACK = 117
    COMMAND_CREATURE = 118
    COMMAND_HUMANOID = 119
    BOUND_DAGGER = 120
    BOUND_LONGSWORD = 121
    BOUND_MACE = 122
    BOUND_BATTLE_AXE = 123
    BOUND_SPEAR = 124
    BOUND_LONGBOW = 125
    EXTRA_SPELL = 126
    BOUND_CUIRASS = 127
    BOUND_HELM = 128
    BOUND_BOOTS = 129
    BOUND_SHIELD = 130
    BOUND_GLOVES = 131
    CORPRUS = 132
    VAMPIRISM = 133
    SUMMON_CENTURION_SPHERE = 134
    SUN_DAMAGE = 135
    STUNTED_MAGICKA = 136
    SUMMON_FABRICANT = 137
    SUMMON_CREATURE_01 = 138
    SUMMON_CREATURE_02 = 139
    SUMMON_CREATURE_03 = 140
    SUMMON_CREATURE_04 = 141
    SUMMON_CREATURE_05 = 142

    @property
    def label(self) -> str:
        """Human-readable name, e.g. 'Restore Health'."""
        return self.name.replace("_", " ").title()


def parse_effect_index(raw: int) -> EffectIndex:
    """
    Convert a raw ENAM index into the catalog enum.

    Raises:
        ValueError: If the index names no effect
    """
    try:
        return EffectIndex(raw)
    except ValueError:
        raise ValueError(f"unknown effect index {raw}") from None
