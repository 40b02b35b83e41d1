"""
Classification and table-driven rescaling.
"""

from .tiers import Tier, TierlessCategory, tier_from_identifier
from .effects import (
    EffectKind,
    EffectShape,
    EFFECT_KINDS,
    EFFECT_SHAPES,
    TIERLESS_CATEGORIES,
)
from .classifier import Untouched, Tierless, Tiered, Classification, classify, describe
from .table import (
    BalanceTable,
    BalanceTableError,
    TierParams,
    TierlessParams,
    ORIGINAL,
    RECOMMENDED,
    PRESETS,
    get_preset,
    load_table,
    save_table,
)
from .engine import (
    BalanceEngine,
    BalanceResult,
    DirectStrategy,
    InterpolatedStrategy,
    InterpolationError,
    apply_balance,
    get_strategy,
)

__all__ = [
    "Tier",
    "TierlessCategory",
    "tier_from_identifier",
    "EffectKind",
    "EffectShape",
    "EFFECT_KINDS",
    "EFFECT_SHAPES",
    "TIERLESS_CATEGORIES",
    "Untouched",
    "Tierless",
    "Tiered",
    "Classification",
    "classify",
    "describe",
    "BalanceTable",
    "BalanceTableError",
    "TierParams",
    "TierlessParams",
    "ORIGINAL",
    "RECOMMENDED",
    "PRESETS",
    "get_preset",
    "load_table",
    "save_table",
    "BalanceEngine",
    "BalanceResult",
    "DirectStrategy",
    "InterpolatedStrategy",
    "InterpolationError",
    "apply_balance",
    "get_strategy",
]
