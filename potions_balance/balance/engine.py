"""
Balance engine: rewrites potion numbers from a balance table.

Only value, weight, duration and magnitude ever change. Everything else on
the record, including the other ENAM fields, is carried through.

Strategies decide the value of tiered potions:

- DirectStrategy (default): value comes straight from the table. Running it
  twice gives the same numbers, so re-balancing the tool's own output is a
  no-op.
- InterpolatedStrategy: value is mapped from the input set's own per-tier
  price levels onto the table's. Must be selected explicitly and is not
  idempotent.

Weight, duration, magnitude and tierless values are always direct.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from ..config.constants import validate_strategy
from ..errors import PotionsBalanceError
from ..potions.model import EffectEntry, PotionRecord
from ..utils.helpers import UINT32_MAX, format_f32, to_f32
from ..utils.logger import get_logger
from .classifier import Classification, Tiered, Tierless, Untouched, classify, describe
from .effects import EffectKind, EffectShape
from .table import BalanceTable
from .tiers import Tier


class InterpolationError(PotionsBalanceError):
    """The input set cannot provide reference prices for every tier."""

    def __init__(self, tier: Tier):
        self.tier = tier
        super().__init__(f"No potions of the '{tier.label}' tier found; cannot interpolate values.")


# ==================== Per-record rewrite ====================

def rescale_effect(entry: EffectEntry, classification: Tiered, table: BalanceTable) -> EffectEntry:
    """Duration/magnitude for a tiered potion's single effect."""
    params = table.tier(classification.tier)
    shape = classification.shape

    if shape is EffectShape.DURATION:
        return replace(entry, duration=params.duration_only)
    if shape is EffectShape.MAGNITUDE:
        return replace(entry, magnitude_min=params.magnitude_only, magnitude_max=params.magnitude_only)
    if shape is EffectShape.DURATION_AND_MAGNITUDE:
        duration, magnitude = params.restore if classification.kind is EffectKind.RESTORE else params.other
        return replace(entry, duration=duration, magnitude_min=magnitude, magnitude_max=magnitude)
    return entry


def apply_balance(
    record: PotionRecord,
    classification: Classification,
    table: BalanceTable,
    value: Optional[int] = None,
) -> PotionRecord:
    """
    Rewrite one potion from the table.

    Args:
        record: Potion to rewrite
        classification: Result of classify(record)
        table: Balance parameters
        value: Override for a tiered potion's value (strategy-computed)

    Returns:
        New record; the input is returned as-is when untouched
    """
    if isinstance(classification, Untouched):
        return record

    if isinstance(classification, Tierless):
        params = table.category(classification.category)
        return record.with_fields(value=params.value, weight=to_f32(params.weight))

    params = table.tier(classification.tier)
    effect = rescale_effect(record.effects[0], classification, table)
    return record.with_fields(
        value=params.value if value is None else value,
        weight=to_f32(params.weight),
        effects=(effect,) + tuple(record.effects[1:]),
    )


# ==================== Strategies ====================

class DirectStrategy:
    """Table value overwrite."""

    name = "direct"

    def prepare(self, classified: Iterable[Tuple[PotionRecord, Classification]], table: BalanceTable) -> None:
        pass

    def value_for(self, record: PotionRecord, classification: Tiered, table: BalanceTable) -> int:
        return table.tier(classification.tier).value


class InterpolatedStrategy:
    """
    Piecewise-linear value mapping from observed price levels.

    For each tier the reference price is the upper median of the values of
    the tiered potions in the input. References and table values are each
    sorted, then a potion's value is mapped:

        below the lowest reference   proportionally (v * y0 / x0)
        between references           linearly within the segment
        above the highest reference  linearly along the last segment

    A value equal to a reference maps exactly to the matching table value.
    """

    name = "interpolated"

    def __init__(self):
        self.references: Optional[np.ndarray] = None

    def prepare(self, classified: Iterable[Tuple[PotionRecord, Classification]], table: BalanceTable) -> None:
        observed: Dict[Tier, List[int]] = {tier: [] for tier in Tier}
        for record, classification in classified:
            if isinstance(classification, Tiered):
                observed[classification.tier].append(record.value)

        references = []
        for tier in Tier:
            values = sorted(observed[tier])
            if not values:
                raise InterpolationError(tier)
            references.append(values[len(values) // 2])
        self.references = np.sort(np.asarray(references, dtype=np.float64))

        get_logger().info(
            "Interpolation references: "
            + ", ".join(str(int(x)) for x in self.references)
        )

    def map_value(self, value: int, table: BalanceTable) -> int:
        if self.references is None:
            raise RuntimeError("InterpolatedStrategy.prepare() must run first")
        xs = self.references
        ys = np.sort(np.asarray([params.value for params in table.tiers], dtype=np.float64))
        v = float(value)

        i = int(np.searchsorted(xs, v))
        if i < len(xs) and xs[i] == v:
            result = ys[i]
        elif i == 0:
            result = v * ys[0] / xs[0] if xs[0] else ys[0]
        elif i == len(xs):
            span = xs[-1] - xs[-2]
            slope = (ys[-1] - ys[-2]) / span if span else 0.0
            result = ys[-1] + slope * (v - xs[-1])
        else:
            result = ys[i - 1] + (ys[i] - ys[i - 1]) * (v - xs[i - 1]) / (xs[i] - xs[i - 1])

        # Round half up
        return int(min(max(np.floor(result + 0.5), 0), UINT32_MAX))

    def value_for(self, record: PotionRecord, classification: Tiered, table: BalanceTable) -> int:
        return self.map_value(record.value, table)


STRATEGIES = {
    DirectStrategy.name: DirectStrategy,
    InterpolatedStrategy.name: InterpolatedStrategy,
}


def get_strategy(name: str):
    """
    Create a strategy by name.

    Raises:
        ValueError: Unknown strategy
    """
    return STRATEGIES[validate_strategy(name)]()


# ==================== Engine ====================

@dataclass
class BalanceResult:
    """
    Output of a balance pass.

    Attributes:
        potions: Rewritten potions, same order as the input
        classifications: Normalized identifier -> classification
        changed: Identifiers whose numbers actually changed
        stats: Counts per classification label (tier label, category label,
            or "Untouched")
    """
    potions: List[PotionRecord] = field(default_factory=list)
    classifications: Dict[str, Classification] = field(default_factory=dict)
    changed: List[str] = field(default_factory=list)
    stats: Counter = field(default_factory=Counter)


def _stat_key(classification: Classification) -> str:
    if isinstance(classification, Tiered):
        return classification.tier.label
    if isinstance(classification, Tierless):
        return classification.category.label
    return "Untouched"


class BalanceEngine:
    """
    Classifies and rescales a merged potion set.

    Args:
        table: Balance parameters
        strategy: Strategy name or instance; defaults to direct
    """

    def __init__(self, table: BalanceTable, strategy=None):
        self.table = table
        if strategy is None:
            strategy = DirectStrategy()
        elif isinstance(strategy, str):
            strategy = get_strategy(strategy)
        self.strategy = strategy

    def apply(self, record: PotionRecord, classification: Optional[Classification] = None) -> PotionRecord:
        """Rescale a single potion; classifies it if no classification is given."""
        if classification is None:
            classification = classify(record)
        value = None
        if isinstance(classification, Tiered):
            value = self.strategy.value_for(record, classification, self.table)
        return apply_balance(record, classification, self.table, value)

    def apply_all(self, potions: Iterable[PotionRecord]) -> BalanceResult:
        """
        Classify every potion, prepare the strategy, then rescale.

        Raises:
            PotionRecordError: A potion has an effect index outside the catalog
            InterpolationError: Interpolated strategy with a tier missing
        """
        logger = get_logger()
        classified = [(record, classify(record)) for record in potions]
        self.strategy.prepare(classified, self.table)

        result = BalanceResult()
        for record, classification in classified:
            updated = self.apply(record, classification)
            result.potions.append(updated)
            result.classifications[record.identifier] = classification
            result.stats[_stat_key(classification)] += 1

            if isinstance(classification, Untouched):
                logger.potion("UNTOUCHED", record.identifier, reason=classification.reason)
                continue
            if updated != record:
                result.changed.append(record.identifier)
                effect = updated.effects[0]
                logger.potion(
                    "RESCALED", record.identifier,
                    classification=describe(classification),
                    value=f"{record.value}->{updated.value}",
                    weight=f"{format_f32(record.weight)}->{format_f32(updated.weight)}",
                    duration=effect.duration,
                    magnitude=f"{effect.magnitude_min}-{effect.magnitude_max}",
                )

        logger.info(
            f"Balanced {len(result.potions)} potions with table '{self.table.name}' "
            f"({self.strategy.name}): {len(result.changed)} changed"
        )
        return result
