"""
Potion extraction and cross-file override resolution.
"""

from .model import EffectEntry, PotionRecord, normalize_identifier, build_potion_record
from .extractor import extract_potion, extract_potions, is_self_produced
from .merge import FileContribution, MergeResult, OverrideResolutionEngine, fold_potions

__all__ = [
    "EffectEntry",
    "PotionRecord",
    "normalize_identifier",
    "build_potion_record",
    "extract_potion",
    "extract_potions",
    "is_self_produced",
    "FileContribution",
    "MergeResult",
    "OverrideResolutionEngine",
    "fold_potions",
]
