"""
Potions Balance - Morrowind potion normalizer

Merges every potion definition across a game's load order, classifies each
potion by quality tier and effect, rescales value, weight, duration and
magnitude from a balance table, and writes one override plugin that loads
after all of its inputs.
"""

__version__ = "1.0.0"
__author__ = "potions_balance"

from .config import get_config
from .errors import PotionsBalanceError

__all__ = [
    "__version__",
    "get_config",
    "PotionsBalanceError",
]
