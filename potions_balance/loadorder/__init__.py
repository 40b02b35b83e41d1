"""
Load order resolution: launcher configs -> ordered content entries.
"""

from .game_config import GameConfig, read_game_config, parse_morrowind_ini, parse_openmw_cfg
from .resolver import (
    ContentEntry,
    order_entries,
    locate,
    resolve_entries,
    resolve_load_order,
)

__all__ = [
    "GameConfig",
    "read_game_config",
    "parse_morrowind_ini",
    "parse_openmw_cfg",
    "ContentEntry",
    "order_entries",
    "locate",
    "resolve_entries",
    "resolve_load_order",
]
