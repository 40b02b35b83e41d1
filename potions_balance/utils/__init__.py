"""
Utility modules.
"""

from .logger import get_logger, setup_logger, BalanceLogger
from .helpers import to_f32, format_f32, parse_int, parse_float, parse_weight, write_atomic

__all__ = [
    # Logger
    "get_logger",
    "setup_logger",
    "BalanceLogger",
    # Numeric helpers
    "to_f32",
    "format_f32",
    "parse_int",
    "parse_float",
    "parse_weight",
    "write_atomic",
]
