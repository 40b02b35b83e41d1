"""
Command-line interface.
"""

from .argparser import build_parser
from .subcommands import HANDLERS

__all__ = [
    "build_parser",
    "HANDLERS",
]
