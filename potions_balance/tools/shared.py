"""
Shared types and utilities for the tools layer.

This module provides:
- ToolResult: Standard return type for all tools
- Helpers that resolve CLI/config defaults into codec, table and strategy

All tools should import ToolResult from this module.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from ..balance.table import BalanceTable, get_preset, load_table
from ..config.config import get_config
from ..esp.codec import Tes3Codec


@dataclass
class ToolResult:
    """
    Standard return type for all tools.

    Attributes:
        success: Whether the operation succeeded
        message: Human-readable success/info message
        data: Structured payload (counts, paths, tables)
        error: Error message if success=False
    """
    success: bool
    message: str = ""
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def _make_codec(code_page: Optional[str] = None) -> Tes3Codec:
    """Codec for the given game language, or the configured one."""
    return Tes3Codec(code_page or get_config().scan.code_page)


def _skip_self(include_self: Optional[bool]) -> bool:
    if include_self is None:
        return get_config().scan.skip_self
    return not include_self


def _resolve_table(preset: Optional[str] = None, table_path: Optional[str] = None) -> BalanceTable:
    """
    Pick the balance table: an explicit file wins, then an explicit preset,
    then the configured preset.
    """
    if table_path:
        return load_table(table_path)
    return get_preset(preset or get_config().balance.preset)


def _resolve_strategy(strategy: Optional[str] = None) -> str:
    return strategy or get_config().balance.strategy
