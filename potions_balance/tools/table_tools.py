"""
Balance table tools: export a preset, inspect a table.
"""

from __future__ import annotations

from typing import Optional

from ..balance.table import get_preset, save_table, to_dict
from ..errors import PotionsBalanceError
from ..utils.logger import get_logger
from .shared import ToolResult, _resolve_table


logger = get_logger()


def init_table_tool(output: str, preset: str) -> ToolResult:
    """
    Export a built-in preset as CSV or YAML (chosen by extension).

    Args:
        output: Destination .csv, .yaml or .yml
        preset: "original" or "recommended"
    """
    try:
        table = get_preset(preset)
        path = save_table(table, output)
        logger.info(f"Exported preset '{table.name}' to {path}")
        return ToolResult(
            success=True,
            message=f"Exported '{table.name}' to {path}",
            data={"output": str(path), "table": table.name},
        )
    except (PotionsBalanceError, ValueError) as e:
        logger.failure(f"Export failed: {e}")
        return ToolResult(success=False, error=str(e))


def show_table_tool(preset: Optional[str] = None, table_path: Optional[str] = None) -> ToolResult:
    """
    Load a preset or table file for display.

    Returns:
        ToolResult whose data holds the table mapping under "table"
    """
    try:
        table = _resolve_table(preset, table_path)
        return ToolResult(
            success=True,
            message=f"Table '{table.name}'",
            data={"table": to_dict(table)},
        )
    except (PotionsBalanceError, ValueError) as e:
        logger.failure(f"Cannot load table: {e}")
        return ToolResult(success=False, error=str(e))
