"""
Tools layer: one function per user operation, each returning a ToolResult.
"""

from .shared import ToolResult
from .plugin_tools import apply_tool, balance_tool, report_tool, scan_tool
from .table_tools import init_table_tool, show_table_tool

__all__ = [
    "ToolResult",
    "scan_tool",
    "balance_tool",
    "apply_tool",
    "report_tool",
    "init_table_tool",
    "show_table_tool",
]
