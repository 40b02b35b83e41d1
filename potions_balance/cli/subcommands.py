"""
Subcommand handlers for the potions balance CLI.

All handle_* functions are module-level, accept an `args` namespace and
return the process exit code. They are dispatched from main() in
potions_cli.py.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from rich.panel import Panel
from rich.table import Table

from ..balance.table import TIERLESS, TIERS
from ..tools import (
    ToolResult,
    apply_tool,
    balance_tool,
    init_table_tool,
    report_tool,
    scan_tool,
    show_table_tool,
)
from .utils import console, print_error


# =============================================================================
# SHARED HELPERS
# =============================================================================

def _finish(result: ToolResult, args) -> int:
    """Print a tool result and map it to an exit code."""
    if not result.success:
        print_error(result.error or "unknown error")
        return 1
    if getattr(args, "json_output", False):
        print(json.dumps(result.to_dict(), indent=2, default=str))
    else:
        console.print(f"[green]✓[/] {result.message}")
    return 0


def _print_files(files: list) -> None:
    table = Table(title="Load Order")
    table.add_column("#", justify="right", style="dim")
    table.add_column("File")
    table.add_column("Potions", justify="right")
    table.add_column("Note", style="yellow")

    for i, f in enumerate(files, start=1):
        note = ""
        if f["skipped"]:
            note = "skipped (own output)"
        elif f["self_produced"]:
            note = "own output"
        table.add_row(str(i), f["name"], str(f["potions"]) if not f["skipped"] else "-", note)

    console.print(table)


def _print_counts(title: str, counts: Dict[str, int]) -> None:
    table = Table(title=title, show_header=False, box=None)
    table.add_column("Key", style="dim", width=30)
    table.add_column("Count", style="bold", justify="right")
    for key, count in counts.items():
        table.add_row(key, str(count))
    console.print(table)


def _print_table(data: Dict[str, Any]) -> None:
    tiers = Table(title=f"Balance Table: {data['name']}")
    tiers.add_column("Tier")
    for title in ("Value", "Weight", "Duration Only", "Magnitude Only",
                  "Restore D/M", "Others D/M"):
        tiers.add_column(title, justify="right")
    for tier in TIERS:
        row = data["tiers"][tier.name.lower()]
        tiers.add_row(
            tier.label,
            str(row["value"]),
            str(row["weight"]),
            str(row["duration_only"]),
            str(row["magnitude_only"]),
            "{} / {}".format(*row["restore"]),
            "{} / {}".format(*row["other"]),
        )
    console.print(tiers)

    tierless = Table(title="Tierless")
    tierless.add_column("Category")
    tierless.add_column("Value", justify="right")
    tierless.add_column("Weight", justify="right")
    for category in TIERLESS:
        row = data["tierless"][category.value]
        tierless.add_row(category.label, str(row["value"]), str(row["weight"]))
    console.print(tierless)


# =============================================================================
# HANDLERS
# =============================================================================

def handle_balance(args) -> int:
    """Handle `balance`."""
    result = balance_tool(
        config_path=args.config,
        output=args.output,
        preset=args.preset,
        table_path=args.table_path,
        strategy=args.strategy,
        code_page=args.code_page,
        include_self=args.include_self,
    )
    if result.success and not args.json_output:
        _print_files(result.data["files"])
        _print_counts("Classification", result.data["stats"])
    return _finish(result, args)


def handle_scan(args) -> int:
    """Handle `scan`."""
    result = scan_tool(
        config_path=args.config,
        output=args.output,
        code_page=args.code_page,
        include_self=args.include_self,
    )
    if result.success and not args.json_output:
        _print_files(result.data["files"])
    return _finish(result, args)


def handle_init(args) -> int:
    """Handle `init`."""
    return _finish(init_table_tool(output=args.output, preset=args.preset), args)


def handle_apply(args) -> int:
    """Handle `apply`."""
    result = apply_tool(
        table_path=args.table_path,
        target=args.target,
        code_page=args.code_page,
        strategy=args.strategy,
    )
    if result.success and not args.json_output:
        _print_counts("Classification", result.data["stats"])
    return _finish(result, args)


def handle_show(args) -> int:
    """Handle `show`."""
    result = show_table_tool(preset=args.preset, table_path=args.table_path)
    if result.success and not args.json_output:
        _print_table(result.data["table"])
        return 0
    return _finish(result, args)


def handle_report(args) -> int:
    """Handle `report`."""
    result = report_tool(
        config_path=args.config,
        code_page=args.code_page,
        include_self=args.include_self,
    )
    if result.success and not args.json_output:
        data = result.data
        _print_files(data["files"])
        _print_counts("Tiered", data["tiers"])
        _print_counts("Tierless", data["tierless"])
        _print_counts("Untouched", data["untouched"])
        console.print(Panel(
            f"{data['potions']} potions, {data['overrides']} overrides, "
            f"newest input mtime {data['newest_input_time']}",
            border_style="cyan",
        ))
    return _finish(result, args)


HANDLERS = {
    "balance": handle_balance,
    "scan": handle_scan,
    "init": handle_init,
    "apply": handle_apply,
    "show": handle_show,
    "report": handle_report,
}
