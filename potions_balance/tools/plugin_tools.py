"""
Plugin tools: scan, balance, apply and report.

These tools drive the full pipeline (resolve -> decode -> merge -> classify
-> rescale -> write) and return a ToolResult instead of raising.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..balance.classifier import Tiered, Tierless, classify
from ..balance.engine import BalanceEngine
from ..errors import NoPotionsFoundError, PotionsBalanceError
from ..esp.codec import Tes3Codec
from ..loadorder.resolver import file_mtime, resolve_load_order
from ..output.assembler import describe_output, output_time_for, write_plugin
from ..potions.extractor import extract_potions
from ..potions.merge import MergeResult, OverrideResolutionEngine
from ..utils.logger import get_logger
from .shared import ToolResult, _make_codec, _resolve_strategy, _resolve_table, _skip_self


logger = get_logger()


def _merge(config_path: str, codec: Tes3Codec, skip_self: bool) -> MergeResult:
    entries = resolve_load_order(config_path)
    logger.info(f"Load order: {len(entries)} content files from {config_path}")
    merge = OverrideResolutionEngine(codec, skip_self=skip_self).resolve(entries)
    if not merge.potions:
        raise NoPotionsFoundError()
    return merge


def _files_summary(merge: MergeResult) -> List[Dict[str, Any]]:
    return [
        {
            "name": f.entry.name,
            "folder": str(f.entry.folder),
            "modification_time": f.entry.modification_time,
            "potions": f.potions,
            "self_produced": f.self_produced,
            "skipped": f.skipped,
        }
        for f in merge.files
    ]


def scan_tool(
    config_path: str,
    output: str,
    code_page: Optional[str] = None,
    include_self: Optional[bool] = None,
) -> ToolResult:
    """
    Merge the potions of a load order and write them unmodified.

    Args:
        config_path: Morrowind.ini or openmw.cfg
        output: Plugin to write
        code_page: Game language ("en"/"ru"); config default if None
        include_self: Merge files produced by this tool too

    Returns:
        ToolResult with potion/file counts and the output timestamp
    """
    try:
        codec = _make_codec(code_page)
        merge = _merge(config_path, codec, _skip_self(include_self))
        output_time = output_time_for(merge)
        write_plugin(output, merge.potions.values(), output_time, codec, describe_output())

        return ToolResult(
            success=True,
            message=f"Wrote {len(merge.potions)} potions to {output}",
            data={
                "output": str(output),
                "potions": len(merge.potions),
                "overrides": merge.overrides,
                "modification_time": output_time,
                "files": _files_summary(merge),
            },
        )
    except (PotionsBalanceError, ValueError) as e:
        logger.failure(f"Scan failed: {e}")
        return ToolResult(success=False, error=str(e))


def balance_tool(
    config_path: str,
    output: str,
    preset: Optional[str] = None,
    table_path: Optional[str] = None,
    strategy: Optional[str] = None,
    code_page: Optional[str] = None,
    include_self: Optional[bool] = None,
) -> ToolResult:
    """
    Merge, rescale from a balance table, and write the override plugin.

    Args:
        config_path: Morrowind.ini or openmw.cfg
        output: Plugin to write
        preset: Built-in table name (ignored when table_path is given)
        table_path: CSV or YAML table file
        strategy: "direct" or "interpolated"; config default if None
        code_page: Game language ("en"/"ru"); config default if None
        include_self: Merge files produced by this tool too

    Returns:
        ToolResult with per-classification counts and the output timestamp
    """
    try:
        codec = _make_codec(code_page)
        table = _resolve_table(preset, table_path)
        engine = BalanceEngine(table, _resolve_strategy(strategy))

        merge = _merge(config_path, codec, _skip_self(include_self))
        output_time = output_time_for(merge)
        result = engine.apply_all(merge.potions.values())
        write_plugin(output, result.potions, output_time, codec, describe_output(table.name))

        return ToolResult(
            success=True,
            message=(
                f"Balanced {len(result.potions)} potions with '{table.name}' "
                f"({len(result.changed)} changed) -> {output}"
            ),
            data={
                "output": str(output),
                "table": table.name,
                "strategy": engine.strategy.name,
                "potions": len(result.potions),
                "changed": len(result.changed),
                "stats": dict(result.stats),
                "modification_time": output_time,
                "files": _files_summary(merge),
            },
        )
    except (PotionsBalanceError, ValueError) as e:
        logger.failure(f"Balance failed: {e}")
        return ToolResult(success=False, error=str(e))


def apply_tool(
    table_path: str,
    target: str,
    code_page: Optional[str] = None,
    strategy: Optional[str] = None,
) -> ToolResult:
    """
    Rescale the potions of an existing plugin in place.

    The target is read as-is, even if this tool produced it, and its
    modification time is kept so its place in the load order does not move.

    Args:
        table_path: CSV or YAML table file
        target: Plugin to rewrite
        code_page: Game language ("en"/"ru"); config default if None
        strategy: "direct" or "interpolated"; config default if None
    """
    try:
        codec = _make_codec(code_page)
        table = _resolve_table(table_path=table_path)
        engine = BalanceEngine(table, _resolve_strategy(strategy))

        target_path = Path(target)
        decoded = codec.read_file(target_path)
        potions = extract_potions(decoded, codec.encoding, target_path)
        if not potions:
            raise NoPotionsFoundError()
        modification_time = file_mtime(target_path)

        result = engine.apply_all(potions)
        write_plugin(target_path, result.potions, modification_time, codec, describe_output(table.name))

        return ToolResult(
            success=True,
            message=f"Applied '{table.name}' to {target} ({len(result.changed)} of {len(potions)} changed)",
            data={
                "target": str(target_path),
                "table": table.name,
                "potions": len(result.potions),
                "changed": len(result.changed),
                "stats": dict(result.stats),
                "modification_time": modification_time,
            },
        )
    except (PotionsBalanceError, ValueError) as e:
        logger.failure(f"Apply failed: {e}")
        return ToolResult(success=False, error=str(e))


def report_tool(
    config_path: str,
    code_page: Optional[str] = None,
    include_self: Optional[bool] = None,
) -> ToolResult:
    """
    Merge and classify without writing anything.

    Returns:
        ToolResult with per-file contributions and per-classification counts
    """
    try:
        codec = _make_codec(code_page)
        merge = _merge(config_path, codec, _skip_self(include_self))

        tiers: Counter = Counter()
        tierless: Counter = Counter()
        untouched: Counter = Counter()
        for record in merge.potions.values():
            classification = classify(record)
            if isinstance(classification, Tiered):
                tiers[classification.tier.label] += 1
            elif isinstance(classification, Tierless):
                tierless[classification.category.label] += 1
            else:
                untouched[classification.reason] += 1

        return ToolResult(
            success=True,
            message=(
                f"{len(merge.potions)} potions from {len(merge.contributing_files)} "
                f"of {len(merge.files)} files"
            ),
            data={
                "potions": len(merge.potions),
                "overrides": merge.overrides,
                "newest_input_time": merge.newest_input_time(),
                "files": _files_summary(merge),
                "tiers": dict(tiers),
                "tierless": dict(tierless),
                "untouched": dict(untouched),
            },
        )
    except (PotionsBalanceError, ValueError) as e:
        logger.failure(f"Report failed: {e}")
        return ToolResult(success=False, error=str(e))
