"""
Balance table: the full parameter set the rescale reads.

A table has one TierParams per tier and one TierlessParams per tierless
category. Tables are immutable; the two built-in presets are module-level
constants.

Two file forms are supported, selected by extension:

CSV (positional, names are ignored on import):
    ,Value,Weight,Duration Only,Magnitude Only,Restore Duration,...
    Bargain,20,1,20,10,5,5,20,10
    ...                                    (5 tier rows)
    ,,,,,,,,                               (blank separator)
    ,Value,Weight,,,,,,                    (second header)
    Mark,60,0.8,,,,,,
    ...                                    (6 tierless rows)

YAML:
    name: recommended
    tiers:
      bargain: {value: 20, weight: 1.0, duration_only: 20, magnitude_only: 10,
                restore: [5, 5], other: [20, 10]}
      ...
    tierless:
      mark: {value: 60, weight: 0.8}
      ...
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from ..config.constants import validate_preset_name
from ..errors import PotionsBalanceError
from ..utils.helpers import (
    INT32_MAX,
    INT32_MIN,
    UINT32_MAX,
    format_f32,
    parse_weight,
    parse_int,
    to_f32,
    write_atomic,
)
from .tiers import Tier, TierlessCategory


CSV_EXTENSIONS = (".csv",)
YAML_EXTENSIONS = (".yaml", ".yml")

TIER_HEADER = [
    "", "Value", "Weight", "Duration Only", "Magnitude Only",
    "Restore Duration", "Restore Magnitude", "Others Duration", "Others Magnitude",
]
TIERLESS_HEADER = ["", "Value", "Weight", "", "", "", "", "", ""]
ROW_WIDTH = len(TIER_HEADER)

TIERS = tuple(Tier)
TIERLESS = tuple(TierlessCategory)


class BalanceTableError(PotionsBalanceError):
    """A balance table file is malformed."""

    def __init__(self, source: Path | str, reason: str, row: Optional[int] = None,
                 column: Optional[str] = None):
        self.source = str(source)
        self.reason = reason
        self.row = row
        self.column = column
        where = []
        if row is not None:
            where.append(f"row {row}")
        if column is not None:
            where.append(f"column '{column}'")
        location = f" ({', '.join(where)})" if where else ""
        super().__init__(f"'{self.source}'{location}: {reason}.")


@dataclass(frozen=True)
class TierParams:
    """
    Parameters for one tier.

    Attributes:
        value: Gold value
        weight: Weight, held at single precision
        duration_only: Duration for duration-only effects
        magnitude_only: Magnitude for magnitude-only effects
        restore: (duration, magnitude) for restore-kind effects
        other: (duration, magnitude) for every other effect
    """
    value: int
    weight: float
    duration_only: int
    magnitude_only: int
    restore: Tuple[int, int]
    other: Tuple[int, int]

    def __post_init__(self):
        object.__setattr__(self, "weight", to_f32(self.weight))
        object.__setattr__(self, "restore", tuple(self.restore))
        object.__setattr__(self, "other", tuple(self.other))

    def numbers(self) -> Tuple[float, ...]:
        return (
            self.value, self.weight, self.duration_only, self.magnitude_only,
            self.restore[0], self.restore[1], self.other[0], self.other[1],
        )


@dataclass(frozen=True)
class TierlessParams:
    """Value and weight for one tierless category."""
    value: int
    weight: float

    def __post_init__(self):
        object.__setattr__(self, "weight", to_f32(self.weight))

    def numbers(self) -> Tuple[float, ...]:
        return (self.value, self.weight)


@dataclass(frozen=True)
class BalanceTable:
    """
    Complete balance parameter set.

    Attributes:
        name: Preset name or source file stem; goes into the output description
        tiers: One entry per Tier, in tier order
        tierless: One entry per TierlessCategory, in category order
    """
    name: str
    tiers: Tuple[TierParams, ...]
    tierless: Tuple[TierlessParams, ...]

    def __post_init__(self):
        object.__setattr__(self, "tiers", tuple(self.tiers))
        object.__setattr__(self, "tierless", tuple(self.tierless))
        if len(self.tiers) != len(TIERS):
            raise ValueError(f"expected {len(TIERS)} tiers, got {len(self.tiers)}")
        if len(self.tierless) != len(TIERLESS):
            raise ValueError(f"expected {len(TIERLESS)} tierless entries, got {len(self.tierless)}")

    def tier(self, tier: Tier) -> TierParams:
        return self.tiers[tier]

    def category(self, category: TierlessCategory) -> TierlessParams:
        return self.tierless[TIERLESS.index(category)]

    def numeric_fields(self) -> Tuple[float, ...]:
        """Every number in the table, in file order."""
        out: List[float] = []
        for params in self.tiers:
            out.extend(params.numbers())
        for params in self.tierless:
            out.extend(params.numbers())
        return tuple(out)


# ==================== Presets ====================

ORIGINAL = BalanceTable(
    name="original",
    tiers=(
        TierParams(5, 1.5, 8, 5, (5, 1), (8, 5)),
        TierParams(15, 1.0, 15, 8, (5, 2), (15, 8)),
        TierParams(35, 0.75, 30, 10, (5, 10), (30, 10)),
        TierParams(80, 0.5, 45, 15, (5, 20), (45, 15)),
        TierParams(175, 0.25, 60, 20, (5, 40), (60, 20)),
    ),
    tierless=(
        TierlessParams(35, 1.0),
        TierlessParams(35, 1.0),
        TierlessParams(20, 0.5),
        TierlessParams(20, 0.5),
        TierlessParams(30, 0.5),
        TierlessParams(5000, 1.5),
    ),
)

RECOMMENDED = BalanceTable(
    name="recommended",
    tiers=(
        TierParams(20, 1.0, 20, 10, (5, 5), (20, 10)),
        TierParams(40, 0.8, 40, 25, (5, 10), (40, 25)),
        TierParams(80, 0.6, 80, 45, (5, 17), (80, 45)),
        TierParams(160, 0.4, 160, 70, (5, 25), (160, 70)),
        TierParams(320, 0.2, 320, 100, (5, 40), (320, 100)),
    ),
    tierless=(
        TierlessParams(60, 0.8),
        TierlessParams(120, 0.8),
        TierlessParams(60, 0.4),
        TierlessParams(60, 0.4),
        TierlessParams(120, 0.4),
        TierlessParams(5000, 1.0),
    ),
)

PRESETS: Dict[str, BalanceTable] = {
    ORIGINAL.name: ORIGINAL,
    RECOMMENDED.name: RECOMMENDED,
}


def get_preset(name: str) -> BalanceTable:
    """
    Look up a built-in preset.

    Raises:
        ValueError: Unknown preset name
    """
    return PRESETS[validate_preset_name(name)]


# ==================== CSV form ====================

def to_rows(table: BalanceTable) -> List[List[str]]:
    """Lay a table out in the fixed tabular form."""
    rows = [list(TIER_HEADER)]
    for tier, params in zip(TIERS, table.tiers):
        rows.append([tier.label] + [_format_cell(n) for n in params.numbers()])
    rows.append([""] * ROW_WIDTH)
    rows.append(list(TIERLESS_HEADER))
    for category, params in zip(TIERLESS, table.tierless):
        cells = [category.label] + [_format_cell(n) for n in params.numbers()]
        rows.append(cells + [""] * (ROW_WIDTH - len(cells)))
    return rows


def _format_cell(number: float) -> str:
    if isinstance(number, float):
        return format_f32(number)
    return str(number)


# (column title, parser) for the 8 numeric tier columns
_TIER_COLUMNS = [
    ("Value", lambda v: parse_int(v, 0, UINT32_MAX)),
    ("Weight", parse_weight),
    ("Duration Only", parse_int),
    ("Magnitude Only", parse_int),
    ("Restore Duration", parse_int),
    ("Restore Magnitude", parse_int),
    ("Others Duration", parse_int),
    ("Others Magnitude", parse_int),
]


def _parse_cells(source, row_number: int, row: Sequence[str], columns) -> List[Any]:
    if len(row) < len(columns) + 1:
        raise BalanceTableError(
            source, f"expected {len(columns) + 1} cells, got {len(row)}", row=row_number,
        )
    values = []
    for (title, parser), cell in zip(columns, row[1:]):
        try:
            values.append(parser(cell))
        except ValueError as e:
            raise BalanceTableError(source, str(e), row=row_number, column=title) from None
    return values


def from_rows(rows: Sequence[Sequence[str]], name: str = "custom",
              source: Path | str = "<table>") -> BalanceTable:
    """
    Build a table from the fixed tabular form.

    Import is positional: the header row is skipped, 5 tier rows are read,
    2 rows (blank separator and second header) are skipped, then 6 tierless
    rows are read. Row labels are not checked.

    Raises:
        BalanceTableError: Missing row, short row, or a bad cell
    """
    rows = list(rows)
    first_tier = 1
    first_tierless = first_tier + len(TIERS) + 2
    needed = first_tierless + len(TIERLESS)
    if len(rows) < needed:
        raise BalanceTableError(
            source, f"expected at least {needed} rows, got {len(rows)}", row=len(rows) + 1,
        )

    tiers = []
    for offset in range(len(TIERS)):
        index = first_tier + offset
        value, weight, duration_only, magnitude_only, rd, rm, od, om = _parse_cells(
            source, index + 1, rows[index], _TIER_COLUMNS,
        )
        tiers.append(TierParams(value, weight, duration_only, magnitude_only, (rd, rm), (od, om)))

    tierless = []
    for offset in range(len(TIERLESS)):
        index = first_tierless + offset
        value, weight = _parse_cells(source, index + 1, rows[index], _TIER_COLUMNS[:2])
        tierless.append(TierlessParams(value, weight))

    return BalanceTable(name, tiers, tierless)


def write_csv(table: BalanceTable, path: Path | str) -> Path:
    buffer = io.StringIO(newline="")
    csv.writer(buffer, lineterminator="\n").writerows(to_rows(table))
    return write_atomic(path, buffer.getvalue().encode("utf-8"))


def read_csv(path: Path | str) -> BalanceTable:
    path = Path(path)
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        rows = list(csv.reader(f))
    return from_rows(rows, name=path.stem, source=path)


# ==================== YAML form ====================

def to_dict(table: BalanceTable) -> Dict[str, Any]:
    return {
        "name": table.name,
        "tiers": {
            tier.name.lower(): {
                "value": params.value,
                "weight": float(format_f32(params.weight)),
                "duration_only": params.duration_only,
                "magnitude_only": params.magnitude_only,
                "restore": list(params.restore),
                "other": list(params.other),
            }
            for tier, params in zip(TIERS, table.tiers)
        },
        "tierless": {
            category.value: {
                "value": params.value,
                "weight": float(format_f32(params.weight)),
            }
            for category, params in zip(TIERLESS, table.tierless)
        },
    }


def _lookup(source, data: Any, *keys: str) -> Any:
    current = data
    for depth, key in enumerate(keys):
        if not isinstance(current, dict) or key not in current:
            raise BalanceTableError(source, f"missing key '{'.'.join(keys[:depth + 1])}'")
        current = current[key]
    return current


def _parse_value(source, parser, data: Any, *keys: str) -> Any:
    raw = _lookup(source, data, *keys)
    try:
        return parser(raw)
    except ValueError as e:
        raise BalanceTableError(source, f"'{'.'.join(keys)}': {e}") from None


def _parse_pair(source, data: Any, *keys: str) -> Tuple[int, int]:
    raw = _lookup(source, data, *keys)
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise BalanceTableError(source, f"'{'.'.join(keys)}': expected [duration, magnitude]")
    try:
        return parse_int(raw[0]), parse_int(raw[1])
    except ValueError as e:
        raise BalanceTableError(source, f"'{'.'.join(keys)}': {e}") from None


def _parse_u32(value: Any) -> int:
    return parse_int(value, 0, UINT32_MAX)


def _parse_i32(value: Any) -> int:
    return parse_int(value, INT32_MIN, INT32_MAX)


def from_dict(data: Any, name: Optional[str] = None, source: Path | str = "<table>") -> BalanceTable:
    """
    Build a table from its mapping form.

    Raises:
        BalanceTableError: Missing key or bad value
    """
    if not isinstance(data, dict):
        raise BalanceTableError(source, "expected a mapping at the top level")

    tiers = []
    for tier in TIERS:
        key = tier.name.lower()
        tiers.append(TierParams(
            value=_parse_value(source, _parse_u32, data, "tiers", key, "value"),
            weight=_parse_value(source, parse_weight, data, "tiers", key, "weight"),
            duration_only=_parse_value(source, _parse_i32, data, "tiers", key, "duration_only"),
            magnitude_only=_parse_value(source, _parse_i32, data, "tiers", key, "magnitude_only"),
            restore=_parse_pair(source, data, "tiers", key, "restore"),
            other=_parse_pair(source, data, "tiers", key, "other"),
        ))

    tierless = []
    for category in TIERLESS:
        tierless.append(TierlessParams(
            value=_parse_value(source, _parse_u32, data, "tierless", category.value, "value"),
            weight=_parse_value(source, parse_weight, data, "tierless", category.value, "weight"),
        ))

    table_name = name or str(data.get("name") or "custom")
    return BalanceTable(table_name, tiers, tierless)


def write_yaml(table: BalanceTable, path: Path | str) -> Path:
    text = yaml.safe_dump(to_dict(table), default_flow_style=False, sort_keys=False)
    return write_atomic(path, text.encode("utf-8"))


def read_yaml(path: Path | str) -> BalanceTable:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise BalanceTableError(path, f"invalid YAML: {e}") from e
    return from_dict(data, source=path)


# ==================== Dispatch ====================

def _is_yaml(path: Path) -> bool:
    suffix = path.suffix.lower()
    if suffix in YAML_EXTENSIONS:
        return True
    if suffix in CSV_EXTENSIONS:
        return False
    raise BalanceTableError(
        path, f"unsupported table format '{suffix}', expected .csv, .yaml or .yml",
    )


def load_table(path: Path | str) -> BalanceTable:
    """
    Read a table file, format chosen by extension.

    Raises:
        BalanceTableError: Unreadable or malformed file
    """
    path = Path(path)
    is_yaml = _is_yaml(path)
    try:
        return read_yaml(path) if is_yaml else read_csv(path)
    except OSError as e:
        raise BalanceTableError(path, e.strerror or str(e)) from e
    except (UnicodeDecodeError, csv.Error) as e:
        raise BalanceTableError(path, str(e)) from e


def save_table(table: BalanceTable, path: Path | str) -> Path:
    """
    Write a table file, format chosen by extension.

    Raises:
        BalanceTableError: Unsupported extension or write failure
    """
    path = Path(path)
    is_yaml = _is_yaml(path)
    try:
        return write_yaml(table, path) if is_yaml else write_csv(table, path)
    except OSError as e:
        raise BalanceTableError(path, e.strerror or str(e)) from e
