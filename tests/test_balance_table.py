"""
Tests for BalanceTable presets and the CSV / YAML forms.

Validates that:
1. Presets carry the expected numbers
2. Export then import reproduces every numeric field
3. The CSV layout is positional and fixed
4. Malformed files fail with row/column detail
"""

import csv

import pytest
import yaml

from potions_balance.balance.table import (
    ORIGINAL,
    RECOMMENDED,
    TIER_HEADER,
    TIERLESS_HEADER,
    BalanceTable,
    BalanceTableError,
    from_rows,
    get_preset,
    load_table,
    save_table,
    to_dict,
    to_rows,
)
from potions_balance.balance.tiers import Tier, TierlessCategory


class TestPresets:
    def test_original_standard_tier(self):
        standard = ORIGINAL.tier(Tier.STANDARD)
        assert standard.value == 35
        assert standard.weight == 0.75
        assert standard.restore == (5, 10)
        assert standard.other == (30, 10)

    def test_recommended_tierless(self):
        assert RECOMMENDED.category(TierlessCategory.TELEPORT).value == 120
        assert RECOMMENDED.category(TierlessCategory.VAMPIRISM).value == 5000

    def test_get_preset_is_case_insensitive(self):
        assert get_preset(" Original ") is ORIGINAL

    def test_unknown_preset_raises(self):
        with pytest.raises(ValueError, match="Invalid preset"):
            get_preset("extreme")

    def test_tables_are_immutable(self):
        with pytest.raises(AttributeError):
            ORIGINAL.name = "changed"

    def test_wrong_tier_count_rejected(self):
        with pytest.raises(ValueError, match="expected 5 tiers"):
            BalanceTable("bad", ORIGINAL.tiers[:4], ORIGINAL.tierless)


class TestCsvForm:
    """Fixed tabular layout."""

    def test_layout(self):
        rows = to_rows(ORIGINAL)

        assert len(rows) == 1 + 5 + 1 + 1 + 6
        assert rows[0] == TIER_HEADER
        assert rows[1] == ["Bargain", "5", "1.5", "8", "5", "5", "1", "8", "5"]
        assert rows[6] == [""] * 9
        assert rows[7] == TIERLESS_HEADER
        assert rows[8] == ["Mark", "35", "1", "", "", "", "", "", ""]
        assert rows[10][0] == "Cure Poison / Paralyzation"

    @pytest.mark.parametrize("preset", [ORIGINAL, RECOMMENDED])
    def test_round_trip(self, tmp_path, preset):
        path = save_table(preset, tmp_path / "table.csv")
        loaded = load_table(path)

        assert loaded.numeric_fields() == preset.numeric_fields()
        assert loaded.name == "table"

    def test_weights_print_at_single_precision(self, tmp_path):
        """0.6 is stored as float32 but still written as 0.6."""
        path = save_table(RECOMMENDED, tmp_path / "t.csv")
        with open(path, newline="") as f:
            rows = list(csv.reader(f))
        assert rows[3][2] == "0.6"

    def test_labels_are_ignored(self):
        rows = to_rows(ORIGINAL)
        for row in rows[1:6] + rows[8:]:
            row[0] = "whatever"
        assert from_rows(rows).numeric_fields() == ORIGINAL.numeric_fields()

    def test_non_numeric_cell_reports_row_and_column(self):
        rows = to_rows(ORIGINAL)
        rows[3][3] = "long"
        with pytest.raises(BalanceTableError) as exc:
            from_rows(rows, source="t.csv")
        assert exc.value.row == 4
        assert exc.value.column == "Duration Only"
        assert "'long' is not an integer" in str(exc.value)

    def test_blank_cell_is_an_error(self):
        rows = to_rows(ORIGINAL)
        rows[9][2] = ""
        with pytest.raises(BalanceTableError, match="empty cell") as exc:
            from_rows(rows)
        assert exc.value.row == 10
        assert exc.value.column == "Weight"

    def test_weight_beyond_single_precision_rejected(self):
        """A weight that would be stored as infinity never enters a table."""
        rows = to_rows(ORIGINAL)
        rows[1][2] = "1e39"
        with pytest.raises(BalanceTableError, match="single-precision range") as exc:
            from_rows(rows, source="t.csv")
        assert exc.value.row == 2
        assert exc.value.column == "Weight"

    def test_largest_single_precision_weight_round_trips(self, tmp_path):
        rows = to_rows(ORIGINAL)
        rows[1][2] = "3.4028235e38"
        table = from_rows(rows)
        path = save_table(table, tmp_path / "big.csv")
        assert load_table(path).numeric_fields() == table.numeric_fields()

    def test_negative_value_rejected(self):
        rows = to_rows(ORIGINAL)
        rows[1][1] = "-5"
        with pytest.raises(BalanceTableError, match="outside"):
            from_rows(rows)

    def test_negative_duration_accepted(self):
        rows = to_rows(ORIGINAL)
        rows[1][3] = "-1"
        assert from_rows(rows).tier(Tier.BARGAIN).duration_only == -1

    def test_missing_rows(self):
        rows = to_rows(ORIGINAL)[:12]
        with pytest.raises(BalanceTableError, match="expected at least 14 rows"):
            from_rows(rows)

    def test_short_row(self):
        rows = to_rows(ORIGINAL)
        rows[2] = rows[2][:5]
        with pytest.raises(BalanceTableError) as exc:
            from_rows(rows)
        assert exc.value.row == 3


class TestYamlForm:
    @pytest.mark.parametrize("preset", [ORIGINAL, RECOMMENDED])
    def test_round_trip(self, tmp_path, preset):
        path = save_table(preset, tmp_path / "table.yaml")
        loaded = load_table(path)

        assert loaded.numeric_fields() == preset.numeric_fields()
        assert loaded.name == preset.name

    def test_document_shape(self, tmp_path):
        path = save_table(RECOMMENDED, tmp_path / "t.yml")
        data = yaml.safe_load(path.read_text(encoding="utf-8"))

        assert data["tiers"]["quality"]["restore"] == [5, 25]
        assert data["tiers"]["cheap"]["weight"] == 0.8
        assert data["tierless"]["cure_poison_or_paralyze"] == {"value": 60, "weight": 0.4}

    def test_missing_key(self, tmp_path):
        data = to_dict(ORIGINAL)
        del data["tiers"]["exclusive"]["other"]
        path = tmp_path / "t.yaml"
        path.write_text(yaml.safe_dump(data), encoding="utf-8")

        with pytest.raises(BalanceTableError, match="missing key 'tiers.exclusive.other'"):
            load_table(path)

    def test_bad_value(self, tmp_path):
        data = to_dict(ORIGINAL)
        data["tierless"]["mark"]["weight"] = "heavy"
        path = tmp_path / "t.yaml"
        path.write_text(yaml.safe_dump(data), encoding="utf-8")

        with pytest.raises(BalanceTableError, match="tierless.mark.weight"):
            load_table(path)

    def test_weight_beyond_single_precision(self, tmp_path):
        data = to_dict(ORIGINAL)
        data["tierless"]["mark"]["weight"] = 1e39
        path = tmp_path / "t.yaml"
        path.write_text(yaml.safe_dump(data), encoding="utf-8")

        with pytest.raises(BalanceTableError, match="tierless.mark.weight"):
            load_table(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "t.yaml"
        path.write_text("tiers: [unclosed", encoding="utf-8")
        with pytest.raises(BalanceTableError, match="invalid YAML"):
            load_table(path)


class TestDispatch:
    def test_unsupported_extension(self, tmp_path):
        with pytest.raises(BalanceTableError, match="unsupported table format"):
            load_table(tmp_path / "t.json")

    def test_missing_file(self, tmp_path):
        with pytest.raises(BalanceTableError):
            load_table(tmp_path / "nope.csv")
