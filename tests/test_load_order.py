"""
Tests for launcher config readers and load order resolution.
"""

import os
from pathlib import Path

import pytest

from potions_balance.errors import ConfigError, ContentFileNotFoundError
from potions_balance.loadorder import (
    ContentEntry,
    locate,
    order_entries,
    parse_morrowind_ini,
    parse_openmw_cfg,
    read_game_config,
    resolve_load_order,
)


def _entry(name: str, mtime: int) -> ContentEntry:
    return ContentEntry(name=name, folder=Path("/data"), modification_time=mtime)


class TestOrdering:
    """Extension group first, then modification time."""

    def test_masters_before_plugins_then_by_time(self):
        entries = [_entry("c.esp", 200), _entry("b.esp", 50), _entry("a.esm", 100)]
        ordered = order_entries(entries)
        assert [e.name for e in ordered] == ["a.esm", "b.esp", "c.esp"]

    def test_extension_group_is_case_insensitive(self):
        entries = [_entry("late.ESP", 10), _entry("Base.esm", 500), _entry("early.esp", 5)]
        assert [e.name for e in order_entries(entries)] == ["Base.esm", "early.esp", "late.ESP"]

    def test_explicit_order_is_kept(self):
        entries = [_entry("c.esp", 200), _entry("a.esm", 100)]
        assert order_entries(entries, explicit=True) == entries


class TestMorrowindIni:
    """Morrowind.ini reader."""

    def test_game_files_section(self, tmp_path):
        ini = tmp_path / "Morrowind.ini"
        ini.write_bytes(
            "[General]\nSomething=1\n\n"
            "[Game Files]\n"
            "GameFile0=Morrowind.esm\n"
            "GameFile1=Русский мод.esp\n"
            "; commented=out.esp\n".encode("cp1251")
        )
        config = parse_morrowind_ini(ini)

        assert config.file_names == ["Morrowind.esm", "Русский мод.esp"]
        assert config.data_folders == [tmp_path / "Data Files"]
        assert not config.explicit_order

    def test_missing_section_raises(self, tmp_path):
        ini = tmp_path / "Morrowind.ini"
        ini.write_text("[General]\nA=1\n", encoding="cp1251")
        with pytest.raises(ConfigError, match=r"\[Game Files\] section is missing"):
            parse_morrowind_ini(ini)

    def test_unreadable_file_raises(self, tmp_path):
        with pytest.raises(ConfigError):
            read_game_config(tmp_path / "Morrowind.ini")


class TestOpenMWCfg:
    """openmw.cfg reader."""

    def test_data_and_content_lines(self, tmp_path):
        cfg = tmp_path / "openmw.cfg"
        cfg.write_text(
            "# comment\n"
            'data="/games/Morrowind/Data Files"\n'
            'data="/mods/A&&B&"s"\n'
            "fallback=Something,1\n"
            "content=Morrowind.esm\n"
            "content=Mod.esp\n",
            encoding="utf-8",
        )
        config = parse_openmw_cfg(cfg)

        assert config.data_folders == [Path("/games/Morrowind/Data Files"), Path('/mods/A&B"s')]
        assert config.file_names == ["Morrowind.esm", "Mod.esp"]
        assert config.explicit_order

    def test_line_without_equals_raises(self, tmp_path):
        cfg = tmp_path / "openmw.cfg"
        cfg.write_text("content=A.esp\nbroken line\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="line 2"):
            parse_openmw_cfg(cfg)

    def test_unknown_config_name_raises(self, tmp_path):
        other = tmp_path / "settings.cfg"
        other.write_text("", encoding="utf-8")
        with pytest.raises(ConfigError, match="Unknown config file"):
            read_game_config(other)


class TestResolution:
    """Locating files and producing the final order."""

    def test_later_folder_wins(self, tmp_path, make_content):
        low = tmp_path / "low"
        high = tmp_path / "high"
        make_content(low / "Mod.esp")
        make_content(high / "Mod.esp")

        assert locate("Mod.esp", [low, high]).folder == high

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ContentFileNotFoundError, match="'Gone.esp' not found"):
            locate("Gone.esp", [tmp_path])

    def test_morrowind_ini_orders_by_extension_and_time(self, tmp_path, make_content):
        data = tmp_path / "Data Files"
        make_content(data / "Newer.esp", mtime=3000)
        make_content(data / "Older.esp", mtime=2000)
        make_content(data / "Morrowind.esm", mtime=5000)
        ini = tmp_path / "Morrowind.ini"
        ini.write_text(
            "[Game Files]\nGameFile0=Newer.esp\nGameFile1=Morrowind.esm\nGameFile2=Older.esp\n",
            encoding="cp1251",
        )

        entries = resolve_load_order(ini)
        assert [e.name for e in entries] == ["Morrowind.esm", "Older.esp", "Newer.esp"]
        assert [e.modification_time for e in entries] == [5000, 2000, 3000]

    def test_openmw_order_is_explicit(self, game_dir):
        entries = resolve_load_order(game_dir / "openmw.cfg")
        assert [e.name for e in entries] == ["Morrowind.esm", "Mod.esp"]
        assert entries[1].folder == game_dir / "mods"

    def test_no_content_raises(self, tmp_path):
        cfg = tmp_path / "openmw.cfg"
        cfg.write_text(f"data={tmp_path}\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="no content files"):
            resolve_load_order(cfg)

    def test_mtime_is_whole_seconds(self, tmp_path, make_content):
        path = make_content(tmp_path / "A.esp")
        os.utime(path, ns=(1_500_000_000_900_000_000, 1_500_000_000_900_000_000))
        assert ContentEntry.from_path(path).modification_time == 1_500_000_000
