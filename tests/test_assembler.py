"""
Tests for output assembly: header, ordering, timestamp and write safety.
"""

import os
import stat

import pytest

from potions_balance.config.constants import FORMAT_VERSION, MAX_TIMESTAMP_SECONDS, SENTINEL_AUTHOR
from potions_balance.errors import OutputWriteError, TimestampOverflowError
from potions_balance.esp.records import FileType
from potions_balance.output.assembler import (
    assemble,
    derive_output_time,
    describe_output,
    write_plugin,
)
from potions_balance.potions.extractor import extract_potions
from potions_balance.potions.model import PotionRecord


def _record(identifier: str, value: int = 1) -> PotionRecord:
    return PotionRecord(identifier=identifier, raw_identifier=identifier, value=value, weight=1.0)


class TestTimestamp:
    def test_offset(self):
        assert derive_output_time(1_000) == 1_120

    def test_overflow_is_fatal(self):
        with pytest.raises(TimestampOverflowError, match="time limit exceeded"):
            derive_output_time(MAX_TIMESTAMP_SECONDS - 60)

    def test_largest_representable(self):
        assert derive_output_time(MAX_TIMESTAMP_SECONDS - 120) == MAX_TIMESTAMP_SECONDS


class TestAssemble:
    def test_header(self, codec):
        data = assemble([_record("B"), _record("A")], codec, describe_output("recommended"))
        decoded = codec.decode(data)

        assert decoded.header.version == FORMAT_VERSION
        assert decoded.header.file_type is FileType.ESP
        assert decoded.header.author == SENTINEL_AUTHOR
        assert decoded.header.description == "Potions balance. Table: recommended."
        assert decoded.header.record_count == 2

    def test_records_sorted_by_identifier(self, codec, tmp_path):
        data = assemble([_record("P_Z"), _record("P_A"), _record("P_M")], codec)
        potions = extract_potions(codec.decode(data), codec.encoding, tmp_path / "out.esp")
        assert [p.identifier for p in potions] == ["P_A", "P_M", "P_Z"]

    def test_plain_description(self):
        assert describe_output() == "Potions balance."


class TestWrite:
    def test_sets_modification_time(self, codec, tmp_path):
        path = write_plugin(tmp_path / "out.esp", [_record("P_A")], 1_234_567, codec)

        assert os.stat(path).st_mtime == 1_234_567
        assert [p.name for p in tmp_path.iterdir()] == ["out.esp"]

    def test_replaces_existing_file(self, codec, tmp_path):
        path = tmp_path / "out.esp"
        path.write_bytes(b"old")
        write_plugin(path, [_record("P_A")], 1_000, codec)
        assert path.read_bytes().startswith(b"TES3")

    def test_missing_directory_fails_cleanly(self, codec, tmp_path):
        with pytest.raises(OutputWriteError):
            write_plugin(tmp_path / "nope" / "out.esp", [_record("P_A")], 1_000, codec)
        assert not (tmp_path / "nope").exists()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_keeps_permissions_of_replaced_file(self, codec, tmp_path):
        path = tmp_path / "out.esp"
        path.write_bytes(b"old")
        os.chmod(path, 0o640)

        write_plugin(path, [_record("P_A")], 1_000, codec)

        assert stat.S_IMODE(os.stat(path).st_mode) == 0o640

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_new_file_follows_umask(self, codec, tmp_path):
        previous = os.umask(0o022)
        try:
            path = write_plugin(tmp_path / "out.esp", [_record("P_A")], 1_000, codec)
        finally:
            os.umask(previous)

        assert stat.S_IMODE(os.stat(path).st_mode) == 0o644
