"""
Pytest configuration: logging into a scratch directory, plus factories that
build synthetic TES3 content files through the real codec.
"""

import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional

import pytest

from potions_balance.utils.logger import setup_logger

# Log files go to a scratch directory for the whole session
setup_logger(tempfile.mkdtemp(prefix="potions_balance_logs_"), "DEBUG")

from potions_balance.config.config import Config  # noqa: E402
from potions_balance.config.constants import FORMAT_VERSION, SENTINEL_AUTHOR  # noqa: E402
from potions_balance.esp.codec import Tes3Codec  # noqa: E402
from potions_balance.esp.effects import EffectIndex  # noqa: E402
from potions_balance.esp.records import FileHeader, FileType, Record  # noqa: E402
from potions_balance.potions.model import EffectEntry, build_potion_record  # noqa: E402


def potion(
    identifier: str,
    effect: int = EffectIndex.RESTORE_HEALTH,
    value: int = 10,
    weight: float = 1.0,
    duration: int = 1,
    magnitude: int = 1,
    flags: int = 0,
    effects: Optional[List[EffectEntry]] = None,
    extra=None,
) -> Record:
    """Raw ALCH record with a single effect (or the given effect list)."""
    if effects is None:
        effects = [EffectEntry(int(effect), duration, magnitude, magnitude)]
    return build_potion_record(identifier, value, weight, effects, flags=flags, extra=extra)


def plugin_bytes(records: Iterable[Record], author: str = "modder",
                 file_type: FileType = FileType.ESP) -> bytes:
    records = list(records)
    header = FileHeader(
        version=FORMAT_VERSION,
        file_type=file_type,
        author=author,
        description="test plugin",
        record_count=len(records),
    )
    return Tes3Codec("en").encode(header, records)


def write_content(path: Path, records: Iterable[Record] = (), author: str = "modder",
                  mtime: Optional[int] = None, file_type: FileType = FileType.ESP) -> Path:
    """Write a content file and optionally pin its modification time."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(plugin_bytes(records, author, file_type))
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def codec() -> Tes3Codec:
    return Tes3Codec("en")


@pytest.fixture
def make_potion():
    """Factory for raw potion records."""
    return potion


@pytest.fixture
def make_content():
    """Factory for content files on disk."""
    return write_content


@pytest.fixture
def sentinel() -> str:
    return SENTINEL_AUTHOR


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Each test sees default configuration, unaffected by the host environment."""
    for key in list(os.environ):
        if key.startswith("POTIONS_"):
            monkeypatch.delenv(key, raising=False)
    Config.reset()
    yield
    Config.reset()


@pytest.fixture
def game_dir(tmp_path: Path) -> Path:
    """
    An OpenMW-style install with two data folders:

        base/Morrowind.esm   P_HEALTHPOTION_S (restore), P_FIRE_DAMAGE_Z (damage)
        mods/Mod.esp         overrides P_HEALTHPOTION_S, adds P_MARK
    """
    base = tmp_path / "base"
    mods = tmp_path / "mods"
    write_content(base / "Morrowind.esm", [
        potion("p_HealthPotion_S", EffectIndex.RESTORE_HEALTH, value=20, weight=1.0, duration=1, magnitude=8),
        potion("P_FIRE_DAMAGE_Z", EffectIndex.FIRE_DAMAGE, value=7, weight=0.5, duration=3, magnitude=3),
    ], author="Bethesda", mtime=1_000_000, file_type=FileType.ESM)
    write_content(mods / "Mod.esp", [
        potion("P_HEALTHPOTION_S", EffectIndex.RESTORE_HEALTH, value=99, weight=2.0, duration=2, magnitude=9),
        potion("P_Mark", EffectIndex.MARK, value=1, weight=3.0, duration=0, magnitude=0),
    ], mtime=2_000_000)

    cfg = tmp_path / "openmw.cfg"
    cfg.write_text(
        f'data="{base}"\n'
        f"data={mods}\n"
        "content=Morrowind.esm\n"
        "content=Mod.esp\n",
        encoding="utf-8",
    )
    return tmp_path
