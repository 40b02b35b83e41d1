"""
Game config readers.

Two launchers are supported:

Morrowind.ini (original engine):
    [Game Files]
    GameFile0=Morrowind.esm
    GameFile1=Tribunal.esm
    GameFile2=Some Mod.esp

    Files live in "<ini folder>/Data Files". The engine orders them itself
    (masters first, then by modification time), so no explicit order is
    reported.

openmw.cfg (OpenMW):
    data="/games/Morrowind/Data Files"
    data=/mods/SomeMod
    content=Morrowind.esm
    content=Some Mod.esp

    The content= lines ARE the load order; later data= folders shadow
    earlier ones.
"""

from __future__ import annotations

import configparser
from dataclasses import dataclass, field
from pathlib import Path

from ..config.constants import MORROWIND_DATA_FOLDER, MORROWIND_INI, OPENMW_CFG
from ..errors import ConfigError


@dataclass
class GameConfig:
    """
    What a launcher config says about content.

    Attributes:
        data_folders: Search folders, lowest priority first
        file_names: Content file names
        explicit_order: True if file_names is already the load order
    """
    data_folders: list[Path] = field(default_factory=list)
    file_names: list[str] = field(default_factory=list)
    explicit_order: bool = False


def read_game_config(path: Path | str) -> GameConfig:
    """
    Read a launcher config, dispatching on its file name.

    Raises:
        ConfigError: Unknown file name, unreadable or malformed file
    """
    path = Path(path)
    name = path.name.lower()
    if name == MORROWIND_INI.lower():
        return parse_morrowind_ini(path)
    if name == OPENMW_CFG.lower():
        return parse_openmw_cfg(path)
    raise ConfigError(
        path,
        f"Unknown config file, supported files are '{MORROWIND_INI}', and '{OPENMW_CFG}'.",
    )


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise ConfigError(path, e.strerror or str(e)) from e


def parse_morrowind_ini(path: Path | str) -> GameConfig:
    """
    Parse Morrowind.ini.

    The file is Windows-1251 text; only the [Game Files] section is read.
    """
    path = Path(path)
    raw = _read_bytes(path)
    try:
        text = raw.decode("cp1251")
    except UnicodeDecodeError as e:
        raise ConfigError(path, str(e)) from e

    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        allow_no_value=True,
        delimiters=("=",),
        comment_prefixes=(";",),
        inline_comment_prefixes=None,
    )
    parser.optionxform = str
    try:
        parser.read_string(text, source=str(path))
    except configparser.Error as e:
        raise ConfigError(path, str(e).splitlines()[0]) from e

    if not parser.has_section("Game Files"):
        raise ConfigError(path, "The [Game Files] section is missing.")

    names = [(value or "").strip() for _, value in parser.items("Game Files")]
    names = [name for name in names if name]
    return GameConfig(
        data_folders=[path.with_name(MORROWIND_DATA_FOLDER)],
        file_names=names,
        explicit_order=False,
    )


def _unquote(value: str) -> str:
    """Strip openmw.cfg quoting: "a&&b&"c" -> a&b"c."""
    value = value.strip()
    if len(value) >= 2 and value[0] == '"':
        out = []
        i = 1
        while i < len(value):
            ch = value[i]
            if ch == "&" and i + 1 < len(value):
                out.append(value[i + 1])
                i += 2
                continue
            if ch == '"':
                break
            out.append(ch)
            i += 1
        return "".join(out)
    return value


def parse_openmw_cfg(path: Path | str) -> GameConfig:
    """
    Parse openmw.cfg.

    Keys repeat, so this is read line by line rather than with configparser.
    """
    path = Path(path)
    raw = _read_bytes(path)
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ConfigError(path, str(e)) from e

    config = GameConfig(explicit_order=True)
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if "=" not in stripped:
            raise ConfigError(path, f"line {lineno}: expected 'key=value'")
        key, _, value = stripped.partition("=")
        key = key.strip()
        if key == "data":
            config.data_folders.append(Path(_unquote(value)))
        elif key == "content":
            name = value.strip()
            if name:
                config.file_names.append(name)
    return config
