"""
Content entry resolution and ordering.

Turns a GameConfig into the ordered list of files the merge walks. Later
entries override earlier ones, so ordering is the whole point here.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ..errors import ConfigError, ContentFileNotFoundError
from .game_config import GameConfig, read_game_config


@dataclass(frozen=True)
class ContentEntry:
    """
    One content file of the load order.

    Attributes:
        name: File name as listed in the config
        folder: Folder the file was found in
        modification_time: Whole seconds since the epoch
    """
    name: str
    folder: Path
    modification_time: int

    @property
    def path(self) -> Path:
        return self.folder / self.name

    @property
    def extension_group(self) -> str:
        """Uppercased extension without the dot ('' when there is none)."""
        return Path(self.name).suffix[1:].upper()

    @classmethod
    def from_path(cls, path: Path | str) -> ContentEntry:
        """Build an entry from an existing file."""
        path = Path(path)
        return cls(name=path.name, folder=path.parent, modification_time=file_mtime(path))


def file_mtime(path: Path) -> int:
    """Modification time of a file in whole seconds."""
    return os.stat(path).st_mtime_ns // 1_000_000_000


def order_entries(entries: list[ContentEntry], explicit: bool = False) -> list[ContentEntry]:
    """
    Apply the load-order policy.

    An explicit order is returned unmodified. Otherwise entries are grouped
    by extension (case-insensitive, ascending: ESM before ESP) and ordered by
    modification time within a group; ties keep config order.

    Examples:
        a.esm@100, b.esp@50, c.esp@200 -> [a.esm, b.esp, c.esp]
    """
    if explicit:
        return list(entries)
    return sorted(entries, key=lambda e: (e.extension_group, e.modification_time))


def locate(name: str, folders: list[Path]) -> ContentEntry:
    """
    Find a content file, searching the highest-priority (last) folder first.

    Raises:
        ContentFileNotFoundError: No folder holds the file
    """
    for folder in reversed(folders):
        candidate = folder / name
        if candidate.is_file():
            return ContentEntry(name=name, folder=folder, modification_time=file_mtime(candidate))
    raise ContentFileNotFoundError(name, folders)


def resolve_entries(game_config: GameConfig) -> list[ContentEntry]:
    """Locate every listed content file and return them in load order."""
    entries = [locate(name, game_config.data_folders) for name in game_config.file_names]
    return order_entries(entries, explicit=game_config.explicit_order)


def resolve_load_order(config_path: Path | str) -> list[ContentEntry]:
    """
    Read a launcher config and resolve its ordered content entries.

    Raises:
        ConfigError: Config unreadable/unknown, or it lists no content
        ContentFileNotFoundError: A listed file is missing
    """
    game_config = read_game_config(config_path)
    if not game_config.file_names:
        raise ConfigError(config_path, "no content files listed")
    return resolve_entries(game_config)
