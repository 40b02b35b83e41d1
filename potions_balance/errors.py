"""
Error taxonomy.

Every fatal condition the pipeline can hit is a PotionsBalanceError subclass
carrying a complete, user-facing message. Nothing here is retried; the tools
layer turns these into a failed ToolResult and the CLI prints the message.

Recoverable conditions (a malformed record of an unrelated type) never raise;
they are dropped inside the content loader.
"""

from __future__ import annotations

from pathlib import Path


class PotionsBalanceError(Exception):
    """Base class for all fatal tool errors."""


class ConfigError(PotionsBalanceError):
    """Game config file missing, unreadable, unknown, or lacking a required section."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"'{self.path}': {reason}")


class ContentFileNotFoundError(PotionsBalanceError):
    """A content file listed in the config exists in none of the search folders."""

    def __init__(self, name: str, folders: list[Path] | None = None):
        self.name = name
        self.folders = list(folders or [])
        super().__init__(f"'{name}' not found")


class FileDecodeError(PotionsBalanceError):
    """A content file is structurally invalid (bad header or truncated stream)."""

    def __init__(self, path: Path | str, reason: str = "invalid file"):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"'{self.path}': {reason}.")


class PotionRecordError(PotionsBalanceError):
    """A potion record failed to decode or lacks a required field."""

    def __init__(self, path: Path | str | None, reason: str, identifier: str | None = None):
        self.path = Path(path) if path is not None else None
        self.reason = reason
        self.identifier = identifier
        where = f"'{self.path}': " if self.path is not None else ""
        what = f"potion '{identifier}': " if identifier else ""
        super().__init__(f"{where}{what}{reason}.")


class DuplicateIdentifierError(PotionsBalanceError):
    """Two potions in the same file normalize to the same identifier."""

    def __init__(self, path: Path | str, identifier: str, first: str, second: str):
        self.path = Path(path)
        self.identifier = identifier
        super().__init__(
            f"'{self.path}': potions '{first}' and '{second}' "
            f"share the identifier '{identifier}'."
        )


class NoPotionsFoundError(PotionsBalanceError):
    """The merge produced no potion at all."""

    def __init__(self):
        super().__init__("Potions not found.")


class TimestampOverflowError(PotionsBalanceError):
    """The derived output modification time does not fit the time representation."""

    def __init__(self, newest_input: int):
        self.newest_input = newest_input
        super().__init__("File is too new: time limit exceeded.")


class OutputWriteError(PotionsBalanceError):
    """The output file could not be written or its timestamp set."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"'{self.path}': {reason}")
