"""
Override resolution across the load order.

Walks content files in order and folds their potions into one map keyed by
normalized identifier; a later file's definition replaces an earlier one.
That replacement is the intended merge mechanism, not a conflict. Same-file
collisions are rejected earlier, in the extractor.

Files authored by this tool are skipped by default so that a previous run's
output never feeds back into the next one. With skipping disabled their
potions are merged, but they still never count toward the output timestamp.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..config.constants import SENTINEL_AUTHOR
from ..esp.codec import Tes3Codec
from ..loadorder.resolver import ContentEntry
from ..utils.logger import get_logger
from .extractor import extract_potions, is_self_produced
from .model import PotionRecord


@dataclass
class FileContribution:
    """
    Per-file outcome of the merge.

    Attributes:
        entry: The content entry
        potions: Potions the file defined (0 when skipped)
        self_produced: Header author is the tool's sentinel
        skipped: File was not merged (self-produced with skipping on)
    """
    entry: ContentEntry
    potions: int = 0
    self_produced: bool = False
    skipped: bool = False

    @property
    def contributed(self) -> bool:
        """True if this file supplied at least one potion to the merge."""
        return not self.skipped and self.potions > 0


@dataclass
class MergeResult:
    """
    Merged potion set plus per-file bookkeeping.

    Attributes:
        potions: Normalized identifier -> winning record
        files: One FileContribution per entry, in load order
        overrides: Number of times a later file replaced an earlier definition
    """
    potions: dict[str, PotionRecord] = field(default_factory=dict)
    files: list[FileContribution] = field(default_factory=list)
    overrides: int = 0

    @property
    def contributing_files(self) -> list[FileContribution]:
        return [f for f in self.files if f.contributed]

    def newest_input_time(self) -> int | None:
        """
        Newest modification time that the output must sort after.

        Only contributing files authored by someone else count. If none did,
        falls back to the newest non-self entry. Self-produced files never
        date the output.
        """
        candidates = [f.entry.modification_time for f in self.contributing_files if not f.self_produced]
        if not candidates:
            candidates = [f.entry.modification_time for f in self.files if not f.self_produced]
        return max(candidates) if candidates else None


def fold_potions(
    merged: dict[str, PotionRecord],
    potions: Iterable[PotionRecord],
) -> int:
    """
    Fold one file's potions into the merged map, last write wins.

    Returns:
        Number of identifiers that were already present and got replaced
    """
    replaced = 0
    for potion in potions:
        if potion.identifier in merged:
            replaced += 1
        merged[potion.identifier] = potion
    return replaced


class OverrideResolutionEngine:
    """
    Merges potion definitions across an ordered list of content files.

    Args:
        codec: Record codec used to read each file
        skip_self: Leave out files authored by this tool
        sentinel: Author string that marks the tool's own output
    """

    def __init__(self, codec: Tes3Codec, skip_self: bool = True, sentinel: str = SENTINEL_AUTHOR):
        self.codec = codec
        self.skip_self = skip_self
        self.sentinel = sentinel

    def load(self, entry: ContentEntry) -> tuple[FileContribution, list[PotionRecord]]:
        """Decode one entry and extract its potions (none if skipped)."""
        logger = get_logger()
        decoded = self.codec.read_file(entry.path)
        contribution = FileContribution(
            entry=entry,
            self_produced=is_self_produced(decoded.header, self.sentinel),
        )
        if contribution.self_produced and self.skip_self:
            contribution.skipped = True
            logger.content("SKIPPED_SELF", entry.name, author=decoded.header.author)
            return contribution, []

        potions = extract_potions(decoded, self.codec.encoding, entry.path)
        contribution.potions = len(potions)
        if potions:
            logger.content("LOADED", entry.name, potions=len(potions), mtime=entry.modification_time)
        else:
            logger.content("NO_POTIONS", entry.name)
        return contribution, potions

    def resolve(self, entries: list[ContentEntry]) -> MergeResult:
        """
        Merge all entries in the given order.

        Raises:
            FileDecodeError: A file is structurally invalid
            PotionRecordError: A potion record is malformed
            DuplicateIdentifierError: Same-file identifier collision
        """
        result = MergeResult()
        for entry in entries:
            contribution, potions = self.load(entry)
            result.overrides += fold_potions(result.potions, potions)
            result.files.append(contribution)

        get_logger().info(
            f"Merged {len(result.potions)} potions from "
            f"{len(result.contributing_files)}/{len(entries)} files "
            f"({result.overrides} overrides)"
        )
        return result
