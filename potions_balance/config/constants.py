"""
Centralized constants for the potions balancing tool.

IMPORTANT: The sentinel author is how the tool recognizes its own output.
Changing it makes previously generated plugins look like third-party content
and they will be merged back in on the next run.
"""

from typing import List


# ==================== Output Plugin Identity ====================

# Author field written into every generated header (32 bytes max on disk)
SENTINEL_AUTHOR = "potions_balance"

# HEDR version bits (float32 1.3 reinterpreted as u32)
FORMAT_VERSION = 1067869798

# Output mtime = newest contributing input + this many seconds
OUTPUT_TIME_OFFSET_SECONDS = 120

# Largest second count the output timestamp may reach (signed 64-bit)
MAX_TIMESTAMP_SECONDS = 2 ** 63 - 1

# Base description; the table name is appended when a table was applied
OUTPUT_DESCRIPTION = "Potions balance."


# ==================== Code Pages ====================

# Game language -> Python codec used for record strings
CODE_PAGES = {
    "en": "cp1252",
    "ru": "cp1251",
}

DEFAULT_CODE_PAGE = "en"


def validate_code_page(code_page: str) -> str:
    """
    Validate and normalize a game language name.

    Args:
        code_page: Language name (e.g., "en", "RU")

    Returns:
        Normalized language name (lowercase)

    Raises:
        ValueError: If the language is not supported
    """
    if not code_page:
        raise ValueError("Code page is required")

    normalized = code_page.strip().lower()
    if normalized not in CODE_PAGES:
        raise ValueError(
            f"Invalid code page: '{code_page}'. "
            f"Must be one of: {', '.join(CODE_PAGES)}"
        )
    return normalized


def get_encoding(code_page: str) -> str:
    """Get the Python codec name for a game language."""
    return CODE_PAGES[validate_code_page(code_page)]


# ==================== Presets & Strategies ====================

PRESET_NAMES: List[str] = ["original", "recommended"]
DEFAULT_PRESET = "recommended"


def validate_preset_name(name: str) -> str:
    """
    Validate a built-in balance preset name.

    Raises:
        ValueError: If no preset has that name
    """
    normalized = (name or "").strip().lower()
    if normalized not in PRESET_NAMES:
        raise ValueError(
            f"Invalid preset: '{name}'. Must be one of: {', '.join(PRESET_NAMES)}"
        )
    return normalized


# direct: table overwrite (idempotent)
# interpolated: value scaled against per-tier medians of the input set
STRATEGY_NAMES: List[str] = ["direct", "interpolated"]
DEFAULT_STRATEGY = "direct"


def validate_strategy(name: str) -> str:
    """
    Validate a balance strategy name.

    Raises:
        ValueError: If the strategy is unknown
    """
    normalized = (name or "").strip().lower()
    if normalized not in STRATEGY_NAMES:
        raise ValueError(
            f"Invalid strategy: '{name}'. Must be one of: {', '.join(STRATEGY_NAMES)}"
        )
    return normalized


# ==================== Logging ====================

LOG_LEVELS: List[str] = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
DEFAULT_LOG_LEVEL = "INFO"


def validate_log_level(level: str) -> str:
    """
    Validate a logging level name.

    Raises:
        ValueError: If the level is unknown
    """
    normalized = (level or "").strip().upper()
    if normalized not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: '{level}'. Must be one of: {', '.join(LOG_LEVELS)}"
        )
    return normalized


# ==================== Game Config Files ====================

MORROWIND_INI = "Morrowind.ini"
OPENMW_CFG = "openmw.cfg"

# Morrowind.ini keeps its plugins next to the ini in this folder
MORROWIND_DATA_FOLDER = "Data Files"
