"""
Configuration management.
"""

from .config import (
    Config,
    get_config,
    LogConfig,
    ScanConfig,
    BalanceConfig,
)

from .constants import (
    SENTINEL_AUTHOR,
    FORMAT_VERSION,
    OUTPUT_TIME_OFFSET_SECONDS,
    CODE_PAGES,
    validate_code_page,
    get_encoding,
    PRESET_NAMES,
    validate_preset_name,
    STRATEGY_NAMES,
    validate_strategy,
    LOG_LEVELS,
    validate_log_level,
)

__all__ = [
    # Config classes
    "Config",
    "get_config",
    "LogConfig",
    "ScanConfig",
    "BalanceConfig",
    # Output identity
    "SENTINEL_AUTHOR",
    "FORMAT_VERSION",
    "OUTPUT_TIME_OFFSET_SECONDS",
    # Code pages
    "CODE_PAGES",
    "validate_code_page",
    "get_encoding",
    # Presets & strategies
    "PRESET_NAMES",
    "validate_preset_name",
    "STRATEGY_NAMES",
    "validate_strategy",
    # Logging
    "LOG_LEVELS",
    "validate_log_level",
]
