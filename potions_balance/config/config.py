"""
Configuration management for the potions balancing tool.
Loads settings from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

from .constants import (
    DEFAULT_CODE_PAGE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PRESET,
    DEFAULT_STRATEGY,
    validate_code_page,
    validate_log_level,
    validate_preset_name,
    validate_strategy,
)


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_dir: str = "logs"


@dataclass
class ScanConfig:
    """
    Content scanning configuration.

    code_page selects how record strings (identifiers, header author) are
    decoded. skip_self controls whether plugins authored by this tool are
    left out of the merge.
    """
    code_page: str = DEFAULT_CODE_PAGE
    skip_self: bool = True


@dataclass
class BalanceConfig:
    """Balance table and strategy defaults used when the CLI does not say."""
    preset: str = DEFAULT_PRESET
    strategy: str = DEFAULT_STRATEGY


class Config:
    """
    Central configuration manager.

    Loads configuration from environment variables and provides
    typed access to all settings.
    """

    _instance: Optional['Config'] = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, env_file: str = ".env"):
        if self._initialized:
            return

        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path, override=True)

        self.log = self._load_log_config()
        self.scan = self._load_scan_config()
        self.balance = self._load_balance_config()

        self._initialized = True

    def _load_log_config(self) -> LogConfig:
        """Load logging configuration from environment."""
        return LogConfig(
            level=validate_log_level(os.getenv("POTIONS_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
            log_dir=os.getenv("POTIONS_LOG_DIR", "logs"),
        )

    def _load_scan_config(self) -> ScanConfig:
        """Load scanning configuration from environment."""
        return ScanConfig(
            code_page=validate_code_page(os.getenv("POTIONS_CODE_PAGE", DEFAULT_CODE_PAGE)),
            skip_self=os.getenv("POTIONS_SKIP_SELF", "true").lower() == "true",
        )

    def _load_balance_config(self) -> BalanceConfig:
        """Load balance defaults from environment."""
        return BalanceConfig(
            preset=validate_preset_name(os.getenv("POTIONS_PRESET", DEFAULT_PRESET)),
            strategy=validate_strategy(os.getenv("POTIONS_STRATEGY", DEFAULT_STRATEGY)),
        )

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance so the next get_config() re-reads the environment."""
        cls._instance = None


def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
