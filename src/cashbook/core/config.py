#!/usr/bin/env python3
"""
Configuration Management for the Shop Cashbook

Handles environment-based configuration with safe defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DIFFERENCE_POLICIES = ("passthrough", "mask")
VALIDATION_POLICIES = ("permissive", "strict")


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class StorageConfig:
    """Durable storage and CSV snapshot settings."""

    storage_dir: Path
    export_dir: Path
    snapshots_enabled: bool = True


@dataclass
class ReconciliationConfig:
    """Reconciliation engine settings."""

    # Fixed adjustment added to expected cash, in paise (₹50)
    cash_offset_paise: int = 5000
    difference_policy: str = "passthrough"
    # Differences below this (paise) are masked by the "mask" policy
    mask_threshold_paise: int = -10000
    validation: str = "permissive"
    max_cash_difference_paise: int = 10000


@dataclass
class Config:
    """
    Main configuration class for the cashbook application.

    Loads configuration from environment variables with safe defaults
    and validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path

    # Component configurations
    storage: StorageConfig
    reconciliation: ReconciliationConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("CASHBOOK_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_cashbook"
            data_dir = Path(os.getenv("CASHBOOK_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("CASHBOOK_DATA_DIR", "./data")).expanduser().resolve()

        storage = StorageConfig(
            storage_dir=data_dir / "storage",
            export_dir=data_dir / "exports",
            snapshots_enabled=os.getenv("CASHBOOK_SNAPSHOTS", "true").lower() == "true",
        )

        for directory in [data_dir, storage.storage_dir, storage.export_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        reconciliation = ReconciliationConfig(
            cash_offset_paise=int(os.getenv("CASHBOOK_CASH_OFFSET", "50")) * 100,
            difference_policy=os.getenv("CASHBOOK_DIFFERENCE_POLICY", "passthrough").lower(),
            validation=os.getenv("CASHBOOK_VALIDATION", "permissive").lower(),
            max_cash_difference_paise=int(os.getenv("CASHBOOK_MAX_DIFFERENCE", "100")) * 100,
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            storage=storage,
            reconciliation=reconciliation,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        for name, path in [
            ("data_dir", self.data_dir),
            ("storage_dir", self.storage.storage_dir),
            ("export_dir", self.storage.export_dir),
        ]:
            if not path.exists():
                errors.append(f"{name} does not exist: {path}")

        if self.reconciliation.difference_policy not in DIFFERENCE_POLICIES:
            errors.append(
                f"CASHBOOK_DIFFERENCE_POLICY must be one of {', '.join(DIFFERENCE_POLICIES)}"
            )
        if self.reconciliation.validation not in VALIDATION_POLICIES:
            errors.append(f"CASHBOOK_VALIDATION must be one of {', '.join(VALIDATION_POLICIES)}")
        if self.reconciliation.max_cash_difference_paise < 0:
            errors.append("CASHBOOK_MAX_DIFFERENCE must be non-negative")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, (Path, Enum)):
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    nested_dict[nested_name] = str(nested_value) if isinstance(nested_value, Path) else nested_value
                result[field_name] = nested_dict
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST
