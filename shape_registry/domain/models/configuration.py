"""
Configuration models and validation schemas.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping
import os
from shape_registry.domain.interfaces.base import ValueObject


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class RegistryConfiguration(ValueObject):
    """Configuration for the shape registry."""

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_dir: str = ""

    # File reading
    file_encoding: str = "utf-8"
    max_display_lines: int = 1000

    # Record defaults
    null_display: str = "null"
    default_customer_age: int = 12

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_logging()
        self._validate_file_reading()
        self._validate_defaults()

    def _validate_logging(self) -> None:
        """Validate logging configuration."""
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {list(LOG_LEVELS)}")

        if not isinstance(self.log_dir, str):
            raise ValueError("log_dir must be a string")

    def _validate_file_reading(self) -> None:
        """Validate file reading settings."""
        if not self.file_encoding or not isinstance(self.file_encoding, str):
            raise ValueError("file_encoding must be a non-empty string")

        if not isinstance(self.max_display_lines, int) or self.max_display_lines <= 0:
            raise ValueError("max_display_lines must be a positive integer")

    def _validate_defaults(self) -> None:
        """Validate record defaults."""
        if not isinstance(self.null_display, str):
            raise ValueError("null_display must be a string")

        if not isinstance(self.default_customer_age, int) or self.default_customer_age < 0:
            raise ValueError("default_customer_age must be a non-negative integer")

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> 'RegistryConfiguration':
        """Create configuration from dictionary with environment variable support."""
        if not isinstance(config_dict, Mapping):
            raise TypeError(f"configuration must be a mapping, not {type(config_dict).__name__}")

        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in config_dict.items() if k in known}

        # Support environment variable overrides
        env_overrides = {
            'log_level': os.getenv('SHAPE_REGISTRY_LOG_LEVEL'),
            'log_dir': os.getenv('SHAPE_REGISTRY_LOG_DIR'),
            'max_display_lines': os.getenv('SHAPE_REGISTRY_MAX_DISPLAY_LINES'),
        }

        # Apply environment overrides
        for key, env_value in env_overrides.items():
            if env_value is not None:
                if key == 'max_display_lines':
                    values[key] = int(env_value)
                else:
                    values[key] = env_value

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'log_level': self.log_level,
            'log_format': self.log_format,
            'log_dir': self.log_dir,
            'file_encoding': self.file_encoding,
            'max_display_lines': self.max_display_lines,
            'null_display': self.null_display,
            'default_customer_age': self.default_customer_age,
        }
