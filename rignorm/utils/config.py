"""
Configuration management for rignorm.

Provides the validator/mapper settings as a dataclass with JSON load/save.
"""

import json
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, List
from pathlib import Path

from ..core.constants import (
    MAX_LISTED_MISSING_BONES,
    MIN_BONE_COUNT,
    REQUIRED_BONES,
    SMALL_HEIGHT_THRESHOLD,
)
from ..core.exceptions import ConfigError


@dataclass
class NormalizerConfig:
    """
    Settings shared by the validator and the bone mapper.

    Attributes:
        min_bone_count: Fewer bones is a critical error
        small_height_threshold: Mesh height below this is a warning
        max_listed_missing_bones: Missing bone names listed per warning
        required_bones: Canonical bones that must exist after mapping
        extra: Unrecognized keys from a loaded file, kept verbatim
    """

    min_bone_count: int = MIN_BONE_COUNT
    small_height_threshold: float = SMALL_HEIGHT_THRESHOLD
    max_listed_missing_bones: int = MAX_LISTED_MISSING_BONES
    required_bones: List[str] = field(default_factory=lambda: list(REQUIRED_BONES))

    # Additional fields
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.min_bone_count < 0:
            raise ConfigError(f"min_bone_count must be >= 0, got {self.min_bone_count}")
        if self.small_height_threshold < 0:
            raise ConfigError(
                f"small_height_threshold must be >= 0, got {self.small_height_threshold}"
            )
        if self.max_listed_missing_bones < 1:
            raise ConfigError(
                f"max_listed_missing_bones must be >= 1, got {self.max_listed_missing_bones}"
            )
        if not self.required_bones:
            raise ConfigError("required_bones must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'NormalizerConfig':
        """Create config from dictionary."""
        # Extract known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        known_kwargs = {k: v for k, v in config_dict.items() if k in known_fields}
        extra_kwargs = {k: v for k, v in config_dict.items() if k not in known_fields}

        config = cls(**known_kwargs)
        config.extra.update(extra_kwargs)
        return config

    def update(self, **kwargs) -> 'NormalizerConfig':
        """Return a new config with updated values."""
        config_dict = self.to_dict()
        config_dict.update(kwargs)
        return NormalizerConfig.from_dict(config_dict)


def load_config(filepath: str) -> NormalizerConfig:
    """
    Load configuration from JSON file.

    Args:
        filepath: Path to JSON config file

    Returns:
        NormalizerConfig object

    Raises:
        ConfigError: If the file is missing, not JSON, or not an object
    """
    filepath = Path(filepath)
    try:
        with open(filepath, 'r') as f:
            config_dict = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {filepath}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {filepath}: {e}") from e

    if not isinstance(config_dict, dict):
        raise ConfigError(f"Config file {filepath} must contain a JSON object")
    return NormalizerConfig.from_dict(config_dict)


def save_config(config: NormalizerConfig, filepath: str) -> None:
    """
    Save configuration to JSON file.

    Args:
        config: NormalizerConfig object to save
        filepath: Output file path
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)
