"""
Utility functions for rignorm.

Includes transform helpers and configuration management.
"""

from .transforms import compose_trs, chain_matrices, compute_world_bounds
from .config import NormalizerConfig, load_config, save_config

__all__ = [
    # Transforms
    "compose_trs",
    "chain_matrices",
    "compute_world_bounds",
    # Configuration
    "NormalizerConfig",
    "load_config",
    "save_config",
]
