"""
Exceptions raised by rignorm.

Expected structural problems in an asset (no skeleton, too few bones,
unmapped names) are never raised; they end up in a ValidationReport or in
mapping statistics. These exceptions are reserved for input the library
cannot reason about at all.
"""


class RigNormError(Exception):
    """Base exception for rignorm errors."""
    pass


class InvalidAssetError(RigNormError):
    """The asset reference is missing or is not a CharacterAsset."""
    pass


class ConfigError(RigNormError):
    """Error loading or interpreting a normalizer configuration."""
    pass
