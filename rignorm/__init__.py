"""
rignorm: bone-name normalization and validation for rigged characters.

Takes a skinned character (mesh + skeleton + animation clips) produced by
heterogeneous authoring pipelines and renames its bones and animation
tracks to a single canonical vocabulary, after checking that the asset is
structurally usable at all.

Key Features:
- Ordered, priority-ranked naming rules (exact spellings before keywords)
- In-place renaming of skeleton bones and animation track references
- Structural validation report (errors block, warnings degrade)
- Plain-text and HTML report rendering

Example:
    >>> import rignorm
    >>> result = rignorm.normalize_character(asset)
    >>> if not result.report.is_valid:
    ...     print(rignorm.format_report_text(result.report, asset.name))
    >>> result.statistics.standard_percentage
"""

__version__ = "0.1.0"
__author__ = "rignorm Contributors"

from . import core
from . import utils
from . import mapping
from . import validation

from .core import CharacterAsset, InvalidAssetError, RigNormError
from .mapping import BoneMapper
from .validation import (
    AssetValidator,
    ValidationReport,
    validate_asset,
    format_report_text,
    format_report_html,
)
from .utils import NormalizerConfig, load_config, save_config
from .pipeline import NormalizationResult, normalize_character

__all__ = [
    "core",
    "utils",
    "mapping",
    "validation",
    "CharacterAsset",
    "InvalidAssetError",
    "RigNormError",
    "BoneMapper",
    "AssetValidator",
    "ValidationReport",
    "validate_asset",
    "format_report_text",
    "format_report_html",
    "NormalizerConfig",
    "load_config",
    "save_config",
    "NormalizationResult",
    "normalize_character",
]
