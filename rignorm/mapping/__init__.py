"""
Bone name normalization.

Ordered naming rules and the BoneMapper that applies them to skeletons and
animation tracks.
"""

from .patterns import (
    BonePattern,
    NamingConvention,
    BONE_PATTERNS,
    MIXAMO_CONVENTION,
    NAMING_CONVENTIONS,
    match_bone_name,
    detect_convention,
)
from .bone_mapper import (
    BoneMapper,
    BoneNameMapping,
    ClassificationResult,
    MappingStatistics,
    BoneValidationResult,
    BoneStatistics,
    format_bone_hierarchy,
    log_bone_hierarchy,
)

__all__ = [
    # Rules
    "BonePattern",
    "NamingConvention",
    "BONE_PATTERNS",
    "MIXAMO_CONVENTION",
    "NAMING_CONVENTIONS",
    "match_bone_name",
    "detect_convention",
    # Mapper
    "BoneMapper",
    "BoneNameMapping",
    "ClassificationResult",
    "MappingStatistics",
    "BoneValidationResult",
    "BoneStatistics",
    "format_bone_hierarchy",
    "log_bone_hierarchy",
]
