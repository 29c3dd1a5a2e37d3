"""
Core module for rignorm.

Contains:
- Constants: Canonical bone vocabulary and validation thresholds
- Exceptions: Errors for input the library cannot reason about
- Types: In-memory asset model (scene graph, skeleton, animation clips)
"""

from .constants import (
    # Canonical vocabulary
    STANDARD_BONES,
    REQUIRED_BONES,
    # Thresholds
    MIN_BONE_COUNT,
    SMALL_HEIGHT_THRESHOLD,
    MAX_LISTED_MISSING_BONES,
    # Scene graph and animation
    NODE_OBJECT,
    NODE_BONE,
    NODE_SKINNED_MESH,
    TRACK_SEPARATOR,
    TRACK_CHANNELS,
)

from .exceptions import (
    RigNormError,
    InvalidAssetError,
    ConfigError,
)

from .types import (
    SceneNode,
    Bone,
    Skeleton,
    Material,
    SkinnedMesh,
    Track,
    AnimationClip,
    CharacterAsset,
)

__all__ = [
    # Constants
    "STANDARD_BONES",
    "REQUIRED_BONES",
    "MIN_BONE_COUNT",
    "SMALL_HEIGHT_THRESHOLD",
    "MAX_LISTED_MISSING_BONES",
    "NODE_OBJECT",
    "NODE_BONE",
    "NODE_SKINNED_MESH",
    "TRACK_SEPARATOR",
    "TRACK_CHANNELS",
    # Exceptions
    "RigNormError",
    "InvalidAssetError",
    "ConfigError",
    # Types
    "SceneNode",
    "Bone",
    "Skeleton",
    "Material",
    "SkinnedMesh",
    "Track",
    "AnimationClip",
    "CharacterAsset",
]
