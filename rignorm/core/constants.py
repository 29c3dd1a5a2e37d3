"""
Centralized constants for rignorm.

This module defines the canonical bone vocabulary and the engineering
thresholds used by the mapper and the validator. Everything here is
immutable and shared process-wide.

Usage:
    from rignorm.core.constants import STANDARD_BONES, MIN_BONE_COUNT

    def my_check(bone_count: int, minimum: int = MIN_BONE_COUNT):
        ...
"""

from typing import FrozenSet, Tuple

# =============================================================================
# Canonical Bone Names
# =============================================================================

# Spine
BONE_HIPS: str = 'Hips'
BONE_SPINE: str = 'Spine'
BONE_SPINE1: str = 'Spine1'
BONE_SPINE2: str = 'Spine2'
BONE_CHEST: str = 'Chest'
BONE_NECK: str = 'Neck'
BONE_HEAD: str = 'Head'

# Left arm
BONE_LEFT_SHOULDER: str = 'LeftShoulder'
BONE_LEFT_ARM: str = 'LeftArm'
BONE_LEFT_FOREARM: str = 'LeftForeArm'
BONE_LEFT_HAND: str = 'LeftHand'

# Right arm
BONE_RIGHT_SHOULDER: str = 'RightShoulder'
BONE_RIGHT_ARM: str = 'RightArm'
BONE_RIGHT_FOREARM: str = 'RightForeArm'
BONE_RIGHT_HAND: str = 'RightHand'

# Left leg (Hip is the upper-leg segment, Leg the lower-leg segment)
BONE_LEFT_HIP: str = 'LeftHip'
BONE_LEFT_LEG: str = 'LeftLeg'
BONE_LEFT_FOOT: str = 'LeftFoot'
BONE_LEFT_TOE: str = 'LeftToe'

# Right leg
BONE_RIGHT_HIP: str = 'RightHip'
BONE_RIGHT_LEG: str = 'RightLeg'
BONE_RIGHT_FOOT: str = 'RightFoot'
BONE_RIGHT_TOE: str = 'RightToe'

STANDARD_BONES: FrozenSet[str] = frozenset({
    BONE_HIPS, BONE_SPINE, BONE_SPINE1, BONE_SPINE2, BONE_CHEST, BONE_NECK, BONE_HEAD,
    BONE_LEFT_SHOULDER, BONE_LEFT_ARM, BONE_LEFT_FOREARM, BONE_LEFT_HAND,
    BONE_RIGHT_SHOULDER, BONE_RIGHT_ARM, BONE_RIGHT_FOREARM, BONE_RIGHT_HAND,
    BONE_LEFT_HIP, BONE_LEFT_LEG, BONE_LEFT_FOOT, BONE_LEFT_TOE,
    BONE_RIGHT_HIP, BONE_RIGHT_LEG, BONE_RIGHT_FOOT, BONE_RIGHT_TOE,
})

# Minimal set needed for locomotion or posing
REQUIRED_BONES: Tuple[str, ...] = (
    BONE_HIPS,
    BONE_SPINE,
    BONE_HEAD,
    BONE_LEFT_ARM,
    BONE_RIGHT_ARM,
    BONE_LEFT_LEG,
    BONE_RIGHT_LEG,
)


# =============================================================================
# Validation Thresholds
# =============================================================================

# Fewer bones than this indicates a truncated or placeholder rig
# (Mixamo characters usually ship 65 or more)
MIN_BONE_COUNT: int = 20

# Meshes shorter than this (scene units) need automatic rescaling
SMALL_HEIGHT_THRESHOLD: float = 0.1

# How many missing bone names a warning lists before truncating with '...'
MAX_LISTED_MISSING_BONES: int = 3


# =============================================================================
# Scene Graph and Animation
# =============================================================================

# Node role tags
NODE_OBJECT: str = 'Object3D'
NODE_BONE: str = 'Bone'
NODE_SKINNED_MESH: str = 'SkinnedMesh'

# Separator between the bone reference and the channel in a track name
TRACK_SEPARATOR: str = '.'

# Channels a bone track may drive
TRACK_CHANNELS: Tuple[str, ...] = ('position', 'quaternion', 'rotation', 'scale')

# Identity quaternion [w, x, y, z]
IDENTITY_QUATERNION: Tuple[float, float, float, float] = (1.0, 0.0, 0.0, 0.0)
