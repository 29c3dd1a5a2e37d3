"""
Structural validation of loaded character assets.

Checks, in order:
1. A skinned mesh exists in the scene graph (critical, stops)
2. Its world-space bounding box is not degenerate (critical) and not tiny (warning)
3. It has a skeleton (critical, stops) with at least one bone (critical, stops)
4. The bone count reaches the minimum (critical)
5. The required bones exist, in the asset's naming convention (warning)
6. There is at least one animation clip (warning)
7. The mesh materials carry textures (warning)

Expected structural problems never raise; they are reported as errors
(hard blockers) or warnings (degraded quality). Only a missing or
wrongly-typed asset raises InvalidAssetError.
"""

from typing import List, Optional
import logging
import numpy as np

from ..core.exceptions import InvalidAssetError
from ..core.types import CharacterAsset
from ..mapping.patterns import NAMING_CONVENTIONS, NamingConvention, detect_convention
from ..utils.config import NormalizerConfig
from ..utils.transforms import compute_world_bounds
from .report import AssetInfo, ValidationReport

logger = logging.getLogger(__name__)


def _frozen(array: np.ndarray) -> np.ndarray:
    array = np.array(array, dtype=np.float64)
    array.setflags(write=False)
    return array


def _size_text(size: np.ndarray) -> str:
    return ' x '.join(f"{value:.2f}" for value in size)


class AssetValidator:
    """
    Gate deciding whether an asset is usable for rigging.
    """

    def __init__(
        self,
        config: Optional[NormalizerConfig] = None,
        conventions: Optional[List[NamingConvention]] = None
    ):
        """
        Args:
            config: Thresholds and required bones (defaults if None)
            conventions: Namespaced naming conventions to recognize
        """
        self.config = config if config is not None else NormalizerConfig()
        self.conventions = tuple(conventions) if conventions is not None else NAMING_CONVENTIONS

    def validate(self, asset: CharacterAsset) -> ValidationReport:
        """
        Validate a loaded asset.

        Args:
            asset: Asset handed over by the loader

        Returns:
            ValidationReport snapshot; holds no reference to the asset

        Raises:
            InvalidAssetError: If asset is None or not a CharacterAsset
        """
        if asset is None:
            raise InvalidAssetError("Cannot validate: asset is None")
        if not isinstance(asset, CharacterAsset):
            raise InvalidAssetError(
                f"Cannot validate: expected CharacterAsset, got {type(asset).__name__}"
            )

        config = self.config
        errors: List[str] = []
        warnings: List[str] = []
        info = {}

        def finish() -> ValidationReport:
            report = ValidationReport(
                is_valid=not errors,
                errors=tuple(errors),
                warnings=tuple(warnings),
                info=AssetInfo(**info),
            )
            logger.info(
                f"Validated '{asset.name}': {'valid' if report.is_valid else 'invalid'} "
                f"({len(errors)} errors, {len(warnings)} warnings)"
            )
            return report

        # 1. Skinned mesh
        mesh = asset.skinned_mesh
        if mesh is None:
            errors.append(
                "CRITICAL: No skinned mesh found in asset - "
                "this file cannot be used for character rigging"
            )
            return finish()

        info['has_mesh'] = True
        info['mesh_type'] = mesh.node_type

        # 2. Bounding box
        min_bound, max_bound = compute_world_bounds(mesh.vertices, mesh.world_matrix())
        size = max_bound - min_bound
        info['mesh_size'] = _frozen(size)
        info['mesh_bounds'] = (_frozen(min_bound), _frozen(max_bound))

        if np.any(size <= 0.0):
            errors.append(
                f"CRITICAL: Mesh has zero size in one or more dimensions ({_size_text(size)})"
            )

        if size[1] < config.small_height_threshold:
            warnings.append(
                f"Mesh is very small (height < {config.small_height_threshold} units, "
                f"size {_size_text(size)}) - will be scaled up automatically"
            )

        # 3. Skeleton
        skeleton = mesh.skeleton
        if skeleton is None:
            errors.append("CRITICAL: Mesh has no skeleton - this is not a rigged character")
            return finish()

        bone_count = len(skeleton.bones)
        info['bone_count'] = bone_count
        if bone_count == 0:
            errors.append("CRITICAL: Skeleton has no bones")
            return finish()

        # 4. Bone count
        if bone_count < config.min_bone_count:
            errors.append(
                f"CRITICAL: Too few bones ({bone_count} < {config.min_bone_count}) - "
                f"model appears incomplete or corrupted, expected at least "
                f"{config.min_bone_count} bones for a full character"
            )

        # 5. Required bones
        # A complete canonical set satisfies the check even when leftover
        # prefixed bones remain after partial renaming.
        bone_names = set(skeleton.bone_names)
        missing = [name for name in config.required_bones if name not in bone_names]
        detected = detect_convention(skeleton.bone_names, self.conventions)
        if missing and detected is not None:
            convention, prefix = detected
            logger.debug(f"Detected '{convention.name}' naming convention (prefix '{prefix}')")
            missing = [
                f"{prefix}{name}" for name in convention.required_bones
                if f"{prefix}{name}" not in bone_names
            ]

        if missing:
            limit = config.max_listed_missing_bones
            listed = ', '.join(missing[:limit])
            if len(missing) > limit:
                listed += '...'
            warnings.append(
                f"Missing some expected bones: {listed} - animation may not work correctly"
            )

        # 6. Animations
        info['animation_count'] = len(asset.animations)
        if not asset.animations:
            warnings.append("No animations found - character will be static (T-pose)")

        # 7. Textures
        has_textures = any(material.has_textures for material in mesh.materials)
        info['has_textures'] = has_textures
        if not has_textures:
            warnings.append("No textures found - character will use default material colors")

        return finish()


def validate_asset(
    asset: CharacterAsset,
    config: Optional[NormalizerConfig] = None
) -> ValidationReport:
    """Validate an asset with a one-off AssetValidator."""
    return AssetValidator(config).validate(asset)
