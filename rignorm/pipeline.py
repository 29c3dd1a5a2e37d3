"""
End-to-end normalization of a loaded character.

    raw asset -> validate -> auto-map -> rename skeleton -> rename tracks
              -> required-bone check

The asset is only modified when the pre-check passes.
"""

from typing import NamedTuple, Optional
import logging

from .core.types import CharacterAsset
from .mapping.bone_mapper import (
    BoneMapper,
    BoneNameMapping,
    BoneStatistics,
    BoneValidationResult,
)
from .utils.config import NormalizerConfig
from .validation.report import ValidationReport
from .validation.validator import AssetValidator

logger = logging.getLogger(__name__)


class NormalizationResult(NamedTuple):
    """Everything a caller may want to log or surface after normalization."""
    report: ValidationReport
    mapping: BoneNameMapping                       # Classifier output
    applied: BoneNameMapping                       # Entries applied to the skeleton
    tracks_updated: int
    bone_validation: Optional[BoneValidationResult]
    statistics: Optional[BoneStatistics]

    @property
    def ok(self) -> bool:
        """Pre-check passed and every required canonical bone is present."""
        return (
            self.report.is_valid
            and self.bone_validation is not None
            and self.bone_validation.is_valid
        )


def normalize_character(
    asset: CharacterAsset,
    config: Optional[NormalizerConfig] = None,
    mapper: Optional[BoneMapper] = None
) -> NormalizationResult:
    """
    Validate an asset and rename its bones and tracks to canonical names.

    Args:
        asset: Loaded character, modified in place on success
        config: Validator/mapper settings (defaults if None)
        mapper: Bone mapper to use (built from config if None)

    Returns:
        NormalizationResult

    Raises:
        InvalidAssetError: If asset is None or not a CharacterAsset
    """
    config = config if config is not None else NormalizerConfig()
    if mapper is None:
        mapper = BoneMapper(required_bones=config.required_bones)

    report = AssetValidator(config).validate(asset)
    if not report.is_valid:
        logger.warning(
            f"Skipping normalization of '{asset.name}': {len(report.errors)} critical errors"
        )
        return NormalizationResult(
            report=report,
            mapping={},
            applied={},
            tracks_updated=0,
            bone_validation=None,
            statistics=None,
        )

    skeleton = asset.skeleton
    mapping = mapper.auto_map_bones(skeleton)
    applied = mapper.apply_mapping(skeleton, mapping)
    tracks_updated = mapper.apply_mapping_to_animations(asset.animations, applied)
    bone_validation = mapper.validate_bones(skeleton)
    statistics = mapper.get_bone_statistics(skeleton)

    logger.info(
        f"Normalized '{asset.name}': {statistics.standard_bones}/{statistics.total_bones} "
        f"standard bones ({statistics.standard_percentage:.1f}%)"
    )

    return NormalizationResult(
        report=report,
        mapping=mapping,
        applied=applied,
        tracks_updated=tracks_updated,
        bone_validation=bone_validation,
        statistics=statistics,
    )
