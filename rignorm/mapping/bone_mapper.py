"""
Bone name normalization.

Classifies vendor-specific bone names (Mixamo, Biped, Unreal, Blender, ...)
into the canonical vocabulary and propagates the renaming to the skeleton
and to every animation track that references a bone.

Typical use:
    mapper = BoneMapper()
    mapping = mapper.auto_map_bones(skeleton.bones)
    applied = mapper.apply_mapping(skeleton, mapping)
    mapper.apply_mapping_to_animations(asset.animations, applied)
    result = mapper.validate_bones(skeleton)

Collisions (several bones classifying to the same canonical name) are
resolved during classification: the bone matched by the highest-priority
rule keeps the canonical name, ties go to the bone that comes first in
skeleton order, and the others are left unmapped. Bones whose name contains
the track separator are never classified: their tracks could not follow
the rename.
"""

from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union
from decimal import Decimal, ROUND_HALF_UP
import logging

from ..core.constants import REQUIRED_BONES, STANDARD_BONES, TRACK_SEPARATOR
from ..core.types import AnimationClip, Bone, Skeleton
from .patterns import BONE_PATTERNS, BonePattern, match_bone_name

logger = logging.getLogger(__name__)

BoneNameMapping = Dict[str, str]
BonesLike = Union[Skeleton, Iterable[Bone], Iterable[str]]


# =============================================================================
# Result Containers
# =============================================================================

class ClassificationResult(NamedTuple):
    """Outcome of classifying one skeleton's bone names."""
    mapping: BoneNameMapping            # original -> canonical, classified bones only
    unmapped: List[str]                 # Names no rule matched
    collisions: List[Tuple[str, str]]   # (name, canonical) lost to a higher-priority bone
    total: int                          # Number of bones classified


class MappingStatistics(NamedTuple):
    """Success counts of a classification run."""
    total: int
    mapped: int
    failed: int
    success_rate: float                 # Percentage, one decimal place


class BoneValidationResult(NamedTuple):
    """Presence of the required canonical bones."""
    is_valid: bool
    missing_bones: List[str]
    found_bones: List[str]


class BoneStatistics(NamedTuple):
    """How many bones currently carry a canonical name."""
    total_bones: int
    standard_bones: int
    non_standard_bones: int
    standard_percentage: float          # Percentage, one decimal place


def _percentage(part: int, whole: int) -> float:
    if whole == 0:
        return 0.0
    # Half-up on the exact binary value
    value = Decimal(part / whole * 100.0)
    return float(value.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))


def _bone_names(bones: BonesLike) -> List[str]:
    return [b if isinstance(b, str) else b.name for b in bones]


def _bone_list(skeleton: Union[Skeleton, Sequence[Bone]]) -> List[Bone]:
    if isinstance(skeleton, Skeleton):
        return skeleton.bones
    return list(skeleton)


# =============================================================================
# Bone Mapper
# =============================================================================

class BoneMapper:
    """
    Rule-based bone name classifier.

    The rule table and required-bone list are read-only after construction,
    so one mapper can serve any number of assets. Mapping application mutates
    the caller's skeleton and clips and is not safe to run concurrently on
    the same asset.
    """

    def __init__(
        self,
        patterns: Sequence[BonePattern] = BONE_PATTERNS,
        required_bones: Sequence[str] = REQUIRED_BONES
    ):
        """
        Args:
            patterns: Ordered rule table, highest priority first
            required_bones: Canonical names validate_bones() requires
        """
        self.patterns: Tuple[BonePattern, ...] = tuple(patterns)
        self.required_bones: Tuple[str, ...] = tuple(required_bones)

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    def classify(self, bones: BonesLike) -> ClassificationResult:
        """
        Classify every bone name against the rule table.

        Args:
            bones: Skeleton, bones, or bone names (order only breaks ties)

        Returns:
            ClassificationResult; no bone is mutated
        """
        names = _bone_names(bones)
        unmapped: List[str] = []
        matches: List[Tuple[str, str, int]] = []
        # canonical -> (rule index, position, name) of the current claimant
        winners: Dict[str, Tuple[int, int, str]] = {}

        for position, name in enumerate(names):
            # Tracks split at the first separator, so a renamed dotted bone
            # would orphan its tracks.
            if TRACK_SEPARATOR in name:
                unmapped.append(name)
                logger.warning(
                    f"Failed to auto-map bone: {name} (contains track separator '{TRACK_SEPARATOR}')"
                )
                continue

            found = match_bone_name(name, self.patterns)
            if found is None:
                unmapped.append(name)
                logger.warning(f"Failed to auto-map bone: {name}")
                continue

            rule_index, rule = found
            matches.append((name, rule.target, rule_index))
            claim = (rule_index, position, name)
            if rule.target not in winners or claim < winners[rule.target]:
                winners[rule.target] = claim

        mapping: BoneNameMapping = {}
        collisions: List[Tuple[str, str]] = []
        for name, target, _ in matches:
            if winners[target][2] == name:
                mapping[name] = target
                logger.debug(f"Mapped: {name} -> {target}")
            else:
                collisions.append((name, target))
                logger.info(
                    f"Skipped {name}: '{target}' already claimed by {winners[target][2]}"
                )

        return ClassificationResult(
            mapping=mapping,
            unmapped=unmapped,
            collisions=collisions,
            total=len(names),
        )

    def auto_map_bones(self, bones: BonesLike) -> BoneNameMapping:
        """
        Build an original -> canonical name mapping for a skeleton.

        Bones no rule matches, or that lose a collision, get no entry.

        Args:
            bones: Skeleton, bones, or bone names

        Returns:
            Mapping keyed by original bone name
        """
        result = self.classify(bones)
        stats = self.mapping_statistics(result)
        logger.info(
            f"Mapping complete: {stats.mapped}/{stats.total} ({stats.success_rate:.1f}%)"
        )
        return result.mapping

    @staticmethod
    def mapping_statistics(result: ClassificationResult) -> MappingStatistics:
        """Success/failure counts of a classification run."""
        failed = len(result.unmapped) + len(result.collisions)
        mapped = result.total - failed
        return MappingStatistics(
            total=result.total,
            mapped=mapped,
            failed=failed,
            success_rate=_percentage(mapped, result.total),
        )

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------

    def apply_mapping(
        self,
        skeleton: Union[Skeleton, Sequence[Bone]],
        mapping: BoneNameMapping
    ) -> BoneNameMapping:
        """
        Rename skeleton bones in place.

        Entries whose original name is not found are skipped. Entries whose
        canonical name is already carried by a different bone are rejected so
        that names stay unique. Bones are never added, removed, or reordered.

        Args:
            skeleton: Skeleton (or bone list) to rename
            mapping: original -> canonical names

        Returns:
            The entries that were actually applied; pass this to
            apply_mapping_to_animations() to keep tracks consistent
        """
        bones = _bone_list(skeleton)
        by_name: Dict[str, Bone] = {}
        for bone in bones:
            by_name.setdefault(bone.name, bone)

        applied: BoneNameMapping = {}
        for original, canonical in mapping.items():
            bone = by_name.get(original)
            if bone is None:
                logger.warning(f"Could not find bone to apply mapping: {original}")
                continue

            holder = by_name.get(canonical)
            if holder is not None and holder is not bone:
                logger.warning(
                    f"Rejected mapping {original} -> {canonical}: name already used by another bone"
                )
                continue

            bone.name = canonical
            del by_name[original]
            by_name[canonical] = bone
            applied[original] = canonical

        logger.info(f"Applied {len(applied)}/{len(mapping)} bone name mappings")
        return applied

    def apply_mapping_to_animations(
        self,
        clips: Sequence[AnimationClip],
        mapping: BoneNameMapping
    ) -> int:
        """
        Rewrite the bone reference of every track in place.

        A track named '<bone>.<channel>' whose bone is a mapping key becomes
        '<canonical>.<channel>'; the suffix is kept verbatim. Tracks of
        unmapped bones and tracks without a separator are left untouched.

        Returns:
            Number of tracks renamed
        """
        updated = 0
        skipped = 0

        for clip in clips:
            for track in clip.tracks:
                parts = track.split_name()
                if parts is None:
                    skipped += 1
                    continue

                bone_name, suffix = parts
                canonical = mapping.get(bone_name)
                if canonical is not None:
                    track.name = f"{canonical}{suffix}"
                    updated += 1

        if skipped:
            logger.warning(f"Skipped {skipped} tracks without a bone separator")
        logger.info(f"Updated {updated} animation tracks with new bone names")
        return updated

    # -------------------------------------------------------------------------
    # Validation and Reporting
    # -------------------------------------------------------------------------

    def validate_bones(self, skeleton: Union[Skeleton, Sequence[Bone]]) -> BoneValidationResult:
        """
        Check that every required canonical bone is present by exact name.
        """
        names = [bone.name for bone in _bone_list(skeleton)]
        required = set(self.required_bones)

        found_bones = [name for name in names if name in required]
        present = set(found_bones)
        missing_bones = [name for name in self.required_bones if name not in present]
        is_valid = not missing_bones

        if is_valid:
            logger.info("Bone validation passed. Found all required bones.")
        else:
            logger.warning(f"Bone validation failed. Missing bones: {', '.join(missing_bones)}")

        return BoneValidationResult(
            is_valid=is_valid,
            missing_bones=missing_bones,
            found_bones=found_bones,
        )

    @staticmethod
    def is_standard_bone(bone_name: str) -> bool:
        return bone_name in STANDARD_BONES

    def get_bone_statistics(self, skeleton: Union[Skeleton, Sequence[Bone]]) -> BoneStatistics:
        """Count bones that currently carry a canonical name."""
        bones = _bone_list(skeleton)
        standard = sum(1 for bone in bones if self.is_standard_bone(bone.name))

        return BoneStatistics(
            total_bones=len(bones),
            standard_bones=standard,
            non_standard_bones=len(bones) - standard,
            standard_percentage=_percentage(standard, len(bones)),
        )


# =============================================================================
# Debug Output
# =============================================================================

def format_bone_hierarchy(skeleton: Union[Skeleton, Sequence[Bone]]) -> str:
    """
    Render bones as indexed lines, indented by depth within the skeleton.
    """
    bones = _bone_list(skeleton)
    members = {id(bone) for bone in bones}
    lines = ['Bone Hierarchy:']

    for index, bone in enumerate(bones):
        depth = 0
        parent: Optional[object] = bone.parent
        while parent is not None and id(parent) in members:
            depth += 1
            parent = parent.parent
        lines.append(f"  [{index}] {'  ' * depth}{bone.name}")

    return '\n'.join(lines)


def log_bone_hierarchy(skeleton: Union[Skeleton, Sequence[Bone]]) -> None:
    for line in format_bone_hierarchy(skeleton).splitlines():
        logger.info(line)
