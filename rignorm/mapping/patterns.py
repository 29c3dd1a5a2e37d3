"""
Bone naming rules.

BONE_PATTERNS is an ordered, priority-ranked list of (pattern, target)
rules evaluated case-insensitively with first match wins:

1. Exact rules: anchored patterns for known spellings, optionally carrying
   the Mixamo namespace prefix ("mixamorig", "mixamorig:", "mixamorig1_").
2. Loose rules: keyword searches for other vendor conventions, including
   "Left"/"Right" words, "L_"/"R_" prefixes, "_l"/".L" suffixes and
   Biped-style "Bip01 L Thigh" names.

Overlapping terms are disambiguated inside the loose patterns with
look-behind/look-ahead exclusions: "arm" never matches a forearm or
lower arm, "leg" never matches an up/upper leg, "hip" never matches "hips".

NAMING_CONVENTIONS lists the namespaced conventions whose own required-bone
spellings the validator checks. Supporting a new convention is a matter of
appending entries here.
"""

from typing import List, NamedTuple, Optional, Pattern, Sequence, Tuple
import re

from ..core.constants import (
    BONE_HIPS, BONE_SPINE, BONE_SPINE1, BONE_SPINE2, BONE_CHEST, BONE_NECK, BONE_HEAD,
    BONE_LEFT_SHOULDER, BONE_LEFT_ARM, BONE_LEFT_FOREARM, BONE_LEFT_HAND,
    BONE_RIGHT_SHOULDER, BONE_RIGHT_ARM, BONE_RIGHT_FOREARM, BONE_RIGHT_HAND,
    BONE_LEFT_HIP, BONE_LEFT_LEG, BONE_LEFT_FOOT, BONE_LEFT_TOE,
    BONE_RIGHT_HIP, BONE_RIGHT_LEG, BONE_RIGHT_FOOT, BONE_RIGHT_TOE,
)


class BonePattern(NamedTuple):
    """One classification rule."""
    pattern: Pattern[str]
    target: str
    exact: bool


class NamingConvention(NamedTuple):
    """Namespaced vendor convention with its own required-bone spellings."""
    name: str
    prefix: Pattern[str]              # Namespace marker, searched anywhere in a name
    required_bones: Tuple[str, ...]   # Bare names appended to the detected prefix


# =============================================================================
# Pattern Fragments
# =============================================================================

# Optional Mixamo namespace: mixamorig, mixamorig:, mixamorig_, mixamorig1:
MIXAMO_PREFIX = r'(?:mixamorig\d*[:_]?)?'

# Side markers: a word, a single-letter prefix token, or a single-letter suffix
_LEFT_BEFORE = r'(?:left|(?<![a-z0-9])l[_\s.-])'
_LEFT_AFTER = r'(?:[_\s.-](?:l|left))$'
_RIGHT_BEFORE = r'(?:right|(?<![a-z0-9])r[_\s.-])'
_RIGHT_AFTER = r'(?:[_\s.-](?:r|right))$'

# Body parts. Exclusions cover joined, '_', ' ', '.' and '-' spellings.
_SHOULDER = r'(?:shoulder|clavicle|collar)'
_UPPER_ARM = (
    r'(?:upper[_\s.-]?arm|'
    r'(?<!fore)(?<!fore[_\s.-])(?<!lower)(?<!lower[_\s.-])arm(?!ature))'
)
_FOREARM = r'(?:fore[_\s.-]?arm|lower[_\s.-]?arm|elbow)'
_HAND = r'(?:hand|wrist)'
_UPPER_LEG = r'(?:up(?:per)?[_\s.-]?leg|thigh|hip(?!s))'
_LOWER_LEG = (
    r'(?:(?<!up)(?<!up[_\s.-])(?<!upper)(?<!upper[_\s.-])leg|'
    r'lower[_\s.-]?leg|calf|shin|knee)'
)
_FOOT = r'(?:foot|ankle)'
_TOE = r'(?:toe|ball)'


def _exact(alternatives: str, target: str, prefixed: bool = True) -> BonePattern:
    prefix = MIXAMO_PREFIX if prefixed else ''
    return BonePattern(
        re.compile(rf'^{prefix}(?:{alternatives})$', re.IGNORECASE), target, True
    )


def _loose(keywords: str, target: str) -> BonePattern:
    return BonePattern(re.compile(keywords, re.IGNORECASE), target, False)


def _limb(before: str, after: str, part: str, target: str) -> BonePattern:
    return _loose(rf'(?:{before}.*{part}|{part}.*{after})', target)


def _sided_exact(side: str, targets: Sequence[Tuple[str, str]]) -> List[BonePattern]:
    return [_exact(rf'{side}_?{body}', target) for body, target in targets]


def _sided_loose(before: str, after: str, targets: Sequence[Tuple[str, str]]) -> List[BonePattern]:
    return [_limb(before, after, part, target) for part, target in targets]


_LEFT_EXACT = [
    ('shoulder', BONE_LEFT_SHOULDER),
    ('arm', BONE_LEFT_ARM),
    ('fore_?arm', BONE_LEFT_FOREARM),
    ('hand', BONE_LEFT_HAND),
    ('(?:hip|up_?leg)', BONE_LEFT_HIP),
    ('leg', BONE_LEFT_LEG),
    ('foot', BONE_LEFT_FOOT),
    ('toe(?:_?base)?', BONE_LEFT_TOE),
]
_RIGHT_EXACT = [
    ('shoulder', BONE_RIGHT_SHOULDER),
    ('arm', BONE_RIGHT_ARM),
    ('fore_?arm', BONE_RIGHT_FOREARM),
    ('hand', BONE_RIGHT_HAND),
    ('(?:hip|up_?leg)', BONE_RIGHT_HIP),
    ('leg', BONE_RIGHT_LEG),
    ('foot', BONE_RIGHT_FOOT),
    ('toe(?:_?base)?', BONE_RIGHT_TOE),
]
_LEFT_LOOSE = [
    (_SHOULDER, BONE_LEFT_SHOULDER),
    (_UPPER_ARM, BONE_LEFT_ARM),
    (_FOREARM, BONE_LEFT_FOREARM),
    (_HAND, BONE_LEFT_HAND),
    (_UPPER_LEG, BONE_LEFT_HIP),
    (_LOWER_LEG, BONE_LEFT_LEG),
    (_FOOT, BONE_LEFT_FOOT),
    (_TOE, BONE_LEFT_TOE),
]
_RIGHT_LOOSE = [
    (_SHOULDER, BONE_RIGHT_SHOULDER),
    (_UPPER_ARM, BONE_RIGHT_ARM),
    (_FOREARM, BONE_RIGHT_FOREARM),
    (_HAND, BONE_RIGHT_HAND),
    (_UPPER_LEG, BONE_RIGHT_HIP),
    (_LOWER_LEG, BONE_RIGHT_LEG),
    (_FOOT, BONE_RIGHT_FOOT),
    (_TOE, BONE_RIGHT_TOE),
]


# =============================================================================
# Rule Table
# =============================================================================

BONE_PATTERNS: Tuple[BonePattern, ...] = tuple(
    [
        # Exact: root and spine
        _exact('hips', BONE_HIPS),
        _exact('root|armature', BONE_HIPS, prefixed=False),
        _exact('spine2', BONE_SPINE2),
        _exact('spine1', BONE_SPINE1),
        _exact('spine', BONE_SPINE),
        _exact('chest', BONE_CHEST),
        _exact('neck', BONE_NECK),
        _exact('head', BONE_HEAD),
    ]
    + _sided_exact('left', _LEFT_EXACT)
    + _sided_exact('right', _RIGHT_EXACT)
    + [
        # Loose: root and spine
        _loose(r'(?:hips|pelvis|root|armature)', BONE_HIPS),
        _loose(r'(?:spine_?0?2|torso_?2|chest_?2)', BONE_SPINE2),
        _loose(r'(?:spine_?0?1|torso_?1|chest_?1)', BONE_SPINE1),
        _loose(r'(?:spine|chest|torso|upperback|lowerback)', BONE_SPINE),
        _loose(r'neck', BONE_NECK),
        _loose(r'head', BONE_HEAD),
    ]
    + _sided_loose(_LEFT_BEFORE, _LEFT_AFTER, _LEFT_LOOSE)
    + _sided_loose(_RIGHT_BEFORE, _RIGHT_AFTER, _RIGHT_LOOSE)
)


def match_bone_name(
    name: str,
    patterns: Sequence[BonePattern] = BONE_PATTERNS
) -> Optional[Tuple[int, BonePattern]]:
    """
    Find the first rule matching a bone name.

    Returns:
        (rule index, rule) or None when no rule matches
    """
    for index, rule in enumerate(patterns):
        if rule.pattern.search(name):
            return index, rule
    return None


# =============================================================================
# Naming Conventions
# =============================================================================

MIXAMO_CONVENTION = NamingConvention(
    name='mixamo',
    prefix=re.compile(r'mixamorig\d*[:_]?', re.IGNORECASE),
    required_bones=(
        'Hips', 'Spine', 'Head', 'LeftArm', 'RightArm', 'LeftUpLeg', 'RightUpLeg',
    ),
)

NAMING_CONVENTIONS: Tuple[NamingConvention, ...] = (MIXAMO_CONVENTION,)


def detect_convention(
    bone_names: Sequence[str],
    conventions: Sequence[NamingConvention] = NAMING_CONVENTIONS
) -> Optional[Tuple[NamingConvention, str]]:
    """
    Detect a namespaced naming convention from bone names.

    Returns:
        (convention, prefix as spelled in the asset) for the first registered
        convention any name carries, or None. The prefix runs from the
        start of the name through the marker, so an outer FBX namespace
        ("Character1:mixamorig:") is kept.
    """
    for convention in conventions:
        for name in bone_names:
            found = convention.prefix.search(name)
            if found:
                return convention, name[:found.end()]
    return None
