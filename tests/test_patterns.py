"""
Tests for the bone naming rule table.

Run with: pytest tests/test_patterns.py -v
"""

import pytest

from rignorm.core.constants import STANDARD_BONES
from rignorm.mapping.patterns import (
    BONE_PATTERNS,
    MIXAMO_CONVENTION,
    detect_convention,
    match_bone_name,
)


def classify(name):
    found = match_bone_name(name)
    return found[1].target if found else None


def loose_rule(target):
    for rule in BONE_PATTERNS:
        if rule.target == target and not rule.exact:
            return rule
    raise AssertionError(f"No loose rule for {target}")


class TestRuleTableShape:
    """Test the ordering of the rule table."""

    def test_exact_rules_come_first(self):
        """All exact rules precede all loose rules."""
        flags = [rule.exact for rule in BONE_PATTERNS]
        first_loose = flags.index(False)
        assert all(flags[:first_loose])
        assert not any(flags[first_loose:])

    def test_targets_are_canonical(self):
        for rule in BONE_PATTERNS:
            assert rule.target in STANDARD_BONES

    @pytest.mark.parametrize("name", sorted(STANDARD_BONES))
    def test_canonical_names_map_to_themselves(self, name):
        """A canonical name is matched by an exact rule targeting itself."""
        index, rule = match_bone_name(name)
        assert rule.exact
        assert rule.target == name


class TestExactMatching:
    """Test exact spellings, with and without the Mixamo namespace."""

    @pytest.mark.parametrize("name,target", [
        ('mixamorigHips', 'Hips'),
        ('mixamorig:Hips', 'Hips'),
        ('mixamorig1_Spine', 'Spine'),
        ('mixamorig:Spine1', 'Spine1'),
        ('mixamorig:Spine2', 'Spine2'),
        ('mixamorigNeck', 'Neck'),
        ('mixamorigHead', 'Head'),
        ('mixamorigLeftUpLeg', 'LeftHip'),
        ('mixamorig:RightUpLeg', 'RightHip'),
        ('mixamorigLeftToeBase', 'LeftToe'),
        ('mixamorigRightForeArm', 'RightForeArm'),
        ('root', 'Hips'),
        ('Armature', 'Hips'),
        ('HIPS', 'Hips'),
    ])
    def test_exact_names(self, name, target):
        index, rule = match_bone_name(name)
        assert rule.exact
        assert rule.target == target

    def test_exact_beats_loose(self):
        """'Spine1' resolves to Spine1, never to the generic Spine rule."""
        assert classify('Spine1') == 'Spine1'
        assert classify('mixamorig:Spine1') == 'Spine1'

    def test_real_hips_outrank_armature(self):
        """The Hips bone is matched by a higher-priority rule than 'Armature'."""
        hips_index, _ = match_bone_name('mixamorigHips')
        armature_index, _ = match_bone_name('Armature')
        assert hips_index < armature_index


class TestLooseMatching:
    """Test keyword rules for other vendor conventions."""

    @pytest.mark.parametrize("name,target", [
        # Biped
        ('Bip01 Pelvis', 'Hips'),
        ('Bip01 Spine', 'Spine'),
        ('Bip01 Spine1', 'Spine1'),
        ('Bip01 Neck', 'Neck'),
        ('Bip01 Head', 'Head'),
        ('Bip01 L Clavicle', 'LeftShoulder'),
        ('Bip01 L UpperArm', 'LeftArm'),
        ('Bip01 L Forearm', 'LeftForeArm'),
        ('Bip01 L Hand', 'LeftHand'),
        ('Bip01 L Thigh', 'LeftHip'),
        ('Bip01 L Calf', 'LeftLeg'),
        ('Bip01 R Calf', 'RightLeg'),
        ('Bip01 R Foot', 'RightFoot'),
        ('Bip01 R Toe0', 'RightToe'),
        # Unreal
        ('pelvis', 'Hips'),
        ('spine_01', 'Spine1'),
        ('spine_02', 'Spine2'),
        ('spine_03', 'Spine'),
        ('neck_01', 'Neck'),
        ('clavicle_l', 'LeftShoulder'),
        ('upperarm_l', 'LeftArm'),
        ('lowerarm_l', 'LeftForeArm'),
        ('hand_r', 'RightHand'),
        ('thigh_r', 'RightHip'),
        ('calf_r', 'RightLeg'),
        ('foot_l', 'LeftFoot'),
        ('ball_l', 'LeftToe'),
        # Blender
        ('UpperArm.L', 'LeftArm'),
        ('Forearm.R', 'RightForeArm'),
        ('Thigh.L', 'LeftHip'),
        ('Shin.R', 'RightLeg'),
        # Abbreviated prefixes
        ('L_Arm', 'LeftArm'),
        ('r_forearm', 'RightForeArm'),
        ('l_upleg', 'LeftHip'),
        ('R_Leg', 'RightLeg'),
        ('L_Shoulder', 'LeftShoulder'),
        # Keyword fallbacks
        ('Left_Upper_Arm', 'LeftArm'),
        ('Chest2', 'Spine2'),
        ('UpperChest', 'Spine'),
        ('mixamorigHeadTop_End', 'Head'),
        ('mixamorigLeftHandIndex1', 'LeftHand'),
        ('mixamorigRightToe_End', 'RightToe'),
    ])
    def test_vendor_names(self, name, target):
        assert classify(name) == target

    @pytest.mark.parametrize("name", [
        'Camera', 'Tail_01', 'Jaw', 'Eye_L', 'Bip01', 'Prop_Sword',
    ])
    def test_unclassifiable_names(self, name):
        assert match_bone_name(name) is None


class TestExclusions:
    """Overlapping terms are excluded by the patterns themselves."""

    @pytest.mark.parametrize("name", [
        'LeftForeArm', 'Left_Fore_Arm', 'l_forearm', 'forearm_l', 'lowerarm_l',
        'Bip01 L Forearm', 'mixamorig:LeftForeArm', 'LeftForeArmTwist',
        'Left Fore Arm', 'Left-Fore-Arm', 'Left Lower Arm', 'left-lower-arm', 'L Fore Arm',
    ])
    def test_upper_arm_rule_rejects_forearms(self, name):
        assert not loose_rule('LeftArm').pattern.search(name)
        assert classify(name) == 'LeftForeArm'

    @pytest.mark.parametrize("name", [
        'RightForeArm', 'r_forearm', 'lowerarm_r', 'ForeArm.R',
        'Right Fore Arm', 'Right-Lower-Arm', 'R Fore Arm', 'lower arm_r',
    ])
    def test_right_upper_arm_rule_rejects_forearms(self, name):
        assert not loose_rule('RightArm').pattern.search(name)
        assert classify(name) == 'RightForeArm'

    @pytest.mark.parametrize("name", [
        'LeftUpLeg', 'Left_Up_Leg', 'LeftUpperLeg', 'left_upper_leg', 'l_upleg',
        'mixamorig:LeftUpLeg', 'Left Up Leg', 'Left-Upper-Leg', 'L Upper Leg',
    ])
    def test_lower_leg_rule_rejects_upper_legs(self, name):
        assert not loose_rule('LeftLeg').pattern.search(name)
        assert classify(name) == 'LeftHip'

    @pytest.mark.parametrize("name", [
        'RightUpLeg', 'r_upleg', 'RightUpperLeg', 'Right Upper Leg', 'Right-Up-Leg', 'r up leg',
    ])
    def test_right_lower_leg_rule_rejects_upper_legs(self, name):
        assert not loose_rule('RightLeg').pattern.search(name)
        assert classify(name) == 'RightHip'

    def test_arm_rule_rejects_armature(self):
        assert not loose_rule('LeftArm').pattern.search('LeftArmature')

    def test_sides_do_not_cross(self):
        assert classify('RightHand') == 'RightHand'
        assert classify('hand_r') == 'RightHand'
        assert classify('Bip01 R Thigh') == 'RightHip'


class TestDeterminism:
    """Classification is a pure function of the name."""

    def test_repeated_runs_agree(self):
        names = ['mixamorigHips', 'Bip01 L Thigh', 'spine_02', 'Jaw', 'hand_r']
        first = [match_bone_name(n) for n in names]
        second = [match_bone_name(n) for n in names]
        assert first == second


class TestNamingConventions:
    """Test detection of namespaced conventions."""

    def test_detects_mixamo_prefix(self):
        detected = detect_convention(['Armature', 'mixamorigHips', 'mixamorigSpine'])
        assert detected is not None
        convention, prefix = detected
        assert convention is MIXAMO_CONVENTION
        assert prefix == 'mixamorig'

    def test_prefix_keeps_separator(self):
        _, prefix = detect_convention(['mixamorig:Hips'])
        assert prefix == 'mixamorig:'

    def test_no_convention(self):
        assert detect_convention(['Hips', 'Spine', 'Head']) is None

    def test_prefix_after_fbx_namespace(self):
        """The marker is found inside a namespaced name; the namespace is kept."""
        detected = detect_convention(['Character1:mixamorig:Hips'])
        assert detected is not None
        convention, prefix = detected
        assert convention is MIXAMO_CONVENTION
        assert prefix == 'Character1:mixamorig:'
