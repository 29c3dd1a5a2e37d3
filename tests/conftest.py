"""
Pytest configuration and fixtures for rignorm tests.
"""

import pytest
import numpy as np

from rignorm.core.types import (
    AnimationClip,
    CharacterAsset,
    Material,
    SceneNode,
    Skeleton,
    SkinnedMesh,
    Track,
)

FINGERS = ('Thumb', 'Index', 'Middle', 'Ring', 'Pinky')


def _mixamo_joint_tree(prefix):
    """65-bone Mixamo rig, parents listed before children."""
    tree = {}

    def joint(name, parent, translation=(0.0, 0.1, 0.0)):
        tree[prefix + name] = {
            'parent': prefix + parent if parent else None,
            'rest_translation': list(translation),
            'rest_rotation': [1.0, 0.0, 0.0, 0.0],
        }

    joint('Hips', None, (0.0, 1.0, 0.0))
    for name, parent in [
        ('Spine', 'Hips'), ('Spine1', 'Spine'), ('Spine2', 'Spine1'),
        ('Neck', 'Spine2'), ('Head', 'Neck'), ('HeadTop_End', 'Head'),
    ]:
        joint(name, parent)

    for side, sign in (('Left', 1.0), ('Right', -1.0)):
        joint(f'{side}Shoulder', 'Spine2', (sign * 0.05, 0.1, 0.0))
        joint(f'{side}Arm', f'{side}Shoulder', (sign * 0.1, 0.0, 0.0))
        joint(f'{side}ForeArm', f'{side}Arm', (sign * 0.25, 0.0, 0.0))
        joint(f'{side}Hand', f'{side}ForeArm', (sign * 0.25, 0.0, 0.0))
        for finger in FINGERS:
            parent = f'{side}Hand'
            for i in range(1, 5):
                joint(f'{side}Hand{finger}{i}', parent, (sign * 0.03, 0.0, 0.0))
                parent = f'{side}Hand{finger}{i}'

    for side, sign in (('Left', 1.0), ('Right', -1.0)):
        joint(f'{side}UpLeg', 'Hips', (sign * 0.1, -0.05, 0.0))
        joint(f'{side}Leg', f'{side}UpLeg', (0.0, -0.45, 0.0))
        joint(f'{side}Foot', f'{side}Leg', (0.0, -0.4, 0.0))
        joint(f'{side}ToeBase', f'{side}Foot', (0.0, -0.05, 0.1))
        joint(f'{side}Toe_End', f'{side}ToeBase', (0.0, 0.0, 0.05))

    return tree


def _box_vertices(width, height, depth):
    """Corners of a box standing on the origin."""
    xs = (-width / 2, width / 2)
    zs = (-depth / 2, depth / 2)
    return np.array(
        [[x, y, z] for x in xs for y in (0.0, height) for z in zs],
        dtype=np.float32,
    )


@pytest.fixture
def mixamo_joint_tree():
    """Joint tree with 'mixamorig' prefixed names."""
    return _mixamo_joint_tree('mixamorig')


@pytest.fixture
def mixamo_skeleton(mixamo_joint_tree):
    return Skeleton.from_joint_tree(mixamo_joint_tree)


@pytest.fixture
def mixamo_clip():
    """Clip with tracks for a few Mixamo bones plus odd names."""
    times = np.array([0.0, 0.5, 1.0], dtype=np.float32)
    return AnimationClip('Walking', tracks=[
        Track('mixamorigHips.position', times, np.zeros((3, 3))),
        Track('mixamorigHips.quaternion', times, np.zeros((3, 4))),
        Track('mixamorigLeftArm.quaternion', times, np.zeros((3, 4))),
        Track('mixamorigLeftHandIndex1.quaternion', times, np.zeros((3, 4))),
        Track('UnknownBone.scale', times, np.ones((3, 3))),
        Track('malformed', times, np.zeros((3, 1))),
    ], duration=1.0)


@pytest.fixture
def make_asset():
    """
    Factory for character assets.

    Args (all optional):
        skeleton: Skeleton bound to the mesh (None for an unrigged mesh)
        animations: Clips on the asset
        size: (width, height, depth) of the mesh bounding box
        textured: Whether the material has a color map
        mesh: False to build a scene without a skinned mesh
        root_scale: Scale of the scene root node
    """
    def _make(skeleton=None, animations=None, size=(0.6, 1.8, 0.3),
              textured=True, mesh=True, root_scale=None):
        root = SceneNode('Character', scale=root_scale)
        if mesh:
            material = Material('Body', {'map': 'body_diffuse.png'} if textured else {})
            skinned = SkinnedMesh(
                'Body',
                vertices=_box_vertices(*size),
                skeleton=skeleton,
                materials=[material],
            )
            group = root.add(SceneNode('Armature'))
            group.add(skinned)
        else:
            root.add(SceneNode('Prop'))
        return CharacterAsset(root, animations=animations or [])

    return _make


@pytest.fixture
def mixamo_asset(make_asset, mixamo_skeleton, mixamo_clip):
    return make_asset(skeleton=mixamo_skeleton, animations=[mixamo_clip])
