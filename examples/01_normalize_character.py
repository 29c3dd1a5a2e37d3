"""
Example 01: Validating and Normalizing a Rigged Character

Walks through the full pipeline on characters built in memory, the way a
loader would hand them over:
1. Building a Mixamo-style character (mesh, 65-bone skeleton, walk clip)
2. Validating it and printing the text report
3. Auto-mapping bone names and inspecting collisions
4. Renaming the skeleton and animation tracks to canonical names
5. Checking the required bones and canonical-name statistics
6. Rejecting a broken asset (too few bones, no textures)

Output files:
- output/01_report.html - HTML rendering of the validation report
- output/01_config.json - Settings used for the run
"""

import logging
from pathlib import Path

import numpy as np

from rignorm import (
    BoneMapper,
    CharacterAsset,
    NormalizerConfig,
    format_report_html,
    format_report_text,
    normalize_character,
    save_config,
    validate_asset,
)
from rignorm.core.types import (
    AnimationClip,
    Bone,
    Material,
    SceneNode,
    Skeleton,
    SkinnedMesh,
    Track,
)
from rignorm.mapping import format_bone_hierarchy


# =============================================================================
# 1. Configuration
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent
OUTPUT_DIR = PROJECT_ROOT / "output"

PREFIX = "mixamorig"
BODY = [
    ('Hips', None), ('Spine', 'Hips'), ('Spine1', 'Spine'), ('Spine2', 'Spine1'),
    ('Neck', 'Spine2'), ('Head', 'Neck'), ('HeadTop_End', 'Head'),
]
FINGERS = ('Thumb', 'Index', 'Middle', 'Ring', 'Pinky')


# =============================================================================
# 2. Character Construction
# =============================================================================

def build_joint_tree():
    """Joint tree of a 65-bone Mixamo rig."""
    joints = list(BODY)
    for side in ('Left', 'Right'):
        joints += [
            (f'{side}Shoulder', 'Spine2'), (f'{side}Arm', f'{side}Shoulder'),
            (f'{side}ForeArm', f'{side}Arm'), (f'{side}Hand', f'{side}ForeArm'),
        ]
        for finger in FINGERS:
            parent = f'{side}Hand'
            for i in range(1, 5):
                joints.append((f'{side}Hand{finger}{i}', parent))
                parent = f'{side}Hand{finger}{i}'
    for side in ('Left', 'Right'):
        joints += [
            (f'{side}UpLeg', 'Hips'), (f'{side}Leg', f'{side}UpLeg'),
            (f'{side}Foot', f'{side}Leg'), (f'{side}ToeBase', f'{side}Foot'),
            (f'{side}Toe_End', f'{side}ToeBase'),
        ]

    return {
        PREFIX + name: {
            'parent': PREFIX + parent if parent else None,
            'rest_translation': [0.0, 1.0 if parent is None else 0.1, 0.0],
        }
        for name, parent in joints
    }


def build_character(skeleton, textured=True, animated=True, name='x_bot'):
    """Scene root -> Armature -> skinned body mesh."""
    vertices = np.array(
        [[x, y, z] for x in (-0.3, 0.3) for y in (0.0, 1.8) for z in (-0.15, 0.15)],
        dtype=np.float32,
    )
    material = Material('Body', {'map': 'body_diffuse.png'} if textured else {})
    mesh = SkinnedMesh('Body', vertices=vertices, skeleton=skeleton, materials=[material])

    root = SceneNode(name)
    root.add(SceneNode('Armature')).add(mesh)

    animations = []
    if animated:
        times = np.linspace(0.0, 1.0, 31, dtype=np.float32)
        tracks = [
            Track(f'{bone.name}.quaternion', times, np.tile([1.0, 0.0, 0.0, 0.0], (31, 1)))
            for bone in skeleton
        ]
        tracks.append(Track(f'{PREFIX}Hips.position', times, np.zeros((31, 3))))
        animations.append(AnimationClip('Walking', tracks, duration=1.0))

    return CharacterAsset(root, animations=animations, name=name)


# =============================================================================
# 3. Pipeline Steps
# =============================================================================

def inspect_mapping(asset):
    """Show what the mapper would do without touching the asset."""
    print("\n" + "=" * 60)
    print("Bone Classification")
    print("=" * 60)

    mapper = BoneMapper()
    result = mapper.classify(asset.skeleton)
    stats = mapper.mapping_statistics(result)

    print(f"  Mapped: {stats.mapped}/{stats.total} ({stats.success_rate:.1f}%)")
    for original, canonical in list(result.mapping.items())[:8]:
        print(f"    {original} -> {canonical}")
    print(f"    ... and {max(len(result.mapping) - 8, 0)} more")

    print(f"\n  Collisions: {len(result.collisions)}")
    for original, canonical in result.collisions[:5]:
        print(f"    {original} lost '{canonical}'")

    print(f"\n  Unmapped: {len(result.unmapped)}")


def run_normalization(asset, config):
    """Validate, rename bones and tracks, and print the outcome."""
    print("\n" + "=" * 60)
    print("Normalization")
    print("=" * 60)

    result = normalize_character(asset, config=config)
    print(format_report_text(result.report, asset.name))

    if result.bone_validation is None:
        print("\n  Asset rejected, nothing renamed")
        return result

    stats = result.statistics
    print(f"\n  Applied mappings: {len(result.applied)}")
    print(f"  Tracks updated: {result.tracks_updated}")
    print(f"  Standard bones: {stats.standard_bones}/{stats.total_bones} "
          f"({stats.standard_percentage:.1f}%)")
    if result.bone_validation.is_valid:
        print("  Required bones: all present")
    else:
        print(f"  Required bones missing: {', '.join(result.bone_validation.missing_bones)}")

    clip = asset.find_animation('Walking')
    print(f"\n  Sample tracks: {[t.name for t in clip.tracks[:3]]}")
    print("\n" + "\n".join(format_bone_hierarchy(asset.skeleton).splitlines()[:8]))

    return result


def main():
    logging.basicConfig(level=logging.WARNING, format='%(levelname)s %(name)s: %(message)s')
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    config = NormalizerConfig()
    save_config(config, str(OUTPUT_DIR / "01_config.json"))

    # Phase 1: A complete character
    skeleton = Skeleton.from_joint_tree(build_joint_tree())
    character = build_character(skeleton)
    inspect_mapping(character)
    result = run_normalization(character, config)

    html_path = OUTPUT_DIR / "01_report.html"
    html_path.write_text(format_report_html(result.report))

    # Phase 2: A broken export
    print("\n" + "=" * 60)
    print("Broken Asset")
    print("=" * 60)
    stub = Skeleton([Bone(f'{PREFIX}{name}') for name, _ in BODY[:5]])
    broken = build_character(stub, textured=False, animated=False, name='stub')
    print(format_report_text(validate_asset(broken, config), broken.name))
    run_normalization(broken, config)

    print("\n" + "=" * 60)
    print("Pipeline Complete!")
    print("=" * 60)
    print(f"\nOutput files saved to: {OUTPUT_DIR}")
    for f in sorted(OUTPUT_DIR.glob("01_*")):
        print(f"  - {f.name}")


if __name__ == "__main__":
    main()
