"""
In-memory asset model.

These are the structures an external loader hands over after parsing a
rigged character file:

- SceneNode / Bone / SkinnedMesh: the traversable scene graph
- Skeleton: ordered bone list of one skinned mesh
- Material: texture slots of a mesh material
- Track / AnimationClip: named, time-sampled animation curves
- CharacterAsset: the scene root plus its animation clips

Bone and track names are plain mutable attributes. The mapper rewrites them
in place and never touches structure (parents, children, ordering).
"""

from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple
import logging
import numpy as np

from .constants import (
    IDENTITY_QUATERNION,
    NODE_BONE,
    NODE_OBJECT,
    NODE_SKINNED_MESH,
    TRACK_SEPARATOR,
)
from ..utils.transforms import chain_matrices, compose_trs

logger = logging.getLogger(__name__)


# =============================================================================
# Scene Graph
# =============================================================================

class SceneNode:
    """
    Node in the asset scene graph with a local TRS transform.
    """

    node_type: str = NODE_OBJECT

    def __init__(
        self,
        name: str = '',
        position: Optional[Sequence[float]] = None,
        rotation: Optional[Sequence[float]] = None,
        scale: Optional[Sequence[float]] = None,
    ):
        """
        Args:
            name: Node name
            position: Local translation (3,)
            rotation: Local rotation quaternion [w, x, y, z] (4,)
            scale: Local scale (3,)
        """
        self.name = name
        self.position = np.asarray(
            position if position is not None else (0.0, 0.0, 0.0), dtype=np.float32
        )
        self.rotation = np.asarray(
            rotation if rotation is not None else IDENTITY_QUATERNION, dtype=np.float32
        )
        self.scale = np.asarray(
            scale if scale is not None else (1.0, 1.0, 1.0), dtype=np.float32
        )
        self.parent: Optional['SceneNode'] = None
        self.children: List['SceneNode'] = []

    def add(self, child: 'SceneNode') -> 'SceneNode':
        """Attach child to this node, detaching it from any previous parent."""
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def traverse(self) -> Iterator['SceneNode']:
        """Depth-first pre-order walk starting at this node."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    @property
    def is_skinned_mesh(self) -> bool:
        return self.node_type == NODE_SKINNED_MESH

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def local_matrix(self) -> np.ndarray:
        return compose_trs(self.position, self.rotation, self.scale)

    def world_matrix(self) -> np.ndarray:
        """Compose local matrices from the root down to this node."""
        chain = []
        node: Optional[SceneNode] = self
        while node is not None:
            chain.append(node.local_matrix())
            node = node.parent
        return chain_matrices(chain[::-1])

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class Bone(SceneNode):
    """Single articulated joint."""

    node_type = NODE_BONE


class Skeleton:
    """
    Ordered bone collection of one skinned mesh.

    Bone order comes from the source asset and is kept stable: skin weights
    refer to bones by index.
    """

    def __init__(self, bones: Optional[Sequence[Bone]] = None):
        self.bones: List[Bone] = list(bones) if bones is not None else []

    def __len__(self) -> int:
        return len(self.bones)

    def __iter__(self) -> Iterator[Bone]:
        return iter(self.bones)

    @property
    def bone_names(self) -> List[str]:
        return [bone.name for bone in self.bones]

    @property
    def root_bones(self) -> List[Bone]:
        """Bones whose parent is not itself a bone of this skeleton."""
        members = {id(bone) for bone in self.bones}
        return [b for b in self.bones if b.parent is None or id(b.parent) not in members]

    def get_bone_by_name(self, name: str) -> Optional[Bone]:
        """Return the first bone whose name equals `name` exactly."""
        for bone in self.bones:
            if bone.name == name:
                return bone
        return None

    @classmethod
    def from_joint_tree(cls, joint_tree: Dict[str, Dict[str, Any]]) -> 'Skeleton':
        """
        Build a skeleton from a joint-tree dictionary.

        Args:
            joint_tree: Hierarchical definition of joints, in bone order
                {
                    'Hips': {
                        'parent': None,
                        'rest_translation': [0, 1, 0],
                        'rest_rotation': [1, 0, 0, 0],
                    },
                    'Spine': {'parent': 'Hips', 'rest_translation': [0, 0.1, 0]},
                    ...
                }

        Returns:
            Skeleton with parent/child links set
        """
        bones: Dict[str, Bone] = {}
        for name, spec in joint_tree.items():
            bones[name] = Bone(
                name,
                position=spec.get('translation', spec.get('rest_translation')),
                rotation=spec.get('quaternion', spec.get('rest_rotation')),
                scale=spec.get('scale'),
            )

        for name, spec in joint_tree.items():
            parent_name = spec.get('parent')
            if parent_name is not None:
                bones[parent_name].add(bones[name])

        return cls(list(bones.values()))


class Material:
    """Mesh material with named texture slots (e.g. 'map', 'normal_map')."""

    def __init__(self, name: str = '', maps: Optional[Dict[str, Any]] = None):
        self.name = name
        self.maps: Dict[str, Any] = dict(maps) if maps else {}

    @property
    def has_textures(self) -> bool:
        return any(texture is not None for texture in self.maps.values())


class SkinnedMesh(SceneNode):
    """
    Mesh bound to a skeleton.

    The skeleton may be None for meshes exported without a rig.
    """

    node_type = NODE_SKINNED_MESH

    def __init__(
        self,
        name: str = '',
        vertices: Optional[np.ndarray] = None,
        faces: Optional[np.ndarray] = None,
        skeleton: Optional[Skeleton] = None,
        materials: Optional[Sequence[Material]] = None,
        **transform
    ):
        """
        Args:
            name: Node name
            vertices: (V, 3) bind-pose vertex positions
            faces: (F, 3) triangle indices or None
            skeleton: Bound skeleton or None
            materials: Materials used by the mesh
            **transform: position / rotation / scale forwarded to SceneNode
        """
        super().__init__(name, **transform)
        self.vertices = (
            np.asarray(vertices, dtype=np.float32).reshape(-1, 3)
            if vertices is not None else np.zeros((0, 3), dtype=np.float32)
        )
        self.faces = np.asarray(faces, dtype=np.int32) if faces is not None else None
        self.skeleton = skeleton
        self.materials: List[Material] = list(materials) if materials else []


# =============================================================================
# Animation
# =============================================================================

class Track:
    """
    Animation curve bound to one bone channel.

    The name has the form '<BoneName>.<channel>'. Times and values are opaque
    to rignorm and never inspected.
    """

    def __init__(
        self,
        name: str,
        times: Optional[np.ndarray] = None,
        values: Optional[np.ndarray] = None
    ):
        self.name = name
        self.times = np.asarray(times if times is not None else [], dtype=np.float32)
        self.values = np.asarray(values if values is not None else [], dtype=np.float32)

    def split_name(self) -> Optional[Tuple[str, str]]:
        """
        Split the name at the first separator.

        Returns:
            (bone_name, suffix) with the suffix including its separator,
            or None when the name has no separator.
        """
        index = self.name.find(TRACK_SEPARATOR)
        if index == -1:
            return None
        return self.name[:index], self.name[index:]

    @property
    def bone_name(self) -> Optional[str]:
        parts = self.split_name()
        return parts[0] if parts else None

    @property
    def channel(self) -> Optional[str]:
        parts = self.split_name()
        return parts[1][len(TRACK_SEPARATOR):] if parts else None

    def __repr__(self) -> str:
        return f"Track(name={self.name!r})"


class AnimationClip:
    """Named collection of tracks."""

    def __init__(
        self,
        name: str,
        tracks: Optional[Sequence[Track]] = None,
        duration: float = 0.0
    ):
        self.name = name
        self.tracks: List[Track] = list(tracks) if tracks is not None else []
        self.duration = duration

    def __repr__(self) -> str:
        return f"AnimationClip(name={self.name!r}, tracks={len(self.tracks)})"


# =============================================================================
# Character Asset
# =============================================================================

class CharacterAsset:
    """
    Loaded character: scene graph root plus animation clips.
    """

    def __init__(
        self,
        root: SceneNode,
        animations: Optional[Sequence[AnimationClip]] = None,
        name: str = ''
    ):
        self.root = root
        self.animations: List[AnimationClip] = list(animations) if animations else []
        self.name = name or root.name

    @property
    def skinned_mesh(self) -> Optional[SkinnedMesh]:
        """First skinned mesh in depth-first order, or None."""
        for node in self.root.traverse():
            if node.is_skinned_mesh:
                return node
        return None

    @property
    def skeleton(self) -> Optional[Skeleton]:
        mesh = self.skinned_mesh
        return mesh.skeleton if mesh is not None else None

    @property
    def animation_names(self) -> List[str]:
        return [clip.name for clip in self.animations]

    def find_animation(self, name: str) -> AnimationClip:
        """
        Look up a clip by exact name.

        Raises:
            KeyError: If no clip carries that name
        """
        for clip in self.animations:
            if clip.name == name:
                return clip
        available = ', '.join(self.animation_names)
        raise KeyError(f"Animation '{name}' not found. Available: [{available}]")

    def add_animations(self, clips: Sequence[AnimationClip], name: str) -> int:
        """
        Append clips loaded from a separate animation file under one name.

        Returns:
            Number of clips added
        """
        if not clips:
            logger.warning(f"No animations to add for '{name}'")
            return 0
        for clip in clips:
            clip.name = name
            self.animations.append(clip)
        return len(clips)

    def bone_info(self) -> List[Tuple[str, np.ndarray]]:
        """(name, local position) per bone, for debugging."""
        skeleton = self.skeleton
        if skeleton is None:
            return []
        return [(bone.name, bone.position.copy()) for bone in skeleton.bones]
