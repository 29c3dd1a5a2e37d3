"""
Transform helpers for scene nodes.

Local transforms are stored as translation, quaternion [w, x, y, z] and
scale, and composed as T @ R @ S. Matrix construction and point transforms
go through trimesh.transformations.
"""

from typing import Optional, Sequence, Tuple
import numpy as np
from trimesh import transformations as tf


def compose_trs(
    translation: Sequence[float],
    rotation: Sequence[float],
    scale: Sequence[float]
) -> np.ndarray:
    """
    Build a 4x4 local matrix from TRS components.

    Args:
        translation: (3,) translation
        rotation: (4,) quaternion [w, x, y, z]
        scale: (3,) per-axis scale

    Returns:
        (4, 4) float64 matrix, T @ R @ S
    """
    T = tf.translation_matrix(np.asarray(translation, dtype=np.float64))
    R = tf.quaternion_matrix(np.asarray(rotation, dtype=np.float64))
    S = np.diag([scale[0], scale[1], scale[2], 1.0]).astype(np.float64)
    return tf.concatenate_matrices(T, R, S)


def chain_matrices(matrices: Sequence[np.ndarray]) -> np.ndarray:
    """Multiply local matrices ordered root first into one world matrix."""
    if not matrices:
        return np.eye(4)
    return tf.concatenate_matrices(*matrices)


def compute_world_bounds(
    vertices: np.ndarray,
    matrix: Optional[np.ndarray] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Axis-aligned bounds of vertices after applying a world matrix.

    Args:
        vertices: (V, 3) vertex positions
        matrix: Optional (4, 4) world matrix

    Returns:
        min_bound: (3,) minimum corner
        max_bound: (3,) maximum corner

    An empty vertex array has zero-size bounds at the origin.
    """
    vertices = np.asarray(vertices, dtype=np.float64).reshape(-1, 3)
    if len(vertices) == 0:
        zero = np.zeros(3)
        return zero, zero.copy()

    if matrix is not None and not np.allclose(matrix, np.eye(4)):
        vertices = tf.transform_points(vertices, matrix)

    return vertices.min(axis=0), vertices.max(axis=0)
