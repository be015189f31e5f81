"""Convex colliders: axis-aligned boxes and planar quads."""

from __future__ import annotations

import abc
import enum
from typing import Iterable, List, Tuple

import numpy as np

Edge = Tuple[np.ndarray, np.ndarray]
Face = Tuple[np.ndarray, float]

_CORNER_SIGNS = np.array(
    [
        (-1, -1, -1),
        (1, -1, -1),
        (1, -1, 1),
        (-1, -1, 1),
        (-1, 1, -1),
        (1, 1, -1),
        (1, 1, 1),
        (-1, 1, 1),
    ],
    dtype=float,
)

_BOX_EDGES = (
    (0, 1), (0, 3), (0, 4), (1, 2), (1, 5), (2, 3),
    (2, 6), (3, 7), (4, 5), (4, 7), (5, 6), (6, 7),
)

# For each axis: the corner lying on the positive face, then on the negative face.
_BOX_FACE_CORNERS = ((1, 0), (4, 0), (2, 0))


def _vec(value) -> np.ndarray:
    arr = np.array(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr


class ColliderType(enum.Enum):
    """Runtime shape tag of a collider."""

    BOX = enum.auto()
    PLANE = enum.auto()


class DynamicType(enum.Enum):
    """How a collider is treated during collision handling."""

    STATIC = enum.auto()
    DYNAMIC = enum.auto()
    WITH_PHYSICS = enum.auto()


class Collider(abc.ABC):
    """A convex shape described by its corner points, edges and face planes.

    Faces are (unit normal, distance) pairs with ``normal @ x == distance`` on the plane;
    ``points_on_faces[i]`` is a point lying on ``faces[i]``.
    """

    def __init__(self, entity_id: int, center, collider_type: ColliderType, dynamic_type: DynamicType):
        self.entity_id = entity_id
        self.center = _vec(center)
        self.collider_type = ColliderType(collider_type)
        self.dynamic_type = DynamicType(dynamic_type)
        self.row = 0
        self.col = 0
        self.points: List[np.ndarray] = []
        self.points_on_faces: List[np.ndarray] = []
        self.faces: List[Face] = []
        self.edges: List[Edge] = []

    @abc.abstractmethod
    def compute_derived_data(self) -> None:
        """Recompute points, edges and faces from the collider's defining data."""

    @abc.abstractmethod
    def update(self, translation) -> None:
        """Move the collider by ``translation`` and refresh its derived data."""


class AABB(Collider):
    """Axis-aligned box given by its center and half extents along each axis."""

    def __init__(
        self,
        entity_id: int,
        center,
        collider_type: ColliderType,
        dynamic_type: DynamicType,
        axis_radii,
    ):
        super().__init__(entity_id, center, collider_type, dynamic_type)
        self.axis_radii = _vec(axis_radii)
        self.compute_derived_data()

    def compute_derived_data(self) -> None:
        self.points = [self.center + signs * self.axis_radii for signs in _CORNER_SIGNS]
        self.edges = [(self.points[a].copy(), self.points[b].copy()) for a, b in _BOX_EDGES]

        self.faces = []
        self.points_on_faces = []
        for axis, (pos, neg) in zip(np.eye(3), _BOX_FACE_CORNERS):
            self.faces.append((axis.copy(), float(axis @ self.points[pos])))
            self.faces.append((-axis, float(-axis @ self.points[neg])))
            self.points_on_faces.append(self.points[pos].copy())
            self.points_on_faces.append(self.points[neg].copy())

    def update(self, translation) -> None:
        self.center = self.center + _vec(translation)
        self.compute_derived_data()


class Plane(Collider):
    """Planar quad given by four corner points in winding order."""

    def __init__(
        self,
        entity_id: int,
        center,
        collider_type: ColliderType,
        dynamic_type: DynamicType,
        points: Iterable,
    ):
        super().__init__(entity_id, center, collider_type, dynamic_type)
        self.points = [_vec(p) for p in points]
        if len(self.points) < 4:
            raise ValueError(f"a plane needs four corner points, got {len(self.points)}")
        self.compute_derived_data()

    def compute_derived_data(self) -> None:
        first, second, third, fourth = self.points[:4]
        normal = np.cross(second - first, third - first)
        length = np.linalg.norm(normal)
        if length == 0.0:
            raise ValueError("plane corner points are collinear")
        normal = normal / length

        self.points_on_faces = [first.copy()]
        self.faces = [(normal, float(first @ normal))]
        corners = (first, second, third, fourth)
        self.edges = [
            (start.copy(), end.copy()) for start, end in zip(corners, corners[1:] + corners[:1])
        ]

    def update(self, translation) -> None:
        shift = _vec(translation)
        self.center = self.center + shift
        self.points = [p + shift for p in self.points]
        self.compute_derived_data()