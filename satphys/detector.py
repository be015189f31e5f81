"""Separating-axis collision detection between convex colliders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .colliders import Collider, Edge, Face
from .contacts import Collision, Contact

_INITIAL_DEPTH = 10000.0
_PARALLEL_EPSILON = 0.0005
_DEGENERATE_AXIS = 1e-9


def _vec(value) -> np.ndarray:
    arr = np.array(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr


def _geometry(collider: Collider):
    if not (collider.points and collider.points_on_faces and collider.faces and collider.edges):
        raise ValueError("collider has no derived geometry")
    return collider.points, collider.points_on_faces, collider.faces, collider.edges


@dataclass
class SATData:
    """Best candidate axis found so far while testing separating axes."""

    index_face: int = 0
    index_edge_a: Optional[int] = None
    index_edge_b: Optional[int] = None
    index_face_a: bool = False
    is_face_collision: bool = False
    min_pen_depth: float = _INITIAL_DEPTH
    min_edge_distance: float = _INITIAL_DEPTH
    collision_axis: Optional[np.ndarray] = None


class CollisionDetector:
    """Tests pairs of colliders for intersection and builds contact data."""

    def check_collision(self, first: Collider, second: Collider) -> Optional[Collision]:
        """Collision between the two colliders, or None when they are apart."""
        return self.collide(first, second)

    def collide(self, first: Collider, second: Collider) -> Optional[Collision]:
        """Run the separating-axis test and build the contacts of an overlap."""
        points_a, on_faces_a, faces_a, edges_a = _geometry(first)
        points_b, on_faces_b, faces_b, edges_b = _geometry(second)

        data = SATData()
        # Edges go first so that a face axis found later takes precedence.
        if self.check_edges(data, points_a, points_b, edges_a, edges_b):
            return None
        if self.check_faces(data, points_a, points_b, faces_a, on_faces_a, first, second, True):
            return None
        if self.check_faces(data, points_a, points_b, faces_b, on_faces_b, first, second, False):
            return None
        if data.collision_axis is None:
            return None

        axis = data.collision_axis
        if not data.is_face_collision:
            contact_points = [
                self.contact_between_edges(edges_a[data.index_edge_a], edges_b[data.index_edge_b])
            ]
            if float((second.center - first.center) @ axis) > 0.0:
                axis = -axis
        elif data.index_face_a:
            contact_points = self.collision_points(data, points_b, faces_a, on_faces_a)
            axis = -axis
        else:
            contact_points = self.collision_points(data, points_a, faces_b, on_faces_b)

        contacts = [Contact(point, axis, data.min_pen_depth) for point in contact_points]
        return Collision(first.entity_id, first, second.entity_id, second, contacts)

    def check_faces(
        self,
        data: SATData,
        points_a: Sequence[np.ndarray],
        points_b: Sequence[np.ndarray],
        faces: Sequence[Face],
        points_on_faces: Sequence[np.ndarray],
        first: Collider,
        second: Collider,
        is_face_a: bool,
    ) -> bool:
        """Test face normals as axes; True if one of them separates the shapes."""
        if is_face_a:
            center_dir = second.center - first.center
        else:
            center_dir = first.center - second.center

        for index, (normal, _distance) in enumerate(faces):
            normal = _vec(normal)
            depth = self.penetration_depth(points_a, points_b, normal)
            if depth is None:
                return True
            # Opposite faces of a box share an axis; keep the one facing the other shape.
            if depth <= data.min_pen_depth and float(center_dir @ normal) >= 0.0:
                data.index_face = index
                data.index_face_a = is_face_a
                data.is_face_collision = True
                data.collision_axis = normal
                data.min_pen_depth = depth
        return False

    def check_edges(
        self,
        data: SATData,
        points_a: Sequence[np.ndarray],
        points_b: Sequence[np.ndarray],
        edges_a: Sequence[Edge],
        edges_b: Sequence[Edge],
    ) -> bool:
        """Test cross products of edge pairs as axes; True if one separates the shapes."""
        for i, edge_a in enumerate(edges_a):
            dir_a = _vec(edge_a[1]) - _vec(edge_a[0])
            for j, edge_b in enumerate(edges_b):
                dir_b = _vec(edge_b[1]) - _vec(edge_b[0])
                cross = np.cross(dir_a, dir_b)
                length = float(np.linalg.norm(cross))
                if length < _DEGENERATE_AXIS:
                    continue
                axis = cross / length

                depth = self.penetration_depth(points_a, points_b, axis)
                if depth is None:
                    return True
                # Several edge pairs can share a depth; prefer the closest pair.
                distance = self.min_distance_between_edges(edge_a, edge_b)
                if depth <= data.min_pen_depth and distance < data.min_edge_distance:
                    data.index_edge_a = i
                    data.index_edge_b = j
                    data.is_face_collision = False
                    data.collision_axis = axis
                    data.min_pen_depth = depth
                    data.min_edge_distance = distance
        return False

    def collision_points(
        self,
        data: SATData,
        points: Sequence[np.ndarray],
        faces: Sequence[Face],
        points_on_faces: Sequence[np.ndarray],
    ) -> List[np.ndarray]:
        """Points clipped to the reference face's side planes that lie behind it."""
        axis = _vec(data.collision_axis)
        side_planes = [face for face in faces if float(_vec(face[0]) @ axis) == 0.0]
        clipped = self.clip(points, side_planes)
        reference = _vec(points_on_faces[data.index_face])
        return [point for point in clipped if float(axis @ (point - reference)) <= 0.0]

    def penetration_depth(self, points_a, points_b, direction) -> Optional[float]:
        """Overlap of both point sets projected on ``direction``, or None if it separates them."""
        direction = _vec(direction)
        min_a = float(direction @ self.support_point(points_a, -direction))
        max_a = float(direction @ self.support_point(points_a, direction))
        min_b = float(direction @ self.support_point(points_b, -direction))
        max_b = float(direction @ self.support_point(points_b, direction))
        if min_a >= max_b or max_a <= min_b:
            return None
        return min(max_b - min_a, max_a - min_b)

    def contact_between_edges(self, edge_a, edge_b) -> np.ndarray:
        """Midpoint between the closest points of the lines through two edges."""
        start_a, end_a = _vec(edge_a[0]), _vec(edge_a[1])
        start_b, end_b = _vec(edge_b[0]), _vec(edge_b[1])
        d1 = end_a - start_a
        d2 = end_b - start_b
        r = start_b - start_a
        normal = np.cross(d1, d2)
        normal1 = np.cross(d1, normal)
        normal2 = np.cross(d2, normal)
        denom1 = float(d1 @ normal2)
        denom2 = float(d2 @ normal1)
        if denom1 == 0.0 or denom2 == 0.0:
            raise ValueError("edges are parallel or degenerate")
        p1 = start_a + (float(r @ normal2) / denom1) * d1
        p2 = start_b + (float(-r @ normal1) / denom2) * d2
        return p1 + 0.5 * (p2 - p1)

    def min_distance_between_edges(self, edge_a, edge_b) -> float:
        """Distance between the lines through two edges; signed for skew lines."""
        start_a, end_a = _vec(edge_a[0]), _vec(edge_a[1])
        start_b, end_b = _vec(edge_b[0]), _vec(edge_b[1])
        len_a = float(np.linalg.norm(end_a - start_a))
        len_b = float(np.linalg.norm(end_b - start_b))
        if len_a == 0.0 or len_b == 0.0:
            raise ValueError("edge has zero length")
        d1 = (end_a - start_a) / len_a
        d2 = (end_b - start_b) / len_b
        r = start_a - start_b

        if abs(float(d1 @ d2) - 1.0) < _PARALLEL_EPSILON:
            r_length = float(np.linalg.norm(r))
            projection = float(r @ d2)
            return float(np.sqrt(max(r_length**2 - projection**2, 0.0)))
        return float(r @ np.cross(d1, d2))

    def intersect_line_plane(self, a, b, plane) -> np.ndarray:
        """Point where segment ``a``-``b`` crosses the plane, or the zero vector if it does not."""
        a, b = _vec(a), _vec(b)
        normal, distance = _vec(plane[0]), float(plane[1])
        ab = b - a
        denom = float(normal @ ab)
        if denom == 0.0:
            return np.zeros(3)
        t = (distance - float(normal @ a)) / denom
        if 0.0 <= t <= 1.0:
            return a + t * ab
        return np.zeros(3)

    def project_point_onto_plane(self, point, plane) -> np.ndarray:
        """Orthogonal projection of ``point`` onto the plane."""
        point = _vec(point)
        normal, distance = _vec(plane[0]), float(plane[1])
        on_plane = normal * distance
        return point - float(normal @ (point - on_plane)) * normal

    def clip(self, points, planes) -> List[np.ndarray]:
        """Clip a polygon against planes, keeping the part behind each plane.

        The result may hold the same point more than once.
        """
        output = [_vec(p) for p in points]
        for normal, distance in planes:
            normal = _vec(normal)
            distance = float(distance)
            current, output = output, []
            for start, end in zip(current, current[1:] + current[:1]):
                if float(normal @ end) < distance:
                    if float(normal @ start) > distance:
                        output.append(self.intersect_line_plane(start, end, (normal, distance)))
                    output.append(end.copy())
                elif float(normal @ start) < distance:
                    output.append(self.intersect_line_plane(start, end, (normal, distance)))
        return output

    def support_point(self, points, direction) -> np.ndarray:
        """The first of the points farthest along ``direction``."""
        candidates = [_vec(p) for p in points]
        if not candidates:
            raise ValueError("support point of an empty point set")
        direction = _vec(direction)
        return max(candidates, key=lambda p: float(direction @ p)).copy()