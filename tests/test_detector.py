import numpy as np
import pytest

from satphys.colliders import AABB, Collider, ColliderType, DynamicType, Plane
from satphys.detector import CollisionDetector, SATData


def _box(entity_id, center, radii, dynamic=DynamicType.DYNAMIC):
    return AABB(entity_id, center, ColliderType.BOX, dynamic, radii)


def _ground(entity_id=9, height=0.0):
    corners = [(-5, height, -5), (5, height, -5), (5, height, 5), (-5, height, 5)]
    return Plane(entity_id, (0, height, 0), ColliderType.PLANE, DynamicType.STATIC, corners)


class _Hollow(Collider):
    def compute_derived_data(self):
        pass

    def update(self, translation):
        self.center = self.center + np.asarray(translation, dtype=float)


@pytest.fixture
def detector():
    return CollisionDetector()


def test_sat_data_defaults():
    data = SATData()
    assert data.min_pen_depth == 10000.0
    assert data.min_edge_distance == 10000.0
    assert data.is_face_collision is False


def test_support_point_picks_farthest(detector):
    points = [(0, 0, 0), (3, 1, 0), (-2, 5, 0)]
    assert np.allclose(detector.support_point(points, (1, 0, 0)), (3, 1, 0))
    assert np.allclose(detector.support_point(points, (0, 1, 0)), (-2, 5, 0))


def test_support_point_tie_keeps_first(detector):
    points = [(1, 0, 0), (1, 2, 0)]
    assert np.allclose(detector.support_point(points, (1, 0, 0)), (1, 0, 0))


def test_support_point_empty_raises(detector):
    with pytest.raises(ValueError):
        detector.support_point([], (1, 0, 0))


def test_penetration_depth_overlap(detector):
    a = _box(1, (0, 0, 0), (1, 1, 1))
    b = _box(2, (1.5, 0, 0), (1, 1, 1))
    depth = detector.penetration_depth(a.points, b.points, (1, 0, 0))
    assert depth == pytest.approx(0.5)
    assert detector.penetration_depth(b.points, a.points, (1, 0, 0)) == pytest.approx(depth)
    assert detector.penetration_depth(a.points, b.points, (-1, 0, 0)) == pytest.approx(depth)


def test_penetration_depth_touching_counts_as_separated(detector):
    a = _box(1, (0, 0, 0), (1, 1, 1))
    b = _box(2, (2, 0, 0), (1, 1, 1))
    assert detector.penetration_depth(a.points, b.points, (1, 0, 0)) is None


def test_intersect_line_plane_hits_plane(detector):
    plane = ((0, 0, 1), 2.0)
    point = detector.intersect_line_plane((0, 0, 0), (0, 0, 4), plane)
    assert np.allclose(point, (0, 0, 2))
    assert float(np.array(plane[0]) @ point) == pytest.approx(plane[1])


def test_intersect_line_plane_misses_returns_zero(detector):
    plane = ((0, 0, 1), 2.0)
    assert np.allclose(detector.intersect_line_plane((1, 1, 3), (1, 1, 5), plane), np.zeros(3))
    assert np.allclose(detector.intersect_line_plane((1, 1, 0), (4, 1, 0), plane), np.zeros(3))


def test_project_point_onto_plane(detector):
    plane = ((0, 0, 1), 2.0)
    projected = detector.project_point_onto_plane((3, 4, 7), plane)
    assert np.allclose(projected, (3, 4, 2))
    again = detector.project_point_onto_plane(projected, plane)
    assert np.allclose(again, projected)


def test_clip_without_planes_returns_points(detector):
    points = [(0, 0, 0), (1, 0, 0), (1, 1, 0)]
    result = detector.clip(points, [])
    assert [tuple(p) for p in result] == [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0)]


def test_clip_keeps_only_points_behind_planes(detector):
    square = [(-5, 0, -5), (5, 0, -5), (5, 0, 5), (-5, 0, 5)]
    planes = [((1, 0, 0), 1.0), ((-1, 0, 0), 1.0)]
    result = detector.clip(square, planes)
    assert result
    for point in result:
        assert -1.0 - 1e-9 <= point[0] <= 1.0 + 1e-9


def test_clip_polygon_entirely_outside_is_empty(detector):
    points = [(3, 0, 0), (4, 0, 0), (4, 1, 0)]
    assert detector.clip(points, [((1, 0, 0), 1.0)]) == []


def test_contact_between_crossing_edges(detector):
    edge_a = ((-1, 0, 0), (1, 0, 0))
    edge_b = ((0.5, -1, 0), (0.5, 1, 0))
    assert np.allclose(detector.contact_between_edges(edge_a, edge_b), (0.5, 0, 0))


def test_contact_between_edges_is_symmetric(detector):
    edge_a = ((-1, 0, 0), (1, 0, 0))
    edge_b = ((0, -1, 1), (0, 1, 1))
    forward = detector.contact_between_edges(edge_a, edge_b)
    backward = detector.contact_between_edges(edge_b, edge_a)
    assert np.allclose(forward, backward)


def test_contact_between_parallel_edges_raises(detector):
    with pytest.raises(ValueError):
        detector.contact_between_edges(((0, 0, 0), (1, 0, 0)), ((0, 1, 0), (1, 1, 0)))


def test_min_distance_parallel_edges(detector):
    edge_a = ((0, 0, 0), (1, 0, 0))
    edge_b = ((0, 3, 0), (2, 3, 0))
    assert detector.min_distance_between_edges(edge_a, edge_b) == pytest.approx(3.0)


def test_min_distance_skew_edges(detector):
    edge_a = ((0, 0, 0), (1, 0, 0))
    edge_b = ((0, 0, 2), (0, 1, 2))
    assert abs(detector.min_distance_between_edges(edge_a, edge_b)) == pytest.approx(2.0)


def test_min_distance_zero_length_edge_raises(detector):
    with pytest.raises(ValueError):
        detector.min_distance_between_edges(((0, 0, 0), (0, 0, 0)), ((0, 1, 0), (1, 1, 0)))


def test_check_faces_detects_separation(detector):
    a = _box(1, (0, 0, 0), (1, 1, 1))
    b = _box(2, (5, 0, 0), (1, 1, 1))
    data = SATData()
    assert detector.check_faces(data, a.points, b.points, a.faces, a.points_on_faces, a, b, True) is True


def test_check_faces_records_facing_axis(detector):
    a = _box(1, (0, 0, 0), (1, 1, 1))
    b = _box(2, (1.5, 0, 0), (1, 2, 2))
    data = SATData()
    assert detector.check_faces(data, a.points, b.points, a.faces, a.points_on_faces, a, b, True) is False
    assert data.is_face_collision is True
    assert data.index_face_a is True
    assert float(data.collision_axis @ (b.center - a.center)) > 0.0
    assert data.min_pen_depth == pytest.approx(detector.penetration_depth(a.points, b.points, (1, 0, 0)))


def test_check_edges_detects_separation(detector):
    a = _box(1, (0, 0, 0), (1, 1, 1))
    b = _box(2, (0, 5, 0), (1, 1, 1))
    assert detector.check_edges(SATData(), a.points, b.points, a.edges, b.edges) is True


def test_check_edges_records_unit_axis(detector):
    a = _box(1, (0, 0, 0), (1, 1, 1))
    b = _box(2, (1.5, 0, 0), (1, 2, 2))
    data = SATData()
    assert detector.check_edges(data, a.points, b.points, a.edges, b.edges) is False
    assert data.is_face_collision is False
    assert np.linalg.norm(data.collision_axis) == pytest.approx(1.0)
    assert 0 <= data.index_edge_a < len(a.edges)
    assert 0 <= data.index_edge_b < len(b.edges)


def test_collide_separated_boxes_returns_none(detector):
    a = _box(1, (0, 0, 0), (1, 1, 1))
    b = _box(2, (5, 0, 0), (1, 1, 1))
    assert detector.collide(a, b) is None
    assert detector.check_collision(a, b) is None


def test_collide_overlapping_boxes(detector):
    a = _box(1, (0, 0, 0), (1, 1, 1))
    b = _box(2, (1.5, 0, 0), (1, 2, 2))
    collision = detector.check_collision(a, b)
    assert collision.first == a.entity_id
    assert collision.second == b.entity_id
    assert collision.first_collider is a
    assert collision.second_collider is b

    expected_depth = detector.penetration_depth(a.points, b.points, (1, 0, 0))
    expected_points = sorted(tuple(p) for p in a.points if p[0] > 0)
    assert sorted(tuple(c.contact_point) for c in collision.contacts) == expected_points
    for contact in collision.contacts:
        assert contact.penetration == pytest.approx(expected_depth)
        assert np.linalg.norm(contact.contact_normal) == pytest.approx(1.0)
        assert float(contact.contact_normal @ (a.center - b.center)) > 0.0


def test_collide_box_resting_on_plane(detector):
    box = _box(1, (0, 0.8, 0), (1, 1, 1))
    ground = _ground()
    collision = detector.collide(box, ground)
    assert collision.contacts
    expected_depth = detector.penetration_depth(box.points, ground.points, (0, 1, 0))
    for contact in collision.contacts:
        assert contact.penetration == pytest.approx(expected_depth)
        assert contact.contact_point[1] == pytest.approx(0.0)
        assert abs(contact.contact_point[0]) <= 1.0 + 1e-9
        assert abs(contact.contact_point[2]) <= 1.0 + 1e-9
        assert float(contact.contact_normal @ (box.center - ground.center)) > 0.0


def test_collide_box_above_plane_returns_none(detector):
    box = _box(1, (0, 3, 0), (1, 1, 1))
    assert detector.collide(box, _ground()) is None


def test_collide_without_geometry_raises(detector):
    hollow = _Hollow(3, (0, 0, 0), ColliderType.BOX, DynamicType.DYNAMIC)
    box = _box(1, (0, 0, 0), (1, 1, 1))
    with pytest.raises(ValueError):
        detector.collide(hollow, box)