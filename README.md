# satphys

Collision detection for convex shapes, built from these parts:

- **Colliders** (`satphys.colliders`): `AABB` is an axis-aligned box given by a
  center and half extents. `Plane` is a quad given by four corner points. Each
  collider computes its `points`, `edges`, `faces` and `points_on_faces`. A face
  is a pair of a unit normal and a distance. To move a collider, call
  `update(translation)`; the derived data is then computed again. `ColliderType`
  tags the shape. `DynamicType` (`STATIC`, `DYNAMIC`, `WITH_PHYSICS`) controls
  how the grid files the collider. `Plane` raises `ValueError` if it gets fewer
  than four points or if its corners are collinear.
- **Narrow phase** (`satphys.detector`): `CollisionDetector.check_collision`
  tests a pair of colliders with the separating axis theorem. It tries the cross
  products of edge pairs first and then the face normals of both shapes. If the
  shapes are apart it returns `None`. Otherwise it returns a `Collision`.
- **Geometry helpers**: the detector also exposes the helpers it uses:
  - `support_point`
  - `penetration_depth`
  - `clip` (Sutherland–Hodgman)
  - `intersect_line_plane`
  - `project_point_onto_plane`
  - `contact_between_edges`
  - `min_distance_between_edges`
- **Contacts** (`satphys.contacts`): a `Collision` holds both entity ids and
  both colliders. It also holds a list of `Contact`s. Each contact has a
  `contact_point`, a `contact_normal` and a `penetration` depth.
- **Broad phase** (`satphys.grid`): `Grid(grid_length, half_width)` covers
  `[0, grid_length]` on X and Z with square `Cell`s. Each cell keeps its
  colliders in two lists, dynamic and static. `check_collisions` tests each cell
  against itself and its neighbours from `eligible_cells`. It never tests a pair
  of two static colliders. If a collider's center falls outside the grid,
  `insert` raises `ValueError`.
- **Messaging** (`satphys.messaging`): a `Message` has a sender, a receiver, a
  `MessageType` and a payload, either `MoveData` or `MouseMoveData`.
  `is_broadcast()` is true when the receiver id is `0`.
- **Camera** (`satphys.camera`): `Camera` orbits a target at a fixed radius.
  - `handle_messages` turns mouse-move messages into yaw and pitch, with pitch
    clamped to ±89°.
  - `update(position)` places the camera around the target and aims it there.
  - `view_matrix()` returns a look-at matrix.
  - `projection_matrix` holds a 45° perspective.

All vectors are `numpy` arrays of three floats.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
import numpy as np

from satphys.colliders import AABB, ColliderType, DynamicType
from satphys.detector import CollisionDetector
from satphys.grid import Grid

a = AABB(1, np.array([5.0, 0.0, 5.0]), ColliderType.BOX, DynamicType.DYNAMIC,
         np.array([1.0, 1.0, 1.0]))
b = AABB(2, np.array([6.5, 0.0, 5.0]), ColliderType.BOX, DynamicType.STATIC,
         np.array([1.0, 1.0, 1.0]))

collision = CollisionDetector().check_collision(a, b)
if collision is not None:
    for contact in collision.contacts:
        print(contact.contact_point, contact.contact_normal, contact.penetration)

grid = Grid(100.0, 5.0)
grid.insert(a)
grid.insert(b)
for collision in grid.check_collisions():
    print(collision.first, collision.second)
```

## What it does not do

This is a library. It has no command, window or game loop. It also leaves out:

- **Rendering.** The camera computes matrices but draws nothing.
- **Rigid-body integration.** Velocities and positions are not stepped.
- **Collision response.** Contacts are reported, but no impulses are applied
  and overlaps are not separated.

To move colliders, call `update` on them yourself. If a collider leaves its
cell, call `Grid.remove` and then `Grid.insert` to re-file it.