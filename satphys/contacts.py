"""Contact points and the collisions that group them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .colliders import Collider


@dataclass(eq=False)
class Contact:
    """A single point of contact between two colliders."""

    contact_point: np.ndarray
    contact_normal: np.ndarray
    penetration: float

    def __post_init__(self) -> None:
        self.contact_point = np.array(self.contact_point, dtype=float)
        self.contact_normal = np.array(self.contact_normal, dtype=float)
        self.penetration = float(self.penetration)


@dataclass(eq=False)
class Collision:
    """A collision between two colliders, made of one or more contacts."""

    first: int
    first_collider: Collider
    second: int
    second_collider: Collider
    contacts: List[Contact] = field(default_factory=list)