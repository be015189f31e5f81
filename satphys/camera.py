"""Orbiting third-person camera following a target position."""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from .messaging import Message, MessageType

_PITCH_LIMIT = 89.0


def _vec(value) -> np.ndarray:
    arr = np.array(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr


def _normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def _perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection with clip-space depth in [-1, 1]."""
    f = 1.0 / math.tan(fovy / 2.0)
    result = np.zeros((4, 4))
    result[0, 0] = f / aspect
    result[1, 1] = f
    result[2, 2] = -(far + near) / (far - near)
    result[2, 3] = -(2.0 * far * near) / (far - near)
    result[3, 2] = -1.0
    return result


def _look_at(eye: np.ndarray, target: np.ndarray, up: np.ndarray) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``target``."""
    forward = _normalize(target - eye)
    side = _normalize(np.cross(forward, up))
    true_up = np.cross(side, forward)
    result = np.identity(4)
    result[0, :3] = side
    result[1, :3] = true_up
    result[2, :3] = -forward
    result[0, 3] = -side @ eye
    result[1, 3] = -true_up @ eye
    result[2, 3] = forward @ eye
    return result


class Camera:
    """Camera orbiting a target at a fixed radius, steered by yaw and pitch in degrees."""

    def __init__(self, position, direction, aspect_ratio: float):
        self.position = _vec(position)
        self.direction = _vec(direction)
        self.aspect_ratio = float(aspect_ratio)
        self.world_up = np.array([0.0, 1.0, 0.0])
        self.last_x = 0.0
        self.last_y = 0.0
        self.radius = 10
        self.yaw = 90.0
        self.pitch = 15.0
        self.sensitivity = 0.1
        self.right = _normalize(np.cross(self.direction, self.world_up))
        self.up = _normalize(np.cross(self.direction, self.right))
        self.projection_matrix = _perspective(math.radians(45.0), self.aspect_ratio, 0.01, 400.0)

    def view_matrix(self) -> np.ndarray:
        """View matrix for the current position, direction and up vector."""
        return _look_at(self.position, self.position + self.direction, self.up)

    def camera_offset(self) -> np.ndarray:
        """Offset of the camera from its target given by radius, yaw and pitch."""
        pitch = math.radians(self.pitch)
        yaw = math.radians(self.yaw)
        return np.array(
            [
                self.radius * math.cos(pitch) * math.cos(yaw),
                self.radius * math.sin(pitch),
                self.radius * math.cos(pitch) * math.sin(yaw),
            ]
        )

    def update(self, position) -> None:
        """Place the camera around ``position`` and aim it there."""
        target = _vec(position)
        self.position = target + self.camera_offset()
        self.direction = _normalize(target - self.position)
        self.right = _normalize(np.cross(self.direction, self.world_up))
        self.up = _normalize(np.cross(self.right, self.direction))

    def handle_messages(self, messages: Iterable[Message]) -> None:
        """Turn the camera by mouse-move messages; other messages are ignored."""
        for message in messages:
            if message.type is not MessageType.MOUSE_MOVE:
                continue
            data = message.data
            self.yaw += self.sensitivity * data.delta_x
            self.pitch += self.sensitivity * data.delta_y
            self.pitch = min(max(self.pitch, -_PITCH_LIMIT), _PITCH_LIMIT)