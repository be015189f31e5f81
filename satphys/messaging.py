"""Messages exchanged between systems and the payloads they carry."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union


class MessageType(enum.IntEnum):
    """Kind of a message, which decides the type of its payload."""

    MOVE = 0
    MOUSE_MOVE = 1


@dataclass
class MoveData:
    """Directional movement request; the first set flag wins."""

    forward: bool = False
    backward: bool = False
    left: bool = False
    right: bool = False


@dataclass
class MouseMoveData:
    """Relative mouse motion since the previous frame."""

    delta_x: float = 0.0
    delta_y: float = 0.0


Payload = Union[MoveData, MouseMoveData, None]


@dataclass
class Message:
    """A message sent by one entity to another, or to everyone when the receiver is 0."""

    sender_id: int
    receiver_id: int
    type: MessageType
    data: Payload = None

    def is_broadcast(self) -> bool:
        """Whether the message is addressed to every entity."""
        return self.receiver_id == 0