import pytest

from satphys.messaging import Message, MessageType, MouseMoveData, MoveData


def test_message_type_values_match_wire_order():
    assert MessageType.MOVE == 0
    assert MessageType.MOUSE_MOVE == 1
    assert MessageType(0) is MessageType.MOVE


def test_receiver_zero_is_broadcast():
    message = Message(sender_id=3, receiver_id=0, type=MessageType.MOVE)
    assert message.is_broadcast() is True


@pytest.mark.parametrize("receiver", [1, 7, -2])
def test_nonzero_receiver_is_not_broadcast(receiver):
    message = Message(sender_id=3, receiver_id=receiver, type=MessageType.MOVE)
    assert message.is_broadcast() is False


def test_message_without_payload_defaults_to_none():
    message = Message(5, 6, MessageType.MOUSE_MOVE)
    assert message.data is None
    assert (message.sender_id, message.receiver_id) == (5, 6)


def test_message_carries_move_payload():
    payload = MoveData(forward=True)
    message = Message(1, 0, MessageType.MOVE, payload)
    assert message.data is payload
    assert message.data.forward is True
    assert not any((payload.backward, payload.left, payload.right))


def test_mouse_move_data_keeps_deltas():
    payload = MouseMoveData(delta_x=2.5, delta_y=-1.5)
    assert payload.delta_x == 2.5
    assert payload.delta_y == -1.5


def test_payloads_compare_by_value():
    assert MoveData(left=True) == MoveData(False, False, True, False)
    assert MouseMoveData(1.0, 2.0) == MouseMoveData(delta_x=1.0, delta_y=2.0)