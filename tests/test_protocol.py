import socket

import pytest

from sketchquiz.protocol import (
    AnswerPacket,
    CommonPacket,
    ConnectionClosed,
    CorrectPacket,
    DrawPacket,
    MessageType,
    PlayerCntPacket,
    PlayerNumPacket,
    SelectedPlayerPacket,
    WrongPacket,
    pack_int,
    pack_string,
    recv_exact,
    recv_int,
    recv_string,
)


@pytest.fixture
def pair():
    left, right = socket.socketpair()
    left.settimeout(5)
    right.settimeout(5)
    yield left, right
    left.close()
    right.close()


def test_pack_int_is_little_endian():
    assert pack_int(1) == b"\x01\x00\x00\x00"
    assert pack_int(-1) == b"\xff\xff\xff\xff"


def test_pack_string_has_length_prefix():
    assert pack_string("ab") == b"\x02\x00\x00\x00ab"


def test_pack_empty_string_is_only_length():
    assert pack_string("") == pack_int(0)


def test_int_round_trip(pair):
    left, right = pair
    left.sendall(pack_int(-12345) + pack_int(MessageType.DRAW))
    assert recv_int(right) == -12345
    assert recv_int(right) == MessageType.DRAW


def test_string_round_trip_unicode(pair):
    left, right = pair
    left.sendall(pack_string("사과") + pack_string(""))
    assert recv_string(right) == "사과"
    assert recv_string(right) == ""


def test_recv_exact_collects_chunks(pair):
    left, right = pair
    left.sendall(b"abc")
    left.sendall(b"def")
    assert recv_exact(right, 6) == b"abcdef"


def test_recv_exact_raises_on_early_close(pair):
    left, right = pair
    left.sendall(b"ab")
    left.close()
    with pytest.raises(ConnectionClosed):
        recv_exact(right, 4)


def test_draw_packet_round_trip(pair):
    left, right = pair
    packet = DrawPacket(x=10, y=-7, color=3, thick=2, draw_status=1)
    data = packet.pack()
    assert len(data) == 6 * len(pack_int(0))
    assert DrawPacket.from_bytes(data) == packet
    left.sendall(data)
    assert DrawPacket.recv(right) == packet


def test_draw_packet_starts_with_type():
    assert DrawPacket(x=5).pack().startswith(pack_int(MessageType.DRAW))


def test_draw_packet_from_bytes_rejects_bad_length():
    with pytest.raises(ValueError):
        DrawPacket.from_bytes(b"\x00" * 5)


def test_answer_packet_round_trip(pair):
    left, right = pair
    packet = AnswerPacket(nickname="player1", answer="사과")
    left.sendall(packet.pack())
    received = AnswerPacket.recv(right)
    assert received == packet
    assert received.type == MessageType.ANSWER


def test_correct_packet_round_trip(pair):
    left, right = pair
    left.sendall(CorrectPacket(nickname="player2").pack())
    assert CorrectPacket.recv(right) == CorrectPacket(nickname="player2")


def test_wrong_packet_carries_message_only(pair):
    left, right = pair
    packet = WrongPacket(message="nope", nickname="player3")
    assert packet.pack() == pack_int(MessageType.WRONG) + pack_string("nope")
    left.sendall(packet.pack())
    received = WrongPacket.recv(right)
    assert received.message == "nope"
    assert received.nickname == ""


def test_common_packet_layout():
    packet = CommonPacket(type=MessageType.CORRECT, nickname="player1", message="사과")
    assert packet.pack() == (
        pack_int(MessageType.CORRECT) + pack_string("player1") + pack_string("사과")
    )


def test_player_num_packet_round_trip():
    packet = PlayerNumPacket(player_num=4)
    restored = PlayerNumPacket.from_bytes(packet.pack())
    assert restored == packet
    assert restored.type == MessageType.PLAYER_NUM


def test_player_cnt_packet_round_trip():
    packet = PlayerCntPacket(current_player_cnt=2, max_player=3)
    restored = PlayerCntPacket.from_bytes(packet.pack())
    assert restored == packet
    assert restored.type == MessageType.PLAYER_CNT


def test_fixed_packets_reject_bad_length():
    with pytest.raises(ValueError):
        PlayerNumPacket.from_bytes(b"\x00")
    with pytest.raises(ValueError):
        PlayerCntPacket.from_bytes(PlayerNumPacket().pack())


def test_selected_player_packet_layout():
    packet = SelectedPlayerPacket(nickname="player2")
    assert packet.pack() == pack_int(MessageType.SELECTED_PLAYER) + pack_string("player2")