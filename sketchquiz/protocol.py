"""Wire format shared by the quiz server and its clients.

Integers travel as 32-bit little-endian values. Strings travel as a 32-bit
unsigned length followed by that many UTF-8 bytes.
"""

from __future__ import annotations

import socket
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

SERVER_IP = "192.168.10.2"
SERVER_PORT = 25000
MAX_CLIENTS = 10
MSG_SET_MAX_PLAYER = 9999
MSG_REJECTED = 4004

_INT = struct.Struct("<i")
_LENGTH = struct.Struct("<I")


class MessageType(IntEnum):
    """Message identifiers carried in the first integer of every packet."""

    DRAW = 1
    CLEAR = 2
    PING = 3
    ANSWER = 4
    CORRECT = 5
    WRONG = 6
    PLAYER_NUM = 7
    DISCONNECT = 8
    PLAYER_CNT = 9
    SELECTED_PLAYER = 10


class ConnectionClosed(ConnectionError):
    """The peer closed the connection before a whole message arrived."""


def pack_int(value: int) -> bytes:
    """Encode one 32-bit signed integer."""
    return _INT.pack(int(value))


def pack_string(text: str) -> bytes:
    """Encode a string as its byte length followed by its UTF-8 bytes."""
    data = text.encode("utf-8")
    return _LENGTH.pack(len(data)) + data


def recv_exact(sock: socket.socket, size: int) -> bytes:
    """Read exactly ``size`` bytes, raising ConnectionClosed on early EOF."""
    buffer = bytearray()
    while len(buffer) < size:
        chunk = sock.recv(size - len(buffer))
        if not chunk:
            raise ConnectionClosed(f"expected {size} bytes, received {len(buffer)}")
        buffer += chunk
    return bytes(buffer)


def recv_int(sock: socket.socket) -> int:
    """Read one 32-bit signed integer."""
    return _INT.unpack(recv_exact(sock, _INT.size))[0]


def recv_string(sock: socket.socket) -> str:
    """Read one length-prefixed string."""
    (length,) = _LENGTH.unpack(recv_exact(sock, _LENGTH.size))
    if length == 0:
        return ""
    return recv_exact(sock, length).decode("utf-8", errors="replace")


@dataclass
class DrawPacket:
    """A stroke point; sent as six fixed-size integers."""

    type: int = MessageType.DRAW
    x: int = 0
    y: int = 0
    color: int = 0
    thick: int = 0
    draw_status: int = 0

    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<6i")

    def pack(self) -> bytes:
        return self._FORMAT.pack(
            self.type, self.x, self.y, self.color, self.thick, self.draw_status
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> DrawPacket:
        if len(data) != cls._FORMAT.size:
            raise ValueError(
                f"draw packet needs {cls._FORMAT.size} bytes, got {len(data)}"
            )
        return cls(*cls._FORMAT.unpack(data))

    @classmethod
    def recv(cls, sock: socket.socket) -> DrawPacket:
        return cls.from_bytes(recv_exact(sock, cls._FORMAT.size))


@dataclass
class AnswerPacket:
    """A guess sent by a player."""

    type: int = MessageType.ANSWER
    nickname: str = ""
    answer: str = ""

    def pack(self) -> bytes:
        return pack_int(self.type) + pack_string(self.nickname) + pack_string(self.answer)

    @classmethod
    def recv(cls, sock: socket.socket) -> AnswerPacket:
        packet_type = recv_int(sock)
        nickname = recv_string(sock)
        answer = recv_string(sock)
        return cls(packet_type, nickname, answer)


@dataclass
class CorrectPacket:
    """Announces the player who guessed the word."""

    type: int = MessageType.CORRECT
    nickname: str = ""

    def pack(self) -> bytes:
        return pack_int(self.type) + pack_string(self.nickname)

    @classmethod
    def recv(cls, sock: socket.socket) -> CorrectPacket:
        packet_type = recv_int(sock)
        return cls(packet_type, recv_string(sock))


@dataclass
class WrongPacket:
    """Reports a wrong guess; only the message travels on the wire."""

    type: int = MessageType.WRONG
    message: str = ""
    nickname: str = ""

    def pack(self) -> bytes:
        return pack_int(self.type) + pack_string(self.message)

    @classmethod
    def recv(cls, sock: socket.socket) -> WrongPacket:
        packet_type = recv_int(sock)
        return cls(packet_type, recv_string(sock))


@dataclass
class CommonPacket:
    """A typed message carrying a nickname and a text."""

    type: int = 0
    nickname: str = ""
    message: str = ""

    def pack(self) -> bytes:
        return pack_int(self.type) + pack_string(self.nickname) + pack_string(self.message)


@dataclass
class PlayerNumPacket:
    """Tells a client which player number it was given."""

    type: int = MessageType.PLAYER_NUM
    player_num: int = 0

    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<2i")

    def pack(self) -> bytes:
        return self._FORMAT.pack(self.type, self.player_num)

    @classmethod
    def from_bytes(cls, data: bytes) -> PlayerNumPacket:
        if len(data) != cls._FORMAT.size:
            raise ValueError(
                f"player number packet needs {cls._FORMAT.size} bytes, got {len(data)}"
            )
        return cls(*cls._FORMAT.unpack(data))


@dataclass
class PlayerCntPacket:
    """Current and maximum number of players in the room."""

    type: int = MessageType.PLAYER_CNT
    current_player_cnt: int = 0
    max_player: int = 0

    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<3i")

    def pack(self) -> bytes:
        return self._FORMAT.pack(self.type, self.current_player_cnt, self.max_player)

    @classmethod
    def from_bytes(cls, data: bytes) -> PlayerCntPacket:
        if len(data) != cls._FORMAT.size:
            raise ValueError(
                f"player count packet needs {cls._FORMAT.size} bytes, got {len(data)}"
            )
        return cls(*cls._FORMAT.unpack(data))


@dataclass
class SelectedPlayerPacket:
    """Names the player chosen to draw."""

    type: int = MessageType.SELECTED_PLAYER
    nickname: str = ""

    def pack(self) -> bytes:
        return pack_int(self.type) + pack_string(self.nickname)