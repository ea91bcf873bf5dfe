"""Quiz client: streams stroke points or submits an answer."""

from __future__ import annotations

import contextlib
import socket
import sys
import threading
from collections.abc import Callable, Iterator
from typing import TextIO

from sketchquiz.gpio_control import DEFAULT_DEVICE_PATH, gpio_led_correct, gpio_led_wrong
from sketchquiz.protocol import (
    SERVER_IP,
    SERVER_PORT,
    AnswerPacket,
    ConnectionClosed,
    CorrectPacket,
    DrawPacket,
    MessageType,
    WrongPacket,
)

_HEADER_SIZE = 4
_DISCARD_SIZE = 256


def _peek_type(sock: socket.socket) -> int:
    header = sock.recv(_HEADER_SIZE, socket.MSG_PEEK)
    if not header:
        raise ConnectionClosed("server closed the connection")
    return int.from_bytes(header.ljust(_HEADER_SIZE, b"\0"), "little", signed=True)


def _signal(action: Callable[[str], None], device_path: str) -> None:
    try:
        action(device_path)
    except OSError as exc:
        print(f"open {device_path}: {exc}", file=sys.stderr)


def draw_packets() -> Iterator[DrawPacket]:
    """Yield the endless sequence of demo stroke points."""
    x = y = 0
    while True:
        yield DrawPacket(x=x, y=y, color=(x + y) % 10, thick=1 + x % 5)
        x += 10
        y += 7


def receive_loop(
    sock: socket.socket,
    stop_event: threading.Event,
    out: TextIO | None = None,
    device_path: str = DEFAULT_DEVICE_PATH,
) -> None:
    """Print incoming messages until the connection ends, then set ``stop_event``."""
    if out is None:
        out = sys.stdout
    try:
        while True:
            msg_type = _peek_type(sock)
            if msg_type == MessageType.DRAW:
                draw = DrawPacket.recv(sock)
                print(
                    f"[DRAW] ({draw.x}, {draw.y}) color:{draw.color} thick:{draw.thick}",
                    file=out,
                )
            elif msg_type == MessageType.CORRECT:
                correct = CorrectPacket.recv(sock)
                print(f"[정답!] {correct.nickname}님이 정답을 맞혔습니다!", file=out)
                _signal(gpio_led_correct, device_path)
                stop_event.set()
            elif msg_type == MessageType.WRONG:
                wrong = WrongPacket.recv(sock)
                print(f"[오답] {wrong.message}", file=out, flush=True)
                _signal(gpio_led_wrong, device_path)
            else:
                sock.recv(_DISCARD_SIZE)
    except OSError:
        pass
    print("서버 연결 종료", file=out)
    stop_event.set()


def draw_loop(
    sock: socket.socket,
    stop_event: threading.Event,
    out: TextIO | None = None,
    interval: float = 1.0,
) -> None:
    """Send one stroke point per ``interval`` until ``stop_event`` is set."""
    if out is None:
        out = sys.stdout
    for packet in draw_packets():
        if stop_event.is_set():
            break
        try:
            sock.sendall(packet.pack())
        except OSError:
            break
        print(f"[좌표전송] ({packet.x}, {packet.y})", file=out)
        stop_event.wait(interval)
    print("[draw] 정지됨", file=out)


def run_client(
    mode: str, arg: str, host: str = SERVER_IP, port: int = SERVER_PORT
) -> None:
    """Connect to the server and run in ``draw`` or ``answer`` mode."""
    stop_event = threading.Event()
    with socket.create_connection((host, port)) as sock:
        receiver = threading.Thread(
            target=receive_loop, args=(sock, stop_event), daemon=True
        )
        receiver.start()
        try:
            if mode == "draw":
                draw_loop(sock, stop_event)
            elif mode == "answer":
                # The server assigns the nickname.
                sock.sendall(AnswerPacket(nickname="", answer=arg).pack())
                print(f"[정답전송] : {arg}", flush=True)
                stop_event.wait()
            else:
                print(f"Unknown mode: {mode}")
        finally:
            with contextlib.suppress(OSError):
                sock.shutdown(socket.SHUT_RDWR)


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 2:
        print("usage: client_app <mode:draw|answer> <answer_word>", file=sys.stderr)
        print("예시: ./client_app draw _", file=sys.stderr)
        print("예시: ./client_app answer 사과", file=sys.stderr)
        return 1
    try:
        run_client(argv[0], argv[1])
    except OSError as exc:
        print(f"connect: {exc}", file=sys.stderr)
        return 1
    return 0