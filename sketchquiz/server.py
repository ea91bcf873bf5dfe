"""Quiz server: admits players, relays strokes and judges answers."""

from __future__ import annotations

import contextlib
import socket
import sys
import threading
import time
from dataclasses import dataclass

from sketchquiz.protocol import (
    MAX_CLIENTS,
    MSG_REJECTED,
    MSG_SET_MAX_PLAYER,
    SERVER_PORT,
    AnswerPacket,
    CommonPacket,
    ConnectionClosed,
    DrawPacket,
    MessageType,
    PlayerCntPacket,
    PlayerNumPacket,
    SelectedPlayerPacket,
    pack_int,
    recv_exact,
    recv_int,
)

DEFAULT_MAX_PLAYER = 2
REJECT_FLUSH_SECONDS = 0.1
_HEADER_SIZE = 4
_DISCARD_SIZE = 256
_ACCEPT_POLL_SECONDS = 0.2


@dataclass
class ClientInfo:
    """A player admitted to the room."""

    conn: socket.socket
    nickname: str


class GameServer:
    """Runs one drawing-quiz room with a fixed answer word.

    The listening socket is bound when the server is created.
    """

    def __init__(self, answer: str, host: str = "", port: int = SERVER_PORT) -> None:
        self.answer = answer
        self.max_player = DEFAULT_MAX_PLAYER
        self.current_player = 0
        self.clients: list[ClientInfo] = []
        self._lock = threading.Lock()
        self._first_lock = threading.Lock()
        self._is_first_client = True
        self._player_counter = 1
        self._stopped = threading.Event()
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self._listener.bind((host, port))
            self._listener.listen(MAX_CLIENTS)
            self._listener.settimeout(_ACCEPT_POLL_SECONDS)
        except OSError:
            self._listener.close()
            raise
        self.server_address: tuple[str, int] = self._listener.getsockname()[:2]

    def broadcast(self, data: bytes, except_conn: socket.socket | None = None) -> None:
        """Send ``data`` to every admitted player except ``except_conn``."""
        with self._lock:
            for client in self.clients:
                if client.conn is except_conn:
                    continue
                with contextlib.suppress(OSError):
                    client.conn.sendall(data)

    def pick_random_player(self) -> str:
        """Return the nickname of a random player, or "" if the room is empty."""
        import random

        with self._lock:
            if not self.clients:
                return ""
            return random.choice(self.clients).nickname

    def _send(self, conn: socket.socket, data: bytes) -> None:
        with self._lock, contextlib.suppress(OSError):
            conn.sendall(data)

    def _reject(self, conn: socket.socket) -> None:
        with contextlib.suppress(OSError):
            conn.sendall(pack_int(MSG_REJECTED))
            conn.shutdown(socket.SHUT_WR)
        time.sleep(REJECT_FLUSH_SECONDS)
        conn.close()

    def _capacity_packet(self) -> bytes:
        return PlayerCntPacket(
            current_player_cnt=self.current_player, max_player=self.max_player
        ).pack()

    def _handshake(self, conn: socket.socket, is_first_client: bool) -> bool:
        if is_first_client:
            try:
                msg_type = recv_int(conn)
            except OSError:
                msg_type = None
            if msg_type != MSG_SET_MAX_PLAYER:
                print("Failed to receive maxPlayer info from first client!", file=sys.stderr)
                conn.close()
                return False
            try:
                new_max_player = recv_int(conn)
            except OSError:
                print("Failed to receive maxPlayer value!", file=sys.stderr)
                conn.close()
                return False
            self.max_player = new_max_player
            print(f"[Server] max_Player set to {self.max_player} by first client", flush=True)
            return True

        try:
            msg_type = recv_int(conn)
        except OSError:
            msg_type = None
        if msg_type != MSG_SET_MAX_PLAYER:
            print("[Server] rejected client: did not send MSG_SET_MAX_PLAYER", file=sys.stderr)
            conn.close()
            return False
        requested = 0
        received = True
        try:
            requested = recv_int(conn)
        except OSError:
            received = False
        if not received or requested != self.max_player:
            print(
                f"[Server] rejected client: requested maxPlayer({requested}) "
                f"!= server max_Player({self.max_player})",
                file=sys.stderr,
            )
            self._reject(conn)
            return False
        return True

    def handle_client(
        self, conn: socket.socket, player_num: int, is_first_client: bool
    ) -> None:
        """Admit one connection and serve it until it leaves or guesses right."""
        nickname = f"player{player_num}"
        if not self._handshake(conn, is_first_client):
            return

        with self._lock:
            admitted = self.current_player < self.max_player
            if admitted:
                self.clients.append(ClientInfo(conn, nickname))
                self.current_player += 1
            current, maximum = self.current_player, self.max_player
        if not admitted:
            print(
                f"[Server] Out of capacity (current: {current}, max: {maximum})",
                flush=True,
            )
            self._reject(conn)
            return

        print(f"Client connected ({nickname})", flush=True)
        self.broadcast(
            PlayerCntPacket(current_player_cnt=current, max_player=maximum).pack()
        )
        self._send(conn, PlayerNumPacket(player_num=player_num).pack())

        if current == maximum:
            selected = self.pick_random_player()
            if selected:
                self.broadcast(SelectedPlayerPacket(nickname=selected).pack())
                print(f"[Server] Selected player: {selected}", flush=True)

        try:
            self._serve_messages(conn, nickname)
        finally:
            with contextlib.suppress(OSError):
                conn.close()
            with self._lock:
                self.clients = [c for c in self.clients if c.conn is not conn]
                empty = not self.clients
                if empty:
                    self.max_player = DEFAULT_MAX_PLAYER
            print(f"Client disconnected ({nickname})", flush=True)
            if empty:
                print("[Server] All clients disconnected. max_Player reset to 2.", flush=True)

    def _serve_messages(self, conn: socket.socket, nickname: str) -> None:
        try:
            while True:
                header = conn.recv(_HEADER_SIZE, socket.MSG_PEEK)
                if not header:
                    return
                msg_type = int.from_bytes(
                    header.ljust(_HEADER_SIZE, b"\0"), "little", signed=True
                )
                if msg_type == MessageType.DRAW:
                    self.broadcast(DrawPacket.recv(conn).pack(), except_conn=conn)
                elif msg_type == MessageType.ANSWER:
                    guess = AnswerPacket.recv(conn).answer
                    print(f"[Received answer] {nickname}: {guess}", flush=True)
                    correct = guess == self.answer
                    result = MessageType.CORRECT if correct else MessageType.WRONG
                    self.broadcast(
                        CommonPacket(type=result, nickname=nickname, message=guess).pack()
                    )
                    if correct:
                        return
                elif msg_type == MessageType.DISCONNECT:
                    recv_exact(conn, _HEADER_SIZE)
                    print(f"[Server] Player({nickname}) disconnect", flush=True)
                    with self._lock:
                        self.current_player -= 1
                        packet = self._capacity_packet()
                    self.broadcast(packet)
                    return
                else:
                    conn.recv(_DISCARD_SIZE)
        except (ConnectionClosed, OSError):
            return

    def _run_client(self, conn: socket.socket, player_num: int, is_first: bool) -> None:
        self.handle_client(conn, player_num, is_first)
        with self._lock:
            if not self.clients:
                self.max_player = DEFAULT_MAX_PLAYER
                with self._first_lock:
                    self._is_first_client = True
                print(
                    "[Server] All clients disconnected. max_Player and is_first_client reset.",
                    flush=True,
                )

    def serve_forever(self) -> None:
        """Accept connections until :meth:`shutdown` is called."""
        host, port = self.server_address
        print(f"[서버] {host}:{port}에서 대기중... (정답:{self.answer})", flush=True)
        self.current_player = 0
        while not self._stopped.is_set():
            try:
                conn, _ = self._listener.accept()
            except TimeoutError:
                continue
            except OSError as exc:
                if self._stopped.is_set():
                    break
                print(f"accept: {exc}", file=sys.stderr)
                continue
            with self._first_lock:
                is_first = self._is_first_client
                self._is_first_client = False
            player_num = self._player_counter
            self._player_counter += 1
            threading.Thread(
                target=self._run_client, args=(conn, player_num, is_first), daemon=True
            ).start()

    def shutdown(self) -> None:
        """Stop accepting, close the listener and end every player's session."""
        self._stopped.set()
        with contextlib.suppress(OSError):
            self._listener.close()
        with self._lock:
            connections = [client.conn for client in self.clients]
        for conn in connections:
            with contextlib.suppress(OSError):
                conn.shutdown(socket.SHUT_RDWR)


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 1:
        print("usage: server_app <answer_word>", file=sys.stderr)
        return 1
    try:
        server = GameServer(argv[0])
    except OSError as exc:
        print(f"bind: {exc}", file=sys.stderr)
        return 1
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.shutdown()
    return 0