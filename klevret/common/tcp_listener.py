"""A TCP listener that queues whatever its clients send."""

from __future__ import annotations

import queue
import socket
import threading
from types import TracebackType
from typing import List, Optional, Type

BUFFER_SIZE = 10 * 1024
_POLL_INTERVAL = 0.1


class TcpListener:
    """Accepts connections on ``ip:port`` and queues received chunks.

    Listening starts on construction; each chunk read from a client becomes
    one packet in the queue.
    """

    def __init__(self, ip: str, port: int, max_connections: int) -> None:
        try:
            socket.inet_pton(socket.AF_INET, ip)
        except OSError:
            raise ValueError(f"invalid IPv4 address {ip!r}") from None
        self._ip = ip
        self._requested_port = port
        self._max_connections = max_connections
        self.port = port
        self._packets: "queue.Queue[bytes]" = queue.Queue()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.start()

    def get_next_packet(self) -> bytes:
        """Take the oldest queued packet; LookupError if none is queued."""
        try:
            return self._packets.get_nowait()
        except queue.Empty:
            raise LookupError("queue is empty") from None

    def is_empty(self) -> bool:
        return self._packets.empty()

    def _listen(self) -> socket.socket:
        server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server.bind((self._ip, self._requested_port))
            server.listen(self._max_connections)
        except OSError:
            server.close()
            raise
        server.settimeout(_POLL_INTERVAL)
        return server

    def start(self) -> None:
        """Begin listening; RuntimeError if already listening."""
        if self._thread is not None:
            raise RuntimeError("listener is already running")
        server = self._listen()
        self.port = server.getsockname()[1]
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._accept_loop, args=(server,), daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop listening and wait for all client handlers to finish."""
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join()
        self._thread = None

    def _accept_loop(self, server: socket.socket) -> None:
        handlers: List[threading.Thread] = []
        with server:
            while not self._stop_event.is_set():
                try:
                    connection, _ = server.accept()
                except socket.timeout:
                    continue
                except OSError:
                    break
                handler = threading.Thread(
                    target=self._handle_client, args=(connection,), daemon=True
                )
                handler.start()
                handlers.append(handler)
            self._stop_event.set()
            for handler in handlers:
                handler.join()

    def _handle_client(self, connection: socket.socket) -> None:
        with connection:
            connection.settimeout(_POLL_INTERVAL)
            while not self._stop_event.is_set():
                try:
                    chunk = connection.recv(BUFFER_SIZE - 1)
                except socket.timeout:
                    continue
                except OSError:
                    break
                if not chunk:
                    break
                self._packets.put(chunk)

    def __enter__(self) -> "TcpListener":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.stop()