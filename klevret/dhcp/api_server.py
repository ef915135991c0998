"""The control API of the DHCP component: a TCP endpoint that reports what it receives."""

from __future__ import annotations

import logging
import socketserver
import sys
import threading
from typing import Optional, TextIO

log = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 40237
BUFFER_SIZE = 10 * 1024


class _ApiRequestHandler(socketserver.BaseRequestHandler):
    """Copies everything a client sends to the server's output."""

    server: "_ApiTcpServer"

    def handle(self) -> None:
        log.info("client handler started")
        while True:
            try:
                chunk = self.request.recv(BUFFER_SIZE - 1)
            except OSError:
                break
            if not chunk:
                break
            self.server.report(chunk.decode("utf-8", errors="replace"))


class _ApiTcpServer(socketserver.ThreadingTCPServer):
    allow_reuse_address = True
    daemon_threads = True
    request_queue_size = 5

    def __init__(self, port: int, output: TextIO) -> None:
        self.output = output
        self._output_lock = threading.Lock()
        super().__init__((DEFAULT_HOST, port), _ApiRequestHandler)

    def report(self, text: str) -> None:
        with self._output_lock:
            self.output.write("Received: \n" + text + "\n\n")
            self.output.flush()


class ApiServer:
    """Process-wide API endpoint; use :meth:`instance` to get it."""

    _instance: Optional["ApiServer"] = None
    _lock = threading.Lock()

    @classmethod
    def instance(cls) -> "ApiServer":
        """The single shared ApiServer."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def start(self) -> None:
        """Serve on the default port in the calling thread, forever."""
        with _ApiTcpServer(DEFAULT_PORT, sys.stdout) as server:
            log.info("started accepting TCP connections")
            server.serve_forever()

    def serve(self, port: int = DEFAULT_PORT, output: Optional[TextIO] = None) -> socketserver.TCPServer:
        """Serve in a background thread and return the running server.

        Received text goes to ``output`` (standard output by default). Stop
        the server with ``shutdown()`` followed by ``server_close()``.
        """
        server = _ApiTcpServer(port, output if output is not None else sys.stdout)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        log.info("started accepting TCP connections on port %d", server.server_address[1])
        return server