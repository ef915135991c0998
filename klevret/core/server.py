"""The core component: receives console commands and routes them to components."""

from __future__ import annotations

import argparse
import json
import logging
import socket
import sys
import time
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Union

from klevret.common.tcp_listener import TcpListener

log = logging.getLogger(__name__)

CORE_HOST = "127.0.0.1"
CORE_PORT = 40236
MAX_CONNECTIONS = 5
COMPONENT_PORTS: Mapping[str, int] = MappingProxyType({"dhcp": 40237})
_POLL_INTERVAL = 0.01


def _decode_packet(packet: bytes) -> str:
    """The text of ``packet`` up to its first NUL byte."""
    return bytes(packet).split(b"\x00", 1)[0].decode("utf-8", errors="replace")


def route_packet(packet: bytes) -> Optional[int]:
    """Look up where ``packet`` goes by its ``component`` field.

    Returns None for an unknown component. Raises ValueError if the
    packet is not a JSON object with a ``component`` string.
    """
    try:
        document = json.loads(_decode_packet(packet))
    except json.JSONDecodeError as error:
        raise ValueError(f"invalid JSON: {error}") from error
    if not isinstance(document, dict):
        raise ValueError("JSON document is not an object")
    component = document.get("component")
    if not isinstance(component, str):
        raise ValueError("JSON document has no 'component' string")
    return COMPONENT_PORTS.get(component)


def forward_to_component(payload: Union[bytes, str], port: int) -> int:
    """Send ``payload`` to the component listening on ``port``; returns bytes sent."""
    data = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)
    with socket.create_connection((CORE_HOST, port)) as connection:
        connection.sendall(data)
    log.info("sent %d bytes to port %d", len(data), port)
    return len(data)


def _process(packet: bytes) -> None:
    try:
        port = route_packet(packet)
        if port is not None:
            print("received command for DHCP")
            sent = forward_to_component(_decode_packet(packet), port)
            print(f"sent bytes: {sent}")
    except (ValueError, OSError) as error:
        print(f"Failed to handle command: {error}", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the core server until interrupted."""
    parser = argparse.ArgumentParser(prog="klevret-core", description="Klevret core server")
    parser.add_argument("--port", type=int, default=CORE_PORT)
    args = parser.parse_args(argv)
    try:
        with TcpListener(CORE_HOST, args.port, MAX_CONNECTIONS) as listener:
            while True:
                if listener.is_empty():
                    time.sleep(_POLL_INTERVAL)
                    continue
                _process(listener.get_next_packet())
    except KeyboardInterrupt:
        pass
    return 0