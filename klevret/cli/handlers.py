"""Handlers run when a console command is entered."""

from __future__ import annotations

import enum
import json
import socket
from typing import Any, Dict, Sequence

from klevret.cli.console import Console

CORE_HOST = "127.0.0.1"
VERSION_TEXT = "Klevret. Version 0.1 (in development)\n"


class KlevretComponent(enum.Enum):
    CLI = "cli"
    CORE = "core"
    DHCP = "dhcp"


COMPONENT_PORTS: Dict[KlevretComponent, int] = {KlevretComponent.CORE: 40236}


def check_args_size(args: Sequence[Any], number_of_args: int, command_text: str) -> None:
    """Raise ValueError unless ``args`` holds exactly ``number_of_args`` values."""
    if len(args) != number_of_args:
        raise ValueError(f"internal error while handling command {command_text}")


def build_ip_address_request(args: Sequence[Any]) -> Dict[str, str]:
    """The request for ``ip address <IPv4Address>``; the address is the last value."""
    check_args_size(args, 3, "ip address <IPv4Address>")
    return {"component": "dhcp", "cmd": "ip.address", "ip": str(args[-1])}


def build_pool_create_request(args: Sequence[Any]) -> Dict[str, str]:
    """The request for ``dhcp pool create <IPv4Address> <IPv4Address>``."""
    check_args_size(args, 5, "dhcp pool create <IPv4Address> <IPv4Address>")
    return {
        "component": "dhcp",
        "cmd": "dhcp.pool.create",
        "ip_start": str(args[-2]),
        "ip_end": str(args[-1]),
    }


def send_cmd(component: KlevretComponent, payload: Dict[str, Any]) -> int:
    """Send ``payload`` as JSON to the core; returns the number of bytes sent.

    Every request goes through the core, whichever component it is meant for.
    """
    text = json.dumps(payload, indent=4, ensure_ascii=False) + "\n"
    print(text)
    data = text.encode("utf-8")
    port = COMPONENT_PORTS[KlevretComponent.CORE]
    with socket.create_connection((CORE_HOST, port)) as connection:
        connection.sendall(data)
    print(f"sent bytes: {len(data)}")
    return len(data)


def cmd_version(args: Sequence[Any]) -> None:
    Console.instance().write(VERSION_TEXT)


def blank(args: Sequence[Any]) -> None:
    Console.instance().write("empty command\n")


def cmd_ip_address_ipv4(args: Sequence[Any]) -> None:
    send_cmd(KlevretComponent.CORE, build_ip_address_request(args))


def cmd_dhcp_pool_create(args: Sequence[Any]) -> None:
    send_cmd(KlevretComponent.CORE, build_pool_create_request(args))