import json
import socket
from unittest import mock

import pytest

from klevret.cli import handlers
from klevret.cli.handlers import (
    KlevretComponent,
    build_ip_address_request,
    build_pool_create_request,
    check_args_size,
    cmd_dhcp_pool_create,
    cmd_ip_address_ipv4,
    send_cmd,
)
from klevret.cli.values import IPv4Address


def test_check_args_size_accepts_exact_count():
    assert check_args_size(["a", "b"], 2, "cmd") is None


def test_check_args_size_rejects_wrong_count():
    with pytest.raises(ValueError):
        check_args_size(["a"], 2, "cmd")


def test_ip_address_request_uses_last_value():
    ip = IPv4Address.parse("192.168.1.1")
    request = build_ip_address_request(["ip", "address", ip])
    assert request == {"component": "dhcp", "cmd": "ip.address", "ip": str(ip)}


def test_ip_address_request_wrong_size():
    with pytest.raises(ValueError):
        build_ip_address_request(["ip", "address"])


def test_pool_create_request_order():
    start = IPv4Address.parse("10.0.0.1")
    end = IPv4Address.parse("10.0.0.9")
    request = build_pool_create_request(["dhcp", "pool", "create", start, end])
    assert request["cmd"] == "dhcp.pool.create"
    assert request["ip_start"] == str(start)
    assert request["ip_end"] == str(end)


def test_pool_create_request_wrong_size():
    with pytest.raises(ValueError):
        build_pool_create_request(["dhcp", "pool", "create"])


def test_cmd_handlers_reject_wrong_size():
    with pytest.raises(ValueError):
        cmd_ip_address_ipv4([])
    with pytest.raises(ValueError):
        cmd_dhcp_pool_create(["x"])


def _receive_all(server):
    connection, _ = server.accept()
    chunks = []
    with connection:
        while True:
            chunk = connection.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
    return b"".join(chunks)


def test_send_cmd_delivers_json_to_core():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.bind(("127.0.0.1", 0))
        server.listen(1)
        port = server.getsockname()[1]
        payload = {"component": "dhcp", "cmd": "ip.address", "ip": "1.2.3.4"}
        with mock.patch.dict(handlers.COMPONENT_PORTS, {KlevretComponent.CORE: port}):
            sent = send_cmd(KlevretComponent.DHCP, payload)
        received = _receive_all(server)
    assert sent == len(received)
    assert json.loads(received.decode("utf-8")) == payload