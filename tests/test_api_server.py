import io
import socket
import time

import pytest

from klevret.dhcp.api_server import ApiServer


def _wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def running():
    output = io.StringIO()
    server = ApiServer.instance().serve(0, output)
    yield server, output
    server.shutdown()
    server.server_close()


def test_instance_is_shared():
    first = ApiServer.instance()
    second = ApiServer.instance()
    assert second is first
    server = second.serve(0, io.StringIO())
    try:
        assert server.server_address[0] == "127.0.0.1"
    finally:
        server.shutdown()
        server.server_close()


def test_received_text_is_reported(running):
    server, output = running
    port = server.server_address[1]
    with socket.create_connection(("127.0.0.1", port)) as client:
        client.sendall(b"hello")
        assert _wait_for(lambda: "hello" in output.getvalue())
    assert output.getvalue() == "Received: \nhello\n\n"


def test_several_clients_are_served(running):
    server, output = running
    port = server.server_address[1]
    with socket.create_connection(("127.0.0.1", port)) as first, socket.create_connection(
        ("127.0.0.1", port)
    ) as second:
        first.sendall(b"alpha")
        second.sendall(b"beta")
        assert _wait_for(
            lambda: "alpha" in output.getvalue() and "beta" in output.getvalue()
        )
    assert output.getvalue().count("Received: \n") == 2


def test_serve_binds_loopback(running):
    server, _ = running
    assert server.server_address[0] == "127.0.0.1"