import socket

import pytest

from wclkit.tcp import dial, listen


def test_listen_and_dial_round_trip():
    with listen("127.0.0.1:0") as server:
        port = server.getsockname()[1]
        with dial(f"127.0.0.1:{port}") as client:
            conn, _ = server.accept()
            with conn:
                client.sendall(b"ping")
                assert conn.recv(4) == b"ping"
                conn.sendall(b"pong")
                assert client.recv(4) == b"pong"


def test_listen_any_interface():
    with listen(":0") as server:
        port = server.getsockname()[1]
        assert port > 0
        with dial(f"127.0.0.1:{port}") as client:
            conn, _ = server.accept()
            with conn:
                client.sendall(b"x")
                assert conn.recv(1) == b"x"


def test_dial_requires_port():
    with pytest.raises(ValueError, match="missing port"):
        dial("127.0.0.1")


def test_unknown_service_name():
    with pytest.raises(OSError):
        listen("127.0.0.1:nosuchservicename")


def test_dial_closed_port_fails():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
    with pytest.raises(OSError):
        dial(f"127.0.0.1:{port}")