import ipaddress
import socket

import pytest

from wclkit.netutil import (
    get_available_port,
    get_first_path,
    get_full_url,
    get_host_ip_v2,
    get_ip_from_request,
    get_one_query_map,
    get_one_query_value,
    get_query_values,
    get_schema_and_host,
    get_second_path,
    get_tcp_source_ip,
)


def test_ip_from_remote_addr():
    assert get_ip_from_request("10.0.0.1:5000", {}) == ipaddress.ip_address("10.0.0.1")


def test_ip_from_forwarded_for_uses_last():
    headers = {"X-Forwarded-For": ["1.1.1.1,2.2.2.2,"]}
    assert get_ip_from_request("10.0.0.1:5000", headers) == ipaddress.ip_address("2.2.2.2")


def test_invalid_forwarded_for_falls_back():
    headers = {"X-Forwarded-For": "1.1.1.1,garbage", "X-Real-IP": "3.3.3.3"}
    assert get_ip_from_request("10.0.0.1:5000", headers) == ipaddress.ip_address("10.0.0.1")


def test_real_ip_header_case_insensitive():
    headers = {"x-real-ip": "3.3.3.3"}
    assert get_ip_from_request("10.0.0.1:5000", headers) == ipaddress.ip_address("3.3.3.3")


def test_unparseable_remote_addr():
    assert get_ip_from_request("[::1]:80", {}) is None


def test_paths():
    assert get_first_path("/api/v1/users") == "api"
    assert get_second_path("/api/v1/users") == "v1"
    assert get_second_path("/api") == ""
    assert get_first_path("/") == ""


def test_query_values():
    assert get_query_values("a=1&a=2&b=x", "a") == ["1", "2"]
    assert get_query_values("a=1", "missing") == []
    assert get_one_query_value("a=1&a=2", "a") == "1"


def test_one_query_value_missing():
    with pytest.raises(KeyError):
        get_one_query_value("a=1", "b")


def test_one_query_map():
    assert get_one_query_map("a=1&a=2&b=hello+world") == {"a": "1", "b": "hello world"}


def test_schema_and_url():
    assert get_schema_and_host("example.com", True) == "https://example.com"
    assert get_full_url("example.com", "/x?y=1", False) == "http://example.com/x?y=1"


def test_available_port_is_bindable():
    port = get_available_port()
    assert 0 < port <= 65535
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("", port))
        assert sock.getsockname()[1] == port


def test_source_ip_for_loopback():
    loopback = ipaddress.ip_address("127.0.0.1")
    assert get_host_ip_v2("127.0.0.1:9") == loopback
    assert get_tcp_source_ip("127.0.0.1:9") == loopback


def test_source_ip_requires_port():
    with pytest.raises(ValueError, match="missing port"):
        get_tcp_source_ip("127.0.0.1")