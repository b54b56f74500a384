import pytest

from wclkit.netflags import validate_ip, validate_ip_port, validate_port_range


@pytest.mark.parametrize("value", ["10.1.2.3", "::1", "fd00::5"])
def test_validate_ip_accepts(value):
    assert validate_ip(value) == value


def test_validate_ip_empty():
    assert validate_ip("") is None


@pytest.mark.parametrize("value", ["999.1.1.1", "host", "fe80::1%eth0"])
def test_validate_ip_rejects(value):
    with pytest.raises(ValueError, match="is not a valid IP address"):
        validate_ip(value)


@pytest.mark.parametrize("value", ["10.0.0.1", "10.0.0.1:8080", "[::1]:443", "10.0.0.1:0"])
def test_validate_ip_port_accepts(value):
    assert validate_ip_port(value) == value


def test_validate_ip_port_empty():
    assert validate_ip_port("") is None


def test_validate_ip_port_bad_host():
    with pytest.raises(ValueError, match="is not a valid IP address"):
        validate_ip_port("host:80")


def test_validate_ip_port_bad_port():
    with pytest.raises(ValueError, match="is not a valid number"):
        validate_ip_port("10.0.0.1:http")


def test_validate_ip_port_bad_format():
    with pytest.raises(ValueError, match="is not in a valid format"):
        validate_ip_port("a:b:c")


@pytest.mark.parametrize("value", ["1000-2000", "80", "", "100+5"])
def test_validate_port_range_accepts(value):
    assert validate_port_range(value) == value


def test_validate_port_range_rejects():
    with pytest.raises(ValueError, match="is not a valid port range"):
        validate_port_range("x")