import pytest

from wclkit.mutualtls import (
    ClientCertError,
    check_client_cert_exist,
    check_client_cert_ip,
    get_client_cert_common_name,
    get_client_cert_ip_set,
    parse_client_ip,
)


def _cert(common_name="client01", ips=("10.0.0.5",)):
    alt = tuple(("IP Address", ip) for ip in ips) + (("DNS", "host.example.com"),)
    return {
        "subject": ((("countryName", "XX"),), (("commonName", common_name),)),
        "subjectAltName": alt,
    }


def test_cert_exist_single():
    cert = _cert()
    assert check_client_cert_exist([cert]) is cert


def test_cert_exist_none():
    with pytest.raises(ClientCertError, match="no certificate found"):
        check_client_cert_exist([])


def test_cert_exist_many():
    with pytest.raises(ClientCertError, match="two or more certificates found"):
        check_client_cert_exist([_cert(), _cert()])


def test_common_name():
    assert get_client_cert_common_name(_cert("client01")) == "client01"
    assert get_client_cert_common_name(_cert("CN=client02")) == "client02"
    assert get_client_cert_common_name({"subject": ()}) == ""


def test_ip_set():
    ips = get_client_cert_ip_set(_cert(ips=("10.0.0.5", "2001:DB8:0:0:0:0:0:1\n")))
    assert sorted(ips) == ["10.0.0.5", "2001:db8::1"]


def test_parse_client_ip_from_remote_addr():
    assert parse_client_ip("10.0.0.5:4321", {}) == "10.0.0.5"


def test_parse_client_ip_prefers_forwarded_header():
    headers = {"x-forwarded-for": "1.1.1.1,10.0.0.9"}
    assert parse_client_ip("10.0.0.5:4321", headers) == "10.0.0.9"


def test_parse_client_ip_unknown():
    assert parse_client_ip("not-an-address", {}) == ""


def test_check_ip_allowed():
    assert check_client_cert_ip(_cert(), "10.0.0.5:5555", {}) == "10.0.0.5"


def test_check_ip_rejected():
    cert = _cert(ips=("10.0.0.6", "10.0.0.5"))
    with pytest.raises(ClientCertError) as excinfo:
        check_client_cert_ip(cert, "10.0.0.7:5555", {})
    assert str(excinfo.value) == "certificate allows only 10.0.0.5,10.0.0.6"