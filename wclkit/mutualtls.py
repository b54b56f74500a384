"""Checks on client certificates presented over mutual TLS.

Certificates are in the dictionary form returned by ssl.SSLSocket.getpeercert().
"""

from __future__ import annotations

import ipaddress
from collections.abc import Mapping, Sequence
from typing import Any

from wclkit.ipnet import _unmap
from wclkit.netutil import Headers, get_ip_from_request
from wclkit.sets import Set, sorted_list

Certificate = Mapping[str, Any]


class ClientCertError(Exception):
    """Raised when a client certificate is missing or does not match the client."""


def check_client_cert_exist(peer_certs: Sequence[Certificate] | None) -> Certificate:
    """Return the single peer certificate; raise ClientCertError otherwise."""
    certs = list(peer_certs or ())
    if not certs:
        raise ClientCertError("no certificate found")
    if len(certs) > 1:
        raise ClientCertError("two or more certificates found")
    return certs[0]


def get_client_cert_common_name(cert: Certificate) -> str:
    """Return the certificate subject's common name, without any "CN=" text."""
    for rdn in cert.get("subject", ()):
        for key, value in rdn:
            if key == "commonName":
                return value.replace("CN=", "")
    return ""


def get_client_cert_ip_set(cert: Certificate) -> Set:
    """Return the IP addresses listed in the certificate's subject alternative names."""
    result = Set()
    for kind, value in cert.get("subjectAltName", ()):
        if kind != "IP Address":
            continue
        try:
            result.insert(str(_unmap(ipaddress.ip_address(value.strip()))))
        except ValueError:
            continue
    return result


def parse_client_ip(remote_addr: str, headers: Headers) -> str:
    """Return the client address as text, or an empty string if none is known."""
    ip = get_ip_from_request(remote_addr, headers)
    return "" if ip is None else str(ip)


def check_client_cert_ip(cert: Certificate, remote_addr: str, headers: Headers) -> str:
    """Return the client address if the certificate lists it; raise ClientCertError otherwise."""
    real_ip = parse_client_ip(remote_addr, headers)
    allowed = get_client_cert_ip_set(cert)
    if real_ip and allowed.has(real_ip):
        return real_ip
    raise ClientCertError(f"certificate allows only {','.join(sorted_list(allowed))}")