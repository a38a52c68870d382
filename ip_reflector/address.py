"""Peer address parsing.

Splits ``host:port`` strings the way standard network libraries do: IPv6
literals must be bracketed (``[2001:db8::1]:443``), everything else is split
on its single colon.
"""

import ipaddress

from ip_reflector.exceptions import AddressParseException
from ip_reflector.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

UNKNOWN_PEER = "unknown"

MISSING_PORT = "missing port in address"
TOO_MANY_COLONS = "too many colons in address"


def split_host_port(hostport: str) -> tuple[str, str]:
    """Split a ``host:port`` string into host and port.

    The host of a bracketed IPv6 literal is returned without brackets. An
    empty host or port is allowed.

    Raises:
        AddressParseException: If the string has no port or is malformed
    """
    i = hostport.rfind(":")
    if i < 0:
        raise AddressParseException(hostport, MISSING_PORT)

    if hostport.startswith("["):
        end = hostport.find("]")
        if end < 0:
            raise AddressParseException(hostport, "missing ']' in address")
        if end + 1 == len(hostport):
            # There can't be a ':' behind the ']' now.
            raise AddressParseException(hostport, MISSING_PORT)
        if end + 1 != i:
            # Either ']' isn't followed by a colon, or it is followed by a
            # colon that is not the last one.
            if hostport[end + 1] == ":":
                raise AddressParseException(hostport, TOO_MANY_COLONS)
            raise AddressParseException(hostport, MISSING_PORT)
        host = hostport[1:end]
        rest_from, port_from = 1, end + 1
    else:
        host = hostport[:i]
        if ":" in host:
            raise AddressParseException(hostport, TOO_MANY_COLONS)
        rest_from, port_from = 0, 0

    if "[" in hostport[rest_from:]:
        raise AddressParseException(hostport, "unexpected '[' in address")
    if "]" in hostport[port_from:]:
        raise AddressParseException(hostport, "unexpected ']' in address")

    return host, hostport[i + 1 :]


def join_host_port(host: str, port: int | str) -> str:
    """Combine host and port into ``host:port``, bracketing IPv6 hosts."""
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def extract_host(raw_address: str) -> str:
    """Return the host part of a peer address.

    Never fails and never returns an empty string: when the address cannot
    be split, or its host part is empty (':80'), the raw string is returned
    unchanged and the problem is logged.
    """
    try:
        host, _ = split_host_port(raw_address)
    except AddressParseException as e:
        reason = e.reason
    else:
        if host:
            return host
        reason = "empty host in address"

    log_with_context(
        logger,
        "warning",
        "Could not split host and port, using raw address",
        raw_address=raw_address,
        error=reason,
        event_type="peer_address_unparsed",
    )
    return raw_address


def _unmap_ipv4(host: str) -> str:
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        return host
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return str(ip.ipv4_mapped)
    return host


def format_peer_address(client: tuple[str, int] | None) -> str:
    """Build the raw ``host:port`` peer address from an ASGI client tuple.

    IPv4 clients accepted on a dual-stack socket show up as IPv4-mapped IPv6
    addresses (``::ffff:192.0.2.1``); they are reported as plain IPv4.
    """
    if client is None:
        return UNKNOWN_PEER
    host, port = client
    return join_host_port(_unmap_ipv4(host), port)
