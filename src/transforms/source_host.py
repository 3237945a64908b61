"""Best-effort host extraction for recipe links.

This module derives Paprika's ``source`` domain from a recipe URL.
Malformed links produce None rather than an error.
"""

from __future__ import annotations

import ipaddress
import re
from urllib.parse import urlsplit

_HOSTNAME_LABEL = re.compile(r"(?!-)[a-z0-9-]{1,63}(?<!-)")
_MAX_HOSTNAME_LENGTH = 253


def extract_source_host(link: str) -> str | None:
    """Return the host of a link when it is a valid hostname or IP literal.

    Args:
        link: Recipe source URL.

    Returns:
        Lowercase host, e.g. ``example.com``, or None. IPv6 literals keep
        their URL brackets, e.g. ``[2001:db8::1]``.
    """
    try:
        parts = urlsplit(link.strip())
        host = parts.hostname
        _ = parts.port  # raises ValueError on malformed ports
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc or not host:
        return None
    address = _parse_ip_literal(host)
    if address is not None:
        return f"[{host}]" if address.version == 6 else host
    if _is_hostname(host):
        return host
    return None


def _parse_ip_literal(host: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    try:
        return ipaddress.ip_address(host)
    except ValueError:
        return None


def _is_hostname(host: str) -> bool:
    """Check RFC 1123 hostname syntax."""
    candidate = host[:-1] if host.endswith(".") else host
    if not candidate or len(candidate) > _MAX_HOSTNAME_LENGTH:
        return False
    return all(_HOSTNAME_LABEL.fullmatch(label) for label in candidate.split("."))
