"""Shared constants for the models layer.

Port bounds, daemon defaults, and the address family enum used by the
endpoint model, the DNS collaborators, and the configuration layer. Placing
them here keeps ``utils`` and ``core`` free of circular imports.

See Also:
    [ResolvedEndpoint][daemonaddr.models.endpoint.ResolvedEndpoint]: Enforces
        the port bounds on construction.
    [DaemonConfig][daemonaddr.core.config.DaemonConfig]: Uses the daemon
        defaults as field defaults.
"""

from __future__ import annotations

from enum import StrEnum


MIN_PORT: int = 0
MAX_PORT: int = 65535

DEFAULT_DAEMON_ADDRESS: str = "127.0.0.1:2000"
DAEMON_ADDRESS_ENV: str = "AWS_XRAY_DAEMON_ADDRESS"

# Seconds allowed for each address pattern match
MAX_MATCH_TIMEOUT: float = 60.0
DEFAULT_MATCH_TIMEOUT: float = 1.0

# RFC 1035 limits
MAX_HOSTNAME_LENGTH: int = 253
MAX_LABEL_LENGTH: int = 63


class AddressFamily(StrEnum):
    """Address family filter applied to hostname lookups.

    Attributes:
        ANY: Accept IPv4 and IPv6 candidates in resolver order.
        IPV4: Only A-record / ``AF_INET`` candidates.
        IPV6: Only AAAA-record / ``AF_INET6`` candidates.
    """

    ANY = "any"
    IPV4 = "ipv4"
    IPV6 = "ipv6"
