"""
Validated network endpoint (IP address + port).

A [ResolvedEndpoint][daemonaddr.models.endpoint.ResolvedEndpoint] is the
output of [resolve()][daemonaddr.resolver.resolve]: a concrete IPv4 or IPv6
address paired with a port, ready to hand to a UDP/TCP transport. It never
holds a hostname and keeps no reference to the text it was parsed from.
"""

from __future__ import annotations

import socket
from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address

from ._validation import validate_instance, validate_port


@dataclass(frozen=True, slots=True)
class ResolvedEndpoint:
    """Immutable address/port pair.

    Both fields are validated on construction, so an existing instance is
    always usable as a socket destination.

    Attributes:
        address: IPv4 or IPv6 address.
        port: Port number in ``[0, 65535]``.

    Raises:
        TypeError: If *address* is not an ``ipaddress`` object or *port*
            is not an ``int``.
        ValueError: If *port* is out of range.

    Examples:
        ```python
        ep = ResolvedEndpoint(IPv4Address("127.0.0.1"), 2000)
        str(ep)             # '127.0.0.1:2000'
        ep.to_sockaddr()    # ('127.0.0.1', 2000)

        ep6 = ResolvedEndpoint(IPv6Address("::1"), 2000)
        str(ep6)            # '[::1]:2000'
        ```
    """

    address: IPv4Address | IPv6Address
    port: int

    def __post_init__(self) -> None:
        validate_instance(self.address, (IPv4Address, IPv6Address), "address")
        validate_port(self.port, "port")

    def __str__(self) -> str:
        # IPv6 is bracketed so the port is not read back as part of the literal
        if self.address.version == 6:
            return f"[{self.address}]:{self.port}"
        return f"{self.address}:{self.port}"

    @property
    def version(self) -> int:
        """IP version of the address (4 or 6)."""
        return self.address.version

    @property
    def family(self) -> socket.AddressFamily:
        """Socket address family matching the address version."""
        return socket.AF_INET6 if self.address.version == 6 else socket.AF_INET

    def to_sockaddr(self) -> tuple[str, int] | tuple[str, int, int, int]:
        """Return the address tuple expected by ``socket.connect`` / ``sendto``.

        IPv6 endpoints return the 4-tuple form; a zone index (``%eth0``) is
        kept in the host string, which ``getaddrinfo``-aware callers accept.
        """
        if isinstance(self.address, IPv6Address):
            return (str(self.address), self.port, 0, 0)
        return (str(self.address), self.port)
