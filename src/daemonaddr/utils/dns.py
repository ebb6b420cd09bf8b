"""Hostname lookup collaborators for the endpoint resolver.

The resolver never calls the system resolver directly; it asks a
[HostLookup][daemonaddr.utils.dns.HostLookup] for the candidate addresses of
a hostname and takes the first one. Four implementations are provided:

* [SystemHostLookup][daemonaddr.utils.dns.SystemHostLookup] -- the platform
  resolver via ``socket.getaddrinfo`` (honours ``/etc/hosts``, nsswitch).
* [DnspythonHostLookup][daemonaddr.utils.dns.DnspythonHostLookup] -- direct
  A/AAAA queries with ``dnspython``, with a per-query timeout.
* [StaticHostLookup][daemonaddr.utils.dns.StaticHostLookup] -- a fixed
  in-memory table, for tests and for pinning hosts in configuration.
* [PinnedHostLookup][daemonaddr.utils.dns.PinnedHostLookup] -- a static table
  consulted before another backend.

Note:
    Lookups return candidates in the order the backend produced them and
    never re-sort. Failures are reported by raising ``OSError`` (system
    resolver) or ``dns.exception.DNSException`` (dnspython); an empty list
    means the name exists but has no usable address. Translating either
    into [HostNotFound][daemonaddr.core.exceptions.HostNotFound] is the
    resolver's job.
"""

from __future__ import annotations

import socket
from collections.abc import Iterable, Mapping
from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import TYPE_CHECKING, Protocol, cast

import dns.exception
import dns.resolver

from daemonaddr.models.constants import AddressFamily


if TYPE_CHECKING:
    from dns.rdtypes.IN.A import A
    from dns.rdtypes.IN.AAAA import AAAA


IPAddress = IPv4Address | IPv6Address

DEFAULT_LOOKUP_TIMEOUT: float = 5.0

_SOCKET_FAMILIES: dict[AddressFamily, int] = {
    AddressFamily.ANY: socket.AF_UNSPEC,
    AddressFamily.IPV4: socket.AF_INET,
    AddressFamily.IPV6: socket.AF_INET6,
}

_RDTYPES: dict[AddressFamily, tuple[str, ...]] = {
    AddressFamily.ANY: ("A", "AAAA"),
    AddressFamily.IPV4: ("A",),
    AddressFamily.IPV6: ("AAAA",),
}


class HostLookup(Protocol):
    """Capability interface: resolve a hostname to candidate addresses."""

    def lookup(self, hostname: str) -> list[IPAddress]:
        """Return the addresses for *hostname*, in backend order.

        Raises:
            OSError: If the lookup itself failed.
            dns.exception.DNSException: If a dnspython query failed.
        """
        ...


def _dedupe(addresses: Iterable[IPAddress]) -> list[IPAddress]:
    """Drop repeated addresses, keeping the first occurrence of each."""
    seen: set[IPAddress] = set()
    result: list[IPAddress] = []
    for addr in addresses:
        if addr not in seen:
            seen.add(addr)
            result.append(addr)
    return result


class SystemHostLookup:
    """Resolve through the platform resolver (``socket.getaddrinfo``).

    ``getaddrinfo`` returns one entry per socket type/protocol, so repeated
    addresses are collapsed while preserving the order of first appearance.

    Warning:
        ``getaddrinfo`` has no timeout of its own. Wrap the call (for example
        with [resolve_async()][daemonaddr.daemon.resolve_async]) when a bound
        is needed.
    """

    def __init__(self, family: AddressFamily = AddressFamily.ANY) -> None:
        self.family = AddressFamily(family)

    def lookup(self, hostname: str) -> list[IPAddress]:
        infos = socket.getaddrinfo(
            hostname, None, _SOCKET_FAMILIES[self.family], socket.SOCK_DGRAM
        )
        return _dedupe(ip_address(info[4][0]) for info in infos)

    def __repr__(self) -> str:
        return f"SystemHostLookup(family={self.family.value!r})"


class DnspythonHostLookup:
    """Resolve with direct A/AAAA queries using ``dnspython``.

    A records are queried before AAAA records when both families are
    allowed. A record type that has no answer is skipped; an error in one
    type only surfaces if no type produced any address.

    Args:
        timeout: Per-query timeout and total lifetime in seconds.
        family: Which record types to query.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_LOOKUP_TIMEOUT,
        family: AddressFamily = AddressFamily.ANY,
    ) -> None:
        self.timeout = timeout
        self.family = AddressFamily(family)

    def lookup(self, hostname: str) -> list[IPAddress]:
        resolver = dns.resolver.Resolver()
        resolver.timeout = self.timeout
        resolver.lifetime = self.timeout

        addresses: list[IPAddress] = []
        errors: list[Exception] = []

        for rdtype in _RDTYPES[self.family]:
            try:
                answers = resolver.resolve(hostname, rdtype)
            except dns.resolver.NoAnswer:
                continue
            except (OSError, dns.exception.DNSException) as e:
                errors.append(e)
                continue
            for rdata in answers:
                addresses.append(ip_address(cast("A | AAAA", rdata).address))

        if not addresses and errors:
            raise errors[0]
        return _dedupe(addresses)

    def __repr__(self) -> str:
        return f"DnspythonHostLookup(timeout={self.timeout!r}, family={self.family.value!r})"


class StaticHostLookup:
    """Answer lookups from a fixed hostname table.

    Hostnames are matched case-insensitively with any trailing dot removed.
    Unknown names raise ``socket.gaierror`` like the system resolver does.

    Examples:
        ```python
        lookup = StaticHostLookup({"xray-daemon": ["10.0.0.5"]})
        lookup.lookup("XRAY-DAEMON")   # [IPv4Address('10.0.0.5')]
        ```
    """

    def __init__(self, table: Mapping[str, Iterable[str | IPAddress]]) -> None:
        self._table: dict[str, list[IPAddress]] = {
            self._normalize(name): [ip_address(a) for a in addrs] for name, addrs in table.items()
        }

    @staticmethod
    def _normalize(hostname: str) -> str:
        return hostname.rstrip(".").lower()

    def has(self, hostname: str) -> bool:
        """Return True if *hostname* is in the table."""
        return self._normalize(hostname) in self._table

    def lookup(self, hostname: str) -> list[IPAddress]:
        try:
            return list(self._table[self._normalize(hostname)])
        except KeyError:
            raise socket.gaierror(socket.EAI_NONAME, f"unknown host: {hostname}") from None

    def __repr__(self) -> str:
        return f"StaticHostLookup({sorted(self._table)!r})"


class PinnedHostLookup:
    """Answer pinned names from a static table; send the rest to *backend*.

    Built by [LookupConfig.build()][daemonaddr.core.config.LookupConfig.build]
    when the configuration pins hosts.
    """

    def __init__(self, pinned: StaticHostLookup, backend: HostLookup) -> None:
        self.pinned = pinned
        self.backend = backend

    def lookup(self, hostname: str) -> list[IPAddress]:
        if self.pinned.has(hostname):
            return self.pinned.lookup(hostname)
        return self.backend.lookup(hostname)

    def __repr__(self) -> str:
        return f"PinnedHostLookup(pinned={self.pinned!r}, backend={self.backend!r})"
