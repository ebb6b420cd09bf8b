"""Hostname lookup collaborators.

The utils layer depends only on [daemonaddr.models][daemonaddr.models]. It
has **zero** imports from ``daemonaddr.core``; lookup failures surface as
``OSError`` / ``dns.exception.DNSException`` and are translated by the
resolver.

Attributes:
    dns: [HostLookup][daemonaddr.utils.dns.HostLookup] protocol plus system,
        dnspython, static and pinned implementations.
"""

from .dns import (
    DnspythonHostLookup,
    HostLookup,
    IPAddress,
    PinnedHostLookup,
    StaticHostLookup,
    SystemHostLookup,
)


__all__ = [
    "DnspythonHostLookup",
    "HostLookup",
    "IPAddress",
    "PinnedHostLookup",
    "StaticHostLookup",
    "SystemHostLookup",
]
