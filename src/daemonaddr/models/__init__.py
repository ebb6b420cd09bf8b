"""Pure frozen dataclasses and constants. Zero I/O, depends only on stdlib.

Attributes:
    ResolvedEndpoint: Validated IP address + port pair.
        See [ResolvedEndpoint][daemonaddr.models.endpoint.ResolvedEndpoint].
    AddressFamily: Lookup family filter.
        See [AddressFamily][daemonaddr.models.constants.AddressFamily].
"""

from .constants import (
    DAEMON_ADDRESS_ENV,
    DEFAULT_DAEMON_ADDRESS,
    MAX_PORT,
    MIN_PORT,
    AddressFamily,
)
from .endpoint import ResolvedEndpoint


__all__ = [
    "DAEMON_ADDRESS_ENV",
    "DEFAULT_DAEMON_ADDRESS",
    "MAX_PORT",
    "MIN_PORT",
    "AddressFamily",
    "ResolvedEndpoint",
]
