"""
Turn a daemon address string into a validated endpoint.

Accepted shapes, tried in order (first match wins):

1. ``[<ipv6>]:<port>`` (or ``[<ipv6>]`` with the default port)
2. ``<ipv6>`` -- two or more colons, default port
3. ``<ipv4-or-hostname>:<port>``
4. ``<ipv4-or-hostname>`` -- default port
5. anything else is rejected as malformed

A hostname is resolved with a single call to the supplied
[HostLookup][daemonaddr.utils.dns.HostLookup] and the first candidate is
used as returned. The resolver performs no other I/O, never logs, and
keeps no state between calls.

Examples:
    ```python
    resolve("127.0.0.1:2000")
    # ResolvedEndpoint(address=IPv4Address('127.0.0.1'), port=2000)

    resolve("[::1]:2000").to_sockaddr()
    # ('::1', 2000, 0, 0)

    resolve("xray-daemon", 2000, lookup=StaticHostLookup({"xray-daemon": ["10.0.0.5"]}))
    # ResolvedEndpoint(address=IPv4Address('10.0.0.5'), port=2000)
    ```
"""

from __future__ import annotations

from ipaddress import IPv4Address, IPv6Address, ip_address

import dns.exception
import regex

from daemonaddr.core.exceptions import (
    EmptyInput,
    HostNotFound,
    InvalidAddress,
    InvalidDefaultPort,
    InvalidPort,
    MalformedEndpoint,
    PortRequired,
)
from daemonaddr.models._validation import is_port, validate_instance
from daemonaddr.models.constants import (
    DEFAULT_MATCH_TIMEOUT,
    MAX_HOSTNAME_LENGTH,
    MAX_LABEL_LENGTH,
    MAX_MATCH_TIMEOUT,
    MAX_PORT,
)
from daemonaddr.models.endpoint import ResolvedEndpoint
from daemonaddr.utils.dns import HostLookup, IPAddress, SystemHostLookup


# ASCII digits only: regex's \d also matches other Unicode decimal digits.
_IPV4_ENDPOINT = regex.compile(r"[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}:[0-9]{1,5}")
_IPV4_LITERAL = regex.compile(r"[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}")
_PORT = regex.compile(r"[0-9]{1,5}")
_HOST_LABEL = regex.compile(
    rf"[A-Za-z0-9_](?:[A-Za-z0-9_-]{{0,{MAX_LABEL_LENGTH - 2}}}[A-Za-z0-9_])?"
)
_NUMERIC_LABEL = regex.compile(r"[0-9]+")

_LOOKUP_ERRORS = (OSError, UnicodeError, dns.exception.DNSException)


def _fullmatch(pattern: regex.Pattern[str], text: str, timeout: float) -> bool:
    """Bounded full match; a timeout counts as a non-match."""
    try:
        return pattern.fullmatch(text, timeout=timeout) is not None
    except TimeoutError:
        return False


def _parse_port(text: str, token: str, timeout: float) -> int:
    if not _fullmatch(_PORT, token, timeout):
        raise InvalidPort(text, token)
    port = int(token)
    if port > MAX_PORT:
        raise InvalidPort(text, token, f"Port out of range 0-{MAX_PORT}")
    return port


def _default_port(text: str, default_port: int | None) -> int:
    if default_port is None:
        raise PortRequired(text)
    return default_port


def _has_space(token: str) -> bool:
    return any(c.isspace() for c in token)


def _parse_ipv4(text: str, token: str) -> IPv4Address:
    try:
        return IPv4Address(token)
    except ValueError:
        raise InvalidAddress(text, token) from None


def _parse_ipv6(text: str, token: str) -> IPv6Address:
    # IPv6Address accepts any character in a zone index, whitespace included
    if _has_space(token):
        raise InvalidAddress(text, token)
    try:
        return IPv6Address(token)
    except ValueError:
        raise InvalidAddress(text, token) from None


def _validate_hostname(text: str, host: str, timeout: float) -> None:
    """Reject tokens that cannot be a DNS name before asking the resolver.

    A name whose last label is purely numeric is refused so that malformed
    dotted-quads (``300.1.1.1``, ``1.2.3``) are never handed to resolvers
    that would reinterpret them as numeric addresses.
    """
    name = host[:-1] if host.endswith(".") else host
    if not name or len(name) > MAX_HOSTNAME_LENGTH:
        raise InvalidAddress(text, host)
    labels = name.split(".")
    if not all(_fullmatch(_HOST_LABEL, label, timeout) for label in labels):
        raise InvalidAddress(text, host)
    if _fullmatch(_NUMERIC_LABEL, labels[-1], timeout):
        raise InvalidAddress(text, host, "Invalid IPv4 address")


def _lookup_host(text: str, host: str, lookup: HostLookup, timeout: float) -> IPAddress:
    _validate_hostname(text, host, timeout)
    try:
        candidates = lookup.lookup(host)
    except _LOOKUP_ERRORS as e:
        raise HostNotFound(text, host) from e
    if not candidates:
        raise HostNotFound(text, host)
    try:
        return ip_address(candidates[0])
    except ValueError:
        raise InvalidAddress(
            text, str(candidates[0]), "Lookup returned an invalid address"
        ) from None


def resolve(
    text: str,
    default_port: int | None = None,
    *,
    lookup: HostLookup | None = None,
    match_timeout: float = DEFAULT_MATCH_TIMEOUT,
) -> ResolvedEndpoint:
    """Parse and validate *text* into a resolved address/port pair.

    Args:
        text: Address string such as ``"127.0.0.1:2000"``,
            ``"[2001:db8::1]:2000"``, ``"::1"`` or ``"xray-daemon:2000"``.
            Surrounding whitespace is trimmed once; whitespace inside a
            token is an error.
        default_port: Port used when *text* carries none. ``None`` means
            the input must specify one.
        lookup: Hostname resolver. Defaults to
            [SystemHostLookup][daemonaddr.utils.dns.SystemHostLookup].
        match_timeout: Upper bound in seconds for each pattern match.

    Returns:
        A new ``ResolvedEndpoint``.

    Raises:
        TypeError: If *text* is not a ``str``.
        ValueError: If *match_timeout* is not in ``(0, 60]``.
        EmptyInput: *text* is empty or whitespace-only.
        InvalidDefaultPort: *default_port* is not an int in ``[0, 65535]``.
        MalformedEndpoint: *text* matches none of the accepted shapes.
        InvalidAddress: An IPv4/IPv6 literal or hostname is malformed.
        InvalidPort: The port token is not 1-5 ASCII digits in range.
        PortRequired: No port in *text* and no *default_port*.
        HostNotFound: The lookup failed or returned no address.
    """
    validate_instance(text, str, "text")
    stripped = text.strip()
    if not stripped:
        raise EmptyInput(text)
    if default_port is not None and not is_port(default_port):
        raise InvalidDefaultPort(text, str(default_port))
    if not 0 < match_timeout <= MAX_MATCH_TIMEOUT:
        raise ValueError(
            f"match_timeout must be in (0, {MAX_MATCH_TIMEOUT}], got {match_timeout}"
        )
    if lookup is None:
        lookup = SystemHostLookup()

    # Rule 1: bracketed IPv6, with or without a port
    if stripped.startswith("["):
        literal, sep, rest = stripped[1:].partition("]")
        if not sep or (rest and not rest.startswith(":")):
            raise MalformedEndpoint(text)
        address: IPAddress = _parse_ipv6(text, literal)
        if rest:
            port = _parse_port(text, rest[1:], match_timeout)
        else:
            port = _default_port(text, default_port)
        return ResolvedEndpoint(address, port)

    if "[" in stripped or "]" in stripped:
        raise MalformedEndpoint(text)

    colons = stripped.count(":")

    # Rule 2: bare IPv6
    if colons >= 2:
        if _has_space(stripped):
            raise MalformedEndpoint(text)
        try:
            address = IPv6Address(stripped)
        except ValueError:
            raise MalformedEndpoint(text) from None
        return ResolvedEndpoint(address, _default_port(text, default_port))

    # Rule 3: IPv4 or hostname with an explicit port
    if colons == 1:
        host, _, port_token = stripped.rpartition(":")
        port = _parse_port(text, port_token, match_timeout)
        # The strict shape check covers "<quad>:<port>" as a whole; a numeric
        # host token is only ever parsed, never looked up.
        if _fullmatch(_IPV4_ENDPOINT, stripped, match_timeout):
            address = _parse_ipv4(text, host)
        else:
            address = _lookup_host(text, host, lookup, match_timeout)
        return ResolvedEndpoint(address, port)

    # Rule 4: IPv4 or hostname, default port
    port = _default_port(text, default_port)
    if _fullmatch(_IPV4_LITERAL, stripped, match_timeout):
        address = _parse_ipv4(text, stripped)
    else:
        address = _lookup_host(text, stripped, lookup, match_timeout)
    return ResolvedEndpoint(address, port)
