"""daemonaddr exception hierarchy.

Every rejection made while turning a daemon address string into an
endpoint has its own exception type, so callers can distinguish a typo in
the port from an unresolvable hostname without parsing messages.

Exception hierarchy:

```text
DaemonAddrError (base -- never raised directly)
├── ConfigurationError        -- bad YAML, config validation failure
├── ResolutionTimeoutError    -- async resolution exceeded its deadline
└── EndpointError (also ValueError) -- the address string was rejected
    ├── EmptyInput            -- empty or whitespace-only input
    ├── MalformedEndpoint     -- matches no accepted shape
    ├── InvalidAddress        -- bad IPv4/IPv6 literal or hostname syntax
    ├── InvalidPort           -- non-numeric or out-of-range port token
    ├── PortRequired          -- no port in input and no default given
    ├── HostNotFound          -- lookup failed or returned nothing
    └── InvalidDefaultPort    -- caller-supplied default port out of range
```

See Also:
    [resolve()][daemonaddr.resolver.resolve]: Raises every
        [EndpointError][daemonaddr.core.exceptions.EndpointError] subclass.
    [load_daemon_endpoint()][daemonaddr.daemon.load_daemon_endpoint]:
        Catches [EndpointError][daemonaddr.core.exceptions.EndpointError]
        when falling back to the configured default address.
"""

from __future__ import annotations


class DaemonAddrError(Exception):
    """Base exception for all daemonaddr errors.

    Never raised directly -- always use a specific subclass.
    """


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(DaemonAddrError):
    """Invalid or missing configuration (YAML, env vars, CLI flags).

    See Also:
        [load_yaml()][daemonaddr.core.yaml.load_yaml]: YAML loading function
            whose failures are wrapped in this exception.
        [DaemonConfig][daemonaddr.core.config.DaemonConfig]: Configuration
            model whose validation errors are wrapped in this exception.
    """


# ---------------------------------------------------------------------------
# Timeouts
# ---------------------------------------------------------------------------


class ResolutionTimeoutError(DaemonAddrError):
    """Resolution did not finish within the caller's deadline.

    Raised only by [resolve_async()][daemonaddr.daemon.resolve_async]; the
    synchronous resolver itself has no deadline beyond the lookup's own.
    """


# ---------------------------------------------------------------------------
# Endpoint parsing
# ---------------------------------------------------------------------------


class EndpointError(DaemonAddrError, ValueError):
    """Base for every rejection of an endpoint string.

    Subclasses ``ValueError`` so that code written against plain
    ``ValueError`` keeps working.

    Attributes:
        input: The raw string passed to the resolver.
        token: The sub-token that failed (address or port text), or
            ``None`` when the whole input is at fault.
    """

    default_message = "Invalid endpoint"

    def __init__(
        self,
        input: str,  # noqa: A002
        token: str | None = None,
        message: str | None = None,
    ) -> None:
        self.input = input
        self.token = token
        text = message or self.default_message
        if token is not None:
            text = f"{text}: {token!r}"
        super().__init__(f"{text} (input={input!r})")


class EmptyInput(EndpointError):
    """The input was empty or contained only whitespace."""

    default_message = "Endpoint is empty"


class MalformedEndpoint(EndpointError):
    """The input did not match any accepted endpoint shape."""

    default_message = "Malformed endpoint"


class InvalidAddress(EndpointError):
    """An address-shaped token failed structural or range validation."""

    default_message = "Invalid address"


class InvalidPort(EndpointError):
    """A port token was non-numeric or outside ``[0, 65535]``."""

    default_message = "Invalid port"


class PortRequired(EndpointError):
    """No port was present in the input and no default port was supplied."""

    default_message = "No port specified"


class HostNotFound(EndpointError):
    """Hostname resolution failed or produced no usable address."""

    default_message = "Host not found"


class InvalidDefaultPort(EndpointError):
    """The caller-supplied default port is not a valid port number."""

    default_message = "Invalid default port"
