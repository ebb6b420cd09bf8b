"""Unit tests for the daemonaddr exception hierarchy.

Tests verify:
- issubclass relationships match the documented tree
- EndpointError subclasses remain catchable as ValueError
- input/token attributes and message rendering
"""

import pytest

from daemonaddr.core.exceptions import (
    ConfigurationError,
    DaemonAddrError,
    EmptyInput,
    EndpointError,
    HostNotFound,
    InvalidAddress,
    InvalidDefaultPort,
    InvalidPort,
    MalformedEndpoint,
    PortRequired,
    ResolutionTimeoutError,
)


ENDPOINT_ERRORS = (
    EmptyInput,
    MalformedEndpoint,
    InvalidAddress,
    InvalidPort,
    PortRequired,
    HostNotFound,
    InvalidDefaultPort,
)


# =============================================================================
# Hierarchy Tests
# =============================================================================


class TestExceptionHierarchy:
    """Verify issubclass relationships match the documented tree."""

    @pytest.mark.parametrize("exc_cls", ENDPOINT_ERRORS)
    def test_endpoint_errors(self, exc_cls: type) -> None:
        assert issubclass(exc_cls, EndpointError)
        assert issubclass(exc_cls, DaemonAddrError)
        assert issubclass(exc_cls, ValueError)

    @pytest.mark.parametrize("exc_cls", [ConfigurationError, ResolutionTimeoutError])
    def test_non_endpoint_errors(self, exc_cls: type) -> None:
        assert issubclass(exc_cls, DaemonAddrError)
        assert not issubclass(exc_cls, EndpointError)
        assert not issubclass(exc_cls, ValueError)

    def test_caught_as_value_error(self) -> None:
        with pytest.raises(ValueError):
            raise InvalidPort("host:99999", "99999")

    def test_siblings_are_distinct(self) -> None:
        with pytest.raises(InvalidPort):
            try:
                raise InvalidPort("host:x", "x")
            except InvalidAddress:
                pytest.fail("InvalidPort must not be caught as InvalidAddress")


# =============================================================================
# Attribute and Message Tests
# =============================================================================


class TestEndpointErrorDetails:
    """input, token and the rendered message."""

    def test_attributes(self) -> None:
        err = InvalidAddress("256.0.0.1:80", "256.0.0.1")
        assert err.input == "256.0.0.1:80"
        assert err.token == "256.0.0.1"

    def test_message_with_token(self) -> None:
        err = InvalidPort("host:70000", "70000")
        assert str(err) == "Invalid port: '70000' (input='host:70000')"

    def test_message_without_token(self) -> None:
        err = EmptyInput("   ")
        assert err.token is None
        assert str(err) == "Endpoint is empty (input='   ')"

    def test_custom_message(self) -> None:
        err = HostNotFound("ghost:80", "ghost", "lookup returned no addresses")
        assert str(err) == "lookup returned no addresses: 'ghost' (input='ghost:80')"

    @pytest.mark.parametrize(
        ("exc_cls", "prefix"),
        [
            (EmptyInput, "Endpoint is empty"),
            (MalformedEndpoint, "Malformed endpoint"),
            (InvalidAddress, "Invalid address"),
            (InvalidPort, "Invalid port"),
            (PortRequired, "No port specified"),
            (HostNotFound, "Host not found"),
            (InvalidDefaultPort, "Invalid default port"),
        ],
    )
    def test_default_messages(self, exc_cls: type[EndpointError], prefix: str) -> None:
        assert str(exc_cls("x")).startswith(prefix)

    def test_plain_errors_take_message(self) -> None:
        assert str(ConfigurationError("bad yaml")) == "bad yaml"
        assert str(ResolutionTimeoutError("too slow")) == "too slow"
