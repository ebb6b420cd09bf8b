"""Pydantic configuration models for daemon address resolution.

[DaemonConfig][daemonaddr.core.config.DaemonConfig] describes where the
daemon address comes from (an environment variable), what to use when it is
absent, and how hostnames are looked up. Every field has a default, so an
empty YAML file or ``DaemonConfig()`` is a working configuration pointing at
``127.0.0.1:2000``.

Examples:
    ```yaml
    address_env: AWS_XRAY_DAEMON_ADDRESS
    default_address: "127.0.0.1:2000"
    default_port: 2000
    fallback_on_error: true
    lookup:
      backend: dnspython
      timeout: 2.0
      family: ipv4
    ```

See Also:
    [load_daemon_endpoint()][daemonaddr.daemon.load_daemon_endpoint]:
        Consumer of this configuration.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, Field, IPvAnyAddress, ValidationError, model_validator

from daemonaddr.models.constants import (
    DAEMON_ADDRESS_ENV,
    DEFAULT_DAEMON_ADDRESS,
    DEFAULT_MATCH_TIMEOUT,
    MAX_MATCH_TIMEOUT,
    MAX_PORT,
    MIN_PORT,
    AddressFamily,
)
from daemonaddr.utils.dns import (
    DEFAULT_LOOKUP_TIMEOUT,
    DnspythonHostLookup,
    HostLookup,
    PinnedHostLookup,
    StaticHostLookup,
    SystemHostLookup,
)

from .exceptions import ConfigurationError, EndpointError, HostNotFound
from .yaml import load_yaml


class LookupBackend(StrEnum):
    """Hostname lookup implementation selected by configuration."""

    SYSTEM = "system"
    DNSPYTHON = "dnspython"


class LookupConfig(BaseModel):
    """Hostname lookup settings.

    ``hosts`` pins names to fixed addresses; pinned names never reach the
    backend.
    """

    backend: LookupBackend = Field(
        default=LookupBackend.SYSTEM,
        description="Lookup implementation: system resolver or dnspython",
    )
    timeout: float = Field(
        default=DEFAULT_LOOKUP_TIMEOUT,
        gt=0.0,
        le=60.0,
        description="Per-query timeout in seconds (dnspython backend only)",
    )
    family: AddressFamily = Field(
        default=AddressFamily.ANY,
        description="Restrict lookups to IPv4 or IPv6 candidates",
    )
    hosts: dict[str, list[IPvAnyAddress]] = Field(
        default_factory=dict,
        description="Static hostname to address table consulted before the backend",
    )

    def build(self) -> HostLookup:
        """Instantiate the configured [HostLookup][daemonaddr.utils.dns.HostLookup]."""
        backend: HostLookup
        if self.backend == LookupBackend.DNSPYTHON:
            backend = DnspythonHostLookup(timeout=self.timeout, family=self.family)
        else:
            backend = SystemHostLookup(family=self.family)
        if not self.hosts:
            return backend
        return PinnedHostLookup(StaticHostLookup(self.hosts), backend)


class DaemonConfig(BaseModel):
    """Where to find the daemon address and how to resolve it.

    Attributes:
        address_env: Environment variable holding the daemon address.
        default_address: Address used when the variable is unset or blank,
            and as the fallback when resolution fails.
        default_port: Port applied to addresses that carry none.
        match_timeout: Bound on each pattern match performed by the resolver.
        fallback_on_error: Return the default endpoint instead of raising
            when the configured address is rejected.
        lookup: Hostname lookup settings.
    """

    address_env: str = Field(
        default=DAEMON_ADDRESS_ENV,
        min_length=1,
        description="Environment variable name for the daemon address",
    )
    default_address: str = Field(
        default=DEFAULT_DAEMON_ADDRESS,
        min_length=1,
        description="Address used when the environment variable is unset",
    )
    default_port: int | None = Field(
        default=None,
        ge=MIN_PORT,
        le=MAX_PORT,
        description="Port for addresses without one (None = port required)",
    )
    match_timeout: float = Field(
        default=DEFAULT_MATCH_TIMEOUT,
        gt=0.0,
        le=MAX_MATCH_TIMEOUT,
        description="Seconds allowed for each address pattern match",
    )
    fallback_on_error: bool = Field(
        default=True,
        description="Use default_address when the configured address is invalid",
    )
    lookup: LookupConfig = Field(default_factory=LookupConfig)

    @model_validator(mode="after")
    def _check_default_address(self) -> Self:
        """Ensure ``default_address`` is syntactically valid, without DNS."""
        # Local import: the resolver module imports this package's exceptions.
        from daemonaddr.resolver import resolve

        try:
            resolve(
                self.default_address,
                self.default_port,
                lookup=StaticHostLookup({}),
                match_timeout=self.match_timeout,
            )
        except HostNotFound:
            pass
        except EndpointError as e:
            raise ValueError(f"default_address is invalid: {e}") from None
        return self

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Validate a configuration mapping.

        Raises:
            ConfigurationError: If *data* fails validation.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid daemon configuration: {e}") from e

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> Self:
        """Load and validate a YAML configuration file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigurationError: If the YAML or its contents are invalid.
        """
        return cls.from_dict(load_yaml(config_path))
