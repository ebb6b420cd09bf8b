"""Infrastructure layer: exceptions, structured logging, YAML and configuration.

Depends on ``daemonaddr.models`` and ``daemonaddr.utils``.

Attributes:
    DaemonConfig: Pydantic model describing where the daemon address comes
        from. See [DaemonConfig][daemonaddr.core.config.DaemonConfig].
    Logger: Structured logger supporting key=value and JSON output modes.
        See [Logger][daemonaddr.core.logger.Logger].
    load_yaml: Safe YAML loading. See [load_yaml()][daemonaddr.core.yaml.load_yaml].
"""

from .config import DaemonConfig, LookupBackend, LookupConfig
from .exceptions import (
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
from .logger import Logger, StructuredFormatter, format_kv_pairs
from .yaml import load_yaml


__all__ = [
    "ConfigurationError",
    "DaemonAddrError",
    "DaemonConfig",
    "EmptyInput",
    "EndpointError",
    "HostNotFound",
    "InvalidAddress",
    "InvalidDefaultPort",
    "InvalidPort",
    "Logger",
    "LookupBackend",
    "LookupConfig",
    "MalformedEndpoint",
    "PortRequired",
    "ResolutionTimeoutError",
    "StructuredFormatter",
    "format_kv_pairs",
    "load_yaml",
]
