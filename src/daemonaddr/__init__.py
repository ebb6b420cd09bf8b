r"""daemonaddr -- Resolve tracing daemon addresses into validated endpoints.

Turns strings such as ``127.0.0.1:2000``, ``[::1]:2000`` or
``xray-daemon:2000`` (typically from ``AWS_XRAY_DAEMON_ADDRESS``) into an
IP address and port ready for a UDP transport, or fails with a typed error.

Imports flow strictly downward:

```text
          resolver / daemon     Rule-ordered parsing, env loading
             /        \
          core        utils     Config, logging, errors | DNS lookups
             \        /
              models            Pure frozen dataclasses (zero I/O)
```

Note:
    Top-level imports (``from daemonaddr import resolve``) use lazy loading
    and resolve on first access.
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("daemonaddr")

__all__ = [
    "DaemonConfig",
    "DnspythonHostLookup",
    "EndpointError",
    "HostLookup",
    "ResolvedEndpoint",
    "StaticHostLookup",
    "SystemHostLookup",
    "load_daemon_endpoint",
    "resolve",
    "resolve_async",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "DaemonConfig": ("daemonaddr.core", "DaemonConfig"),
    "EndpointError": ("daemonaddr.core", "EndpointError"),
    "ResolvedEndpoint": ("daemonaddr.models", "ResolvedEndpoint"),
    "DnspythonHostLookup": ("daemonaddr.utils", "DnspythonHostLookup"),
    "HostLookup": ("daemonaddr.utils", "HostLookup"),
    "StaticHostLookup": ("daemonaddr.utils", "StaticHostLookup"),
    "SystemHostLookup": ("daemonaddr.utils", "SystemHostLookup"),
    "resolve": ("daemonaddr.resolver", "resolve"),
    "load_daemon_endpoint": ("daemonaddr.daemon", "load_daemon_endpoint"),
    "resolve_async": ("daemonaddr.daemon", "resolve_async"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'daemonaddr' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
