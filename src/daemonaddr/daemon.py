"""Load the tracing daemon endpoint from the environment.

This is the configuration-loading side of address resolution: it decides
*which* string to resolve (environment variable or configured default),
calls [resolve()][daemonaddr.resolver.resolve], logs the outcome, and
applies the fallback policy. The resolver itself stays silent and
side-effect free apart from the hostname lookup.

Examples:
    ```python
    import os

    os.environ["AWS_XRAY_DAEMON_ADDRESS"] = "[::1]:3000"
    endpoint = load_daemon_endpoint()
    endpoint.to_sockaddr()   # ('::1', 3000, 0, 0)
    ```
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Mapping

from daemonaddr.core.config import DaemonConfig
from daemonaddr.core.exceptions import EndpointError, ResolutionTimeoutError
from daemonaddr.core.logger import Logger
from daemonaddr.models.constants import DEFAULT_MATCH_TIMEOUT
from daemonaddr.models.endpoint import ResolvedEndpoint
from daemonaddr.resolver import resolve
from daemonaddr.utils.dns import DEFAULT_LOOKUP_TIMEOUT, HostLookup


logger = Logger("daemonaddr.daemon")


def load_daemon_endpoint(
    config: DaemonConfig | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    lookup: HostLookup | None = None,
    log: Logger | None = None,
) -> ResolvedEndpoint:
    """Resolve the daemon endpoint named by the environment or the config default.

    The variable named by ``config.address_env`` wins when it is set to a
    non-blank value. If it is rejected and ``config.fallback_on_error`` is
    true, the configured ``default_address`` is resolved instead.

    Args:
        config: Resolution settings. Defaults to ``DaemonConfig()``.
        environ: Environment mapping to read. Defaults to ``os.environ``.
        lookup: Hostname lookup override. Defaults to ``config.lookup.build()``.
        log: Logger override.

    Returns:
        The resolved endpoint.

    Raises:
        EndpointError: If the chosen address is rejected and no fallback
            applies, or if the default address itself is rejected.
    """
    config = config if config is not None else DaemonConfig()
    env = os.environ if environ is None else environ
    lookup = lookup if lookup is not None else config.lookup.build()
    log = log if log is not None else logger

    raw = env.get(config.address_env)
    from_env = raw is not None and bool(raw.strip())
    text = raw if from_env else config.default_address
    source = "env" if from_env else "default"

    try:
        endpoint = resolve(
            text, config.default_port, lookup=lookup, match_timeout=config.match_timeout
        )
    except EndpointError as e:
        log.info(
            "daemon_address_invalid",
            source=source,
            variable=config.address_env,
            input=e.input,
            token=e.token,
            error=type(e).__name__,
        )
        if not from_env or not config.fallback_on_error:
            raise
        endpoint = resolve(
            config.default_address,
            config.default_port,
            lookup=lookup,
            match_timeout=config.match_timeout,
        )
        log.info("daemon_address_fallback", address=str(endpoint.address), port=endpoint.port)
        return endpoint

    log.info(
        "using_daemon_address",
        source=source,
        address=str(endpoint.address),
        port=endpoint.port,
    )
    return endpoint


async def resolve_async(
    text: str,
    default_port: int | None = None,
    *,
    lookup: HostLookup | None = None,
    match_timeout: float = DEFAULT_MATCH_TIMEOUT,
    timeout: float = DEFAULT_LOOKUP_TIMEOUT,  # noqa: ASYNC109
) -> ResolvedEndpoint:
    """Run [resolve()][daemonaddr.resolver.resolve] in a worker thread with a deadline.

    The blocking lookup runs via ``asyncio.to_thread`` so the event loop
    stays responsive. On expiry the worker thread is abandoned, not killed;
    its result is discarded.

    Raises:
        ResolutionTimeoutError: If resolution takes longer than *timeout*.
        EndpointError: Any rejection raised by the resolver.
    """
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(
                resolve, text, default_port, lookup=lookup, match_timeout=match_timeout
            ),
            timeout=timeout,
        )
    except TimeoutError as e:
        raise ResolutionTimeoutError(f"Resolving {text!r} exceeded {timeout}s") from e
