"""CLI entry point: resolve a daemon address and print the endpoint.

With an explicit ADDRESS the string is resolved directly; without one the
address is read from the environment exactly as an instrumented
application would (see [load_daemon_endpoint()][daemonaddr.daemon.load_daemon_endpoint]).

Exit codes: 0 on success, 1 when the address is rejected, 2 for usage
errors (bad flags, a missing or invalid ``--config`` file).

Examples:
    ```bash
    python -m daemonaddr 127.0.0.1:2000
    python -m daemonaddr xray-daemon --default-port 2000 --lookup dnspython
    AWS_XRAY_DAEMON_ADDRESS=[::1]:3000 python -m daemonaddr --json
    python -m daemonaddr --config config/daemon.yaml --log-level DEBUG
    ```
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from daemonaddr.core.config import DaemonConfig, LookupBackend
from daemonaddr.core.exceptions import ConfigurationError, EndpointError
from daemonaddr.core.logger import Logger, StructuredFormatter
from daemonaddr.daemon import load_daemon_endpoint
from daemonaddr.models.constants import MAX_PORT, MIN_PORT
from daemonaddr.models.endpoint import ResolvedEndpoint
from daemonaddr.resolver import resolve


logger = Logger("cli")


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a port number: {value!r}") from None
    if not MIN_PORT <= port <= MAX_PORT:
        raise argparse.ArgumentTypeError(f"port must be between {MIN_PORT} and {MAX_PORT}")
    return port


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="daemonaddr",
        description="Resolve a tracing daemon address to an IP endpoint",
    )
    parser.add_argument(
        "address",
        nargs="?",
        help="Address to resolve (default: read from the configured environment variable)",
    )
    parser.add_argument("--default-port", type=_port, help="Port for addresses without one")
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument(
        "--lookup",
        choices=[b.value for b in LookupBackend],
        help="Hostname lookup backend (default: from config, else system)",
    )
    parser.add_argument(
        "--lookup-timeout",
        type=float,
        help="Per-query DNS timeout in seconds (dnspython backend)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level (default: WARNING)",
    )
    parser.add_argument("--json", action="store_true", help="Print the endpoint as JSON")
    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    """Install a ``StructuredFormatter`` handler on the root logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level))


def build_config(args: argparse.Namespace) -> DaemonConfig:
    """Load the YAML config (if any) and apply command-line overrides."""
    config = DaemonConfig.from_yaml(args.config) if args.config else DaemonConfig()
    data: dict[str, Any] = config.model_dump(mode="json")
    if args.default_port is not None:
        data["default_port"] = args.default_port
    if args.lookup is not None:
        data["lookup"]["backend"] = args.lookup
    if args.lookup_timeout is not None:
        data["lookup"]["timeout"] = args.lookup_timeout
    return DaemonConfig.from_dict(data)


def format_endpoint(endpoint: ResolvedEndpoint, *, as_json: bool) -> str:
    if not as_json:
        return str(endpoint)
    return json.dumps(
        {
            "address": str(endpoint.address),
            "port": endpoint.port,
            "version": endpoint.version,
        }
    )


def main(argv: list[str] | None = None) -> int:
    """Resolve and print; return the process exit code."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = build_config(args)
        if args.address is not None:
            endpoint = resolve(
                args.address,
                config.default_port,
                lookup=config.lookup.build(),
                match_timeout=config.match_timeout,
            )
        else:
            endpoint = load_daemon_endpoint(config)
    except EndpointError as e:
        logger.error("resolve_failed", input=e.input, token=e.token, error=type(e).__name__)
        print(f"error: {e}", file=sys.stderr)
        return 1
    except (ConfigurationError, FileNotFoundError) as e:
        logger.error("config_failed", error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(format_endpoint(endpoint, as_json=args.json))
    return 0


def cli() -> None:
    """Synchronous entry point for console_scripts."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
