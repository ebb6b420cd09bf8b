"""
Unit tests for core.config module.

Tests:
- DaemonConfig defaults and field constraints
- default_address validation (syntax only, no DNS)
- from_dict / from_yaml error wrapping
- LookupConfig.build() backend selection and pinned hosts
"""

from ipaddress import IPv4Address, IPv6Address
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from daemonaddr.core.config import DaemonConfig, LookupBackend, LookupConfig
from daemonaddr.core.exceptions import ConfigurationError
from daemonaddr.models.constants import AddressFamily
from daemonaddr.utils.dns import DnspythonHostLookup, PinnedHostLookup, SystemHostLookup


# =============================================================================
# DaemonConfig
# =============================================================================


class TestDaemonConfigDefaults:
    """An empty configuration is usable."""

    def test_defaults(self) -> None:
        config = DaemonConfig()
        assert config.address_env == "AWS_XRAY_DAEMON_ADDRESS"
        assert config.default_address == "127.0.0.1:2000"
        assert config.default_port is None
        assert config.match_timeout == 1.0
        assert config.fallback_on_error is True
        assert config.lookup.backend == LookupBackend.SYSTEM

    def test_from_empty_dict(self) -> None:
        assert DaemonConfig.from_dict({}) == DaemonConfig()


class TestDaemonConfigValidation:
    """Field constraints and default_address checks."""

    @pytest.mark.parametrize(
        "address",
        ["10.0.0.1:3000", "[::1]:2000", "xray-daemon:2000", "daemon.example.com:2000"],
    )
    def test_valid_default_address(self, address: str) -> None:
        assert DaemonConfig(default_address=address).default_address == address

    def test_hostname_default_address_not_looked_up(self) -> None:
        with patch("socket.getaddrinfo") as mock_gai:
            DaemonConfig(default_address="xray-daemon:2000")
        mock_gai.assert_not_called()

    def test_portless_default_address_with_default_port(self) -> None:
        config = DaemonConfig(default_address="xray-daemon", default_port=2000)
        assert config.default_port == 2000

    @pytest.mark.parametrize(
        "address",
        ["256.0.0.1:2000", "127.0.0.1:99999", "xray-daemon", "[::1", "bad_host!:2000"],
    )
    def test_invalid_default_address(self, address: str) -> None:
        with pytest.raises(ConfigurationError, match="default_address is invalid"):
            DaemonConfig.from_dict({"default_address": address})

    @pytest.mark.parametrize("port", [-1, 65536])
    def test_default_port_range(self, port: int) -> None:
        with pytest.raises(ConfigurationError):
            DaemonConfig.from_dict({"default_port": port})

    @pytest.mark.parametrize("timeout", [0, -1.0, 61.0])
    def test_match_timeout_range(self, timeout: float) -> None:
        with pytest.raises(ConfigurationError):
            DaemonConfig.from_dict({"match_timeout": timeout})

    def test_empty_address_env_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            DaemonConfig.from_dict({"address_env": ""})

    def test_error_chains_validation_error(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            DaemonConfig.from_dict({"default_port": "not-a-port"})
        assert isinstance(exc_info.value.__cause__, ValidationError)


class TestDaemonConfigFromYaml:
    """YAML loading."""

    def test_full_file(self, tmp_path: Path) -> None:
        path = tmp_path / "daemon.yaml"
        path.write_text(
            "address_env: TRACE_DAEMON\n"
            'default_address: "xray-daemon:2000"\n'
            "fallback_on_error: false\n"
            "lookup:\n"
            "  backend: dnspython\n"
            "  timeout: 2.0\n"
            "  family: ipv4\n"
            "  hosts:\n"
            "    xray-daemon: [10.0.0.5]\n"
        )
        config = DaemonConfig.from_yaml(path)
        assert config.address_env == "TRACE_DAEMON"
        assert config.fallback_on_error is False
        assert config.lookup.backend == LookupBackend.DNSPYTHON
        assert config.lookup.timeout == 2.0
        assert config.lookup.family == AddressFamily.IPV4
        assert config.lookup.hosts == {"xray-daemon": [IPv4Address("10.0.0.5")]}

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert DaemonConfig.from_yaml(path) == DaemonConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            DaemonConfig.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_contents(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("lookup:\n  backend: carrier-pigeon\n")
        with pytest.raises(ConfigurationError):
            DaemonConfig.from_yaml(path)


# =============================================================================
# LookupConfig
# =============================================================================


class TestLookupConfigBuild:
    """Backend selection."""

    def test_system_backend(self) -> None:
        lookup = LookupConfig(family=AddressFamily.IPV6).build()
        assert isinstance(lookup, SystemHostLookup)
        assert lookup.family == AddressFamily.IPV6

    def test_dnspython_backend(self) -> None:
        lookup = LookupConfig(backend=LookupBackend.DNSPYTHON, timeout=1.5).build()
        assert isinstance(lookup, DnspythonHostLookup)
        assert lookup.timeout == 1.5

    def test_pinned_hosts_answered_locally(self) -> None:
        config = LookupConfig(hosts={"Xray-Daemon": ["10.0.0.5", "2001:db8::5"]})
        lookup = config.build()
        assert isinstance(lookup, PinnedHostLookup)
        assert isinstance(lookup.backend, SystemHostLookup)
        with patch("socket.getaddrinfo") as mock_gai:
            result = lookup.lookup("xray-daemon.")
        mock_gai.assert_not_called()
        assert result == [IPv4Address("10.0.0.5"), IPv6Address("2001:db8::5")]

    def test_unpinned_hosts_reach_backend(self) -> None:
        config = LookupConfig(hosts={"xray-daemon": ["10.0.0.5"]})
        infos = [(2, 2, 17, "", ("192.0.2.1", 0))]
        with patch("socket.getaddrinfo", return_value=infos) as mock_gai:
            result = config.build().lookup("other.example.com")
        mock_gai.assert_called_once()
        assert result == [IPv4Address("192.0.2.1")]

    def test_invalid_pinned_address(self) -> None:
        with pytest.raises(ValueError):
            LookupConfig(hosts={"xray-daemon": ["not-an-ip"]})

    @pytest.mark.parametrize("timeout", [0, 60.5])
    def test_timeout_range(self, timeout: float) -> None:
        with pytest.raises(ValueError):
            LookupConfig(timeout=timeout)

    def test_build_is_a_lookup(self) -> None:
        backend = MagicMock()
        backend.lookup.return_value = [IPv4Address("192.0.2.9")]
        with patch("daemonaddr.core.config.SystemHostLookup", return_value=backend):
            assert LookupConfig().build() is backend
