"""Tests for hustle.run_config module."""

from __future__ import annotations

import pytest

from hustle.run_config import RunConfig


class TestRunConfig:
    """Tests for RunConfig dataclass."""

    def test_defaults(self) -> None:
        """Default values are set correctly."""
        config = RunConfig()
        assert config.daemonize is False
        assert config.environment == "development"
        assert config.link is None
        assert config.force is False
        assert config.ports == "3000:3000"
        assert config.service is None
        assert config.verbose is False

    def test_frozen(self) -> None:
        """RunConfig is immutable (frozen)."""
        config = RunConfig()
        with pytest.raises(AttributeError):
            config.ports = "80:80"  # type: ignore[misc]

    def test_hashable(self) -> None:
        """Frozen dataclass is hashable."""
        hash(RunConfig(service="web"))

    def test_is_production(self) -> None:
        assert RunConfig(environment="production").is_production is True
        assert RunConfig().is_production is False


class TestFromCli:
    """Tests for RunConfig.from_cli factory method."""

    def test_defaults(self) -> None:
        """Missing flags fall back to defaults."""
        assert RunConfig.from_cli() == RunConfig()

    def test_no_links_disables_mount(self) -> None:
        """--no-links becomes an empty link."""
        config = RunConfig.from_cli(no_links=True, link="-v /a:/b")
        assert config.link == ""

    def test_link_passed_through(self) -> None:
        config = RunConfig.from_cli(link="-v /a:/b")
        assert config.link == "-v /a:/b"

    def test_env_and_ports(self) -> None:
        config = RunConfig.from_cli(env="production", ports="8080:80")
        assert config.environment == "production"
        assert config.ports == "8080:80"

    def test_empty_service_is_none(self) -> None:
        assert RunConfig.from_cli(service="").service is None

    def test_flags(self) -> None:
        config = RunConfig.from_cli(daemonize=True, force=True, verbose=True, service="db")
        assert config.daemonize is True
        assert config.force is True
        assert config.verbose is True
        assert config.service == "db"
