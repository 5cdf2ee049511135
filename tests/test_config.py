"""
Tests for service configuration.
"""

import sys
import os
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest
from marketplace.config import ServiceConfig


class TestServiceConfig:
    """Test defaults and environment overrides"""

    def test_defaults(self, monkeypatch):
        for var in ["AUCTION_HOST", "AUCTION_PORT", "AUCTION_LOG_LEVEL", "AUCTION_SERVICE_NAME"]:
            monkeypatch.delenv(var, raising=False)

        config = ServiceConfig.from_env()

        assert config.host == "0.0.0.0"
        assert config.port == 8080
        assert config.log_level == "INFO"
        assert config.service_name == "proxy-auction"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("AUCTION_HOST", "127.0.0.1")
        monkeypatch.setenv("AUCTION_PORT", "9090")
        monkeypatch.setenv("AUCTION_LOG_LEVEL", "debug")
        monkeypatch.setenv("AUCTION_SERVICE_NAME", "auctions-eu")

        config = ServiceConfig.from_env()

        assert config.host == "127.0.0.1"
        assert config.port == 9090
        assert config.log_level == "DEBUG"
        assert config.service_name == "auctions-eu"

    def test_invalid_port(self, monkeypatch):
        monkeypatch.setenv("AUCTION_PORT", "eighty")

        with pytest.raises(ValueError):
            ServiceConfig.from_env()

    def test_port_out_of_range(self):
        with pytest.raises(ValueError):
            ServiceConfig(port=70000)

    def test_unknown_log_level(self):
        with pytest.raises(ValueError):
            ServiceConfig(log_level="chatty")

    def test_configure_logging(self):
        root = logging.getLogger()
        previous = root.level
        try:
            ServiceConfig(log_level="WARNING").configure_logging()
            assert root.level == logging.WARNING
        finally:
            root.setLevel(previous)
