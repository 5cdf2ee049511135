"""
Service configuration with environment overrides.
"""

import os
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class ServiceConfig:
    """
    Auction service settings.

    Attributes:
        host: Interface the HTTP server binds to
        port: HTTP port
        log_level: Root logging level name
        service_name: Name reported by /health
    """

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    service_name: str = "proxy-auction"

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")
        if not 0 < self.port < 65536:
            raise ValueError(f"Port out of range: {self.port}")

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Create config from environment variables"""
        port = os.getenv("AUCTION_PORT", "8080")
        try:
            port = int(port)
        except ValueError:
            raise ValueError(f"AUCTION_PORT must be an integer, got {port!r}")

        return cls(
            host=os.getenv("AUCTION_HOST", "0.0.0.0"),
            port=port,
            log_level=os.getenv("AUCTION_LOG_LEVEL", "INFO"),
            service_name=os.getenv("AUCTION_SERVICE_NAME", "proxy-auction"),
        )

    def configure_logging(self):
        """Apply log_level to the root logger."""
        logging.basicConfig(
            level=self.log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        logging.getLogger().setLevel(self.log_level)
