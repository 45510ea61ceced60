"""Configuration and environment handling for Attio MCP."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv


class ServerConfig:
    """MCP server transport configuration."""

    def __init__(self):
        self.transport: str = os.getenv("ATTIO_MCP_TRANSPORT", "stdio")
        self.host: str = os.getenv("ATTIO_MCP_HOST", "127.0.0.1")
        self.port: int = int(os.getenv("ATTIO_MCP_PORT", "8000"))


class Config:
    """Central configuration object."""

    def __init__(self):
        # Load .env from the working directory (or a parent), then the checkout
        cwd_env = find_dotenv(usecwd=True)
        if cwd_env:
            load_dotenv(cwd_env)
        env_path = Path(__file__).parent.parent.parent / ".env"
        if env_path.exists():
            load_dotenv(env_path)

        # Attio API
        self.api_key: Optional[str] = os.getenv("ATTIO_API_KEY")
        self.base_url: str = os.getenv("ATTIO_BASE_URL", "https://api.attio.com/v2")
        self.timeout_s: float = float(os.getenv("ATTIO_TIMEOUT_S", "30"))

        # Tool defaults
        self.default_limit: int = int(os.getenv("ATTIO_DEFAULT_LIMIT", "25"))
        self.activity_limit: int = int(os.getenv("ATTIO_ACTIVITY_LIMIT", "10"))

        # Logging
        self.log_level: str = os.getenv("ATTIO_LOG_LEVEL", "INFO")

        # Server transport
        self.server = ServerConfig()

    def has_api_key(self) -> bool:
        """Check whether an Attio API key is configured."""
        return bool(self.api_key)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging to stderr.

    stdout carries the stdio transport, so log output must never go there.
    """
    logging.basicConfig(
        level=(level or config.log_level).upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Global config instance
config = Config()
