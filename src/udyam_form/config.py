"""
Configuration module for the Udyam form backend.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default).lower()).lower() == "true"


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class UdyamFormConfig:
    """Configuration settings for the Udyam form backend."""

    # HTTP API settings
    server_host: str = "0.0.0.0"
    server_port: int = 4000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    # Persistence (unset means "not configured": submissions are acknowledged, not stored)
    database_url: str | None = None

    # Schema provider settings
    extraction_url: str | None = None
    extraction_timeout: float = 5.0
    schema_cache_dir: str = "schema/generated"

    # Scraper settings
    target_url: str = "https://udyamregistration.gov.in/UdyamRegistration.aspx"
    navigation_timeout_ms: int = 180_000
    navigation_retry_delay: float = 3.0
    headless: bool = True
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36"
    )
    accept_language: str = "en-US,en;q=0.9"

    # PIN code lookup
    pincode_api_url: str = "https://api.postalpincode.in/pincode"
    pincode_timeout: float = 5.0

    # Sanitizer
    escape_html: bool = True

    # MCP Server settings
    mcp_transport: str = "stdio"  # stdio or sse
    mcp_port: int = 8080

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "UdyamFormConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            server_host=os.getenv("UDYAM_SERVER_HOST", _defaults.server_host),
            server_port=int(os.getenv("PORT", str(_defaults.server_port))),
            cors_origins=_env_list("UDYAM_CORS_ORIGINS", _defaults.cors_origins),
            database_url=os.getenv("DATABASE_URL") or _defaults.database_url,
            extraction_url=os.getenv("UDYAM_EXTRACTION_URL", _defaults.extraction_url) or None,
            extraction_timeout=float(os.getenv("UDYAM_EXTRACTION_TIMEOUT", str(_defaults.extraction_timeout))),
            schema_cache_dir=os.getenv("UDYAM_SCHEMA_CACHE_DIR", _defaults.schema_cache_dir),
            target_url=os.getenv("UDYAM_TARGET_URL", _defaults.target_url),
            navigation_timeout_ms=int(os.getenv("UDYAM_NAVIGATION_TIMEOUT_MS", str(_defaults.navigation_timeout_ms))),
            navigation_retry_delay=float(os.getenv("UDYAM_NAVIGATION_RETRY_DELAY", str(_defaults.navigation_retry_delay))),
            headless=_env_bool("UDYAM_HEADLESS", _defaults.headless),
            pincode_api_url=os.getenv("UDYAM_PINCODE_API_URL", _defaults.pincode_api_url),
            pincode_timeout=float(os.getenv("UDYAM_PINCODE_TIMEOUT", str(_defaults.pincode_timeout))),
            escape_html=_env_bool("UDYAM_ESCAPE_HTML", _defaults.escape_html),
            mcp_transport=os.getenv("MCP_TRANSPORT", _defaults.mcp_transport),
            mcp_port=int(os.getenv("MCP_PORT", str(_defaults.mcp_port))),
            log_level=os.getenv("UDYAM_LOG_LEVEL", _defaults.log_level).upper(),
        )


config = UdyamFormConfig.from_env()


def get_config() -> UdyamFormConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> UdyamFormConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
