"""Configuration settings for the endpoint client.

This module defines the transport configuration used when no explicit
HTTP client is handed to the request executor: timeouts, connection
limits, redirect and HTTP/2 behaviour, the default User-Agent and the
logging level. Settings are loaded from environment variables prefixed
with ``ENDPOINT_CLIENT_`` and from ``.env`` files.

Endpoint semantics (URLs, methods, headers, bodies) are never read from
configuration; they belong to the endpoint values themselves.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Transport settings loaded from environment variables.

    :param connect_timeout: Connection timeout in seconds
    :type connect_timeout: float
    :param read_timeout: Read timeout in seconds
    :type read_timeout: float
    :param write_timeout: Write timeout in seconds
    :type write_timeout: float
    :param pool_timeout: Connection pool acquisition timeout in seconds
    :type pool_timeout: float
    :param max_keepalive_connections: Maximum number of keepalive connections
    :type max_keepalive_connections: int
    :param max_connections: Maximum total number of connections
    :type max_connections: int
    :param keepalive_expiry: Keepalive connection expiry time in seconds
    :type keepalive_expiry: float
    :param follow_redirects: Whether the transport follows redirects
    :type follow_redirects: bool
    :param http2: Enable HTTP/2 when the ``h2`` package is installed
    :type http2: bool
    :param user_agent: Default User-Agent header
    :type user_agent: str
    :param log_level: Logging level for the package logger
    :type log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    """

    model_config = SettingsConfigDict(
        env_prefix="ENDPOINT_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
    )

    # Timeouts
    connect_timeout: float = Field(5.0, description="Connection timeout (s)")
    read_timeout: float = Field(30.0, description="Read timeout (s)")
    write_timeout: float = Field(10.0, description="Write timeout (s)")
    pool_timeout: float = Field(5.0, description="Pool timeout (s)")

    # Connection limits
    max_keepalive_connections: int = Field(
        10, description="Maximum number of keepalive connections"
    )
    max_connections: int = Field(20, description="Maximum total connections")
    keepalive_expiry: float = Field(30.0, description="Keepalive expiry (s)")

    # Protocol behaviour
    follow_redirects: bool = Field(True, description="Follow HTTP redirects")
    http2: bool = Field(False, description="Enable HTTP/2")
    user_agent: str = Field(
        "endpoint-client", description="Default User-Agent header"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Logging level"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any letter case.

        :param v: Raw log level value
        :return: Upper-cased log level
        """
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator(
        "connect_timeout", "read_timeout", "write_timeout", "pool_timeout"
    )
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Reject non-positive timeouts.

        :param v: Timeout in seconds
        :type v: float
        :return: The validated timeout
        :rtype: float
        :raises ValueError: If the timeout is not positive
        """
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v


settings = Settings()
"""Global settings instance for the endpoint client.

Created once at import and used by the client manager for its defaults.
"""
