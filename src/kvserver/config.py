"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the key-value server.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m kvserver --port 5000                            │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── KV_PORT=5000 python -m kvserver                           │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class ServerConfig:
    """
    Configuration for the key-value server.

    Development:
        ServerConfig(log_level="DEBUG", store_path="/tmp/store")

    Tests:
        ServerConfig(port=0, poll_interval=0.1, store_path=tmp_path / "store")
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """The IP address to bind to."""

    port: int = 4000
    """
    The port number to listen on.
    0 lets the OS pick a free port (useful in tests).
    """

    backlog: int = 128
    """Maximum number of queued connections waiting for accept()."""

    buffer_size: int = 1000
    """
    Size of the single read done per connection, in bytes.
    Anything the client sends beyond this is never read.
    """

    timeout: Optional[float] = None
    """
    Seconds to wait for a client to send its request.
    None = wait forever; a silent client stalls the server.
    """

    poll_interval: float = 1.0
    """
    How often blocking accept()/recv() wake up to check for shutdown.
    Lower values make Ctrl+C feel snappier at the cost of idle wakeups.
    """

    # ─────────────────────────────────────────────────────────────────────
    # PERSISTENCE
    # ─────────────────────────────────────────────────────────────────────

    store_path: str = "store"
    """Snapshot file, relative to the working directory."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR)."""

    color: bool = True
    """Colorize level names in log output."""

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        KV_HOST         Server host (default: 127.0.0.1)
        KV_PORT         Server port (default: 4000)
        KV_BUFFER_SIZE  Read buffer size in bytes (default: 1000)
        KV_STORE_PATH   Snapshot file (default: store)
        KV_TIMEOUT      Client read timeout in seconds (default: none)
        KV_LOG_LEVEL    Logging level (default: INFO)
        KV_NO_COLOR     Any non-empty value disables colors

        =====================================================================
        """
        timeout = os.getenv("KV_TIMEOUT")
        return cls(
            host=os.getenv("KV_HOST", "127.0.0.1"),
            port=int(os.getenv("KV_PORT", "4000")),
            buffer_size=int(os.getenv("KV_BUFFER_SIZE", "1000")),
            store_path=os.getenv("KV_STORE_PATH", "store"),
            timeout=float(timeout) if timeout else None,
            log_level=os.getenv("KV_LOG_LEVEL", "INFO"),
            color=not os.getenv("KV_NO_COLOR"),
        )

    def validate(self) -> None:
        """Validate configuration values. Raises ValueError on the first bad one."""
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be > 0")

        if not str(self.store_path):
            raise ValueError("store_path must not be empty")

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Invalid log level: {self.log_level}")
