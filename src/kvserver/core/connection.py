"""
=============================================================================
CLIENT CONNECTION
=============================================================================

Wraps one accepted client socket for exactly one request/response cycle.

=============================================================================
ONE READ, NO ACCUMULATION
=============================================================================

TCP is a byte stream; a request can arrive split across several packets.
A general HTTP server keeps calling recv() until it sees "\r\n\r\n".
This server does not. It calls recv() once with a fixed buffer size and
works with whatever came back:

    Client sends:   "GET /set?a=1 HTTP/1.1\r\nHost: ...\r\n\r\n"

    recv(1000) →    "GET /set?a=1 HTTP/1.1\r\nHost: ...\r\n\r\n"   (usual case)
    recv(1000) →    "GET /se"                   (rare: split packet, truncated route)
    recv(1000) →    first 1000 bytes            (oversized request, rest never read)

Only the request line matters, and it is almost always in the first
segment, so this is good enough for the intended clients (curl, browsers).

=============================================================================
WAITING FOR DATA
=============================================================================

The socket is given a short timeout (the poll interval) so the wait for
data can be interrupted by a shutdown request:

    ┌────────────────────────────────────────────────────────────────┐
    │   while True:                                                   │
    │       recv()  ──► data          → return it                     │
    │               ──► b""           → peer closed, return b""       │
    │               ──► timeout       → still running?                │
    │                                     no  → return None           │
    │                                     yes → past deadline?        │
    │                                             yes → TimeoutError  │
    │                                             no  → loop          │
    └────────────────────────────────────────────────────────────────┘

With no configured timeout there is no deadline: a silent client holds the
server until it sends something, closes, or the server is shut down.

=============================================================================
CONNECTION STATE MACHINE
=============================================================================

    NEW ──► READING ──► PROCESSING ──► WRITING ──► CLOSING ──► CLOSED
     │         │                                      ▲
     └─────────┴──────────────────────────────────────┘
               (dropped: no request, shutdown, timeout)

=============================================================================
"""

import socket
import time
import logging
import uuid
from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, Optional


logger = logging.getLogger(__name__)


# Upper bound on how long close() keeps reading leftover client data
DRAIN_TIMEOUT = 0.5


class ConnectionState(Enum):
    """Connection lifecycle states, used for logging and debugging."""
    NEW = "new"
    READING = "reading"
    PROCESSING = "processing"
    WRITING = "writing"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass
class Connection:
    """
    A single client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short random identifier for log lines.
        state: Current connection state.
        buffer_size: Maximum bytes read for the request.
        timeout: Seconds to wait for the request, None for no limit.
        poll_interval: Granularity of the wait, see module docs.
    """

    socket: socket.socket
    address: tuple

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    buffer_size: int = 1000
    timeout: Optional[float] = None
    poll_interval: float = 1.0

    def __post_init__(self):
        self.socket.setblocking(True)
        self.socket.settimeout(self.poll_interval)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def client_port(self) -> int:
        return self.address[1]

    @property
    def age(self) -> float:
        """Connection age in seconds."""
        return time.time() - self.created_at

    # =========================================================================
    # READING
    # =========================================================================

    def read_request(self, is_running: Callable[[], bool] = lambda: True) -> Optional[bytes]:
        """
        Do the single bounded read for this connection.

        Args:
            is_running: Polled while waiting; returning False abandons the
                        read.

        Returns:
            Up to ``buffer_size`` bytes, b"" if the peer closed or reset
            the connection, or None if shutdown was requested while waiting.

        Raises:
            TimeoutError: If ``timeout`` is set and elapsed with no data.
        """
        self.state = ConnectionState.READING
        deadline = time.monotonic() + self.timeout if self.timeout else None

        while True:
            try:
                return self.socket.recv(self.buffer_size)
            except socket.timeout:
                if not is_running():
                    logger.debug(f"[{self.id}] Read abandoned for shutdown")
                    return None
                if deadline is not None and time.monotonic() >= deadline:
                    raise TimeoutError(f"No request within {self.timeout}s")
            except (ConnectionResetError, BrokenPipeError):
                return b""

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> bool:
        """
        Send response data to the client.

        Uses sendall() so the whole response goes out, not just what fits
        in the kernel buffer.

        Returns:
            True if send succeeded, False if the connection was lost.
        """
        self.state = ConnectionState.WRITING

        try:
            self.socket.settimeout(None)
            self.socket.sendall(data)
            return True
        except OSError as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection.

        Sends FIN first, then drains anything the client sent past the
        read buffer. Closing a socket with unread data makes the kernel
        send RST, which can destroy the response before the client reads
        it.
        """
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSING

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Already disconnected

        try:
            # Stop after DRAIN_TIMEOUT even if the peer keeps sending
            deadline = time.monotonic() + DRAIN_TIMEOUT
            self.socket.settimeout(DRAIN_TIMEOUT)
            while time.monotonic() < deadline and self.socket.recv(1024):
                pass
        except OSError:
            pass  # Includes socket.timeout

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Closed after {self.age * 1000:.1f}ms")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
