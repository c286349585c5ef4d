"""
=============================================================================
SEQUENTIAL TCP SOCKET SERVER
=============================================================================

Listens on a TCP address and hands accepted sockets, one at a time, to a
callback. The callback runs to completion before the next accept().

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      SocketServer Internals                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    start(handler)                                                    │
    │        ├──► _create_socket()   socket() + SO_REUSEADDR               │
    │        ├──► bind() / listen()                                        │
    │        ├──► _setup_signals()   SIGINT/SIGTERM → shutdown()           │
    │        └──► _accept_loop()                                           │
    │                 while running:                                       │
    │                     accept()           (wakes every poll_interval)   │
    │                     handler(conn)      (blocks the loop)             │
    │                                                                      │
    │    shutdown()        running = False                                 │
    │    _cleanup()        restore signals, close listening socket         │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
SIGNALS
=============================================================================

SIGINT (Ctrl+C) and SIGTERM only flip the running flag. Python runs
signal handlers between bytecodes of the main thread, which could be in
the middle of a store update; tearing anything down from inside the
handler would race with that. Instead the accept loop notices the flag
within one poll interval, returns, and the owner of the state cleans up
on the normal path.

Handlers can only be installed from the main thread. When the server runs
in another thread (tests), signals are left alone and shutdown() must be
called directly.

=============================================================================
"""

import socket
import signal
import logging
import threading
from typing import Optional, Callable, Tuple

from ..config import ServerConfig
from .connection import Connection


logger = logging.getLogger(__name__)


class SocketServer:
    """
    Low-level sequential TCP server.

    Usage:
        def handle_connection(conn: Connection):
            with conn:
                ...

        server = SocketServer(config)
        server.start(handle_connection)  # Blocks until shutdown
    """

    def __init__(self, config: ServerConfig):
        self.config = config

        self._socket: Optional[socket.socket] = None
        self._running = False

        # Set once listen() succeeded, cleared again on cleanup
        self._ready_event = threading.Event()

        self._original_handlers: dict = {}

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def address(self) -> Tuple[str, int]:
        """
        The bound (host, port).

        Differs from the configured port when the config asks for port 0.
        """
        if self._socket is not None:
            return self._socket.getsockname()[:2]
        return (self.config.host, self.config.port)

    def _create_socket(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        # Restarting right after a stop would otherwise fail with
        # "Address already in use" while the old socket sits in TIME_WAIT
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        # accept() wakes up periodically to check the running flag
        sock.settimeout(self.config.poll_interval)

        return sock

    def _setup_signals(self):
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Not on the main thread, skipping signal handlers")
            return

        def shutdown_handler(signum, frame):
            signal_name = signal.Signals(signum).name
            logger.debug(f"Received {signal_name}")
            self.shutdown()

        self._original_handlers[signal.SIGTERM] = signal.signal(signal.SIGTERM, shutdown_handler)
        self._original_handlers[signal.SIGINT] = signal.signal(signal.SIGINT, shutdown_handler)

    def _restore_signals(self):
        for sig, handler in self._original_handlers.items():
            signal.signal(sig, handler)
        self._original_handlers.clear()

    def start(self, connection_handler: Callable[[Connection], None]):
        """
        Bind, listen and run the accept loop. Blocks until shutdown().

        Args:
            connection_handler: Called with each accepted Connection. The
                                next accept() waits until it returns.

        Raises:
            OSError: If the address cannot be bound.
        """
        self._socket = self._create_socket()

        try:
            self._socket.bind((self.config.host, self.config.port))
        except OSError as e:
            logger.error(f"Failed to bind to {self.config.host}:{self.config.port}: {e}")
            self._socket.close()
            self._socket = None
            raise

        self._socket.listen(self.config.backlog)

        self._running = True
        self._setup_signals()

        host, port = self.address
        logger.info(f"Listening on {host}:{port}")
        self._ready_event.set()

        try:
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: Callable[[Connection], None]):
        while self._running:
            logger.info("Waiting for the connection...")

            try:
                client_socket, client_address = self._accept()
            except OSError as e:
                if self._running:
                    logger.error(f"Accept error: {e}")
                    raise
                break

            if client_socket is None:
                break

            conn = Connection(
                socket=client_socket,
                address=client_address,
                buffer_size=self.config.buffer_size,
                timeout=self.config.timeout,
                poll_interval=self.config.poll_interval,
            )

            logger.info("Connection established!")
            logger.debug(f"[{conn.id}] Client {conn.client_ip}:{conn.client_port}")

            connection_handler(conn)

    def _accept(self):
        """
        Wait for the next client.

        Returns:
            (socket, address), or (None, None) once shutdown was requested.
        """
        while self._running:
            try:
                return self._socket.accept()
            except socket.timeout:
                continue
        return None, None

    def shutdown(self):
        """
        Ask the accept loop to stop.

        Safe to call from a signal handler, another thread, or more than
        once.
        """
        self._running = False

    def _cleanup(self):
        self._restore_signals()

        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass
            self._socket = None

        self._running = False
        self._ready_event.clear()
        logger.debug("Socket server stopped")

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the server is listening. Returns False on timeout."""
        return self._ready_event.wait(timeout)
