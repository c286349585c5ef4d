"""
=============================================================================
KEY-VALUE SERVER
=============================================================================

Ties the pieces together into the connection loop.

=============================================================================
ARCHITECTURE OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         KVServer                                    │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    ┌──────────────┐   ┌──────────────┐   ┌────────────────┐         │
    │    │ SocketServer │   │    Router    │   │ SnapshotWriter │         │
    │    │ (accept loop)│   │ (/set, /get) │   │  (file dump)   │         │
    │    └──────┬───────┘   └──────┬───────┘   └───────┬────────┘         │
    │           │                  │                   │                  │
    │           ▼                  ▼                   ▼                  │
    │    ┌──────────────┐   ┌──────────────────────────────────┐          │
    │    │  Connection  │   │              Store               │          │
    │    └──────────────┘   └──────────────────────────────────┘          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The server owns the Store. Handlers get it passed in; nothing else can
reach it.

=============================================================================
REQUEST LIFECYCLE
=============================================================================

    1. ACCEPT        SocketServer accepts one client
    2. READ          single recv() of at most buffer_size bytes
    3. PARSE         method + route, or None → drop connection
    4. DISPATCH      Router picks set / get / help by prefix
    5. RESPOND       fixed header + body, always 200
    6. PERSIST       whole store rewritten to the snapshot file
    7. CLOSE         connection closed, back to 1

Step 6 runs for every request that reached step 4, even if step 5 failed
because the client went away. A dropped connection (step 3) skips it.

=============================================================================
ERRORS
=============================================================================

    client went away while we write    → warning, still persist, continue
    client silent past timeout         → warning, drop, continue
    snapshot file cannot be written    → OSError propagates, server stops
    address cannot be bound            → OSError propagates, server stops

=============================================================================
"""

import logging
from typing import Optional

from .config import ServerConfig
from .store import Store
from .persistence import SnapshotWriter
from .core.socket_server import SocketServer
from .core.connection import Connection, ConnectionState
from .http.request import parse_request
from .http.router import Router
from .handlers import default_router


logger = logging.getLogger(__name__)


class KVServer:
    """
    The key-value server.

    Usage:
        server = KVServer(ServerConfig(port=4000))
        server.run()  # Blocks until Ctrl+C

    Embedding (e.g. in tests), with the server on a background thread:
        server = KVServer(ServerConfig(port=0, poll_interval=0.1))
        thread = threading.Thread(target=server.run)
        thread.start()
        server.wait_until_ready()
        ...
        server.shutdown()
        thread.join()
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        store: Optional[Store] = None,
        router: Optional[Router] = None,
    ):
        self.config = config or ServerConfig()
        self.config.validate()

        self.store = store if store is not None else Store()
        self._router = router or default_router()
        self._snapshot = SnapshotWriter(self.config.store_path)
        self._socket_server = SocketServer(self.config)

        self._closed = False

    @property
    def router(self) -> Router:
        return self._router

    @property
    def address(self):
        return self._socket_server.address

    @property
    def is_running(self) -> bool:
        return self._socket_server.is_running

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self):
        """
        Serve connections until shutdown() or SIGINT/SIGTERM.

        The store is released when this returns, whichever way it returns.
        """
        try:
            self._socket_server.start(self.handle_connection)
        finally:
            self.close()

    def shutdown(self):
        """Ask the loop to stop after the current connection."""
        self._socket_server.shutdown()

    def close(self):
        """
        Release the store. Idempotent.

        Used both after a normal stop and after an interrupt.
        """
        if self._closed:
            return
        self._closed = True

        logger.info("Exiting...")
        self.store.clear()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_until_ready(timeout)

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def handle_connection(self, conn: Connection):
        """
        Handle one client from read to close.

        Raises:
            OSError: If the snapshot cannot be written.
        """
        with conn:
            if self.process(conn):
                self._snapshot.write(self.store)
                logger.info("Connection closed!")

    def process(self, conn: Connection) -> bool:
        """
        Read, dispatch and respond.

        Returns:
            True if a request was dispatched (and the snapshot is due),
            False if the connection was dropped before dispatch.
        """
        try:
            raw = conn.read_request(is_running=lambda: self.is_running)
        except TimeoutError as e:
            logger.warning(f"[{conn.id}] {e}, dropping connection")
            return False

        if raw is None:
            return False

        request = parse_request(raw)
        if request is None:
            logger.debug(f"[{conn.id}] No request line, dropping connection")
            return False

        conn.state = ConnectionState.PROCESSING
        logger.debug(f"[{conn.id}] {request.method} {request.route}")

        response = self._router.handle(self.store, request)
        conn.send_response(response.to_bytes())

        return True
