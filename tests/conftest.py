"""
pytest configuration and fixtures.
"""

import socket
import threading
from typing import Generator
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kvserver import KVServer, ServerConfig, Store


@pytest.fixture
def store() -> Store:
    """A fresh, empty store."""
    return Store()


@pytest.fixture
def snapshot_path(tmp_path: Path) -> Path:
    """Where the server under test writes its snapshot."""
    return tmp_path / "store"


@pytest.fixture
def config(snapshot_path: Path) -> ServerConfig:
    """Test configuration: OS-assigned port, fast shutdown polling."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,
        poll_interval=0.05,
        store_path=str(snapshot_path),
        log_level="WARNING",
    )


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


def send_raw(port: int, data: bytes, timeout: float = 5.0) -> bytes:
    """Send ``data`` to the server and read until it closes the connection."""
    with socket.create_connection(("127.0.0.1", port), timeout=timeout) as s:
        s.sendall(data)
        chunks = []
        while True:
            chunk = s.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
    return b"".join(chunks)


class TestServer:
    """Test server helper that runs in a background thread."""

    __test__ = False  # Not a test class despite the name

    def __init__(self, server: KVServer):
        self.server = server
        self._thread: threading.Thread = None
        self.error: BaseException = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    def _run(self):
        try:
            self.server.run()
        except BaseException as e:  # Surfaced to the test through .error
            self.error = e

    def start(self):
        """Start server in background thread."""
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def request(self, route: str, method: str = "GET") -> bytes:
        """Send a minimal HTTP request for ``route`` and return the raw reply."""
        return send_raw(self.port, f"{method} {route} HTTP/1.1\r\nHost: test\r\n\r\n".encode())

    def body(self, route: str, method: str = "GET") -> str:
        """Like request(), but return only the decoded body."""
        raw = self.request(route, method)
        return raw.split(b"\r\n\r\n", 1)[1].decode("utf-8")

    def stop(self):
        """Stop the server."""
        self.server.shutdown()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)


@pytest.fixture
def test_server(config: ServerConfig) -> Generator[TestServer, None, None]:
    """A running server on an OS-assigned port."""
    test_srv = TestServer(KVServer(config))
    test_srv.start()

    yield test_srv

    test_srv.stop()
