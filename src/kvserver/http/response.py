"""
=============================================================================
RESPONSE RENDERING
=============================================================================

Every response the server sends has the same shape: a fixed preamble
followed by a plain-text body.

    ┌─────────────────────────────────────────────────────────────────────┐
    │  HTTP/1.1 200 OK\r\n                       ◄── status line          │
    │  Connection: close\r\n                     ◄── one response per conn│
    │  Content-Type: text/plain\r\n                                       │
    │  \r\n                                      ◄── end of headers       │
    │  The value of the key "a" has been set to "1".\n   ◄── body        │
    └─────────────────────────────────────────────────────────────────────┘

There is no Content-Length header. The client knows the body is complete
when the server closes the connection, which it always does.

The status is always 200. Partial success is only visible in the body
text, never in the status code.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import List


HEADER = (
    "HTTP/1.1 200 OK\r\n"
    "Connection: close\r\n"
    "Content-Type: text/plain\r\n"
    "\r\n"
)


@dataclass
class Response:
    """
    A response body under construction.

    Handlers append lines as they process pairs, then the connection loop
    renders the whole thing with to_bytes().

    Example:
        response = Response()
        response.write('The key "a" has the value "1".\\n')
        conn.send_response(response.to_bytes())
    """

    _parts: List[str] = field(default_factory=list, repr=False)

    def write(self, text: str) -> "Response":
        """Append text to the body. Returns self for chaining."""
        self._parts.append(text)
        return self

    @property
    def body(self) -> str:
        return "".join(self._parts)

    def to_bytes(self) -> bytes:
        """Render the fixed header followed by the body as UTF-8."""
        return (HEADER + self.body).encode("utf-8", errors="surrogateescape")


def text(body: str) -> Response:
    """Build a response from a complete body string."""
    return Response().write(body)
