"""
=============================================================================
REQUEST LINE PARSER
=============================================================================

The server only understands the first two whitespace-separated tokens of
whatever the client sends. Headers, HTTP version and body are ignored.

=============================================================================
REQUEST ANATOMY
=============================================================================

    GET /set?name=alice?color=blue HTTP/1.1\r\nHost: localhost\r\n\r\n
    ─┬─ ──────────────┬───────────── ───────────────┬──────────────────
     │                │                             │
   Method           Route                       Ignored
  (unused)            │
           ┌──────────┴───────────┐
           │                      │
        Prefix                 Suffix
         /set          ?name=alice?color=blue
                                  │
                     ┌────────────┴────────────┐
                     │                         │
                name=alice                color=blue      ← pairs ("?")
                 │     │                   │     │
                key  value                key  value      ← tokens ("=")

Pairs are separated by "?" rather than "&". Tokenizing skips empty
tokens, so "??a=1" and "a==1" parse the same as "?a=1" and "a=1".

=============================================================================
WHAT IS NOT AN ERROR
=============================================================================

Nothing in here raises on malformed input:

    - fewer than two tokens in the buffer   → parse_request() returns None
    - a pair without "="                    → yields (key, None)
    - a pair with extra "=" tokens          → extras are ignored

The handlers decide which pairs count. The connection loop decides what
to do with a None request (drop the connection without a response).

=============================================================================
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple


Pair = Tuple[Optional[str], Optional[str]]


@dataclass
class Request:
    """
    A parsed request line.

    Attributes:
        method: First token (GET, POST, anything). Not used for routing.
        route:  Second token, e.g. "/get?key=name".
        raw:    The bytes the request was parsed from.
    """

    method: str
    route: str
    raw: bytes = b""


def tokenize(text: str, delimiter: str) -> List[str]:
    """Split ``text`` on ``delimiter`` and drop empty tokens."""
    return [token for token in text.split(delimiter) if token]


def parse_request(raw: bytes) -> Optional[Request]:
    """
    Parse the method and route out of a raw request buffer.

    Args:
        raw: Bytes from a single read on the client socket.

    Returns:
        A Request, or None when the buffer holds fewer than two tokens
        (empty read, peer closed early, or a truncated request line).
    """
    # Invalid UTF-8 maps to lone surrogates, which encode back to the same bytes
    text = raw.decode("utf-8", errors="surrogateescape")
    tokens = text.split(None, 2)

    if len(tokens) < 2:
        return None

    method, route = tokens[0], tokens[1]
    return Request(method=method, route=route, raw=raw)


def parse_pairs(suffix: str) -> Iterator[Pair]:
    """
    Decode a "?"-separated query suffix into ``(first, second)`` tuples.

    Either element is None when the pair does not provide it:

        >>> list(parse_pairs("?a=1?b?=c"))
        [('a', '1'), ('b', None), ('c', None)]

    Args:
        suffix: Everything after the route prefix, e.g. "?a=1?b=2".

    Yields:
        One tuple per non-empty pair, in input order.
    """
    for pair in tokenize(suffix, "?"):
        tokens = tokenize(pair, "=")
        first = tokens[0] if len(tokens) > 0 else None
        second = tokens[1] if len(tokens) > 1 else None
        yield first, second
