"""
HTTP-ish protocol pieces: request line parsing, prefix routing and the
fixed-header response.
"""

from .request import Request, parse_request, parse_pairs, tokenize
from .response import HEADER, Response, text
from .router import Router, Route, RouteMatch, Handler

__all__ = [
    "Request",
    "parse_request",
    "parse_pairs",
    "tokenize",
    "HEADER",
    "Response",
    "text",
    "Router",
    "Route",
    "RouteMatch",
    "Handler",
]
