"""
=============================================================================
REQUEST HANDLERS
=============================================================================

Every handler has the same signature:

    handler(store: Store, suffix: str) -> Response

AVAILABLE HANDLERS:

1. handle_set   (/set)
   - Stores each key=value pair of the suffix
   - One confirmation line per stored pair

2. handle_get   (/get)
   - Looks up each key=<name> pair of the suffix
   - One line per lookup, found or not

3. handle_help  (anything else)
   - Static usage text, no parsing

=============================================================================
USAGE
=============================================================================

    from kvserver.handlers import default_router

    router = default_router()
    response = router.handle(store, request)

=============================================================================
"""

from ..http.router import Router
from .commands import handle_set, handle_get, NO_PAIRS_MESSAGE, NO_KEYS_MESSAGE
from .help import handle_help, HELP_TEXT


def default_router() -> Router:
    """Router wired with the /set, /get and help handlers."""
    router = Router(default=handle_help)
    router.add_route("/set", handle_set, name="set")
    router.add_route("/get", handle_get, name="get")
    return router


__all__ = [
    "handle_set",
    "handle_get",
    "handle_help",
    "default_router",
    "HELP_TEXT",
    "NO_PAIRS_MESSAGE",
    "NO_KEYS_MESSAGE",
]
