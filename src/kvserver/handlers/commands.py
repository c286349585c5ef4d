"""
=============================================================================
SET AND GET HANDLERS
=============================================================================

Both handlers take the store and the route suffix, walk the pairs in
input order, and write one body line per pair they act on.

    /set?a=1?b=2
        ├── ("a", "1")  → store.set("a", "1")  → 'The value of the key "a" ...'
        └── ("b", "2")  → store.set("b", "2")  → 'The value of the key "b" ...'

    /get?key=a?key=missing?color=x
        ├── ("key", "a")        → found    → 'The key "a" has the value "1".'
        ├── ("key", "missing")  → missing  → 'The key "missing" doesn't ...'
        └── ("color", "x")      → not a "key" option, ignored

A pair that does not qualify is skipped silently. When no pair in the
whole suffix qualified, the body is a single fallback sentence without a
trailing newline.

=============================================================================
"""

import logging

from ..store import Store
from ..http.request import parse_pairs
from ..http.response import Response


logger = logging.getLogger(__name__)


GET_OPTION = "key"

NO_PAIRS_MESSAGE = "No correct key-value pairs have been provided."
NO_KEYS_MESSAGE = "No keys have been requested."


def handle_set(store: Store, suffix: str) -> Response:
    """
    Store every ``key=value`` pair in ``suffix``.

    Pairs missing a key or a value are skipped and not counted.
    """
    response = Response()
    count = 0

    for key, value in parse_pairs(suffix):
        if key is None or value is None:
            continue

        store.set(key, value)
        response.write(f'The value of the key "{key}" has been set to "{value}".\n')
        count += 1

    if count == 0:
        response.write(NO_PAIRS_MESSAGE)

    logger.debug(f"Set {count} pair(s)")
    return response


def handle_get(store: Store, suffix: str) -> Response:
    """
    Look up every ``key=<name>`` pair in ``suffix``.

    Only pairs whose option is literally "key" count. The store is never
    modified.
    """
    response = Response()
    count = 0

    for option, key in parse_pairs(suffix):
        if option != GET_OPTION or key is None:
            continue

        value = store.get(key)
        if value is not None:
            response.write(f'The key "{key}" has the value "{value}".\n')
        else:
            response.write(f'The key "{key}" doesn\'t have any value.\n')
        count += 1

    if count == 0:
        response.write(NO_KEYS_MESSAGE)

    logger.debug(f"Looked up {count} key(s)")
    return response
