"""
Usage page served for every route that is not /set or /get.
"""

from ..store import Store
from ..http.response import Response, text


HELP_TEXT = (
    "Hello there!\n"
    "\n"
    "This little server responds to the following routes:\n"
    "- `/set?somekey=somevalue`: Store the passed key and value in memory\n"
    "- `/get?key=somekey`: Return the value stored at `somekey`\n"
    "\n"
    "For any other route you will see this message.\n"
)


def handle_help(store: Store, suffix: str) -> Response:
    """Return the static usage text. Does not touch the store."""
    return text(HELP_TEXT)
