"""
=============================================================================
IN-MEMORY KEY-VALUE STORE
=============================================================================

The Store is the only stateful component of the server. Everything else
(parsing, routing, responses) is a pure function of the request bytes and
the current contents of this mapping.

=============================================================================
DATA MODEL
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                            Store                                    │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    "name"   ──►  "alice"                                             │
    │    "color"  ──►  "blue"                                              │
    │    "answer" ──►  "42"                                                │
    │                                                                      │
    │    - keys are unique                                                 │
    │    - exactly one current value per key                               │
    │    - no delete operation: entries only appear or get overwritten    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Iteration follows insertion order (a plain dict), which is also the order
lines appear in the persisted snapshot.

=============================================================================
OWNERSHIP
=============================================================================

Python strings are immutable and independently owned, so overwriting an
entry drops the store's reference to the old value. Nothing outside the
store holds a reference it can mutate through.

The store is not thread-safe. The server handles connections strictly one
at a time, so there is never more than one writer.

=============================================================================
"""

from typing import Dict, Iterator, Optional, Tuple


class Store:
    """
    String-to-string mapping owned by the server.

    Usage:
        store = Store()
        store.set("name", "alice")
        store.get("name")      # "alice"
        store.get("missing")   # None
    """

    def __init__(self):
        self._data: Dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        """
        Insert or overwrite the value for ``key``.

        After the call ``get(key)`` returns exactly ``value``.
        """
        # Rebinding drops the previous value; an existing key keeps its position
        self._data[key] = value

    def get(self, key: str) -> Optional[str]:
        """Return the current value for ``key``, or None if it was never set."""
        return self._data.get(key)

    def items(self) -> Iterator[Tuple[str, str]]:
        """
        Iterate over ``(key, value)`` pairs in the store's current order.

        The iterator is one-shot and read-only. Mutating the store while
        iterating raises RuntimeError, as with any dict.
        """
        return iter(self._data.items())

    def clear(self) -> None:
        """Release every entry. Safe to call more than once."""
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        return f"Store(entries={len(self._data)})"
