"""
=============================================================================
SNAPSHOT PERSISTENCE
=============================================================================

After every handled request the whole store is written to disk:

    store                         file "store"
    ┌──────────────────┐          ┌──────────────────┐
    │ "a" ──► "1"      │  write   │ a: 1             │
    │ "b" ──► "2"      │ ───────► │ b: 2             │
    └──────────────────┘          └──────────────────┘

The file is opened in "w" mode, which truncates it, then rewritten from
scratch. There is no temp file and no rename, so a crash mid-write can
leave a truncated snapshot.

No escaping is done. A key or value containing ": " or a newline will not
read back unambiguously. The snapshot is never read back by the server.

=============================================================================
"""

import logging
from pathlib import Path
from typing import Union

from .store import Store


logger = logging.getLogger(__name__)


def format_snapshot(store: Store) -> str:
    """Render the store as ``key: value`` lines in iteration order."""
    return "".join(f"{key}: {value}\n" for key, value in store.items())


class SnapshotWriter:
    """
    Writes the store to a fixed path.

    Usage:
        writer = SnapshotWriter("store")
        writer.write(store)
    """

    def __init__(self, path: Union[str, Path] = "store"):
        self.path = Path(path)

    def write(self, store: Store) -> None:
        """
        Truncate the snapshot file and write every entry.

        Raises:
            OSError: If the file cannot be created or written. The caller
                     treats this as fatal.
        """
        snapshot = format_snapshot(store)
        with open(self.path, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(snapshot)

        logger.debug(f"Wrote {len(store)} entries to {self.path}")
