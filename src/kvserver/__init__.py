"""
=============================================================================
KVSERVER - A Tiny Key-Value Store Over Raw TCP
=============================================================================

A minimal key-value server speaking just enough HTTP for curl and a
browser address bar:

    $ curl 'localhost:4000/set?name=alice?color=blue'
    The value of the key "name" has been set to "alice".
    The value of the key "color" has been set to "blue".

    $ curl 'localhost:4000/get?key=name?key=age'
    The key "name" has the value "alice".
    The key "age" doesn't have any value.

    $ cat store
    name: alice
    color: blue

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    kvserver/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m kvserver)
    ├── server.py            # KVServer: the connection loop
    ├── config.py            # ServerConfig dataclass
    ├── store.py             # In-memory string-to-string store
    ├── persistence.py       # Snapshot writer
    ├── log.py               # Colored level logging
    ├── core/
    │   ├── socket_server.py # Sequential accept loop, signals
    │   └── connection.py    # Single-read client connection
    ├── http/
    │   ├── request.py       # Request line and pair parsing
    │   ├── response.py      # Fixed header + text body
    │   └── router.py        # Prefix routing
    └── handlers/
        ├── commands.py      # /set and /get
        └── help.py          # Everything else

=============================================================================
QUICK START
=============================================================================

    from kvserver import KVServer, ServerConfig

    KVServer(ServerConfig(port=4000)).run()

One client is served at a time. After every request the whole store is
written to the file "store" in the working directory.

=============================================================================
"""

__version__ = "1.0.0"

from .server import KVServer
from .config import ServerConfig
from .store import Store

__all__ = ["KVServer", "ServerConfig", "Store", "__version__"]
