"""
=============================================================================
KVSERVER CLI ENTRY POINT
=============================================================================

    # Run with defaults (127.0.0.1:4000, snapshot in ./store)
    python -m kvserver

    # Custom port and snapshot file
    python -m kvserver --port 5000 --store /tmp/kv-store

    # Verbose, no colors (e.g. when redirecting to a file)
    python -m kvserver --log-level DEBUG --no-color 2> kv.log

Settings not given on the command line come from the environment
(KV_PORT, KV_STORE_PATH, ...), see ServerConfig.from_env().

=============================================================================
"""

import argparse
import logging
import sys

from . import __version__
from .config import ServerConfig
from .log import setup_logging
from .server import KVServer


logger = logging.getLogger("kvserver")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kvserver",
        description="Minimal key-value store over raw TCP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m kvserver                        # Run with defaults
  python -m kvserver --port 5000            # Custom port
  python -m kvserver --store /tmp/kv        # Custom snapshot file
  python -m kvserver --timeout 10           # Drop clients silent for 10s
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=None,
        help="Host to bind to (default: 127.0.0.1)"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to listen on (default: 4000)"
    )

    parser.add_argument(
        "--buffer-size", "-b",
        type=int,
        default=None,
        help="Bytes read per request; the rest is ignored (default: 1000)"
    )

    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help="Seconds to wait for a client's request (default: wait forever)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # PERSISTENCE / LOGGING
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--store", "-s",
        dest="store_path",
        default=None,
        help="Snapshot file rewritten after every request (default: store)"
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors in log output"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"kvserver {__version__}"
    )

    return parser


def make_config(args: argparse.Namespace) -> ServerConfig:
    """Environment first, then any CLI flags that were actually given."""
    config = ServerConfig.from_env()

    for name in ("host", "port", "buffer_size", "timeout", "store_path", "log_level"):
        value = getattr(args, name)
        if value is not None:
            setattr(config, name, value)

    if args.no_color:
        config.color = False

    return config


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = make_config(args)
        config.validate()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    setup_logging(config.log_level, color=config.color)

    try:
        KVServer(config).run()
    except OSError as e:
        logger.error(f"{e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
