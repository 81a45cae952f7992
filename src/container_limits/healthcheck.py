"""Readiness and liveness probe for the database inside the container.

The server counts as alive as soon as it accepts TCP connections.
"""

from __future__ import annotations

import argparse
import os
import socket
import time
from collections.abc import Sequence

__all__ = ["DEFAULT_HOST", "DEFAULT_PORT", "is_ready", "main", "wait_for_ready"]

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5432


def is_ready(host: str, port: int, timeout: float = 1.0) -> bool:
    """Try one TCP connection to the server."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


def wait_for_ready(host: str, port: int, timeout: float = 30, interval: float = 1.0) -> None:
    """Poll the server until it accepts connections or ``timeout`` runs out."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        if is_ready(host, port, timeout=interval):
            return
        time.sleep(interval)
    raise TimeoutError(f"Server {host}:{port} did not become ready in {timeout}s")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="container-healthcheck",
        description="Exit 0 when the database accepts TCP connections.",
    )
    parser.add_argument("--host", default=os.environ.get("DB_HOST", DEFAULT_HOST))
    parser.add_argument(
        "--port", type=int, default=os.environ.get("DB_PORT", str(DEFAULT_PORT))
    )
    parser.add_argument("--timeout", type=float, default=1.0, help="seconds per attempt")
    parser.add_argument(
        "--wait",
        type=float,
        default=None,
        metavar="SECONDS",
        help="keep polling for up to SECONDS instead of probing once",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Probe the database once, or wait for it with ``--wait``."""
    args = _build_parser().parse_args(argv)
    if args.wait is None:
        return 0 if is_ready(args.host, args.port, timeout=args.timeout) else 1
    try:
        wait_for_ready(args.host, args.port, timeout=args.wait, interval=args.timeout)
    except TimeoutError:
        return 1
    return 0
