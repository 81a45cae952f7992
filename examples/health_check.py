#!/usr/bin/env python3
"""Probe a server the way the container's liveness check does."""

import socket

from container_limits.healthcheck import is_ready, wait_for_ready

with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
    server.bind(("127.0.0.1", 0))
    server.listen()
    port = server.getsockname()[1]

    wait_for_ready("127.0.0.1", port, timeout=5, interval=0.1)
    print(f"Server on port {port} ready: {is_ready('127.0.0.1', port)}")
