#!/usr/bin/env python3
"""Consume the detector's report the way the startup script does and size the database."""

import subprocess
import sys

from container_limits.report import parse_assignments

output = subprocess.run(
    [sys.executable, "-m", "container_limits"],
    capture_output=True,
    text=True,
    check=True,
).stdout
env = parse_assignments(output)

settings: dict[str, str] = {}
if "MEMORY_LIMIT_IN_BYTES" in env and "NO_MEMORY_LIMIT" not in env:
    memory_mb = int(env["MEMORY_LIMIT_IN_BYTES"]) // (1024 * 1024)
    settings["shared_buffers"] = f"{max(memory_mb // 4, 128)}MB"
    settings["effective_cache_size"] = f"{max(memory_mb * 3 // 4, 128)}MB"
if "NUMBER_OF_CORES" in env:
    cores = int(env["NUMBER_OF_CORES"])
    settings["max_worker_processes"] = str(max(cores, 8))
    settings["max_parallel_workers"] = str(cores)

for name, value in settings.items():
    print(f"{name} = {value}")
