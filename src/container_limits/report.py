from __future__ import annotations

import subprocess
import sys
from collections.abc import Mapping

from .core import detect
from .diagnostics import fail

__all__ = ["main", "parse_assignments", "render"]


def render(env: Mapping[str, str]) -> str:
    """Format variables as ``KEY=VALUE`` lines, one per entry."""
    return "".join(f"{key}={value}\n" for key, value in env.items())


def parse_assignments(text: str) -> dict[str, str]:
    """Read a report back into a mapping, as the supervisor does before exporting it."""
    env: dict[str, str] = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        key, sep, value = line.partition("=")
        if not sep or not key:
            raise ValueError(f"Line {lineno} is not a KEY=VALUE assignment: {line!r}")
        env[key] = value
    return env


def main() -> int:
    """Print the detected limits for the startup script to export."""
    try:
        env = detect()
    except subprocess.CalledProcessError as e:
        fail(
            f"Processor count utility failed (exit {e.returncode}):\n"
            f"Command: {' '.join(map(str, e.cmd))}\n"
            f"stderr: {e.stderr}"
        )
    except OSError as e:
        fail(f"Could not run processor count utility: {e}")

    sys.stdout.write(render(env))
    return 0
