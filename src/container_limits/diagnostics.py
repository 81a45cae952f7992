from __future__ import annotations

import sys
from typing import NoReturn


# --------------------------------------------------------------------------- #
# Warnings
# --------------------------------------------------------------------------- #
def warn(what: str) -> None:
    """Report a limit that could not be detected; never fatal."""
    print(f"Warning: Can't detect {what}", file=sys.stderr)  # noqa: T201


# --------------------------------------------------------------------------- #
# Pretty failure printer
# --------------------------------------------------------------------------- #
def fail(msg: str) -> NoReturn:
    """Print a framed error and exit with status 1."""
    header = "=" * 70
    print(f"\n{header}\n[ERROR] {msg}\n{header}\n", file=sys.stderr)  # noqa: T201
    sys.exit(1)
