from __future__ import annotations

import subprocess
from typing import Protocol

from .diagnostics import warn
from .helpers import find_executable, parse_int

__all__ = ["NPROC_EXE", "NprocSource", "ProcessorCountSource"]

NPROC_EXE = "nproc"


class ProcessorCountSource(Protocol):
    """Anything that reports the processing units visible to this process."""

    def count(self) -> int | None:
        """Return the processor count, ``None`` when it cannot be determined."""
        ...


class NprocSource:
    """Processor count from the ``nproc`` utility, blind to cgroup limits.

    A missing utility is not an error: ``count()`` returns ``None``. Any other
    failure to run it (permissions, non-zero exit) propagates to the caller.
    """

    def __init__(self, executable: str = NPROC_EXE):
        """Initialize the source with the utility's name or path."""
        self.executable = executable

    def count(self) -> int | None:
        """Run the utility once and parse its output."""
        exe = find_executable(self.executable)
        if exe is None:
            return None

        try:
            result = subprocess.run(  # noqa: S603
                [exe],
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError:
            # Removed between lookup and spawn.
            return None

        count = parse_int(result.stdout.strip())
        if count is None or count < 1:
            warn("number of processors")
            return None
        return count

    def __repr__(self) -> str:
        """Return a string representation of the source."""
        return f"<NprocSource {self.executable}>"
