"""Read-only detection of memory and CPU limits from the cgroup filesystem.

Each signal is an ordered fallback chain: the cgroup v1 file first, then the
cgroup v2 file. A path that is missing is a normal outcome, a value that is
present but unusable is warned about and treated as undetermined.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .diagnostics import warn
from .helpers import parse_int, read_limit

__all__ = [
    "CGROUP_ROOT",
    "CGROUP_ROOT_ENV",
    "MAX_MEMORY_LIMIT_IN_BYTES",
    "NO_LIMIT_VALUE",
    "CgroupPaths",
    "parse_cpuset",
    "resolve_cpu_quota_cores",
    "resolve_cpuset_cores",
    "resolve_memory_limit",
]

CGROUP_ROOT = Path("/sys/fs/cgroup")
CGROUP_ROOT_ENV = "CONTAINER_LIMITS_CGROUP_ROOT"

NO_LIMIT_VALUE = "max"  # "unlimited" token in cgroup v2 files
MAX_MEMORY_LIMIT_IN_BYTES = 2**63 - 1


@dataclass(frozen=True)
class CgroupPaths:
    """Well-known cgroup files, v1 layout first and v2 layout second."""

    memory_limit_v1: Path = CGROUP_ROOT / "memory" / "memory.limit_in_bytes"
    memory_limit_v2: Path = CGROUP_ROOT / "memory.max"
    cpu_quota_v1: Path = CGROUP_ROOT / "cpu" / "cpu.cfs_quota_us"
    cpu_period_v1: Path = CGROUP_ROOT / "cpu" / "cpu.cfs_period_us"
    cpu_max_v2: Path = CGROUP_ROOT / "cpu.max"
    cpuset_v1: Path = CGROUP_ROOT / "cpuset" / "cpuset.cpus"
    cpuset_v2: Path = CGROUP_ROOT / "cpuset.cpus.effective"

    @classmethod
    def from_root(cls, root: Path | str) -> CgroupPaths:
        """Lay out the same files under another mount point."""
        root = Path(root)
        return cls(
            memory_limit_v1=root / "memory" / "memory.limit_in_bytes",
            memory_limit_v2=root / "memory.max",
            cpu_quota_v1=root / "cpu" / "cpu.cfs_quota_us",
            cpu_period_v1=root / "cpu" / "cpu.cfs_period_us",
            cpu_max_v2=root / "cpu.max",
            cpuset_v1=root / "cpuset" / "cpuset.cpus",
            cpuset_v2=root / "cpuset.cpus.effective",
        )

    @classmethod
    def from_env(cls) -> CgroupPaths:
        """Honour ``CONTAINER_LIMITS_CGROUP_ROOT`` when it is set."""
        root = os.environ.get(CGROUP_ROOT_ENV)
        if not root:
            return cls()
        return cls.from_root(root)


# --------------------------------------------------------------------------- #
# Memory
# --------------------------------------------------------------------------- #
def resolve_memory_limit(paths: CgroupPaths) -> int | None:
    """Memory ceiling in bytes, ``MAX_MEMORY_LIMIT_IN_BYTES`` when unlimited."""
    limit = parse_int(read_limit(paths.memory_limit_v1))
    if limit is None or limit < 0:
        raw = read_limit(paths.memory_limit_v2)
        if raw == NO_LIMIT_VALUE:
            return MAX_MEMORY_LIMIT_IN_BYTES
        limit = parse_int(raw)

    if limit is None or limit < 0:
        warn("memory limit")
        return None
    return limit


# --------------------------------------------------------------------------- #
# CPU quota
# --------------------------------------------------------------------------- #
def resolve_cpu_quota_cores(paths: CgroupPaths) -> int | None:
    """Cores granted by the CFS bandwidth quota, ``None`` without a quota."""
    raw_quota = read_limit(paths.cpu_quota_v1)
    if raw_quota is not None:
        quota = parse_int(raw_quota)
        if quota == -1:
            return None
        period = parse_int(read_limit(paths.cpu_period_v1))
    else:
        fields = (read_limit(paths.cpu_max_v2) or "").split()
        if fields and fields[0] == NO_LIMIT_VALUE:
            return None
        quota = parse_int(fields[0]) if len(fields) == 2 else None
        period = parse_int(fields[1]) if len(fields) == 2 else None

    if quota is None or period is None or quota <= 0 or period <= 0:
        warn("cpu quota")
        return None
    # A quota below one period still leaves the process a (throttled) core.
    return max(1, quota // period)


# --------------------------------------------------------------------------- #
# Cpuset
# --------------------------------------------------------------------------- #
def parse_cpuset(value: str) -> int | None:
    """Count the cores in a cpuset list such as ``0-1,3``.

    Returns ``None`` for malformed lists.
    """
    count = 0
    for token in value.strip().split(","):
        lo, sep, hi = token.strip().partition("-")
        first = parse_int(lo)
        last = parse_int(hi) if sep else first
        if first is None or last is None or last < first:
            return None
        count += last - first + 1
    return count or None


def resolve_cpuset_cores(paths: CgroupPaths) -> int | None:
    """Number of cores the cpuset controller lets the container run on."""
    raw = read_limit(paths.cpuset_v1)
    if raw is None:
        raw = read_limit(paths.cpuset_v2)
    if raw is None:
        warn("cpuset")
        return None

    count = parse_cpuset(raw)
    if count is None:
        warn("cpuset")
    return count
