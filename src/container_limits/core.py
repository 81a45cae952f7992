from __future__ import annotations

from dataclasses import dataclass

from .cgroup import (
    MAX_MEMORY_LIMIT_IN_BYTES,
    CgroupPaths,
    resolve_cpu_quota_cores,
    resolve_cpuset_cores,
    resolve_memory_limit,
)
from .nproc import NprocSource, ProcessorCountSource

__all__ = [
    "MAX_MEMORY_LIMIT_IN_BYTES",
    "NO_MEMORY_LIMIT_THRESHOLD",
    "ResolvedEnvironment",
    "ResourceLimits",
    "detect",
    "detect_limits",
]

# cgroup v1 reports "unlimited" as a page-aligned value just below 2**63 - 1.
NO_MEMORY_LIMIT_THRESHOLD = 92233720368547

ResolvedEnvironment = dict[str, str]


@dataclass(frozen=True)
class ResourceLimits:
    """Limits visible to the container; ``None`` means undetermined."""

    memory_limit_in_bytes: int | None = None
    number_of_cores: int | None = None

    @property
    def no_memory_limit(self) -> bool:
        """Whether the memory ceiling is high enough to mean "unlimited"."""
        if self.memory_limit_in_bytes is None:
            return False
        return self.memory_limit_in_bytes >= NO_MEMORY_LIMIT_THRESHOLD

    def as_environment(self) -> ResolvedEnvironment:
        """Shell-exportable variables, undetermined values left out."""
        env: ResolvedEnvironment = {}
        if self.memory_limit_in_bytes is not None:
            env["MEMORY_LIMIT_IN_BYTES"] = str(self.memory_limit_in_bytes)
        if self.number_of_cores is not None:
            env["NUMBER_OF_CORES"] = str(self.number_of_cores)
        env["MAX_MEMORY_LIMIT_IN_BYTES"] = str(MAX_MEMORY_LIMIT_IN_BYTES)
        if self.no_memory_limit:
            env["NO_MEMORY_LIMIT"] = "true"
        return env


def detect_limits(
    paths: CgroupPaths | None = None,
    processor_count: ProcessorCountSource | None = None,
) -> ResourceLimits:
    """Read the memory ceiling and usable core count.

    The core count is the smallest of the CFS quota, the cpuset and the raw
    processor count, ignoring whichever of them could not be determined.
    Errors from running the processor-count utility are not caught here.
    """
    if paths is None:
        paths = CgroupPaths.from_env()
    if processor_count is None:
        processor_count = NprocSource()

    memory_limit = resolve_memory_limit(paths)
    candidates = [
        resolve_cpu_quota_cores(paths),
        resolve_cpuset_cores(paths),
        processor_count.count(),
    ]
    cores = [c for c in candidates if c is not None]

    return ResourceLimits(
        memory_limit_in_bytes=memory_limit,
        number_of_cores=min(cores) if cores else None,
    )


def detect(
    paths: CgroupPaths | None = None,
    processor_count: ProcessorCountSource | None = None,
) -> ResolvedEnvironment:
    """Detect the limits and return them as environment variables."""
    return detect_limits(paths, processor_count).as_environment()
