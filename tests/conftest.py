from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from container_limits.cgroup import CgroupPaths

CgroupWriter = Callable[[str, str], Path]


class FakeProcessorCount:
    """Stand-in for ``nproc`` that never spawns a process."""

    def __init__(self, value: int | None):
        self.value = value
        self.calls = 0

    def count(self) -> int | None:
        self.calls += 1
        return self.value


# Fake cgroup tree fixtures
@pytest.fixture
def cgroup_root(tmp_path: Path) -> Path:
    """Empty directory standing in for /sys/fs/cgroup."""
    root = tmp_path / "cgroup"
    root.mkdir()
    return root


@pytest.fixture
def cgroup_paths(cgroup_root: Path) -> CgroupPaths:
    return CgroupPaths.from_root(cgroup_root)


@pytest.fixture
def write_cgroup(cgroup_root: Path) -> CgroupWriter:
    """Write a cgroup file relative to the fake root, e.g. ``cpu/cpu.cfs_quota_us``."""

    def write(relative: str, content: str) -> Path:
        path = cgroup_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content + "\n")
        return path

    return write


@pytest.fixture
def nproc4() -> FakeProcessorCount:
    return FakeProcessorCount(4)


@pytest.fixture
def fake_nproc() -> type[FakeProcessorCount]:
    """Expose the fake class so tests can pick their own count."""
    return FakeProcessorCount
