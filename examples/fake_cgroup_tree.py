"""Detect limits from a hand-built cgroup v2 tree instead of /sys/fs/cgroup."""

import tempfile
from pathlib import Path

from container_limits import CgroupPaths, detect


class FixedCount:
    def count(self) -> int:
        return 16


with tempfile.TemporaryDirectory(prefix="cgroup-v2") as tmp_dir:
    root = Path(tmp_dir)
    (root / "memory.max").write_text("2147483648\n", encoding="utf-8")
    (root / "cpu.max").write_text("300000 100000\n", encoding="utf-8")
    (root / "cpuset.cpus.effective").write_text("0-7\n", encoding="utf-8")

    env = detect(CgroupPaths.from_root(root), FixedCount())
    assert env["NUMBER_OF_CORES"] == "3", env
    assert env["MEMORY_LIMIT_IN_BYTES"] == "2147483648", env
    for key, value in env.items():
        print(f"{key}={value}")
