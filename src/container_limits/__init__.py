from importlib.metadata import PackageNotFoundError, version

from .cgroup import CgroupPaths
from .core import ResolvedEnvironment, ResourceLimits, detect, detect_limits
from .nproc import NprocSource, ProcessorCountSource

try:
    __version__ = version("container-limits")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "CgroupPaths",
    "NprocSource",
    "ProcessorCountSource",
    "ResolvedEnvironment",
    "ResourceLimits",
    "__version__",
    "detect",
    "detect_limits",
]
