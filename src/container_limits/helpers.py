import shutil
from pathlib import Path


def find_executable(name: str) -> str | None:
    """Find an executable on PATH, ``None`` when it is not installed."""
    return shutil.which(name)


def read_limit(path: Path) -> str | None:
    """Return the stripped content of a cgroup file.

    Missing and unreadable files (non-root containers on cgroup v2) both
    yield ``None``, as does content that is not text.
    """
    try:
        return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError):
        return None


def parse_int(value: str | None) -> int | None:
    """Parse a signed decimal integer, ``None`` for anything else."""
    if value is None:
        return None
    digits = value[1:] if value.startswith("-") else value
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(value)
