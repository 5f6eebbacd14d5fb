"""File operation utilities for wbglance."""

import contextlib
import json
import os
import platform
import stat
import tempfile
from pathlib import Path
from typing import Any


def _sync(fd: int) -> None:
    # fdatasync is unavailable on macOS
    if hasattr(os, "fdatasync") and platform.system() != "Darwin":
        os.fdatasync(fd)
    else:
        os.fsync(fd)


def atomic_write_json(path: str | Path, data: dict[str, Any]) -> None:
    """Atomically write JSON data to an owner-only file.

    The data goes to a temporary file in the target directory first, which is
    restricted to 0o600 and then renamed over the target, so readers never
    observe a partial file and the content is never world-readable.

    Args:
        path: Target file path
        data: Dictionary to write as JSON
    """
    target_path = Path(path)
    target_dir = target_path.parent
    target_dir.mkdir(parents=True, exist_ok=True)

    tmp_fd = None
    tmp_path = None
    try:
        tmp_fd, tmp_name = tempfile.mkstemp(suffix=".json", prefix=".tmp_", dir=str(target_dir))
        tmp_path = Path(tmp_name)
        os.chmod(tmp_path, stat.S_IRUSR | stat.S_IWUSR)

        with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
            tmp_fd = None  # fd is now owned by the file object
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            _sync(f.fileno())

        os.replace(tmp_path, target_path)
        tmp_path = None  # Successfully renamed, don't clean up

    finally:
        if tmp_fd is not None:
            os.close(tmp_fd)
        if tmp_path is not None and tmp_path.exists():
            with contextlib.suppress(OSError):
                tmp_path.unlink()


def read_json_file(path: str | Path) -> dict[str, Any] | None:
    """Read a JSON object from a file.

    Args:
        path: File to read

    Returns:
        The decoded object, or None if the file does not exist.

    Raises:
        ValueError: If the file does not contain a JSON object
    """
    file_path = Path(path)
    if not file_path.exists():
        return None

    with file_path.open(encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{file_path} does not contain a JSON object")
    return data
