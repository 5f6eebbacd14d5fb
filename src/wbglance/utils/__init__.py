"""Utility modules for wbglance."""

from wbglance.utils.file import atomic_write_json, read_json_file

__all__ = [
    "atomic_write_json",
    "read_json_file",
]
