"""Filesystem helpers."""
from .utils import atomic_write_bytes, ensure_directory, part_path

__all__ = ["atomic_write_bytes", "ensure_directory", "part_path"]
