"""Filesystem utilities for the image cache."""
import os
from pathlib import Path

import aiofiles


def ensure_directory(path: str | Path) -> Path:
    """
    Create a directory (and parents) if it does not exist.
    
    Args:
        path: Directory path
        
    Returns:
        The directory as a Path
    """
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def part_path(path: Path) -> Path:
    """Temporary sibling used while a file is being written."""
    return Path(str(path) + ".part")


async def atomic_write_bytes(path: str | Path, data: bytes) -> Path:
    """
    Write bytes to ``path`` via a ``.part`` file renamed into place.
    
    The partial file is removed if writing fails, so a later existence
    check never mistakes a truncated file for a cached one.
    
    Args:
        path: Final file path
        data: File content
        
    Returns:
        The written path
    """
    target = Path(path)
    ensure_directory(target.parent)
    tmp = part_path(target)
    
    try:
        async with aiofiles.open(tmp, "wb") as f:
            await f.write(data)
        os.replace(tmp, target)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    
    return target
