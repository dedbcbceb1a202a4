"""Fixed-size chunking of task lists."""
from typing import Iterator, Sequence, TypeVar

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """
    Split ``items`` into consecutive chunks of ``size``.
    
    Order is preserved across chunks; only the last chunk may be shorter.
    
    Args:
        items: Items to split
        size: Chunk size, at least 1
        
    Yields:
        Lists of at most ``size`` items
    """
    if size < 1:
        raise ValueError(f"chunk size must be >= 1, got {size}")
    
    for start in range(0, len(items), size):
        yield list(items[start:start + size])
