"""Bounded-concurrency bulk image fetcher."""
from .batching import chunked
from .downloader import BulkFetcher

__all__ = ["BulkFetcher", "chunked"]
