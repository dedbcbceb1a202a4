"""Exceptions raised by the prefetcher."""
from typing import Optional


class AssetPrefetchError(Exception):
    """Base class for all prefetcher errors."""


class UpstreamQueryError(AssetPrefetchError):
    """
    The upstream GraphQL query failed and the run cannot continue.
    
    Raised for transport failures, non-success HTTP statuses, responses
    carrying a populated ``errors`` list and responses missing ``data``.
    """
    
    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        errors: Optional[list[str]] = None
    ):
        super().__init__(message)
        self.status = status
        self.errors = errors or []
