"""Build-time image cache prefetcher for the static site."""
from .errors import AssetPrefetchError, UpstreamQueryError

__version__ = "0.1.0"

__all__ = ["AssetPrefetchError", "UpstreamQueryError", "__version__"]
