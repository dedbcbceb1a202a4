"""Resolve upstream entities into fetch tasks."""
from .resolver import AssetResolver, derive_extension, unique_ids

__all__ = ["AssetResolver", "derive_extension", "unique_ids"]
