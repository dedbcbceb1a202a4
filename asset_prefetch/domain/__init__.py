"""Domain models and enums."""
from .models import AssetKind, BatchStats, FetchTask, TaskResult, TaskStatus

__all__ = ["AssetKind", "BatchStats", "FetchTask", "TaskResult", "TaskStatus"]
