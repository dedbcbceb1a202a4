"""Domain models for the asset prefetcher."""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class AssetKind(str, Enum):
    """Kind of entity whose images are cached."""
    PLAYERS = "players"
    TOURNAMENTS = "tournaments"


class TaskStatus(str, Enum):
    """Outcome of a single fetch task."""
    DOWNLOADED = "downloaded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchTask:
    """One external URL to fetch and the local path it is cached at."""
    id: str
    source_url: str
    destination_path: Path


@dataclass
class TaskResult:
    """Settled outcome of a FetchTask."""
    task: FetchTask
    status: TaskStatus
    http_status: Optional[int] = None
    error: Optional[str] = None


@dataclass
class BatchStats:
    """Counters for one fetch phase."""
    total: int = 0
    downloaded: int = 0
    skipped: int = 0
    failed: int = 0
    failures: list[TaskResult] = field(default_factory=list)
    
    def record(self, result: TaskResult) -> None:
        """Add a settled task outcome to the counters."""
        self.total += 1
        if result.status == TaskStatus.DOWNLOADED:
            self.downloaded += 1
        elif result.status == TaskStatus.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1
            self.failures.append(result)
    
    def as_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "downloaded": self.downloaded,
            "skipped": self.skipped,
            "failed": self.failed,
        }
