"""Async bulk image fetcher."""
import asyncio
import logging
from typing import Optional, Sequence

import aiohttp

from ..domain import BatchStats, FetchTask, TaskResult, TaskStatus
from ..fs import atomic_write_bytes, ensure_directory
from .batching import chunked

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class BulkFetcher:
    """
    Fetches tasks in sequential chunks of concurrent downloads.
    
    A task whose destination already exists is skipped without a request.
    Failures are isolated per task and never retried within a run.
    """
    
    def __init__(
        self,
        concurrency: int = 5,
        timeout: float = 0,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize fetcher.
        
        Args:
            concurrency: Number of tasks in flight per chunk
            timeout: Per-task timeout in seconds, 0 for none
            logger: Logger instance
        """
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")
        
        self.concurrency = concurrency
        self.timeout = timeout
        self.logger = logger or logging.getLogger("prefetch")
    
    def _client_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=self.timeout or None)
    
    async def fetch_task(
        self,
        session: aiohttp.ClientSession,
        task: FetchTask
    ) -> TaskResult:
        """
        Settle a single task.
        
        Args:
            session: aiohttp session
            task: Task to run
            
        Returns:
            TaskResult describing the outcome; this method does not raise
        """
        if task.destination_path.exists():
            self.logger.info(f"Skipping {task.id} (already exists)")
            return TaskResult(task, TaskStatus.SKIPPED)
        
        try:
            async with session.get(
                task.source_url,
                headers={"User-Agent": USER_AGENT},
                timeout=self._client_timeout()
            ) as response:
                if response.status < 200 or response.status >= 300:
                    self.logger.warning(
                        f"Failed to download {task.id}: HTTP {response.status}"
                    )
                    return TaskResult(
                        task,
                        TaskStatus.FAILED,
                        http_status=response.status,
                        error=f"HTTP {response.status}"
                    )
                
                data = await response.read()
                status = response.status
            
            await atomic_write_bytes(task.destination_path, data)
            
            self.logger.info(f"Downloaded {task.id} -> {task.destination_path.name}")
            return TaskResult(task, TaskStatus.DOWNLOADED, http_status=status)
        
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            error_msg = f"{type(e).__name__}: {e}"
            self.logger.error(f"Error downloading {task.id}: {error_msg}")
            return TaskResult(task, TaskStatus.FAILED, error=error_msg)
        
        except Exception as e:
            error_msg = f"{type(e).__name__}: {e}"
            self.logger.error(f"Unexpected error downloading {task.id}: {error_msg}")
            return TaskResult(task, TaskStatus.FAILED, error=error_msg)
    
    async def run_chunk(
        self,
        session: aiohttp.ClientSession,
        chunk: Sequence[FetchTask]
    ) -> list[TaskResult]:
        """Run every task of a chunk concurrently and wait for all to settle."""
        outcomes = await asyncio.gather(
            *(self.fetch_task(session, task) for task in chunk),
            return_exceptions=True
        )
        
        results = []
        for task, outcome in zip(chunk, outcomes):
            if isinstance(outcome, BaseException):
                if isinstance(outcome, asyncio.CancelledError):
                    raise outcome
                outcome = TaskResult(
                    task,
                    TaskStatus.FAILED,
                    error=f"{type(outcome).__name__}: {outcome}"
                )
            results.append(outcome)
        return results
    
    async def run_batch(
        self,
        tasks: Sequence[FetchTask],
        concurrency: Optional[int] = None,
        session: Optional[aiohttp.ClientSession] = None
    ) -> BatchStats:
        """
        Run all tasks, one chunk at a time.
        
        Args:
            tasks: Tasks to run, in order
            concurrency: Chunk size; defaults to the fetcher's limit
            session: Session to reuse; a private one is opened otherwise
            
        Returns:
            Statistics for the batch
        """
        limit = concurrency or self.concurrency
        
        for directory in {task.destination_path.parent for task in tasks}:
            ensure_directory(directory)
        
        if session is not None:
            return await self._run_chunks(session, tasks, limit)
        
        connector = aiohttp.TCPConnector(limit=limit)
        async with aiohttp.ClientSession(connector=connector) as own_session:
            return await self._run_chunks(own_session, tasks, limit)
    
    async def _run_chunks(
        self,
        session: aiohttp.ClientSession,
        tasks: Sequence[FetchTask],
        limit: int
    ) -> BatchStats:
        stats = BatchStats()
        
        for chunk in chunked(tasks, limit):
            for result in await self.run_chunk(session, chunk):
                stats.record(result)
        
        return stats
