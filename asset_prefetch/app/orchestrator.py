"""Main orchestrator for coordinating all components."""
import logging
from typing import Iterable, Optional

import aiohttp

from ..config import Settings
from ..domain import AssetKind, BatchStats, FetchTask
from ..downloader import BulkFetcher
from ..fs import ensure_directory
from ..graphql import GraphQLClient
from ..resolver import AssetResolver


class Orchestrator:
    """Resolves every requested asset kind, then fetches them phase by phase."""
    
    def __init__(self, settings: Settings, logger: Optional[logging.Logger] = None):
        """
        Initialize orchestrator.
        
        Args:
            settings: Run configuration
            logger: Logger instance
        """
        self.settings = settings
        self.logger = logger or logging.getLogger("prefetch")
        self.fetcher = BulkFetcher(
            concurrency=settings.concurrency,
            timeout=settings.download_timeout,
            logger=self.logger
        )
    
    def _create_resolver(self, session: aiohttp.ClientSession) -> AssetResolver:
        client = GraphQLClient(
            self.settings.graphql_endpoint,
            timeout=self.settings.query_timeout,
            session=session,
            logger=self.logger
        )
        return AssetResolver(
            client,
            self.settings.images_dir,
            player_image_template=self.settings.player_image_template,
            default_extension=self.settings.default_extension,
            logger=self.logger
        )
    
    async def run(
        self,
        kinds: Optional[Iterable[AssetKind]] = None
    ) -> dict[AssetKind, BatchStats]:
        """
        Sync the image cache.
        
        All task lists are resolved before any download starts, so a failing
        query aborts the run with nothing written.
        
        Args:
            kinds: Asset kinds to sync, in order; defaults to every kind
            
        Returns:
            Statistics per asset kind
            
        Raises:
            UpstreamQueryError: If any upstream query fails
        """
        kinds = list(dict.fromkeys(AssetKind(k) for k in (kinds or list(AssetKind))))
        
        connector = aiohttp.TCPConnector(limit=self.settings.concurrency)
        async with aiohttp.ClientSession(connector=connector) as session:
            resolver = self._create_resolver(session)
            
            plan: dict[AssetKind, list[FetchTask]] = {}
            for kind in kinds:
                self.logger.info(f"Fetching {kind.value} list...")
                plan[kind] = await resolver.resolve_tasks(kind)
                ensure_directory(resolver.destination_dir(kind))
            
            results: dict[AssetKind, BatchStats] = {}
            for kind, tasks in plan.items():
                self.logger.info(f"Downloading {kind.value} images ({len(tasks)} tasks)...")
                stats = await self.fetcher.run_batch(tasks, session=session)
                self.logger.info(
                    f"{kind.value} complete: {stats.downloaded} downloaded, "
                    f"{stats.skipped} skipped, {stats.failed} failed"
                )
                results[kind] = stats
        
        return results
