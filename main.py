"""
Asset Prefetch - cache player and tournament images for the static site

Usage:
    python main.py                          # Sync every asset kind
    python main.py <kind> [<kind> ...]      # Sync only the named kinds
    
Examples:
    python main.py                          # Players, then tournaments
    python main.py players                  # Player headshots only
"""
import asyncio
import sys
from typing import Optional

from asset_prefetch.app import Orchestrator
from asset_prefetch.config import Settings
from asset_prefetch.domain import AssetKind
from asset_prefetch.errors import UpstreamQueryError
from asset_prefetch.log import setup_logger


def parse_kinds(args: list[str]) -> list[AssetKind]:
    """Map command line arguments to asset kinds; no arguments means all."""
    if not args:
        return list(AssetKind)
    return [AssetKind(arg.lower()) for arg in args]


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv
    settings = Settings.from_env()
    
    # Setup logger
    logger = setup_logger(
        name="prefetch",
        log_dir=settings.logs_dir,
        level=settings.get_log_level(),
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count
    )
    
    try:
        kinds = parse_kinds(args)
    except ValueError as e:
        logger.error(f"{e}; expected one of: {', '.join(k.value for k in AssetKind)}")
        return 1
    
    errors = settings.validate()
    if errors:
        for error in errors:
            logger.error(f"Invalid configuration: {error}")
        return 1
    
    logger.info("=" * 60)
    logger.info("Asset Prefetch Starting")
    logger.info("=" * 60)
    settings.display(logger)
    
    orchestrator = Orchestrator(settings, logger=logger)
    
    try:
        results = asyncio.run(orchestrator.run(kinds))
    
    except UpstreamQueryError as e:
        logger.error(f"Upstream query failed: {e}")
        return 1
    
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1
    
    failed = 0
    for kind, stats in results.items():
        failed += stats.failed
        for failure in stats.failures:
            logger.warning(f"{kind.value} {failure.task.id} not cached: {failure.error}")
    
    logger.info("=" * 60)
    logger.info("Done!" if not failed else f"Done with {failed} failed downloads")
    logger.info("=" * 60)
    
    if failed and settings.fail_on_download_errors:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
