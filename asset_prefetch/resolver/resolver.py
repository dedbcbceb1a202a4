"""Asset list resolver."""
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from ..config import PLAYER_IMAGE_TEMPLATE
from ..domain import AssetKind, FetchTask
from ..errors import UpstreamQueryError
from ..graphql import GraphQLClient

PLAYERS_QUERY = """
query {
  getAllPlayers {
    pgaId
  }
}
"""

TOURNAMENTS_QUERY = """
query {
  getAllTournaments {
    id
    avatarUrl
  }
}
"""

PLAYER_EXTENSION = "webp"


def unique_ids(values: Iterable[Any]) -> list[str]:
    """
    Drop null/empty ids and duplicates, keeping first-seen order.
    
    Args:
        values: Raw identifiers from the upstream response
        
    Returns:
        Unique identifiers as strings
    """
    seen: dict[str, None] = {}
    for value in values:
        if value is None:
            continue
        key = str(value).strip()
        if key:
            seen.setdefault(key, None)
    return list(seen)


def derive_extension(url: str, default: str = "jpg") -> str:
    """
    Extension of the last path segment of ``url``.
    
    The text after the last ``.`` is used, cut at the first ``?``.
    ``default`` is returned when nothing usable is left.
    
    >>> derive_extension("https://host/img/abc.png?v=2")
    'png'
    """
    segment = url.split("?", 1)[0].split("#", 1)[0].rsplit("/", 1)[-1]
    if "." not in segment:
        return default
    ext = segment.rsplit(".", 1)[1]
    return ext if ext.isalnum() else default


class AssetResolver:
    """Queries the upstream API and builds FetchTasks per asset kind."""
    
    def __init__(
        self,
        client: GraphQLClient,
        images_dir: str | Path,
        player_image_template: str = PLAYER_IMAGE_TEMPLATE,
        default_extension: str = "jpg",
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize resolver.
        
        Args:
            client: GraphQL client
            images_dir: Root of the image cache (``<output-root>/images``)
            player_image_template: Headshot URL with an ``{id}`` placeholder
            default_extension: Extension used when a URL carries none
            logger: Logger instance
        """
        self.client = client
        self.images_dir = Path(images_dir)
        self.player_image_template = player_image_template
        self.default_extension = default_extension
        self.logger = logger or logging.getLogger("prefetch")
    
    def destination_dir(self, kind: AssetKind) -> Path:
        return self.images_dir / kind.value
    
    def _usable_id(self, entity_id: str) -> bool:
        # ids become file names
        if "/" in entity_id or "\\" in entity_id or entity_id.startswith("."):
            self.logger.warning(f"Ignoring id unusable as a file name: {entity_id!r}")
            return False
        return True
    
    async def resolve_tasks(self, kind: AssetKind) -> list[FetchTask]:
        """
        Query upstream for all entities of ``kind`` and map them to tasks.
        
        Raises:
            UpstreamQueryError: If the query fails or the response is malformed
        """
        kind = AssetKind(kind)
        if kind == AssetKind.PLAYERS:
            return await self.resolve_player_tasks()
        return await self.resolve_tournament_tasks()
    
    async def resolve_player_tasks(self) -> list[FetchTask]:
        data = await self.client.execute(PLAYERS_QUERY)
        
        players = data.get("getAllPlayers")
        if not isinstance(players, list):
            raise UpstreamQueryError("Response is missing getAllPlayers")
        
        ids = [
            pga_id for pga_id in unique_ids(
                player.get("pgaId") for player in players if isinstance(player, dict)
            )
            if self._usable_id(pga_id)
        ]
        self.logger.info(f"Found {len(ids)} unique players")
        
        out_dir = self.destination_dir(AssetKind.PLAYERS)
        return [
            FetchTask(
                id=pga_id,
                source_url=self.player_image_template.format(id=pga_id),
                destination_path=out_dir / f"{pga_id}.{PLAYER_EXTENSION}"
            )
            for pga_id in ids
        ]
    
    async def resolve_tournament_tasks(self) -> list[FetchTask]:
        data = await self.client.execute(TOURNAMENTS_QUERY)
        
        tournaments = data.get("getAllTournaments") or []
        if not isinstance(tournaments, list):
            raise UpstreamQueryError("getAllTournaments is not a list")
        
        urls: dict[str, str] = {}
        for tournament in tournaments:
            if not isinstance(tournament, dict):
                continue
            url = tournament.get("avatarUrl")
            if not isinstance(url, str) or not url.strip():
                continue
            ids = unique_ids([tournament.get("id")])
            if ids and self._usable_id(ids[0]):
                urls.setdefault(ids[0], url.strip())
        
        self.logger.info(f"Found {len(urls)} tournaments with images")
        
        out_dir = self.destination_dir(AssetKind.TOURNAMENTS)
        tasks = []
        for tournament_id, url in urls.items():
            ext = derive_extension(url, self.default_extension)
            tasks.append(
                FetchTask(
                    id=tournament_id,
                    source_url=url,
                    destination_path=out_dir / f"{tournament_id}.{ext}"
                )
            )
        return tasks
