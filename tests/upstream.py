"""In-process GraphQL endpoint and image host used by the tests."""
from collections import Counter
from contextlib import asynccontextmanager
from typing import Any

from aiohttp import web
from aiohttp.test_utils import TestServer

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class FakeUpstream:
    """
    Serves ``POST /graphql`` and ``GET /img/{name}``.
    
    GraphQL responses are keyed by the root field found in the query
    document; image responses default to 200 with PNG bytes unless a
    status is registered for the name.
    """
    
    def __init__(self):
        self.graphql: dict[str, tuple[int, Any]] = {}
        self.image_status: dict[str, int] = {}
        self.queries: list[str] = []
        self.image_requests: Counter = Counter()
    
    def set_query(self, field: str, payload: Any, status: int = 200) -> None:
        self.graphql[field] = (status, payload)
    
    def set_players(self, ids: list[Any]) -> None:
        self.set_query("getAllPlayers", {"data": {"getAllPlayers": [{"pgaId": i} for i in ids]}})
    
    def set_tournaments(self, items: list[dict]) -> None:
        self.set_query("getAllTournaments", {"data": {"getAllTournaments": items}})
    
    async def handle_graphql(self, request: web.Request) -> web.Response:
        body = await request.json()
        query = body["query"]
        for field, (status, payload) in self.graphql.items():
            if field in query:
                self.queries.append(field)
                return web.json_response(payload, status=status)
        return web.json_response({"errors": [{"message": "unknown query"}]})
    
    async def handle_image(self, request: web.Request) -> web.Response:
        name = request.match_info["name"]
        self.image_requests[name] += 1
        status = self.image_status.get(name, 200)
        if status != 200:
            return web.Response(status=status, text="nope")
        return web.Response(body=PNG_BYTES, content_type="image/png")
    
    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/graphql", self.handle_graphql)
        app.router.add_get("/img/{name}", self.handle_image)
        return app


@asynccontextmanager
async def serve(upstream: FakeUpstream):
    """Run ``upstream`` on a local port for the duration of the block."""
    server = TestServer(upstream.app())
    await server.start_server()
    try:
        yield server
    finally:
        await server.close()


def image_url(server: TestServer, name: str) -> str:
    return str(server.make_url(f"/img/{name}"))
