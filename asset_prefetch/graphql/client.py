"""Minimal async GraphQL client."""
import asyncio
import logging
from typing import Any, Optional

import aiohttp

from ..errors import UpstreamQueryError


class GraphQLClient:
    """Posts query documents to a GraphQL endpoint and unwraps ``data``."""
    
    def __init__(
        self,
        endpoint: str,
        timeout: float = 30,
        session: Optional[aiohttp.ClientSession] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize client.
        
        Args:
            endpoint: GraphQL endpoint URL
            timeout: Total request timeout in seconds
            session: Session to reuse; a private one is opened per query otherwise
            logger: Logger instance
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session
        self.logger = logger or logging.getLogger("prefetch")
    
    async def execute(
        self,
        query: str,
        variables: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Run a query and return its ``data`` payload.
        
        Args:
            query: GraphQL query document
            variables: Optional query variables
            
        Returns:
            The response's ``data`` object
            
        Raises:
            UpstreamQueryError: On transport failure, non-success status,
                GraphQL errors or a response without ``data``
        """
        if self.session is not None:
            return await self._post(self.session, query, variables)
        
        async with aiohttp.ClientSession() as session:
            return await self._post(session, query, variables)
    
    async def _post(
        self,
        session: aiohttp.ClientSession,
        query: str,
        variables: Optional[dict[str, Any]]
    ) -> dict[str, Any]:
        self.logger.debug(f"POST {self.endpoint}")
        
        try:
            async with session.post(
                self.endpoint,
                json={"query": query, "variables": variables},
                headers={"Content-Type": "application/json"},
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as response:
                if response.status < 200 or response.status >= 300:
                    raise UpstreamQueryError(
                        f"GraphQL request failed with status {response.status}",
                        status=response.status
                    )
                payload = await response.json(content_type=None)
        
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise UpstreamQueryError(
                f"GraphQL request to {self.endpoint} failed: {type(e).__name__}: {e}"
            ) from e
        
        except ValueError as e:
            raise UpstreamQueryError(f"GraphQL response is not valid JSON: {e}") from e
        
        if not isinstance(payload, dict):
            raise UpstreamQueryError("GraphQL response is not a JSON object")
        
        errors = payload.get("errors") or []
        if errors:
            messages = [
                str(e.get("message", e)) if isinstance(e, dict) else str(e)
                for e in errors
            ]
            raise UpstreamQueryError(", ".join(messages), errors=messages)
        
        data = payload.get("data")
        if not isinstance(data, dict):
            raise UpstreamQueryError("No data returned from GraphQL API")
        
        return data
