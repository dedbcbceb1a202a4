"""GraphQL client for the upstream data source."""
from .client import GraphQLClient

__all__ = ["GraphQLClient"]
