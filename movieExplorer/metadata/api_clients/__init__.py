"""
metadata.api_clients
~~~~~~~~~~~~~~~~~~~~
Thin wrappers around external REST APIs.
"""

from movieExplorer.metadata.api_clients.tmdb_client import (
    TMDBClient, TMDBRequest, TMDBRequestError,
)

__all__ = ["TMDBClient", "TMDBRequest", "TMDBRequestError"]
