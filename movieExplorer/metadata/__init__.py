"""
metadata
~~~~~~~~
Top-level package that bundles:

* core        – query state + record dataclasses
* api_clients – TMDb listing client
* analytics   – client-side ordering / display mapping
"""

# ── core objects ──────────────────────────────────────────────────────────
from movieExplorer.metadata.core.models import (
    DisplayRecord, MovieRecord, QueryState, ResultPage, SortKey, ViewStatus,
)

# ── API client ────────────────────────────────────────────────────────────
from movieExplorer.metadata.api_clients.tmdb_client import (
    TMDBClient, TMDBRequest, TMDBRequestError,
)

# ── ordering ──────────────────────────────────────────────────────────────
from movieExplorer.metadata.analytics.ordering import present, sort_records, to_display

__all__ = [
    "DisplayRecord",
    "MovieRecord",
    "QueryState",
    "ResultPage",
    "SortKey",
    "ViewStatus",
    "TMDBClient",
    "TMDBRequest",
    "TMDBRequestError",
    "present",
    "sort_records",
    "to_display",
]
