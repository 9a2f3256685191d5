"""
metadata.core
~~~~~~~~~~~~~
Domain layer – pure dataclasses for query state and TMDb records.
"""

from .models import (
    DisplayRecord, MovieRecord, QueryState, ResultPage, SortKey, ViewStatus,
)

__all__ = [
    "DisplayRecord", "MovieRecord", "QueryState", "ResultPage", "SortKey", "ViewStatus",
]
