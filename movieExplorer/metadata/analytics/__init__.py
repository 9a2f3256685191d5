"""Client-side ordering helpers."""

from movieExplorer.metadata.analytics.ordering import (
    date_key, rating_key, sort_records, to_display, present,
)

__all__ = ["date_key", "rating_key", "sort_records", "to_display", "present"]
