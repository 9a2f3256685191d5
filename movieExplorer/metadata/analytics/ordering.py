"""
ordering
~~~~~~~~
Client-side ordering of a result set and its mapping to display records.

Everything here is pure: inputs are never mutated, a new list is returned.
"""
from __future__ import annotations

import datetime as _dt
import math
import re
from typing import Iterable, List

from movieExplorer.settings import Settings, TMDB_IMAGE_BASE, PLACEHOLDER_POSTER
from movieExplorer.metadata.core.models import DisplayRecord, MovieRecord, SortKey

UNTITLED     = "Untitled"
UNKNOWN_DATE = "Unknown"
NO_RATING    = "0.0"


_PARTIAL_DATE = re.compile(r"(\d{4})(?:-(\d{1,2}))?")


def _parse_date(text: str) -> _dt.date | None:
    try:
        return _dt.date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return _dt.datetime.fromisoformat(text).date()
    except ValueError:
        pass
    # "2020" / "2020-07" → first day of that year / month
    m = _PARTIAL_DATE.fullmatch(text)
    if not m:
        return None
    try:
        return _dt.date(int(m.group(1)), int(m.group(2) or 1), 1)
    except ValueError:
        return None


def date_key(record: MovieRecord) -> int:
    """Ordinal of the release date; 0 (before every real date) if absent/bad."""
    if not record.release_date:
        return 0
    parsed = _parse_date(record.release_date.strip())
    return parsed.toordinal() if parsed else 0


def rating_key(record: MovieRecord) -> float:
    v = record.vote_average
    return v if v is not None and math.isfinite(v) else 0.0


_SORTS = {
    SortKey.DATE_ASC:    (date_key, False),
    SortKey.DATE_DESC:   (date_key, True),
    SortKey.RATING_ASC:  (rating_key, False),
    SortKey.RATING_DESC: (rating_key, True),
}


def sort_records(records: Iterable[MovieRecord], sort_key: SortKey | str) -> List[MovieRecord]:
    """
    Return *records* ordered by *sort_key*.

    ``sorted`` is stable for ``reverse=True`` too, so ties keep server order.
    ``SortKey.NONE`` returns the server order untouched.
    """
    items = list(records)
    rule = _SORTS.get(SortKey.parse(sort_key))
    if rule is None:
        return items
    key, reverse = rule
    return sorted(items, key=key, reverse=reverse)


def to_display(record: MovieRecord, settings: Settings | None = None) -> DisplayRecord:
    image_base  = settings.image_base if settings else TMDB_IMAGE_BASE
    placeholder = settings.placeholder_poster if settings else PLACEHOLDER_POSTER

    if record.poster_path:
        path = record.poster_path if record.poster_path.startswith("/") else f"/{record.poster_path}"
        poster_url = f"{image_base}{path}"
    else:
        poster_url = placeholder

    v = record.vote_average
    rating = f"{v:.1f}" if v is not None and math.isfinite(v) else NO_RATING

    return DisplayRecord(
        id=record.id,
        title=record.title or UNTITLED,
        release_date=record.release_date or UNKNOWN_DATE,
        rating=rating,
        poster_url=poster_url,
        alt_text=record.title or "Movie poster",
    )


def present(
    records: Iterable[MovieRecord],
    sort_key: SortKey | str,
    settings: Settings | None = None,
) -> List[DisplayRecord]:
    """Sorted display sequence for the grid."""
    return [to_display(r, settings) for r in sort_records(records, sort_key)]
