# Query state + TMDb record dataclasses (+ the display DTO)
from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class SortKey(str, Enum):
    NONE        = "none"
    DATE_ASC    = "date-asc"
    DATE_DESC   = "date-desc"
    RATING_ASC  = "rating-asc"
    RATING_DESC = "rating-desc"

    @classmethod
    def parse(cls, value: "SortKey | str") -> "SortKey":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown sort key: {value!r}") from None


class ViewStatus(str, Enum):
    CONFIG_ERROR = "config-error"
    LOADING      = "loading"
    ERROR        = "error"
    EMPTY        = "empty"
    READY        = "ready"


@dataclass(frozen=True, slots=True)
class QueryState:
    page: int = 1
    search_text: str = ""
    submitted_query: str = ""
    sort_key: SortKey = SortKey.NONE

    def __post_init__(self):
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")

    @property
    def is_search(self) -> bool:
        return bool(self.submitted_query)

    def with_query(self, query: str) -> QueryState:
        """Submit *query*; a new query always starts again at page 1."""
        query = query.strip()
        if query == self.submitted_query:
            return replace(self, search_text=query, page=1)
        return replace(self, search_text=query, submitted_query=query, page=1)

    def with_page(self, page: int) -> QueryState:
        return replace(self, page=page)

    def with_sort(self, sort_key: SortKey | str) -> QueryState:
        return replace(self, sort_key=SortKey.parse(sort_key))

    def with_text(self, text: str) -> QueryState:
        return replace(self, search_text=text)

    def fetch_key(self) -> tuple[str, int]:
        """The part of the state a request depends on (sorting is client-side)."""
        return self.submitted_query, self.page


def _text_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


@dataclass(slots=True)
class MovieRecord:
    id: Any
    title: str | None = None
    release_date: str | None = None
    vote_average: float | None = None
    poster_path: str | None = None

    @classmethod
    def from_api(cls, raw: dict) -> MovieRecord:
        """Normalise one TMDb ``results[]`` entry."""
        vote = raw.get("vote_average")
        if isinstance(vote, bool) or not isinstance(vote, (int, float)):
            vote = None
        return cls(
            id=raw.get("id"),
            title=_text_or_none(raw.get("title")),
            release_date=_text_or_none(raw.get("release_date")),
            vote_average=float(vote) if vote is not None else None,
            poster_path=_text_or_none(raw.get("poster_path")),
        )


@dataclass(slots=True)
class ResultPage:
    results: list[MovieRecord] = field(default_factory=list)
    page: int = 1
    total_pages: int | None = None
    total_results: int | None = None

    @classmethod
    def from_payload(cls, payload: Any, requested_page: int = 1) -> ResultPage:
        """
        Build from a TMDb listing body.

        • ``results`` that isn't a list → empty page
        • ``total_pages`` missing / not an int → None (bound unknown)
        """
        if not isinstance(payload, dict):
            return cls(page=requested_page)

        raw_results = payload.get("results")
        results = [
            MovieRecord.from_api(r)
            for r in (raw_results if isinstance(raw_results, list) else [])
            if isinstance(r, dict)
        ]

        def _int(key: str) -> int | None:
            v = payload.get(key)
            return v if isinstance(v, int) and not isinstance(v, bool) else None

        return cls(
            results=results,
            page=_int("page") or requested_page,
            total_pages=_int("total_pages"),
            total_results=_int("total_results"),
        )


@dataclass(frozen=True, slots=True)
class DisplayRecord:
    id: Any
    title: str
    release_date: str
    rating: str
    poster_url: str
    alt_text: str
