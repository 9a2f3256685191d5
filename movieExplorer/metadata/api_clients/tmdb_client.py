from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import urllib.parse

import requests

from movieExplorer.settings import Settings, TMDB_MAX_PAGE
from movieExplorer.metadata.core.models import QueryState, ResultPage


class TMDBRequestError(RuntimeError):
    """A single listing request failed (bad status, transport or body)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True, slots=True)
class TMDBRequest:
    """One fully-resolved listing request (endpoint path + query params)."""
    base_url: str
    path: str
    params: tuple[tuple[str, str], ...]

    @property
    def endpoint(self) -> str:
        return "search" if self.path == "/search/movie" else "discover"

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}?{urllib.parse.urlencode(self.params)}"

    def redacted(self) -> str:
        """Loggable form of the request, without the api key."""
        safe = [(k, v) for k, v in self.params if k != "api_key"]
        return f"{self.path}?{urllib.parse.urlencode(safe)}"


class TMDBClient:
    """Thin wrapper around The Movie Database (TMDb) listing endpoints."""

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def __init__(self, settings: Settings, session: Any = None):
        if not settings.api_key:
            raise ValueError("No TMDB api key passed")
        self.settings = settings
        # module-level requests.get: fetches run on pool threads, a shared Session is not thread-safe
        self.session = session or requests

    # ------------------------------------------------------------------
    # Request selection
    # ------------------------------------------------------------------
    def build_request(self, state: QueryState) -> TMDBRequest:
        """
        Search endpoint when a query has been submitted, discovery otherwise.
        Sorting is applied client-side and never changes the request.
        """
        params: list[tuple[str, str]] = [("api_key", self.settings.api_key)]
        if state.submitted_query:
            path = "/search/movie"
            params.append(("query", state.submitted_query))
        else:
            path = "/discover/movie"
            if self.settings.discover_sort:
                params.append(("sort_by", self.settings.discover_sort))
        params += [("page", str(state.page)), ("include_adult", "false")]
        return TMDBRequest(self.settings.base_url, path, tuple(params))

    # ------------------------------------------------------------------
    # Public – execute
    # ------------------------------------------------------------------
    def fetch(self, request: TMDBRequest) -> ResultPage:
        """Run *request* and parse the listing; raises TMDBRequestError."""
        try:
            resp = self.session.get(request.url, timeout=self.settings.timeout)
        except requests.RequestException as e:
            raise TMDBRequestError(str(e) or "Something went wrong.") from e

        if not resp.ok:
            raise TMDBRequestError(
                f"TMDB request failed ({resp.status_code})", resp.status_code
            )
        try:
            payload = resp.json()
        except ValueError as e:
            raise TMDBRequestError("TMDB returned an unreadable response.") from e

        requested_page = int(dict(request.params).get("page", "1"))
        return ResultPage.from_payload(payload, requested_page)

    def fetch_state(self, state: QueryState) -> ResultPage:
        return self.fetch(self.build_request(state))

    def discover_movies(self, page: int = 1) -> ResultPage:
        return self.fetch_state(QueryState(page=page))

    def search_movies(self, query: str, page: int = 1) -> ResultPage:
        return self.fetch_state(QueryState(page=page, submitted_query=query.strip()))

    @staticmethod
    def page_bound(result: ResultPage) -> int | None:
        """Last navigable page for *result*, or None when TMDb didn't say."""
        if result.total_pages is None:
            return None
        return max(1, min(result.total_pages, TMDB_MAX_PAGE))
