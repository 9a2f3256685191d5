from __future__ import annotations

import os
from urllib.parse import parse_qs, urlsplit

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from movieExplorer import settings as settings_mod
from movieExplorer.settings import Settings
from movieExplorer.metadata.api_clients.tmdb_client import TMDBClient, TMDBRequestError
from movieExplorer.gui.controller import QueryController


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture(autouse=True)
def tmp_log(tmp_path, monkeypatch):
    log_path = tmp_path / "movie_explorer.log"
    monkeypatch.setattr(settings_mod, "LOG_PATH", log_path)
    return log_path


# ───────────────────────── fake HTTP ──────────────────────────────────────
class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, bad_json: bool = False):
        self.status_code = status_code
        self.payload = payload
        self.bad_json = bad_json

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self.bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


def listing(titles, total_pages=None, page=1):
    body = {
        "page": page,
        "results": [
            {
                "id": i,
                "title": t,
                "release_date": "2001-01-01",
                "vote_average": 5.0,
                "poster_path": f"/p{i}.jpg",
            }
            for i, t in enumerate(titles, start=1)
        ],
    }
    if total_pages is not None:
        body["total_pages"] = total_pages
    return body


class FakeSession:
    """
    requests.Session stand-in. Unless a response is queued, answers every URL
    with one result titled "<query or discover> p<page>".
    """

    def __init__(self, total_pages=3):
        self.calls: list[tuple[str, float]] = []
        self.queued: list = []
        self.total_pages = total_pages

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.queued:
            nxt = self.queued.pop(0)
            if isinstance(nxt, Exception):
                raise nxt
            return nxt
        qs = parse_qs(urlsplit(url).query)
        page = int(qs.get("page", ["1"])[0])
        label = qs.get("query", ["discover"])[0]
        return FakeResponse(200, listing([f"{label} p{page}"], self.total_pages, page))


# ───────────────────────── manual fetch runner ───────────────────────────
class PendingFetch:
    def __init__(self, job, generation, signals):
        self.job = job
        self.generation = generation
        self.signals = signals

    def resolve(self):
        try:
            page = self.job()
        except TMDBRequestError as e:
            self.signals.failed.emit(self.generation, str(e))
        else:
            self.signals.finished.emit(self.generation, page)


class ManualRunner:
    """Holds fetch jobs until a test resolves them, in whatever order it likes."""

    def __init__(self):
        self.jobs: list[PendingFetch] = []

    def __call__(self, job, generation, signals):
        self.jobs.append(PendingFetch(job, generation, signals))

    @property
    def last(self) -> PendingFetch:
        return self.jobs[-1]


@pytest.fixture
def app_settings():
    return Settings(api_key="test-key", discover_sort=None, timeout=5.0)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(app_settings, session):
    return TMDBClient(app_settings, session=session)


@pytest.fixture
def runner():
    return ManualRunner()


@pytest.fixture
def controller(client, runner):
    return QueryController(client, runner=runner)
