from __future__ import annotations
from typing import Callable

import requests
from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal
from PySide6.QtGui  import QImage

from movieExplorer.metadata.api_clients.tmdb_client import TMDBRequestError
from movieExplorer.metadata.core.models import ResultPage
from movieExplorer.settings import REQUEST_TIMEOUT
from movieExplorer.utils import log_debug

FetchJob = Callable[[], ResultPage]


# ───────────────────────── listing fetch ──────────────────────────────────
class FetchSignals(QObject):
    """Lives on the GUI thread; workers emit through it."""
    finished = Signal(int, object)     # generation, ResultPage
    failed   = Signal(int, str)        # generation, message


class _FetchTask(QRunnable):
    def __init__(self, job: FetchJob, generation: int, signals: FetchSignals):
        super().__init__()
        self.job = job
        self.generation = generation
        self.signals = signals

    def run(self) -> None:
        try:
            page = self.job()
        except TMDBRequestError as e:
            self.signals.failed.emit(self.generation, str(e))
        except Exception as e:
            log_debug(f"fetch-worker error: {e!r}")
            self.signals.failed.emit(self.generation, str(e) or "Something went wrong.")
        else:
            self.signals.finished.emit(self.generation, page)


def start_fetch_worker(job: FetchJob, generation: int, signals: FetchSignals) -> None:
    """Run *job* off the UI thread; the outcome comes back through *signals*."""
    QThreadPool.globalInstance().start(_FetchTask(job, generation, signals))


# ───────────────────────── poster images ──────────────────────────────────
class PosterSignals(QObject):
    loaded = Signal(str, QImage)       # url, image (null image on failure)


class _PosterTask(QRunnable):
    """Download one poster off the UI thread."""

    def __init__(self, url: str, signals: PosterSignals, timeout: float):
        super().__init__()
        self.url = url
        self.signals = signals
        self.timeout = timeout

    def run(self) -> None:
        image = QImage()
        try:
            resp = requests.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
            image.loadFromData(resp.content)
        except requests.RequestException as e:
            log_debug(f"poster load failed {self.url}: {e}")
        self.signals.loaded.emit(self.url, image)


def queue_poster(url: str, signals: PosterSignals, timeout: float = REQUEST_TIMEOUT) -> None:
    QThreadPool.globalInstance().start(_PosterTask(url, signals, timeout))
