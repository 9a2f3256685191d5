from __future__ import annotations
from functools import partial
from typing import Callable, List, Optional

from PySide6.QtCore import QObject, Signal, Slot

from movieExplorer.settings import ConfigError, Settings, load_settings
from movieExplorer.utils import log_debug
from movieExplorer.metadata.api_clients.tmdb_client import TMDBClient
from movieExplorer.metadata.analytics.ordering import present
from movieExplorer.metadata.core.models import (
    DisplayRecord, MovieRecord, QueryState, ResultPage, SortKey, ViewStatus,
)
from movieExplorer.gui.workers import FetchJob, FetchSignals, start_fetch_worker

# runner(job, generation, signals) – must report back through *signals*
Runner = Callable[[FetchJob, int, FetchSignals], None]


class QueryController(QObject):
    """
    Owns the QueryState and the current result set.

    Every launched request gets a new generation number; a resolution whose
    generation is no longer current is dropped, so a slow old request can
    never overwrite the results of a newer one.
    """
    state_changed   = Signal(object)   # QueryState
    results_changed = Signal(object)   # list[MovieRecord]
    loading_changed = Signal(bool)
    error_changed   = Signal(str)
    view_changed    = Signal()

    def __init__(
        self,
        client: TMDBClient | None,
        *,
        config_error: str | None = None,
        runner: Runner = start_fetch_worker,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        if client is None and not config_error:
            raise ValueError("QueryController needs a TMDB client or a config error")
        self.client       = client
        self.config_error = config_error
        self._runner      = runner

        self._state: QueryState          = QueryState()
        self._results: List[MovieRecord] = []
        self._total_pages: Optional[int] = None
        self._loading     = False
        self._error       = ""
        self._generation  = 0
        self._launched_key: tuple[str, int] | None = None

        self._signals = FetchSignals(self)
        self._signals.finished.connect(self._on_fetch_finished)
        self._signals.failed.connect(self._on_fetch_failed)

    @classmethod
    def from_settings(
        cls,
        loader: Callable[[], Settings] = load_settings,
        **kwargs,
    ) -> QueryController:
        """Build from configuration; a missing key yields a disabled controller."""
        try:
            settings = loader()
        except ConfigError as e:
            log_debug(f"config error: {e}")
            return cls(None, config_error=str(e), **kwargs)
        return cls(TMDBClient(settings), **kwargs)

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------
    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def results(self) -> List[MovieRecord]:
        return list(self._results)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> str:
        return self.config_error or self._error

    @property
    def total_pages(self) -> Optional[int]:
        return self._total_pages

    @property
    def generation(self) -> int:
        return self._generation

    def can_go_previous(self) -> bool:
        return not self.config_error and self._state.page > 1

    def can_go_next(self) -> bool:
        if self.config_error or self._loading:
            return False
        return self._total_pages is None or self._state.page < self._total_pages

    def display_records(self) -> List[DisplayRecord]:
        settings = self.client.settings if self.client else None
        return present(self._results, self._state.sort_key, settings)

    def status(self) -> ViewStatus:
        if self.config_error:
            return ViewStatus.CONFIG_ERROR
        if self._loading:
            return ViewStatus.LOADING
        if self._error:
            return ViewStatus.ERROR
        if not self._results:
            return ViewStatus.EMPTY
        return ViewStatus.READY

    def mode_label(self) -> str:
        if self._state.submitted_query:
            return f"Search results for: {self._state.submitted_query}"
        return "Discover movies"

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Initial load, or surface the configuration error."""
        if self.config_error:
            self.error_changed.emit(self.config_error)
            self.view_changed.emit()
            return
        self._launch()

    def set_search_text(self, text: str) -> None:
        self._set_state(self._state.with_text(text))

    def submit_search(self, text: str | None = None) -> None:
        if text is None:
            text = self._state.search_text
        # resubmitting an unchanged search still retries a failed attempt
        self._apply(self._state.with_query(text), force=bool(self._error))

    def clear_search(self) -> None:
        self._apply(self._state.with_query(""), force=bool(self._error))

    def set_sort(self, sort_key: SortKey | str) -> None:
        """Reorder the current results; never issues a request."""
        self._set_state(self._state.with_sort(sort_key))
        self.view_changed.emit()

    def next_page(self) -> bool:
        if not self.can_go_next():
            return False
        self._apply(self._state.with_page(self._state.page + 1))
        return True

    def previous_page(self) -> bool:
        if not self.can_go_previous():
            return False
        self._apply(self._state.with_page(self._state.page - 1))
        return True

    def go_to_page(self, page: int) -> bool:
        if self.config_error:
            return False
        if page < 1 or (self._total_pages is not None and page > self._total_pages):
            raise ValueError(f"Page {page} is out of range.")
        self._apply(self._state.with_page(page))
        return True

    def retry(self) -> bool:
        """Relaunch the current state after a failed attempt."""
        if self.config_error or not self._error:
            return False
        self._launch()
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _set_state(self, new: QueryState) -> None:
        if new != self._state:
            self._state = new
            self.state_changed.emit(new)

    def _apply(self, new: QueryState, force: bool = False) -> None:
        if self.config_error:
            return
        self._set_state(new)
        if force or new.fetch_key() != self._launched_key:
            self._launch()

    def _launch(self) -> None:
        state   = self._state
        request = self.client.build_request(state)

        if self._launched_key is None or self._launched_key[0] != state.submitted_query:
            self._total_pages = None          # bound belongs to the old query
        self._generation  += 1
        self._launched_key = state.fetch_key()
        self._results      = []
        self._error        = ""
        self._loading      = True

        generation = self._generation
        log_debug(f"TMDb → {request.redacted()} (gen {generation})")

        self.results_changed.emit([])
        self.error_changed.emit("")
        self.loading_changed.emit(True)
        self.view_changed.emit()

        self._runner(partial(self.client.fetch, request), generation, self._signals)

    @Slot(int, object)
    def _on_fetch_finished(self, generation: int, page: ResultPage) -> None:
        if generation != self._generation:
            log_debug(f"dropping superseded result (gen {generation} < {self._generation})")
            return
        self._results     = list(page.results)
        self._total_pages = TMDBClient.page_bound(page)
        self._loading     = False
        self.results_changed.emit(self.results)
        self.loading_changed.emit(False)
        self.view_changed.emit()

    @Slot(int, str)
    def _on_fetch_failed(self, generation: int, message: str) -> None:
        if generation != self._generation:
            log_debug(f"dropping superseded failure (gen {generation}): {message}")
            return
        log_debug(f"request failed (gen {generation}): {message}")
        self._error   = message or "Something went wrong."
        self._loading = False
        self.error_changed.emit(self._error)
        self.loading_changed.emit(False)
        self.view_changed.emit()
