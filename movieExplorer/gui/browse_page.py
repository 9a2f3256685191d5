from __future__ import annotations

from PySide6.QtCore import Qt, Slot
from PySide6.QtGui  import QImage
from PySide6.QtWidgets import (
    QWidget, QHBoxLayout, QVBoxLayout, QLineEdit, QPushButton,
    QScrollArea, QGridLayout, QLabel, QComboBox,
)

from ..settings import PLACEHOLDER_POSTER, REQUEST_TIMEOUT
from ..metadata.core.models import SortKey, ViewStatus
from .controller import QueryController
from .movie_card import MovieCard
from .workers    import PosterSignals, queue_poster

SORT_LABELS = [
    (SortKey.NONE,        "Server order"),
    (SortKey.DATE_DESC,   "Release date (new → old)"),
    (SortKey.DATE_ASC,    "Release date (old → new)"),
    (SortKey.RATING_DESC, "Average rating (high → low)"),
    (SortKey.RATING_ASC,  "Average rating (low → high)"),
]


class BrowsePage(QWidget):
    """Search bar + sort select on top, card grid in the middle, pager below."""

    CARD_W = 200

    def __init__(self, controller: QueryController, parent: QWidget | None = None):
        super().__init__(parent)
        self.controller = controller
        settings = controller.client.settings if controller.client else None
        self._placeholder = settings.placeholder_poster if settings else PLACEHOLDER_POSTER
        self._timeout     = settings.timeout if settings else REQUEST_TIMEOUT

        self._pending: dict[str, list[MovieCard]] = {}   # poster url → cards waiting
        self._cards: dict[object, MovieCard] = {}        # record id → card
        self._cards_key: tuple | None = None             # (generation, result ids)
        self._poster_signals = PosterSignals(self)
        self._poster_signals.loaded.connect(self._on_poster_loaded)

        self._build_ui()
        self._connect_signals()
        self.refresh()

    # ------------------------------------------------------------------ ui
    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(12, 12, 12, 12)

        # ── header ───────────────────────────────────────────────────────
        header = QHBoxLayout()
        brand = QVBoxLayout()
        title = QLabel("🎬 Movie Explorer")
        title.setStyleSheet("font-size:20px; font-weight:bold;")
        brand.addWidget(title)
        brand.addWidget(QLabel("20 movies/page • Search • Sort • Pagination"))
        header.addLayout(brand)
        header.addStretch()

        self.search_input = QLineEdit(placeholderText="Search movies by title...")
        self.search_btn   = QPushButton("Search")
        self.clear_btn    = QPushButton("Clear")
        header.addWidget(self.search_input)
        header.addWidget(self.search_btn)
        header.addWidget(self.clear_btn)

        header.addWidget(QLabel("Sort:"))
        self.sort_combo = QComboBox()
        for key, label in SORT_LABELS:
            self.sort_combo.addItem(label, key.value)
        header.addWidget(self.sort_combo)
        root.addLayout(header)

        # ── status row ───────────────────────────────────────────────────
        status = QHBoxLayout()
        self.mode_label    = QLabel()
        self.loading_label = QLabel("Loading…")
        self.error_label   = QLabel()
        self.error_label.setStyleSheet("color:#f87171;")
        self.error_label.setWordWrap(True)
        status.addWidget(self.mode_label)
        status.addStretch()
        status.addWidget(self.loading_label)
        status.addWidget(self.error_label)
        root.addLayout(status)

        # ── grid ─────────────────────────────────────────────────────────
        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        container = QWidget()
        self.grid_layout = QGridLayout(container)
        self.grid_layout.setAlignment(Qt.AlignTop | Qt.AlignLeft)
        self.scroll_area.setWidget(container)
        root.addWidget(self.scroll_area, 1)

        self.empty_label = QLabel("No movies found.", alignment=Qt.AlignCenter)
        root.addWidget(self.empty_label)

        # ── pager ────────────────────────────────────────────────────────
        pager = QHBoxLayout()
        self.prev_btn   = QPushButton("Previous")
        self.page_label = QLabel(alignment=Qt.AlignCenter)
        self.next_btn   = QPushButton("Next")
        pager.addStretch()
        pager.addWidget(self.prev_btn)
        pager.addWidget(self.page_label)
        pager.addWidget(self.next_btn)
        pager.addStretch()
        root.addLayout(pager)

    def _connect_signals(self) -> None:
        c = self.controller
        self.search_input.textEdited.connect(c.set_search_text)
        self.search_input.returnPressed.connect(self._on_submit)
        self.search_btn.clicked.connect(self._on_submit)
        self.clear_btn.clicked.connect(self._on_clear)
        self.sort_combo.currentIndexChanged.connect(self._on_sort)
        self.prev_btn.clicked.connect(c.previous_page)
        self.next_btn.clicked.connect(c.next_page)

        c.view_changed.connect(self.refresh)

    # ------------------------------------------------------------ actions
    @Slot()
    def _on_submit(self) -> None:
        self.controller.submit_search(self.search_input.text())

    @Slot()
    def _on_clear(self) -> None:
        self.search_input.clear()
        self.controller.clear_search()

    @Slot(int)
    def _on_sort(self, index: int) -> None:
        self.controller.set_sort(self.sort_combo.itemData(index))

    # ------------------------------------------------------------- render
    @Slot()
    def refresh(self) -> None:
        c      = self.controller
        status = c.status()
        state  = c.state

        disabled = status is ViewStatus.CONFIG_ERROR
        for w in (self.search_input, self.search_btn, self.clear_btn, self.sort_combo):
            w.setEnabled(not disabled)

        self.mode_label.setText(c.mode_label())
        self.loading_label.setVisible(status is ViewStatus.LOADING)
        self.error_label.setVisible(bool(c.error))
        self.error_label.setText(f"Error: {c.error}" if c.error else "")

        self.prev_btn.setEnabled(c.can_go_previous() and not c.loading)
        self.next_btn.setEnabled(c.can_go_next())
        pages = f" of {c.total_pages}" if c.total_pages else ""
        self.page_label.setText(f"Page {state.page}{pages}")

        self.empty_label.setVisible(status is ViewStatus.EMPTY)
        self.scroll_area.setVisible(status is ViewStatus.READY)
        self._display_cards()

    def cards(self) -> list[MovieCard]:
        """Cards in grid order."""
        items = (self.grid_layout.itemAt(i) for i in range(self.grid_layout.count()))
        return [item.widget() for item in items if isinstance(item.widget(), MovieCard)]

    def _display_cards(self) -> None:
        c       = self.controller
        records = c.display_records()
        key     = (c.generation, tuple(r.id for r in c.results))

        # same result set, new order → move the existing cards, no new downloads
        reuse = key == self._cards_key and len(self._cards) == len(records)

        while self.grid_layout.count():
            item = self.grid_layout.takeAt(0)
            if not reuse and (widget := item.widget()):
                widget.deleteLater()
        if not reuse:
            self._pending.clear()
            self._cards = {}
            self._cards_key = key

        margins = self.grid_layout.contentsMargins()
        spacing = self.grid_layout.horizontalSpacing()
        avail   = self.scroll_area.viewport().width() - margins.left() - margins.right()
        cols    = max(1, (avail + spacing) // (self.CARD_W + spacing))

        for idx, record in enumerate(records):
            card = self._cards.get(record.id) if reuse else None
            if card is None:
                card = MovieCard(record, self._placeholder, self)
                card.setFixedWidth(self.CARD_W)
                self._cards[record.id] = card
                self._queue_poster(card)
            r, col = divmod(idx, cols)
            self.grid_layout.addWidget(card, r, col)

    def _queue_poster(self, card: MovieCard) -> None:
        url = card.next_poster_url()
        if url is None:
            card.set_no_poster()
            return
        waiting = self._pending.setdefault(url, [])
        waiting.append(card)
        if len(waiting) == 1:
            queue_poster(url, self._poster_signals, self._timeout)

    @Slot(str, QImage)
    def _on_poster_loaded(self, url: str, image: QImage) -> None:
        # cards from a previous render are gone from _pending
        for card in self._pending.pop(url, []):
            if image.isNull():
                self._queue_poster(card)
            else:
                card.set_poster(image)
