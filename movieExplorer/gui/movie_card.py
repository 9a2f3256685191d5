from __future__ import annotations
from PySide6.QtCore    import Qt, QPropertyAnimation # type: ignore
from PySide6.QtGui     import QImage, QPixmap # type: ignore
from PySide6.QtWidgets import ( # type: ignore
    QFrame, QLabel, QVBoxLayout, QHBoxLayout, QGraphicsDropShadowEffect
)

from ..settings import ACCENT_COLOR
from ..metadata.core.models import DisplayRecord

POSTER_W, POSTER_H = 171, 256          # half of TMDb's w342 poster


class MovieCard(QFrame):
    """Poster + title + release-date / rating pills for one result."""

    def __init__(self, record: DisplayRecord, placeholder_url: str, parent=None):
        super().__init__(parent)
        self.setObjectName("MovieCardItem")
        self.setFrameShape(QFrame.StyledPanel)
        self.record = record
        self._placeholder_url = placeholder_url
        self._tried: set[str] = set()

        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)

        # ── poster ───────────────────────────────────────────────────────
        self.poster = QLabel(record.alt_text, alignment=Qt.AlignCenter)
        self.poster.setFixedSize(POSTER_W, POSTER_H)
        self.poster.setWordWrap(True)
        self.poster.setToolTip(record.alt_text)
        self.poster.setStyleSheet("border-radius:6px; background:#2b2c2e;")
        root.addWidget(self.poster, 0, Qt.AlignHCenter)

        # ── title ────────────────────────────────────────────────────────
        title = QLabel(record.title)
        title.setWordWrap(True)
        title.setToolTip(record.title)
        title.setStyleSheet("font-weight:bold;")
        root.addWidget(title)

        # ── footer row: date | rating ───────────────────────────────────
        footer = QHBoxLayout()
        date_pill   = QLabel(f"📅 {record.release_date}", alignment=Qt.AlignCenter)
        rating_pill = QLabel(f"⭐ {record.rating}", alignment=Qt.AlignCenter)
        for pill in (date_pill, rating_pill):
            pill.setStyleSheet(
                f"border:1px solid {ACCENT_COLOR}; border-radius:6px; padding:2px 8px;"
            )
        footer.addWidget(date_pill,   0, Qt.AlignLeft)
        footer.addWidget(rating_pill, 0, Qt.AlignRight)
        root.addLayout(footer)
        root.addStretch()

        # ── hover shadow effect ──────────────────────────────────────────
        self._shadow = QGraphicsDropShadowEffect(self)
        self._shadow.setBlurRadius(4)
        self._shadow.setOffset(0, 0)
        self.setGraphicsEffect(self._shadow)

    def title(self) -> str:
        return self.record.title

    def next_poster_url(self) -> str | None:
        """Poster first, then the placeholder; None once both were tried."""
        for url in (self.record.poster_url, self._placeholder_url):
            if url not in self._tried:
                self._tried.add(url)
                return url
        return None

    def set_poster(self, image: QImage) -> None:
        pix = QPixmap.fromImage(image).scaled(
            self.poster.size(), Qt.KeepAspectRatio, Qt.SmoothTransformation
        )
        self.poster.setPixmap(pix)

    def set_no_poster(self) -> None:
        self.poster.setText("No Poster")

    # ------------------------------------------------------------------
    # hover animation
    def enterEvent(self, event):
        super().enterEvent(event)
        anim = QPropertyAnimation(self._shadow, b"blurRadius", self)
        anim.setDuration(200)
        anim.setEndValue(16)
        anim.start(QPropertyAnimation.DeleteWhenStopped)

    def leaveEvent(self, event):
        super().leaveEvent(event)
        anim = QPropertyAnimation(self._shadow, b"blurRadius", self)
        anim.setDuration(200)
        anim.setEndValue(4)
        anim.start(QPropertyAnimation.DeleteWhenStopped)
