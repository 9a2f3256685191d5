# gui/main_window.py
from __future__ import annotations

from PySide6.QtCore    import Slot
from PySide6.QtGui     import QAction, QKeySequence
from PySide6.QtWidgets import QMainWindow, QMessageBox

from movieExplorer.gui.browse_page import BrowsePage
from movieExplorer.gui.controller  import QueryController


class MainWindow(QMainWindow):
    def __init__(self, controller: QueryController):
        super().__init__()
        self.setWindowTitle("Movie Explorer")
        self.resize(1100, 760)

        self.controller  = controller
        self.browse_page = BrowsePage(controller, self)
        self.setCentralWidget(self.browse_page)

        # ── toolbar ─────────────────────────────────────────────────────
        tb = self.addToolBar("Main")
        self.retry_action = QAction("Retry", self)
        self.retry_action.setShortcut(QKeySequence.Refresh)
        self.retry_action.triggered.connect(self._on_retry)
        tb.addAction(self.retry_action)

        controller.view_changed.connect(self._sync_actions)
        self._sync_actions()

    # ───────────────────────────────────────────────────────────────────
    @Slot()
    def _sync_actions(self) -> None:
        self.retry_action.setEnabled(
            not self.controller.config_error
            and bool(self.controller.error)
            and not self.controller.loading
        )

    @Slot()
    def _on_retry(self) -> None:
        self.controller.retry()

    def show_config_error(self) -> None:
        """Modal notice for a missing credential; the banner stays afterwards."""
        if self.controller.config_error:
            QMessageBox.critical(self, "Configuration error", self.controller.config_error)
