import sys
from PySide6.QtWidgets import QApplication

from movieExplorer.utils          import apply_dark_palette, log_debug
from movieExplorer.gui.controller  import QueryController
from movieExplorer.gui.main_window import MainWindow


# ────────────────────────────────────────────────────────────────────────────
# Application entry
# ────────────────────────────────────────────────────────────────────────────
def main() -> None:
    app = QApplication(sys.argv)
    apply_dark_palette(app)

    # a missing TMDB_API_KEY gives a disabled controller, not a crash
    controller = QueryController.from_settings()

    window = MainWindow(controller)
    window.show()

    log_debug("Movie Explorer started")
    controller.start()
    window.show_config_error()

    # -------- run the event-loop -------------------------------------
    sys.exit(app.exec())

# Python entry-point guard
if __name__ == "__main__":
    main()
