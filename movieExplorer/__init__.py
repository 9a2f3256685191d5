"""
movieExplorer
~~~~~~~~~~~~~

Top-level package for the Movie Explorer application.

Exports:
  - Settings, ConfigError, load_settings
  - Utility functions: log_debug, apply_dark_palette
  - QueryController and the MainWindow GUI
"""

# settings
from movieExplorer.settings import Settings, ConfigError, load_settings

# utils
from movieExplorer.utils import log_debug, apply_dark_palette

# query controller + GUI entrypoint
from movieExplorer.gui.controller  import QueryController
from movieExplorer.gui.main_window import MainWindow

__all__ = [
    # settings
    "Settings",
    "ConfigError",
    "load_settings",
    # utils
    "log_debug",
    "apply_dark_palette",
    # GUI
    "QueryController",
    "MainWindow",
]
