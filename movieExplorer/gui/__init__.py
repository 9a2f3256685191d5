"""
gui
~~~
All Qt widgets, pages and the query controller.

•  No HTTP here – requests go through `metadata.api_clients.tmdb_client`.
•  Re-export the high-level symbols so the app can simply:

    from movieExplorer.gui import MainWindow, QueryController
"""

from movieExplorer.gui.controller   import QueryController
from movieExplorer.gui.main_window  import MainWindow
from movieExplorer.gui.browse_page  import BrowsePage
from movieExplorer.gui.movie_card   import MovieCard

__all__ = [
    "QueryController",
    "MainWindow", "BrowsePage", "MovieCard",
]
