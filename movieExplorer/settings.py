from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping
import os

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

# Load environment variables
load_dotenv(BASE_DIR / "secret.env")

# TMDb endpoints / assets
TMDB_BASE_URL        = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE      = "https://image.tmdb.org/t/p/w342"
PLACEHOLDER_POSTER   = "https://via.placeholder.com/342x513?text=No+Poster"
TMDB_MAX_PAGE        = 500          # TMDb refuses page > 500
REQUEST_TIMEOUT      = 10.0

# File / folder paths
LOG_PATH = Path(os.getenv("MOVIE_EXPLORER_LOG") or BASE_DIR / "movie_explorer.log")

# UI constants
ACCENT_COLOR = "#3b82f6"

MISSING_KEY_MESSAGE = (
    "Missing TMDB_API_KEY. Add it to secret.env (or the environment) and restart."
)


class ConfigError(EnvironmentError):
    """Required configuration is missing; querying stays disabled until restart."""


@dataclass(frozen=True, slots=True)
class Settings:
    api_key: str
    base_url: str = TMDB_BASE_URL
    image_base: str = TMDB_IMAGE_BASE
    placeholder_poster: str = PLACEHOLDER_POSTER
    discover_sort: str | None = None
    timeout: float = REQUEST_TIMEOUT


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """
    Build a :class:`Settings` from *env* (defaults to ``os.environ``).

    Raises :class:`ConfigError` when ``TMDB_API_KEY`` is absent or blank.
    """
    env = os.environ if env is None else env

    api_key = (env.get("TMDB_API_KEY") or "").strip()
    if not api_key:
        raise ConfigError(MISSING_KEY_MESSAGE)

    raw_timeout = env.get("TMDB_TIMEOUT")
    try:
        timeout = float(raw_timeout) if raw_timeout else REQUEST_TIMEOUT
    except ValueError:
        raise ConfigError(f"TMDB_TIMEOUT must be a number, got {raw_timeout!r}") from None

    return Settings(
        api_key=api_key,
        base_url=(env.get("TMDB_BASE_URL") or TMDB_BASE_URL).rstrip("/"),
        image_base=(env.get("TMDB_IMAGE_BASE") or TMDB_IMAGE_BASE).rstrip("/"),
        placeholder_poster=env.get("TMDB_PLACEHOLDER_POSTER") or PLACEHOLDER_POSTER,
        discover_sort=(env.get("TMDB_DISCOVER_SORT") or "").strip() or None,
        timeout=timeout,
    )
