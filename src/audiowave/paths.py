"""Path helpers for per-user log and export locations."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from platformdirs import AppDirs, user_documents_dir

DEFAULT_APP_NAME = "audiowave"
DEFAULT_EXPORT_NAME = "waveform.svg"


@lru_cache(maxsize=4)
def get_app_dirs(app_name: str = DEFAULT_APP_NAME) -> AppDirs:
    """Return platform-specific app directories."""
    return AppDirs(app_name)


def _ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def data_dir(app_name: str = DEFAULT_APP_NAME) -> Path:
    """Return the per-user data directory, creating it if needed."""
    return _ensure_dir(Path(get_app_dirs(app_name).user_data_dir))


def log_dir(app_name: str = DEFAULT_APP_NAME) -> Path:
    """Return the per-user log directory, creating it if needed."""
    return _ensure_dir(data_dir(app_name) / "logs")


def default_export_path(filename: str = DEFAULT_EXPORT_NAME) -> Path:
    """Return the default export target inside the user's documents folder."""
    return Path(user_documents_dir()) / filename
