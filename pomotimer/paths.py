"""Application-data directory resolution.

Windows   %APPDATA%\\pomotimer
macOS     ~/Library/Application Support/pomotimer
other     ~/.config/pomotimer

``POMOTIMER_HOME`` overrides the whole path.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from .errors import StorageError


APP_NAME = "pomotimer"
HOME_ENV_VAR = "POMOTIMER_HOME"


def _platform_base() -> Path:
    if sys.platform.startswith("win"):
        appdata = os.getenv("APPDATA")
        if appdata:
            return Path(appdata)
        return Path.home() / "AppData" / "Roaming"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path.home() / ".config"


def app_data_dir(app_name: str = APP_NAME) -> Path:
    """Return the app-data directory, creating it if needed."""
    override = os.getenv(HOME_ENV_VAR)
    if override:
        path = Path(override)
    else:
        path = _platform_base()
        if app_name:
            path = path / app_name

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(
            f"failed to create app data directory {path}: {exc}"
        ) from exc
    return path
