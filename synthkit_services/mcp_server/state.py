"""Shared server state.

FastMCP's Context is per-request, so process-wide collaborators (settings
and the dataset store) live here and are created once on first use.
"""

import threading

from synthkit.config import Settings
from synthkit.storage.dataset_store import DatasetStore


class ServerState:
    """Lazily built settings and dataset store, guarded by an RLock."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._store: DatasetStore | None = None
        self._lock = threading.RLock()

    @property
    def settings(self) -> Settings:
        with self._lock:
            if self._settings is None:
                self._settings = Settings.from_env()
            return self._settings

    @property
    def store(self) -> DatasetStore:
        with self._lock:
            if self._store is None:
                self._store = DatasetStore.from_settings(self.settings)
            return self._store

    def reset(self) -> None:
        """Drop cached collaborators so the next access re-reads the environment."""
        with self._lock:
            self._settings = None
            self._store = None


_server_state = ServerState()


def get_server_state() -> ServerState:
    return _server_state
