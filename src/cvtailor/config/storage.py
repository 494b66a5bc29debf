"""Where cvtailor keeps its local files: the variant database and the HTTP cache."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "cvtailor"
DEFAULT_DB_FILENAME: Final[str] = "variants.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Resolved data directory; it is created on first use of a file path."""

    data_dir: Path

    def file_path(self, filename: str) -> Path:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir / filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.file_path(DEFAULT_DB_FILENAME)}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        return Path(base) if base else Path.home() / "AppData" / "Local"
    base = os.getenv("XDG_DATA_HOME")
    return Path(base) if base else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    """``CVTAILOR_DATA_DIR``, else ``<platform data dir>/cvtailor``."""

    env_dir = os.getenv("CVTAILOR_DATA_DIR")
    data_dir = Path(env_dir) if env_dir else _default_data_dir() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir.expanduser().resolve())


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """``CVTAILOR_DATABASE_URI`` wins over the SQLite file in the data directory."""

    env_uri = os.getenv("CVTAILOR_DATABASE_URI")
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    return DatabaseConfig(uri=(storage or get_storage_config()).database_uri())


def get_http_cache_path() -> Path:
    return get_storage_config().file_path(HTTP_CACHE_FILENAME)
