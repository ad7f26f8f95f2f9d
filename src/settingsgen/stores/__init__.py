from __future__ import annotations

from typing import TYPE_CHECKING

from ..consts import DATABASE_PATH, FILE_STORE_DIR_DEFAULT
from ..enums import StoreType
from ..errors import ConfigException
from .base import SettingsStore
from .db import DBStore
from .file import FileStore
from .memory import MemoryStore

if TYPE_CHECKING:
    from ..config import StoreConfig

__all__ = ["SettingsStore", "MemoryStore", "FileStore", "DBStore", "get_store"]


def get_store(config: StoreConfig) -> SettingsStore:
    """Create the store selected by ``[store] type``.

    The database store also initializes the connection pool and tables.
    """
    match config.type:
        case StoreType.MEMORY:
            return MemoryStore()
        case StoreType.FILE:
            return FileStore(config.path or FILE_STORE_DIR_DEFAULT)
        case StoreType.DB:
            from ..db import create_tables, init_db

            init_db(config.path or DATABASE_PATH)
            create_tables()
            return DBStore()
        case _:
            raise ConfigException(f"Unknown settings store type: {config.type}")
