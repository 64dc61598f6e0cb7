# recert_core/storage/__init__.py

from .provider import EtcdStore
from .providers.memory_provider import InMemoryEtcd
from .providers.sqlite_provider import SQLiteEtcd
from recert_core.constants import DEFAULT_DB_PATH, DEFAULT_STORE_PROVIDER
import os


def load_store_provider(config: dict | None = None) -> EtcdStore:
    """
    Factory resolver for selecting the etcd store backend.

    For now:
        - memory (default)
        - sqlite
    """
    config = config or {}
    provider = config.get("store_provider") or os.getenv("RECERT_STORE_PROVIDER", DEFAULT_STORE_PROVIDER)

    if provider == "memory":
        return InMemoryEtcd()

    if provider == "sqlite":
        db_path = config.get("sqlite_path") or os.getenv("RECERT_DB_PATH", DEFAULT_DB_PATH)
        return SQLiteEtcd(db_path)

    raise ValueError(f"Unknown store provider: {provider}")


__all__ = [
    "EtcdStore",
    "InMemoryEtcd",
    "SQLiteEtcd",
    "load_store_provider",
]
