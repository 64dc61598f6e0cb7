# recert_core/storage/provider.py
from __future__ import annotations
from typing import Any, Dict, List, Optional


class EtcdStore:
    """
    Interface for the cluster configuration store (etcd).

    Values are the raw bytes etcd holds for a key; for Kubernetes resources
    that is the JSON encoding of the object. Implementations must make
    ``put`` visible to a subsequent ``get`` on the same instance.
    """
    async def get(self, key: str) -> Optional[bytes]: ...
    async def put(self, key: str, value: bytes) -> None: ...
    async def list_keys(self, prefix: str = "") -> List[str]: ...
    def log_event(self, event_type: str, payload: Dict[str, Any]) -> None: ...
    def close(self) -> None: ...
