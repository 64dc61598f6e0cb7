from typing import Any, Dict, List, Optional
from recert_core.logger import get_logger
from recert_core.storage.provider import EtcdStore
from recert_core.utils import sha256

log = get_logger("Recert.Store.Memory")


class InMemoryEtcd(EtcdStore):
    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self.kv: Dict[str, bytes] = dict(initial or {})
        self.audit = []

    async def get(self, key: str) -> Optional[bytes]:
        return self.kv.get(key)

    async def put(self, key: str, value: bytes) -> None:
        self.kv[key] = bytes(value)
        self.log_event("etcd_put", {"key": key, "bytes": len(value), "sha256": sha256(value)})
        log.debug(f"[ETCD PUT] {key} ({len(value)} bytes)")

    async def list_keys(self, prefix: str = "") -> List[str]:
        return sorted(k for k in self.kv if k.startswith(prefix))

    # audit
    def log_event(self, event_type: str, payload: Dict[str, Any]):
        self.audit.append((event_type, payload))

    def close(self):
        pass
