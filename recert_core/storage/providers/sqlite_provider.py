from __future__ import annotations
from typing import Optional, Dict, Any, List
import json, sqlite3, os
from recert_core.logger import get_logger
from recert_core.storage.provider import EtcdStore
from recert_core.utils import now_ts, sha256

log = get_logger("Recert.Store.SQLite")


class SQLiteEtcd(EtcdStore):
    """Etcd snapshot persisted as a key/value table."""

    def __init__(self, path="db/recert_etcd.db"):
        # If no directory, default to current working directory
        dir_path = os.path.dirname(path) or "."
        os.makedirs(dir_path, exist_ok=True)
        self.db = sqlite3.connect(path, check_same_thread=False)

        self._init()

    def _init(self) -> None:
        c = self.db.cursor()

        c.execute("""CREATE TABLE IF NOT EXISTS etcd_kv(
            key TEXT PRIMARY KEY,
            value BLOB NOT NULL
        )""")
        c.execute("""CREATE TABLE IF NOT EXISTS audit(
            ts TEXT,
            event_type TEXT,
            payload TEXT
        )""")

        self.db.commit()

    async def get(self, key: str) -> Optional[bytes]:
        cur = self.db.execute("SELECT value FROM etcd_kv WHERE key=?", (key,))
        row = cur.fetchone()
        if not row: return None
        return bytes(row[0])

    async def put(self, key: str, value: bytes) -> None:
        self.db.execute(
            "INSERT INTO etcd_kv(key,value) VALUES(?,?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, sqlite3.Binary(value))
        )
        self.db.commit()
        self.log_event("etcd_put", {"key": key, "bytes": len(value), "sha256": sha256(value)})
        log.debug(f"[ETCD PUT] {key} ({len(value)} bytes)")

    async def list_keys(self, prefix: str = "") -> List[str]:
        cur = self.db.execute(
            "SELECT key FROM etcd_kv WHERE substr(key, 1, ?) = ? ORDER BY key",
            (len(prefix), prefix)
        )
        return [r[0] for r in cur.fetchall()]

    def log_event(self, event_type: str, payload: Dict[str, Any]) -> None:
        self.db.execute("INSERT INTO audit(ts,event_type,payload) VALUES(?,?,?)",
                        (now_ts(), event_type, json.dumps(payload, separators=(",", ":"), sort_keys=True)))
        self.db.commit()

    def list_events(self, event_type: Optional[str] = None) -> List[Dict[str, Any]]:
        if event_type:
            cur = self.db.execute("SELECT ts,event_type,payload FROM audit WHERE event_type=?", (event_type,))
        else:
            cur = self.db.execute("SELECT ts,event_type,payload FROM audit")
        return [
            {"ts": ts, "event_type": et, "payload": json.loads(payload)}
            for ts, et, payload in cur.fetchall()
        ]

    def close(self):
        self.db.close()
