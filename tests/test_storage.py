import pytest
from recert_core.storage import InMemoryEtcd, SQLiteEtcd, load_store_provider


@pytest.mark.asyncio
async def test_memory_store_roundtrip():
    s = InMemoryEtcd({"/kubernetes.io/secrets/ns/a": b"{}"})
    await s.put("/kubernetes.io/secrets/ns/b", b'{"x":1}')
    assert await s.get("/kubernetes.io/secrets/ns/b") == b'{"x":1}'
    assert await s.get("/missing") is None
    assert await s.list_keys("/kubernetes.io/secrets/") == [
        "/kubernetes.io/secrets/ns/a",
        "/kubernetes.io/secrets/ns/b",
    ]
    event_type, payload = s.audit[0]
    assert event_type == "etcd_put"
    assert payload["bytes"] == 7


@pytest.mark.asyncio
async def test_sqlite_store_roundtrip(tmp_path):
    db_path = tmp_path / "etcd.db"
    s = SQLiteEtcd(str(db_path))
    await s.put("/kubernetes.io/configmaps/ns/a", b"one")
    await s.put("/kubernetes.io/configmaps/ns/a", b"two")
    await s.put("/kubernetes.io/secrets/ns/b", b"three")
    assert await s.get("/kubernetes.io/configmaps/ns/a") == b"two"
    assert await s.list_keys("/kubernetes.io/configmaps") == ["/kubernetes.io/configmaps/ns/a"]
    assert len(s.list_events("etcd_put")) == 3
    s.close()

    # Persisted across reopen
    s2 = SQLiteEtcd(str(db_path))
    assert await s2.get("/kubernetes.io/secrets/ns/b") == b"three"
    s2.close()


def test_store_factory_modes(monkeypatch, tmp_path):
    monkeypatch.delenv("RECERT_STORE_PROVIDER", raising=False)
    assert isinstance(load_store_provider(), InMemoryEtcd)

    monkeypatch.setenv("RECERT_STORE_PROVIDER", "sqlite")
    monkeypatch.setenv("RECERT_DB_PATH", str(tmp_path / "db" / "etcd.db"))
    store = load_store_provider()
    assert isinstance(store, SQLiteEtcd)
    store.close()

    with pytest.raises(ValueError):
        load_store_provider({"store_provider": "vault"})
