import pytest
from recert_core.cn_san_replace import CnSanReplace, CnSanReplaceRules
from recert_core.config import load_config, parse_pool_sizes
from recert_core.key_pool import RsaKeyPool
from recert_core.logger import get_logger


def test_load_config_from_env(monkeypatch):
    monkeypatch.setenv("RECERT_STORE_PROVIDER", "SQLite")
    monkeypatch.setenv("RECERT_RSA_POOL", "2048:3, 4096:1")
    monkeypatch.setenv("RECERT_CN_SAN_REPLACE", "api.old.example:api.new.example,old-node:new-node")
    monkeypatch.setenv("RECERT_LOG_LEVEL", "debug")

    config = load_config()
    assert config["store_provider"] == "sqlite"
    assert config["rsa_pool"] == {2048: 3, 4096: 1}
    assert config["cn_san_replace"] == ["api.old.example:api.new.example", "old-node:new-node"]
    assert config["log_level"] == "DEBUG"


def test_overrides_win(monkeypatch):
    monkeypatch.setenv("RECERT_STORE_PROVIDER", "sqlite")
    assert load_config({"store_provider": "memory"})["store_provider"] == "memory"


def test_pool_sizes_reject_garbage():
    with pytest.raises(ValueError):
        parse_pool_sizes("2048")
    assert parse_pool_sizes("") == {}


def test_pool_drains_and_reports_empty(rsa_keys_2048):
    pool = RsaKeyPool()
    pool.add(2048, rsa_keys_2048[1])
    assert pool.size(2048) == 1

    key, pair = pool.get(2048)
    assert key is rsa_keys_2048[1]
    assert pair.private_key is key
    assert pool.get(2048) is None
    assert pool.get(0) is None


def test_pool_rejects_missized_key(rsa_keys_2048):
    with pytest.raises(ValueError):
        RsaKeyPool().add(4096, rsa_keys_2048[1])


def test_pool_from_config():
    pool = RsaKeyPool.from_config({"rsa_pool": {1024: 1}})
    assert pool.size(1024) == 1


def test_rules_from_config():
    rules = CnSanReplaceRules.from_config({"cn_san_replace": ["a.example:b.example"]})
    assert rules.rules == [CnSanReplace("a.example", "b.example")]
    assert rules.replace("a.example") == "b.example"
    assert rules.replace("a.example.org") == "a.example.org"
    with pytest.raises(ValueError):
        CnSanReplace.parse("no-separator")


def test_logger_emits_json(capsys):
    log = get_logger("Recert.Test.Config", level="INFO")
    log.info("hello")
    out = capsys.readouterr().out
    assert '"msg": "hello"' in out
    assert '"name": "Recert.Test.Config"' in out


def test_setup_logging_applies_level_and_file(tmp_path):
    import logging
    from recert_core.logger import setup_logging

    log = get_logger("Recert.Test.Setup")
    log_file = tmp_path / "logs" / "recert.log"
    names = setup_logging(load_config({"log_level": "WARNING", "log_file": str(log_file)}))

    try:
        assert "Recert.Test.Setup" in names
        assert log.level == logging.WARNING
        log.warning("to file")
        log.info("filtered")
        for h in log.handlers:
            h.flush()
        content = log_file.read_text()
        assert '"msg": "to file"' in content
        assert "filtered" not in content
    finally:
        for name in names:
            lg = logging.getLogger(name)
            for h in [h for h in lg.handlers if isinstance(h, logging.FileHandler)]:
                lg.removeHandler(h)
                h.close()
            lg.setLevel(logging.INFO)
