"""
recert_core.config
------------------
Environment-driven configuration. Values passed in ``overrides`` win over
environment variables, which win over the defaults in ``constants``.
"""

from __future__ import annotations
import os
from typing import Any, Dict, List, Optional

from .constants import DEFAULT_DB_PATH, DEFAULT_LOG_LEVEL, DEFAULT_STORE_PROVIDER


def parse_pool_sizes(raw: str) -> Dict[int, int]:
    """Parse ``"2048:4,4096:1"`` into ``{2048: 4, 4096: 1}``."""
    sizes: Dict[int, int] = {}
    for item in filter(None, (p.strip() for p in raw.split(","))):
        bits, _, count = item.partition(":")
        if not count:
            raise ValueError(f"invalid RSA pool entry {item!r}, expected BITS:COUNT")
        sizes[int(bits)] = int(count)
    return sizes


def parse_cn_san_replace(raw: str) -> List[str]:
    return [p.strip() for p in raw.split(",") if p.strip()]


def load_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    config: Dict[str, Any] = {
        "store_provider": os.getenv("RECERT_STORE_PROVIDER", DEFAULT_STORE_PROVIDER).lower(),
        "sqlite_path": os.getenv("RECERT_DB_PATH", DEFAULT_DB_PATH),
        "log_level": os.getenv("RECERT_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        "log_file": os.getenv("RECERT_LOG_FILE") or None,
        "rsa_pool": parse_pool_sizes(os.getenv("RECERT_RSA_POOL", "")),
        "cn_san_replace": parse_cn_san_replace(os.getenv("RECERT_CN_SAN_REPLACE", "")),
    }
    config.update(overrides or {})
    return config
