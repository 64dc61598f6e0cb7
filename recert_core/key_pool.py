# recert_core/key_pool.py

from __future__ import annotations
from collections import defaultdict, deque
from typing import Any, Deque, Dict, Optional, Tuple

from cryptography.hazmat.primitives.asymmetric import rsa

from .crypto import rsa_generate
from .keys import SigningKeyPair
from .logger import get_logger

log = get_logger("Recert.KeyPool")


class RsaKeyPool:
    """
    Pre-generated RSA keys bucketed by modulus size.

    ``get`` drains one key from a bucket and returns None once that bucket
    is empty; there is no on-demand generation.
    """

    def __init__(self):
        self._buckets: Dict[int, Deque[rsa.RSAPrivateKey]] = defaultdict(deque)

    def add(self, bits: int, key: rsa.RSAPrivateKey) -> None:
        if key.key_size != bits:
            raise ValueError(f"key is {key.key_size} bits, not {bits}")
        self._buckets[bits].append(key)

    def fill(self, bits: int, count: int) -> None:
        for _ in range(count):
            self._buckets[bits].append(rsa_generate(bits))
        log.info(f"[POOL] filled {count} x {bits}-bit RSA keys (now {self.size(bits)})")

    def get(self, bits: int) -> Optional[Tuple[rsa.RSAPrivateKey, SigningKeyPair]]:
        bucket = self._buckets.get(bits)
        if not bucket:
            log.warning(f"[POOL] no {bits}-bit RSA keys left")
            return None
        key = bucket.popleft()
        return key, SigningKeyPair(key)

    def size(self, bits: int) -> int:
        return len(self._buckets.get(bits, ()))

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "RsaKeyPool":
        pool = cls()
        for bits, count in (config.get("rsa_pool") or {}).items():
            pool.fill(int(bits), int(count))
        return pool
