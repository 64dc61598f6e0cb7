"""
recert_core.utils
-----------------
Small helpers for base64, hashing, timestamps and PEM line wrapping.
"""

from __future__ import annotations
import base64, hashlib, time
from typing import List

from .constants import PEM_LINE_WIDTH


def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def b64d(s: str) -> bytes:
    return base64.b64decode(s.encode("ascii"))

def now_ts() -> str:
    # RFC3339 / ISO 8601 in UTC, second precision
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())

def sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()

def wrap_lines(text: str, width: int = PEM_LINE_WIDTH) -> List[str]:
    return [text[i:i + width] for i in range(0, len(text), width)]
