"""
recert_core.pem_utils
---------------------
PEM encode/decode and positional block replacement inside PEM bundles.

A bundle is plain concatenated PEM blocks, addressed by zero-based index.
Replacing a block only touches that block's span; every byte outside it
(other blocks, comments, trailing newlines) is preserved as-is.
"""

from __future__ import annotations
import binascii, re
from dataclasses import dataclass
from typing import List, Tuple

from .errors import PemError
from .utils import b64d, b64e, wrap_lines

_PEM_BLOCK_RE = re.compile(
    r"-----BEGIN (?P<label>[A-Z0-9 ]+)-----\r?\n"
    r"(?P<body>.*?)"
    r"-----END (?P=label)-----",
    re.DOTALL,
)


@dataclass(frozen=True)
class PemBlock:
    label: str
    der: bytes
    span: Tuple[int, int]


def encode_pem(label: str, der: bytes) -> str:
    lines = [f"-----BEGIN {label}-----"]
    lines.extend(wrap_lines(b64e(der)))
    lines.append(f"-----END {label}-----")
    return "\n".join(lines) + "\n"


def parse_pem_bundle(text: str) -> List[PemBlock]:
    blocks = []
    for m in _PEM_BLOCK_RE.finditer(text):
        body = "".join(m.group("body").split())
        try:
            der = b64d(body)
        except (binascii.Error, ValueError) as e:
            raise PemError(f"invalid base64 in PEM block {len(blocks)} ({m.group('label')})") from e
        blocks.append(PemBlock(label=m.group("label"), der=der, span=m.span()))
    return blocks


def decode_single_pem(text: str) -> PemBlock:
    blocks = parse_pem_bundle(text)
    if len(blocks) != 1:
        raise PemError(f"expected exactly one PEM block, found {len(blocks)}")
    return blocks[0]


def pem_bundle_replace_pem_at_index(bundle: str, index: int, new_pem: str) -> str:
    blocks = parse_pem_bundle(bundle)
    if not blocks:
        raise PemError("no PEM blocks found in bundle")
    if index < 0 or index >= len(blocks):
        raise PemError(f"PEM bundle index {index} out of range ({len(blocks)} blocks)")

    start, end = blocks[index].span
    # new_pem carries its own trailing newline; the original newline after END stays in place
    replacement = new_pem.rstrip("\r\n")
    return bundle[:start] + replacement + bundle[end:]
