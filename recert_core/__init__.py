"""
recert Core Package
===================
Regenerates the key material behind a cluster's trust graph and writes every
copy of it back to etcd and disk.

Provides:
- Key / PEM primitives (cryptography-backed)
- Location model for etcd resources and filesystem files
- DistributedPrivateKey regeneration and commit
- Pluggable etcd store interface (in-memory default, SQLite)
"""

from .cn_san_replace import CnSanReplace, CnSanReplaceRules
from .key_pool import RsaKeyPool
from .keys import KeyKind, PrivateKey, PublicKey, SigningKeyPair
from .private_key import DistributedPrivateKey
from .public_key import DistributedPublicKey, PublicKeyRef, PublicKeyRegistry
from .signee import CertificateSignee, Signee

__all__ = [
    "CnSanReplace",
    "CnSanReplaceRules",
    "RsaKeyPool",
    "KeyKind",
    "PrivateKey",
    "PublicKey",
    "SigningKeyPair",
    "DistributedPrivateKey",
    "DistributedPublicKey",
    "PublicKeyRef",
    "PublicKeyRegistry",
    "CertificateSignee",
    "Signee",
]
