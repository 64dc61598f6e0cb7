# recert_core/keys.py

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from cryptography.hazmat.primitives.asymmetric import ec, rsa

from . import crypto
from .constants import (
    PEM_LABEL_EC_PRIVATE_KEY,
    PEM_LABEL_PUBLIC_KEY,
    PEM_LABEL_RSA_PRIVATE_KEY,
    RSA_SPKI_DER_OVERHEAD_BITS,
)
from .errors import KeyDerivationError, PemError
from .pem_utils import decode_single_pem, encode_pem


class KeyKind(str, Enum):
    RSA = "rsa"
    EC = "ec"


@dataclass(frozen=True)
class PublicKey:
    """Public half of a key, held as SubjectPublicKeyInfo DER."""
    kind: KeyKind
    der: bytes

    @classmethod
    def from_crypto(cls, key: crypto.PublicKeyTypes) -> "PublicKey":
        if isinstance(key, rsa.RSAPublicKey):
            return cls(KeyKind.RSA, crypto.public_key_to_spki_der(key))
        if isinstance(key, ec.EllipticCurvePublicKey):
            return cls(KeyKind.EC, crypto.public_key_to_spki_der(key))
        raise KeyDerivationError(f"unsupported public key type {type(key).__name__}")

    def load(self) -> crypto.PublicKeyTypes:
        try:
            return crypto.load_public_key_der(self.der)
        except ValueError as e:
            raise KeyDerivationError(f"unparsable {self.kind.value} public key") from e

    def rsa_bits_for_pool(self) -> int:
        if self.kind is KeyKind.RSA:
            return len(self.der) * 8 - RSA_SPKI_DER_OVERHEAD_BITS
        return 0

    def fingerprint(self) -> str:
        return crypto.compute_pubkey_fingerprint(self.der)

    def pem(self) -> str:
        return encode_pem(PEM_LABEL_PUBLIC_KEY, self.der)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.fingerprint()}"


@dataclass(frozen=True)
class PrivateKey:
    """
    Private key material.

    RSA keys are held as PKCS#1 DER, EC keys as SEC1 DER ("EC PRIVATE KEY").
    Two keys are equal when their bytes are equal.
    """
    kind: KeyKind
    der: bytes

    @classmethod
    def from_rsa(cls, key: rsa.RSAPrivateKey) -> "PrivateKey":
        return cls(KeyKind.RSA, crypto.private_key_to_traditional_der(key))

    @classmethod
    def from_ec(cls, key: ec.EllipticCurvePrivateKey) -> "PrivateKey":
        return cls(KeyKind.EC, crypto.private_key_to_traditional_der(key))

    @classmethod
    def from_pem(cls, text: str) -> "PrivateKey":
        block = decode_single_pem(text)
        if block.label == PEM_LABEL_RSA_PRIVATE_KEY:
            return cls(KeyKind.RSA, block.der)
        if block.label == PEM_LABEL_EC_PRIVATE_KEY:
            return cls(KeyKind.EC, block.der)
        raise PemError(f"unsupported private key PEM label {block.label!r}")

    def load(self) -> crypto.PrivateKeyTypes:
        try:
            return crypto.load_private_key_der(self.der)
        except ValueError as e:
            raise KeyDerivationError(f"unparsable {self.kind.value} private key") from e

    def public_key(self) -> PublicKey:
        return PublicKey.from_crypto(self.load().public_key())

    def pem_label(self) -> str:
        if self.kind is KeyKind.RSA:
            return PEM_LABEL_RSA_PRIVATE_KEY
        return PEM_LABEL_EC_PRIVATE_KEY

    def pem(self) -> str:
        return encode_pem(self.pem_label(), self.der)


@dataclass(frozen=True)
class SigningKeyPair:
    """Handle for a freshly drawn pool key, used to produce new signatures."""
    private_key: rsa.RSAPrivateKey

    def public_key(self) -> PublicKey:
        return PublicKey.from_crypto(self.private_key.public_key())
