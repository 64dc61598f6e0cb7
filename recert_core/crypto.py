from __future__ import annotations
from typing import Optional, Union
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from .utils import sha256

PrivateKeyTypes = Union[rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey]
PublicKeyTypes = Union[rsa.RSAPublicKey, ec.EllipticCurvePublicKey]

# --------- Generation ----------
def rsa_generate(bits: int = 2048) -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=bits)

def ec_generate(curve: Optional[ec.EllipticCurve] = None) -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(curve or ec.SECP256R1())

# --------- DER (de)serialization ----------
def private_key_to_traditional_der(key: PrivateKeyTypes) -> bytes:
    # TraditionalOpenSSL is PKCS#1 for RSA and SEC1 for EC
    return key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )

def load_private_key_der(der: bytes) -> PrivateKeyTypes:
    return serialization.load_der_private_key(der, password=None)

def public_key_to_spki_der(key: PublicKeyTypes) -> bytes:
    return key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )

def load_public_key_der(der: bytes) -> PublicKeyTypes:
    return serialization.load_der_public_key(der)

# --------- Signature checks ----------
def verify_signature(pub: PublicKeyTypes, sig: bytes, data: bytes,
                     algorithm: Optional[hashes.HashAlgorithm] = None) -> bool:
    algorithm = algorithm or hashes.SHA256()
    try:
        if isinstance(pub, rsa.RSAPublicKey):
            pub.verify(sig, data, padding.PKCS1v15(), algorithm)
        elif isinstance(pub, ec.EllipticCurvePublicKey):
            pub.verify(sig, data, ec.ECDSA(algorithm))
        else:
            return False
        return True
    except InvalidSignature:
        return False

def compute_pubkey_fingerprint(spki_der: bytes) -> str:
    """
    Compute a stable fingerprint for a public key.

    - Input: SubjectPublicKeyInfo DER bytes
    - Output: hex-encoded SHA256 hash (truncated to 32 chars for readability)

    Used to check which key actually signs a regenerated certificate
    and to label keys in diagnostic output.
    """
    return sha256(spki_der)[:32]
