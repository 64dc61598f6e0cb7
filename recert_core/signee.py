"""
recert_core.signee
------------------
Credentials signed by a distributed private key.

When the signing key is regenerated, every signee is re-signed with the new
key. The old signature must verify under the old public key first, so a
signee is never re-signed by a key that did not originally sign it.
"""

from __future__ import annotations
from typing import Optional

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization

from . import crypto
from .cn_san_replace import CnSanReplaceRules
from .commit import commit_pem_to_locations
from .constants import PEM_LABEL_CERTIFICATE
from .errors import SigneeError
from .key_pool import RsaKeyPool
from .keys import PublicKey, SigningKeyPair
from .locations import Locations
from .logger import get_logger
from .pem_utils import encode_pem
from .storage.provider import EtcdStore

log = get_logger("Recert.Signee")


class Signee:
    """Contract every signee honors."""
    regenerated: bool = False

    def regenerate(
        self,
        original_signing_public_key: PublicKey,
        new_signing_key_pair: SigningKeyPair,
        rsa_key_pool: RsaKeyPool,
        cn_san_replace_rules: CnSanReplaceRules,
    ) -> None:
        raise NotImplementedError

    async def commit_to_etcd_and_disk(self, etcd_client: EtcdStore) -> None:
        raise NotImplementedError


class CertificateSignee(Signee):
    def __init__(self, certificate: x509.Certificate, locations: Optional[Locations] = None):
        self.certificate = certificate
        self.locations = locations or Locations()
        self.regenerated = False

    def signed_by(self, public_key: PublicKey) -> bool:
        cert = self.certificate
        return crypto.verify_signature(
            public_key.load(),
            cert.signature,
            cert.tbs_certificate_bytes,
            cert.signature_hash_algorithm,
        )

    def signer_fingerprint(self, candidate: PublicKey) -> Optional[str]:
        """Fingerprint of ``candidate`` if it verifies this certificate, else None."""
        return candidate.fingerprint() if self.signed_by(candidate) else None

    def regenerate(
        self,
        original_signing_public_key: PublicKey,
        new_signing_key_pair: SigningKeyPair,
        rsa_key_pool: RsaKeyPool,
        cn_san_replace_rules: CnSanReplaceRules,
    ) -> None:
        cert = self.certificate
        if not self.signed_by(original_signing_public_key):
            raise SigneeError(
                f"certificate {cert.subject.rfc4514_string()} is not signed by "
                f"{original_signing_public_key.fingerprint()}"
            )

        new_signer_public = new_signing_key_pair.private_key.public_key()
        builder = (
            x509.CertificateBuilder()
            .subject_name(cn_san_replace_rules.apply_to_name(cert.subject))
            .issuer_name(cn_san_replace_rules.apply_to_name(cert.issuer))
            .public_key(cert.public_key())
            .serial_number(cert.serial_number)
            .not_valid_before(cert.not_valid_before_utc)
            .not_valid_after(cert.not_valid_after_utc)
        )
        for ext in cert.extensions:
            value = ext.value
            if isinstance(value, x509.SubjectAlternativeName):
                value = cn_san_replace_rules.apply_to_san(value)
            elif isinstance(value, x509.AuthorityKeyIdentifier):
                value = x509.AuthorityKeyIdentifier.from_issuer_public_key(new_signer_public)
            builder = builder.add_extension(value, critical=ext.critical)

        algorithm = cert.signature_hash_algorithm or hashes.SHA256()
        self.certificate = builder.sign(new_signing_key_pair.private_key, algorithm)
        self.regenerated = True
        log.info(f"[REGEN] re-signed {self.certificate.subject.rfc4514_string()}")

    def pem(self) -> str:
        return encode_pem(PEM_LABEL_CERTIFICATE, self.certificate.public_bytes(serialization.Encoding.DER))

    async def commit_to_etcd_and_disk(self, etcd_client: EtcdStore) -> None:
        await commit_pem_to_locations(etcd_client, self.locations, self.pem())

    def __str__(self) -> str:
        return f"Cert {self.certificate.subject.rfc4514_string()} locations {self.locations}"
