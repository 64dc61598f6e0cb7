"""
recert_core.private_key
-----------------------
DistributedPrivateKey: one logical private key, every physical copy of it,
and everything it has signed.

- regenerate(): draw a replacement from the RSA pool, re-sign every signee
  with it, then swap the key in and update the paired public key
- commit_to_etcd_and_disk(): write the current key's PEM into every location

Neither operation is transactional. A signee failure leaves earlier signees
re-signed; a location failure leaves earlier locations written.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .cn_san_replace import CnSanReplaceRules
from .commit import commit_pem_to_location
from .errors import CascadeError, PoolExhaustedError
from .key_pool import RsaKeyPool
from .keys import KeyKind, PrivateKey
from .locations import Locations
from .logger import get_logger
from .public_key import PublicKeyRef
from .signee import Signee
from .storage.provider import EtcdStore

log = get_logger("Recert.PrivateKey")


@dataclass(eq=False)
class DistributedPrivateKey:
    key: PrivateKey
    locations: Locations = field(default_factory=Locations)
    signees: List[Signee] = field(default_factory=list)
    associated_distributed_public_key: Optional[PublicKeyRef] = None
    regenerated: bool = False

    def __str__(self) -> str:
        out = f"Standalone priv {len(self.locations):03} locations {self.locations}"

        if self.signees or self.associated_distributed_public_key is not None:
            out += "\n"

        for signee in self.signees:
            out += f"- {signee}\n"

        if self.associated_distributed_public_key is not None:
            out += f"* Associated public key at {self.associated_distributed_public_key}\n"

        return out

    # ------------------------------------------------------------------
    # Regeneration
    # ------------------------------------------------------------------
    def regenerate(self, rsa_key_pool: RsaKeyPool, cn_san_replace_rules: CnSanReplaceRules) -> None:
        original_signing_public_key = self.key.public_key()

        num_bits = original_signing_public_key.rsa_bits_for_pool()
        if original_signing_public_key.kind is KeyKind.EC:
            # EC keys are replaced by RSA material; the pool is still asked for 0 bits
            log.warning(
                f"[REGEN] EC key {original_signing_public_key.fingerprint()} is being replaced "
                f"by an RSA key; requesting a {num_bits}-bit pool entry"
            )

        drawn = rsa_key_pool.get(num_bits)
        if drawn is None:
            raise PoolExhaustedError(num_bits)
        self_new_rsa_private_key, self_new_key_pair = drawn

        for index, signee in enumerate(self.signees):
            try:
                signee.regenerate(
                    original_signing_public_key,
                    self_new_key_pair,
                    rsa_key_pool,
                    cn_san_replace_rules,
                )
            except Exception as e:
                raise CascadeError(f"failed to regenerate signee {index} ({signee}): {e}", signee_index=index) from e

        self.key = PrivateKey.from_rsa(self_new_rsa_private_key)
        self.regenerated = True
        log.info(
            f"[REGEN] {original_signing_public_key.fingerprint()} -> {self.key.public_key().fingerprint()} "
            f"({len(self.signees)} signees)"
        )

        if self.associated_distributed_public_key is not None:
            try:
                self.associated_distributed_public_key.regenerate(self.key)
            except Exception as e:
                raise CascadeError(f"failed to regenerate associated public key: {e}") from e

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------
    async def commit_to_etcd_and_disk(self, etcd_client: EtcdStore) -> None:
        # RSA keys go out as PKCS#1 "RSA PRIVATE KEY", EC keys as "EC PRIVATE KEY"
        pem = self.key.pem()
        for location in self.locations:
            await commit_pem_to_location(etcd_client, location, pem)
