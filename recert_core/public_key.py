# recert_core/public_key.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from .commit import commit_pem_to_locations
from .keys import PrivateKey, PublicKey
from .locations import Locations
from .storage.provider import EtcdStore


@dataclass
class DistributedPublicKey:
    key: PublicKey
    locations: Locations = field(default_factory=Locations)
    regenerated: bool = False

    def regenerate(self, new_private_key: PrivateKey) -> None:
        self.key = new_private_key.public_key()
        self.regenerated = True

    async def commit_to_etcd_and_disk(self, etcd_client: EtcdStore) -> None:
        await commit_pem_to_locations(etcd_client, self.locations, self.key.pem())

    def __str__(self) -> str:
        return f"Standalone pub {len(self.locations):03} locations {self.locations}"


class PublicKeyRegistry:
    """
    Owns every DistributedPublicKey in a run.

    Private keys refer to entries by index (``PublicKeyRef``) and mutate them
    only through ``regenerate``. Access is single-writer; callers that
    regenerate concurrently must serialize externally.
    """

    def __init__(self):
        self._keys: List[DistributedPublicKey] = []

    def add(self, public_key: DistributedPublicKey) -> "PublicKeyRef":
        self._keys.append(public_key)
        return PublicKeyRef(self, len(self._keys) - 1)

    def get(self, index: int) -> DistributedPublicKey:
        return self._keys[index]

    def regenerate(self, index: int, new_private_key: PrivateKey) -> None:
        self._keys[index].regenerate(new_private_key)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self):
        return iter(self._keys)


@dataclass(frozen=True)
class PublicKeyRef:
    registry: PublicKeyRegistry = field(compare=False)
    index: int

    def get(self) -> DistributedPublicKey:
        return self.registry.get(self.index)

    def regenerate(self, new_private_key: PrivateKey) -> None:
        self.registry.regenerate(self.index, new_private_key)

    def __str__(self) -> str:
        return str(self.get())
