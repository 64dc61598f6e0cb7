"""
recert_core.locations
---------------------
Where one physical copy of a key or certificate lives.

- K8sLocation:  an etcd-stored resource + a JSON pointer into its body
- FileLocation: a file path + either a raw PEM bundle index or a YAML location

A private key, public key or certificate usually has several copies;
``Locations`` keeps them all, in discovery order, without duplicates.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Union


class FieldEncoding(str, Enum):
    NONE = "none"
    BASE64 = "base64"  # k8s Secret data, kubeconfig *-data fields


class ValueKind(str, Enum):
    PEM = "pem"
    JWT = "jwt"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PemLocationInfo:
    pem_bundle_index: int = 0


@dataclass(frozen=True)
class LocationValueType:
    kind: ValueKind
    pem: Optional[PemLocationInfo] = None

    @classmethod
    def pem_at(cls, pem_bundle_index: int = 0) -> "LocationValueType":
        return cls(ValueKind.PEM, PemLocationInfo(pem_bundle_index))

    @classmethod
    def jwt(cls) -> "LocationValueType":
        return cls(ValueKind.JWT)

    @classmethod
    def unknown(cls) -> "LocationValueType":
        return cls(ValueKind.UNKNOWN)

    def __str__(self) -> str:
        if self.kind is ValueKind.PEM and self.pem is not None:
            return f"pem#{self.pem.pem_bundle_index}"
        return self.kind.value


@dataclass(frozen=True)
class YamlLocation:
    json_pointer: str
    value: LocationValueType = field(default_factory=LocationValueType.pem_at)
    encoding: FieldEncoding = FieldEncoding.NONE

    def __str__(self) -> str:
        enc = "" if self.encoding is FieldEncoding.NONE else f"({self.encoding.value})"
        return f"{self.json_pointer}{enc}:{self.value}"


@dataclass(frozen=True)
class K8sResourceLocation:
    namespace: str
    kind: str
    apiversion: str
    name: str

    def plural_kind(self) -> str:
        kind = self.kind.lower()
        if kind.endswith("s"):
            return kind + "es"
        return kind + "s"

    def as_etcd_key(self) -> str:
        if self.namespace:
            return f"/kubernetes.io/{self.plural_kind()}/{self.namespace}/{self.name}"
        return f"/kubernetes.io/{self.plural_kind()}/{self.name}"

    def __str__(self) -> str:
        ns = f"{self.namespace}/" if self.namespace else ""
        return f"{self.kind}/{ns}{self.name}"


@dataclass(frozen=True)
class K8sLocation:
    resource_location: K8sResourceLocation
    yaml_location: YamlLocation

    def __str__(self) -> str:
        return f"k8s:{self.resource_location}:{self.yaml_location}"


@dataclass(frozen=True)
class FileContentLocation:
    """Either a raw PEM bundle (``raw``) or a YAML document (``yaml``)."""
    raw: Optional[LocationValueType] = None
    yaml: Optional[YamlLocation] = None

    def __post_init__(self):
        if (self.raw is None) == (self.yaml is None):
            raise ValueError("FileContentLocation needs exactly one of raw/yaml")

    @classmethod
    def raw_pem(cls, pem_bundle_index: int = 0) -> "FileContentLocation":
        return cls(raw=LocationValueType.pem_at(pem_bundle_index))

    def __str__(self) -> str:
        if self.raw is not None:
            return str(self.raw)
        return f"yaml{self.yaml}"


@dataclass(frozen=True)
class FileLocation:
    path: str
    content_location: FileContentLocation

    def __str__(self) -> str:
        return f"file:{self.path}:{self.content_location}"


Location = Union[K8sLocation, FileLocation]


class Locations:
    """Insertion-ordered set of locations."""

    def __init__(self, items: Optional[Iterable[Location]] = None):
        self._items: List[Location] = []
        for item in items or ():
            self.add(item)

    def add(self, location: Location) -> None:
        if location not in self._items:
            self._items.append(location)

    def __iter__(self) -> Iterator[Location]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, location) -> bool:
        return location in self._items

    def __eq__(self, other) -> bool:
        return isinstance(other, Locations) and set(self._items) == set(other._items)

    def __str__(self) -> str:
        return "[" + ", ".join(str(loc) for loc in self._items) + "]"

    def __repr__(self) -> str:
        return f"Locations({self._items!r})"
