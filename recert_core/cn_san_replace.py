# recert_core/cn_san_replace.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from cryptography import x509
from cryptography.x509.oid import NameOID


@dataclass(frozen=True)
class CnSanReplace:
    old: str
    new: str

    @classmethod
    def parse(cls, raw: str) -> "CnSanReplace":
        old, sep, new = raw.partition(":")
        if not sep or not old or not new:
            raise ValueError(f"invalid CN/SAN replace rule {raw!r}, expected OLD:NEW")
        return cls(old, new)


@dataclass
class CnSanReplaceRules:
    """
    Exact-match rewrite rules applied to certificate CNs and DNS SANs
    when a certificate is re-signed. The first matching rule wins.
    """
    rules: List[CnSanReplace] = field(default_factory=list)

    @classmethod
    def from_strings(cls, raw: Iterable[str]) -> "CnSanReplaceRules":
        return cls([CnSanReplace.parse(r) for r in raw])

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "CnSanReplaceRules":
        return cls.from_strings(config.get("cn_san_replace") or [])

    def replace(self, value: str) -> str:
        for rule in self.rules:
            if value == rule.old:
                return rule.new
        return value

    def apply_to_name(self, name: x509.Name) -> x509.Name:
        rdns = []
        for rdn in name.rdns:
            attrs = []
            for attr in rdn:
                if attr.oid == NameOID.COMMON_NAME and isinstance(attr.value, str):
                    attrs.append(x509.NameAttribute(attr.oid, self.replace(attr.value)))
                else:
                    attrs.append(attr)
            rdns.append(x509.RelativeDistinguishedName(attrs))
        return x509.Name(rdns)

    def apply_to_san(self, san: x509.SubjectAlternativeName) -> x509.SubjectAlternativeName:
        names = []
        for general_name in san:
            if isinstance(general_name, x509.DNSName):
                names.append(x509.DNSName(self.replace(general_name.value)))
            else:
                names.append(general_name)
        return x509.SubjectAlternativeName(names)
