"""
recert_core.yaml_utils
----------------------
Rewrite one PEM value inside a YAML-shaped document addressed by a JSON
pointer (RFC 6901), then re-serialize the whole document.

Store resources go back as JSON (etcd persists them JSON-encoded); filesystem
documents go back as YAML, with every untouched scalar written as it was read.
"""

from __future__ import annotations
import binascii, json, re
from enum import Enum
from typing import Any, List, Tuple

import yaml

from .errors import PemError, ShapeMismatchError
from .locations import FieldEncoding, ValueKind, YamlLocation
from .pem_utils import pem_bundle_replace_pem_at_index
from .utils import b64d, b64e


class RecreateYamlEncoding(str, Enum):
    JSON = "json"
    YAML = "yaml"


# ------------------------------------------------------------------
# Loaders
# ------------------------------------------------------------------
TYPED_SCALAR_TAGS = (
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
)


class LiteralScalar(str):
    """A plain scalar PyYAML would have typed, kept as its source text."""


class LiteralLoader(yaml.SafeLoader):
    """Loads typed scalars (``yes``, ``0755``, ``1.10``, timestamps) as their source text."""


class LiteralDumper(yaml.SafeDumper):
    """Writes LiteralScalar values back plain, exactly as they were read."""


def _construct_literal(loader, node):
    return LiteralScalar(loader.construct_scalar(node))


def _represent_literal(dumper, data):
    value = str(data)
    # tag it with whatever the resolver infers so the emitter leaves it unquoted
    return dumper.represent_scalar(dumper.resolve(yaml.ScalarNode, value, (True, False)), value)


for _tag in TYPED_SCALAR_TAGS:
    LiteralLoader.add_constructor(_tag, _construct_literal)
LiteralDumper.add_representer(LiteralScalar, _represent_literal)


_CORE_BOOL = re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$")
_CORE_INT = re.compile(r"^[-+]?(?:0|[1-9][0-9]*)$|^0x[0-9a-fA-F]+$")


class CoreSchemaLoader(yaml.SafeLoader):
    """YAML 1.2 core schema typing for store resources that are re-encoded as JSON.

    Only true/false are booleans, leading-zero and sexagesimal numbers stay
    strings, and timestamps are never turned into datetimes.
    """


def _construct_core_bool(loader, node):
    value = loader.construct_scalar(node)
    return loader.construct_yaml_bool(node) if _CORE_BOOL.match(value) else value


def _construct_core_int(loader, node):
    value = loader.construct_scalar(node)
    return loader.construct_yaml_int(node) if _CORE_INT.match(value) else value


def _construct_core_float(loader, node):
    value = loader.construct_scalar(node)
    if ":" in value or "_" in value:
        return value
    return loader.construct_yaml_float(node)


CoreSchemaLoader.add_constructor("tag:yaml.org,2002:bool", _construct_core_bool)
CoreSchemaLoader.add_constructor("tag:yaml.org,2002:int", _construct_core_int)
CoreSchemaLoader.add_constructor("tag:yaml.org,2002:float", _construct_core_float)
CoreSchemaLoader.add_constructor("tag:yaml.org,2002:timestamp", lambda loader, node: loader.construct_scalar(node))


def load_literal_yaml(text: str) -> Any:
    return yaml.load(text, Loader=LiteralLoader)


def load_store_yaml(text: str) -> Any:
    return yaml.load(text, Loader=CoreSchemaLoader)


def _split_pointer(pointer: str) -> List[str]:
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise ValueError(f"invalid JSON pointer {pointer!r}")
    return [p.replace("~1", "/").replace("~0", "~") for p in pointer[1:].split("/")]


def _resolve_parent(document: Any, pointer: str) -> Tuple[Any, Any]:
    parts = _split_pointer(pointer)
    if not parts:
        raise ValueError("JSON pointer must address a field, not the document root")

    node = document
    for part in parts[:-1]:
        node = _step(node, part, pointer)

    last = parts[-1]
    if isinstance(node, list):
        last = int(last)
        if last >= len(node):
            raise KeyError(f"{pointer}: index {last} out of range")
    elif not isinstance(node, dict) or last not in node:
        raise KeyError(f"{pointer}: {last!r} not found")
    return node, last


def _step(node: Any, part: str, pointer: str) -> Any:
    if isinstance(node, list):
        return node[int(part)]
    if isinstance(node, dict) and part in node:
        return node[part]
    raise KeyError(f"{pointer}: {part!r} not found")


def get_at_pointer(document: Any, pointer: str) -> Any:
    parent, key = _resolve_parent(document, pointer)
    return parent[key]


def decode_field(value: str, encoding: FieldEncoding) -> str:
    if encoding is FieldEncoding.BASE64:
        try:
            return b64d(value).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise PemError("field is not valid base64-encoded text") from e
    return value


def encode_field(value: str, encoding: FieldEncoding) -> str:
    if encoding is FieldEncoding.BASE64:
        return b64e(value.encode("utf-8"))
    return value


def dump_document(document: Any, encoding: RecreateYamlEncoding) -> str:
    if encoding is RecreateYamlEncoding.JSON:
        return json.dumps(document, separators=(",", ":"), ensure_ascii=False)
    return yaml.dump(document, Dumper=LiteralDumper, sort_keys=False, default_flow_style=False, allow_unicode=True)


def recreate_yaml_at_location_with_new_pem(
    resource: Any,
    yaml_location: YamlLocation,
    new_pem: str,
    encoding: RecreateYamlEncoding,
) -> str:
    if yaml_location.value.kind is not ValueKind.PEM or yaml_location.value.pem is None:
        raise ShapeMismatchError(f"cannot commit non-PEM value at {yaml_location.json_pointer}")

    parent, key = _resolve_parent(resource, yaml_location.json_pointer)
    current = parent[key]
    if not isinstance(current, str):
        raise ShapeMismatchError(f"cannot commit non-PEM value at {yaml_location.json_pointer}")

    decoded = decode_field(current, yaml_location.encoding)
    rewritten = pem_bundle_replace_pem_at_index(
        decoded, yaml_location.value.pem.pem_bundle_index, new_pem,
    )
    parent[key] = encode_field(rewritten, yaml_location.encoding)

    return dump_document(resource, encoding)
