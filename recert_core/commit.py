"""
recert_core.commit
------------------
Location writers shared by private keys, public keys and certificates.

Every writer computes the full new content before touching storage, so a
shape or PEM error never results in a partial write.
"""

from __future__ import annotations
from typing import Any

import yaml

from .errors import CommitError, PemError, ShapeMismatchError, StoreError
from .file_utils import get_filesystem_yaml, read_file_to_string, write_file
from .locations import FileLocation, K8sLocation, K8sResourceLocation, Location, Locations, ValueKind
from .logger import get_logger
from .pem_utils import parse_pem_bundle, pem_bundle_replace_pem_at_index
from .storage.provider import EtcdStore
from .yaml_utils import RecreateYamlEncoding, load_store_yaml, recreate_yaml_at_location_with_new_pem

log = get_logger("Recert.Commit")


async def get_etcd_yaml(store: EtcdStore, resource_location: K8sResourceLocation) -> Any:
    key = resource_location.as_etcd_key()
    raw = await store.get(key)
    if raw is None:
        raise StoreError(f"could not find {key} in etcd")
    # JSON is a subset of YAML, so this accepts both encodings
    return load_store_yaml(raw.decode("utf-8"))


async def commit_pem_to_k8s(store: EtcdStore, k8s_location: K8sLocation, pem: str) -> None:
    resource = await get_etcd_yaml(store, k8s_location.resource_location)
    new_value = recreate_yaml_at_location_with_new_pem(
        resource, k8s_location.yaml_location, pem, RecreateYamlEncoding.JSON,
    )
    await store.put(k8s_location.resource_location.as_etcd_key(), new_value.encode("utf-8"))
    log.info(f"[COMMIT] etcd {k8s_location}")


async def render_file_with_new_pem(file_location: FileLocation, pem: str) -> str:
    content_location = file_location.content_location

    if content_location.raw is not None:
        value = content_location.raw
        if value.kind is not ValueKind.PEM or value.pem is None:
            raise ShapeMismatchError("cannot commit non-PEM to filesystem", location=file_location)
        current = await read_file_to_string(file_location.path)
        if not parse_pem_bundle(current):
            raise ShapeMismatchError("cannot commit non-PEM content to filesystem", location=file_location)
        return pem_bundle_replace_pem_at_index(current, value.pem.pem_bundle_index, pem)

    resource = await get_filesystem_yaml(file_location)
    return recreate_yaml_at_location_with_new_pem(
        resource, content_location.yaml, pem, RecreateYamlEncoding.YAML,
    )


async def commit_pem_to_file(file_location: FileLocation, pem: str) -> None:
    content = await render_file_with_new_pem(file_location, pem)
    await write_file(file_location.path, content)
    log.info(f"[COMMIT] file {file_location}")


async def commit_pem_to_location(store: EtcdStore, location: Location, pem: str) -> None:
    try:
        if isinstance(location, K8sLocation):
            await commit_pem_to_k8s(store, location, pem)
        else:
            await commit_pem_to_file(location, pem)
    except CommitError as e:
        if e.location is None:
            raise type(e)(str(e), location=location) from e
        raise
    except (OSError, StoreError, PemError, KeyError, TypeError, ValueError, yaml.YAMLError) as e:
        raise CommitError(f"failed to commit: {e}", location=location) from e


async def commit_pem_to_locations(store: EtcdStore, locations: Locations, pem: str) -> None:
    for location in locations:
        await commit_pem_to_location(store, location, pem)
