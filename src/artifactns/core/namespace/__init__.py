"""Hierarchical artifact namespaces and the registry that owns them."""

from artifactns.core.namespace.loader import load_profile
from artifactns.core.namespace.namespace import ArtifactNamespace
from artifactns.core.namespace.naming import (
    CURRENT,
    ROOT,
    EntryKey,
    entry_key,
    namespace_name,
    parent_name,
)
from artifactns.core.namespace.registry import (
    NamespaceRegistry,
    artifact,
    artifact_ns,
    default_registry,
)

__all__ = [
    "ArtifactNamespace",
    "CURRENT",
    "EntryKey",
    "NamespaceRegistry",
    "ROOT",
    "artifact",
    "artifact_ns",
    "default_registry",
    "entry_key",
    "load_profile",
    "namespace_name",
    "parent_name",
]
