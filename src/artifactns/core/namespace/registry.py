"""Registry of artifact namespaces for one build invocation.

The ``NamespaceRegistry`` memoizes one ``ArtifactNamespace`` per canonical
name and tracks which project is currently being defined, so that
``instance()`` with no key (or ``"current"``) returns that project's
namespace. ``clear()`` discards every namespace; tests construct a fresh
registry per case instead of sharing the process-wide one returned by
``default_registry()``.

Project scopes
--------------
``project(name)`` is the definition-time hook a build tool calls around a
project body::

    with registry.project("foo"):
        with registry.project("bar") as bar:   # namespace "foo:bar"
            bar.need(...)

The new namespace is wired to the enclosing project's namespace (or root).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from artifactns.core.artifact import ArtifactGroup, ArtifactRequirement, Coordinate
from artifactns.core.namespace.namespace import ArtifactNamespace
from artifactns.core.namespace.naming import CURRENT, ROOT, namespace_name
from artifactns.exceptions import ArtifactLookupError

logger = logging.getLogger(__name__)

ArtifactFactory = Callable[[str], Any]


class NamespaceRegistry:
    """Process-scoped table of namespaces keyed by canonical name.

    Args:
        artifact_factory: Turns a concrete spec string into the artifact
            handle returned by ``artifact()``. Defaults to
            ``Coordinate.parse``; a build tool passes its own task factory.
    """

    def __init__(self, artifact_factory: ArtifactFactory = Coordinate.parse) -> None:
        self.artifact_factory = artifact_factory
        self._namespaces: dict[str, ArtifactNamespace] = {}
        self._scope: list[str] = []

    def root(self) -> ArtifactNamespace:
        """Return the root namespace."""
        return self.instance(ROOT)

    def instance(self, key: Any = CURRENT) -> ArtifactNamespace:
        """Return the namespace for *key*, creating it on first use.

        Args:
            key: None or ``"current"`` for the project being defined, a
                name, a sequence of name parts, a module, a class, or an
                ``ArtifactNamespace`` (returned as is).
        """
        if isinstance(key, ArtifactNamespace):
            return key
        name = namespace_name(key, self._scope)
        namespace = self._namespaces.get(name)
        if namespace is None:
            namespace = ArtifactNamespace(name, registry=self)
            self._namespaces[name] = namespace
            logger.debug("Created namespace %r", name)
        return namespace

    def clear(self) -> None:
        """Forget every namespace and project scope."""
        self._namespaces.clear()
        self._scope.clear()

    def current_scope(self) -> list[str]:
        """Return the name parts of the project currently being defined."""
        return list(self._scope)

    @contextmanager
    def project(self, name: Any) -> Iterator[ArtifactNamespace]:
        """Enter the definition scope of project *name*.

        Yields:
            The project's namespace, whose parent is the enclosing project's
            namespace (or root at the top level).
        """
        enclosing = self.instance(CURRENT)
        parts = namespace_name(name).split(":")
        self._scope.extend(parts)
        try:
            namespace = self.instance(CURRENT)
            if not namespace.is_root:
                namespace.parent = enclosing
            yield namespace
        finally:
            del self._scope[-len(parts):]

    def artifact(self, key: Any) -> Any:
        """Return the artifact handle for *key* as seen from the current namespace.

        A concrete coordinate string is handed straight to the factory.
        Names and unversioned coordinates are resolved through the current
        namespace and its ancestors; a group yields a list of handles.

        Raises:
            ArtifactLookupError: If nothing with a version is found.
        """
        if isinstance(key, str) and Coordinate.looks_like_spec(key):
            if Coordinate.parse(key).is_concrete:
                return self.artifact_factory(key.strip())
        namespace = self.instance(CURRENT)
        entry = namespace.get(key)
        if isinstance(entry, ArtifactGroup):
            return [self.artifact_factory(member.to_spec()) for member in entry]
        if (
            isinstance(entry, ArtifactRequirement)
            and entry.coordinate is not None
            and entry.version is not None
        ):
            return self.artifact_factory(entry.to_spec())
        raise ArtifactLookupError(
            f"No artifact found for {key!r} in namespace {namespace.name!r}"
        )

    def load(self, mapping: Mapping[Any, Any] | None) -> NamespaceRegistry:
        """Apply ``use`` for each ``namespace -> artifacts`` pair in *mapping*.

        A None key addresses the root namespace.
        """
        for key, uses in (mapping or {}).items():
            if uses:
                self.instance(ROOT if key is None else key).use(uses)
        return self

    def __contains__(self, key: Any) -> bool:
        return namespace_name(key, self._scope) in self._namespaces

    def __repr__(self) -> str:
        return f"<NamespaceRegistry {sorted(self._namespaces)}>"


_default_registry: NamespaceRegistry | None = None


def default_registry() -> NamespaceRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = NamespaceRegistry()
    return _default_registry


def artifact_ns(key: Any = CURRENT) -> ArtifactNamespace:
    """Shortcut for ``default_registry().instance(key)``."""
    return default_registry().instance(key)


def artifact(key: Any) -> Any:
    """Shortcut for ``default_registry().artifact(key)``."""
    return default_registry().artifact(key)
