"""Tests for NamespaceRegistry: memoization, project scopes and artifact lookup."""

from __future__ import annotations

import pytest

from artifactns.core.artifact import Coordinate
from artifactns.core.namespace import (
    ArtifactNamespace,
    NamespaceRegistry,
    artifact,
    artifact_ns,
    default_registry,
)
from artifactns.core.namespace import registry as registry_module
from artifactns.exceptions import ArtifactLookupError


class TestInstance:
    """Tests for ``root``, ``instance`` and ``clear``."""

    def test_root_is_memoized(self, registry: NamespaceRegistry) -> None:
        """``root()`` always returns the same namespace."""
        assert registry.root() is registry.instance("root")
        assert registry.root() is registry.instance(None)
        assert registry.root().is_root is True

    def test_instance_is_memoized_by_canonical_name(self, registry: NamespaceRegistry) -> None:
        """Equivalent names map to one namespace."""
        assert registry.instance("foo:bar") is registry.instance(["foo", "bar"])
        assert registry.instance("foo::bar") is registry.instance("foo:bar")

    def test_instance_name_from_parts(self, registry: NamespaceRegistry) -> None:
        """Name parts are joined with colons."""
        assert registry.instance(["foo", "bar", "baz"]).name == "foo:bar:baz"

    def test_instance_of_namespace_returns_it(self, registry: NamespaceRegistry) -> None:
        """Passing a namespace returns it unchanged."""
        ns = registry.instance("foo")
        assert registry.instance(ns) is ns

    def test_clear_forgets_namespaces(self, registry: NamespaceRegistry) -> None:
        """``clear`` drops namespaces; old references keep their entries."""
        old = registry.instance("foo")
        old.use(spring="org.springframework:spring:jar:2.5")
        registry.clear()
        assert registry.instance("foo") is not old
        assert registry.instance("foo").keys() == []
        assert old.keys() == ["spring"]

    def test_contains(self, registry: NamespaceRegistry) -> None:
        """``in`` reports memoized namespaces."""
        assert "foo" not in registry
        registry.instance("foo")
        assert "foo" in registry


class TestProject:
    """Tests for the ``project`` scope context manager."""

    def test_current_namespace_inside_project(self, registry: NamespaceRegistry) -> None:
        """``project`` makes its namespace current."""
        with registry.project("foo") as foo:
            assert registry.instance() is foo
            assert registry.current_scope() == ["foo"]
        assert registry.instance() is registry.root()
        assert registry.current_scope() == []

    def test_nested_projects(self, registry: NamespaceRegistry) -> None:
        """Nested projects extend the current name."""
        with registry.project("foo") as foo:
            with registry.project("bar") as bar:
                assert bar.name == "foo:bar"
                assert bar.parent is foo
                assert registry.current_scope() == ["foo", "bar"]
            assert registry.instance() is foo

    def test_top_level_project_parent_is_root(self, registry: NamespaceRegistry) -> None:
        """A top-level project hangs off the root."""
        with registry.project("foo") as foo:
            assert foo.parent is registry.root()

    def test_scope_restored_on_error(self, registry: NamespaceRegistry) -> None:
        """The scope is popped even when the block raises."""
        with pytest.raises(RuntimeError):
            with registry.project("foo"):
                raise RuntimeError("boom")
        assert registry.current_scope() == []

    def test_project_sees_parent_selections(self, registry: NamespaceRegistry) -> None:
        """Projects inherit from the enclosing project."""
        registry.root().use(spring="org.springframework:spring:jar:2.5")
        with registry.project("one") as one:
            one.need(spring="org.springframework:spring:jar:>=2.0")
            assert one["spring"].version == "2.5"
            with registry.project("oldie") as oldie:
                oldie.use(spring="org.springframework:spring:jar:2.5.6")
                assert oldie["spring"].version == "2.5.6"
        assert registry.root()["spring"].version == "2.5"


class TestArtifact:
    """Tests for ``artifact`` lookup."""

    def test_concrete_spec_goes_to_factory(self, registry: NamespaceRegistry) -> None:
        """A concrete spec bypasses namespaces."""
        assert registry.artifact("g:a:jar:1.0") == Coordinate.parse("g:a:jar:1.0")

    def test_name_resolved_in_current_project(self, registry: NamespaceRegistry) -> None:
        """Names resolve in the project being defined."""
        registry.root().use(spring="org.springframework:spring:jar:2.5")
        with registry.project("one") as one:
            one.use(spring="3.0")
            assert registry.artifact("spring").version == "3.0"
        assert registry.artifact("spring").version == "2.5"

    def test_unversioned_spec_lookup(self, registry: NamespaceRegistry) -> None:
        """An unversioned spec resolves through the index."""
        registry.root().use(spring="org.springframework:spring:jar:2.5")
        assert registry.artifact("org.springframework:spring:jar").version == "2.5"

    def test_group_yields_list(self, registry: NamespaceRegistry) -> None:
        """A group resolves to a list of artifacts."""
        registry.root().use(libs=["g:a:jar:1.0", "g:b:jar:2.0"])
        assert [c.to_spec() for c in registry.artifact("libs")] == ["g:a:jar:1.0", "g:b:jar:2.0"]

    def test_missing_raises(self, registry: NamespaceRegistry) -> None:
        """An unknown key raises ArtifactLookupError."""
        with pytest.raises(ArtifactLookupError, match="No artifact found"):
            registry.artifact("missing")

    def test_declared_without_version_raises(self, registry: NamespaceRegistry) -> None:
        """A declaration without a version cannot be resolved."""
        registry.root().need(lib="g:lib:jar:>1")
        with pytest.raises(ArtifactLookupError, match="No artifact found"):
            registry.artifact("lib")

    def test_custom_factory(self) -> None:
        """The factory builds the returned artifacts."""
        registry = NamespaceRegistry(artifact_factory=lambda spec: ("task", spec))
        registry.root().use(spring="org.springframework:spring:jar:2.5")
        assert registry.artifact("spring") == ("task", "org.springframework:spring:jar:2.5")


class TestLoad:
    """Tests for ``load`` (namespace name -> uses)."""

    def test_load_mapping(self, registry: NamespaceRegistry) -> None:
        """``load`` applies uses per namespace; None is the root."""
        registry.load({
            None: {"spring": "org.springframework:spring:jar:2.5"},
            "one:oldie": {"spring": "org.springframework:spring:jar:1.0"},
        })
        assert registry.root()["spring"].version == "2.5"
        assert registry.instance("one:oldie")["spring"].version == "1.0"

    def test_load_none_is_a_no_op(self, registry: NamespaceRegistry) -> None:
        """Loading None changes nothing."""
        assert registry.load(None) is registry


class TestDefaultRegistry:
    """Tests for the process-wide convenience functions."""

    @pytest.fixture(autouse=True)
    def isolated_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(registry_module, "_default_registry", None)

    def test_default_registry_is_shared(self) -> None:
        """The process-wide registry is a singleton."""
        assert default_registry() is default_registry()

    def test_artifact_ns(self) -> None:
        """``artifact_ns`` resolves in the default registry."""
        assert isinstance(artifact_ns(), ArtifactNamespace)
        assert artifact_ns("root") is default_registry().root()

    def test_artifact(self) -> None:
        """``artifact`` resolves in the default registry."""
        artifact_ns().use(spring="org.springframework:spring:jar:2.5")
        assert artifact("spring").to_spec() == "org.springframework:spring:jar:2.5"
