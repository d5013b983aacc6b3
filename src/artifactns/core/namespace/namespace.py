"""Hierarchical artifact namespaces: declaration, selection and lookup.

An ``ArtifactNamespace`` is a named scope holding artifact entries. Every
project gets one, nested the same way projects are, so a sub-project sees
everything its parents declared and may override it locally::

    root = registry.root()
    root.use(spring="org.springframework:spring:jar:2.5")

    with registry.project("one") as one:
        one.need(spring="org.springframework:spring:jar:>=2.0")
        one["spring"].version          # "2.5", inherited from root
        one.use(spring="2.5.6")        # local override, checked against >=2.0

Entries
-------
Each key maps to one of:

- an ``ArtifactRequirement`` (declared with ``need`` or selected with ``use``);
- an ``ArtifactGroup`` (``use`` with a list of specs);
- an ``ArtifactNamespace`` (a sub-namespace created by ``ns`` or linked by
  assigning a namespace).

Entries are also indexed by unversioned spec (``group:id:type``), so an
artifact can be found either by name or by coordinate. The spec index always
points at the entry registered last for that coordinate.

Lookup
------
``get(key)`` tries, in each namespace from this one up to the root: the
local entry name, a compound underscore path into sub-namespaces
(``foo_bar`` is ``foo.bar``), then the coordinate index.

Inheritance
-----------
``need`` adopts the version an ancestor has already *selected* for the same
coordinate when it satisfies the new requirement. When it does not, the
entry stays declared but without a version until a later ``use`` resolves
it. ``use`` enforces requirements declared for the same name on any
ancestor.

Ancestry
--------
Parents are back-references (``weakref``), never ownership. With no explicit
parent, the parent derives from the name (``a:b:c`` -> ``a:b`` -> root); a
namespace whose explicit parent has been collected is an orphan. The
root never has a parent, and parent assignments that would form a cycle are
rejected.
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Union

from artifactns.core.artifact import (
    ArtifactGroup,
    ArtifactRequirement,
    Coordinate,
    NeedSpec,
    parse_need_spec,
)
from artifactns.core.namespace.naming import (
    CURRENT,
    ROOT,
    EntryKey,
    compound_splits,
    entry_key,
    parent_name,
)
from artifactns.core.versioning import Version, VersionRequirement
from artifactns.exceptions import (
    ArtifactLookupError,
    ImmutabilityError,
    ParseError,
    TypeMismatchError,
    UnsatisfiedRequirementError,
)

if TYPE_CHECKING:
    from artifactns.core.namespace.registry import NamespaceRegistry

logger = logging.getLogger(__name__)

Entry = Union[ArtifactRequirement, ArtifactGroup, "ArtifactNamespace"]


def _flatten(items: Iterable[Any]) -> Iterator[Any]:
    for item in items:
        if isinstance(item, (list, tuple)):
            yield from _flatten(item)
        else:
            yield item


class ArtifactNamespace:
    """A named scope of artifact requirements within a namespace tree.

    Args:
        name: Canonical namespace name (``"root"`` for the top level).
        registry: Registry used to resolve parent names and the current
            scope. Anonymous namespaces may omit it.
        parent: Optional explicit parent (namespace, name, or ``CURRENT``).
    """

    def __init__(
        self,
        name: str = "",
        registry: NamespaceRegistry | None = None,
        parent: Any = None,
    ) -> None:
        self._name = name
        self._registry = registry
        self._entries: dict[str, Entry] = {}
        self._by_spec: dict[str, ArtifactRequirement] = {}
        self._parent_ref: weakref.ref[ArtifactNamespace] | None = None
        self._parent_is_current = False
        if parent is not None:
            self.parent = parent

    # -- Identity ------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_root(self) -> bool:
        return self._name == ROOT

    @property
    def registry(self) -> NamespaceRegistry | None:
        return self._registry

    # -- Ancestry ------------------------------------------------------------

    @property
    def parent(self) -> ArtifactNamespace | None:
        """The enclosing namespace, or None for the root (and for orphans)."""
        if self.is_root:
            return None
        if self._parent_is_current:
            current = self._registry.instance(CURRENT)
            if current is self or self in current.ancestors():
                raise ImmutabilityError(
                    f"Current namespace {current.name!r} cannot be the parent of {self._name!r}"
                )
            return current
        if self._parent_ref is not None:
            # A dead explicit parent leaves an orphan.
            return self._parent_ref()
        if self._registry is None or not self._name:
            return None
        return self._registry.instance(parent_name(self._name))

    @parent.setter
    def parent(self, value: Any) -> None:
        if self.is_root:
            raise ImmutabilityError("Cannot set parent of root namespace")
        if value is None:
            self._parent_ref, self._parent_is_current = None, False
            return
        if isinstance(value, str) and value == CURRENT:
            if self._registry is None:
                raise ArtifactLookupError(
                    f"Namespace {self._name!r} has no registry to resolve the current scope"
                )
            self._parent_ref, self._parent_is_current = None, True
            return
        if not isinstance(value, ArtifactNamespace):
            if self._registry is None:
                raise ArtifactLookupError(
                    f"Namespace {self._name!r} has no registry to resolve parent {value!r}"
                )
            value = self._registry.instance(value)
        if value is self or self in value.ancestors():
            raise ImmutabilityError(
                f"Setting {value.name!r} as parent of {self._name!r} would create a cycle"
            )
        self._parent_ref, self._parent_is_current = weakref.ref(value), False

    def ancestors(self) -> Iterator[ArtifactNamespace]:
        """Yield the parent, grandparent, ... up to the root."""
        seen = {id(self)}
        current = self.parent
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            yield current
            current = current.parent

    def _scope_chain(self) -> list[ArtifactNamespace]:
        return [self, *self.ancestors()]

    # -- Lookup --------------------------------------------------------------

    def _local(self, key: EntryKey) -> Entry | None:
        if key.is_spec:
            return self._by_spec.get(key.text)
        entry = self._entries.get(key.text)
        if entry is not None:
            return entry
        for head, rest in compound_splits(key.text):
            sub = self._entries.get(head)
            if isinstance(sub, ArtifactNamespace):
                entry = sub._local(EntryKey(rest))
                if entry is not None:
                    return entry
        return None

    def _find(self, key: EntryKey) -> tuple[ArtifactNamespace, Entry] | tuple[None, None]:
        for scope in self._scope_chain():
            entry = scope._local(key)
            if entry is not None:
                return scope, entry
        return None, None

    def get(self, key: Any) -> Entry | None:
        """Return the entry for *key* here or in an ancestor, or None."""
        return self._find(entry_key(key))[1]

    def has(self, key: Any) -> bool:
        """True if *key* resolves to a selected artifact (or to a sub-namespace)."""
        entry = self.get(key)
        if isinstance(entry, ArtifactNamespace):
            return True
        return entry is not None and entry.is_selected

    def keys(self) -> list[str]:
        """Return the names defined locally, in definition order."""
        return list(self._entries)

    def _inherited_requirement(self, name: str) -> VersionRequirement | None:
        for scope in self._scope_chain():
            entry = scope._entries.get(name)
            if isinstance(entry, ArtifactRequirement) and entry.requirement is not None:
                return entry.requirement
        return None

    def _requirements_for(self, spec: str) -> Iterator[ArtifactRequirement]:
        """Yield every local requirement for the unversioned *spec*, index entry first."""
        indexed = self._by_spec.get(spec)
        if indexed is not None:
            yield indexed
        for entry in self._entries.values():
            members = entry if isinstance(entry, ArtifactGroup) else [entry]
            for member in members:
                if (
                    isinstance(member, ArtifactRequirement)
                    and member is not indexed
                    and member.unversioned_spec == spec
                ):
                    yield member

    def _ancestor_selection(self, coordinate: Coordinate) -> ArtifactRequirement | None:
        for scope in self.ancestors():
            for entry in scope._requirements_for(coordinate.unversioned_spec):
                if entry.is_selected:
                    return entry
        return None

    # -- Staging --------------------------------------------------------------

    def _snapshot(self, seen: set[int]) -> list[tuple[Any, dict[str, Any]]]:
        if id(self) in seen:
            return []
        seen.add(id(self))
        saved: list[tuple[Any, dict[str, Any]]] = [
            (self, {"_entries": dict(self._entries), "_by_spec": dict(self._by_spec)})
        ]
        for entry in [*self._entries.values(), *self._by_spec.values()]:
            if isinstance(entry, ArtifactNamespace):
                saved.extend(entry._snapshot(seen))
            else:
                members = entry if isinstance(entry, ArtifactGroup) else [entry]
                saved.extend((member, dict(vars(member))) for member in members)
        return saved

    @contextmanager
    def _atomic(self) -> Iterator[None]:
        """Undo every change to this namespace and its sub-namespaces if the block raises."""
        saved = self._snapshot(set())
        try:
            yield
        except Exception:
            for obj, state in saved:
                vars(obj).update(state)
            raise

    # -- Registration helpers -------------------------------------------------

    def _guard_replace(self, name: str, value: Any) -> None:
        existing = self._entries.get(name)
        if isinstance(existing, ArtifactNamespace) and not isinstance(value, ArtifactNamespace):
            raise TypeMismatchError(
                f"{name!r} in namespace {self._name!r} is a sub-namespace; reopen it with ns()"
            )

    def _index(self, requirement: ArtifactRequirement, previous_spec: str | None = None) -> None:
        if previous_spec and self._by_spec.get(previous_spec) is requirement:
            if previous_spec != requirement.unversioned_spec:
                del self._by_spec[previous_spec]
        if requirement.unversioned_spec:
            self._by_spec[requirement.unversioned_spec] = requirement

    def _bind(self, name: str, requirement: ArtifactRequirement) -> ArtifactRequirement:
        self._entries[name] = requirement
        self._index(requirement)
        return requirement

    def _bind_copy(self, name: str, source: ArtifactRequirement) -> ArtifactRequirement:
        clone = source.copy(name)
        constraint = self._inherited_requirement(name)
        if constraint is not None:
            if clone.is_selected and not constraint.satisfied_by(clone.version):
                raise UnsatisfiedRequirementError(name, clone.to_spec(), constraint)
            if clone.requirement is None:
                clone.requirement = constraint
        return self._bind(name, clone)

    def _select_spec(self, name: str, coordinate: Coordinate) -> ArtifactRequirement:
        existing = self._entries.get(name)
        if isinstance(existing, ArtifactRequirement):
            previous = existing.unversioned_spec
            existing.select(coordinate)
            self._index(existing, previous)
            return existing
        requirement = ArtifactRequirement(name, coordinate, self._inherited_requirement(name))
        requirement.select(coordinate)
        return self._bind(name, requirement)

    def _select_version(self, name: str, version: str) -> ArtifactRequirement:
        existing = self._entries.get(name)
        if isinstance(existing, ArtifactRequirement):
            existing.select(version)
            self._index(existing)
            return existing
        _, inherited = self._find(EntryKey(name))
        if inherited is None:
            # Version-only entry; a later need() supplies the coordinate.
            pending = ArtifactRequirement(name)
            pending.select(version)
            self._entries[name] = pending
            return pending
        if not isinstance(inherited, ArtifactRequirement):
            raise ArtifactLookupError(
                f"Cannot select version {version!r}: {name!r} in namespace "
                f"{self._name!r} is not an artifact"
            )
        clone = inherited.copy(name)
        clone.select(version)
        return self._bind(name, clone)

    def _group(self, name: str, specs: list[Any]) -> ArtifactGroup:
        coordinates = []
        for spec in _flatten(specs):
            coordinate = spec.artifact if isinstance(spec, ArtifactRequirement) else Coordinate.parse(spec)
            if not coordinate.is_concrete:
                raise ParseError(f"Group member {str(spec)!r} has no concrete version", token=str(spec))
            coordinates.append(coordinate)
        members = []
        for coordinate in coordinates:
            member = ArtifactRequirement(coordinate.id, coordinate)
            member.select(coordinate)
            members.append(member)
        return self._bind_group(ArtifactGroup(name, members))

    def _bind_group(self, group: ArtifactGroup) -> ArtifactGroup:
        self._entries[group.name] = group
        for member in group:
            self._index(member)
            if member.name not in self._entries:
                self._entries[member.name] = member
        return group

    # -- Declaration ---------------------------------------------------------

    def _declare(self, spec: NeedSpec, bind_name: bool = True) -> ArtifactRequirement:
        existing = self._entries.get(spec.name) if bind_name else None
        if existing is not None and not isinstance(existing, ArtifactRequirement):
            raise TypeMismatchError(
                f"{spec.name!r} in namespace {self._name!r} is not an artifact requirement"
            )
        if existing is not None:
            if (
                existing.is_selected
                and existing.coordinate is not None
                and not existing.coordinate.same_artifact(spec.coordinate)
            ):
                raise UnsatisfiedRequirementError(
                    spec.name, existing.to_spec(), spec.coordinate, reason="artifact attributes mismatch"
                )
            previous = existing.unversioned_spec
            existing.declare(spec.requirement, spec.version)
            existing.coordinate = spec.coordinate
            requirement = existing
        else:
            previous = None
            requirement = ArtifactRequirement(spec.name, spec.coordinate, spec.requirement, spec.version)

        if not requirement.is_selected:
            inherited = self._ancestor_selection(spec.coordinate)
            if inherited is not None:
                if requirement.satisfied_by(inherited.version):
                    logger.debug(
                        "Namespace %r inherits %s for %r", self._name, inherited.to_spec(), spec.name
                    )
                    requirement.select(inherited.version)
                else:
                    logger.warning(
                        "Namespace %r: %s selected by an ancestor does not satisfy %r for %r; "
                        "select a version explicitly",
                        self._name, inherited.to_spec(), str(spec.requirement), spec.name,
                    )
                    requirement.clear_version()

        if bind_name:
            self._entries[spec.name] = requirement
        self._index(requirement, previous)
        return requirement

    def need(self, *specs: Any, **named: Any) -> ArtifactNamespace:
        """Declare artifact requirements without forcing a selection.

        Accepts any mix of:

        - ``"g:i:t:req"`` -- named after the artifact id;
        - ``"name -> g:i:t[:version] -> req"`` (arrow segments optional);
        - mappings (or keyword arguments) of ``name -> spec | [specs]``;
        - ``ArtifactRequirement`` objects, copied from another namespace.

        When an ancestor has already selected the same coordinate and that
        version satisfies the requirement, it is selected here too.

        Raises:
            ParseError: On malformed specs; nothing is declared.
            UnsatisfiedRequirementError: If an existing selection violates
                the new requirement.
            TypeMismatchError: If a name holds a sub-namespace or group.

        Either every spec is declared or, on error, the namespace is left
        as it was.
        """
        plan: list[tuple[str | None, Any]] = []
        for spec in _flatten(specs):
            if isinstance(spec, Mapping):
                plan.extend(self._plan_need_mapping(spec))
            elif isinstance(spec, ArtifactRequirement):
                if spec.coordinate is None:
                    raise ParseError(f"Requirement {spec.name!r} has no coordinate")
                plan.append((None, NeedSpec(spec.name, spec.coordinate, spec.requirement, spec.version)))
            else:
                plan.append((None, parse_need_spec(spec)))
        if named:
            plan.extend(self._plan_need_mapping(named))

        with self._atomic():
            for group_name, item in plan:
                if group_name is None:
                    self._declare(item)
                else:
                    # Members are reachable by coordinate or alias only.
                    members = [self._declare(member, bind_name=False) for member in item]
                    self._entries[group_name] = ArtifactGroup(group_name, members)
        return self

    @staticmethod
    def _plan_need_mapping(mapping: Mapping[Any, Any]) -> list[tuple[str | None, Any]]:
        plan: list[tuple[str | None, Any]] = []
        for key, value in mapping.items():
            name = entry_key(key).text
            if isinstance(value, (list, tuple)):
                plan.append((name, [parse_need_spec(v) for v in _flatten(value)]))
            else:
                plan.append((None, parse_need_spec(value, name=name)))
        return plan

    # -- Selection -----------------------------------------------------------

    def use(self, *specs: Any, **named: Any) -> ArtifactNamespace:
        """Select artifacts for use in this namespace.

        Positional arguments may be coordinate strings (named after the
        artifact id), mappings of ``name -> value``, ``ArtifactRequirement``
        objects, or names of existing entries to copy here. Keyword arguments
        are ``name=value`` pairs. See ``set`` for accepted values.

        Either every selection applies or, on error, the namespace is left
        as it was.
        """
        plan = self._plan_use(specs, named)
        with self._atomic():
            for key, value in plan:
                self.set(key, value)
        return self

    def default(self, *specs: Any, **named: Any) -> ArtifactNamespace:
        """Like ``use``, but only for names with no selection yet.

        Lets an addon ship versions its users can override, whether they
        select before or after the addon loads::

            addon.need(bar="foo:bar:jar:>2.0")
            addon.default(bar="2.5")     # kept unless bar is already selected
        """
        plan = self._plan_use(specs, named)
        with self._atomic():
            for key, value in plan:
                if self.has(key):
                    logger.debug("Namespace %r keeps its selection for %r", self._name, key)
                    continue
                self.set(key, value)
        return self

    def _plan_use(self, specs: tuple[Any, ...], named: Mapping[str, Any]) -> list[tuple[Any, Any]]:
        plan: list[tuple[Any, Any]] = []
        for spec in _flatten(specs):
            if isinstance(spec, Mapping):
                plan.extend(spec.items())
            elif isinstance(spec, ArtifactRequirement):
                plan.append((spec.name, spec))
            elif isinstance(spec, str) and Coordinate.looks_like_spec(spec):
                plan.append((Coordinate.parse(spec).id, spec))
            elif isinstance(spec, str):
                plan.append((spec, spec))
            else:
                raise TypeMismatchError(f"Cannot use {spec!r} in namespace {self._name!r}")
        plan.extend(named.items())
        return plan

    def set(self, key: Any, value: Any) -> Entry:
        """Bind *value* to *key* in this namespace.

        *value* may be:

        - a coordinate ``"g:i:t:1.0"`` -- selects that artifact (a requirement
          in the version slot declares it instead, like ``need``);
        - a bare version ``"1.0"`` -- reselects the existing (local or
          inherited) entry for *key*, or records a version-only entry that
          a later ``need`` completes with a coordinate;
        - a list of coordinates -- creates an ``ArtifactGroup``;
        - the name of another entry, an ``ArtifactRequirement`` or an
          ``ArtifactGroup`` -- bound as a structural copy;
        - an ``ArtifactNamespace`` -- linked as a sub-namespace entry.

        Raises:
            UnsatisfiedRequirementError: If a declared requirement rejects it.
            ArtifactLookupError: If a referenced entry does not exist.
            TypeMismatchError: If *key* holds a sub-namespace and *value* is
                not one.
        """
        ek = entry_key(key)
        if ek.is_spec:
            return self._set_by_spec(ek, value)

        name = ek.text
        if name not in self._entries:
            for head, rest in compound_splits(name):
                sub = self._entries.get(head)
                if isinstance(sub, ArtifactNamespace):
                    return sub.set(rest, value)

        self._guard_replace(name, value)
        if isinstance(value, ArtifactNamespace):
            self._entries[name] = value
            return value
        if isinstance(value, ArtifactGroup):
            return self._bind_group(value.copy(name))
        if isinstance(value, ArtifactRequirement):
            return self._bind_copy(name, value)
        if isinstance(value, (list, tuple)):
            return self._group(name, list(value))
        if isinstance(value, Coordinate):
            value = value.to_spec()
        if not isinstance(value, str):
            raise TypeMismatchError(f"Cannot assign {value!r} to {name!r}")

        if Coordinate.looks_like_spec(value):
            coordinate = Coordinate.parse(value)
            if coordinate.is_concrete:
                return self._select_spec(name, coordinate)
            if coordinate.version is None:
                raise ParseError(f"Cannot use {value!r} for {name!r}: no version given", token=value)
            return self._declare(parse_need_spec(value, name=name))
        if Version.is_valid(value):
            return self._select_version(name, value)

        referenced = self.get(value)
        if referenced is None:
            raise ArtifactLookupError(
                f"Undefined artifact {value!r} referenced from namespace {self._name!r}"
            )
        return self.set(name, referenced)

    def _set_by_spec(self, key: EntryKey, value: Any) -> Entry:
        _, existing = self._find(key)
        name = existing.name if isinstance(existing, ArtifactRequirement) else key.text.split(":")[1]
        if isinstance(value, str) and Version.is_valid(value):
            value = f"{key.text}:{value.strip()}"
        return self.set(name, value)

    def alias(self, new_key: Any, existing_key: Any) -> Entry:
        """Bind *new_key* to the very same entry object as *existing_key*.

        Raises:
            ArtifactLookupError: If *existing_key* is not defined.
        """
        entry = self.get(existing_key)
        if entry is None:
            raise ArtifactLookupError(
                f"Cannot alias {new_key!r}: undefined artifact {existing_key!r} "
                f"in namespace {self._name!r}"
            )
        name = entry_key(new_key).text
        self._guard_replace(name, entry)
        self._entries[name] = entry
        return entry

    # -- Sub-namespaces --------------------------------------------------------

    def ns(self, key: Any, *use_args: Any, **use_kwargs: Any) -> ArtifactNamespace:
        """Create or reopen the sub-namespace *key* and apply any ``use`` arguments.

        Raises:
            TypeMismatchError: If *key* already holds something other than a
                sub-namespace.
        """
        name = entry_key(key).text
        existing = self._entries.get(name)
        created = existing is None
        if created:
            sub = ArtifactNamespace(f"{self._name}:{name}", registry=self._registry, parent=self)
            self._entries[name] = sub
            logger.debug("Created sub-namespace %r", sub.name)
        elif isinstance(existing, ArtifactNamespace):
            sub = existing
        else:
            raise TypeMismatchError(
                f"{name!r} in namespace {self._name!r} is not a sub-namespace"
            )
        if use_args or use_kwargs:
            try:
                sub.use(*use_args, **use_kwargs)
            except Exception:
                if created:
                    del self._entries[name]
                raise
        return sub

    # -- Enumeration -----------------------------------------------------------

    def _local_artifacts(self, seen: set[int]) -> Iterator[ArtifactRequirement]:
        if id(self) in seen:
            return
        seen.add(id(self))
        for entry in list(self._entries.values()):
            if isinstance(entry, ArtifactRequirement):
                yield entry
            elif isinstance(entry, ArtifactGroup):
                yield from entry
            else:
                yield from entry._local_artifacts(seen)
        yield from list(self._by_spec.values())

    def values(self, include_parents: bool = False) -> list[ArtifactRequirement]:
        """Return the artifacts with a version defined in this namespace.

        Sub-namespaces and groups are included. Artifacts are unique by
        unversioned spec; the nearest definition wins.

        Args:
            include_parents: Also include every ancestor's artifacts.
        """
        scopes = self._scope_chain() if include_parents else [self]
        seen_specs: set[str] = set()
        seen_namespaces: set[int] = set()
        result: list[ArtifactRequirement] = []
        for scope in scopes:
            for requirement in scope._local_artifacts(seen_namespaces):
                spec = requirement.unversioned_spec
                if spec is None or requirement.version is None or spec in seen_specs:
                    continue
                seen_specs.add(spec)
                result.append(requirement)
        return result

    def values_at(self, *keys: Any) -> list[ArtifactRequirement]:
        """Return the artifacts named by *keys*, skipping unknown ones.

        A coordinate key carrying a version or requirement
        (``"g:i:t:>1.0"``) returns the nearest artifact for that coordinate
        whose version satisfies it.
        """
        found: list[ArtifactRequirement] = []
        for key in _flatten(keys):
            ek = entry_key(key)
            if ek.is_spec and ek.version is not None:
                match = self._first_satisfying(ek.text, VersionRequirement.create(ek.version))
                if match is not None:
                    found.append(match)
                continue
            entry = self.get(key)
            if isinstance(entry, ArtifactRequirement):
                found.append(entry)
            elif isinstance(entry, ArtifactGroup):
                found.extend(entry)
            elif isinstance(entry, ArtifactNamespace):
                found.extend(entry.values())
        return found

    def _first_satisfying(
        self, spec: str, requirement: VersionRequirement
    ) -> ArtifactRequirement | None:
        for scope in self._scope_chain():
            for candidate in scope._requirements_for(spec):
                if candidate.version is not None and requirement.satisfied_by(candidate.version):
                    return candidate
        return None

    def __iter__(self) -> Iterator[ArtifactRequirement]:
        return iter(self.values())

    # -- Removal ---------------------------------------------------------------

    def delete(self, key: Any) -> ArtifactNamespace:
        """Remove the local entry for *key* and every local alias of it."""
        entry = self._local(entry_key(key))
        if entry is not None:
            for name in [n for n, e in self._entries.items() if e is entry]:
                del self._entries[name]
            for spec in [s for s, e in self._by_spec.items() if e is entry]:
                del self._by_spec[spec]
        return self

    def clear(self) -> None:
        """Remove every local entry."""
        self._entries.clear()
        self._by_spec.clear()

    # -- Mapping and attribute sugar ------------------------------------------

    def __getitem__(self, key: Any) -> Any:
        if isinstance(key, tuple):
            return [self.get(k) for k in key]
        return self.get(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: Any) -> None:
        self.delete(key)

    def __contains__(self, key: Any) -> bool:
        return self._local(entry_key(key)) is not None

    def __getattr__(self, name: str) -> Entry:
        if name.startswith("_"):
            raise AttributeError(name)
        entry = self.get(name)
        if entry is None:
            raise AttributeError(f"Namespace {self._name!r} has no artifact {name!r}")
        return entry

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or hasattr(type(self), name):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def __repr__(self) -> str:
        return f"<ArtifactNamespace {self._name or '(anonymous)'} keys={self.keys()}>"
