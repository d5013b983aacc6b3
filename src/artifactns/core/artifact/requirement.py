"""Named artifact requirements held by namespaces.

An ``ArtifactRequirement`` binds an entry name to an unversioned coordinate,
an optional ``VersionRequirement``, and the version currently in effect. The
version is either *selected* (chosen by ``use`` or inherited from an
ancestor namespace) or merely *suggested* by the requirement's default.

Invariant: a selected version always satisfies the requirement. It is
checked at assignment time by ``select`` and ``declare``; nothing is mutated
when the check fails.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator

from artifactns.core.artifact.coordinate import Coordinate
from artifactns.core.versioning import Version, VersionRequirement
from artifactns.exceptions import ArtifactLookupError, ParseError, UnsatisfiedRequirementError

logger = logging.getLogger(__name__)

Listener = Callable[["ArtifactRequirement"], None]


class ArtifactRequirement:
    """A declared and/or selected artifact within a namespace.

    Equality is identity: two requirements with the same content in
    different namespaces are distinct entries.

    Args:
        name: Entry name within the owning namespace.
        coordinate: Coordinate of the artifact; its version is ignored.
        requirement: Version constraint, or None for "any version".
        version: Suggested version. It does not count as a selection.
    """

    def __init__(
        self,
        name: str,
        coordinate: Coordinate | None = None,
        requirement: VersionRequirement | None = None,
        version: str | None = None,
    ) -> None:
        self.name = name
        self.coordinate = coordinate.unversioned() if coordinate else None
        self.requirement = requirement
        self._version = version
        self._selected = False
        self._listeners: list[Listener] = []

    # -- Coordinate accessors ----------------------------------------------

    @property
    def group(self) -> str | None:
        return self.coordinate.group if self.coordinate else None

    @property
    def id(self) -> str | None:
        return self.coordinate.id if self.coordinate else None

    @property
    def type(self) -> str | None:
        return self.coordinate.type if self.coordinate else None

    @property
    def classifier(self) -> str | None:
        return self.coordinate.classifier if self.coordinate else None

    @property
    def unversioned_spec(self) -> str | None:
        return self.coordinate.unversioned_spec if self.coordinate else None

    # -- Version state -----------------------------------------------------

    @property
    def version(self) -> str | None:
        """The selected version, or the suggested one when nothing is selected."""
        return self._version

    @version.setter
    def version(self, value: str) -> None:
        self.select(value)

    @property
    def is_selected(self) -> bool:
        return self._selected

    def satisfied_by(self, spec_or_version: str | Version | Coordinate) -> bool:
        """Return True if *spec_or_version* meets this requirement.

        A coordinate naming a different artifact never satisfies. Otherwise,
        with no version requirement, anything does.

        Raises:
            ParseError: If a version string is malformed.
        """
        version: str | Version | None = spec_or_version
        if isinstance(spec_or_version, str) and Coordinate.looks_like_spec(spec_or_version):
            spec_or_version = Coordinate.parse(spec_or_version)
        if isinstance(spec_or_version, Coordinate):
            if self.coordinate and not self.coordinate.same_artifact(spec_or_version):
                return False
            version = spec_or_version.version
        if self.requirement is None:
            return True
        return self.requirement.satisfied_by(version)

    def select(self, spec: str | Coordinate) -> None:
        """Select a concrete version (or full coordinate) for use.

        Raises:
            ParseError: If the version or coordinate is malformed.
            UnsatisfiedRequirementError: If the requirement rejects it, or a
                coordinate names a different artifact than the declared one.
        """
        coordinate = None
        if isinstance(spec, Coordinate):
            coordinate = spec
        elif Coordinate.looks_like_spec(spec):
            coordinate = Coordinate.parse(spec)
        version = coordinate.version if coordinate else spec
        if not Version.is_valid(version):
            raise ParseError(
                f"Cannot select {str(spec)!r} for {self.name!r}: not a concrete version",
                token=str(version),
            )
        version = version.strip()

        if coordinate and self.coordinate and self.requirement is not None:
            if not self.coordinate.same_artifact(coordinate):
                raise UnsatisfiedRequirementError(
                    self.name, coordinate, self.coordinate, reason="artifact attributes mismatch"
                )
        if self.requirement is not None and not self.requirement.satisfied_by(version):
            raise UnsatisfiedRequirementError(self.name, spec, self.requirement)

        if coordinate:
            self.coordinate = coordinate.unversioned()
        self._version = version
        self._selected = True
        logger.debug(
            "Selected %s (%s) for %r", version, self.unversioned_spec or "no coordinate", self.name
        )
        for listener in list(self._listeners):
            listener(self)

    def declare(self, requirement: VersionRequirement | None, version: str | None = None) -> None:
        """Set the version requirement without forcing a selection.

        A selected version is kept only if it satisfies *requirement*; an
        unselected entry adopts *version* (or the requirement's default) as
        its suggestion.

        Raises:
            UnsatisfiedRequirementError: If the current selection violates
                *requirement*.
        """
        if self._selected and requirement is not None:
            if not requirement.satisfied_by(self._version):
                raise UnsatisfiedRequirementError(self.name, self._version, requirement)
        self.requirement = requirement
        if not self._selected:
            self._version = version if version is not None else (
                requirement.default() if requirement is not None else None
            )

    def clear_version(self) -> None:
        """Drop any selection or suggestion, leaving a bare declaration."""
        self._version = None
        self._selected = False

    def add_listener(self, callback: Listener) -> None:
        """Register *callback* to be called with this requirement after each selection."""
        self._listeners.append(callback)

    # -- Rendering ---------------------------------------------------------

    def to_spec(self) -> str:
        """Render the full coordinate with the current version.

        Raises:
            ArtifactLookupError: If there is no coordinate or no version.
        """
        if self.coordinate is None:
            raise ArtifactLookupError(f"Artifact {self.name!r} has no coordinate")
        if self._version is None:
            raise ArtifactLookupError(
                f"Artifact {self.name!r} ({self.unversioned_spec}) has no version selected"
            )
        return self.coordinate.with_version(self._version).to_spec()

    @property
    def artifact(self) -> Coordinate:
        """The concrete coordinate for the current version."""
        return Coordinate.parse(self.to_spec())

    def copy(self, name: str | None = None) -> ArtifactRequirement:
        """Return a structurally equal but distinct requirement.

        Listeners are not copied.
        """
        clone = ArtifactRequirement(
            name or self.name, self.coordinate, self.requirement, self._version
        )
        clone._selected = self._selected
        return clone

    def __repr__(self) -> str:
        state = "selected" if self._selected else "declared"
        spec = self.unversioned_spec or "?"
        req = f" {self.requirement}" if self.requirement is not None else ""
        return f"<ArtifactRequirement {self.name} {spec}:{self._version}{req} ({state})>"


class ArtifactGroup:
    """A named, ordered group of artifact requirements.

    Created by ``use``/``need`` with a list of specs. Iterating yields the
    member requirements.
    """

    def __init__(self, name: str, members: list[ArtifactRequirement]) -> None:
        self.name = name
        self.members = list(members)

    def __iter__(self) -> Iterator[ArtifactRequirement]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def specs(self) -> list[str]:
        """Return the member specs, in declaration order."""
        return [member.to_spec() for member in self.members]

    @property
    def is_selected(self) -> bool:
        return bool(self.members) and all(member.is_selected for member in self.members)

    def copy(self, name: str | None = None) -> ArtifactGroup:
        return ArtifactGroup(name or self.name, [member.copy() for member in self.members])

    def __repr__(self) -> str:
        return f"<ArtifactGroup {self.name} {[m.unversioned_spec for m in self.members]}>"
