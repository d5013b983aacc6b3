"""Artifact coordinates and the ``need`` spec-string grammar.

A coordinate names an artifact in a repository::

    group:id:type:version
    group:id:type:classifier:version
    group:id:type                       (unversioned)

In ``need`` declarations the version slot may hold a requirement expression
instead of a concrete version, and a declaration may carry an explicit name
and a separate requirement::

    need-spec := name? "->"? coordinate ("->" requirement)?

For example ``thing -> a:b:c:2.1 -> ~>2.0`` names the entry ``thing``,
suggests version ``2.1``, and requires ``~>2.0``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from artifactns.core.versioning import Version, VersionRequirement
from artifactns.exceptions import ParseError


# ---------------------------------------------------------------------------
# Coordinate
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Coordinate:
    """A (possibly unversioned) artifact coordinate.

    A concrete coordinate (one with a version) is also the default artifact
    handle handed out by the registry: it exposes ``to_spec()``.

    Attributes:
        group: Group identifier, e.g. ``org.springframework``.
        id: Artifact identifier, e.g. ``spring``.
        type: Packaging type, e.g. ``jar``.
        classifier: Optional classifier, e.g. ``sources``.
        version: Version text, or None for an unversioned coordinate.
    """

    group: str
    id: str
    type: str
    classifier: str | None = None
    version: str | None = None

    @classmethod
    def parse(cls, spec: str) -> Coordinate:
        """Parse ``group:id:type[:classifier]:version`` or ``group:id:type``.

        The version slot is kept verbatim; it may be a requirement expression
        when the coordinate comes from a ``need`` declaration.

        Raises:
            ParseError: If *spec* does not have 3 to 5 colon-separated parts
                or any of group, id, type is empty.
        """
        if not isinstance(spec, str):
            raise ParseError(f"Artifact spec must be a string, got {type(spec).__name__}")
        parts = [part.strip() for part in spec.strip().split(":")]
        if not 3 <= len(parts) <= 5 or not all(parts[:3]):
            raise ParseError(
                "Expecting <group:id:type:version> or "
                f"<group:id:type:classifier:version>, found {spec!r}",
                token=spec,
            )
        group, id_, type_ = parts[:3]
        classifier = version = None
        if len(parts) == 4:
            version = parts[3]
        elif len(parts) == 5:
            classifier, version = parts[3], parts[4]
        return cls(group, id_, type_, classifier or None, version or None)

    @staticmethod
    def looks_like_spec(text: object) -> bool:
        """Return True if *text* is shaped like a coordinate (two or more colons)."""
        return isinstance(text, str) and text.count(":") >= 2

    @property
    def unversioned_spec(self) -> str:
        """The coordinate without its version, e.g. ``g:i:t`` or ``g:i:t:c``."""
        base = f"{self.group}:{self.id}:{self.type}"
        return f"{base}:{self.classifier}" if self.classifier else base

    @property
    def is_concrete(self) -> bool:
        """True if the version slot holds a plain, valid version."""
        return Version.is_valid(self.version)

    def unversioned(self) -> Coordinate:
        return replace(self, version=None)

    def with_version(self, version: str | None) -> Coordinate:
        return replace(self, version=version)

    def same_artifact(self, other: Coordinate) -> bool:
        """True if both coordinates name the same artifact, ignoring version."""
        return self.unversioned_spec == other.unversioned_spec

    def to_spec(self) -> str:
        """Render ``group:id:type[:classifier]:version``."""
        if self.version is None:
            return self.unversioned_spec
        return f"{self.unversioned_spec}:{self.version}"

    def __str__(self) -> str:
        return self.to_spec()


# ---------------------------------------------------------------------------
# need-spec parsing
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NeedSpec:
    """A parsed ``need`` declaration.

    Attributes:
        name: Entry name (defaults to the coordinate's id).
        coordinate: Unversioned coordinate.
        requirement: The version requirement, or None if unconstrained.
        version: Suggested version (explicit, or the requirement's default).
    """

    name: str
    coordinate: Coordinate
    requirement: VersionRequirement | None
    version: str | None


def _split_version_slot(slot: str | None) -> tuple[VersionRequirement | None, str | None]:
    if slot is None:
        return None, None
    requirement = VersionRequirement.create(slot)
    return requirement, requirement.default()


def parse_need_spec(text: str, name: str | None = None) -> NeedSpec:
    """Parse a ``need`` declaration string.

    Accepted forms::

        g:i:t:req
        name -> g:i:t[:version]
        g:i:t[:version] -> req
        name -> g:i:t[:version] -> req

    Args:
        text: The declaration.
        name: Entry name supplied by the caller (hash form); it takes
            precedence over a name written in *text*.

    Raises:
        ParseError: On malformed coordinates or requirement expressions.
    """
    if not isinstance(text, str):
        raise ParseError(f"Requirement spec must be a string, got {type(text).__name__}")
    parts = [part.strip() for part in text.split("->")]
    if len(parts) > 3 or not all(parts):
        raise ParseError(f"Invalid requirement spec {text!r}", token=text)

    explicit_name = None
    if len(parts) == 3 or (len(parts) == 2 and not Coordinate.looks_like_spec(parts[0])):
        explicit_name = parts.pop(0)
    coordinate = Coordinate.parse(parts[0])

    if len(parts) == 2:
        requirement = VersionRequirement.create(parts[1])
        if coordinate.version is not None and not Version.is_valid(coordinate.version):
            raise ParseError(
                f"Expected a concrete version before '->' in {text!r}, "
                f"found {coordinate.version!r}",
                token=coordinate.version,
            )
        version = coordinate.version or requirement.default()
    else:
        requirement, version = _split_version_slot(coordinate.version)

    return NeedSpec(
        name=name or explicit_name or coordinate.id,
        coordinate=coordinate.unversioned(),
        requirement=requirement,
        version=version,
    )
