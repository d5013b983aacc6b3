"""Tests for ArtifactRequirement and ArtifactGroup.

The central invariant: a selected version always satisfies the declared
requirement, and a rejected assignment leaves the entry unchanged.
"""

from __future__ import annotations

import logging

import pytest

from artifactns.core.artifact import ArtifactGroup, ArtifactRequirement, Coordinate
from artifactns.core.versioning import VersionRequirement
from artifactns.exceptions import ArtifactLookupError, ParseError, UnsatisfiedRequirementError


@pytest.fixture
def spring() -> ArtifactRequirement:
    """A declared (unselected) requirement on spring >=2.0."""
    return ArtifactRequirement(
        "spring",
        Coordinate.parse("org.springframework:spring:jar"),
        VersionRequirement.create(">=2.0"),
    )


class TestSelect:
    """Tests for ``select`` and the ``version`` setter."""

    def test_select_version(self, spring: ArtifactRequirement) -> None:
        spring.select("2.5")
        assert spring.version == "2.5"
        assert spring.is_selected is True
        assert spring.to_spec() == "org.springframework:spring:jar:2.5"

    def test_version_setter_selects(self, spring: ArtifactRequirement) -> None:
        spring.version = "3.0"
        assert spring.is_selected is True

    def test_select_full_coordinate(self, spring: ArtifactRequirement) -> None:
        spring.select("org.springframework:spring:jar:2.5.6")
        assert spring.version == "2.5.6"

    def test_unsatisfying_version_raises_and_leaves_state(self, spring: ArtifactRequirement) -> None:
        with pytest.raises(UnsatisfiedRequirementError, match="unsatisfied") as exc_info:
            spring.select("1.0")
        assert exc_info.value.name == "spring"
        assert str(exc_info.value.requirement) == ">=2.0"
        assert spring.version is None
        assert spring.is_selected is False

    def test_different_artifact_raises(self, spring: ArtifactRequirement) -> None:
        with pytest.raises(UnsatisfiedRequirementError, match="artifact attributes mismatch"):
            spring.select("org.springframework:spring-core:jar:2.5")

    def test_unconstrained_entry_may_change_artifact(self) -> None:
        entry = ArtifactRequirement("lib", Coordinate.parse("g:a:jar"))
        entry.select("g:b:jar:1.0")
        assert entry.unversioned_spec == "g:b:jar"

    @pytest.mark.parametrize("value", [">=2.0", "abc", "g:a:jar"])
    def test_non_concrete_selection_raises(self, spring: ArtifactRequirement, value: str) -> None:
        with pytest.raises(ParseError):
            spring.select(value)

    def test_listener_notified(self, spring: ArtifactRequirement) -> None:
        seen: list[str] = []
        spring.add_listener(lambda entry: seen.append(entry.version))
        spring.select("2.5")
        assert seen == ["2.5"]

    def test_select_without_coordinate(self, caplog: pytest.LogCaptureFixture) -> None:
        """A version-only entry can be selected, with debug logging on."""
        entry = ArtifactRequirement("xmlbeans")
        with caplog.at_level(logging.DEBUG, logger="artifactns.core.artifact.requirement"):
            entry.select("2.2")
        assert entry.version == "2.2"
        assert entry.is_selected is True
        assert "Selected 2.2 (no coordinate) for 'xmlbeans'" in caplog.text


class TestDeclare:
    """Tests for ``declare`` (re-declaring a requirement)."""

    def test_unselected_adopts_default(self, spring: ArtifactRequirement) -> None:
        spring.declare(VersionRequirement.create("2.0 | 2.5"))
        assert spring.version == "2.5"
        assert spring.is_selected is False

    def test_selected_kept_when_satisfied(self, spring: ArtifactRequirement) -> None:
        spring.select("2.5")
        spring.declare(VersionRequirement.create("<3"))
        assert spring.version == "2.5"
        assert str(spring.requirement) == "<3"

    def test_selected_violation_raises(self, spring: ArtifactRequirement) -> None:
        spring.select("2.5")
        with pytest.raises(UnsatisfiedRequirementError):
            spring.declare(VersionRequirement.create(">3"))
        assert str(spring.requirement) == ">=2.0"


class TestSatisfiedBy:
    """Tests for ``ArtifactRequirement.satisfied_by``."""

    def test_version_string(self, spring: ArtifactRequirement) -> None:
        assert spring.satisfied_by("2.0") is True
        assert spring.satisfied_by("1.9") is False

    def test_coordinate_of_other_artifact(self, spring: ArtifactRequirement) -> None:
        assert spring.satisfied_by("org.springframework:other:jar:2.0") is False

    def test_no_requirement_accepts_anything(self) -> None:
        assert ArtifactRequirement("lib", Coordinate.parse("g:a:jar")).satisfied_by("0.1") is True


class TestRendering:
    """Tests for ``to_spec``, ``artifact`` and ``copy``."""

    def test_to_spec_without_version(self, spring: ArtifactRequirement) -> None:
        with pytest.raises(ArtifactLookupError, match="no version selected"):
            spring.to_spec()

    def test_to_spec_without_coordinate(self) -> None:
        with pytest.raises(ArtifactLookupError, match="no coordinate"):
            ArtifactRequirement("pending").to_spec()

    def test_artifact_is_concrete_coordinate(self, spring: ArtifactRequirement) -> None:
        spring.select("2.5")
        assert spring.artifact == Coordinate.parse("org.springframework:spring:jar:2.5")

    def test_copy_is_distinct_but_equal(self, spring: ArtifactRequirement) -> None:
        spring.select("2.5")
        spring.add_listener(lambda entry: None)
        clone = spring.copy("other")
        assert clone is not spring
        assert clone.name == "other"
        assert clone.to_spec() == spring.to_spec()
        assert clone.is_selected is True
        assert clone._listeners == []

    def test_copy_is_independent(self, spring: ArtifactRequirement) -> None:
        spring.select("2.5")
        clone = spring.copy()
        clone.select("3.0")
        assert spring.version == "2.5"


class TestArtifactGroup:
    """Tests for ``ArtifactGroup``."""

    def test_members_and_specs(self) -> None:
        members = []
        for spec in ["g:a:jar:1.0", "g:b:jar:2.0"]:
            member = ArtifactRequirement(Coordinate.parse(spec).id, Coordinate.parse(spec))
            member.select(spec)
            members.append(member)
        group = ArtifactGroup("libs", members)
        assert len(group) == 2
        assert group.specs() == ["g:a:jar:1.0", "g:b:jar:2.0"]
        assert group.is_selected is True

    def test_copy_clones_members(self) -> None:
        member = ArtifactRequirement("a", Coordinate.parse("g:a:jar"))
        member.select("1.0")
        group = ArtifactGroup("libs", [member])
        clone = group.copy("other")
        assert clone.name == "other"
        assert clone.members[0] is not member
        assert clone.specs() == group.specs()

    def test_empty_group_is_not_selected(self) -> None:
        assert ArtifactGroup("none", []).is_selected is False
