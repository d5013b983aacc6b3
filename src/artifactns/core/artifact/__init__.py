"""Artifact coordinates and named artifact requirements.

Re-exports the public names of ``coordinate`` and ``requirement`` so callers
can write ``from artifactns.core.artifact import ArtifactRequirement``.
"""

from artifactns.core.artifact.coordinate import Coordinate, NeedSpec, parse_need_spec
from artifactns.core.artifact.requirement import ArtifactGroup, ArtifactRequirement

__all__ = [
    "ArtifactGroup",
    "ArtifactRequirement",
    "Coordinate",
    "NeedSpec",
    "parse_need_spec",
]
