"""artifactns exception hierarchy.

All public exceptions inherit from ArtifactNSError, giving callers a single
base class to catch when they want to handle any artifactns-specific failure
without swallowing unrelated errors. Where a builtin exception has the same
meaning (``ValueError``, ``TypeError``, ``LookupError``) it is mixed in so
that generic handlers keep working.
"""

from __future__ import annotations

from typing import Any


class ArtifactNSError(Exception):
    """Base exception for all artifactns errors."""


class ParseError(ArtifactNSError, ValueError):
    """Raised when a version or requirement string is malformed.

    Covers illegal characters, unknown operators, unmatched parentheses,
    and operands that are not valid versions. Raised at construction time,
    never deferred to evaluation.

    Attributes:
        token: The offending token, if known.
        position: Zero-based character offset of the token, if known.
    """

    def __init__(
        self, message: str, token: str | None = None, position: int | None = None
    ) -> None:
        super().__init__(message)
        self.token = token
        self.position = position


class UnsatisfiedRequirementError(ArtifactNSError):
    """Raised when a selected version conflicts with a declared requirement.

    Attributes:
        name: Name of the artifact entry being assigned.
        spec: The offending version or coordinate.
        requirement: The violated requirement (or required coordinate).
    """

    def __init__(self, name: str, spec: Any, requirement: Any, reason: str = "") -> None:
        message = f"Artifact {name!r}: requirement {str(requirement)!r} unsatisfied by {str(spec)!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.name = name
        self.spec = spec
        self.requirement = requirement


class TypeMismatchError(ArtifactNSError, TypeError):
    """Raised when reopening a key that does not hold a sub-namespace."""


class ArtifactLookupError(ArtifactNSError, LookupError):
    """Raised when an artifact or namespace cannot be located.

    Covers unknown artifact names passed to ``artifact()``, references to
    undefined entries in ``use``/``alias``, and entries without a version.
    """


class ImmutabilityError(ArtifactNSError):
    """Raised when setting the parent of the root namespace or creating a cycle."""


class ProfileError(ArtifactNSError):
    """Raised when an artifact profile cannot be loaded.

    Covers unreadable files, malformed YAML, and documents whose shape is
    not a mapping of namespace names to artifact mappings.
    """
