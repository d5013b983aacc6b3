"""Version parsing, ordering, and requirement expressions.

All public names are re-exported here so callers can write
``from artifactns.core.versioning import Version, VersionRequirement``.
"""

from artifactns.core.versioning.lexer import COMPARATORS, Token, TokenKind, tokenize
from artifactns.core.versioning.requirement import (
    And,
    Literal,
    Not,
    Or,
    VersionRequirement,
)
from artifactns.core.versioning.version import Version

__all__ = [
    "COMPARATORS",
    "And",
    "Literal",
    "Not",
    "Or",
    "Token",
    "TokenKind",
    "Version",
    "VersionRequirement",
    "tokenize",
]
