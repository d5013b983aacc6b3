"""Version requirements: a boolean algebra over version comparators.

A requirement expression combines comparator literals with ``and``/``or``/
``not`` and parentheses::

    1.0                       exact (a bare version means ``=``)
    >=1.0 <2.0                implicit AND between adjacent terms
    ~>1.2 | ~>1.4 | 2.0       alternatives
    >1.2 & <1.3 & !(>=1.2.5 | <=1.2.6)

Grammar (AND binds tighter than OR)::

    or      := and (OR and)*
    and     := unary ((AND)? unary)*
    unary   := NOT unary | primary
    primary := '(' or ')' | COMPARATOR? VERSION

The parser is a small recursive-descent parser producing an immutable AST of
``Literal``, ``And``, ``Or`` and ``Not`` nodes. Expressions are never
evaluated as code, and every syntax problem is reported at construction
time.

Comparators
-----------
``=``, ``!=``, ``>``, ``>=``, ``<``, ``<=`` compare with ``Version.compare``.
``~>`` is the pessimistic operator: ``~>5.3.1`` matches every version that
shares the ``5.3`` prefix and is at least ``5.3.1`` (so up to but excluding
``5.4``), while ``~>5.3`` matches ``5.x`` from ``5.3`` on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from artifactns.core.versioning.lexer import COMPARATORS, Token, TokenKind, tokenize
from artifactns.core.versioning.version import Version
from artifactns.exceptions import ParseError


# ---------------------------------------------------------------------------
# AST
# ---------------------------------------------------------------------------

# Comparators that pin a usable default version.
_ANCHORS = frozenset({"=", ">=", "<="})


@dataclass(frozen=True)
class Literal:
    """A single comparator applied to a version, e.g. ``>=1.0``."""

    op: str
    version: Version

    def evaluate(self, candidate: Version) -> bool:
        cmp = candidate.compare(self.version)
        if self.op == "=":
            return cmp == 0
        if self.op == "!=":
            return cmp != 0
        if self.op == ">":
            return cmp > 0
        if self.op == ">=":
            return cmp >= 0
        if self.op == "<":
            return cmp < 0
        if self.op == "<=":
            return cmp <= 0
        if self.op == "~>":
            prefix = max(len(self.version.segments) - 1, 0)
            return cmp >= 0 and candidate.prefix_matches(self.version, prefix)
        raise ParseError(f"Unknown comparator: {self.op!r}", token=self.op)  # pragma: no cover

    def __str__(self) -> str:
        return self.version.text if self.op == "=" else f"{self.op}{self.version.text}"


@dataclass(frozen=True)
class And:
    children: tuple[Node, ...]

    def evaluate(self, candidate: Version) -> bool:
        return all(child.evaluate(candidate) for child in self.children)

    def __str__(self) -> str:
        return " & ".join(_render_child(child) for child in self.children)


@dataclass(frozen=True)
class Or:
    children: tuple[Node, ...]

    def evaluate(self, candidate: Version) -> bool:
        return any(child.evaluate(candidate) for child in self.children)

    def __str__(self) -> str:
        return " | ".join(_render_child(child) for child in self.children)


@dataclass(frozen=True)
class Not:
    child: Node

    def evaluate(self, candidate: Version) -> bool:
        return not self.child.evaluate(candidate)

    def __str__(self) -> str:
        return f"!({self.child})"


Node = Union[Literal, And, Or, Not]


def _render_child(node: Node) -> str:
    if isinstance(node, (And, Or)):
        return f"({node})"
    return str(node)


def _default_of(node: Node) -> str | None:
    """Return the anchor text of *node*; the last anchoring child wins."""
    if isinstance(node, Literal):
        return node.version.text if node.op in _ANCHORS else None
    if isinstance(node, (And, Or)):
        for child in reversed(node.children):
            found = _default_of(child)
            if found is not None:
                return found
    return None


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

_TERM_START = frozenset({TokenKind.NOT, TokenKind.COMPARATOR, TokenKind.VERSION, TokenKind.LPAREN})


class _Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, text: str, tokens: list[Token]) -> None:
        self._text = text
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> Node:
        if not self._tokens:
            raise ParseError(f"Empty requirement: {self._text!r}")
        node = self._or()
        token = self._peek()
        if token is not None:
            raise self._error(token, "unexpected")
        return node

    def _peek(self) -> Token | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _next(self) -> Token | None:
        token = self._peek()
        if token is not None:
            self._pos += 1
        return token

    def _error(self, token: Token | None, what: str) -> ParseError:
        if token is None:
            return ParseError(f"Unexpected end of requirement {self._text!r}")
        return ParseError(
            f"{what.capitalize()} token {token.text!r} at position {token.position} "
            f"in requirement {self._text!r}",
            token=token.text,
            position=token.position,
        )

    def _or(self) -> Node:
        children = [self._and()]
        while (token := self._peek()) is not None and token.kind is TokenKind.OR:
            self._next()
            children.append(self._and())
        return children[0] if len(children) == 1 else Or(tuple(children))

    def _and(self) -> Node:
        children = [self._unary()]
        while (token := self._peek()) is not None:
            if token.kind is TokenKind.AND:
                self._next()
            elif token.kind not in _TERM_START:
                break
            children.append(self._unary())
        return children[0] if len(children) == 1 else And(tuple(children))

    def _unary(self) -> Node:
        token = self._peek()
        if token is not None and token.kind is TokenKind.NOT:
            self._next()
            return Not(self._unary())
        return self._primary()

    def _primary(self) -> Node:
        token = self._next()
        if token is None:
            raise self._error(None, "missing")
        if token.kind is TokenKind.LPAREN:
            node = self._or()
            closing = self._next()
            if closing is None:
                raise ParseError(
                    f"Unmatched '(' at position {token.position} in requirement {self._text!r}",
                    token="(",
                    position=token.position,
                )
            if closing.kind is not TokenKind.RPAREN:
                raise self._error(closing, "unexpected")
            return node
        op = "="
        if token.kind is TokenKind.COMPARATOR:
            op = token.text
            token = self._next()
            if token is None:
                raise ParseError(
                    f"Comparator {op!r} is missing a version in requirement {self._text!r}",
                    token=op,
                )
        if token.kind is not TokenKind.VERSION:
            raise self._error(token, "unexpected")
        if not Version.is_valid(token.text):
            raise ParseError(
                f"Invalid version {token.text!r} at position {token.position} "
                f"in requirement {self._text!r}",
                token=token.text,
                position=token.position,
            )
        return Literal(op, Version.parse(token.text))


# ---------------------------------------------------------------------------
# VersionRequirement
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VersionRequirement:
    """An immutable, parsed version requirement expression.

    Create instances with ``VersionRequirement.create(text)``.

    Attributes:
        root: Root node of the expression AST.
        source: The expression text as authored.
    """

    root: Node
    source: str = field(default="", compare=False)

    @classmethod
    def create(cls, text: str) -> VersionRequirement:
        """Parse *text* into a ``VersionRequirement``.

        Raises:
            ParseError: On any malformed input, naming the bad token.
        """
        if not isinstance(text, str):
            raise ParseError(f"Requirement must be a string, got {type(text).__name__}")
        root = _Parser(text, tokenize(text)).parse()
        return cls(root=root, source=text.strip())

    @staticmethod
    def is_version(text: object) -> bool:
        """Return True if *text* is a plain version rather than an expression."""
        return Version.is_valid(text)

    @staticmethod
    def is_requirement(text: object) -> bool:
        """Return True if *text* uses any comparator, connective or grouping."""
        if not isinstance(text, str):
            return False
        if any(char in text for char in "()|&!=<>~"):
            return True
        words = text.lower().split()
        return len(words) > 1 or any(word in ("and", "or", "not") for word in words)

    @property
    def composed(self) -> bool:
        """True if the root combines two or more alternatives or conjuncts."""
        return isinstance(self.root, (And, Or)) and len(self.root.children) >= 2

    def satisfied_by(self, version: str | Version | None) -> bool:
        """Evaluate the requirement against *version*.

        Args:
            version: A version string or ``Version``. ``None`` never satisfies.

        Raises:
            ParseError: If *version* is a string that is not a valid version.
        """
        if version is None:
            return False
        if not isinstance(version, Version):
            version = Version.parse(version)
        return self.root.evaluate(version)

    def default(self) -> str | None:
        """Return the preferred version pinned by this requirement, if any.

        Equality (``=`` or a bare version), ``>=`` and ``<=`` literals are
        anchors. Walking left to right, the last anchor wins, both within an
        AND group and across OR alternatives. Negated sub-expressions and
        pure inequalities (``>``, ``<``, ``!=``) contribute nothing.
        """
        return _default_of(self.root)

    def __str__(self) -> str:
        return str(self.root)

    def __repr__(self) -> str:
        return f"VersionRequirement({str(self)!r})"


__all__ = [
    "COMPARATORS",
    "And",
    "Literal",
    "Node",
    "Not",
    "Or",
    "VersionRequirement",
]
