"""Tokenizer for version requirement expressions.

Turns text such as ``>1.2 <1.3 !(>=1.2.5 | <=1.2.6)`` into a flat list of
``Token`` objects. The lexer is strict: any character outside the requirement
alphabet, or any operator run that is not a known comparator or negation, is
reported immediately with its position.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from artifactns.exceptions import ParseError


class TokenKind(Enum):
    """Lexical categories of the requirement language."""

    VERSION = "version"
    COMPARATOR = "comparator"
    AND = "and"
    OR = "or"
    NOT = "not"
    LPAREN = "("
    RPAREN = ")"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int


COMPARATORS: frozenset[str] = frozenset({"=", "!=", ">", ">=", "<", "<=", "~>"})

_ALLOWED_RE = re.compile(r"[A-Za-z0-9.\-\s()|&!=<>~]")
_WORD_RE = re.compile(r"[A-Za-z0-9.\-]+")
_OPERATOR_RE = re.compile(r"[=!<>~]+")

_KEYWORDS: dict[str, TokenKind] = {
    "and": TokenKind.AND,
    "or": TokenKind.OR,
    "not": TokenKind.NOT,
}


def _operator_tokens(run: str, position: int) -> list[Token]:
    """Split an operator run into NOT and COMPARATOR tokens.

    ``!=`` is the not-equal comparator; otherwise leading ``!`` characters are
    negations and whatever remains must be a comparator (``!<=`` is "not
    less-or-equal"). ``==`` is accepted as a synonym for ``=``.
    """
    if run == "==":
        return [Token(TokenKind.COMPARATOR, "=", position)]
    if run in COMPARATORS:
        return [Token(TokenKind.COMPARATOR, run, position)]
    bangs = len(run) - len(run.lstrip("!"))
    rest = run[bangs:]
    if bangs and (not rest or rest in COMPARATORS):
        tokens = [Token(TokenKind.NOT, "!", position + i) for i in range(bangs)]
        if rest:
            tokens.append(Token(TokenKind.COMPARATOR, rest, position + bangs))
        return tokens
    raise ParseError(
        f"Unknown operator {run!r} at position {position}", token=run, position=position
    )


def tokenize(text: str) -> list[Token]:
    """Tokenize a requirement expression.

    Args:
        text: The requirement expression.

    Returns:
        The list of tokens, in source order.

    Raises:
        ParseError: On an illegal character or an unknown operator.
    """
    tokens: list[Token] = []
    i = 0
    while i < len(text):
        char = text[i]
        if not _ALLOWED_RE.match(char):
            raise ParseError(
                f"Requirement {text!r} contains invalid character {char!r} at position {i}",
                token=char,
                position=i,
            )
        if char.isspace():
            i += 1
        elif char == "(":
            tokens.append(Token(TokenKind.LPAREN, char, i))
            i += 1
        elif char == ")":
            tokens.append(Token(TokenKind.RPAREN, char, i))
            i += 1
        elif char in "&|":
            run = char * 2 if text.startswith(char * 2, i) else char
            kind = TokenKind.AND if char == "&" else TokenKind.OR
            tokens.append(Token(kind, run, i))
            i += len(run)
        elif char in "=!<>~":
            match = _OPERATOR_RE.match(text, i)
            tokens.extend(_operator_tokens(match.group(), i))
            i = match.end()
        else:
            match = _WORD_RE.match(text, i)
            word = match.group()
            kind = _KEYWORDS.get(word.lower(), TokenKind.VERSION)
            tokens.append(Token(kind, word, i))
            i = match.end()
    return tokens
