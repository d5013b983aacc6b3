"""Free-form artifact version strings and their total ordering.

Artifact repositories do not enforce SemVer: versions such as ``1.0``,
``2.5.6.SEC01``, ``11.0-alpha`` and ``r09`` all occur in the wild. A
``Version`` therefore treats its text as a sequence of segments and orders
versions segment by segment.

Segmentation
------------
The trimmed text is split on ``.`` and ``-``; every piece is then split into
runs of digits and runs of letters, so ``1.0rc3`` yields ``(1, 0, "rc", 3)``.
Digit runs become ``int``; letter runs stay ``str``.

Ordering
--------
Segments are compared pairwise from the left:

- int vs int compares numerically;
- str vs str compares lexically;
- an int ranks above a str (letters mark pre-releases, so ``1.0rc3 < 1.0``);
- a missing trailing segment counts as ``0``, so ``1 == 1.0 == 1.0.0`` and a
  shorter version loses only when the longer one has a non-zero extra
  segment.
"""

from __future__ import annotations

import functools
import re

from artifactns.exceptions import ParseError


# ---------------------------------------------------------------------------
# Validation and segmentation
# ---------------------------------------------------------------------------

_VERSION_CHARS_RE = re.compile(r"^[A-Za-z0-9.\-]+$")
_DIGIT_RE = re.compile(r"\d")
_SEPARATOR_RE = re.compile(r"[.\-]")
_RUN_RE = re.compile(r"\d+|[A-Za-z]+")

Segment = int | str


def _segments(text: str) -> tuple[Segment, ...]:
    parts: list[Segment] = []
    for piece in _SEPARATOR_RE.split(text):
        for run in _RUN_RE.findall(piece):
            parts.append(int(run) if run.isdigit() else run)
    return tuple(parts)


def _compare_segment(a: Segment, b: Segment) -> int:
    if isinstance(a, int) and isinstance(b, int):
        return (a > b) - (a < b)
    if isinstance(a, str) and isinstance(b, str):
        return (a > b) - (a < b)
    # Numeric beats alphabetic.
    return 1 if isinstance(a, int) else -1


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------


@functools.total_ordering
class Version:
    """A parsed, totally ordered artifact version.

    Construct with ``Version.parse(text)``; direct construction performs the
    same validation.

    Attributes:
        text: The trimmed original version string.
        segments: Parsed int/str segments.
    """

    __slots__ = ("text", "segments")

    def __init__(self, text: str) -> None:
        if not self.is_valid(text):
            raise ParseError(f"Invalid version: {text!r}", token=str(text))
        self.text: str = text.strip()
        self.segments: tuple[Segment, ...] = _segments(self.text)

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse *text* into a ``Version``.

        Raises:
            ParseError: If ``Version.is_valid(text)`` is false.
        """
        return cls(text)

    @staticmethod
    def is_valid(text: object) -> bool:
        """Return True if *text* is a usable version string.

        A valid version, once trimmed, consists only of letters, digits, dots
        and hyphens, and contains at least one digit.
        """
        if not isinstance(text, str):
            return False
        stripped = text.strip()
        return bool(_VERSION_CHARS_RE.match(stripped)) and bool(_DIGIT_RE.search(stripped))

    def compare(self, other: Version) -> int:
        """Three-way comparison: -1, 0 or 1."""
        a, b = self.segments, other.segments
        for i in range(max(len(a), len(b))):
            result = _compare_segment(a[i] if i < len(a) else 0, b[i] if i < len(b) else 0)
            if result:
                return result
        return 0

    def prefix_matches(self, other: Version, length: int) -> bool:
        """Return True if the first *length* segments of both versions are equal.

        Missing segments count as ``0``, as in ``compare``.
        """
        for i in range(length):
            a = self.segments[i] if i < len(self.segments) else 0
            b = other.segments[i] if i < len(other.segments) else 0
            if _compare_segment(a, b):
                return False
        return True

    def _normalized(self) -> tuple[Segment, ...]:
        segments = list(self.segments)
        while segments and segments[-1] == 0:
            segments.pop()
        return tuple(segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(self._normalized())

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Version({self.text!r})"
