"""Key normalization for namespaces and namespace entries.

Two kinds of keys are normalized here, both by pure functions:

- **Namespace keys** select a namespace in the registry. ``"root"`` is the
  top-level namespace; ``"current"`` (or None) means the namespace of the
  project currently being defined; strings, name-part sequences, modules and
  classes map to a canonical colon-joined name.
- **Entry keys** select an entry inside one namespace: either a plain entry
  name (``"spring"``, ``"foo_bar"``) or a coordinate (``"g:i:t"``), which is
  looked up by its unversioned spec.
"""

from __future__ import annotations

import re
import types
from dataclasses import dataclass
from typing import Any, Iterator, Sequence

from artifactns.core.artifact import Coordinate
from artifactns.exceptions import TypeMismatchError

ROOT = "root"
CURRENT = "current"

_COLON_RUN_RE = re.compile(r":{2,}")


def _join(parts: Sequence[Any]) -> str:
    return ":".join(str(part) for part in parts if str(part))


def namespace_name(key: Any, current_scope: Sequence[str] | None = None) -> str:
    """Return the canonical namespace name for *key*.

    Rules, checked in order:

    1. None or ``"current"`` -> the current scope (root when there is none);
    2. ``"root"`` -> ``"root"``;
    3. a string -> itself, with colon runs collapsed (``A::B`` -> ``A:B``);
    4. a list/tuple of parts -> the parts joined with ``:``;
    5. a module -> its dotted ``__name__`` joined with ``:``;
    6. a class -> its ``__qualname__`` (outside any ``<locals>``) joined
       with ``:``.

    Raises:
        TypeMismatchError: If no name can be derived from *key*.
    """
    if key is None or key == CURRENT:
        return _join(current_scope) if current_scope else ROOT
    if key == ROOT:
        return ROOT
    if isinstance(key, str):
        name = _COLON_RUN_RE.sub(":", key.strip()).strip(":")
    elif isinstance(key, (list, tuple)):
        name = _COLON_RUN_RE.sub(":", _join(key)).strip(":")
    elif isinstance(key, types.ModuleType):
        name = _join(key.__name__.split("."))
    elif isinstance(key, type):
        qualname = key.__qualname__.rsplit("<locals>.", 1)[-1]
        name = _join(qualname.split("."))
    else:
        raise TypeMismatchError(f"Cannot derive a namespace name from {key!r}")
    return name or ROOT


def parent_name(name: str) -> str:
    """Return the default parent of *name*: ``a:b:c`` -> ``a:b`` -> ``a`` -> root."""
    if name == ROOT or ":" not in name:
        return ROOT
    return name.rsplit(":", 1)[0]


# ---------------------------------------------------------------------------
# Entry keys
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EntryKey:
    """A normalized entry key.

    Attributes:
        text: The entry name, or the unversioned spec for coordinate keys.
        is_spec: True when the key was a coordinate.
        version: The version slot of a coordinate key (may be a requirement).
    """

    text: str
    is_spec: bool = False
    version: str | None = None


def entry_key(key: Any) -> EntryKey:
    """Normalize *key* for lookup inside a namespace.

    Raises:
        TypeMismatchError: If *key* is neither a string nor coordinate-like.
    """
    if isinstance(key, Coordinate):
        return EntryKey(key.unversioned_spec, is_spec=True, version=key.version)
    if isinstance(key, str):
        if Coordinate.looks_like_spec(key):
            coordinate = Coordinate.parse(key)
            return EntryKey(coordinate.unversioned_spec, is_spec=True, version=coordinate.version)
        return EntryKey(key.strip())
    spec = getattr(key, "unversioned_spec", None)
    if isinstance(spec, str):
        return EntryKey(spec, is_spec=True)
    raise TypeMismatchError(f"Invalid artifact key: {key!r}")


def compound_splits(name: str) -> Iterator[tuple[str, str]]:
    """Yield ``(head, rest)`` for every underscore in *name*, leftmost first.

    ``foo_bat_man`` yields ``("foo", "bat_man")`` then ``("foo_bat", "man")``.
    """
    for match in re.finditer("_", name):
        head, rest = name[: match.start()], name[match.end():]
        if head and rest:
            yield head, rest
