"""Load artifact selections from a YAML profile.

A profile maps namespace names to the artifacts they use. The null key
(``~``) addresses the root namespace::

    development:
      artifacts:
        ~:
          spring: org.springframework:spring:jar:2.5
          log4j:  log4j:log4j:jar:1.2.15
        one:oldie:
          spring: org.springframework:spring:jar:1.0

``load_profile(path, environment="development")`` applies that section to a
registry. A document may also hold a top-level ``artifacts`` key, or be the
namespace mapping itself.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from artifactns.core.namespace.registry import NamespaceRegistry, default_registry
from artifactns.exceptions import ArtifactNSError, ProfileError

logger = logging.getLogger(__name__)


class _ProfileLoader(yaml.SafeLoader):
    """Safe loader that keeps numeric scalars as written.

    ``xmlbeans: 2.10`` must select version ``"2.10"``, not the float 2.1.
    """


_ProfileLoader.add_constructor("tag:yaml.org,2002:int", _ProfileLoader.construct_yaml_str)
_ProfileLoader.add_constructor("tag:yaml.org,2002:float", _ProfileLoader.construct_yaml_str)


def _stringify_keys(value: Any) -> Any:
    if isinstance(value, list):
        return [_stringify_keys(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _stringify_keys(item) for key, item in value.items()}
    return value


def _artifacts_section(data: Any, environment: str | None, path: Path) -> dict:
    if environment is not None:
        if not isinstance(data, dict) or not isinstance(data.get(environment), dict):
            raise ProfileError(f"Profile {path} has no environment {environment!r}")
        data = data[environment]
    if isinstance(data, dict) and "artifacts" in data:
        data = data["artifacts"]
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ProfileError(
            f"Profile {path}: expected a mapping of namespaces, found {type(data).__name__}"
        )
    return data


def load_profile(
    path: str | Path,
    registry: NamespaceRegistry | None = None,
    environment: str | None = None,
) -> NamespaceRegistry:
    """Apply the artifact selections in the YAML profile at *path*.

    Args:
        path: Profile file to read.
        registry: Registry to populate. Defaults to the process-wide one.
        environment: Top-level profile section to read (e.g. ``development``).

    Returns:
        The populated registry.

    Raises:
        ProfileError: If the file cannot be read or parsed, has the wrong
            shape, or holds a spec the namespaces reject.
    """
    path = Path(path)
    registry = registry if registry is not None else default_registry()
    try:
        raw = path.read_text(encoding="utf-8")
        data = yaml.load(raw, Loader=_ProfileLoader)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ProfileError(f"Cannot read profile {path}: {exc}") from exc

    section = _artifacts_section(data, environment, path)
    for key, uses in section.items():
        if uses is not None and not isinstance(uses, (dict, list, str)):
            raise ProfileError(
                f"Profile {path}: artifacts for namespace {key!r} must be a mapping or list"
            )
    mapping = {
        (None if key is None else str(key)): _stringify_keys(uses)
        for key, uses in section.items()
    }
    try:
        registry.load(mapping)
    except ArtifactNSError as exc:
        raise ProfileError(f"Profile {path}: {exc}") from exc
    logger.debug("Loaded %d namespace(s) from profile %s", len(mapping), path)
    return registry
