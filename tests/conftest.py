"""Shared fixtures for artifactns tests."""

import pathlib

import pytest

from artifactns.core.namespace import NamespaceRegistry


@pytest.fixture
def registry() -> NamespaceRegistry:
    """A fresh namespace registry, isolated from the process-wide one."""
    return NamespaceRegistry()


@pytest.fixture
def profile_path(tmp_path: pathlib.Path) -> pathlib.Path:
    """Write a two-environment artifact profile and return its path."""
    profile = tmp_path / "profiles.yaml"
    profile.write_text(
        "development:\n"
        "  artifacts:\n"
        "    ~:\n"
        "      spring: org.springframework:spring:jar:2.5\n"
        "      log4j: log4j:log4j:jar:1.2.15\n"
        "    one:oldie:\n"
        "      spring: org.springframework:spring:jar:1.0\n"
        "production:\n"
        "  artifacts:\n"
        "    ~:\n"
        "      spring: org.springframework:spring:jar:2.5.6\n"
    )
    return profile
