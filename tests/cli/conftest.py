"""Shared fixtures for CLI tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def nested_profile(tmp_path: Path) -> Path:
    """A profile with a root selection, a project override and a group."""
    profile = tmp_path / "profile.yaml"
    profile.write_text(
        "artifacts:\n"
        "  ~:\n"
        "    spring: org.springframework:spring:jar:2.5\n"
        "    log4j: log4j:log4j:jar:1.2.15\n"
        "  one:\n"
        "    spring: org.springframework:spring:jar:3.0\n"
        "    libs:\n"
        "      - g:a:jar:1.0\n"
        "      - g:b:jar:2.0\n"
    )
    return profile
