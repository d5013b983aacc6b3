"""Rich output formatting helpers for the artifactns CLI."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from artifactns.core.artifact import ArtifactRequirement
from artifactns.core.versioning import VersionRequirement

console = Console()


def print_check_results(requirement: VersionRequirement, results: list[tuple[str, bool]]) -> None:
    """Print which versions satisfy *requirement*, then its default version.

    Args:
        requirement: The parsed requirement.
        results: ``(version, satisfied)`` pairs in input order.
    """
    table = Table(title=f"Requirement: {requirement}", show_header=True, header_style="bold")
    table.add_column("Version", style="bold")
    table.add_column("Satisfied", justify="center")

    for version, satisfied in results:
        status = Text("YES", style="bold green") if satisfied else Text("NO", style="bold red")
        table.add_row(version, status)

    console.print(table)
    default = requirement.default()
    console.print(f"Default version: [cyan]{default if default is not None else '-'}[/cyan]")


def print_versions(versions: list[str]) -> None:
    """Print versions one per line, in the given order."""
    for version in versions:
        console.print(version, highlight=False)


def print_namespace(name: str, artifacts: list[ArtifactRequirement]) -> None:
    """Print a namespace's artifacts as a table.

    Args:
        name: Namespace name for the table title.
        artifacts: Requirements with a version, as returned by ``values()``.
    """
    if not artifacts:
        console.print(f"[dim]No artifacts in namespace {name}.[/dim]")
        return

    table = Table(title=f"Namespace {name}", show_header=True, header_style="bold")
    table.add_column("Name", style="bold")
    table.add_column("Artifact")
    table.add_column("Requirement", style="dim")
    table.add_column("State", justify="center")

    for artifact in artifacts:
        state = (
            Text("selected", style="green") if artifact.is_selected
            else Text("suggested", style="yellow")
        )
        requirement = str(artifact.requirement) if artifact.requirement is not None else "-"
        table.add_row(artifact.name, artifact.to_spec(), requirement, state)

    console.print(table)
