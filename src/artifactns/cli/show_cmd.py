"""``artifactns show <profile>`` -- List the artifacts a profile selects.

Loads the YAML profile into a fresh registry and prints the artifacts
visible from one namespace (root by default).

Exit Codes:
    0 -- Profile loaded and displayed.
    2 -- The profile could not be loaded.
"""

from __future__ import annotations

import json
import sys

import click

from artifactns.core.namespace import ROOT, NamespaceRegistry, load_profile
from artifactns.exceptions import ProfileError


@click.command("show")
@click.argument("profile", type=click.Path(exists=True, dir_okay=False))
@click.option("--env", "environment", default=None, help="Profile section to read (e.g. development).")
@click.option("--namespace", "namespace", default=ROOT, show_default=True, help="Namespace to list.")
@click.option("--parents", is_flag=True, help="Include artifacts inherited from ancestor namespaces.")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def show_command(
    profile: str,
    environment: str | None,
    namespace: str,
    parents: bool,
    output_format: str,
) -> None:
    """Show the artifacts selected for a namespace by PROFILE."""
    registry = NamespaceRegistry()
    try:
        load_profile(profile, registry=registry, environment=environment)
    except ProfileError as exc:
        if output_format == "json":
            click.echo(json.dumps({"error": str(exc)}))
        else:
            click.echo(f"Error: {exc}")
        sys.exit(2)

    ns = registry.instance(namespace)
    artifacts = ns.values(include_parents=parents)

    if output_format == "json":
        click.echo(json.dumps({
            "namespace": ns.name,
            "artifacts": [
                {
                    "name": a.name,
                    "spec": a.to_spec(),
                    "requirement": str(a.requirement) if a.requirement is not None else None,
                    "selected": a.is_selected,
                }
                for a in artifacts
            ],
        }, indent=2))
    else:
        from artifactns.cli.output import print_namespace
        print_namespace(ns.name, artifacts)
