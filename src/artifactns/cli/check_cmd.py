"""``artifactns check <requirement> <version>...`` -- Test versions against a requirement.

Exit Codes:
    0 -- Every version satisfies the requirement.
    1 -- At least one version does not.
    2 -- The requirement or a version could not be parsed.
"""

from __future__ import annotations

import json
import sys

import click

from artifactns.core.versioning import Version, VersionRequirement
from artifactns.exceptions import ParseError


@click.command("check")
@click.argument("requirement")
@click.argument("versions", nargs=-1, required=True)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def check_command(requirement: str, versions: tuple[str, ...], output_format: str) -> None:
    """Check each VERSION against the REQUIREMENT expression.

    REQUIREMENT uses comparators (= != > >= < <= ~>) combined with
    and/&, or/|, not/! and parentheses, e.g. ">=1.0 & <2 | 3".
    """
    try:
        parsed = VersionRequirement.create(requirement)
        results = [(str(Version.parse(v)), parsed.satisfied_by(v)) for v in versions]
    except ParseError as exc:
        if output_format == "json":
            click.echo(json.dumps({"error": str(exc)}))
        else:
            click.echo(f"Error: {exc}")
        sys.exit(2)

    if output_format == "json":
        click.echo(json.dumps({
            "requirement": str(parsed),
            "default": parsed.default(),
            "results": [{"version": v, "satisfied": ok} for v, ok in results],
        }, indent=2))
    else:
        from artifactns.cli.output import print_check_results
        print_check_results(parsed, results)

    sys.exit(0 if all(ok for _, ok in results) else 1)
