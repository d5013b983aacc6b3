"""``artifactns sort <version>...`` -- Print versions in ascending order.

Exit Codes:
    0 -- Versions sorted and printed.
    2 -- A version could not be parsed.
"""

from __future__ import annotations

import sys

import click

from artifactns.core.versioning import Version
from artifactns.exceptions import ParseError


@click.command("sort")
@click.argument("versions", nargs=-1, required=True)
@click.option("--reverse", "-r", is_flag=True, help="Print the newest version first.")
def sort_command(versions: tuple[str, ...], reverse: bool) -> None:
    """Sort VERSIONS using numeric-aware segment comparison."""
    try:
        parsed = sorted((Version.parse(v) for v in versions), reverse=reverse)
    except ParseError as exc:
        click.echo(f"Error: {exc}")
        sys.exit(2)

    from artifactns.cli.output import print_versions
    print_versions([str(v) for v in parsed])
