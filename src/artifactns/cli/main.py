"""artifactns CLI: inspect version requirements and artifact profiles.

Entry point for the ``artifactns`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    check  -- Check versions against a requirement expression.
    sort   -- Sort versions in ascending order.
    show   -- Load a YAML profile and list a namespace's artifacts.

Usage::

    artifactns check ">=1.0 & <2" 1.5 2.0
    artifactns sort 1.10 1.9 1.9-beta
    artifactns show profile.yaml --env development --namespace one:oldie
"""

from __future__ import annotations

import logging

import click

from artifactns import __version__
from artifactns.cli.check_cmd import check_command
from artifactns.cli.show_cmd import show_command
from artifactns.cli.sort_cmd import sort_command


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log namespace activity at DEBUG level.")
def cli(verbose: bool) -> None:
    """artifactns: version requirements and artifact namespaces for builds."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


cli.add_command(check_command)
cli.add_command(sort_command)
cli.add_command(show_command)
