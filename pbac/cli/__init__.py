"""
pbac/cli/__init__.py

pbac CLI — root Click command group.

Registered in pyproject.toml as:

    [project.scripts]
    pbac = "pbac.cli:cli"
"""

import click

from pbac.cli.check import check_command, validate_command


@click.group()
@click.version_option(package_name="pbac")
def cli() -> None:
    """
    pbac — policy-based access-control decisions.

    \b
    Commands:
      check       Decide an action against a policy file.
      validate    Parse a policy file and report the policy set.

    \b
    Quick start:
      pbac validate policies.yaml
      pbac check account:Get:account-123 account:account-123 --policies policies.yaml
    """
    pass


cli.add_command(check_command)
cli.add_command(validate_command)
