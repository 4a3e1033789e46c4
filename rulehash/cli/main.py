"""Main CLI entry point for rulehash commands."""

import sys
from collections.abc import Callable
from typing import Any

import click

from rulehash.types import RuleHashError
from rulehash._internal.shared.utils import configure_logging, resolve_log_level


def _run(command: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Run a command, turning fatal rulehash errors into CLI errors."""
    try:
        return command(*args, **kwargs)
    except RuleHashError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(package_name="rulehash")
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging (or set RULEHASH_DEBUG=1)",
)
def cli(debug: Any) -> None:
    """rulehash - Content digests for build query targets."""
    configure_logging(resolve_log_level(debug or None))


@cli.command("hash")
@click.argument("query_file")
@click.option(
    "--output",
    "-o",
    help="Output file path (default: stdout)",
)
@click.option(
    "--include-external",
    is_flag=True,
    help="Also report @repo and //external rules",
)
@click.option(
    "--ignore-attr",
    multiple=True,
    help="Additional attribute name to leave out of rule digests",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with status 1 if any diagnostic was produced",
)
def hash_command_cli(
    query_file: Any, output: Any, include_external: Any, ignore_attr: Any, strict: Any
) -> None:
    """Digest every rule in a query result."""
    from rulehash.cli.commands.hash import hash_command

    status = _run(hash_command, query_file, output, include_external, ignore_attr, strict)
    if status:
        sys.exit(status)


@cli.command("sources")
@click.argument("query_file")
@click.option(
    "--output",
    "-o",
    help="Output file path (default: stdout)",
)
def sources_command_cli(query_file: Any, output: Any) -> None:
    """List the local inputs of every local rule."""
    from rulehash.cli.commands.sources import sources_command

    _run(sources_command, query_file, output)


@cli.command("show")
@click.argument("query_file")
@click.option(
    "--limit",
    "-n",
    type=int,
    default=None,
    help="Maximum number of rules to show",
)
@click.option(
    "--full",
    is_flag=True,
    help="Show full digests (64 chars)",
)
@click.option(
    "--include-external",
    is_flag=True,
    help="Also show @repo and //external rules",
)
def show_command_cli(query_file: Any, limit: Any, full: Any, include_external: Any) -> None:
    """Show rule digests as a table."""
    from rulehash.cli.commands.show import show_command

    _run(show_command, query_file, limit, full, include_external)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
