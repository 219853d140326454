# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from setuphdfs import actions, settings
from setuphdfs.cache import ToolCache
from setuphdfs.distribution import download_url
from setuphdfs.orchestrator import HDFSSetup
from setuphdfs.site_config import write_site_config
from setuphdfs.ui.console import Console, set_console, get_console


def resolve_version(version_arg: str | None) -> str:
    """
    The Hadoop version from --hdfs-version, else from the action input.

    Raises:
        SystemExit: If neither is set
    """
    if version_arg:
        return version_arg

    try:
        return actions.get_input("hdfs-version", required=True)
    except actions.InputError as e:
        get_console().print_error(
            "Missing Hadoop version",
            str(e),
            details=["Pass --hdfs-version or set the `hdfs-version` action input."],
        )
        sys.exit(1)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and commands)",
)
@click.pass_context
def cli(ctx, debug):
    """setup-hdfs — single-node HDFS for CI jobs."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.option("--hdfs-version", default=None, help="Hadoop release to install (defaults to the action input)")
@click.option(
    "--publish/--no-publish",
    default=True,
    show_default=True,
    help="Export PATH and variables for later workflow steps",
)
@click.pass_context
def run(ctx, hdfs_version, publish):
    """Download, configure, cache and start HDFS."""
    console = get_console()
    version = resolve_version(hdfs_version)

    try:
        result = HDFSSetup(version, console=console).run()
        if publish:
            actions.publish(result)
        console.print_success(result.variables)

    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


@cli.command()
@click.argument("version")
def url(version):
    """Print the release archive URL for VERSION."""
    click.echo(download_url(version))


@cli.command()
@click.argument("hadoop_home", type=click.Path(file_okay=False, path_type=Path))
def config(hadoop_home):
    """Write the single-node site configuration into HADOOP_HOME/etc/hadoop."""
    for path in write_site_config(hadoop_home):
        click.echo(str(path))


@cli.command()
@click.option("--cache-dir", default=None, help="Tool cache root (defaults to RUNNER_TOOL_CACHE)")
def cached(cache_dir):
    """List cached Hadoop installs."""
    cache = ToolCache(cache_dir)
    entries = cache.entries(settings.TOOL_NAME)
    if not entries:
        get_console().print_info(f"No cached {settings.TOOL_NAME} installs under {cache.root}")
        return
    for entry in entries:
        click.echo(f"{entry.version}\t{entry.arch}\t{entry.path}")


if __name__ == "__main__":
    cli()
