"""Command-line interface for sharemirror.

This module provides the main CLI entry point and assembles all commands.

Commands:
- configure: Save share settings
- create-share: Create the file share
- mkdir, ls, cp, rm: Browse and manage the share
- upload, download, write-log: Single-file transfers
- upload-dir, download-dir: Recursive directory mirroring
"""

from __future__ import annotations

import click

from sharemirror.cli.config import (
    ShareOptions,
    get_config_dir,
    get_config_file,
    load_config,
    open_remote,
    resolve_share_config,
    save_config,
)
from sharemirror.cli.configure import configure
from sharemirror.cli.console import configure_logging
from sharemirror.cli.mirror import download_dir, upload_dir
from sharemirror.cli.share import cp, create_share, ls, mkdir, rm
from sharemirror.cli.transfer import download, upload, write_log


@click.group()
@click.version_option()
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.option(
    "--connection-string",
    envvar="AZURE_STORAGE_CONNECTION_STRING",
    default=None,
    help="Storage account connection string.",
)
@click.option(
    "--share",
    "share_name",
    envvar="SHAREMIRROR_SHARE",
    default=None,
    help="File share name.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    connection_string: str | None,
    share_name: str | None,
) -> None:
    """sharemirror - Azure file share tool with recursive mirroring."""
    configure_logging(verbose)
    ctx.obj = ShareOptions(connection_string=connection_string, share_name=share_name)


# Setup
cli.add_command(configure)
cli.add_command(create_share)

# Share commands
cli.add_command(mkdir)
cli.add_command(ls)
cli.add_command(cp)
cli.add_command(rm)

# Transfer commands
cli.add_command(upload)
cli.add_command(download)
cli.add_command(write_log)

# Mirror commands
cli.add_command(upload_dir)
cli.add_command(download_dir)


def main() -> None:
    """Entry point for the CLI."""
    cli()


__all__ = [
    "cli",
    "main",
    "get_config_dir",
    "get_config_file",
    "load_config",
    "open_remote",
    "resolve_share_config",
    "save_config",
]
