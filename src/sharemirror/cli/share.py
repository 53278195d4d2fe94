"""Share browsing commands for the sharemirror CLI.

Commands:
- create-share: Create the file share if it doesn't exist
- mkdir: Create a directory
- ls: List a directory
- cp: Server-side copy of a file
- rm: Delete a file
"""

from __future__ import annotations

import click

from sharemirror.cli.config import open_remote
from sharemirror.cli.console import handle_errors
from sharemirror.core.types import DirectoryNode, user_path
from sharemirror.mirror import read_tree


@click.command("create-share")
@click.pass_context
def create_share(ctx: click.Context) -> None:
    """Create the file share if it doesn't exist."""
    remote = open_remote(ctx)
    with handle_errors():
        created = remote.ensure_root()
    if created:
        click.echo(f"Share created: {remote.name}")
    else:
        click.echo(f"Share already exists: {remote.name}")


@click.command()
@click.argument("path")
@click.pass_context
def mkdir(ctx: click.Context, path: str) -> None:
    """Create a directory (and missing parents) in the share."""
    path = user_path(path)
    remote = open_remote(ctx)
    with handle_errors():
        remote.ensure_directory(path)
    click.echo(f"Directory ready: {path}")


def _print_tree(node: DirectoryNode, depth: int = 0) -> None:
    indent = "  " * depth
    for child in node.children:
        if isinstance(child, DirectoryNode):
            click.echo(f"{indent}{child.name}/")
            _print_tree(child, depth + 1)
        else:
            click.echo(f"{indent}{child.name}  {child.size}")


@click.command("ls")
@click.argument("path", default="")
@click.option("--prefix", default=None, help="Only list names starting with this.")
@click.option("--recursive", "-r", is_flag=True, help="List the whole tree below PATH.")
@click.pass_context
def ls(ctx: click.Context, path: str, prefix: str | None, recursive: bool) -> None:
    """List a directory in the share."""
    if prefix and recursive:
        raise click.UsageError("--prefix cannot be combined with --recursive")
    path = user_path(path)

    remote = open_remote(ctx)
    with handle_errors():
        if recursive:
            _print_tree(read_tree(remote, path))
            return
        entries = remote.list_children(path, prefix=prefix)

    for entry in sorted(entries, key=lambda e: e.name):
        if entry.is_directory:
            click.echo(f"{entry.name}/")
        else:
            click.echo(f"{entry.name}  {entry.size}")


@click.command("cp")
@click.argument("source")
@click.argument("destination")
@click.pass_context
def cp(ctx: click.Context, source: str, destination: str) -> None:
    """Copy a file within the share (server-side)."""
    source, destination = user_path(source), user_path(destination)
    remote = open_remote(ctx)
    with handle_errors():
        remote.copy(source, destination)
    click.echo(f"Copied {source} -> {destination}")


@click.command("rm")
@click.argument("path")
@click.pass_context
def rm(ctx: click.Context, path: str) -> None:
    """Delete a file from the share if it exists."""
    path = user_path(path)
    remote = open_remote(ctx)
    with handle_errors():
        deleted = remote.delete(path)
    if deleted:
        click.echo(f"Deleted {path}")
    else:
        click.echo(f"File not found [{path}].")
