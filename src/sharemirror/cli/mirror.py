"""Directory mirror commands for the sharemirror CLI.

Commands:
- upload-dir: Mirror a local directory into the share
- download-dir: Mirror a share directory under a local root
"""

from __future__ import annotations

from pathlib import Path

import click

from sharemirror.cli.config import open_remote
from sharemirror.cli.console import handle_errors
from sharemirror.core.types import MirrorResult, TransferCallback, user_path
from sharemirror.mirror import download_tree, upload_tree
from sharemirror.storage import LocalFileTree


def _echo_transfer(arrow: str) -> TransferCallback:
    def callback(action: str, path: str) -> None:
        if action == "skipped":
            click.echo(f"  ✗ {path} (skipped)")
        else:
            click.echo(f"  {arrow} {path}")
    return callback


def _echo_summary(result: MirrorResult) -> None:
    click.echo(
        f"Done: {result.file_count} files ({result.bytes_copied} bytes), "
        f"{len(result.directories)} directories"
    )
    if result.skipped:
        click.echo(click.style(f"Skipped {len(result.skipped)} missing files.", fg="yellow"))


@click.command("upload-dir")
@click.argument(
    "local_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.argument("remote_dir", default="")
@click.pass_context
def upload_dir(ctx: click.Context, local_dir: Path, remote_dir: str) -> None:
    """Mirror LOCAL_DIR into REMOTE_DIR in the share.

    Existing remote files are overwritten; nothing is deleted.
    """
    remote_dir = user_path(remote_dir)
    remote = open_remote(ctx)
    local = LocalFileTree(local_dir)
    click.echo(f"Uploading {local.base_path} -> {remote.name}/{remote_dir}")

    with handle_errors():
        remote.ensure_root()
        result = upload_tree(local, remote, "", remote_dir, _echo_transfer("↑"))

    _echo_summary(result)


@click.command("download-dir")
@click.argument("remote_dir")
@click.argument(
    "local_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
)
@click.pass_context
def download_dir(ctx: click.Context, remote_dir: str, local_root: Path) -> None:
    """Mirror REMOTE_DIR from the share under LOCAL_ROOT.

    The directory keeps its full share path below LOCAL_ROOT. Existing
    local files are overwritten; nothing is deleted.
    """
    remote_dir = user_path(remote_dir)
    remote = open_remote(ctx)
    local = LocalFileTree(local_root)
    click.echo(f"Downloading {remote.name}/{remote_dir} -> {local.base_path}")

    with handle_errors():
        local.ensure_root()
        result = download_tree(remote, local, remote_dir, "", _echo_transfer("↓"))

    _echo_summary(result)
