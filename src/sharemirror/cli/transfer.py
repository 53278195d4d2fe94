"""Single-file transfer commands for the sharemirror CLI.

Commands:
- upload: Upload one local file
- download: Download one remote file
- write-log: Upload a timestamped text file with a message
"""

from __future__ import annotations

import io
import shutil
import sys
from datetime import datetime
from pathlib import Path

import click

from sharemirror.cli.config import open_remote
from sharemirror.cli.console import handle_errors
from sharemirror.core.types import join_path, user_path


def timestamped_name(now: datetime | None = None) -> str:
    """Build a log file name like 2022-08-17_235643613.txt."""
    now = now or datetime.now()
    return f"{now:%Y-%m-%d_%H%M%S}{now.microsecond // 1000:03d}.txt"


@click.command()
@click.argument(
    "local_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument("remote_dir", default="")
@click.option("--name", default=None, help="Remote file name (default: local name).")
@click.pass_context
def upload(ctx: click.Context, local_file: Path, remote_dir: str, name: str | None) -> None:
    """Upload LOCAL_FILE into REMOTE_DIR, replacing any existing file."""
    remote_dir = user_path(remote_dir)
    remote = open_remote(ctx)
    remote_path = join_path(remote_dir, name or local_file.name)

    with handle_errors():
        remote.ensure_root()
        remote.ensure_directory(remote_dir)
        with open(local_file, "rb") as stream:
            remote.write(remote_path, stream, local_file.stat().st_size)

    click.echo(f"Uploaded {local_file} -> {remote_path}")


@click.command()
@click.argument("directory")
@click.argument("file_name")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def download(ctx: click.Context, directory: str, file_name: str, output: Path) -> None:
    """Download FILE_NAME from DIRECTORY in the share to OUTPUT."""
    remote = open_remote(ctx)
    directory = user_path(directory)
    remote_path = join_path(directory, file_name)

    with handle_errors():
        if remote.stat("") is None:
            click.echo(f"Share not found [{remote.name}].")
            sys.exit(1)

        entry = remote.stat(directory)
        if entry is None or not entry.is_directory:
            click.echo(f"Directory not found [{directory}].")
            sys.exit(1)

        entry = remote.stat(remote_path)
        if entry is None or entry.is_directory:
            click.echo(f"File not found [{remote_path}].")
            sys.exit(1)

        click.echo(f"Downloading [{remote_path}].")
        output.parent.mkdir(parents=True, exist_ok=True)
        with remote.open_read(remote_path) as stream, open(output, "wb") as f:
            shutil.copyfileobj(stream, f)
            f.flush()

    click.echo(f"File download completed. > {output}")


@click.command("write-log")
@click.option(
    "--message",
    default="Learning Azure Files upload files.",
    show_default=True,
    help="Text content of the uploaded file.",
)
@click.option("--directory", default="Logs", show_default=True, help="Remote directory.")
@click.pass_context
def write_log(ctx: click.Context, message: str, directory: str) -> None:
    """Upload a timestamped text file containing MESSAGE.

    Creates the share and the directory when missing.
    """
    directory = user_path(directory)
    remote = open_remote(ctx)
    remote_path = join_path(directory, timestamped_name())
    data = message.encode("utf-8")

    with handle_errors():
        remote.ensure_root()
        click.echo(f"Share created: {remote.name}")
        remote.ensure_directory(directory)
        remote.delete(remote_path)
        remote.write(remote_path, io.BytesIO(data), len(data))

    click.echo(f"Uploaded {remote_path}")
