"""Console output helpers for the sharemirror CLI."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import click
from azure.core.exceptions import AzureError

from sharemirror.core.types import NotFoundError, ShareMirrorError


class EchoHandler(logging.Handler):
    """Logging handler that writes records to stderr through click."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(verbose: bool) -> None:
    """Route sharemirror log records to the console.

    Only warnings and errors are shown unless verbose is set.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler = EchoHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    handler.setLevel(level)

    package_logger = logging.getLogger("sharemirror")
    for existing in package_logger.handlers[:]:
        if isinstance(existing, EchoHandler):
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Report command failures on the console and exit with status 1."""
    try:
        yield
    except NotFoundError as e:
        click.echo(str(e))
        sys.exit(1)
    except (ShareMirrorError, AzureError, OSError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
