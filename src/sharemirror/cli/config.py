"""Configuration utilities for the sharemirror CLI.

This module provides the settings file helpers and the construction of the
remote share tree from command-line options, environment and settings file.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click

from sharemirror.core.config import ShareConfig
from sharemirror.core.types import ConfigError
from sharemirror.storage import ShareFileTree


@dataclass
class ShareOptions:
    """Connection overrides given on the command line or in the environment."""

    connection_string: str | None = None
    share_name: str | None = None


def get_config_dir() -> Path:
    """Get the configuration directory for sharemirror.

    Returns:
        Path to ~/.sharemirror or equivalent.
    """
    return Path.home() / ".sharemirror"


def get_config_file() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.json"


def load_config() -> dict[str, str]:
    """Load configuration from config file."""
    config_file = get_config_file()
    if config_file.exists():
        return dict(json.loads(config_file.read_text()))
    return {}


def save_config(config: dict[str, str]) -> None:
    """Save configuration to config file."""
    config_file = get_config_file()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(json.dumps(config, indent=2))


def resolve_share_config(options: ShareOptions) -> ShareConfig:
    """Build the share configuration.

    Command-line options (and their environment variables) take precedence
    over the settings file.

    Raises:
        ConfigError: If no share name or no credentials are available.
    """
    data: dict[str, Any] = dict(load_config())
    if options.connection_string:
        data["connectionString"] = options.connection_string
    if options.share_name:
        data["shareName"] = options.share_name
    return ShareConfig.from_dict(data)


def open_remote(ctx: click.Context) -> ShareFileTree:
    """Open the configured file share, exiting with an error if unconfigured."""
    options: ShareOptions = ctx.ensure_object(ShareOptions)
    try:
        config = resolve_share_config(options)
    except ConfigError as e:
        click.echo(f"Error: {e}. Run 'sharemirror configure' first.", err=True)
        sys.exit(1)
    return ShareFileTree.from_config(config)
