"""Configure command for the sharemirror CLI.

Commands:
- configure: Save share name and credentials to the config file
"""

from __future__ import annotations

import sys

import click

from sharemirror.cli.config import ShareOptions, get_config_file, load_config, save_config
from sharemirror.core.config import ShareConfig
from sharemirror.core.types import ConfigError


@click.command()
@click.option("--account-name", default=None, help="Storage account name.")
@click.option("--account-key", default=None, help="Storage account access key.")
@click.pass_context
def configure(ctx: click.Context, account_name: str | None, account_key: str | None) -> None:
    """Save the file share settings.

    Uses --connection-string and --share when given, otherwise prompts
    for them. An account name and key may be given instead of a
    connection string.
    """
    options: ShareOptions = ctx.ensure_object(ShareOptions)
    existing = load_config()

    share_name = options.share_name or click.prompt(
        "Share name", default=existing.get("shareName") or None
    )
    connection_string = options.connection_string
    if not connection_string and not (account_name and account_key):
        connection_string = click.prompt("Connection string", hide_input=True)

    try:
        config = ShareConfig(
            share_name=share_name,
            connection_string=connection_string,
            account_name=account_name,
            account_key=account_key,
        )
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    save_config(config.to_dict())
    click.echo(f"Configuration saved to {get_config_file()}")
