"""
Init - Write SDK settings to ~/.dbtc/.env.

Flow:
1. Validate chain mode and API key
2. Reuse the existing signer key, import one, or generate a new one
3. Persist DBTC_CHAIN_MODE, DBTC_API_KEY and PRIVATE_KEY
"""

from __future__ import annotations

import os
from typing import Optional

import click

from .. import config
from ..errors import ConfigError
from ..wallet import generate_eoa, get_address
from . import fail


@click.command()
@click.option(
    "--chain-mode",
    type=click.Choice(list(config.CHAIN_MODES)),
    default="testnet",
    show_default=True,
    help="Network to use",
)
@click.option("--api-key", prompt="DBTC API key", help="API key issued by DBTC")
@click.option("--private-key", default=None, help="Import an existing signer key")
@click.option("--generate-key", is_flag=True, help="Generate a new signer key")
def init(
    chain_mode: str,
    api_key: str,
    private_key: Optional[str],
    generate_key: bool,
) -> None:
    """Save chain mode, API key and signer key to ~/.dbtc/.env."""
    try:
        config.configure(chain_mode, api_key)
    except ConfigError as exc:
        fail(exc)

    if generate_key:
        private_key, _ = generate_eoa()
    elif not private_key:
        private_key = os.environ.get("PRIVATE_KEY")

    env_path = config.DBTC_ENV
    config.save_env_value("DBTC_CHAIN_MODE", chain_mode, env_path)
    config.save_env_value("DBTC_API_KEY", api_key, env_path)

    click.echo()
    click.echo(click.style("  Network: ", dim=True) + config.NETWORKS[chain_mode].chain_name)
    click.echo(click.style("  Config:  ", dim=True) + str(env_path))

    if private_key:
        try:
            address = get_address(private_key)
        except Exception as exc:
            fail(exc)
        config.save_env_value("PRIVATE_KEY", private_key, env_path)
        config.configure(chain_mode, api_key, private_key)
        click.echo(click.style("  Address: ", dim=True) + address)
        click.echo()
        click.secho("  IMPORTANT: Back up ~/.dbtc/.env - a lost key cannot be recovered.",
                    fg="yellow", bold=True)
    else:
        click.echo(click.style("  Address: ", dim=True) + "(no signer key; read-only)")

    click.echo()
    click.secho("  Configuration saved.", fg="green", bold=True)
