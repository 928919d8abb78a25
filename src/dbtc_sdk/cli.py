"""
DBTC CLI

Command-line interface for the Digital Bayanihan Transparency Chain
budget contracts.

Commands:
  init        - Save chain mode, API key and signer key
  whoami      - Show the signer address
  info        - Show network and contract configuration
  registry    - DBTC registry (departments, budget phases)
  department  - Department contracts (agencies, House/Senate)
  agency      - Agency contracts (proposals, document managers)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

import click

from . import __version__
from .config import configure, get_config, get_contract_addresses, get_network_config
from .errors import ConfigError
from .wallet import get_address, resolve_private_key


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="dbtc")
@click.option(
    "--chain-mode",
    envvar="DBTC_CHAIN_MODE",
    type=click.Choice(["testnet", "mainnet"]),
    default=None,
    help="Network to use (default: from ~/.dbtc/.env)",
)
@click.option("--api-key", envvar="DBTC_API_KEY", default=None, help="DBTC API key")
@click.option("-v", "--verbose", is_flag=True, help="Log RPC and transaction activity")
@click.pass_context
def cli(
    ctx: click.Context,
    chain_mode: Optional[str],
    api_key: Optional[str],
    verbose: bool,
) -> None:
    """DBTC - Digital Bayanihan Transparency Chain budget SDK."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    if chain_mode and api_key and ctx.invoked_subcommand != "init":
        try:
            configure(chain_mode, api_key, os.environ.get("PRIVATE_KEY"))
        except ConfigError as exc:
            click.secho(f"ERROR: {exc}", fg="red")
            sys.exit(exc.exit_code)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .commands.init import init
from .commands.registry import registry
from .commands.department import department
from .commands.agency import agency

cli.add_command(init)
cli.add_command(registry)
cli.add_command(department)
cli.add_command(agency)


# ============ Identity ============


@cli.command()
def whoami() -> None:
    """Show the signer address."""
    try:
        key = resolve_private_key()
    except ConfigError:
        click.echo("No signer key found.")
        click.echo("Run 'dbtc init --generate-key' or set PRIVATE_KEY.")
        sys.exit(1)

    try:
        click.echo(f"Address: {get_address(key)}")
    except ConfigError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(exc.exit_code)


# ============ Info ============


@cli.command()
def info() -> None:
    """Show network and contract configuration."""
    try:
        config = get_config()
    except ConfigError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(exc.exit_code)

    network = get_network_config()
    addresses = get_contract_addresses()

    click.echo()
    click.secho(f"  DBTC SDK v{__version__}", fg="bright_white", bold=True)
    click.echo()
    click.echo(click.style("  Chain mode:      ", dim=True) + config.chain_mode)
    click.echo(click.style("  Network:         ", dim=True)
               + f"{network.chain_name} (chain id {network.chain_id})")
    click.echo(click.style("  RPC:             ", dim=True) + network.rpc_url)
    click.echo(click.style("  DBTC:            ", dim=True) + (addresses.dbtc or "(not deployed)"))
    click.echo(click.style("  BudgetProposal:  ", dim=True)
               + (addresses.budget_proposal or "(not deployed)"))

    if config.private_key:
        try:
            signer = get_address(config.private_key)
        except Exception:
            signer = click.style("invalid key", fg="red")
    else:
        signer = click.style("not set", fg="yellow")
    click.echo(click.style("  Signer:          ", dim=True) + signer)
    click.echo()


# ============ Entry Points ============


def main() -> None:
    """DBTC CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
