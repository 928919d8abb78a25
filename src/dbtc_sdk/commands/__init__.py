"""
Command implementations for the dbtc CLI.

Each module corresponds to a top-level command or command group:
- init:       Write chain mode, API key and signer key to ~/.dbtc/.env
- registry:   DBTC registry (departments, budget phases)
- department: Department contracts (agencies, House/Senate)
- agency:     Agency contracts (proposals, document managers)
"""

from __future__ import annotations

import sys
from typing import NoReturn, Optional

import click

from ..errors import SDKError
from ..types import TransactionResult


def fail(exc: Exception) -> NoReturn:
    """Print an error and exit with the SDK error's exit code."""
    click.secho(f"ERROR: {exc}", fg="red")
    sys.exit(exc.exit_code if isinstance(exc, SDKError) else 1)


def echo_tx(result: TransactionResult, extra: Optional[dict[str, object]] = None) -> None:
    click.secho("SUCCESS: Transaction confirmed!", fg="green")
    click.echo(click.style("  TX:       ", dim=True) + result.tx_hash)
    click.echo(click.style("  Block:    ", dim=True) + str(result.block_number))
    click.echo(click.style("  Gas used: ", dim=True) + str(result.gas_used))
    for label, value in (extra or {}).items():
        click.echo(click.style(f"  {label}: ".ljust(12), dim=True) + str(value))
