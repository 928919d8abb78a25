"""
Department - Department contract commands.

Commands:
- info:              Show department details
- agencies:          List agencies registered under the department
- add-agency:        Register a new agency (department owner only)
- set-house-senate:  Wire House and Senate agencies (Congress only)
"""

from __future__ import annotations

from typing import Optional

import click

from .. import department as dept
from ..errors import SDKError
from . import echo_tx, fail


@click.group()
def department() -> None:
    """Department contracts: agencies and Congress wiring."""


@department.command()
@click.argument("department_address")
def info(department_address: str) -> None:
    """Show details of the department at DEPARTMENT_ADDRESS."""
    try:
        details = dept.get_department_info(department_address)
        owner = dept.get_department_owner(department_address)
    except (SDKError, ValueError) as exc:
        fail(exc)

    kind = "standalone" if details.is_standalone else "regular"
    click.echo(f"  Department {details.code}: {details.name}")
    click.echo("  ─────────────────────────────")
    click.echo(f"  Address:      {details.address}")
    click.echo(f"  Type:         {kind}"
               + ("" if details.is_actual_department else " (not an actual department)"))
    click.echo(f"  DBTC:         {details.dbtc}")
    click.echo(f"  Main agency:  {details.main_agency}")
    click.echo(f"  Owner:        {owner}")
    click.echo(f"  Agencies:     {details.agency_count}")


@department.command()
@click.argument("department_address")
def agencies(department_address: str) -> None:
    """List agency codes and contracts of a department."""
    try:
        codes = dept.get_agency_codes(department_address)
        rows = [(code, dept.get_agency(department_address, code)) for code in codes]
    except (SDKError, ValueError) as exc:
        fail(exc)

    if not rows:
        click.echo("No agencies registered.")
        return

    click.echo(f"Agencies: {len(rows)}")
    for code, contract in rows:
        click.echo(f"  {code}: {contract}")


@department.command("add-agency")
@click.argument("department_address")
@click.option("--code", "agency_code", required=True, help="Agency code (e.g. 002)")
@click.option("--name", "agency_name", required=True, help="Agency name")
@click.option("--owner", "owner_address", required=True, help="Owner of the new agency")
@click.option("--gas-limit", default=None, type=int, help="Gas limit")
def add_agency(
    department_address: str,
    agency_code: str,
    agency_name: str,
    owner_address: str,
    gas_limit: Optional[int],
) -> None:
    """Register a new agency under DEPARTMENT_ADDRESS."""
    click.echo(f"Adding agency {agency_code} ({agency_name})...")
    try:
        result = dept.add_agency(
            department_address, agency_code, agency_name, owner_address, gas_limit=gas_limit
        )
    except (SDKError, ValueError) as exc:
        fail(exc)

    echo_tx(result, {"Agency": result.agency_address or "(not found in logs)"})


@department.command("set-house-senate")
@click.argument("department_address")
@click.option("--house", "house_address", required=True, help="House agency address")
@click.option("--senate", "senate_address", required=True, help="Senate agency address")
def set_house_senate(department_address: str, house_address: str, senate_address: str) -> None:
    """Set the House and Senate agencies of the Congress department."""
    try:
        result = dept.set_house_and_senate(department_address, house_address, senate_address)
    except (SDKError, ValueError) as exc:
        fail(exc)
    echo_tx(result)
