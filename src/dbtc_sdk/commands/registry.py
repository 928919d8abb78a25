"""
Registry - DBTC registry contract commands.

Commands:
- phase:              Show the current budget phase and fiscal year
- departments:        List registered departments
- department:         Look up a department by code
- owner:              Show the DBTC owner (DBM)
- add-department:     Register a department (DBM only)
- assign-phase:       Assign a phase to a responsible department (DBM only)
- start-budget-call:  Open the Budget Call phase
- advance-phase:      Move to the next phase
"""

from __future__ import annotations

import sys
from typing import Optional

import click

from .. import dbtc
from ..errors import SDKError
from ..types import BudgetPhase, get_phase_name
from . import echo_tx, fail

PHASE_CHOICE = click.Choice([p.name for p in BudgetPhase], case_sensitive=False)


@click.group()
@click.option(
    "--dbtc-address",
    envvar="DBTC_ADDRESS",
    default=None,
    help="DBTC contract address (default: bundled address for the chain mode)",
)
@click.pass_context
def registry(ctx: click.Context, dbtc_address: Optional[str]) -> None:
    """DBTC registry: departments and budget phases."""
    ctx.ensure_object(dict)
    ctx.obj["dbtc_address"] = dbtc_address


@registry.command()
@click.pass_context
def phase(ctx: click.Context) -> None:
    """Show the current phase, fiscal year and responsible department."""
    address = ctx.obj["dbtc_address"]
    try:
        current = dbtc.get_current_phase(address)
        fiscal_year = dbtc.get_current_fiscal_year(address)
        responsible = dbtc.get_phase_responsible_department(current, address)
    except (SDKError, ValueError) as exc:
        fail(exc)

    click.echo(click.style("  Phase:       ", dim=True)
               + click.style(f"{get_phase_name(current)} ({int(current)})", fg="bright_white"))
    click.echo(click.style("  Fiscal year: ", dim=True) + str(fiscal_year))
    click.echo(click.style("  Responsible: ", dim=True) + (responsible or "(unassigned)"))


@registry.command()
@click.pass_context
def departments(ctx: click.Context) -> None:
    """List registered department codes and contracts."""
    address = ctx.obj["dbtc_address"]
    try:
        codes = dbtc.get_department_codes(address)
        rows = [(code, dbtc.get_department(code, address)) for code in codes]
    except (SDKError, ValueError) as exc:
        fail(exc)

    if not rows:
        click.echo("No departments registered.")
        return

    click.echo(f"Departments: {len(rows)}")
    for code, contract in rows:
        click.echo(f"  {code}: {contract}")


@registry.command()
@click.argument("dept_code")
@click.pass_context
def department(ctx: click.Context, dept_code: str) -> None:
    """Look up a department contract by code."""
    address = ctx.obj["dbtc_address"]
    try:
        if not dbtc.is_department_registered(dept_code, address):
            click.secho(f"Department {dept_code} is not registered.", fg="yellow")
            sys.exit(1)
        click.echo(dbtc.get_department(dept_code, address))
    except (SDKError, ValueError) as exc:
        fail(exc)


@registry.command()
@click.pass_context
def owner(ctx: click.Context) -> None:
    """Show the DBTC owner address."""
    try:
        click.echo(dbtc.get_dbtc_owner(ctx.obj["dbtc_address"]))
    except (SDKError, ValueError) as exc:
        fail(exc)


@registry.command("add-department")
@click.option("--code", "dept_code", required=True, help="Department code (e.g. 01)")
@click.option("--name", "dept_name", required=True, help="Department name")
@click.option("--main-agency", "main_agency_name", default="", help="Main agency name")
@click.option("--owner", "owner_address", required=True, help="Main agency / standalone owner")
@click.option("--standalone", is_flag=True, help="Register as a standalone entity")
@click.option("--not-actual", is_flag=True, help="Not an actual department (BSGC/ALGU)")
@click.option("--gas-limit", default=None, type=int, help="Gas limit")
@click.pass_context
def add_department(
    ctx: click.Context,
    dept_code: str,
    dept_name: str,
    main_agency_name: str,
    owner_address: str,
    standalone: bool,
    not_actual: bool,
    gas_limit: Optional[int],
) -> None:
    """Register a new department (DBTC owner only)."""
    click.echo(f"Adding department {dept_code} ({dept_name})...")
    try:
        result = dbtc.add_department(
            dept_code,
            dept_name,
            main_agency_name,
            owner_address,
            is_standalone=standalone,
            is_actual_dept=not not_actual,
            dbtc_address=ctx.obj["dbtc_address"],
            gas_limit=gas_limit,
        )
    except (SDKError, ValueError) as exc:
        fail(exc)

    echo_tx(result, {"Department": result.department_address or "(not found in logs)"})


@registry.command("assign-phase")
@click.argument("phase_name", type=PHASE_CHOICE)
@click.argument("dept_code")
@click.pass_context
def assign_phase(ctx: click.Context, phase_name: str, dept_code: str) -> None:
    """Make DEPT_CODE responsible for PHASE_NAME (DBTC owner only)."""
    target = BudgetPhase[phase_name.upper()]
    try:
        result = dbtc.assign_phase_responsibility(
            target, dept_code, dbtc_address=ctx.obj["dbtc_address"]
        )
    except (SDKError, ValueError) as exc:
        fail(exc)
    echo_tx(result, {"Phase": get_phase_name(target)})


@registry.command("start-budget-call")
@click.pass_context
def start_budget_call(ctx: click.Context) -> None:
    """Open the Budget Call phase."""
    try:
        result = dbtc.start_budget_call(dbtc_address=ctx.obj["dbtc_address"])
    except (SDKError, ValueError) as exc:
        fail(exc)
    echo_tx(result)


@registry.command("advance-phase")
@click.pass_context
def advance_phase(ctx: click.Context) -> None:
    """Advance to the next budget phase."""
    address = ctx.obj["dbtc_address"]
    try:
        result = dbtc.advance_phase(dbtc_address=address)
        current = dbtc.get_current_phase(address)
    except (SDKError, ValueError) as exc:
        fail(exc)
    echo_tx(result, {"Phase": get_phase_name(current)})
