"""
Agency - Agency contract commands.

Commands:
- info:                Show agency details and document managers
- submit:              Submit a budget proposal
- revise:              Revise a proposal
- amend:               Amend a proposal (GAB phase)
- add-manager:         Grant document manager role
- remove-manager:      Revoke document manager role
- transfer-ownership:  Hand the agency to a new owner
"""

from __future__ import annotations

from typing import Optional

import click

from .. import agency as ag
from ..errors import SDKError
from ..types import ProposalData
from . import echo_tx, fail


def _proposal_options(func):
    func = click.option("--amount", required=True, help="Amount in the smallest unit")(func)
    func = click.option("--uacs", "uacs_obj_code", required=True, help="UACS object code")(func)
    func = click.option("--prexc", "prexc_fpap_id", required=True, help="PREXC/FPAP identifier")(func)
    func = click.option("--uri", required=True, help="Metadata URI (IPFS or other)")(func)
    return func


@click.group()
def agency() -> None:
    """Agency contracts: proposals and document managers."""


@agency.command()
@click.argument("agency_address")
def info(agency_address: str) -> None:
    """Show details of the agency at AGENCY_ADDRESS."""
    try:
        details = ag.get_agency_info(agency_address)
        managers = ag.get_document_managers(agency_address)
    except (SDKError, ValueError) as exc:
        fail(exc)

    click.echo(f"  Agency {details.code}: {details.name}")
    click.echo("  ─────────────────────────────")
    click.echo(f"  Address:     {details.address}")
    click.echo(f"  Department:  {details.department}")
    click.echo(f"  Owner:       {details.owner}")
    if managers:
        click.echo("  Document managers:")
        for manager in managers:
            click.echo(f"    - {manager}")
    else:
        click.echo("  Document managers: (none)")


@agency.command()
@click.argument("agency_address")
@_proposal_options
@click.option("--gas-limit", default=None, type=int, help="Gas limit")
def submit(
    agency_address: str,
    uri: str,
    prexc_fpap_id: str,
    uacs_obj_code: str,
    amount: str,
    gas_limit: Optional[int],
) -> None:
    """Submit a budget proposal to AGENCY_ADDRESS."""
    data = ProposalData(prexc_fpap_id, uacs_obj_code, amount)
    try:
        result = ag.submit_proposal(agency_address, uri, data, gas_limit=gas_limit)
    except (SDKError, ValueError) as exc:
        fail(exc)
    echo_tx(result, {"Token ID": result.token_id})


@agency.command()
@click.argument("agency_address")
@click.argument("original_token_id", type=int)
@_proposal_options
@click.option("--reason", required=True, help="Reason for the revision")
def revise(
    agency_address: str,
    original_token_id: int,
    uri: str,
    prexc_fpap_id: str,
    uacs_obj_code: str,
    amount: str,
    reason: str,
) -> None:
    """Revise proposal ORIGINAL_TOKEN_ID."""
    data = ProposalData(prexc_fpap_id, uacs_obj_code, amount)
    try:
        result = ag.revise_proposal(agency_address, original_token_id, uri, data, reason)
    except (SDKError, ValueError) as exc:
        fail(exc)
    echo_tx(result, {"New token": result.new_token_id})


@agency.command()
@click.argument("agency_address")
@click.argument("original_token_id", type=int)
@_proposal_options
@click.option("--reason", required=True, help="Reason for the amendment")
def amend(
    agency_address: str,
    original_token_id: int,
    uri: str,
    prexc_fpap_id: str,
    uacs_obj_code: str,
    amount: str,
    reason: str,
) -> None:
    """Amend proposal ORIGINAL_TOKEN_ID during the GAB phase."""
    data = ProposalData(prexc_fpap_id, uacs_obj_code, amount)
    try:
        result = ag.amend_proposal(agency_address, original_token_id, uri, data, reason)
    except (SDKError, ValueError) as exc:
        fail(exc)
    echo_tx(result, {"New token": result.new_token_id})


@agency.command("add-manager")
@click.argument("agency_address")
@click.argument("manager_address")
def add_manager(agency_address: str, manager_address: str) -> None:
    """Grant MANAGER_ADDRESS the document manager role."""
    try:
        result = ag.add_document_manager(agency_address, manager_address)
    except (SDKError, ValueError) as exc:
        fail(exc)
    echo_tx(result)


@agency.command("remove-manager")
@click.argument("agency_address")
@click.argument("manager_address")
def remove_manager(agency_address: str, manager_address: str) -> None:
    """Revoke the document manager role from MANAGER_ADDRESS."""
    try:
        result = ag.remove_document_manager(agency_address, manager_address)
    except (SDKError, ValueError) as exc:
        fail(exc)
    echo_tx(result)


@agency.command("transfer-ownership")
@click.argument("agency_address")
@click.argument("new_owner")
def transfer_ownership(agency_address: str, new_owner: str) -> None:
    """Transfer the agency to NEW_OWNER."""
    try:
        result = ag.transfer_agency_ownership(agency_address, new_owner)
    except (SDKError, ValueError) as exc:
        fail(exc)
    echo_tx(result)
