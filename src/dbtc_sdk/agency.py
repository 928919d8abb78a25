"""
Agency contract - budget proposal lifecycle and document managers.

Proposals are minted as tokens. Revisions and amendments mint a new token
that points back at the original one.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from .chain.abi import agency_abi
from .chain.events import find_event_arg
from .chain.rpc import read_contract
from .chain.tx import send_contract_tx
from .errors import ContractCallError
from .types import AgencyInfo, ProposalData, ProposalResult, RevisionResult, TransactionResult
from .utils import extend_result, prepare_proposal_data, wait_for_transaction

logger = logging.getLogger(__name__)

ProposalInput = Union[ProposalData, Mapping[str, Any]]


def _transact(
    agency_address: str,
    function_name: str,
    args: list,
    private_key: Optional[str],
    gas_limit: Optional[int] = None,
) -> TransactionResult:
    sent = send_contract_tx(
        contract_address=agency_address,
        function_name=function_name,
        args=args,
        abi=agency_abi(),
        gas_limit=gas_limit,
        private_key=private_key,
        wait=False,
    )
    return wait_for_transaction(sent["tx_hash"], abi=agency_abi())


def _read(agency_address: str, function_name: str, args: Optional[list] = None) -> Any:
    value = read_contract(agency_address, function_name, args or [], abi=agency_abi())
    if value is None:
        raise ContractCallError(agency_address, function_name)
    return value


def _token_id(result: TransactionResult, event_name: str, arg_name: str) -> int:
    token_id = find_event_arg(agency_abi(), result.logs, event_name, arg_name)
    if token_id is None:
        logger.warning("No %s event in tx %s", event_name, result.tx_hash)
        return 0
    return int(token_id)


# ============ Proposal Management ============


def submit_proposal(
    agency_address: str,
    uri: str,
    data: ProposalInput,
    private_key: Optional[str] = None,
    gas_limit: Optional[int] = None,
) -> ProposalResult:
    """
    Submit a budget proposal.

    Args:
        agency_address: Agency contract address
        uri: Metadata URI (IPFS or other)
        data: Proposal data (prexc_fpap_id, uacs_obj_code, amount)
        private_key: Key of the agency owner or a document manager
        gas_limit: Gas limit (default: estimate)

    Returns:
        ProposalResult with token_id from the ProposalSubmitted event
    """
    result = _transact(
        agency_address,
        "submitProposal",
        [uri, prepare_proposal_data(data)],
        private_key,
        gas_limit,
    )
    return extend_result(
        result, ProposalResult,
        token_id=_token_id(result, "ProposalSubmitted", "tokenId"),
    )


def revise_proposal(
    agency_address: str,
    original_token_id: int,
    new_uri: str,
    new_data: ProposalInput,
    reason: str,
    private_key: Optional[str] = None,
    gas_limit: Optional[int] = None,
) -> RevisionResult:
    """
    Revise an existing proposal.

    Returns:
        RevisionResult with new_token_id from the ProposalRevised event
    """
    result = _transact(
        agency_address,
        "reviseProposal",
        [int(original_token_id), new_uri, prepare_proposal_data(new_data), reason],
        private_key,
        gas_limit,
    )
    return extend_result(
        result, RevisionResult,
        new_token_id=_token_id(result, "ProposalRevised", "newTokenId"),
    )


def amend_proposal(
    agency_address: str,
    original_token_id: int,
    new_uri: str,
    new_data: ProposalInput,
    reason: str,
    private_key: Optional[str] = None,
    gas_limit: Optional[int] = None,
) -> RevisionResult:
    """
    Amend a proposal during the GAB phase.

    Returns:
        RevisionResult with new_token_id from the ProposalAmended event
    """
    result = _transact(
        agency_address,
        "amendProposal",
        [int(original_token_id), new_uri, prepare_proposal_data(new_data), reason],
        private_key,
        gas_limit,
    )
    return extend_result(
        result, RevisionResult,
        new_token_id=_token_id(result, "ProposalAmended", "newTokenId"),
    )


def submit_separate_gab(
    agency_address: str,
    uri: str,
    data: ProposalInput,
    private_key: Optional[str] = None,
    gas_limit: Optional[int] = None,
) -> ProposalResult:
    """Submit a separate GAB from the House or Senate agency."""
    result = _transact(
        agency_address,
        "submitSeparateGAB",
        [uri, prepare_proposal_data(data)],
        private_key,
        gas_limit,
    )
    return extend_result(
        result, ProposalResult,
        token_id=_token_id(result, "ProposalSubmitted", "tokenId"),
    )


def submit_joint_gab(
    agency_address: str,
    house_proposal_id: int,
    senate_proposal_id: int,
    uri: str,
    data: ProposalInput,
    private_key: Optional[str] = None,
    gas_limit: Optional[int] = None,
) -> ProposalResult:
    """
    Submit the joint (bicameral) GAB.

    Args:
        agency_address: Congress main agency
        house_proposal_id: House proposal token ID
        senate_proposal_id: Senate proposal token ID
        uri: Metadata URI
        data: Proposal data
        private_key: Key of the Congress main agency owner
    """
    result = _transact(
        agency_address,
        "submitJointGAB",
        [int(house_proposal_id), int(senate_proposal_id), uri, prepare_proposal_data(data)],
        private_key,
        gas_limit,
    )
    return extend_result(
        result, ProposalResult,
        token_id=_token_id(result, "ProposalSubmitted", "tokenId"),
    )


# ============ Role Management ============


def add_document_manager(
    agency_address: str,
    manager_address: str,
    private_key: Optional[str] = None,
    gas_limit: Optional[int] = None,
) -> TransactionResult:
    return _transact(agency_address, "addDocumentManager", [manager_address], private_key, gas_limit)


def remove_document_manager(
    agency_address: str,
    manager_address: str,
    private_key: Optional[str] = None,
    gas_limit: Optional[int] = None,
) -> TransactionResult:
    return _transact(agency_address, "removeDocumentManager", [manager_address], private_key, gas_limit)


def transfer_agency_ownership(
    agency_address: str,
    new_owner: str,
    private_key: Optional[str] = None,
    gas_limit: Optional[int] = None,
) -> TransactionResult:
    """Hand the agency over to a new owner (current owner only)."""
    return _transact(agency_address, "transferOwnership", [new_owner], private_key, gas_limit)


# ============ Read Functions ============


def get_agency_info(agency_address: str) -> AgencyInfo:
    return AgencyInfo(
        address=agency_address,
        code=_read(agency_address, "getCode"),
        name=_read(agency_address, "getName"),
        department=_read(agency_address, "getDepartment"),
        owner=_read(agency_address, "getOwner"),
    )


def is_document_manager(agency_address: str, address: str) -> bool:
    return bool(_read(agency_address, "isDocumentManager", [address]))


def get_document_managers(agency_address: str) -> list[str]:
    return list(_read(agency_address, "getDocumentManagers"))
