from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Union


class BudgetPhase(IntEnum):
    """Budget phases in the Philippine budget cycle."""

    PRE_BUDGET = 0  # setup: configure departments, agencies
    BUDGET_CALL = 1  # agencies submit budget proposals
    TECHNICAL_REVIEW = 2  # DBM reviews proposals
    NEP_CONSOLIDATION = 3  # DBM consolidates into the NEP
    GAB_SEPARATE = 4  # House and Senate review separately
    GAB_BICAM = 5  # bicameral conference
    GAA_ENACTMENT = 6  # President signs into law


class ProposalStatus(IntEnum):
    DRAFT = 0
    SUBMITTED = 1
    UNDER_REVIEW = 2
    APPROVED = 3
    REVISED = 4
    AMENDED = 5
    REJECTED = 6
    ENACTED = 7


class EntityType(IntEnum):
    REGULAR = 0  # department with agencies
    STANDALONE = 1  # standalone entity (SUCs, etc.)


Amount = Union[int, str, float]


@dataclass(frozen=True)
class ProposalData:
    """
    Proposal line item as supplied by the caller.

    Attributes:
        prexc_fpap_id: PREXC/FPAP identifier (max 31 bytes)
        uacs_obj_code: UACS object code (max 31 bytes)
        amount: Amount in the smallest unit
    """
    prexc_fpap_id: str
    uacs_obj_code: str
    amount: Amount


@dataclass(frozen=True)
class OnChainProposalData(ProposalData):
    """Proposal data including the fields the contract fills in."""

    fiscal_year: int = 0
    department_code: str = ""
    agency_code: str = ""


@dataclass(frozen=True)
class TransactionResult:
    """
    Outcome of a confirmed transaction.

    Attributes:
        tx_hash: Transaction hash
        block_number: Block the transaction was mined in
        gas_used: Gas consumed
        success: Receipt status == 1
        events: Decoded events by name (first occurrence)
        logs: Raw receipt logs
    """
    tx_hash: str
    block_number: int
    gas_used: int
    success: bool
    events: dict[str, dict[str, Any]] = field(default_factory=dict)
    logs: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class DepartmentResult(TransactionResult):
    department_address: str = ""


@dataclass(frozen=True)
class AgencyResult(TransactionResult):
    agency_address: str = ""


@dataclass(frozen=True)
class ProposalResult(TransactionResult):
    token_id: int = 0


@dataclass(frozen=True)
class RevisionResult(TransactionResult):
    new_token_id: int = 0


@dataclass(frozen=True)
class AgencyInfo:
    address: str
    code: str
    name: str
    department: str
    owner: str


@dataclass(frozen=True)
class DepartmentInfo:
    address: str
    code: str
    name: str
    dbtc: str
    main_agency: str
    is_standalone: bool
    is_actual_department: bool
    agency_count: int


_PHASE_NAMES: dict[int, str] = {
    BudgetPhase.PRE_BUDGET: "Pre-Budget",
    BudgetPhase.BUDGET_CALL: "Budget Call",
    BudgetPhase.TECHNICAL_REVIEW: "Technical Review",
    BudgetPhase.NEP_CONSOLIDATION: "NEP Consolidation",
    BudgetPhase.GAB_SEPARATE: "GAB Separate (House & Senate)",
    BudgetPhase.GAB_BICAM: "GAB Bicameral",
    BudgetPhase.GAA_ENACTMENT: "GAA Enactment",
}

_STATUS_NAMES: dict[int, str] = {
    ProposalStatus.DRAFT: "Draft",
    ProposalStatus.SUBMITTED: "Submitted",
    ProposalStatus.UNDER_REVIEW: "Under Review",
    ProposalStatus.APPROVED: "Approved",
    ProposalStatus.REVISED: "Revised",
    ProposalStatus.AMENDED: "Amended",
    ProposalStatus.REJECTED: "Rejected",
    ProposalStatus.ENACTED: "Enacted",
}


def get_phase_name(phase: int) -> str:
    """Human-readable phase name, "Unknown" for out-of-range values."""
    return _PHASE_NAMES.get(int(phase), "Unknown")


def get_status_name(status: int) -> str:
    """Human-readable status name, "Unknown" for out-of-range values."""
    return _STATUS_NAMES.get(int(status), "Unknown")


__all__ = [
    "BudgetPhase",
    "ProposalStatus",
    "EntityType",
    "ProposalData",
    "OnChainProposalData",
    "TransactionResult",
    "DepartmentResult",
    "AgencyResult",
    "ProposalResult",
    "RevisionResult",
    "AgencyInfo",
    "DepartmentInfo",
    "get_phase_name",
    "get_status_name",
]
