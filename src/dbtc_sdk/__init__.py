"""
dbtc-gov-sdk

Python SDK for the Digital Bayanihan Transparency Chain (DBTC) budget
contracts: the DBTC registry, Department contracts and Agency contracts.
"""

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "SDKConfig",
    "NetworkConfig",
    "ContractAddresses",
    "configure",
    "reset_config",
    "get_config",
    "get_network_config",
    "get_chain_mode",
    "get_contract_addresses",
    "set_contract_addresses",
    "is_testnet",
    "is_mainnet",
    # Signer
    "generate_eoa",
    "get_signer",
    "get_address",
    # Errors
    "SDKError",
    "ConfigError",
    "RpcError",
    "ContractCallError",
    "InvalidArgumentError",
    "TransactionRevertedError",
    "TransactionTimeoutError",
    # Types
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
    # DBTC registry
    "add_department",
    "add_regular_department",
    "assign_phase_responsibility",
    "start_budget_call",
    "advance_phase",
    "get_current_phase",
    "get_current_fiscal_year",
    "get_department",
    "is_department_registered",
    "get_department_codes",
    "get_department_count",
    "get_phase_responsible_department",
    "get_budget_proposal_contract",
    "get_dbtc_owner",
    # Department
    "add_agency",
    "set_house_and_senate",
    "get_department_info",
    "get_agency",
    "is_agency_registered",
    "get_agency_codes",
    "get_main_agency",
    "get_house_agency",
    "get_senate_agency",
    "get_department_owner",
    # Agency
    "submit_proposal",
    "revise_proposal",
    "amend_proposal",
    "submit_separate_gab",
    "submit_joint_gab",
    "add_document_manager",
    "remove_document_manager",
    "transfer_agency_ownership",
    "get_agency_info",
    "is_document_manager",
    "get_document_managers",
    # Events
    "DecodedEvent",
    "decode_log",
    "decode_logs",
    "find_event",
    "find_event_arg",
    # Utilities
    "string_to_bytes32",
    "bytes32_to_string",
    "prepare_proposal_data",
    "wait_for_transaction",
]

from .config import (
    ContractAddresses,
    NetworkConfig,
    SDKConfig,
    configure,
    get_chain_mode,
    get_config,
    get_contract_addresses,
    get_network_config,
    is_mainnet,
    is_testnet,
    reset_config,
    set_contract_addresses,
)
from .errors import (
    ConfigError,
    ContractCallError,
    InvalidArgumentError,
    RpcError,
    SDKError,
    TransactionRevertedError,
    TransactionTimeoutError,
)
from .wallet import generate_eoa, get_address, get_signer
from .types import (
    AgencyInfo,
    AgencyResult,
    BudgetPhase,
    DepartmentInfo,
    DepartmentResult,
    EntityType,
    OnChainProposalData,
    ProposalData,
    ProposalResult,
    ProposalStatus,
    RevisionResult,
    TransactionResult,
    get_phase_name,
    get_status_name,
)
from .chain.events import DecodedEvent, decode_log, decode_logs, find_event, find_event_arg
from .utils import bytes32_to_string, prepare_proposal_data, string_to_bytes32, wait_for_transaction
from .dbtc import (
    add_department,
    add_regular_department,
    advance_phase,
    assign_phase_responsibility,
    get_budget_proposal_contract,
    get_current_fiscal_year,
    get_current_phase,
    get_dbtc_owner,
    get_department,
    get_department_codes,
    get_department_count,
    get_phase_responsible_department,
    is_department_registered,
    start_budget_call,
)
from .department import (
    add_agency,
    get_agency,
    get_agency_codes,
    get_department_info,
    get_department_owner,
    get_house_agency,
    get_main_agency,
    get_senate_agency,
    is_agency_registered,
    set_house_and_senate,
)
from .agency import (
    add_document_manager,
    amend_proposal,
    get_agency_info,
    get_document_managers,
    is_document_manager,
    remove_document_manager,
    revise_proposal,
    submit_joint_gab,
    submit_proposal,
    submit_separate_gab,
    transfer_agency_ownership,
)
