"""
DBTC registry contract - departments and budget phase management.

Write operations are restricted on-chain: department management to the
DBTC owner (DBM), phase transitions to the owner of the department
responsible for the current phase.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from .chain.abi import dbtc_abi
from .chain.events import find_event_arg
from .chain.rpc import read_contract
from .chain.tx import send_contract_tx
from .config import get_contract_addresses
from .errors import ConfigError, ContractCallError
from .types import BudgetPhase, DepartmentResult, TransactionResult
from .utils import extend_result, wait_for_transaction

logger = logging.getLogger(__name__)


def _resolve_address(dbtc_address: Optional[str]) -> str:
    address = dbtc_address or get_contract_addresses().dbtc
    if not address:
        raise ConfigError(
            "DBTC contract address not configured. "
            "Use set_contract_addresses() or pass dbtc_address."
        )
    return address


def _transact(
    function_name: str,
    args: list,
    private_key: Optional[str],
    dbtc_address: Optional[str],
    gas_limit: Optional[int] = None,
) -> TransactionResult:
    sent = send_contract_tx(
        contract_address=_resolve_address(dbtc_address),
        function_name=function_name,
        args=args,
        abi=dbtc_abi(),
        gas_limit=gas_limit,
        private_key=private_key,
        wait=False,
    )
    return wait_for_transaction(sent["tx_hash"], abi=dbtc_abi())


def _read(function_name: str, args: Optional[list], dbtc_address: Optional[str]) -> Any:
    address = _resolve_address(dbtc_address)
    value = read_contract(address, function_name, args or [], abi=dbtc_abi())
    if value is None:
        raise ContractCallError(address, function_name)
    return value


def _department_result(result: TransactionResult) -> DepartmentResult:
    address = find_event_arg(
        dbtc_abi(), result.logs, "DepartmentAdded", "deptContract", position=1
    )
    if not address:
        logger.warning("No DepartmentAdded event in tx %s", result.tx_hash)
    return extend_result(result, DepartmentResult, department_address=address or "")


# ============ Department Management (DBM owner only) ============


def add_department(
    dept_code: str,
    dept_name: str,
    main_agency_name: str,
    main_agency_owner: str,
    is_standalone: bool,
    is_actual_dept: bool,
    private_key: Optional[str] = None,
    dbtc_address: Optional[str] = None,
    gas_limit: Optional[int] = None,
) -> DepartmentResult:
    """
    Add a new department.

    Args:
        dept_code: Department code (e.g., "01")
        dept_name: Department name
        main_agency_name: Main agency name (empty for standalone)
        main_agency_owner: Owner address for the main agency or standalone entity
        is_standalone: Whether this is a standalone entity
        is_actual_dept: Whether this is an actual department (False for BSGC/ALGU)
        private_key: Key of the DBTC owner (DBM)
        dbtc_address: DBTC contract address (default: bundled)
        gas_limit: Gas limit (default: estimate)

    Returns:
        DepartmentResult with department_address from the DepartmentAdded event
    """
    result = _transact(
        "addDepartment",
        [dept_code, dept_name, main_agency_name, main_agency_owner, is_standalone, is_actual_dept],
        private_key,
        dbtc_address,
        gas_limit,
    )
    return _department_result(result)


def add_regular_department(
    dept_code: str,
    dept_name: str,
    main_agency_name: str,
    main_agency_owner: str,
    private_key: Optional[str] = None,
    dbtc_address: Optional[str] = None,
    gas_limit: Optional[int] = None,
) -> DepartmentResult:
    """Add a regular (non-standalone, actual) department with its main agency."""
    result = _transact(
        "addRegularDepartment",
        [dept_code, dept_name, main_agency_name, main_agency_owner],
        private_key,
        dbtc_address,
        gas_limit,
    )
    return _department_result(result)


# ============ Phase Management ============


def assign_phase_responsibility(
    phase: BudgetPhase,
    dept_code: str,
    private_key: Optional[str] = None,
    dbtc_address: Optional[str] = None,
    gas_limit: Optional[int] = None,
) -> TransactionResult:
    """Make a department responsible for driving a budget phase."""
    return _transact(
        "assignPhaseResponsibility",
        [int(phase), dept_code],
        private_key,
        dbtc_address,
        gas_limit,
    )


def start_budget_call(
    private_key: Optional[str] = None,
    dbtc_address: Optional[str] = None,
    gas_limit: Optional[int] = None,
) -> TransactionResult:
    """Open the Budget Call phase (responsible department owner)."""
    return _transact("startBudgetCall", [], private_key, dbtc_address, gas_limit)


def advance_phase(
    private_key: Optional[str] = None,
    dbtc_address: Optional[str] = None,
    gas_limit: Optional[int] = None,
) -> TransactionResult:
    """Move to the next phase (responsible department owner)."""
    return _transact("advancePhase", [], private_key, dbtc_address, gas_limit)


# ============ Read Functions ============


def get_current_phase(dbtc_address: Optional[str] = None) -> Union[BudgetPhase, int]:
    """Current budget phase; phases the SDK does not know come back as plain ints."""
    value = int(_read("getCurrentPhase", None, dbtc_address))
    try:
        return BudgetPhase(value)
    except ValueError:
        logger.warning("Unknown budget phase %d", value)
        return value


def get_current_fiscal_year(dbtc_address: Optional[str] = None) -> int:
    return int(_read("getCurrentFiscalYear", None, dbtc_address))


def get_department(dept_code: str, dbtc_address: Optional[str] = None) -> str:
    """Department contract address for a code (zero address if unknown)."""
    return _read("getDepartment", [dept_code], dbtc_address)


def is_department_registered(dept_code: str, dbtc_address: Optional[str] = None) -> bool:
    return bool(_read("isDepartmentRegistered", [dept_code], dbtc_address))


def get_department_codes(dbtc_address: Optional[str] = None) -> list[str]:
    return list(_read("getDepartmentCodes", None, dbtc_address) or [])


def get_department_count(dbtc_address: Optional[str] = None) -> int:
    return int(_read("getDepartmentCount", None, dbtc_address))


def get_phase_responsible_department(
    phase: BudgetPhase,
    dbtc_address: Optional[str] = None,
) -> str:
    """Code of the department responsible for a phase."""
    return _read("getPhaseResponsibleDepartment", [int(phase)], dbtc_address)


def get_budget_proposal_contract(dbtc_address: Optional[str] = None) -> str:
    return _read("getBudgetProposalContract", None, dbtc_address)


def get_dbtc_owner(dbtc_address: Optional[str] = None) -> str:
    return _read("owner", None, dbtc_address)
