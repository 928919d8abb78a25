"""
Department contract - agency registry and Congress House/Senate wiring.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .chain.abi import department_abi
from .chain.events import find_event_arg
from .chain.rpc import read_contract
from .chain.tx import send_contract_tx
from .errors import ContractCallError
from .types import AgencyResult, DepartmentInfo, TransactionResult
from .utils import extend_result, wait_for_transaction

logger = logging.getLogger(__name__)


def _transact(
    department_address: str,
    function_name: str,
    args: list,
    private_key: Optional[str],
    gas_limit: Optional[int] = None,
) -> TransactionResult:
    sent = send_contract_tx(
        contract_address=department_address,
        function_name=function_name,
        args=args,
        abi=department_abi(),
        gas_limit=gas_limit,
        private_key=private_key,
        wait=False,
    )
    return wait_for_transaction(sent["tx_hash"], abi=department_abi())


def _read(department_address: str, function_name: str, args: Optional[list] = None) -> Any:
    value = read_contract(department_address, function_name, args or [], abi=department_abi())
    if value is None:
        raise ContractCallError(department_address, function_name)
    return value


# ============ Agency Management ============


def add_agency(
    department_address: str,
    agency_code: str,
    agency_name: str,
    owner_address: str,
    private_key: Optional[str] = None,
    gas_limit: Optional[int] = None,
) -> AgencyResult:
    """
    Add a new agency to a department.

    Args:
        department_address: Department contract address
        agency_code: Agency code (e.g., "002")
        agency_name: Agency name
        owner_address: Owner of the new agency
        private_key: Key of the department owner (main agency owner)
        gas_limit: Gas limit (default: estimate)

    Returns:
        AgencyResult with agency_address from the AgencyAdded event
    """
    result = _transact(
        department_address,
        "addAgency",
        [agency_code, agency_name, owner_address],
        private_key,
        gas_limit,
    )
    address = find_event_arg(
        department_abi(), result.logs, "AgencyAdded", "agencyContract", position=1
    )
    if not address:
        logger.warning("No AgencyAdded event in tx %s", result.tx_hash)
    return extend_result(result, AgencyResult, agency_address=address or "")


def set_house_and_senate(
    department_address: str,
    house_address: str,
    senate_address: str,
    private_key: Optional[str] = None,
    gas_limit: Optional[int] = None,
) -> TransactionResult:
    """Register the House and Senate agencies (Congress department only)."""
    return _transact(
        department_address,
        "setHouseAndSenate",
        [house_address, senate_address],
        private_key,
        gas_limit,
    )


# ============ Read Functions ============


def get_department_info(department_address: str) -> DepartmentInfo:
    return DepartmentInfo(
        address=department_address,
        code=_read(department_address, "getCode"),
        name=_read(department_address, "getName"),
        dbtc=_read(department_address, "getDBTC"),
        main_agency=_read(department_address, "getMainAgency"),
        is_standalone=bool(_read(department_address, "isStandalone")),
        is_actual_department=bool(_read(department_address, "getIsActualDepartment")),
        agency_count=int(_read(department_address, "getAgencyCount")),
    )


def get_agency(department_address: str, agency_code: str) -> str:
    """Agency contract address for a code (zero address if unknown)."""
    return _read(department_address, "getAgency", [agency_code])


def is_agency_registered(department_address: str, agency_code: str) -> bool:
    return bool(_read(department_address, "isAgencyRegistered", [agency_code]))


def get_agency_codes(department_address: str) -> list[str]:
    return list(_read(department_address, "getAgencyCodes"))


def get_main_agency(department_address: str) -> str:
    return _read(department_address, "getMainAgency")


def get_house_agency(department_address: str) -> str:
    """House of Representatives agency (Congress only)."""
    return _read(department_address, "getHouseAgency")


def get_senate_agency(department_address: str) -> str:
    """Senate agency (Congress only)."""
    return _read(department_address, "getSenateAgency")


def get_department_owner(department_address: str) -> str:
    return _read(department_address, "getDepartmentOwner")
