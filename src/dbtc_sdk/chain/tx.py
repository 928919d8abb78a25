"""
Transaction Builder - Build, sign, and send contract transactions.

Uses eth-account for signing and httpx-based JSON-RPC for sending.
Gas is paid by the signing EOA.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from eth_utils import to_checksum_address

from ..config import get_chain_id
from ..errors import InvalidArgumentError
from ..wallet import get_signer
from .abi import load_abi
from .rpc import (
    encode_function_call,
    estimate_gas,
    get_gas_price,
    get_nonce,
    send_raw_transaction,
    wait_for_receipt,
)

logger = logging.getLogger(__name__)

# Headroom applied on top of eth_estimateGas
GAS_MULTIPLIER = 1.2


def build_contract_tx(
    contract_address: str,
    function_name: str,
    args: list,
    contract_name: Optional[str] = None,
    abi: Optional[list] = None,
    value: int = 0,
    gas_limit: Optional[int] = None,
    private_key: Optional[str] = None,
) -> dict:
    """
    Build a contract call transaction (unsigned).

    Args:
        contract_address: 0x-prefixed contract address
        function_name: Function to call
        args: Function arguments
        contract_name: For ABI loading
        abi: Pre-loaded ABI
        value: Native value in wei (default: 0)
        gas_limit: Gas limit (default: estimate + 20%)
        private_key: Signer key, for nonce lookup and estimation

    Returns:
        Unsigned transaction dict
    """
    if abi is None:
        if contract_name is None:
            raise ValueError("Either abi or contract_name must be provided")
        abi = load_abi(contract_name)

    calldata = encode_function_call(abi, function_name, args)

    account = get_signer(private_key)
    try:
        to = to_checksum_address(contract_address)
    except ValueError as exc:
        raise InvalidArgumentError(f"Invalid contract address: {contract_address!r}") from exc

    if gas_limit is None:
        estimated = estimate_gas(
            {"from": account.address, "to": to, "data": calldata, "value": value}
        )
        gas_limit = int(estimated * GAS_MULTIPLIER)

    return {
        "to": to,
        "data": calldata,
        "value": value,
        "nonce": get_nonce(account.address),
        "gas": gas_limit,
        "gasPrice": get_gas_price(),
        "chainId": get_chain_id(),
    }


def sign_and_send(
    tx: dict,
    private_key: Optional[str] = None,
    wait: bool = True,
    timeout: float = 120,
) -> dict:
    """
    Sign a transaction and send it.

    Args:
        tx: Unsigned transaction dict
        private_key: 0x-prefixed hex private key
        wait: Whether to wait for receipt
        timeout: Receipt wait timeout

    Returns:
        Dict with tx_hash and optionally receipt/status
    """
    account = get_signer(private_key)
    signed = account.sign_transaction(tx)
    raw_tx = "0x" + bytes(signed.raw_transaction).hex()

    tx_hash = send_raw_transaction(raw_tx)
    logger.info("Sent tx %s from %s to %s", tx_hash, account.address, tx.get("to"))
    result: dict[str, Any] = {"tx_hash": tx_hash}

    if wait:
        receipt = wait_for_receipt(tx_hash, timeout=timeout)
        result["receipt"] = receipt
        result["status"] = int(receipt.get("status", "0x0"), 16)

    return result


def send_contract_tx(
    contract_address: str,
    function_name: str,
    args: list,
    contract_name: Optional[str] = None,
    abi: Optional[list] = None,
    value: int = 0,
    gas_limit: Optional[int] = None,
    private_key: Optional[str] = None,
    wait: bool = True,
    timeout: float = 120,
) -> dict:
    """
    Build, sign, and send a contract call transaction.

    Returns:
        Dict with tx_hash, and receipt/status when wait is True
    """
    tx = build_contract_tx(
        contract_address=contract_address,
        function_name=function_name,
        args=args,
        contract_name=contract_name,
        abi=abi,
        value=value,
        gas_limit=gas_limit,
        private_key=private_key,
    )
    logger.debug("%s.%s gas=%d", contract_address, function_name, tx["gas"])
    return sign_and_send(tx, private_key=private_key, wait=wait, timeout=timeout)
