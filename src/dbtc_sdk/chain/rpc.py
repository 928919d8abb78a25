"""
JSON-RPC Client for the DBTC network.

Lightweight alternative to web3.py: uses httpx for HTTP + eth-abi for encoding.
Supports read-only contract calls, gas/nonce queries, raw transaction
submission and transaction receipt polling.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import httpx
from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import keccak

from ..config import get_rpc_url
from ..errors import ContractCallError, InvalidArgumentError, RpcError, TransactionTimeoutError
from .abi import find_function, input_types, load_abi, normalize_value, output_types, signature

logger = logging.getLogger(__name__)

RPC_TIMEOUT = 30.0


def _rpc_call(method: str, params: list, rpc_url: Optional[str] = None) -> Any:
    """
    Make a JSON-RPC call.

    Args:
        method: RPC method name (e.g., "eth_call")
        params: RPC parameters
        rpc_url: RPC endpoint URL (default: configured network)

    Returns:
        Result field from the RPC response

    Raises:
        RpcError: On HTTP failure or an error response
    """
    url = rpc_url or get_rpc_url()
    payload = {
        "jsonrpc": "2.0",
        "method": method,
        "params": params,
        "id": 1,
    }

    logger.debug("RPC %s", method)
    try:
        with httpx.Client(timeout=RPC_TIMEOUT) as client:
            response = client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPError as exc:
        raise RpcError(f"RPC transport error calling {method}: {exc}") from exc

    if "error" in data:
        error = data["error"] or {}
        if isinstance(error, dict):
            raise RpcError(
                f"RPC error: {error.get('message', error)}",
                code=error.get("code"),
                data=error.get("data"),
            )
        raise RpcError(f"RPC error: {error}")

    return data.get("result")


def encode_function_call(abi: list, function_name: str, args: list) -> str:
    """
    ABI-encode a function call.

    Returns:
        0x-prefixed hex encoded calldata (4-byte selector + arguments)

    Raises:
        ValueError: On an argument count mismatch
        InvalidArgumentError: If an argument cannot be encoded (e.g. a bad address)
    """
    func = find_function(abi, function_name)
    types = input_types(func)
    if len(args) != len(types):
        raise ValueError(
            f"{function_name} expects {len(types)} arguments, got {len(args)}"
        )

    selector = keccak(text=signature(func))[:4]
    try:
        encoded_args = encode(types, list(args)) if types else b""
    except EncodingError as exc:
        raise InvalidArgumentError(f"Invalid arguments for {function_name}: {exc}") from exc
    return "0x" + selector.hex() + encoded_args.hex()


def decode_function_result(abi: list, function_name: str, data: str) -> Any:
    """
    ABI-decode a function call result.

    Returns:
        Decoded result (single value or tuple), with addresses checksummed
    """
    func = find_function(abi, function_name)
    types = output_types(func)
    if not types:
        return None

    raw = bytes.fromhex(data[2:] if data.startswith("0x") else data)
    decoded = decode(types, raw)
    values = tuple(normalize_value(t, v) for t, v in zip(types, decoded))

    if len(values) == 1:
        return values[0]
    return values


def read_contract(
    contract_address: str,
    function_name: str,
    args: Optional[list] = None,
    contract_name: Optional[str] = None,
    abi: Optional[list] = None,
    rpc_url: Optional[str] = None,
) -> Any:
    """
    Read from a smart contract (eth_call).

    Args:
        contract_address: 0x-prefixed contract address
        function_name: Function to call
        args: Function arguments (default: [])
        contract_name: Name of bundled ABI (e.g., "Department")
        abi: Pre-loaded ABI (if not using contract_name)
        rpc_url: RPC endpoint URL

    Returns:
        Decoded return value(s), or None for empty return data

    Raises:
        ContractCallError: If the return data does not decode
    """
    if abi is None:
        if contract_name is None:
            raise ValueError("Either abi or contract_name must be provided")
        abi = load_abi(contract_name)

    calldata = encode_function_call(abi, function_name, args or [])

    result = _rpc_call(
        "eth_call",
        [{"to": contract_address, "data": calldata}, "latest"],
        rpc_url=rpc_url,
    )

    if result is None or result == "0x":
        return None

    try:
        return decode_function_result(abi, function_name, result)
    except DecodingError as exc:
        raise ContractCallError(
            contract_address, function_name, detail="returned undecodable data"
        ) from exc


def get_balance(address: str, rpc_url: Optional[str] = None) -> int:
    """Native balance (wei) for an address."""
    result = _rpc_call("eth_getBalance", [address, "latest"], rpc_url=rpc_url)
    return int(result, 16)


def get_nonce(address: str, rpc_url: Optional[str] = None) -> int:
    """Next nonce for an address, counting pending transactions."""
    result = _rpc_call("eth_getTransactionCount", [address, "pending"], rpc_url=rpc_url)
    return int(result, 16)


def get_gas_price(rpc_url: Optional[str] = None) -> int:
    result = _rpc_call("eth_gasPrice", [], rpc_url=rpc_url)
    return int(result, 16)


def get_remote_chain_id(rpc_url: Optional[str] = None) -> int:
    """Chain ID reported by the RPC endpoint."""
    result = _rpc_call("eth_chainId", [], rpc_url=rpc_url)
    return int(result, 16)


def estimate_gas(tx: dict, rpc_url: Optional[str] = None) -> int:
    """
    Estimate gas for a call.

    A revert during estimation surfaces here as an RpcError carrying the
    node's revert message.
    """
    call = {k: v for k, v in tx.items() if k in ("from", "to", "data")}
    if tx.get("value"):
        call["value"] = hex(tx["value"])
    result = _rpc_call("eth_estimateGas", [call], rpc_url=rpc_url)
    return int(result, 16)


def send_raw_transaction(raw_tx: str, rpc_url: Optional[str] = None) -> str:
    """
    Send a signed raw transaction.

    Returns:
        Transaction hash (0x-prefixed hex)
    """
    return _rpc_call("eth_sendRawTransaction", [raw_tx], rpc_url=rpc_url)


def get_transaction_receipt(tx_hash: str, rpc_url: Optional[str] = None) -> Optional[dict]:
    return _rpc_call("eth_getTransactionReceipt", [tx_hash], rpc_url=rpc_url)


def wait_for_receipt(
    tx_hash: str,
    timeout: float = 120,
    poll_interval: float = 2.0,
    rpc_url: Optional[str] = None,
) -> dict:
    """
    Wait for a transaction receipt.

    Args:
        tx_hash: Transaction hash
        timeout: Maximum wait time in seconds
        poll_interval: Polling interval in seconds
        rpc_url: RPC endpoint URL

    Returns:
        Transaction receipt dict

    Raises:
        TransactionTimeoutError: If receipt not found within timeout
    """
    start = time.monotonic()
    while time.monotonic() - start < timeout:
        receipt = get_transaction_receipt(tx_hash, rpc_url=rpc_url)
        if receipt is not None:
            return receipt
        time.sleep(poll_interval)

    raise TransactionTimeoutError(tx_hash, timeout)
