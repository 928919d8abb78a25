from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Mapping, Optional, TypeVar, Union

from .chain.events import decode_logs
from .chain.rpc import wait_for_receipt
from .errors import TransactionRevertedError
from .types import Amount, ProposalData, TransactionResult

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=TransactionResult)

ZERO_BYTES32 = b"\x00" * 32


def encode_bytes32(text: str) -> bytes:
    """UTF-8 encode and right-pad to 32 bytes, keeping a null terminator."""
    raw = text.encode("utf-8")
    if len(raw) > 31:
        raise ValueError("String too long for bytes32 (max 31 bytes)")
    return raw.ljust(32, b"\x00")


def string_to_bytes32(text: str) -> str:
    """
    Convert a string to a 0x-prefixed bytes32 hex string.

    Raises:
        ValueError: If the UTF-8 encoding is longer than 31 bytes
    """
    return "0x" + encode_bytes32(text).hex()


def bytes32_to_string(value: Union[str, bytes]) -> str:
    """
    Convert bytes32 (hex string or raw bytes) back to a string.

    Raises:
        ValueError: If the value is not 32 bytes or lacks a null terminator
    """
    if isinstance(value, str):
        value = bytes.fromhex(value[2:] if value.startswith("0x") else value)
    raw = bytes(value)
    if len(raw) != 32:
        raise ValueError("invalid bytes32 - not 32 bytes long")
    if raw[31] != 0:
        raise ValueError("invalid bytes32 string - no null terminator")
    return raw.rstrip(b"\x00").decode("utf-8")


def to_amount(value: Amount) -> int:
    """Coerce an amount (int, decimal or 0x string, integral float) to int."""
    if isinstance(value, bool):
        raise ValueError("Amount must be an integer, not a bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Amount must be an integer: {value}")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if text.lower().startswith("0x"):
            return int(text, 16)
        return int(text)
    raise ValueError(f"Unsupported amount type: {type(value).__name__}")


def prepare_proposal_data(data: Union[ProposalData, Mapping[str, Any]]) -> tuple:
    """
    Build the ProposalData struct for a contract call.

    Fiscal year, department code and agency code are left zero; the
    contract fills them in from its own state.

    Returns:
        (fiscalYear, departmentCode, agencyCode, prexcFpapId, uacsObjCode, amount)
    """
    if isinstance(data, Mapping):
        data = ProposalData(
            prexc_fpap_id=data["prexc_fpap_id"],
            uacs_obj_code=data["uacs_obj_code"],
            amount=data["amount"],
        )

    return (
        0,
        ZERO_BYTES32,
        ZERO_BYTES32,
        encode_bytes32(data.prexc_fpap_id),
        encode_bytes32(data.uacs_obj_code),
        to_amount(data.amount),
    )


def _hex_int(value: Any, default: int = 0) -> int:
    if value is None:
        return default
    if isinstance(value, int):
        return value
    return int(str(value), 16)


def wait_for_transaction(
    tx_hash: str,
    abi: Optional[list] = None,
    timeout: float = 120,
    poll_interval: float = 2.0,
) -> TransactionResult:
    """
    Wait for a transaction to be mined and summarize its receipt.

    Args:
        tx_hash: Transaction hash
        abi: Contract ABI used to decode the receipt's events
        timeout: Maximum wait time in seconds
        poll_interval: Polling interval in seconds

    Returns:
        TransactionResult with raw logs and decoded events

    Raises:
        TransactionTimeoutError: If no receipt within timeout
        TransactionRevertedError: If the receipt status is 0
    """
    receipt = wait_for_receipt(tx_hash, timeout=timeout, poll_interval=poll_interval)

    status = _hex_int(receipt.get("status"))
    if status != 1:
        logger.warning("Transaction reverted: tx=%s", tx_hash)
        raise TransactionRevertedError(tx_hash, receipt)

    logs = list(receipt.get("logs") or [])
    events: dict[str, dict[str, Any]] = {}
    if abi is not None:
        for event in decode_logs(abi, logs):
            events.setdefault(event.name, event.args)

    result = TransactionResult(
        tx_hash=receipt.get("transactionHash") or tx_hash,
        block_number=_hex_int(receipt.get("blockNumber")),
        gas_used=_hex_int(receipt.get("gasUsed")),
        success=True,
        events=events,
        logs=logs,
    )
    logger.info(
        "Transaction confirmed: tx=%s block=%d gasUsed=%d",
        result.tx_hash, result.block_number, result.gas_used,
    )
    return result


def extend_result(result: TransactionResult, cls: type[R], **extra: Any) -> R:
    """Copy a TransactionResult into a subclass carrying extracted values."""
    base = {f.name: getattr(result, f.name) for f in fields(TransactionResult)}
    return cls(**base, **extra)
