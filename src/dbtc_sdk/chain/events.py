"""
Receipt log decoding.

Contract writes report what they created (a department contract, an agency
contract, a proposal token) through events. These helpers decode raw
receipt logs against a contract ABI and pull out the emitted values.

A receipt usually carries logs from several events and sometimes from
other contracts, so logs that do not decode under the requested event are
skipped rather than treated as errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_utils import keccak

from .abi import canonical_type, find_event as find_event_abi, normalize_value, signature

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedEvent:
    """
    A log decoded under a known event.

    Attributes:
        name: Event name
        args: Arguments by name
        values: Arguments in declaration order
        address: Emitting contract
        log_index: Position of the log in the block
    """
    name: str
    args: dict[str, Any] = field(default_factory=dict)
    values: tuple = ()
    address: Optional[str] = None
    log_index: Optional[int] = None


def event_signature(entry: dict[str, Any]) -> str:
    """``DepartmentAdded(string,address,string,bool)``"""
    return signature(entry)


def event_topic(entry: dict[str, Any]) -> str:
    """topic0 of an event: 0x-prefixed keccak256 of its signature."""
    return "0x" + keccak(text=event_signature(entry)).hex()


def _is_dynamic(abi_type: str) -> bool:
    # Indexed dynamic values are stored as their keccak hash
    return (
        abi_type in ("string", "bytes")
        or abi_type.endswith("]")
        or abi_type.startswith("(")
    )


def _hex_to_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    text = str(value)
    return bytes.fromhex(text[2:] if text.startswith("0x") else text)


def _parse_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    return int(str(value), 16)


def _decode_with(entry: dict[str, Any], log: dict[str, Any]) -> DecodedEvent:
    topics = list(log.get("topics") or [])
    inputs = entry.get("inputs", [])
    indexed = [p for p in inputs if p.get("indexed")]

    if len(topics) - 1 != len(indexed):
        raise ValueError(
            f"{entry['name']}: expected {len(indexed)} indexed topics, "
            f"got {len(topics) - 1}"
        )

    data_params = [p for p in inputs if not p.get("indexed")]
    data_types = [canonical_type(p) for p in data_params]
    data_values = decode(data_types, _hex_to_bytes(log.get("data") or "0x")) if data_types else ()

    topic_iter = iter(topics[1:])
    data_iter = iter(data_values)
    args: dict[str, Any] = {}
    values: list[Any] = []

    for param in inputs:
        abi_type = canonical_type(param)
        if param.get("indexed"):
            raw = _hex_to_bytes(next(topic_iter))
            if _is_dynamic(abi_type):
                value: Any = "0x" + raw.hex()
            else:
                value = normalize_value(abi_type, decode([abi_type], raw)[0])
        else:
            value = normalize_value(abi_type, next(data_iter))
        values.append(value)
        if param.get("name"):
            args[param["name"]] = value

    return DecodedEvent(
        name=entry["name"],
        args=args,
        values=tuple(values),
        address=log.get("address"),
        log_index=_parse_int(log.get("logIndex")),
    )


def decode_log(abi: list[dict[str, Any]], log: dict[str, Any]) -> Optional[DecodedEvent]:
    """
    Decode one receipt log against every event in an ABI.

    Returns:
        The decoded event, or None if topic0 matches no event in the ABI

    Raises:
        DecodingError / ValueError: If topic0 matches but the payload is malformed
    """
    topics = log.get("topics") or []
    if not topics:
        return None

    topic0 = str(topics[0]).lower()
    for entry in abi:
        if entry.get("type") != "event" or entry.get("anonymous"):
            continue
        if event_topic(entry) == topic0:
            return _decode_with(entry, log)
    return None


def decode_logs(abi: list[dict[str, Any]], logs: Iterable[dict[str, Any]]) -> list[DecodedEvent]:
    """Decode every log that belongs to the ABI, skipping the rest."""
    decoded: list[DecodedEvent] = []
    for log in logs:
        try:
            event = decode_log(abi, log)
        except (DecodingError, ValueError) as exc:
            logger.debug("Skipping undecodable log %s: %s", log.get("logIndex"), exc)
            continue
        if event is not None:
            decoded.append(event)
    return decoded


def find_event(
    abi: list[dict[str, Any]],
    logs: Iterable[dict[str, Any]],
    event_name: str,
    address: Optional[str] = None,
) -> Optional[DecodedEvent]:
    """
    First log that decodes under ``event_name``.

    Args:
        abi: Contract ABI declaring the event
        logs: Receipt logs, in order
        event_name: Event to look for
        address: Only consider logs emitted by this contract

    Returns:
        The decoded event, or None if no log matches
    """
    entry = find_event_abi(abi, event_name)
    topic = event_topic(entry)

    for log in logs:
        topics = log.get("topics") or []
        if not topics or str(topics[0]).lower() != topic:
            continue
        if address and str(log.get("address", "")).lower() != address.lower():
            continue
        try:
            return _decode_with(entry, log)
        except (DecodingError, ValueError) as exc:
            logger.debug("Log %s is not a valid %s: %s", log.get("logIndex"), event_name, exc)
    return None


def find_event_arg(
    abi: list[dict[str, Any]],
    logs: Iterable[dict[str, Any]],
    event_name: str,
    arg_name: str,
    position: Optional[int] = None,
) -> Any:
    """
    Extract one argument of the first matching event.

    Falls back to the positional argument when the named one is missing
    or empty. Returns None if the event is not in the logs.
    """
    event = find_event(abi, logs, event_name)
    if event is None:
        return None

    value = event.args.get(arg_name)
    if value in (None, "") and position is not None and position < len(event.values):
        value = event.values[position]
    return value
