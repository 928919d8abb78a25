"""
ABI Loader - Loads bundled contract interfaces.

Single source of truth: dbtc_sdk/abis/*.json (artifact form, ``{"abi": [...]}``).
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from eth_utils import to_checksum_address

ABI_DIR = Path(__file__).resolve().parent.parent / "abis"


@lru_cache(maxsize=16)
def load_abi(contract_name: str) -> list[dict[str, Any]]:
    """
    Load ABI for a bundled contract.

    Args:
        contract_name: Contract name ("DBTC", "Department", "Agency")

    Returns:
        ABI as a list of dicts

    Raises:
        FileNotFoundError: If no artifact is bundled under that name
    """
    abi_path = ABI_DIR / f"{contract_name}.json"
    if not abi_path.exists():
        raise FileNotFoundError(f"ABI not found: {abi_path}")

    with abi_path.open("r", encoding="utf-8") as f:
        artifact = json.load(f)

    return artifact["abi"]


def dbtc_abi() -> list[dict[str, Any]]:
    """Load DBTC registry ABI."""
    return load_abi("DBTC")


def department_abi() -> list[dict[str, Any]]:
    """Load Department ABI."""
    return load_abi("Department")


def agency_abi() -> list[dict[str, Any]]:
    """Load Agency ABI."""
    return load_abi("Agency")


def find_function(abi: list[dict[str, Any]], function_name: str) -> dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise ValueError(f"Function {function_name} not found in ABI")


def find_event(abi: list[dict[str, Any]], event_name: str) -> dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "event" and entry.get("name") == event_name:
            return entry
    raise ValueError(f"Event {event_name} not found in ABI")


def canonical_type(param: dict[str, Any]) -> str:
    """
    Canonical ABI type string for a parameter.

    Tuples are expanded from their components, keeping any array suffix:
    ``tuple[]`` with components (uint256, bytes32) becomes ``(uint256,bytes32)[]``.
    """
    abi_type = param["type"]
    if not abi_type.startswith("tuple"):
        return abi_type
    suffix = abi_type[len("tuple"):]
    inner = ",".join(canonical_type(c) for c in param.get("components", []))
    return f"({inner}){suffix}"


def input_types(entry: dict[str, Any]) -> list[str]:
    return [canonical_type(p) for p in entry.get("inputs", [])]


def output_types(entry: dict[str, Any]) -> list[str]:
    return [canonical_type(p) for p in entry.get("outputs", [])]


def signature(entry: dict[str, Any]) -> str:
    """Text signature, e.g. ``addAgency(string,string,address)``."""
    return f"{entry['name']}({','.join(input_types(entry))})"


def normalize_value(abi_type: str, value: Any) -> Any:
    """Checksum decoded addresses (eth-abi returns them lowercased)."""
    if abi_type == "address":
        return to_checksum_address(value)
    if abi_type.startswith("address[") and isinstance(value, (list, tuple)):
        inner = abi_type[: abi_type.rindex("[")]
        return [normalize_value(inner, v) for v in value]
    if abi_type.endswith("]") and isinstance(value, tuple):
        return list(value)
    return value
