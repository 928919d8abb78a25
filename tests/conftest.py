"""Shared fixtures: SDK configuration and an in-memory JSON-RPC chain."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional
from unittest.mock import patch

import pytest
from eth_abi import encode
from eth_account import Account
from eth_utils import keccak

from dbtc_sdk import config
from dbtc_sdk.chain.abi import canonical_type, find_event, find_function, load_abi, output_types, signature
from dbtc_sdk.chain.events import event_topic

PRIVATE_KEY = "0x" + "11" * 32
SIGNER = Account.from_key(PRIVATE_KEY).address

TX_HASH = "0x" + "ab" * 32
DBTC_ADDRESS = "0x8972bc4dea1d2760E3f5b0a90675Dde15506aA8E"
DEPT_ADDRESS = "0x1111111111111111111111111111111111111111"
AGENCY_ADDRESS = "0x2222222222222222222222222222222222222222"
OWNER_ADDRESS = "0x3333333333333333333333333333333333333333"


def selector(contract_name: str, function_name: str) -> str:
    func = find_function(load_abi(contract_name), function_name)
    return "0x" + keccak(text=signature(func))[:4].hex()


def encode_result(contract_name: str, function_name: str, *values: Any) -> str:
    func = find_function(load_abi(contract_name), function_name)
    return "0x" + encode(output_types(func), list(values)).hex()


def make_log(
    contract_name: str,
    event_name: str,
    address: str,
    log_index: int = 0,
    **values: Any,
) -> dict[str, Any]:
    """Build a raw receipt log for an event declared in a bundled ABI."""
    entry = find_event(load_abi(contract_name), event_name)
    topics = [event_topic(entry)]
    data_types: list[str] = []
    data_values: list[Any] = []
    for param in entry["inputs"]:
        abi_type = canonical_type(param)
        if param.get("indexed"):
            topics.append("0x" + encode([abi_type], [values[param["name"]]]).hex())
        else:
            data_types.append(abi_type)
            data_values.append(values[param["name"]])
    return {
        "address": address,
        "topics": topics,
        "data": "0x" + encode(data_types, data_values).hex(),
        "logIndex": hex(log_index),
    }


class FakeChain:
    """Stands in for ``dbtc_sdk.chain.rpc._rpc_call``."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list]] = []
        self.call_results: dict[tuple[str, str], str] = {}
        self.sent: list[str] = []
        self.pending_polls = 0
        self.logs: list[dict[str, Any]] = []
        self.status = "0x1"
        self.errors: dict[str, Exception] = {}

    def on_call(self, contract_name: str, function_name: str, *values: Any, to: Optional[str] = None) -> None:
        key = ((to or "*").lower(), selector(contract_name, function_name))
        self.call_results[key] = encode_result(contract_name, function_name, *values)

    def methods(self) -> list[str]:
        return [method for method, _ in self.calls]

    def __call__(self, method: str, params: list, rpc_url: Optional[str] = None) -> Any:
        self.calls.append((method, params))
        if method in self.errors:
            raise self.errors[method]

        if method == "eth_call":
            to = params[0]["to"].lower()
            sel = params[0]["data"][:10]
            if (to, sel) in self.call_results:
                return self.call_results[(to, sel)]
            return self.call_results.get(("*", sel), "0x")
        if method == "eth_estimateGas":
            return hex(100_000)
        if method == "eth_gasPrice":
            return hex(30 * 10**9)
        if method == "eth_getTransactionCount":
            return "0x5"
        if method == "eth_chainId":
            return hex(80002)
        if method == "eth_sendRawTransaction":
            self.sent.append(params[0])
            return TX_HASH
        if method == "eth_getTransactionReceipt":
            if self.pending_polls:
                self.pending_polls -= 1
                return None
            return {
                "transactionHash": TX_HASH,
                "blockNumber": "0x10",
                "gasUsed": "0x5208",
                "status": self.status,
                "logs": self.logs,
            }
        raise AssertionError(f"unexpected RPC method {method}")


@pytest.fixture(autouse=True)
def clean_config(tmp_path: Path):
    """Isolate global SDK state and keep ~/.dbtc/.env out of tests."""
    addresses = dict(config.CONTRACT_ADDRESSES)
    config.reset_config()
    with patch("dbtc_sdk.config.DBTC_ENV", tmp_path / ".dbtc" / ".env"):
        yield
    config.reset_config()
    config.CONTRACT_ADDRESSES.clear()
    config.CONTRACT_ADDRESSES.update(addresses)


@pytest.fixture()
def configured() -> config.SDKConfig:
    return config.configure("testnet", "test-api-key", PRIVATE_KEY)


@pytest.fixture()
def chain(configured: config.SDKConfig):
    fake = FakeChain()
    with patch("dbtc_sdk.chain.rpc._rpc_call", fake):
        yield fake
