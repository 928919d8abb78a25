from __future__ import annotations

from typing import Any, Optional


class SDKError(RuntimeError):
    """Base class for SDK failures; ``exit_code`` is what the CLI exits with."""

    exit_code: int = 1


class ConfigError(SDKError):
    """Missing or invalid SDK settings, signer key or contract address."""

    exit_code = 2


class InvalidArgumentError(SDKError, ValueError):
    """An address or call argument cannot be encoded for the contract."""

    exit_code = 7


class RpcError(SDKError):
    """JSON-RPC transport failure or an ``error`` member in the response."""

    exit_code = 3

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Any = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.data = data


class ContractCallError(SDKError):
    """eth_call returned no data or undecodable data, usually because nothing is deployed there."""

    exit_code = 6

    def __init__(
        self,
        contract_address: str,
        function_name: str,
        detail: str = "returned no data",
    ) -> None:
        super().__init__(
            f"{function_name}() {detail} from {contract_address}. "
            f"Is the address a deployed contract on this network?"
        )
        self.contract_address = contract_address
        self.function_name = function_name


class TransactionRevertedError(SDKError):
    """The receipt reports status 0."""

    exit_code = 4

    def __init__(self, tx_hash: str, receipt: Optional[dict] = None) -> None:
        super().__init__(f"Transaction {tx_hash} reverted")
        self.tx_hash = tx_hash
        self.receipt = receipt or {}


class TransactionTimeoutError(SDKError):
    """No receipt arrived within the timeout."""

    exit_code = 5

    def __init__(self, tx_hash: str, timeout: float) -> None:
        super().__init__(f"Transaction {tx_hash} not confirmed within {timeout}s")
        self.tx_hash = tx_hash
        self.timeout = timeout


__all__ = [
    "SDKError",
    "ConfigError",
    "InvalidArgumentError",
    "RpcError",
    "ContractCallError",
    "TransactionRevertedError",
    "TransactionTimeoutError",
]
