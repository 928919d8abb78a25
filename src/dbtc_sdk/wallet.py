"""
ECDSA / secp256k1 signer management.

The signing key is resolved per call: an explicit ``private_key`` argument
wins, otherwise the key from the SDK configuration (PRIVATE_KEY) is used.

Dependencies: eth-account (no full web3.py needed)
"""

from __future__ import annotations

import secrets
from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount

from .config import get_config
from .errors import ConfigError


def generate_eoa() -> tuple[str, str]:
    """
    Generate a new ECDSA/secp256k1 keypair (EOA).

    Returns:
        Tuple of (private_key_hex, address)
    """
    private_key = "0x" + secrets.token_hex(32)
    account = Account.from_key(private_key)
    return private_key, account.address


def _normalize_key(private_key: str) -> str:
    private_key = private_key.strip()
    if not private_key.startswith("0x"):
        private_key = "0x" + private_key
    return private_key


def resolve_private_key(private_key: Optional[str] = None) -> str:
    """
    Pick the signing key: explicit argument first, then the configured key.

    Raises:
        ConfigError: If no key is available
    """
    key = private_key or get_config().private_key
    if not key:
        raise ConfigError(
            "No private key provided. Pass private_key, configure the SDK with "
            "private_key, or set the PRIVATE_KEY environment variable."
        )
    return _normalize_key(key)


def get_signer(private_key: Optional[str] = None) -> LocalAccount:
    """
    Get an eth-account LocalAccount for signing transactions.

    Args:
        private_key: 0x-prefixed hex private key.
                     If None, uses the configured key.

    Raises:
        ConfigError: If no key is available or the key is malformed
    """
    key = resolve_private_key(private_key)
    try:
        return Account.from_key(key)
    except Exception as exc:
        raise ConfigError(f"Invalid private key: {exc}") from exc


def get_address(private_key: Optional[str] = None) -> str:
    """Checksummed address for a private key (default: the configured key)."""
    return get_signer(private_key).address
