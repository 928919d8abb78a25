"""
SDK configuration - chain mode, API key, network table and address book.

Configuration is process-wide. Call ``configure()`` once, or let
``get_config()`` pick it up from the environment:

    DBTC_CHAIN_MODE=testnet|mainnet
    DBTC_API_KEY=your-api-key
    PRIVATE_KEY=your-wallet-private-key (optional)

Values in ~/.dbtc/.env are loaded into the environment first.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv

from .errors import ConfigError

logger = logging.getLogger(__name__)

ChainMode = Literal["testnet", "mainnet"]
CHAIN_MODES: tuple[str, ...] = ("testnet", "mainnet")

# Default config directory
DBTC_DIR = Path.home() / ".dbtc"
DBTC_ENV = DBTC_DIR / ".env"


@dataclass(frozen=True)
class NetworkConfig:
    rpc_url: str
    chain_id: int
    chain_name: str


NETWORKS: dict[str, NetworkConfig] = {
    "testnet": NetworkConfig(
        rpc_url="https://amoy.dbtc.bayanichain.io",
        chain_id=80002,  # Polygon Amoy
        chain_name="Polygon Amoy",
    ),
    "mainnet": NetworkConfig(
        rpc_url="https://polygon.dbtc.bayanichain.io",
        chain_id=137,  # Polygon PoS
        chain_name="Polygon",
    ),
}


@dataclass(frozen=True)
class ContractAddresses:
    dbtc: str = ""
    budget_proposal: str = ""


# Bundled addresses (managed by the DBTC team). Mainnet is not deployed yet.
CONTRACT_ADDRESSES: dict[str, ContractAddresses] = {
    "testnet": ContractAddresses(
        dbtc="0x8972bc4dea1d2760E3f5b0a90675Dde15506aA8E",
        budget_proposal="0xf73aB0E2069029c881EFB825f74aC602472d3ace",
    ),
    "mainnet": ContractAddresses(),
}


@dataclass(frozen=True)
class SDKConfig:
    """
    SDK configuration.

    Attributes:
        chain_mode: "testnet" or "mainnet"
        api_key: API key issued by DBTC, appended to the RPC URL
        private_key: Default signing key (optional)
    """
    chain_mode: str
    api_key: str
    private_key: Optional[str] = None

    def __repr__(self) -> str:
        masked = "***" if self.private_key else None
        return (
            f"SDKConfig(chain_mode={self.chain_mode!r}, "
            f"api_key={self.api_key[:4] + '...'!r}, private_key={masked!r})"
        )


_config: Optional[SDKConfig] = None


def configure(
    chain_mode: str,
    api_key: str,
    private_key: Optional[str] = None,
) -> SDKConfig:
    """
    Configure the SDK.

    Args:
        chain_mode: "testnet" or "mainnet"
        api_key: API key provided by DBTC
        private_key: Default private key for transactions

    Returns:
        The stored configuration

    Raises:
        ConfigError: If chain_mode is unknown or api_key is empty
    """
    global _config

    if chain_mode not in CHAIN_MODES:
        raise ConfigError("chain_mode must be 'testnet' or 'mainnet'")
    if not api_key:
        raise ConfigError("api_key is required. Contact DBTC to obtain your API key.")

    _config = SDKConfig(
        chain_mode=chain_mode,
        api_key=api_key,
        private_key=private_key or None,
    )
    logger.debug("Configured SDK for %s", chain_mode)
    return _config


def reset_config() -> None:
    """Forget the current configuration."""
    global _config
    _config = None


def get_config() -> SDKConfig:
    """
    Get the current SDK configuration.

    Falls back to DBTC_CHAIN_MODE / DBTC_API_KEY / PRIVATE_KEY from the
    environment (after loading ~/.dbtc/.env) when configure() was not called.

    Raises:
        ConfigError: If the SDK is neither configured nor configurable from env
    """
    if _config is not None:
        return _config

    if DBTC_ENV.exists():
        load_dotenv(DBTC_ENV, override=False)

    chain_mode = os.environ.get("DBTC_CHAIN_MODE")
    api_key = os.environ.get("DBTC_API_KEY")
    if chain_mode and api_key:
        return configure(chain_mode, api_key, os.environ.get("PRIVATE_KEY"))

    raise ConfigError(
        "SDK not configured. Call configure() first or set environment variables:\n"
        "  DBTC_CHAIN_MODE=testnet|mainnet\n"
        "  DBTC_API_KEY=your-api-key\n"
        "  PRIVATE_KEY=your-wallet-private-key (optional)"
    )


def get_network_config() -> NetworkConfig:
    """Network parameters for the configured chain mode."""
    return NETWORKS[get_config().chain_mode]


def get_rpc_url() -> str:
    """RPC endpoint for the configured chain mode, with the API key attached."""
    config = get_config()
    return f"{NETWORKS[config.chain_mode].rpc_url}?apiKey={config.api_key}"


def get_chain_id() -> int:
    return get_network_config().chain_id


def get_contract_addresses() -> ContractAddresses:
    return CONTRACT_ADDRESSES[get_config().chain_mode]


def set_contract_addresses(
    dbtc: Optional[str] = None,
    budget_proposal: Optional[str] = None,
    chain_mode: Optional[str] = None,
) -> ContractAddresses:
    """
    Override bundled contract addresses (for custom deployments).

    Empty values leave the existing entry untouched.

    Args:
        dbtc: DBTC registry address
        budget_proposal: BudgetProposal contract address
        chain_mode: Address book to update (default: current chain mode)

    Returns:
        The updated address book entry
    """
    mode = chain_mode or get_config().chain_mode
    if mode not in CHAIN_MODES:
        raise ConfigError("chain_mode must be 'testnet' or 'mainnet'")

    current = CONTRACT_ADDRESSES[mode]
    if dbtc:
        current = replace(current, dbtc=dbtc)
    if budget_proposal:
        current = replace(current, budget_proposal=budget_proposal)
    CONTRACT_ADDRESSES[mode] = current
    return current


def get_chain_mode() -> str:
    return get_config().chain_mode


def is_testnet() -> bool:
    return get_config().chain_mode == "testnet"


def is_mainnet() -> bool:
    return get_config().chain_mode == "mainnet"


def save_env_value(key: str, value: str, env_path: Optional[Path] = None) -> Path:
    """Save a single key=value to ~/.dbtc/.env (preserving other entries)."""
    env_path = env_path or DBTC_ENV
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        for line in env_path.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if stripped and not stripped.startswith("#") and "=" in stripped:
                k, v = stripped.split("=", 1)
                existing[k.strip()] = v.strip()

    existing[key] = value
    lines = [f"{k}={v}" for k, v in existing.items()]
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    # The file may hold a private key
    if os.name != "nt":
        env_path.chmod(0o600)

    os.environ[key] = value
    return env_path
