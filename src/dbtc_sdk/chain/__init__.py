"""
On-chain interaction layer.

Provides JSON-RPC client, bundled ABI management, transaction utilities
and receipt log decoding for the DBTC contracts.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""
