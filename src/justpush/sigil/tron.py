"""
secp256k1 Key Management for TRON.

TRON accounts use the same secp256k1 keys as Ethereum. The 20-byte
account hash is identical; TRON prefixes it with 0x41 and shows it to
users in base58check form (``T...``).

Keys are read from the PRIVATE_KEY environment variable (hex format).
A ``.env`` file in the working directory is loaded by the CLI.

Dependencies: eth-account (signing and address derivation)
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..errors import ConfigError
from ..utils import base58check_decode, base58check_encode

ADDRESS_PREFIX = 0x41


def load_private_key(env: Optional[Mapping[str, str]] = None) -> str:
    """
    Load the signing key from the environment.

    Args:
        env: Environment mapping (default: os.environ)

    Returns:
        0x-prefixed hex private key

    Raises:
        ConfigError: If PRIVATE_KEY is absent or empty
    """
    env = os.environ if env is None else env
    private_key = env.get("PRIVATE_KEY")
    if not private_key:
        raise ConfigError("PRIVATE_KEY is not defined")

    if not private_key.startswith("0x"):
        private_key = "0x" + private_key

    return private_key


def get_account(private_key: str) -> LocalAccount:
    return Account.from_key(private_key)


def get_address(private_key: str) -> str:
    """Return the base58 TRON address for a private key."""
    return to_base58_address(get_account(private_key).address)


def _address_bytes(address: str) -> bytes:
    """Normalize any accepted address form to the 21-byte 0x41-prefixed value."""
    if address.startswith("T"):
        raw = base58check_decode(address)
    else:
        raw = bytes.fromhex(address[2:] if address.startswith("0x") else address)
        if len(raw) == 20:
            raw = bytes([ADDRESS_PREFIX]) + raw

    if len(raw) != 21 or raw[0] != ADDRESS_PREFIX:
        raise ValueError(f"Not a TRON address: {address}")
    return raw


def to_base58_address(address: str) -> str:
    """Convert a hex (41... or 0x...) or base58 address to base58 form."""
    return base58check_encode(_address_bytes(address))


def to_hex_address(address: str) -> str:
    """Convert an address to the 41-prefixed hex form the HTTP API expects."""
    return _address_bytes(address).hex()


def to_evm_address(address: str) -> str:
    """Convert an address to the 0x-prefixed 20-byte form used in ABI encoding."""
    return "0x" + _address_bytes(address)[1:].hex()


def sign_txid(txid: str, private_key: str) -> str:
    """
    Sign a transaction id (sha256 of raw_data).

    Args:
        txid: Hex transaction id
        private_key: 0x-prefixed hex private key

    Returns:
        Hex signature, 65 bytes (r + s + recovery id)
    """
    account = get_account(private_key)
    signed = account.unsafe_sign_hash(bytes.fromhex(txid))
    signature = bytes(signed.signature)
    # eth-account reports v as 27/28; the node expects the bare recovery id.
    return (signature[:64] + bytes([signature[64] - 27])).hex()
