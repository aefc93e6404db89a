"""
Rendering helpers: addresses, chain names, registry types, raw byte fields.
"""

from __future__ import annotations

from typing import Union

from solders.pubkey import Pubkey

from .cursor import PUBKEY_SIZE

CHAIN_NAMES = {
    1: "Solana Testnet",
    2: "Ethereum",
    3: "Polygon",
    4: "BSC",
    5: "Avalanche",
}

REGISTRY_TYPES = {
    0: "VIA",
    1: "Chain",
    2: "Project",
}


def base58_pubkey(raw: bytes) -> str:
    return str(Pubkey.from_bytes(bytes(raw)))


def format_address(raw: bytes) -> str:
    """
    32 bytes is a native key and renders as base58; anything else is a
    foreign-chain address and renders as lowercase hex.
    """
    if len(raw) == PUBKEY_SIZE:
        return base58_pubkey(raw)
    return bytes(raw).hex()


def address_bytes(rendered: str, length: int) -> bytes:
    """Inverse of ``format_address`` given the retained raw length."""
    if length == PUBKEY_SIZE:
        return bytes(Pubkey.from_string(rendered))
    return bytes.fromhex(rendered)


def chain_name(chain_id: Union[int, str]) -> str:
    try:
        key = int(chain_id)
    except (TypeError, ValueError):
        return f"Chain {chain_id}"
    return CHAIN_NAMES.get(key, f"Chain {chain_id}")


def registry_type_label(value: int) -> str:
    return REGISTRY_TYPES.get(value, f"Unknown({value})")


def utf8_text(raw: bytes) -> str:
    return bytes(raw).decode("utf-8", errors="replace")
