"""
Canonical cross-chain message hash.

This is the digest every signer layer (via / chain / project) signs over.
Byte layout, in order:

    tx_id            u64 LE (low 64 bits of the u128 id)
    source_chain_id  raw chain-id bytes
    dest_chain_id    raw chain-id bytes
    len(sender)      u8
    sender
    len(recipient)   u8
    recipient
    len(data)        u16 LE
    data

hashed with Keccak-256.

The program itself checks relayer signatures against a second layout,
``create_cross_chain_hash``:

    tx_id            u128 LE
    source_chain_id  u64 LE
    dest_chain_id    u64 LE
    sender           u32 LE length + bytes (max 64)
    recipient        u32 LE length + bytes (max 64)
    on_chain_data    u32 LE length + bytes (max 1024)
    off_chain_data   u32 LE length + bytes (max 1024)
"""

from __future__ import annotations

import hmac
import logging
from typing import Optional, Union

from Crypto.Hash import keccak
from construct import Int8ul, Int16ul, Int32ul, Int64ul

from .config import settings
from .cursor import U128
from .errors import HashInputError
from .formatting import address_bytes

logger = logging.getLogger(__name__)

U64_MASK = 0xFFFF_FFFF_FFFF_FFFF
U128_MASK = (1 << 128) - 1
DIGEST_SIZE = 32

MAX_SENDER_SIZE = 64
MAX_RECIPIENT_SIZE = 64
MAX_ON_CHAIN_DATA_SIZE = 1024
MAX_OFF_CHAIN_DATA_SIZE = 1024


def chain_id_bytes(label: Union[str, bytes], size: Optional[int] = None) -> bytes:
    """Zero-pad a chain label (e.g. ``"ethereum-1"``) to a fixed byte width."""
    size = settings.chain_id_width if size is None else size
    raw = label.encode("utf-8") if isinstance(label, str) else bytes(label)
    if len(raw) > size:
        raise HashInputError(f"Chain id {label!r} is longer than {size} bytes")
    return raw + bytes(size - len(raw))


def _prefixed(fmt, limit: int, name: str, value: bytes) -> bytes:
    if len(value) > limit:
        raise HashInputError(f"{name} is {len(value)} bytes, prefix allows at most {limit}")
    return fmt.build(len(value)) + value


def encode_message(
    tx_id: int,
    source_chain_id: bytes,
    dest_chain_id: bytes,
    sender: bytes,
    recipient: bytes,
    data: bytes,
) -> bytes:
    """Pre-image of the message hash."""
    if tx_id < 0:
        raise HashInputError("tx_id must be non-negative")
    return b"".join(
        [
            Int64ul.build(tx_id & U64_MASK),
            bytes(source_chain_id),
            bytes(dest_chain_id),
            _prefixed(Int8ul, 0xFF, "sender", bytes(sender)),
            _prefixed(Int8ul, 0xFF, "recipient", bytes(recipient)),
            _prefixed(Int16ul, 0xFFFF, "data", bytes(data)),
        ]
    )


def create_message_hash(
    tx_id: int,
    source_chain_id: bytes,
    dest_chain_id: bytes,
    sender: bytes,
    recipient: bytes,
    data: bytes,
) -> bytes:
    encoded = encode_message(tx_id, source_chain_id, dest_chain_id, sender, recipient, data)
    digest = keccak.new(digest_bits=256)
    digest.update(encoded)
    result = digest.digest()
    logger.debug(f"[HASH] tx_id={tx_id} len={len(encoded)} hash={result.hex()}")
    return result


def message_hash_hex(*args, **kwargs) -> str:
    return create_message_hash(*args, **kwargs).hex()


def validate_message_hash(digest: bytes) -> bool:
    """A usable digest is 32 bytes and not all zeros."""
    return len(digest) == DIGEST_SIZE and any(digest)


def verify_message_hash(
    expected: bytes,
    tx_id: int,
    source_chain_id: bytes,
    dest_chain_id: bytes,
    sender: bytes,
    recipient: bytes,
    data: bytes,
) -> bool:
    if not validate_message_hash(expected):
        return False
    actual = create_message_hash(tx_id, source_chain_id, dest_chain_id, sender, recipient, data)
    return hmac.compare_digest(actual, bytes(expected))


def _limited(name: str, value: bytes, limit: int) -> bytes:
    if len(value) > limit:
        raise HashInputError(f"{name} is {len(value)} bytes, at most {limit} allowed")
    return Int32ul.build(len(value)) + value


def encode_cross_chain_message(
    tx_id: int,
    source_chain_id: int,
    dest_chain_id: int,
    sender: bytes,
    recipient: bytes,
    on_chain_data: bytes,
    off_chain_data: bytes,
) -> bytes:
    """Pre-image of the hash the program verifies relayer signatures against."""
    if not 0 <= tx_id <= U128_MASK:
        raise HashInputError("tx_id must fit in an unsigned 128-bit integer")
    for name, chain_id in (("source_chain_id", source_chain_id), ("dest_chain_id", dest_chain_id)):
        if not 0 <= chain_id <= U64_MASK:
            raise HashInputError(f"{name} must fit in an unsigned 64-bit integer")
    return b"".join(
        [
            U128.build(tx_id),
            Int64ul.build(source_chain_id),
            Int64ul.build(dest_chain_id),
            _limited("sender", bytes(sender), MAX_SENDER_SIZE),
            _limited("recipient", bytes(recipient), MAX_RECIPIENT_SIZE),
            _limited("on_chain_data", bytes(on_chain_data), MAX_ON_CHAIN_DATA_SIZE),
            _limited("off_chain_data", bytes(off_chain_data), MAX_OFF_CHAIN_DATA_SIZE),
        ]
    )


def create_cross_chain_hash(
    tx_id: int,
    source_chain_id: int,
    dest_chain_id: int,
    sender: bytes,
    recipient: bytes,
    on_chain_data: bytes,
    off_chain_data: bytes,
) -> bytes:
    encoded = encode_cross_chain_message(
        tx_id, source_chain_id, dest_chain_id, sender, recipient, on_chain_data, off_chain_data
    )
    digest = keccak.new(digest_bits=256)
    digest.update(encoded)
    result = digest.digest()
    logger.debug(
        f"[HASH] cross-chain tx_id={tx_id} source={source_chain_id} dest={dest_chain_id} hash={result.hex()}"
    )
    return result


def hash_decoded_message(record) -> bytes:
    """
    Re-hash a decoded ``create_tx_pda`` / ``process_message`` record with
    ``create_cross_chain_hash``, i.e. the digest its signatures cover.
    """
    return create_cross_chain_hash(
        int(record.tx_id),
        int(record.source_chain_id),
        int(record.dest_chain_id),
        address_bytes(record.sender, record.sender_length),
        address_bytes(record.recipient, record.recipient_length),
        bytes.fromhex(record.on_chain_data_hex),
        bytes.fromhex(record.off_chain_data_hex),
    )
