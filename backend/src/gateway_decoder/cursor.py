"""
Primitive cursor readers over a byte buffer.

Every reader takes ``(buffer, offset)`` and returns ``(value, next_offset)``.
Nothing is mutated; a read that would run past the end raises ``OutOfBounds``
before any slicing happens.
"""

from __future__ import annotations

from typing import List, Tuple

from construct import BytesInteger, Int8ul, Int16ul, Int32ul, Int64ul

from .errors import OutOfBounds

U128 = BytesInteger(16, swapped=True)

PUBKEY_SIZE = 32
SIGNATURE_SIZE = 64
MESSAGE_SIGNATURE_SIZE = SIGNATURE_SIZE + PUBKEY_SIZE  # signature + signer


def ensure_available(buffer: bytes, offset: int, size: int, field: str = "field") -> None:
    available = max(len(buffer) - offset, 0)
    if offset < 0 or size > available:
        raise OutOfBounds(field, offset, size, available)


def _read_int(fmt, size: int, buffer: bytes, offset: int, field: str) -> Tuple[int, int]:
    ensure_available(buffer, offset, size, field)
    return int(fmt.parse(bytes(buffer[offset:offset + size]))), offset + size


def read_u8(buffer: bytes, offset: int, field: str = "u8") -> Tuple[int, int]:
    return _read_int(Int8ul, 1, buffer, offset, field)


def read_bool(buffer: bytes, offset: int, field: str = "bool") -> Tuple[bool, int]:
    value, offset = read_u8(buffer, offset, field)
    return value != 0, offset


def read_u16(buffer: bytes, offset: int, field: str = "u16") -> Tuple[int, int]:
    return _read_int(Int16ul, 2, buffer, offset, field)


def read_u32(buffer: bytes, offset: int, field: str = "u32") -> Tuple[int, int]:
    return _read_int(Int32ul, 4, buffer, offset, field)


def read_u64(buffer: bytes, offset: int, field: str = "u64") -> Tuple[int, int]:
    return _read_int(Int64ul, 8, buffer, offset, field)


def read_u128(buffer: bytes, offset: int, field: str = "u128") -> Tuple[int, int]:
    return _read_int(U128, 16, buffer, offset, field)


def read_fixed_bytes(buffer: bytes, offset: int, size: int, field: str = "bytes") -> Tuple[bytes, int]:
    ensure_available(buffer, offset, size, field)
    return bytes(buffer[offset:offset + size]), offset + size


def read_pubkey(buffer: bytes, offset: int, field: str = "pubkey") -> Tuple[bytes, int]:
    return read_fixed_bytes(buffer, offset, PUBKEY_SIZE, field)


def read_variable_bytes(buffer: bytes, offset: int, field: str = "bytes") -> Tuple[bytes, int]:
    """u32 length prefix followed by that many raw bytes."""
    length, offset = read_u32(buffer, offset, f"{field}.length")
    return read_fixed_bytes(buffer, offset, length, field)


def _read_count(buffer: bytes, offset: int, element_size: int, field: str) -> Tuple[int, int]:
    count, offset = read_u32(buffer, offset, f"{field}.count")
    ensure_available(buffer, offset, count * element_size, field)
    return count, offset


def read_pubkey_list(buffer: bytes, offset: int, field: str = "pubkeys") -> Tuple[List[bytes], int]:
    count, offset = _read_count(buffer, offset, PUBKEY_SIZE, field)
    keys: List[bytes] = []
    for i in range(count):
        key, offset = read_pubkey(buffer, offset, f"{field}[{i}]")
        keys.append(key)
    return keys, offset


def read_signature_list(
    buffer: bytes, offset: int, field: str = "signatures"
) -> Tuple[List[Tuple[bytes, bytes]], int]:
    """u32 count followed by (64-byte signature, 32-byte signer) records."""
    count, offset = _read_count(buffer, offset, MESSAGE_SIGNATURE_SIZE, field)
    entries: List[Tuple[bytes, bytes]] = []
    for i in range(count):
        signature, offset = read_fixed_bytes(buffer, offset, SIGNATURE_SIZE, f"{field}[{i}].signature")
        signer, offset = read_pubkey(buffer, offset, f"{field}[{i}].signer")
        entries.append((signature, signer))
    return entries, offset
