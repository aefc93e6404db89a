"""Wire-format builders for test fixtures. The package itself only decodes."""

from __future__ import annotations

from typing import List, Tuple

import pytest
from construct import BytesInteger, Int8ul, Int16ul, Int32ul, Int64ul

from gateway_decoder.discriminators import EVENT_DISCRIMINATORS, INSTRUCTION_DISCRIMINATORS

SEND_REQUESTED_B64 = (
    "2RiEmgRsd3q7JwMAAAAAAAAAAAAAAAAAQA3TqkkppimtLH6I5o5YOgwxk9Sdk4R+bPqAVNnOj5kU"
    "AAAAdC01zDxsa0j4P0w/bJfYwrYasrQCAAAAAAAAABIAAABIZWxsbyBmcm9tIFNvbGFuYSEBAA=="
)

ETH_RECIPIENT = bytes.fromhex("742d35cc3c6c6b48f83f4c3f6c97d8c2b61ab2b4")
KEY_A = bytes(range(1, 33))
KEY_B = bytes([0xAB] * 32)
KEY_C = bytes(range(100, 132))


def u8(v: int) -> bytes:
    return Int8ul.build(v)


def u16(v: int) -> bytes:
    return Int16ul.build(v)


def u32(v: int) -> bytes:
    return Int32ul.build(v)


def u64(v: int) -> bytes:
    return Int64ul.build(v)


def u128(v: int) -> bytes:
    return BytesInteger(16, swapped=True).build(v)


def vec(data: bytes) -> bytes:
    return u32(len(data)) + data


def pubkeys(keys: List[bytes]) -> bytes:
    return u32(len(keys)) + b"".join(keys)


def signatures(entries: List[Tuple[bytes, bytes]]) -> bytes:
    return u32(len(entries)) + b"".join(sig + signer for sig, signer in entries)


def instruction(name: str, body: bytes = b"") -> bytes:
    return bytes.fromhex(INSTRUCTION_DISCRIMINATORS[name]) + body


def event(name: str, body: bytes = b"") -> bytes:
    return bytes.fromhex(EVENT_DISCRIMINATORS[name]) + body


def message_body(
    tx_id: int = 42,
    source_chain_id: int = 2,
    dest_chain_id: int = 1,
    sender: bytes = ETH_RECIPIENT,
    recipient: bytes = KEY_A,
    on_chain_data: bytes = b"hello",
    off_chain_data: bytes = b"",
    sigs: List[Tuple[bytes, bytes]] = None,
) -> bytes:
    if sigs is None:
        sigs = [(bytes([0x11] * 64), KEY_B), (bytes([0x22] * 64), KEY_C)]
    return (
        u128(tx_id)
        + u64(source_chain_id)
        + u64(dest_chain_id)
        + vec(sender)
        + vec(recipient)
        + vec(on_chain_data)
        + vec(off_chain_data)
        + signatures(sigs)
    )


def full_instruction_payloads() -> dict:
    """One well-formed payload per instruction kind, no trailing bytes."""
    return {
        "initialize_gateway": instruction("initialize_gateway", u64(1)),
        "send_message": instruction(
            "send_message",
            u128(7) + vec(ETH_RECIPIENT) + u64(2) + vec(b"payload") + u16(3),
        ),
        "create_tx_pda": instruction("create_tx_pda", message_body()),
        "process_message": instruction("process_message", message_body()),
        "set_system_enabled": instruction("set_system_enabled", u8(1)),
        "initialize_signer_registry": instruction(
            "initialize_signer_registry", u8(0) + u64(1) + pubkeys([KEY_A, KEY_B]) + u8(2)
        ),
        "update_signers": instruction("update_signers", u8(1) + u64(2) + pubkeys([KEY_C]) + u8(1)),
        "add_signer": instruction("add_signer", u8(2) + u64(3) + KEY_A),
        "remove_signer": instruction("remove_signer", u8(1) + u64(5) + KEY_B),
        "update_threshold": instruction("update_threshold", u8(0) + u64(1) + u8(4)),
        "set_registry_enabled": instruction("set_registry_enabled", u8(2) + u64(2) + u8(0)),
    }


def full_event_payloads() -> dict:
    return {
        "send_requested": event(
            "send_requested",
            u128(9) + KEY_A + vec(ETH_RECIPIENT) + u64(2) + vec(b"hi") + u16(1),
        ),
        "tx_pda_created": event("tx_pda_created", u128(10) + u64(2)),
        "message_processed": event("message_processed", u128(11) + u64(3) + KEY_B),
        "system_status_changed": event("system_status_changed", u8(0)),
    }


@pytest.fixture
def instruction_payloads() -> dict:
    return full_instruction_payloads()


@pytest.fixture
def event_payloads() -> dict:
    return full_event_payloads()
