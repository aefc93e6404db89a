from __future__ import annotations

import hashlib

import pytest

from gateway_decoder import discriminators
from gateway_decoder.discriminators import (
    EVENT_DISCRIMINATORS,
    STATIC_INSTRUCTION_DISCRIMINATORS,
    anchor_discriminator,
    build_instruction_table,
    dispatch_by_discriminator,
    event_name_for,
    instruction_name_for,
)
from gateway_decoder.errors import BufferTooSmall
from gateway_decoder.records import DecodeFailure, UnknownPayload


def test_tags_are_eight_bytes_and_unique_per_namespace() -> None:
    for table in (STATIC_INSTRUCTION_DISCRIMINATORS, EVENT_DISCRIMINATORS):
        assert all(len(bytes.fromhex(tag)) == 8 for tag in table.values())
        assert len(set(table.values())) == len(table)


def test_send_tag_is_shared_across_namespaces() -> None:
    tag = "d918849a046c777a"
    assert instruction_name_for(tag) == "send_message"
    assert event_name_for(tag) == "send_requested"


@pytest.mark.parametrize(
    "name, struct_name",
    [
        ("send_requested", "SendRequested"),
        ("tx_pda_created", "TxPdaCreated"),
        ("message_processed", "MessageProcessed"),
        ("system_status_changed", "SystemStatusChanged"),
    ],
)
def test_event_tags_are_anchor_event_hashes(name: str, struct_name: str) -> None:
    assert anchor_discriminator(struct_name, "event").hex() == EVENT_DISCRIMINATORS[name]


def test_anchor_mode_derives_global_tags() -> None:
    table = build_instruction_table("anchor")
    assert set(table) == set(STATIC_INSTRUCTION_DISCRIMINATORS)
    assert table["send_message"] == hashlib.sha256(b"global:send_message").digest()[:8].hex()


def test_static_mode_returns_copy() -> None:
    table = build_instruction_table("static")
    table["send_message"] = "00" * 8
    assert STATIC_INSTRUCTION_DISCRIMINATORS["send_message"] == "d918849a046c777a"


def test_reverse_index_mirrors_forward_table() -> None:
    for name, tag in discriminators.INSTRUCTION_DISCRIMINATORS.items():
        assert discriminators.DISCRIMINATOR_TO_INSTRUCTION[tag] == name
    for name, tag in EVENT_DISCRIMINATORS.items():
        assert discriminators.DISCRIMINATOR_TO_EVENT[tag] == name


def test_lookup_is_case_insensitive() -> None:
    assert instruction_name_for("175175A0C5C87C47") == "initialize_gateway"


def test_dispatch_rejects_short_buffer() -> None:
    with pytest.raises(BufferTooSmall):
        dispatch_by_discriminator(b"\x01\x02", "instruction", {}, {})


def test_dispatch_unknown_tag() -> None:
    raw = bytes(8) + b"\x01"
    result = dispatch_by_discriminator(raw, "event", {}, {})
    assert result == UnknownPayload(discriminator="00" * 8, raw_hex=raw.hex(), namespace="event")


def test_dispatch_missing_decoder_is_a_failure() -> None:
    raw = bytes(8)
    result = dispatch_by_discriminator(raw, "instruction", {"00" * 8: "mystery"}, {})
    assert isinstance(result, DecodeFailure)
    assert result.kind == "mystery"
    assert "not implemented" in result.error
