"""
Event decoders for logs emitted by the message gateway program.

Event layouts are declared independently of instruction layouts even where
the names line up (``send_requested`` carries a fixed 32-byte sender that
``send_message`` does not).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Union

from .cursor import read_bool, read_pubkey, read_u16, read_u64, read_u128, read_variable_bytes
from .discriminators import DISCRIMINATOR_SIZE, DISCRIMINATOR_TO_EVENT, dispatch_by_discriminator
from .formatting import base58_pubkey, chain_name, format_address, utf8_text
from .records import DecodeFailure, RecordMixin, UnknownPayload


@dataclass(frozen=True)
class SendRequestedEvent(RecordMixin):
    tx_id: str
    sender: str
    recipient: str
    recipient_length: int
    dest_chain_id: str
    dest_chain_name: str
    chain_data: str
    chain_data_hex: str
    confirmations: int
    event: str = field(default="send_requested", init=False)


@dataclass(frozen=True)
class TxPdaCreatedEvent(RecordMixin):
    tx_id: str
    source_chain_id: str
    source_chain_name: str
    event: str = field(default="tx_pda_created", init=False)


@dataclass(frozen=True)
class MessageProcessedEvent(RecordMixin):
    tx_id: str
    source_chain_id: str
    source_chain_name: str
    relayer: str
    event: str = field(default="message_processed", init=False)


@dataclass(frozen=True)
class SystemStatusChangedEvent(RecordMixin):
    enabled: bool
    event: str = field(default="system_status_changed", init=False)


DecodedEvent = Union[
    SendRequestedEvent,
    TxPdaCreatedEvent,
    MessageProcessedEvent,
    SystemStatusChangedEvent,
    UnknownPayload,
    DecodeFailure,
]


def decode_send_requested(raw: bytes) -> SendRequestedEvent:
    offset = DISCRIMINATOR_SIZE
    tx_id, offset = read_u128(raw, offset, "tx_id")
    sender, offset = read_pubkey(raw, offset, "sender")
    recipient, offset = read_variable_bytes(raw, offset, "recipient")
    dest_chain_id, offset = read_u64(raw, offset, "dest_chain_id")
    chain_data, offset = read_variable_bytes(raw, offset, "chain_data")
    confirmations, offset = read_u16(raw, offset, "confirmations")
    return SendRequestedEvent(
        tx_id=str(tx_id),
        sender=base58_pubkey(sender),
        recipient=format_address(recipient),
        recipient_length=len(recipient),
        dest_chain_id=str(dest_chain_id),
        dest_chain_name=chain_name(dest_chain_id),
        chain_data=utf8_text(chain_data),
        chain_data_hex=chain_data.hex(),
        confirmations=confirmations,
    )


def decode_tx_pda_created(raw: bytes) -> TxPdaCreatedEvent:
    tx_id, offset = read_u128(raw, DISCRIMINATOR_SIZE, "tx_id")
    source_chain_id, offset = read_u64(raw, offset, "source_chain_id")
    return TxPdaCreatedEvent(
        tx_id=str(tx_id),
        source_chain_id=str(source_chain_id),
        source_chain_name=chain_name(source_chain_id),
    )


def decode_message_processed(raw: bytes) -> MessageProcessedEvent:
    tx_id, offset = read_u128(raw, DISCRIMINATOR_SIZE, "tx_id")
    source_chain_id, offset = read_u64(raw, offset, "source_chain_id")
    relayer, offset = read_pubkey(raw, offset, "relayer")
    return MessageProcessedEvent(
        tx_id=str(tx_id),
        source_chain_id=str(source_chain_id),
        source_chain_name=chain_name(source_chain_id),
        relayer=base58_pubkey(relayer),
    )


def decode_system_status_changed(raw: bytes) -> SystemStatusChangedEvent:
    enabled, _ = read_bool(raw, DISCRIMINATOR_SIZE, "enabled")
    return SystemStatusChangedEvent(enabled=enabled)


EVENT_DECODERS: Dict[str, Callable[[bytes], object]] = {
    "send_requested": decode_send_requested,
    "tx_pda_created": decode_tx_pda_created,
    "message_processed": decode_message_processed,
    "system_status_changed": decode_system_status_changed,
}


def decode_event(raw: bytes) -> DecodedEvent:
    """Event counterpart of ``decode_instruction``; same failure contract."""
    return dispatch_by_discriminator(raw, "event", DISCRIMINATOR_TO_EVENT, EVENT_DECODERS)
