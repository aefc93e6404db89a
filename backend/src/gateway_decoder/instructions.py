"""
Instruction decoders for the message gateway program.

Each decoder starts reading at offset 8 (past the discriminator) and consumes
fields in declared order; the order is part of the wire format.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Tuple, Union

from .cursor import (
    read_bool,
    read_pubkey,
    read_pubkey_list,
    read_signature_list,
    read_u8,
    read_u16,
    read_u64,
    read_u128,
    read_variable_bytes,
)
from .discriminators import DISCRIMINATOR_SIZE, DISCRIMINATOR_TO_INSTRUCTION, dispatch_by_discriminator
from .formatting import base58_pubkey, chain_name, format_address, registry_type_label, utf8_text
from .records import DecodeFailure, MessageSignatureRecord, RecordMixin, UnknownPayload


@dataclass(frozen=True)
class InitializeGatewayInstruction(RecordMixin):
    chain_id: str
    chain_name: str
    instruction: str = field(default="initialize_gateway", init=False)


@dataclass(frozen=True)
class SendMessageInstruction(RecordMixin):
    tx_id: str
    recipient: str
    recipient_length: int
    dest_chain_id: str
    dest_chain_name: str
    chain_data: str
    chain_data_hex: str
    confirmations: int
    instruction: str = field(default="send_message", init=False)


@dataclass(frozen=True)
class CrossChainMessageInstruction(RecordMixin):
    """Shared layout of ``create_tx_pda`` and ``process_message``."""

    instruction: str
    tx_id: str
    source_chain_id: str
    source_chain_name: str
    dest_chain_id: str
    dest_chain_name: str
    sender: str
    sender_length: int
    recipient: str
    recipient_length: int
    on_chain_data: str
    on_chain_data_hex: str
    off_chain_data: str
    off_chain_data_hex: str
    signatures: Tuple[MessageSignatureRecord, ...]
    signature_count: int


@dataclass(frozen=True)
class SetSystemEnabledInstruction(RecordMixin):
    enabled: bool
    instruction: str = field(default="set_system_enabled", init=False)


@dataclass(frozen=True)
class InitializeSignerRegistryInstruction(RecordMixin):
    registry_type: str
    registry_type_value: int
    chain_id: str
    chain_name: str
    signers: Tuple[str, ...]
    signer_count: int
    required_signatures: int
    instruction: str = field(default="initialize_signer_registry", init=False)


@dataclass(frozen=True)
class UpdateSignersInstruction(RecordMixin):
    registry_type: str
    registry_type_value: int
    chain_id: str
    chain_name: str
    new_signers: Tuple[str, ...]
    signer_count: int
    new_required_signatures: int
    instruction: str = field(default="update_signers", init=False)


@dataclass(frozen=True)
class AddSignerInstruction(RecordMixin):
    registry_type: str
    registry_type_value: int
    chain_id: str
    chain_name: str
    new_signer: str
    instruction: str = field(default="add_signer", init=False)


@dataclass(frozen=True)
class RemoveSignerInstruction(RecordMixin):
    registry_type: str
    registry_type_value: int
    chain_id: str
    chain_name: str
    signer_to_remove: str
    instruction: str = field(default="remove_signer", init=False)


@dataclass(frozen=True)
class UpdateThresholdInstruction(RecordMixin):
    registry_type: str
    registry_type_value: int
    chain_id: str
    chain_name: str
    new_threshold: int
    instruction: str = field(default="update_threshold", init=False)


@dataclass(frozen=True)
class SetRegistryEnabledInstruction(RecordMixin):
    registry_type: str
    registry_type_value: int
    chain_id: str
    chain_name: str
    enabled: bool
    instruction: str = field(default="set_registry_enabled", init=False)


DecodedInstruction = Union[
    InitializeGatewayInstruction,
    SendMessageInstruction,
    CrossChainMessageInstruction,
    SetSystemEnabledInstruction,
    InitializeSignerRegistryInstruction,
    UpdateSignersInstruction,
    AddSignerInstruction,
    RemoveSignerInstruction,
    UpdateThresholdInstruction,
    SetRegistryEnabledInstruction,
    UnknownPayload,
    DecodeFailure,
]


def decode_initialize_gateway(raw: bytes) -> InitializeGatewayInstruction:
    chain_id, _ = read_u64(raw, DISCRIMINATOR_SIZE, "chain_id")
    return InitializeGatewayInstruction(chain_id=str(chain_id), chain_name=chain_name(chain_id))


def decode_send_message(raw: bytes) -> SendMessageInstruction:
    offset = DISCRIMINATOR_SIZE
    tx_id, offset = read_u128(raw, offset, "tx_id")
    recipient, offset = read_variable_bytes(raw, offset, "recipient")
    dest_chain_id, offset = read_u64(raw, offset, "dest_chain_id")
    chain_data, offset = read_variable_bytes(raw, offset, "chain_data")
    confirmations, offset = read_u16(raw, offset, "confirmations")
    return SendMessageInstruction(
        tx_id=str(tx_id),
        recipient=format_address(recipient),
        recipient_length=len(recipient),
        dest_chain_id=str(dest_chain_id),
        dest_chain_name=chain_name(dest_chain_id),
        chain_data=utf8_text(chain_data),
        chain_data_hex=chain_data.hex(),
        confirmations=confirmations,
    )


def decode_create_tx_pda(raw: bytes) -> CrossChainMessageInstruction:
    offset = DISCRIMINATOR_SIZE
    tx_id, offset = read_u128(raw, offset, "tx_id")
    source_chain_id, offset = read_u64(raw, offset, "source_chain_id")
    dest_chain_id, offset = read_u64(raw, offset, "dest_chain_id")
    sender, offset = read_variable_bytes(raw, offset, "sender")
    recipient, offset = read_variable_bytes(raw, offset, "recipient")
    on_chain_data, offset = read_variable_bytes(raw, offset, "on_chain_data")
    off_chain_data, offset = read_variable_bytes(raw, offset, "off_chain_data")
    signatures, offset = read_signature_list(raw, offset, "signatures")
    return CrossChainMessageInstruction(
        instruction="create_tx_pda",
        tx_id=str(tx_id),
        source_chain_id=str(source_chain_id),
        source_chain_name=chain_name(source_chain_id),
        dest_chain_id=str(dest_chain_id),
        dest_chain_name=chain_name(dest_chain_id),
        sender=format_address(sender),
        sender_length=len(sender),
        recipient=format_address(recipient),
        recipient_length=len(recipient),
        on_chain_data=utf8_text(on_chain_data),
        on_chain_data_hex=on_chain_data.hex(),
        off_chain_data=utf8_text(off_chain_data),
        off_chain_data_hex=off_chain_data.hex(),
        signatures=tuple(
            MessageSignatureRecord(signature=sig.hex(), signer=base58_pubkey(signer))
            for sig, signer in signatures
        ),
        signature_count=len(signatures),
    )


def decode_process_message(raw: bytes) -> CrossChainMessageInstruction:
    return replace(decode_create_tx_pda(raw), instruction="process_message")


def decode_set_system_enabled(raw: bytes) -> SetSystemEnabledInstruction:
    enabled, _ = read_bool(raw, DISCRIMINATOR_SIZE, "enabled")
    return SetSystemEnabledInstruction(enabled=enabled)


def _read_registry_header(raw: bytes) -> Tuple[dict, int]:
    registry_type, offset = read_u8(raw, DISCRIMINATOR_SIZE, "registry_type")
    chain_id, offset = read_u64(raw, offset, "chain_id")
    header = {
        "registry_type": registry_type_label(registry_type),
        "registry_type_value": registry_type,
        "chain_id": str(chain_id),
        "chain_name": chain_name(chain_id),
    }
    return header, offset


def decode_initialize_signer_registry(raw: bytes) -> InitializeSignerRegistryInstruction:
    header, offset = _read_registry_header(raw)
    signers, offset = read_pubkey_list(raw, offset, "initial_signers")
    required, offset = read_u8(raw, offset, "required_signatures")
    return InitializeSignerRegistryInstruction(
        **header,
        signers=tuple(base58_pubkey(key) for key in signers),
        signer_count=len(signers),
        required_signatures=required,
    )


def decode_update_signers(raw: bytes) -> UpdateSignersInstruction:
    header, offset = _read_registry_header(raw)
    signers, offset = read_pubkey_list(raw, offset, "new_signers")
    required, offset = read_u8(raw, offset, "new_required_signatures")
    return UpdateSignersInstruction(
        **header,
        new_signers=tuple(base58_pubkey(key) for key in signers),
        signer_count=len(signers),
        new_required_signatures=required,
    )


def decode_add_signer(raw: bytes) -> AddSignerInstruction:
    header, offset = _read_registry_header(raw)
    signer, offset = read_pubkey(raw, offset, "new_signer")
    return AddSignerInstruction(**header, new_signer=base58_pubkey(signer))


def decode_remove_signer(raw: bytes) -> RemoveSignerInstruction:
    header, offset = _read_registry_header(raw)
    signer, offset = read_pubkey(raw, offset, "signer_to_remove")
    return RemoveSignerInstruction(**header, signer_to_remove=base58_pubkey(signer))


def decode_update_threshold(raw: bytes) -> UpdateThresholdInstruction:
    header, offset = _read_registry_header(raw)
    threshold, offset = read_u8(raw, offset, "new_threshold")
    return UpdateThresholdInstruction(**header, new_threshold=threshold)


def decode_set_registry_enabled(raw: bytes) -> SetRegistryEnabledInstruction:
    header, offset = _read_registry_header(raw)
    enabled, offset = read_bool(raw, offset, "enabled")
    return SetRegistryEnabledInstruction(**header, enabled=enabled)


INSTRUCTION_DECODERS: Dict[str, Callable[[bytes], object]] = {
    "initialize_gateway": decode_initialize_gateway,
    "send_message": decode_send_message,
    "create_tx_pda": decode_create_tx_pda,
    "process_message": decode_process_message,
    "set_system_enabled": decode_set_system_enabled,
    "initialize_signer_registry": decode_initialize_signer_registry,
    "update_signers": decode_update_signers,
    "add_signer": decode_add_signer,
    "remove_signer": decode_remove_signer,
    "update_threshold": decode_update_threshold,
    "set_registry_enabled": decode_set_registry_enabled,
}


def decode_instruction(raw: bytes) -> DecodedInstruction:
    """
    Decode raw instruction data.

    Raises ``BufferTooSmall`` for fewer than 8 bytes. Unmapped tags give an
    ``UnknownPayload``; field errors give a ``DecodeFailure``.
    """
    return dispatch_by_discriminator(raw, "instruction", DISCRIMINATOR_TO_INSTRUCTION, INSTRUCTION_DECODERS)
