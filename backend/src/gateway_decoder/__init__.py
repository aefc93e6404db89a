from .errors import DecodeError, BufferTooSmall, OutOfBounds, HashInputError
from .config import DecoderConfig, load_config, configure_logging
from .discriminators import (
    INSTRUCTION_DISCRIMINATORS,
    EVENT_DISCRIMINATORS,
    anchor_discriminator,
)
from .records import DecodeResult, DecodeFailure, UnknownPayload, MessageSignatureRecord, is_decoded
from .instructions import decode_instruction, CrossChainMessageInstruction
from .events import decode_event, SendRequestedEvent
from .hashing import (
    chain_id_bytes,
    create_message_hash,
    create_cross_chain_hash,
    message_hash_hex,
    verify_message_hash,
    validate_message_hash,
    hash_decoded_message,
)
from .dispatcher import (
    decode,
    decode_as_instruction,
    decode_as_event,
    decode_logs,
    extract_program_data,
    supported_instructions,
    supported_events,
)

__all__ = [
    "DecodeError",
    "BufferTooSmall",
    "OutOfBounds",
    "HashInputError",
    "DecoderConfig",
    "load_config",
    "configure_logging",
    "INSTRUCTION_DISCRIMINATORS",
    "EVENT_DISCRIMINATORS",
    "anchor_discriminator",
    "DecodeResult",
    "DecodeFailure",
    "UnknownPayload",
    "MessageSignatureRecord",
    "is_decoded",
    "decode_instruction",
    "CrossChainMessageInstruction",
    "decode_event",
    "SendRequestedEvent",
    "chain_id_bytes",
    "create_message_hash",
    "create_cross_chain_hash",
    "message_hash_hex",
    "verify_message_hash",
    "validate_message_hash",
    "hash_decoded_message",
    "decode",
    "decode_as_instruction",
    "decode_as_event",
    "decode_logs",
    "extract_program_data",
    "supported_instructions",
    "supported_events",
]
