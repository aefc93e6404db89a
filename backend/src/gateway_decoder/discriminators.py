"""
Discriminator registry for the message gateway program.

Two independent namespaces: instruction tags and event tags. A tag may appear
in both (``send_message`` and ``send_requested`` share one), so lookups are
always namespace-qualified.

The literal instruction table is configuration data. Set
``GATEWAY_DISCRIMINATOR_MODE=anchor`` to derive tags as
``sha256("global:<name>")[:8]`` instead.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Callable, Dict, Mapping, Optional

from .config import settings
from .errors import BufferTooSmall, DecodeError
from .records import DecodeFailure, UnknownPayload

logger = logging.getLogger(__name__)

DISCRIMINATOR_SIZE = 8

STATIC_INSTRUCTION_DISCRIMINATORS: Dict[str, str] = {
    "initialize_gateway": "175175a0c5c87c47",
    "send_message": "d918849a046c777a",
    "create_tx_pda": "a42ba5e4b0d17af1",
    "process_message": "93a64b5d1d5d8b77",
    "set_system_enabled": "4e7d7c6b5b3b3c1a",
    "initialize_signer_registry": "8d5d8b771d5d8b77",
    "update_signers": "9b3b3c1a7c6b5b3b",
    "add_signer": "b0d17af1a42ba5e4",
    "remove_signer": "5d8b777c6b5b3b3c",
    "update_threshold": "1d5d8b775d8b777c",
    "set_registry_enabled": "7c6b5b3bb0d17af1",
}

# Anchor event tags: sha256("event:<StructName>")[:8]
EVENT_DISCRIMINATORS: Dict[str, str] = {
    "send_requested": "d918849a046c777a",
    "tx_pda_created": "0d3877a99cb13e78",
    "message_processed": "0282862ef0e654a7",
    "system_status_changed": "1283291810742976",
}


def anchor_discriminator(name: str, namespace: str = "global") -> bytes:
    return hashlib.sha256(f"{namespace}:{name}".encode()).digest()[:DISCRIMINATOR_SIZE]


def build_instruction_table(mode: str = "static") -> Dict[str, str]:
    if mode == "anchor":
        return {name: anchor_discriminator(name).hex() for name in STATIC_INSTRUCTION_DISCRIMINATORS}
    return dict(STATIC_INSTRUCTION_DISCRIMINATORS)


def _reverse(table: Dict[str, str]) -> Dict[str, str]:
    return {tag: name for name, tag in table.items()}


INSTRUCTION_DISCRIMINATORS: Dict[str, str] = build_instruction_table(settings.discriminator_mode)

DISCRIMINATOR_TO_INSTRUCTION: Dict[str, str] = _reverse(INSTRUCTION_DISCRIMINATORS)
DISCRIMINATOR_TO_EVENT: Dict[str, str] = _reverse(EVENT_DISCRIMINATORS)


def discriminator_hex(raw: bytes) -> str:
    return bytes(raw[:DISCRIMINATOR_SIZE]).hex()


def instruction_name_for(tag: str) -> Optional[str]:
    return DISCRIMINATOR_TO_INSTRUCTION.get(tag.lower())


def event_name_for(tag: str) -> Optional[str]:
    return DISCRIMINATOR_TO_EVENT.get(tag.lower())


def dispatch_by_discriminator(
    raw: bytes,
    namespace: str,
    reverse_table: Mapping[str, str],
    decoders: Mapping[str, Callable[[bytes], object]],
):
    """
    Look up the tag in one namespace and run its decoder.

    Field-level ``DecodeError`` is converted into a ``DecodeFailure`` here and
    never propagates. Only ``BufferTooSmall`` escapes.
    """
    raw = bytes(raw)
    if len(raw) < DISCRIMINATOR_SIZE:
        raise BufferTooSmall(len(raw), DISCRIMINATOR_SIZE)

    tag = discriminator_hex(raw)
    name = reverse_table.get(tag)
    if name is None:
        logger.debug(f"[DECODER] Unknown {namespace} discriminator {tag}")
        return UnknownPayload(discriminator=tag, raw_hex=raw.hex(), namespace=namespace)

    try:
        decoder = decoders.get(name)
        if decoder is None:
            raise DecodeError(f"Decoder not implemented for {name}")
        return decoder(raw)
    except (DecodeError, ValueError) as e:
        logger.debug(f"[DECODER] {namespace} {name} failed: {e}")
        return DecodeFailure(
            namespace=namespace,
            kind=name,
            error=str(e),
            discriminator=tag,
            raw_hex=raw.hex(),
        )
