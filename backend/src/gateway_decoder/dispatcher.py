"""
Top-level entry points. None of these raise: every input, including
truncated buffers and non-base64 text, produces a structured result.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Iterable, List, Optional, Tuple

from .discriminators import (
    DISCRIMINATOR_SIZE,
    EVENT_DISCRIMINATORS,
    INSTRUCTION_DISCRIMINATORS,
    discriminator_hex,
    event_name_for,
    instruction_name_for,
)
from .errors import BufferTooSmall
from .events import DecodedEvent, decode_event
from .instructions import DecodedInstruction, decode_instruction
from .records import DecodeFailure, DecodeResult, UnknownPayload, is_decoded

logger = logging.getLogger(__name__)

INVALID_DISCRIMINATOR = "invalid"
PROGRAM_DATA_PREFIX = "Program data: "


def _b64_bytes(data: str) -> Optional[bytes]:
    try:
        text = data.strip()
        # log payloads sometimes arrive with the trailing padding stripped
        return base64.b64decode(text + "=" * (-len(text) % 4), validate=True)
    except (binascii.Error, ValueError, TypeError, AttributeError):
        return None


def _invalid(raw: Optional[bytes], namespace: str = "unknown") -> UnknownPayload:
    return UnknownPayload(
        discriminator=INVALID_DISCRIMINATOR,
        raw_hex=(raw or b"").hex(),
        namespace=namespace,
    )


def is_likely_event(raw: bytes) -> bool:
    """
    Best-effort framing guess: a tag known only to the event namespace is an
    event. Shared tags (``send_message`` / ``send_requested``) fall through
    to instruction-first and rely on the fallback.
    """
    tag = discriminator_hex(raw)
    return event_name_for(tag) is not None and instruction_name_for(tag) is None


def _attempt(namespace: str, raw: bytes):
    if namespace == "event":
        return decode_event(raw)
    return decode_instruction(raw)


def decode(data: str, prefer: Optional[str] = None) -> DecodeResult:
    """
    Decode base64 program data as whichever namespace it belongs to.

    ``prefer`` forces the first namespace tried (``"instruction"`` or
    ``"event"``); by default ``is_likely_event`` picks it.
    """
    raw = _b64_bytes(data)
    if raw is None or len(raw) < DISCRIMINATOR_SIZE:
        return DecodeResult(type="unknown", data=_invalid(raw))

    try:
        if prefer in ("instruction", "event"):
            first = prefer
        else:
            first = "event" if is_likely_event(raw) else "instruction"
        second = "instruction" if first == "event" else "event"

        failure: Optional[Tuple[str, DecodeFailure]] = None
        for namespace in (first, second):
            record = _attempt(namespace, raw)
            if is_decoded(record):
                return DecodeResult(type=namespace, data=record)
            if isinstance(record, DecodeFailure) and failure is None:
                failure = (namespace, record)

        if failure is not None:
            return DecodeResult(type=failure[0], data=failure[1])
        return DecodeResult(
            type="unknown",
            data=UnknownPayload(discriminator=discriminator_hex(raw), raw_hex=raw.hex()),
        )
    except Exception as e:
        logger.warning(f"[DECODER] Unexpected decode error: {e}")
        return DecodeResult(
            type="unknown",
            data=UnknownPayload(discriminator=discriminator_hex(raw), raw_hex=raw.hex()),
        )


def decode_as_instruction(data: str) -> DecodedInstruction:
    raw = _b64_bytes(data)
    if raw is None:
        return _invalid(raw, "instruction")
    try:
        return decode_instruction(raw)
    except BufferTooSmall:
        return _invalid(raw, "instruction")


def decode_as_event(data: str) -> DecodedEvent:
    raw = _b64_bytes(data)
    if raw is None:
        return _invalid(raw, "event")
    try:
        return decode_event(raw)
    except BufferTooSmall:
        return _invalid(raw, "event")


def supported_instructions() -> List[str]:
    return list(INSTRUCTION_DISCRIMINATORS)


def supported_events() -> List[str]:
    return list(EVENT_DISCRIMINATORS)


def extract_program_data(logs: Iterable[str]) -> List[str]:
    """Pull base64 payloads out of ``Program data: ...`` log lines."""
    payloads = []
    for line in logs or []:
        if not isinstance(line, str):
            continue
        idx = line.find(PROGRAM_DATA_PREFIX)
        if idx == -1:
            continue
        payload = line[idx + len(PROGRAM_DATA_PREFIX):].strip()
        if payload:
            payloads.append(payload)
    return payloads


def decode_logs(logs: Iterable[str]) -> List[DecodedEvent]:
    return [decode_as_event(payload) for payload in extract_program_data(logs)]
