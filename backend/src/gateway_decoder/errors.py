"""
Error taxonomy for payload decoding.

Unknown discriminators are not errors; they decode to ``UnknownPayload``.
"""

from __future__ import annotations


class DecodeError(Exception):
    """Base class for malformed-buffer conditions."""


class BufferTooSmall(DecodeError):
    def __init__(self, length: int, needed: int = 8):
        self.length = length
        self.needed = needed
        super().__init__(f"Buffer too small for discriminator: {length} < {needed} bytes")


class OutOfBounds(DecodeError):
    """A field read would run past the end of the buffer."""

    def __init__(self, field: str, offset: int, needed: int, available: int):
        self.field = field
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(
            f"Out of bounds reading {field} at offset {offset}: need {needed} bytes, {available} available"
        )


class HashInputError(ValueError):
    """Message hash input does not fit its length prefix."""
