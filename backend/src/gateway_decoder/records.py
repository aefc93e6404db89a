"""
Record types shared by the instruction and event namespaces.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Literal, Optional

Namespace = Literal["instruction", "event"]


class RecordMixin:
    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass(frozen=True)
class MessageSignatureRecord(RecordMixin):
    signature: str  # hex
    signer: str  # base58


@dataclass(frozen=True)
class UnknownPayload(RecordMixin):
    """Tag not present in the namespace. A normal outcome, not an error."""

    discriminator: str
    raw_hex: str
    namespace: str = "unknown"

    @property
    def kind(self) -> str:
        return "unknown"


@dataclass(frozen=True)
class DecodeFailure(RecordMixin):
    """Tag recognised but a field could not be read."""

    namespace: Namespace
    kind: str
    error: str
    discriminator: str
    raw_hex: str

    @property
    def instruction(self) -> Optional[str]:
        return self.kind if self.namespace == "instruction" else None

    @property
    def event(self) -> Optional[str]:
        return self.kind if self.namespace == "event" else None

    def to_dict(self) -> dict:
        # label under the same key a decoded record of this namespace uses
        return {self.namespace: self.kind, **asdict(self)}


@dataclass(frozen=True)
class DecodeResult(RecordMixin):
    type: Literal["instruction", "event", "unknown"]
    data: object

    def to_dict(self) -> dict:
        data = self.data.to_dict() if hasattr(self.data, "to_dict") else self.data
        return {"type": self.type, "data": data}


def is_decoded(record: object) -> bool:
    """True for a successfully decoded message record."""
    return not isinstance(record, (UnknownPayload, DecodeFailure))
