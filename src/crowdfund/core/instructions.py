"""
Crowdfund Instruction Encoding

Instruction data sent to the crowdfund program is a single discriminator
byte followed by a variant-specific payload:

    [u8 discriminator][payload...]

Payloads use a variable-length encoding that is unrelated to the account
layout: strings carry a u32 little-endian byte length followed by exactly
that many UTF-8 bytes, with no padding and no capacity. Integers are
fixed-width little-endian.

The set of instructions is closed. Each variant registers its discriminator
and payload layout in INSTRUCTIONS; the program rejects anything else.

Based on: https://solana.com/docs/core/transactions
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Tuple

from .accounts import AccountMeta, PublicKey
from .errors import TrailingData, TruncatedInput, UnknownInstruction
from .layout import LENGTH_PREFIX_SIZE, U32, U64, decode_utf8


class InstructionKind(IntEnum):
    """Discriminator byte the program dispatches on."""
    CREATE_CAMPAIGN = 0


class PayloadReader:
    """Sequential reader over payload bytes that fails on short input."""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.offset = 0

    def take(self, size: int, field: str = "value") -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise TruncatedInput(
                f"{field} needs {size} bytes at offset {self.offset}, "
                f"only {len(self.data) - self.offset} left"
            )
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def remaining(self) -> int:
        return len(self.data) - self.offset


@dataclass(frozen=True)
class LengthPrefixedString:
    """
    Unbounded UTF-8 string: u32 byte length then the bytes themselves.

    Nothing is truncated on encode; limits are enforced by the program.
    """

    def pack(self, value: str, field: str = "value") -> bytes:
        encoded = value.encode("utf-8")
        return U32.pack(len(encoded), field) + encoded

    def read(self, reader: PayloadReader, field: str = "value") -> str:
        length = U32.unpack(reader.take(LENGTH_PREFIX_SIZE, field))
        return decode_utf8(reader.take(length, field), field)


STRING = LengthPrefixedString()


class PayloadLayout:
    """Ordered variable-length payload made of strings and integers."""

    def __init__(self, name: str, fields: Tuple[Tuple[str, Any], ...]):
        names = [field_name for field_name, _ in fields]
        if len(set(names)) != len(names):
            raise ValueError(f"{name}: duplicate field names in {names}")
        self.name = name
        self.fields = tuple(fields)

    def pack(self, values: Dict[str, Any]) -> bytes:
        return b"".join(
            kind.pack(values[field_name], field_name)
            for field_name, kind in self.fields
        )

    def unpack(self, data: bytes) -> Dict[str, Any]:
        """Read every field; leftover bytes are an error."""
        reader = PayloadReader(data)
        values = {}
        for field_name, kind in self.fields:
            if isinstance(kind, LengthPrefixedString):
                values[field_name] = kind.read(reader, field_name)
            else:
                values[field_name] = kind.unpack(reader.take(kind.size, field_name), field_name)

        if reader.remaining():
            raise TrailingData(f"{self.name}: {reader.remaining()} unread bytes after payload")
        return values


@dataclass(frozen=True)
class CreateCampaignPayload:
    """Request to open a new campaign for the signing wallet."""
    name: str
    goal_amount: int
    deadline: int

    KIND = InstructionKind.CREATE_CAMPAIGN
    LAYOUT = PayloadLayout(
        "CreateCampaignPayload",
        (
            ("name", STRING),
            ("goal_amount", U64),
            ("deadline", U64),
        ),
    )

    def serialize(self) -> bytes:
        """Payload bytes without the discriminator."""
        return self.LAYOUT.pack({
            "name": self.name,
            "goal_amount": self.goal_amount,
            "deadline": self.deadline,
        })

    @classmethod
    def deserialize(cls, data: bytes) -> 'CreateCampaignPayload':
        return cls(**cls.LAYOUT.unpack(data))


# Closed set of instruction variants, keyed by discriminator
INSTRUCTIONS = {
    InstructionKind.CREATE_CAMPAIGN: CreateCampaignPayload,
}


def encode_instruction(payload) -> bytes:
    """Prefix a payload with its variant's discriminator byte."""
    return bytes([payload.KIND]) + payload.serialize()


def decode_instruction(data: bytes):
    """
    Split instruction data into discriminator and payload, the same way
    the program unpacks it.

    Raises:
        TruncatedInput: data is empty or the payload ends early
        UnknownInstruction: the discriminator is not registered
        TrailingData: bytes remain after the payload
    """
    if not data:
        raise TruncatedInput("Instruction data is empty")

    discriminator, rest = data[0], data[1:]
    try:
        payload_type = INSTRUCTIONS[InstructionKind(discriminator)]
    except ValueError as e:
        raise UnknownInstruction(f"Unknown instruction discriminator {discriminator}") from e

    return payload_type.deserialize(rest)


@dataclass
class Instruction:
    """
    A program invocation: which program, which accounts, what data.

    Declaring account access upfront is what lets the runtime schedule
    transactions in parallel.
    """
    program_id: PublicKey
    accounts: List[AccountMeta]
    data: bytes

    def __str__(self) -> str:
        return f"Instruction({str(self.program_id)[:8]}..., {len(self.accounts)} accounts, {len(self.data)} bytes)"
