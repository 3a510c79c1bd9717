"""
Crowdfund Campaign Account State

The crowdfund program stores one campaign per program-derived account, in a
310-byte record:

    offset  size  field
         0     1  initialized   (0 = false, nonzero = true)
         1   260  name          (u32 LE length + up to 256 UTF-8 bytes, zero padded)
       261    32  owner         (initializing signer's public key)
       293     8  goal_amount   (u64 LE)
       301     8  deadline      (u64 LE, Unix timestamp)
       309     1  bump          (seed bump of the account address)

The client never writes this record to the ledger; encode exists so tests
and the local program simulator produce byte-identical data.
"""

from dataclasses import dataclass

from .accounts import PUBKEY_SIZE, PublicKey
from .layout import Bool, BoundedString, FixedBytes, StructLayout, U8, U64

NAME_MAX_LENGTH = 256
CAMPAIGN_ACCOUNT_SIZE = 310

CAMPAIGN_LAYOUT = StructLayout(
    "CampaignAccount",
    (
        ("initialized", Bool()),
        ("name", BoundedString(NAME_MAX_LENGTH)),
        ("owner", FixedBytes(PUBKEY_SIZE)),
        ("goal_amount", U64),
        ("deadline", U64),
        ("bump", U8),
    ),
    size=CAMPAIGN_ACCOUNT_SIZE,
)


@dataclass(frozen=True)
class CampaignAccount:
    """One crowdfunding campaign as persisted by the program."""
    initialized: bool
    name: str
    owner: PublicKey
    goal_amount: int
    deadline: int
    bump: int

    @classmethod
    def decode(cls, data: bytes) -> 'CampaignAccount':
        """
        Reconstruct a campaign from raw account data.

        Raises:
            TruncatedInput: data is not exactly 310 bytes
            MalformedLength: the name declares more than 256 bytes
            InvalidEncoding: the name is not valid UTF-8
        """
        values = CAMPAIGN_LAYOUT.unpack(data)
        values["owner"] = PublicKey(values["owner"])
        return cls(**values)

    def encode(self) -> bytes:
        """Serialize to the exact 310-byte account layout."""
        return CAMPAIGN_LAYOUT.pack({
            "initialized": self.initialized,
            "name": self.name,
            "owner": bytes(self.owner),
            "goal_amount": self.goal_amount,
            "deadline": self.deadline,
            "bump": self.bump,
        })

    def is_initialized(self) -> bool:
        return self.initialized

    def display(self) -> dict:
        """Human-readable view for printing."""
        return {
            "is_initialized": self.initialized,
            "name": self.name,
            "initializer_pubkey": self.owner.to_base58(),
            "goal_amount": str(self.goal_amount),
            "deadline": str(self.deadline),
            "bump": self.bump,
        }
