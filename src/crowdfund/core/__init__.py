"""
Crowdfund Core Components

Binary codecs for the crowdfund program's wire contract: the fixed 310-byte
campaign account record, the discriminated instruction payloads, and the
account and key types they are built from.
"""

from .accounts import (
    AccountMeta, AccountRegistry, LedgerAccount, PublicKey,
    SYSTEM_PROGRAM_ID, rent_exempt_minimum,
)
from .errors import (
    CodecError, TruncatedInput, MalformedLength, InvalidEncoding,
    TrailingData, UnknownInstruction, InvalidSeeds, NoValidSeedFound,
)
from .layout import StructLayout, Bool, UInt, U8, U32, U64, FixedBytes, BoundedString
from .state import CampaignAccount, CAMPAIGN_LAYOUT, CAMPAIGN_ACCOUNT_SIZE, NAME_MAX_LENGTH
from .instructions import (
    InstructionKind,
    CreateCampaignPayload,
    Instruction,
    encode_instruction,
    decode_instruction,
)

__all__ = [
    'AccountMeta', 'AccountRegistry', 'LedgerAccount', 'PublicKey',
    'SYSTEM_PROGRAM_ID', 'rent_exempt_minimum',
    'CodecError', 'TruncatedInput', 'MalformedLength', 'InvalidEncoding',
    'TrailingData', 'UnknownInstruction', 'InvalidSeeds', 'NoValidSeedFound',
    'StructLayout', 'Bool', 'UInt', 'U8', 'U32', 'U64', 'FixedBytes', 'BoundedString',
    'CampaignAccount', 'CAMPAIGN_LAYOUT', 'CAMPAIGN_ACCOUNT_SIZE', 'NAME_MAX_LENGTH',
    'InstructionKind', 'CreateCampaignPayload', 'Instruction',
    'encode_instruction', 'decode_instruction',
]
