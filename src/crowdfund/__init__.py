"""
Crowdfund Client

A Python client for a Solana crowdfunding program. The program and this
client share a byte-exact binary contract with no schema negotiation, so
this package reproduces it precisely:

- Fixed 310-byte campaign account layout (decode on read-back)
- Length-prefixed CreateCampaign instruction payloads
- Program Derived Address search for the campaign account
- A local program simulator for end-to-end runs without a cluster
"""

__version__ = "1.0.0"

from .core import *
from .programs import *
from .client import (
    CrowdfundClient,
    KeypairFileProvider,
    StaticKeyProvider,
    AccountFetcher,
    RegistryAccountFetcher,
)

__all__ = [
    # Codecs and types
    'PublicKey',
    'AccountMeta',
    'CampaignAccount',
    'CreateCampaignPayload',
    'Instruction',
    'encode_instruction',
    'decode_instruction',

    # Errors
    'CodecError',
    'TruncatedInput',
    'MalformedLength',
    'InvalidEncoding',
    'NoValidSeedFound',

    # Address derivation
    'find_program_address',
    'find_campaign_address',
    'CROWDFUND_PROGRAM_ID',

    # Client
    'CrowdfundClient',
    'KeypairFileProvider',
    'StaticKeyProvider',
    'AccountFetcher',
    'RegistryAccountFetcher',
    'CrowdfundProgram',
]
