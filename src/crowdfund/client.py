"""
Crowdfund Client

Wires the codecs and address derivation together for a single wallet:
derive the wallet's campaign address, build the CreateCampaign instruction,
and decode the campaign account when its bytes come back from the ledger.

Signing and network transport are collaborators passed in from outside.
Key material comes from a provider object, and account bytes come from an
AccountFetcher; nothing here reads global state on its own.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Tuple

from ecdsa import SigningKey
from ecdsa.curves import Ed25519

from .core.accounts import AccountRegistry, PublicKey
from .core.instructions import CreateCampaignPayload, Instruction
from .core.state import CampaignAccount
from .programs.crowdfund import CROWDFUND_PROGRAM_ID, create_campaign_instruction
from .programs.pda import find_campaign_address

DEFAULT_KEYPAIR_PATH = Path.home() / ".config" / "solana" / "devnet.json"
SECRET_SEED_SIZE = 32
KEYPAIR_FILE_SIZE = 64  # 32-byte secret seed + 32-byte public key


def generate_keypair() -> Tuple[SigningKey, PublicKey]:
    """
    Generate a new Ed25519 keypair.

    Returns:
        Tuple of (private_key, public_key)
    """
    private_key = SigningKey.generate(curve=Ed25519)
    return private_key, PublicKey(private_key.verifying_key.to_string())


def write_keypair_file(path: Path, private_key: SigningKey) -> None:
    """Store a keypair in the JSON byte-array format the Solana CLI uses."""
    secret = private_key.to_string() + private_key.verifying_key.to_string()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(list(secret), f)


class StaticKeyProvider:
    """Key provider for callers that already know the wallet's public key."""

    def __init__(self, public_key):
        self._public_key = PublicKey.coerce(public_key)

    def public_key(self) -> PublicKey:
        return self._public_key


class KeypairFileProvider:
    """
    Reads the wallet identity from a Solana keypair file.

    The file is a JSON array of 64 integers: the 32-byte secret seed
    followed by the 32-byte public key. The public half is checked against
    the key derived from the seed so a corrupted file is caught early.
    """

    def __init__(self, path: Path = DEFAULT_KEYPAIR_PATH):
        self.path = Path(path)

    def load(self) -> bytes:
        try:
            with open(self.path, 'r') as f:
                values = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Keypair file {self.path} is not valid JSON: {e}") from e

        if not isinstance(values, list) or len(values) != KEYPAIR_FILE_SIZE:
            raise ValueError(f"Keypair file {self.path} must hold {KEYPAIR_FILE_SIZE} bytes")
        try:
            return bytes(values)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Keypair file {self.path} holds non-byte values") from e

    def public_key(self) -> PublicKey:
        keypair = self.load()
        seed, public = keypair[:SECRET_SEED_SIZE], keypair[SECRET_SEED_SIZE:]

        derived = SigningKey.from_string(seed, curve=Ed25519).verifying_key.to_string()
        if derived != public:
            raise ValueError(f"Keypair file {self.path}: public key does not match secret")
        return PublicKey(public)


class AccountFetcher(ABC):
    """Source of raw account bytes, normally an RPC connection."""

    @abstractmethod
    def get_account_data(self, address: PublicKey) -> Optional[bytes]:
        """Return the account's current data, or None if it does not exist."""


class RegistryAccountFetcher(AccountFetcher):
    """AccountFetcher backed by a local AccountRegistry."""

    def __init__(self, registry: AccountRegistry):
        self.registry = registry

    def get_account_data(self, address: PublicKey) -> Optional[bytes]:
        account = self.registry.get_account(address)
        return account.data if account else None


class CrowdfundClient:
    """
    Crowdfund operations for one wallet.

    Args:
        key_provider: Supplies the wallet's public key
        fetcher: Supplies raw account data for read-back
        program_id: Deployed crowdfund program id
    """

    def __init__(self, key_provider, fetcher: Optional[AccountFetcher] = None,
                 program_id: PublicKey = CROWDFUND_PROGRAM_ID):
        self.key_provider = key_provider
        self.fetcher = fetcher
        self.program_id = program_id

    def campaign_address(self) -> Tuple[PublicKey, int]:
        """The wallet's campaign account address and its bump."""
        return find_campaign_address(self.key_provider.public_key(), self.program_id)

    def create_campaign_instruction(self, request: CreateCampaignPayload) -> Instruction:
        return create_campaign_instruction(self.program_id, self.key_provider.public_key(), request)

    def fetch_campaign(self, address: Optional[PublicKey] = None) -> Optional[CampaignAccount]:
        """
        Fetch and decode a campaign account.

        Defaults to the wallet's own campaign. Returns None when the
        account does not exist; decode errors propagate to the caller.
        """
        if self.fetcher is None:
            raise ValueError("No account fetcher configured")
        if address is None:
            address, _ = self.campaign_address()

        data = self.fetcher.get_account_data(address)
        if data is None:
            return None
        return CampaignAccount.decode(data)
