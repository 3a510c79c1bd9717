"""
Solana Account Model for the Crowdfund Client

This module holds the account-level building blocks the crowdfund client
works with:
- PublicKey: the 32-byte identity of every account and program
- AccountMeta: how an instruction wants to access an account
- LedgerAccount: lamports, data and owner of one account
- AccountRegistry: a local account database used by the program simulator

Based on: https://solana.com/docs/core/accounts
"""

from dataclasses import dataclass
from typing import Optional, Union

import base58

PUBKEY_SIZE = 32
MAX_ACCOUNT_DATA = 10 * 1024 * 1024  # 10 MiB

# Rent parameters of the default cluster configuration
ACCOUNT_STORAGE_OVERHEAD = 128
LAMPORTS_PER_BYTE_YEAR = 3480
EXEMPTION_THRESHOLD_YEARS = 2


@dataclass(frozen=True)
class PublicKey:
    """
    A 32-byte account or program identity.

    Keys are opaque and compared byte-wise; base58 is only their text form.
    """
    raw: bytes

    def __post_init__(self):
        if len(self.raw) != PUBKEY_SIZE:
            raise ValueError(f"Public key must be {PUBKEY_SIZE} bytes, got {len(self.raw)}")
        object.__setattr__(self, "raw", bytes(self.raw))

    @classmethod
    def from_base58(cls, text: str) -> 'PublicKey':
        """Parse the base58 form used by wallets and explorers."""
        try:
            raw = base58.b58decode(text)
        except ValueError as e:
            raise ValueError(f"Invalid base58 public key {text!r}: {e}") from e
        return cls(raw)

    @classmethod
    def coerce(cls, value: Union['PublicKey', bytes, str]) -> 'PublicKey':
        """Accept a PublicKey, its raw bytes, or its base58 text."""
        if isinstance(value, PublicKey):
            return value
        if isinstance(value, str):
            return cls.from_base58(value)
        return cls(bytes(value))

    def to_base58(self) -> str:
        return base58.b58encode(self.raw).decode("ascii")

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return self.to_base58()

    def __repr__(self) -> str:
        return f"PublicKey({self.to_base58()})"


SYSTEM_PROGRAM_ID = PublicKey(bytes(PUBKEY_SIZE))  # 11111111111111111111111111111111


def rent_exempt_minimum(space: int) -> int:
    """
    Lamports an account of `space` data bytes needs to be rent-exempt.

    Rent-exempt accounts are never collected; the threshold is two years
    of rent for the data plus the fixed per-account overhead.
    """
    if space < 0:
        raise ValueError("Account space cannot be negative")
    return (ACCOUNT_STORAGE_OVERHEAD + space) * LAMPORTS_PER_BYTE_YEAR * EXEMPTION_THRESHOLD_YEARS


@dataclass
class LedgerAccount:
    """
    One account as stored on the ledger.

    The crowdfund program owns campaign accounts; the client only ever
    reads their data back.
    """
    lamports: int           # Balance in lamports (1 SOL = 1_000_000_000 lamports)
    data: bytes             # Raw account data
    owner: PublicKey        # Program that may modify this account

    def __post_init__(self):
        """Validate account invariants."""
        if self.lamports < 0:
            raise ValueError("Lamports cannot be negative")
        if len(self.data) > MAX_ACCOUNT_DATA:
            raise ValueError("Account data exceeds 10 MiB limit")

    def is_rent_exempt(self) -> bool:
        return self.lamports >= rent_exempt_minimum(len(self.data))

    def copy(self) -> 'LedgerAccount':
        return LedgerAccount(
            lamports=self.lamports,
            data=bytes(self.data),
            owner=self.owner,
        )


@dataclass(frozen=True)
class AccountMeta:
    """
    Account metadata for instruction building.

    This tells the runtime how an instruction wants to access each account.
    """
    pubkey: PublicKey    # Account public key
    is_signer: bool      # Must sign transaction
    is_writable: bool    # Can be modified

    def __str__(self) -> str:
        flags = []
        if self.is_signer:
            flags.append("signer")
        if self.is_writable:
            flags.append("writable")
        flag_str = f"({', '.join(flags)})" if flags else "(readonly)"
        return f"{str(self.pubkey)[:8]}...{flag_str}"


class AccountRegistry:
    """
    In-memory account database.

    Stands in for the ledger when the crowdfund program is simulated
    locally, and backs the registry account fetcher used by the client.
    """

    def __init__(self):
        self._accounts: dict[PublicKey, LedgerAccount] = {}

    def create_account(self, pubkey: PublicKey, lamports: int = 0,
                       space: int = 0, owner: Optional[PublicKey] = None) -> LedgerAccount:
        """Create a new zero-filled account."""
        if pubkey in self._accounts:
            raise ValueError(f"Account {pubkey} already exists")

        account = LedgerAccount(
            lamports=lamports,
            data=bytes(space),
            owner=owner or SYSTEM_PROGRAM_ID,
        )
        self._accounts[pubkey] = account
        return account

    def get_account(self, pubkey: PublicKey) -> Optional[LedgerAccount]:
        return self._accounts.get(pubkey)

    def set_account(self, pubkey: PublicKey, account: LedgerAccount) -> None:
        """Set account (used for updates after instruction execution)."""
        self._accounts[pubkey] = account

    def get_account_balance(self, pubkey: PublicKey) -> int:
        account = self.get_account(pubkey)
        return account.lamports if account else 0

    def fund(self, pubkey: PublicKey, lamports: int) -> LedgerAccount:
        """Credit lamports, creating a system-owned wallet if needed."""
        account = self.get_account(pubkey)
        if account is None:
            return self.create_account(pubkey, lamports=lamports)
        updated = account.copy()
        updated.lamports += lamports
        self.set_account(pubkey, updated)
        return updated

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, pubkey: PublicKey) -> bool:
        return pubkey in self._accounts

    def __getitem__(self, pubkey: PublicKey) -> LedgerAccount:
        account = self.get_account(pubkey)
        if account is None:
            raise KeyError(f"Account {pubkey} not found")
        return account
