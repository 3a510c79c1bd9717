"""
Program Derived Addresses (PDA)

A PDA is an account address that no private key controls: it is derived from
a list of seeds and a program id, and only that program can sign for it.

Derivation hashes

    seed_0 || ... || seed_n || bump || program_id || "ProgramDerivedAddress"

with SHA-256 and accepts the digest only if it is NOT a valid Ed25519 point,
so no keypair can ever exist for it. find_program_address walks the bump
from 255 down to 0 and returns the first candidate that qualifies; the
on-chain runtime performs the same search, so both sides agree on the
address without exchanging anything.

Based on: https://solana.com/docs/core/pda
"""

import hashlib
from typing import Sequence, Tuple

from ecdsa import VerifyingKey
from ecdsa.curves import Ed25519
from ecdsa.errors import MalformedPointError

from ..core.accounts import PUBKEY_SIZE, PublicKey
from ..core.errors import InvalidSeeds, NoValidSeedFound

PDA_MARKER = b"ProgramDerivedAddress"
MAX_SEED_LEN = 32
MAX_SEEDS = 16
CAMPAIGN_SEED = b"crowdfund"


def is_on_curve(raw: bytes) -> bool:
    """True if `raw` decompresses to a point on the Ed25519 curve."""
    if len(raw) != PUBKEY_SIZE:
        return False
    try:
        VerifyingKey.from_string(bytes(raw), curve=Ed25519)
    except MalformedPointError:
        return False
    return True


def _check_seeds(seeds: Sequence[bytes]) -> None:
    if len(seeds) > MAX_SEEDS:
        raise InvalidSeeds(f"At most {MAX_SEEDS} seeds allowed, got {len(seeds)}")
    for i, seed in enumerate(seeds):
        if len(seed) > MAX_SEED_LEN:
            raise InvalidSeeds(f"Seed {i} is {len(seed)} bytes, max is {MAX_SEED_LEN}")


def _hash_seeds(seeds: Sequence[bytes], program_id: PublicKey) -> bytes:
    hasher = hashlib.sha256()
    for seed in seeds:
        hasher.update(bytes(seed))
    hasher.update(bytes(program_id))
    hasher.update(PDA_MARKER)
    return hasher.digest()


def create_program_address(seeds: Sequence[bytes], program_id: PublicKey) -> PublicKey:
    """
    Derive the address for an explicit seed list (bump already included).

    Raises:
        InvalidSeeds: too many or too long seeds, or the digest is on the curve
    """
    _check_seeds(seeds)
    digest = _hash_seeds(seeds, program_id)
    if is_on_curve(digest):
        raise InvalidSeeds("Derived address lies on the Ed25519 curve")
    return PublicKey(digest)


def find_program_address(seeds: Sequence[bytes], program_id: PublicKey) -> Tuple[PublicKey, int]:
    """
    Search for the canonical bump and return (address, bump).

    The bump is appended as one extra seed byte, so the caller's seeds may
    hold at most MAX_SEEDS - 1 entries.

    Raises:
        InvalidSeeds: seeds violate the length limits
        NoValidSeedFound: every bump from 255 to 0 lands on the curve
    """
    seeds = [bytes(seed) for seed in seeds]
    _check_seeds(seeds + [b"\x00"])

    for bump in range(255, -1, -1):
        digest = _hash_seeds(seeds + [bytes([bump])], program_id)
        if not is_on_curve(digest):
            return PublicKey(digest), bump

    raise NoValidSeedFound(f"No viable bump seed for program {program_id}")


def campaign_seeds(owner: PublicKey) -> list[bytes]:
    """Seeds of a campaign account: the namespace tag, then the owner key."""
    return [CAMPAIGN_SEED, bytes(owner)]


def find_campaign_address(owner: PublicKey, program_id: PublicKey) -> Tuple[PublicKey, int]:
    """Address and bump of the campaign account opened by `owner`."""
    return find_program_address(campaign_seeds(owner), program_id)
