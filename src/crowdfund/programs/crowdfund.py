"""
Crowdfund Program

Client-side helpers for the on-chain crowdfund program, plus a local
simulator of its instruction processing.

The program accepts one instruction, CreateCampaign, with accounts:

    0. [signer]   the wallet opening the campaign
    1. [writable] the campaign account, a PDA of ("crowdfund", wallet)
    2. []         the system program

It allocates the campaign account at the PDA, pays rent from the signer,
and writes a CampaignAccount record into it. CrowdfundProgram reproduces
this on an AccountRegistry so the whole create-then-read-back flow can run
without a cluster.
"""

from typing import List

from ..core.accounts import (
    AccountMeta,
    AccountRegistry,
    LedgerAccount,
    PublicKey,
    SYSTEM_PROGRAM_ID,
    rent_exempt_minimum,
)
from ..core.instructions import CreateCampaignPayload, Instruction, decode_instruction, encode_instruction
from ..core.state import CAMPAIGN_ACCOUNT_SIZE, CampaignAccount
from .pda import find_campaign_address

CROWDFUND_PROGRAM_ID = PublicKey.from_base58("BveZUHmtftCxRYvUgaZiwtSrQ9uVo6siqBE2aLDxPLpX")


class ProgramError(ValueError):
    """Instruction rejected by the program; ledger state is unchanged."""


class MissingRequiredSignature(ProgramError):
    pass


class InvalidAccountData(ProgramError):
    pass


class AccountAlreadyInitialized(ProgramError):
    pass


class InsufficientFunds(ProgramError):
    pass


class NotEnoughAccountKeys(ProgramError):
    pass


class AccountAlreadyInUse(ProgramError):
    pass


def create_campaign_instruction(program_id: PublicKey, initializer: PublicKey,
                                payload: CreateCampaignPayload) -> Instruction:
    """
    Build the CreateCampaign instruction for `initializer`.

    The campaign account is derived locally, so no network access is needed.
    """
    campaign, _ = find_campaign_address(initializer, program_id)
    return Instruction(
        program_id=program_id,
        accounts=[
            AccountMeta(initializer, is_signer=True, is_writable=False),
            AccountMeta(campaign, is_signer=False, is_writable=True),
            AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
        ],
        data=encode_instruction(payload),
    )


class CrowdfundProgram:
    """
    Local stand-in for the deployed crowdfund program.

    Args:
        registry: Account database the program reads and writes
        program_id: Id the program is deployed under
    """

    def __init__(self, registry: AccountRegistry, program_id: PublicKey = CROWDFUND_PROGRAM_ID):
        self.registry = registry
        self.program_id = program_id

    def execute(self, instruction: Instruction) -> None:
        """Run an instruction addressed to this program."""
        if instruction.program_id != self.program_id:
            raise ProgramError(f"Instruction targets {instruction.program_id}, not {self.program_id}")
        self.process(instruction.accounts, instruction.data)

    def process(self, accounts: List[AccountMeta], data: bytes) -> None:
        """Dispatch on the instruction discriminator."""
        payload = decode_instruction(data)
        if isinstance(payload, CreateCampaignPayload):
            self.process_create_campaign(accounts, payload)
        else:
            raise ProgramError(f"Unhandled instruction {type(payload).__name__}")

    def process_create_campaign(self, accounts: List[AccountMeta],
                                payload: CreateCampaignPayload) -> CampaignAccount:
        if len(accounts) < 3:
            raise NotEnoughAccountKeys(f"CreateCampaign needs 3 accounts, got {len(accounts)}")
        initializer, campaign_meta, _system_program = accounts[:3]

        if not initializer.is_signer:
            raise MissingRequiredSignature(f"{initializer.pubkey} did not sign")

        address, bump = find_campaign_address(initializer.pubkey, self.program_id)
        if address != campaign_meta.pubkey:
            raise InvalidAccountData(f"Expected campaign account {address}, got {campaign_meta.pubkey}")

        # The system program refuses to allocate over any existing account
        if address in self.registry:
            existing = self.registry[address]
            if (existing.owner == self.program_id
                    and len(existing.data) == CAMPAIGN_ACCOUNT_SIZE
                    and CampaignAccount.decode(existing.data).is_initialized()):
                raise AccountAlreadyInitialized(f"Campaign {address} already exists")
            raise AccountAlreadyInUse(f"Account {address} is already in use")

        # Encode before touching balances so a bad name leaves state intact
        campaign = CampaignAccount(
            initialized=True,
            name=payload.name,
            owner=initializer.pubkey,
            goal_amount=payload.goal_amount,
            deadline=payload.deadline,
            bump=bump,
        )
        data = campaign.encode()

        rent = rent_exempt_minimum(CAMPAIGN_ACCOUNT_SIZE)
        payer = self.registry.get_account(initializer.pubkey)
        if payer is None or payer.lamports < rent:
            balance = payer.lamports if payer else 0
            raise InsufficientFunds(f"Rent needs {rent} lamports, payer has {balance}")

        updated_payer = payer.copy()
        updated_payer.lamports -= rent
        self.registry.set_account(initializer.pubkey, updated_payer)
        self.registry.set_account(address, LedgerAccount(
            lamports=rent,
            data=data,
            owner=self.program_id,
        ))
        return campaign
