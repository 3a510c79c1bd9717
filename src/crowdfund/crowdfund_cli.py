#!/usr/bin/env python3
"""
Crowdfund CLI

A command-line interface to the crowdfund client: derive campaign addresses,
encode CreateCampaign instruction data, decode campaign account bytes, and
run the full create-and-read-back flow against the local program simulator.

Usage:
    crowdfund address <owner>                        # Campaign PDA for a wallet
    crowdfund encode-payload <name> <goal> <deadline>  # Instruction data hex
    crowdfund decode-account <hex>                   # Decode 310-byte account data
    crowdfund demo                                   # Local end-to-end demo
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .client import (
    CrowdfundClient,
    KeypairFileProvider,
    RegistryAccountFetcher,
    StaticKeyProvider,
    generate_keypair,
)
from .core.accounts import AccountRegistry, PublicKey
from .core.instructions import CreateCampaignPayload, encode_instruction
from .core.state import CampaignAccount
from .programs.crowdfund import CROWDFUND_PROGRAM_ID, CrowdfundProgram

LAMPORTS_PER_SOL = 1_000_000_000


class CrowdfundCLI:
    """Command implementations; each prints its results."""

    def __init__(self, program_id: PublicKey = CROWDFUND_PROGRAM_ID):
        self.program_id = program_id

    def address(self, owner: str):
        client = CrowdfundClient(StaticKeyProvider(owner),
                                 program_id=self.program_id)
        address, bump = client.campaign_address()
        print(f"📍 Campaign account for {owner}:")
        print(f"   Address: {address}")
        print(f"   Bump: {bump}")

    def encode_payload(self, name: str, goal_amount: int, deadline: int):
        payload = CreateCampaignPayload(name=name, goal_amount=goal_amount, deadline=deadline)
        data = encode_instruction(payload)
        print(f"📦 CreateCampaign instruction data ({len(data)} bytes):")
        print(f"   {data.hex()}")

    def decode_account(self, data: bytes):
        campaign = CampaignAccount.decode(data)
        self.show_campaign(campaign)

    def show_campaign(self, campaign: CampaignAccount):
        print("🗂️  Campaign account:")
        for key, value in campaign.display().items():
            print(f"   {key}: {value}")

    def demo(self, keypair_path: Optional[Path] = None):
        """Create a campaign on a local ledger and read it back."""
        print("🎮 Crowdfund Local Demo")
        print("=" * 40)

        if keypair_path is not None:
            provider = KeypairFileProvider(keypair_path)
            print(f"🔑 Using keypair {keypair_path}")
        else:
            _, public_key = generate_keypair()
            provider = StaticKeyProvider(public_key)
            print("🔑 Generated a throwaway keypair")

        registry = AccountRegistry()
        program = CrowdfundProgram(registry, self.program_id)
        client = CrowdfundClient(provider, RegistryAccountFetcher(registry), self.program_id)

        wallet = provider.public_key()
        registry.fund(wallet, LAMPORTS_PER_SOL)
        print(f"💰 Funded {str(wallet)[:16]}... with 1 SOL")

        address, bump = client.campaign_address()
        print(f"📍 Campaign address: {address} (bump {bump})")

        request = CreateCampaignPayload(name="my crowdfund", goal_amount=10, deadline=1661807720)
        instruction = client.create_campaign_instruction(request)
        print(f"📦 {instruction}")
        for meta in instruction.accounts:
            print(f"   {meta}")

        program.execute(instruction)
        print("✅ CreateCampaign processed")

        campaign = client.fetch_campaign(address)
        if campaign is None:
            print("❌ Campaign account not found")
            return
        self.show_campaign(campaign)


def _read_account_bytes(args) -> bytes:
    if args.file:
        return Path(args.file).read_bytes()
    if args.hex is None:
        raise ValueError("Provide account data as hex or with --file")
    try:
        return bytes.fromhex(args.hex)
    except ValueError as e:
        raise ValueError(f"Account data is not valid hex: {e}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crowdfund",
        description="Crowdfund program client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  crowdfund address 11111111111111111111111111111111
  crowdfund encode-payload "my crowdfund" 10 1661807720
  crowdfund decode-account --file campaign.bin
  crowdfund demo --keypair ~/.config/solana/devnet.json
        """
    )
    parser.add_argument('--program-id', default=str(CROWDFUND_PROGRAM_ID),
                        help='Crowdfund program id (base58)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    address_parser = subparsers.add_parser('address', help='Derive a campaign account address')
    address_parser.add_argument('owner', help='Wallet public key (base58)')

    encode_parser = subparsers.add_parser('encode-payload', help='Encode CreateCampaign instruction data')
    encode_parser.add_argument('name', help='Campaign name')
    encode_parser.add_argument('goal_amount', type=int, help='Goal amount (u64)')
    encode_parser.add_argument('deadline', type=int, help='Deadline as Unix timestamp (u64)')

    decode_parser = subparsers.add_parser('decode-account', help='Decode campaign account data')
    decode_parser.add_argument('hex', nargs='?', help='Account data as hex')
    decode_parser.add_argument('--file', help='Read raw account data from a file')

    demo_parser = subparsers.add_parser('demo', help='Run the local end-to-end demo')
    demo_parser.add_argument('--keypair', type=Path, help='Solana keypair file to use')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cli = CrowdfundCLI(PublicKey.from_base58(args.program_id))

        if args.command == 'address':
            cli.address(args.owner)

        elif args.command == 'encode-payload':
            cli.encode_payload(args.name, args.goal_amount, args.deadline)

        elif args.command == 'decode-account':
            cli.decode_account(_read_account_bytes(args))

        elif args.command == 'demo':
            cli.demo(args.keypair)

        else:
            parser.print_help()

    except (ValueError, OSError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
