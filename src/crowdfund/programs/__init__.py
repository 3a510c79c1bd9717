"""
Crowdfund Program Support

- Program Derived Addresses (PDA): deterministic, network-free derivation
  of program-owned account addresses
- Crowdfund program: instruction builder and a local simulator of the
  deployed program's processing

Programs are stateless and operate on accounts they own; the campaign
account is a PDA the crowdfund program signs for.
"""

from .pda import (
    create_program_address,
    find_program_address,
    find_campaign_address,
    campaign_seeds,
    is_on_curve,
)
from .crowdfund import (
    CROWDFUND_PROGRAM_ID,
    CrowdfundProgram,
    ProgramError,
    create_campaign_instruction,
)

__all__ = [
    'create_program_address',
    'find_program_address',
    'find_campaign_address',
    'campaign_seeds',
    'is_on_curve',
    'CROWDFUND_PROGRAM_ID',
    'CrowdfundProgram',
    'ProgramError',
    'create_campaign_instruction',
]
