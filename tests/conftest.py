import pytest

from crowdfund.core.accounts import AccountRegistry, PublicKey
from crowdfund.core.state import CampaignAccount
from crowdfund.programs.crowdfund import CROWDFUND_PROGRAM_ID, CrowdfundProgram


@pytest.fixture
def owner():
    return PublicKey(bytes(range(1, 33)))


@pytest.fixture
def program_id():
    return CROWDFUND_PROGRAM_ID


@pytest.fixture
def campaign(owner):
    return CampaignAccount(
        initialized=True,
        name="my crowdfund",
        owner=owner,
        goal_amount=10,
        deadline=1661807720,
        bump=254,
    )


@pytest.fixture
def registry():
    return AccountRegistry()


@pytest.fixture
def program(registry, program_id):
    return CrowdfundProgram(registry, program_id)
