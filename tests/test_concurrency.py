from concurrent.futures import ThreadPoolExecutor

from crowdfund.core.accounts import PublicKey
from crowdfund.core.instructions import CreateCampaignPayload, encode_instruction
from crowdfund.core.state import CampaignAccount
from crowdfund.programs.pda import find_campaign_address

WORKERS = 8


def _campaign(i):
    owner = PublicKey(bytes([i]) * 32)
    return CampaignAccount(
        initialized=True,
        name=f"campaign {i} ✓",
        owner=owner,
        goal_amount=i * 1000,
        deadline=1661807720 + i,
        bump=255 - i,
    )


def _work(i, program_id):
    campaign = _campaign(i)
    data = campaign.encode()
    payload = CreateCampaignPayload(name=campaign.name, goal_amount=campaign.goal_amount,
                                    deadline=campaign.deadline)
    return (
        data,
        CampaignAccount.decode(data),
        encode_instruction(payload),
        find_campaign_address(campaign.owner, program_id),
    )


def test_codecs_and_derivation_from_many_threads(program_id):
    indices = list(range(1, 33)) * 4
    expected = {i: _work(i, program_id) for i in set(indices)}

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        results = list(pool.map(lambda i: _work(i, program_id), indices))

    for i, result in zip(indices, results):
        assert result == expected[i]
        assert result[1] == _campaign(i)
