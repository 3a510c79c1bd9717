import json

import pytest

from crowdfund.client import (
    AccountFetcher,
    CrowdfundClient,
    KeypairFileProvider,
    RegistryAccountFetcher,
    StaticKeyProvider,
    generate_keypair,
    write_keypair_file,
)
from crowdfund.core.accounts import PublicKey
from crowdfund.core.errors import MalformedLength, TruncatedInput
from crowdfund.core.instructions import CreateCampaignPayload
from crowdfund.programs.pda import find_campaign_address


class FixedFetcher(AccountFetcher):
    def __init__(self, data):
        self.data = data
        self.requested = []

    def get_account_data(self, address):
        self.requested.append(address)
        return self.data


# ---- public keys -------------------------------------------------------------

def test_public_key_base58_round_trip(owner):
    assert PublicKey.from_base58(owner.to_base58()) == owner
    assert str(PublicKey(bytes(32))) == "11111111111111111111111111111111"


def test_public_key_length_is_enforced():
    with pytest.raises(ValueError):
        PublicKey(bytes(31))
    with pytest.raises(ValueError):
        PublicKey.from_base58("111")
    with pytest.raises(ValueError):
        PublicKey.from_base58("0OIl")  # characters outside the base58 alphabet


def test_public_key_coerce(owner):
    assert PublicKey.coerce(owner) is owner
    assert PublicKey.coerce(bytes(owner)) == owner
    assert PublicKey.coerce(owner.to_base58()) == owner


# ---- key material ------------------------------------------------------------

def test_keypair_file_provider(tmp_path):
    private_key, public_key = generate_keypair()
    path = tmp_path / "solana" / "devnet.json"
    write_keypair_file(path, private_key)

    assert len(json.loads(path.read_text())) == 64
    assert KeypairFileProvider(path).public_key() == public_key


def test_keypair_file_with_mismatched_public_half(tmp_path):
    private_key, _ = generate_keypair()
    _, other_public = generate_keypair()
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(list(private_key.to_string() + bytes(other_public))))

    with pytest.raises(ValueError):
        KeypairFileProvider(path).public_key()


@pytest.mark.parametrize("content", ["not json", "[1, 2, 3]", json.dumps([300] * 64), '{"a": 1}'])
def test_malformed_keypair_files(tmp_path, content):
    path = tmp_path / "key.json"
    path.write_text(content)
    with pytest.raises(ValueError):
        KeypairFileProvider(path).public_key()


def test_missing_keypair_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        KeypairFileProvider(tmp_path / "missing.json").public_key()


def test_account_fetcher_requires_get_account_data():
    class Incomplete(AccountFetcher):
        pass

    with pytest.raises(TypeError):
        Incomplete()


# ---- client ------------------------------------------------------------------

def test_campaign_address_uses_injected_key(owner, program_id):
    client = CrowdfundClient(StaticKeyProvider(owner), program_id=program_id)
    assert client.campaign_address() == find_campaign_address(owner, program_id)


def test_create_and_fetch_campaign(registry, program, owner, program_id):
    registry.fund(owner, 10_000_000)
    client = CrowdfundClient(StaticKeyProvider(owner), RegistryAccountFetcher(registry), program_id)

    assert client.fetch_campaign() is None

    request = CreateCampaignPayload(name="my crowdfund", goal_amount=10, deadline=1661807720)
    program.execute(client.create_campaign_instruction(request))

    campaign = client.fetch_campaign()
    _, bump = client.campaign_address()
    assert campaign.initialized
    assert campaign.name == request.name
    assert campaign.owner == owner
    assert campaign.goal_amount == request.goal_amount
    assert campaign.deadline == request.deadline
    assert campaign.bump == bump


def test_fetch_specific_address(owner, campaign):
    fetcher = FixedFetcher(campaign.encode())
    client = CrowdfundClient(StaticKeyProvider(owner), fetcher)
    target = PublicKey(bytes([5]) * 32)

    assert client.fetch_campaign(target) == campaign
    assert fetcher.requested == [target]


def test_fetch_propagates_decode_errors(owner, campaign):
    client = CrowdfundClient(StaticKeyProvider(owner), FixedFetcher(campaign.encode()[:-1]))
    with pytest.raises(TruncatedInput):
        client.fetch_campaign()

    corrupt = bytearray(campaign.encode())
    corrupt[1:5] = (257).to_bytes(4, "little")
    client = CrowdfundClient(StaticKeyProvider(owner), FixedFetcher(bytes(corrupt)))
    with pytest.raises(MalformedLength):
        client.fetch_campaign()


def test_fetch_without_fetcher(owner):
    with pytest.raises(ValueError):
        CrowdfundClient(StaticKeyProvider(owner)).fetch_campaign()
