import pytest

from crowdfund.core.accounts import PublicKey
from crowdfund.core.errors import InvalidEncoding, MalformedLength, TruncatedInput
from crowdfund.core.state import CAMPAIGN_ACCOUNT_SIZE, CampaignAccount


def raw_account(initialized=1, name=b"", declared_length=None, owner=bytes(32),
                goal_amount=0, deadline=0, bump=0, padding_byte=0):
    """Hand-assemble account bytes without going through the encoder."""
    if declared_length is None:
        declared_length = len(name)
    window = declared_length.to_bytes(4, "little") + name
    window += bytes([padding_byte]) * (260 - len(window))
    return (
        bytes([initialized])
        + window
        + owner
        + goal_amount.to_bytes(8, "little")
        + deadline.to_bytes(8, "little")
        + bytes([bump])
    )


def test_decode_scenario():
    data = raw_account(initialized=1, name=b"hi", goal_amount=1, deadline=0, bump=7)
    assert len(data) == 310

    assert CampaignAccount.decode(data) == CampaignAccount(
        initialized=True,
        name="hi",
        owner=PublicKey(bytes(32)),
        goal_amount=1,
        deadline=0,
        bump=7,
    )


@pytest.mark.parametrize("name", [
    "",
    "hi",
    "my crowdfund",
    "a" * 256,
    "é" * 128,          # 256 bytes, 128 characters
    "🚀" * 64,          # 256 bytes, 4-byte code points
])
def test_round_trip(campaign, name):
    record = CampaignAccount(
        initialized=campaign.initialized,
        name=name,
        owner=campaign.owner,
        goal_amount=2**64 - 1,
        deadline=campaign.deadline,
        bump=campaign.bump,
    )
    encoded = record.encode()
    assert len(encoded) == CAMPAIGN_ACCOUNT_SIZE
    assert CampaignAccount.decode(encoded) == record


def test_encode_field_positions(campaign):
    encoded = campaign.encode()
    assert encoded[0] == 1
    assert encoded[1:5] == (12).to_bytes(4, "little")
    assert encoded[5:17] == b"my crowdfund"
    assert encoded[17:261] == bytes(244)
    assert encoded[261:293] == bytes(campaign.owner)
    assert encoded[293:301] == (10).to_bytes(8, "little")
    assert encoded[301:309] == (1661807720).to_bytes(8, "little")
    assert encoded[309] == 254


@pytest.mark.parametrize("length", [0, 1, 100, 309, 311, 320, 620])
def test_decode_rejects_wrong_length(campaign, length):
    data = (campaign.encode() * 3)[:length]
    with pytest.raises(TruncatedInput):
        CampaignAccount.decode(data)


def test_name_of_exactly_256_bytes_decodes():
    name = b"x" * 256
    decoded = CampaignAccount.decode(raw_account(name=name))
    assert decoded.name == "x" * 256


@pytest.mark.parametrize("declared", [257, 260, 0xFFFFFFFF])
def test_declared_name_length_over_256_is_rejected(declared):
    data = raw_account(name=b"y" * 256, declared_length=declared)
    assert len(data) == 310
    with pytest.raises(MalformedLength):
        CampaignAccount.decode(data)


def test_invalid_utf8_name_is_rejected():
    with pytest.raises(InvalidEncoding):
        CampaignAccount.decode(raw_account(name=b"\xc3\x28"))


def test_padding_after_name_is_ignored():
    data = raw_account(name=b"hi", padding_byte=0xAB)
    assert CampaignAccount.decode(data).name == "hi"


@pytest.mark.parametrize("flag,expected", [(0, False), (1, True), (2, True), (255, True)])
def test_initialized_flag(flag, expected):
    assert CampaignAccount.decode(raw_account(initialized=flag)).initialized is expected


def test_decode_accepts_bytearray_and_memoryview(campaign):
    encoded = campaign.encode()
    assert CampaignAccount.decode(bytearray(encoded)) == campaign
    assert CampaignAccount.decode(memoryview(encoded)) == campaign


def test_encode_rejects_name_over_256_bytes(campaign):
    record = CampaignAccount(True, "z" * 257, campaign.owner, 0, 0, 0)
    with pytest.raises(MalformedLength):
        record.encode()


def test_encode_rejects_out_of_range_integers(campaign):
    with pytest.raises(ValueError):
        CampaignAccount(True, "x", campaign.owner, -1, 0, 0).encode()
    with pytest.raises(ValueError):
        CampaignAccount(True, "x", campaign.owner, 0, 0, 256).encode()


def test_display(campaign):
    shown = campaign.display()
    assert shown["name"] == "my crowdfund"
    assert shown["initializer_pubkey"] == campaign.owner.to_base58()
    assert shown["goal_amount"] == "10"
    assert shown["deadline"] == "1661807720"
    assert shown["is_initialized"] is True
