"""Shared fixtures for poap_minter tests."""

from __future__ import annotations

import pytest

from poap_minter.app import MinterApp
from poap_minter.models.config import (
    ClaimConfig,
    EventBinding,
    MinterConfig,
    PersonalityCategory,
)

from tests.mocks import MockVendor, RecordingSettleDelay

TEST_ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
OTHER_ADDRESS = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"

EVENT_IDS = {
    PersonalityCategory.MINI_APP_MAXI: 101,
    PersonalityCategory.VERIFIED_HUMAN: 102,
    PersonalityCategory.IMPACT_REGEN: 103,
    PersonalityCategory.L2_BELIEVER: 104,
    PersonalityCategory.STABLECOIN_SAVVY: 105,
}


def make_test_config(**overrides) -> MinterConfig:
    """Build a MinterConfig suitable for testing."""
    defaults = dict(
        api_base="http://127.0.0.1:9400",
        auth_base="http://127.0.0.1:9400",
        api_key="test-api-key",
        client_id="test-client",
        client_secret="test-client-secret",
        request_timeout=5.0,
        claim=ClaimConfig(claim_rounds=2, settle_delay=0.0, requested_codes=25),
        events={
            category: EventBinding(event_id=event_id, secret_code=f"secret-{category.key}")
            for category, event_id in EVENT_IDS.items()
        },
    )
    defaults.update(overrides)
    return MinterConfig(**defaults)


@pytest.fixture
def test_config():
    """Default MinterConfig for tests."""
    return make_test_config()


@pytest.fixture
def mock_vendor():
    """Vendor with a three-code pool for every event."""
    vendor = MockVendor()
    for event_id in EVENT_IDS.values():
        vendor.add_codes(event_id, f"qr-{event_id}-a", f"qr-{event_id}-b", f"qr-{event_id}-c")
    return vendor


@pytest.fixture
def empty_vendor():
    """Vendor whose pools start empty."""
    return MockVendor()


@pytest.fixture
def settle_delay():
    return RecordingSettleDelay()


@pytest.fixture
def minter(test_config, mock_vendor, settle_delay):
    """Fully wired MinterApp over the mock vendor."""
    return MinterApp(test_config, vendor=mock_vendor, delay=settle_delay)


@pytest.fixture
def service(minter):
    return minter.service
