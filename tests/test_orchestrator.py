"""ClaimOrchestrator driven directly, without the service layer."""

from __future__ import annotations

import asyncio

import pytest

from poap_minter.errors import PoolExhaustedError, VendorError, VendorErrorKind
from poap_minter.mint.delay import FixedSettleDelay
from poap_minter.mint.orchestrator import ClaimOrchestrator

from tests.conftest import OTHER_ADDRESS, TEST_ADDRESS
from tests.mocks import ALREADY_CLAIMED_MESSAGE, MockVendor, RecordingSettleDelay

EVENT_ID = 500
SECRET = "pool-secret"


@pytest.fixture
def vendor():
    v = MockVendor()
    v.add_codes(EVENT_ID, "x1", "x2")
    return v


@pytest.fixture
def delay():
    return RecordingSettleDelay()


@pytest.fixture
def orchestrator(vendor, delay):
    return ClaimOrchestrator(vendor, delay, claim_rounds=2, requested_codes=10)


async def test_claim_returns_full_record(orchestrator, vendor):
    record = await orchestrator.claim(EVENT_ID, SECRET, TEST_ADDRESS)

    assert record.qr_hash == "x1"
    assert record.claimed is True
    assert record.beneficiary == TEST_ADDRESS
    assert record.event is not None
    assert ("list_codes", EVENT_ID, SECRET) in vendor.calls


async def test_status_check_race_error_skips_candidate(orchestrator, vendor, monkeypatch):
    """A CODE_CLAIMED error from the status check is a lost race, not an abort."""
    original = vendor.check_code_status

    async def flaky_status(qr_hash):
        if qr_hash == "x1":
            raise VendorError.from_message(ALREADY_CLAIMED_MESSAGE, 400)
        return await original(qr_hash)

    monkeypatch.setattr(vendor, "check_code_status", flaky_status)

    record = await orchestrator.claim(EVENT_ID, SECRET, TEST_ADDRESS)

    assert record.qr_hash == "x2"


async def test_exhausted_pool_carries_last_redeem_rejection(orchestrator, vendor):
    rejection = VendorError.from_message(ALREADY_CLAIMED_MESSAGE, 400)
    vendor.redeem_errors["x1"] = [rejection, rejection]
    vendor.redeem_errors["x2"] = [rejection, rejection]

    with pytest.raises(PoolExhaustedError) as excinfo:
        await orchestrator.claim(EVENT_ID, SECRET, TEST_ADDRESS)

    assert excinfo.value.last_rejection is rejection
    assert vendor.count("request_more_codes") == 1
    assert ("request_more_codes", EVENT_ID, 10) in vendor.calls


async def test_exhausted_pool_without_redeem_has_no_rejection(orchestrator, vendor, delay):
    vendor.claim_externally("x1", OTHER_ADDRESS)
    vendor.claim_externally("x2", OTHER_ADDRESS)

    with pytest.raises(PoolExhaustedError) as excinfo:
        await orchestrator.claim(EVENT_ID, SECRET, TEST_ADDRESS)

    assert excinfo.value.last_rejection is None
    assert delay.rounds == [1, 2]


async def test_non_race_error_propagates(orchestrator, vendor):
    vendor.redeem_errors["x1"] = [
        VendorError("Failed to claim POAP: 500", VendorErrorKind.TRANSPORT, 500),
    ]

    with pytest.raises(VendorError) as excinfo:
        await orchestrator.claim(EVENT_ID, SECRET, TEST_ADDRESS)

    assert excinfo.value.kind is VendorErrorKind.TRANSPORT
    assert vendor.count("redeem_code") == 1


async def test_single_round_does_not_replenish_non_empty_pool(vendor, delay):
    vendor.claimed_on_status.update({"x1", "x2"})
    orchestrator = ClaimOrchestrator(vendor, delay, claim_rounds=1)

    with pytest.raises(PoolExhaustedError):
        await orchestrator.claim(EVENT_ID, SECRET, TEST_ADDRESS)

    assert vendor.count("request_more_codes") == 0


async def test_fixed_delay_zero_returns_immediately():
    await FixedSettleDelay(0).wait(1)


async def test_fixed_delay_sleeps_configured_seconds():
    loop = asyncio.get_running_loop()
    started = loop.time()

    await FixedSettleDelay(0.05).wait(1)

    assert loop.time() - started >= 0.04
